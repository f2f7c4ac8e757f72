# tests/test_smoke.py
"""
Teste de sanidade estrutural.

Garante apenas que o pacote importa e expõe a API pública; não valida
comportamento de etapas nem do Orchestrator.
"""


def test_smoke():
    import ingest_orchestrator

    assert ingest_orchestrator.__version__
    assert issubclass(ingest_orchestrator.ExternalJobError, ingest_orchestrator.IngestException)
