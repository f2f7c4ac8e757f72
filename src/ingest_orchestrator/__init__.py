# src/ingest_orchestrator/__init__.py
"""
Ingest Orchestrator — pipeline sequencial e idempotente de ingestão de dados.

Este pacote raiz define o namespace público do orquestrador responsável por
garantir que o dataset de e-commerce esteja disponível localmente: baixado,
extraído e particionado, pulando qualquer etapa cuja saída já exista.

Arquitetura em alto nível:
    - core.config       → carregamento, merge e hashing de configuração
    - core.pipeline     → descritores de Stage, contexto de execução e registry
    - core.engine       → Stage Gate e orquestração sequencial
    - core.traceability → Manifest da run para auditoria
    - stages            → fetch (HTTP), extract (zip seguro), partition (job externo)

Limites explícitos:
    - Não interpreta o conteúdo do dataset
    - Não agenda execuções distribuídas nem concorrentes
    - Não aplica retry em nenhuma etapa
"""

from .core.exceptions import (
    ConfigurationError,
    DirectoryListError,
    ExternalJobError,
    ExtractionError,
    FetchError,
    IngestException,
)
from .core.pipeline.types import RunOutcome, RunStatus

__version__ = "0.1.0"

__all__ = [
    "ConfigurationError",
    "DirectoryListError",
    "ExternalJobError",
    "ExtractionError",
    "FetchError",
    "IngestException",
    "RunOutcome",
    "RunStatus",
    "__version__",
]
