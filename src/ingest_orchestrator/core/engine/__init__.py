# src/ingest_orchestrator/core/engine/__init__.py
"""
Engine do Ingest Orchestrator.

Componentes principais:
    - gate   → Stage Gate: decide se a saída de uma etapa já existe
    - engine → Orchestrator: executa as etapas em ordem fixa, fail-fast

Invariantes:
    - Cada etapa é avaliada pelo Stage Gate antes de executar
    - A primeira falha fatal encerra a run
    - Nenhuma etapa é reexecutada (sem retry)
"""

from .engine import Orchestrator
from .gate import is_output_present, list_directory

__all__ = ["Orchestrator", "is_output_present", "list_directory"]
