# src/ingest_orchestrator/core/pipeline/__init__.py
"""
# Pipeline Core — Ingest Orchestrator

Contratos e estruturas fundamentais de uma run.

## Componentes

- **types**
  - `StageStatus`: estados finais de uma etapa
  - `OutputKind`: arquivo ou diretório
  - `StageResult`: resultado imutável de uma etapa
  - `RunStatus` / `RunOutcome`: estado terminal da run

- **stage**
  - `Stage`: descritor (nome, localização de saída, runner)

- **context**
  - `RunContext`: configuração resolvida, eventos estruturados e warnings

- **registry**
  - `StageRegistry`: unicidade de nomes e ordem fixa de execução

## Invariantes

- Etapas executam em ordem total fixa (ordem de registro)
- O runner de uma etapa só é invocado se o Stage Gate julgar a saída ausente
"""

from .context import RunContext
from .registry import DuplicateStageNameError, StageRegistry
from .stage import Stage
from .types import OutputKind, RunOutcome, RunStatus, StageResult, StageStatus

__all__ = [
    "DuplicateStageNameError",
    "OutputKind",
    "RunContext",
    "RunOutcome",
    "RunStatus",
    "Stage",
    "StageRegistry",
    "StageResult",
    "StageStatus",
]
