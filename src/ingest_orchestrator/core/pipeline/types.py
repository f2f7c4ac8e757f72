# src/ingest_orchestrator/core/pipeline/types.py
"""
Tipos canônicos do pipeline.

Componentes principais:
    - StageStatus → estados finais de uma etapa (SUCCESS, SKIPPED, FAILED)
    - OutputKind  → natureza da saída de uma etapa (FILE, DIRECTORY)
    - StageResult → resultado imutável de uma etapa
    - RunStatus   → ciclo de vida da run (IN_PROGRESS → SUCCEEDED | FAILED)
    - RunOutcome  → estado terminal da run, finalizado exatamente uma vez

Invariantes:
    - Enums possuem valores textuais canônicos (serializáveis no Manifest)
    - StageResult nunca é alterado após criado
    - RunOutcome sai de IN_PROGRESS uma única vez
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Optional


class StageStatus(str, Enum):
    """
    Estado final de uma etapa na run.

    Estados definidos:
        - SUCCESS: runner executado e concluído
        - SKIPPED: saída já presente, runner não invocado
        - FAILED: runner levantou erro fatal
    """
    SUCCESS = "success"
    SKIPPED = "skipped"
    FAILED = "failed"


class OutputKind(str, Enum):
    """
    Natureza da localização de saída de uma etapa.

    Determina a regra do Stage Gate: arquivo basta existir; diretório
    precisa existir e conter ao menos uma entrada.
    """
    FILE = "file"
    DIRECTORY = "directory"


@dataclass(frozen=True)
class StageResult:
    """Resultado imutável de uma etapa.

    Campos:
        - stage: nome da etapa
        - status: estado final
        - summary: resumo textual
        - duration_ms: duração do runner (0 quando pulada)
        - error: exceção original quando FAILED (não encapsulada)
    """
    stage: str
    status: StageStatus
    summary: str
    duration_ms: int = 0
    error: Optional[BaseException] = None


class RunStatus(str, Enum):
    IN_PROGRESS = "in_progress"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


@dataclass
class RunOutcome:
    """
    Estado terminal de uma run do pipeline.

    Criado em IN_PROGRESS no início da run e finalizado exatamente uma vez,
    seja como sucesso (`succeed`) ou como falha de uma etapa (`fail`).
    O Orchestrator é o único dono da instância durante a run.

    Em caso de falha, `failed_stage` identifica a etapa e `error` carrega a
    exceção original, sem encapsulamento.
    """
    run_id: str
    status: RunStatus = RunStatus.IN_PROGRESS
    failed_stage: Optional[str] = None
    error: Optional[BaseException] = None
    stages: Dict[str, StageResult] = field(default_factory=dict)

    def record(self, result: StageResult) -> None:
        self._require_in_progress()
        self.stages[result.stage] = result

    def succeed(self) -> None:
        self._require_in_progress()
        self.status = RunStatus.SUCCEEDED

    def fail(self, *, stage: str, error: BaseException) -> None:
        self._require_in_progress()
        self.status = RunStatus.FAILED
        self.failed_stage = stage
        self.error = error

    def _require_in_progress(self) -> None:
        if self.status is not RunStatus.IN_PROGRESS:
            raise RuntimeError(f"Run {self.run_id} already finalized as {self.status.value}")

    @property
    def ok(self) -> bool:
        return self.status is RunStatus.SUCCEEDED

    @property
    def exit_code(self) -> int:
        """0 em sucesso; 1 para qualquer outro estado (inclusive IN_PROGRESS)."""
        return 0 if self.ok else 1
