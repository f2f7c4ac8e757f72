# src/ingest_orchestrator/core/engine/engine.py
"""
Orchestrator — execução sequencial e idempotente das etapas.

Ordem de uma run:
    1. Garantir o diretório de trabalho (idempotente)
    2. Para cada etapa, na ordem de registro:
        - consultar o Stage Gate; se a saída existe, SKIPPED (sem efeitos colaterais)
        - caso contrário, invocar o runner
    3. A primeira exceção de um runner encerra a run (fail-fast, sem retry)

Falhas:
    - A exceção original é preservada em `RunOutcome.error` (não encapsulada)
    - O erro é logado com a etapa causadora
    - Artefatos já escritos pela etapa que falhou não são removidos

O Manifest da run é gravado ao final quando `manifest_dir` é informado;
falha ao gravá-lo é registrada como warning e não altera o RunOutcome.
"""

from __future__ import annotations

import time
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional, Sequence

from ingest_orchestrator.core.config.hashing import compute_config_hash
from ingest_orchestrator.core.errors import exception_to_payload
from ingest_orchestrator.core.pipeline.context import RunContext
from ingest_orchestrator.core.pipeline.registry import StageRegistry
from ingest_orchestrator.core.pipeline.stage import Stage
from ingest_orchestrator.core.pipeline.types import (
    RunOutcome,
    StageResult,
    StageStatus,
)
from ingest_orchestrator.core.traceability.manifest import (
    RunManifest,
    add_event,
    create_manifest,
    finalize_manifest,
    record_stage,
    save_manifest,
)

from .gate import is_output_present

WORKSPACE_STAGE = "workspace"


def _now() -> datetime:
    return datetime.now(timezone.utc)


class Orchestrator:
    """Executa uma lista fixa de etapas, consultando o Stage Gate antes de cada uma."""

    def __init__(
        self,
        *,
        stages: Sequence[Stage],
        ctx: RunContext,
        workspace: Path,
        manifest_dir: Optional[Path] = None,
        version: str = "0.0.0",
    ):
        registry = StageRegistry()
        for stage in stages:
            registry.add(stage)
        self.registry = registry
        self.ctx = ctx
        self.workspace = Path(workspace)
        self.manifest_dir = Path(manifest_dir) if manifest_dir is not None else None
        self.version = version
        self._manifest: Optional[RunManifest] = None

    @property
    def stages(self):
        return self.registry.list()

    # ------------------------------------------------------------------
    # Rastreabilidade
    # ------------------------------------------------------------------
    def _record(self, outcome: RunOutcome, result: StageResult) -> None:
        outcome.record(result)
        if self._manifest is None:
            return
        error = None
        if result.error is not None:
            error = exception_to_payload(result.error, stage=result.stage).to_dict()
        record_stage(
            self._manifest,
            stage=result.stage,
            status=result.status.value,
            ts=_now(),
            duration_ms=result.duration_ms,
            summary=result.summary,
            error=error,
        )

    def _save_manifest(self) -> None:
        if self._manifest is None or self.manifest_dir is None:
            return
        path = self.manifest_dir / f"{self.ctx.run_id}.json"
        try:
            save_manifest(self._manifest, path)
        except OSError as e:
            self.ctx.add_warning(stage=WORKSPACE_STAGE, message=f"manifest not saved: {e}")
            self.ctx.log(
                stage=None,
                level="warning",
                message="Failed to write run manifest",
                path=str(path),
            )

    def _fail(self, outcome: RunOutcome, *, stage: str, error: BaseException, duration_ms: int = 0) -> None:
        self._record(
            outcome,
            StageResult(
                stage=stage,
                status=StageStatus.FAILED,
                summary=str(error) or error.__class__.__name__,
                duration_ms=duration_ms,
                error=error,
            ),
        )
        outcome.fail(stage=stage, error=error)
        self.ctx.log(
            stage=stage,
            level="error",
            message="Orchestration failed",
            exc_info=error,
            error_type=error.__class__.__name__,
        )

    # ------------------------------------------------------------------
    # Execução
    # ------------------------------------------------------------------
    def run(self) -> RunOutcome:
        outcome = RunOutcome(run_id=self.ctx.run_id)
        if self.manifest_dir is not None:
            self._manifest = create_manifest(
                run_id=self.ctx.run_id,
                started_at=self.ctx.created_at,
                version=self.version,
                config_hash=compute_config_hash(self.ctx.config or {}),
                meta=self.ctx.meta,
            )
            add_event(self._manifest, event_type="run_started", ts=_now())

        self.ctx.log(stage=None, level="info", message="Starting data ingestion orchestrator")

        try:
            self.workspace.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            self._fail(outcome, stage=WORKSPACE_STAGE, error=e)
            self._finish(outcome)
            return outcome

        for stage in self.stages:
            if is_output_present(stage.output, kind=stage.output_kind, ctx=self.ctx, stage=stage.name):
                self.ctx.log(
                    stage=stage.name,
                    level="info",
                    message="Output already present, skipping",
                    output=str(stage.output),
                )
                self._record(
                    outcome,
                    StageResult(
                        stage=stage.name,
                        status=StageStatus.SKIPPED,
                        summary="output already present",
                    ),
                )
                continue

            self.ctx.log(
                stage=stage.name,
                level="info",
                message=stage.description or "Running stage",
                output=str(stage.output),
            )
            started = time.monotonic()
            try:
                stage.run(self.ctx)
            except Exception as e:
                self._fail(
                    outcome,
                    stage=stage.name,
                    error=e,
                    duration_ms=int((time.monotonic() - started) * 1000),
                )
                break

            self._record(
                outcome,
                StageResult(
                    stage=stage.name,
                    status=StageStatus.SUCCESS,
                    summary="completed",
                    duration_ms=int((time.monotonic() - started) * 1000),
                ),
            )
            self.ctx.log(stage=stage.name, level="info", message="Stage completed", output=str(stage.output))
        else:
            outcome.succeed()
            self.ctx.log(stage=None, level="info", message="Orchestration completed successfully")

        self._finish(outcome)
        return outcome

    def _finish(self, outcome: RunOutcome) -> None:
        if self._manifest is not None:
            finalize_manifest(self._manifest, status=outcome.status.value, ts=_now())
        self._save_manifest()
