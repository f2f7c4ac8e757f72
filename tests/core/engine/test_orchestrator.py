# tests/core/engine/test_orchestrator.py
"""
Testes do Orchestrator com etapas sintéticas.

Os testes asseguram que:
- etapas executam na ordem de registro
- etapas com saída presente não invocam o runner (skip idempotente)
- a primeira falha encerra a run, preservando a exceção original
- o RunOutcome é finalizado exatamente uma vez
- o workspace é criado e o Manifest é gravado
"""

import json

import pytest

from ingest_orchestrator.core.engine.engine import Orchestrator
from ingest_orchestrator.core.exceptions import ExternalJobError
from ingest_orchestrator.core.pipeline.registry import DuplicateStageNameError
from ingest_orchestrator.core.pipeline.stage import Stage
from ingest_orchestrator.core.pipeline.types import OutputKind, RunOutcome, RunStatus, StageStatus


class Recorder:
    def __init__(self):
        self.calls = []

    def stage(self, name, output, kind=OutputKind.FILE, error=None):
        def _runner(ctx):
            self.calls.append(name)
            if error is not None:
                raise error
            if kind == OutputKind.FILE:
                output.write_text(name, encoding="utf-8")
            else:
                output.mkdir(parents=True, exist_ok=True)
                (output / "done").write_text(name, encoding="utf-8")

        return Stage(name=name, output=output, output_kind=kind, runner=_runner)


def test_runs_stages_in_order_and_creates_workspace(tmp_path, dummy_ctx):
    base = tmp_path / "work"
    rec = Recorder()
    stages = [
        rec.stage("one", base / "one.txt"),
        rec.stage("two", base / "two", kind=OutputKind.DIRECTORY),
        rec.stage("three", base / "three.txt"),
    ]

    outcome = Orchestrator(stages=stages, ctx=dummy_ctx, workspace=base).run()

    assert outcome.status == RunStatus.SUCCEEDED
    assert outcome.exit_code == 0
    assert rec.calls == ["one", "two", "three"]
    assert all(r.status == StageStatus.SUCCESS for r in outcome.stages.values())


def test_second_run_skips_every_stage(tmp_path, dummy_ctx):
    base = tmp_path / "work"
    rec = Recorder()
    stages = [rec.stage("one", base / "one.txt"), rec.stage("two", base / "two", kind=OutputKind.DIRECTORY)]

    Orchestrator(stages=stages, ctx=dummy_ctx, workspace=base).run()
    rec.calls.clear()
    outcome = Orchestrator(stages=stages, ctx=dummy_ctx, workspace=base).run()

    assert outcome.ok
    assert rec.calls == []
    assert [r.status for r in outcome.stages.values()] == [StageStatus.SKIPPED, StageStatus.SKIPPED]


def test_first_failure_halts_pipeline(tmp_path, dummy_ctx):
    base = tmp_path / "work"
    rec = Recorder()
    boom = ExternalJobError(message="External job failed with exit code: 2", details={"exit_code": 2})
    stages = [
        rec.stage("one", base / "one.txt"),
        rec.stage("two", base / "two.txt", error=boom),
        rec.stage("three", base / "three.txt"),
    ]

    outcome = Orchestrator(stages=stages, ctx=dummy_ctx, workspace=base).run()

    assert outcome.status == RunStatus.FAILED
    assert outcome.exit_code == 1
    assert outcome.failed_stage == "two"
    assert outcome.error is boom
    assert rec.calls == ["one", "two"]
    assert "three" not in outcome.stages
    error_events = [e for e in dummy_ctx.events if e["level"] == "error"]
    assert error_events[-1]["stage"] == "two"
    assert error_events[-1]["error_type"] == "ExternalJobError"


def test_unexpected_exception_is_not_wrapped(tmp_path, dummy_ctx):
    base = tmp_path / "work"
    error = KeyError("missing")
    stages = [Recorder().stage("one", base / "one.txt", error=error)]

    outcome = Orchestrator(stages=stages, ctx=dummy_ctx, workspace=base).run()

    assert outcome.failed_stage == "one"
    assert outcome.error is error


def test_outcome_cannot_be_finalized_twice(tmp_path, dummy_ctx):
    outcome = Orchestrator(stages=[], ctx=dummy_ctx, workspace=tmp_path / "w").run()

    assert outcome.ok
    with pytest.raises(RuntimeError):
        outcome.fail(stage="late", error=ValueError("x"))


def test_duplicate_stage_names_are_rejected(tmp_path, dummy_ctx):
    rec = Recorder()
    with pytest.raises(DuplicateStageNameError):
        Orchestrator(
            stages=[rec.stage("one", tmp_path / "a"), rec.stage("one", tmp_path / "b")],
            ctx=dummy_ctx,
            workspace=tmp_path,
        )


def test_workspace_creation_failure_is_fatal(tmp_path, dummy_ctx):
    blocker = tmp_path / "file"
    blocker.write_text("x", encoding="utf-8")
    rec = Recorder()

    outcome = Orchestrator(
        stages=[rec.stage("one", tmp_path / "one.txt")],
        ctx=dummy_ctx,
        workspace=blocker / "sub",
    ).run()

    assert outcome.failed_stage == "workspace"
    assert rec.calls == []


def test_manifest_is_written_with_stage_states(tmp_path, dummy_ctx):
    base = tmp_path / "work"
    rec = Recorder()
    (base).mkdir()
    (base / "one.txt").write_text("present", encoding="utf-8")
    stages = [
        rec.stage("one", base / "one.txt"),
        rec.stage("two", base / "two.txt", error=OSError("disk full")),
    ]

    Orchestrator(stages=stages, ctx=dummy_ctx, workspace=base, manifest_dir=base / "runs").run()

    data = json.loads((base / "runs" / "run-test-001.json").read_text(encoding="utf-8"))
    assert data["run"]["status"] == "failed"
    assert data["run"]["meta"] == {"source": "pytest"}
    assert data["stages"]["one"]["status"] == "skipped"
    assert data["stages"]["two"]["status"] == "failed"
    assert data["stages"]["two"]["error"]["type"] == "UNEXPECTED_ERROR"
    assert data["stages"]["two"]["error"]["stage"] == "two"
    assert len(data["inputs"]["config_hash"]) == 64
    assert data["events"][0]["event_type"] == "run_started"
    assert data["events"][-1]["event_type"] == "run_failed"


def test_gate_inspection_failure_still_returns_outcome(tmp_path, dummy_ctx):
    base = tmp_path / "work"
    rec = Recorder()
    stages = [rec.stage("long", base / ("x" * 300), kind=OutputKind.DIRECTORY)]

    outcome = Orchestrator(stages=stages, ctx=dummy_ctx, workspace=base, manifest_dir=base / "runs").run()

    assert isinstance(outcome, RunOutcome)
    assert outcome.status == RunStatus.FAILED
    assert outcome.failed_stage == "long"
    assert isinstance(outcome.error, OSError)
    assert rec.calls == ["long"]
    assert len(dummy_ctx.warnings["long"]) == 1
    assert (base / "runs" / "run-test-001.json").exists()
