# tests/core/traceability/test_manifest.py
"""
Testes do Manifest de run.

- criação sem eventos implícitos
- registro de etapas gera evento correspondente, em ordem
- gravação atômica e leitura (round-trip)
"""

from datetime import datetime, timezone

from ingest_orchestrator.core.traceability.manifest import (
    create_manifest,
    finalize_manifest,
    load_manifest,
    record_stage,
    save_manifest,
)

T0 = datetime(2026, 1, 16, 12, 0, 0, tzinfo=timezone.utc)


def _manifest():
    return create_manifest(run_id="run-003", started_at=T0, version="0.1.0", config_hash="c" * 64)


def test_create_manifest_starts_empty():
    m = _manifest()
    assert m.run["status"] == "in_progress"
    assert m.run["started_at"] == "2026-01-16T12:00:00+00:00"
    assert m.events == []
    assert m.stages == {}


def test_record_stage_and_finalize():
    m = _manifest()
    record_stage(m, stage="fetch", status="skipped", ts=T0)
    record_stage(m, stage="extract", status="failed", ts=T0, error={"type": "EXTRACTION_ERROR"})
    finalize_manifest(m, status="failed", ts=T0)

    assert m.stages["extract"]["error"] == {"type": "EXTRACTION_ERROR"}
    assert [e["event_type"] for e in m.events] == ["stage_skipped", "stage_failed", "run_failed"]
    assert m.run["finished_at"] == "2026-01-16T12:00:00+00:00"


def test_naive_timestamps_are_treated_as_utc():
    m = create_manifest(run_id="r", started_at=datetime(2026, 1, 1), version="0", config_hash="0" * 64)
    assert m.run["started_at"] == "2026-01-01T00:00:00+00:00"


def test_save_and_load_round_trip(tmp_path):
    m = _manifest()
    record_stage(m, stage="fetch", status="success", ts=T0, duration_ms=42)

    path = save_manifest(m, tmp_path / "runs" / "run-003.json")

    assert not (tmp_path / "runs" / "run-003.json.tmp").exists()
    assert load_manifest(path).to_dict() == m.to_dict()
