# tests/core/pipeline/test_registry.py
import pytest

from ingest_orchestrator.core.pipeline.registry import DuplicateStageNameError, StageRegistry
from ingest_orchestrator.core.pipeline.stage import Stage
from ingest_orchestrator.core.pipeline.types import OutputKind


def _stage(name, tmp_path):
    return Stage(name=name, output=tmp_path / name, output_kind=OutputKind.FILE, runner=lambda ctx: None)


def test_registry_preserves_registration_order(tmp_path):
    reg = StageRegistry()
    for name in ("fetch", "extract", "partition"):
        reg.add(_stage(name, tmp_path))

    assert [s.name for s in reg.list()] == ["fetch", "extract", "partition"]
    assert reg.get("extract").name == "extract"
    assert len(reg) == 3


def test_registry_rejects_duplicates(tmp_path):
    reg = StageRegistry()
    reg.add(_stage("fetch", tmp_path))

    with pytest.raises(DuplicateStageNameError):
        reg.add(_stage("fetch", tmp_path))


@pytest.mark.parametrize("name", ["", "   "])
def test_registry_rejects_blank_names(tmp_path, name):
    with pytest.raises(ValueError):
        StageRegistry().add(_stage(name, tmp_path))
