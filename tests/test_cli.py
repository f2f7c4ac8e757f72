# tests/test_cli.py
"""
Testes da CLI: exit codes e configuração de logging.

Nenhum teste acessa a rede: os cenários param antes do download (token
ausente) ou encontram todas as saídas já presentes.
"""

import logging

import pytest

from ingest_orchestrator import cli


@pytest.fixture(autouse=True)
def _isolate(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("KAGGLE_API_TOKEN", raising=False)
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    for h in list(root.handlers):
        if h not in handlers:
            h.close()
    root.handlers[:] = handlers
    root.setLevel(level)


def test_missing_token_exits_non_zero(tmp_path):
    assert cli.main(["--base-dir", str(tmp_path / "data")]) == 1
    assert (tmp_path / "data").is_dir()
    assert not (tmp_path / "data" / "extracted").exists()


def test_error_is_written_to_log_file(tmp_path):
    cli.main(["--base-dir", str(tmp_path / "data")])

    log_text = (tmp_path / "logs" / "orchestrator.log").read_text(encoding="utf-8")
    assert "[fetch] Orchestration failed" in log_text
    assert "KAGGLE_API_TOKEN environment variable not set" in log_text


def test_all_outputs_present_exits_zero(tmp_path):
    base = tmp_path / "data"
    (base / "extracted").mkdir(parents=True)
    (base / "extracted" / "orders.csv").write_text("x", encoding="utf-8")
    (base / "partitioned").mkdir()
    (base / "partitioned" / "part-0.csv").write_text("x", encoding="utf-8")
    (base / "brazilian-ecommerce.zip").write_bytes(b"")

    assert cli.main(["--base-dir", str(base), "--log-level", "DEBUG"]) == 0
    assert logging.getLogger().level == logging.DEBUG


def test_invalid_config_file_exits_non_zero(tmp_path):
    assert cli.main(["--config", str(tmp_path / "missing.yaml")]) == 1


def test_yaml_config_is_applied(tmp_path):
    config = tmp_path / "orchestrator.yaml"
    config.write_text(
        f"paths:\n  base_dir: {tmp_path / 'custom'}\nlogging:\n  dir: {tmp_path / 'custom-logs'}\n",
        encoding="utf-8",
    )

    assert cli.main(["--config", str(config)]) == 1
    assert (tmp_path / "custom").is_dir()
    assert (tmp_path / "custom-logs" / "orchestrator.log").exists()
