# tests/conftest.py
"""
Fixtures compartilhados para testes do Ingest Orchestrator.

Este módulo fornece:
- configuração mínima apontando para um diretório temporário
- RunContext determinístico com ambiente controlado (sem os.environ)
- fábrica de arquivos zip (entradas arbitrárias, inclusive maliciosas)
- colaboradores falsos: fetcher que grava um zip e conta chamadas,
  executor de processos que simula o job de particionamento

Invariantes:
    - Nenhuma fixture acessa a rede
    - Nenhuma fixture executa processos reais
    - Todo I/O acontece sob `tmp_path`
"""

import zipfile
from datetime import datetime, timezone
from pathlib import Path

import pytest


@pytest.fixture
def make_zip(tmp_path):
    """
    Fábrica de arquivos zip.

    Recebe um dicionário `{nome_da_entrada: bytes | None}`; `None` gera
    uma entrada de diretório. Os nomes são gravados literalmente, o que
    permite montar entradas como `../../evil.txt`.
    """
    def _make(entries, name="archive.zip"):
        path = tmp_path / name
        with zipfile.ZipFile(path, "w") as zf:
            for entry_name, content in entries.items():
                if content is None:
                    zf.writestr(zipfile.ZipInfo(entry_name.rstrip("/") + "/"), b"")
                else:
                    zf.writestr(zipfile.ZipInfo(entry_name), content)
        return path

    return _make


@pytest.fixture
def dataset_entries():
    return {
        "a.txt": b"alpha",
        "dir/": None,
        "dir/b.txt": b"bravo",
    }


@pytest.fixture
def pipeline_config(tmp_path) -> dict:
    """Configuração resolvida com `base_dir` sob tmp_path e comando com placeholders."""
    from ingest_orchestrator.core.config import load_config, deep_merge

    return deep_merge(
        load_config(),
        {
            "paths": {"base_dir": str(tmp_path / "data")},
            "partition": {"command": ["partition-job", "{input_dir}", "{output_dir}"]},
        },
    )


@pytest.fixture
def token_env() -> dict:
    return {"KAGGLE_API_TOKEN": "secret-token"}


@pytest.fixture
def dummy_ctx(pipeline_config, token_env):
    from ingest_orchestrator.core.pipeline.context import RunContext

    return RunContext(
        run_id="run-test-001",
        created_at=datetime(2026, 1, 16, 0, 0, 0, tzinfo=timezone.utc),
        config=pipeline_config,
        env=token_env,
        meta={"source": "pytest"},
    )


class FakeFetcher:
    """Fetcher que grava um zip pronto no destino e registra cada chamada."""

    def __init__(self, archive_bytes: bytes = b"", error: Exception = None):
        self.archive_bytes = archive_bytes
        self.error = error
        self.calls = []

    def download(self, destination, token):
        self.calls.append((Path(destination), token))
        if self.error is not None:
            raise self.error
        Path(destination).parent.mkdir(parents=True, exist_ok=True)
        Path(destination).write_bytes(self.archive_bytes)
        return Path(destination)


class FakeJobRunner:
    """
    Executor de processos que simula o job de particionamento.

    Escreve `part-00000.csv` no diretório passado como último argumento
    (o `{output_dir}` renderizado) e devolve `exit_code`.
    """

    def __init__(self, exit_code: int = 0, write_output: bool = True):
        self.exit_code = exit_code
        self.write_output = write_output
        self.specs = []

    def __call__(self, spec):
        self.specs.append(spec)
        if self.write_output:
            out = Path(spec.command[-1])
            out.mkdir(parents=True, exist_ok=True)
            (out / "part-00000.csv").write_text("order_id\n1\n", encoding="utf-8")
        return self.exit_code


@pytest.fixture
def fake_fetcher(make_zip, dataset_entries):
    return FakeFetcher(make_zip(dataset_entries, name="upstream.zip").read_bytes())


@pytest.fixture
def fake_job_runner():
    return FakeJobRunner()


@pytest.fixture
def FakeJobRunnerClass():
    return FakeJobRunner


@pytest.fixture
def FakeFetcherClass():
    return FakeFetcher
