# src/ingest_orchestrator/pipeline.py
"""
Montagem do pipeline de ingestão.

Constrói, a cada run, a lista ordenada de etapas a partir da
configuração resolvida:

    fetch     → <base>/<archive_name>.zip        (arquivo)
    extract   → <base>/<extracted_dir>/          (diretório não vazio)
    partition → <base>/<partitioned_dir>/        (diretório não vazio)

Os colaboradores externos (cliente HTTP e executor de processos) são
injetáveis para que testes possam substituí-los e contar chamadas.
"""

from __future__ import annotations

import os
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Protocol, Union

from ingest_orchestrator.core.config.loader import PipelinePaths, resolve_paths
from ingest_orchestrator.core.engine.engine import Orchestrator
from ingest_orchestrator.core.pipeline.context import RunContext, new_run_id
from ingest_orchestrator.core.pipeline.stage import Stage
from ingest_orchestrator.core.pipeline.types import OutputKind
from ingest_orchestrator.stages.extract import BUFFER_SIZE, extract_archive
from ingest_orchestrator.stages.fetch import DatasetFetcher, read_token
from ingest_orchestrator.stages.partition import ProcessRunner, run_partition_job, run_process

FETCH = "fetch"
EXTRACT = "extract"
PARTITION = "partition"


class Fetcher(Protocol):
    def download(self, destination: Union[str, Path], token: str) -> Any:
        ...


def default_fetcher(config: Dict[str, Any]) -> DatasetFetcher:
    fetch_cfg = config.get("fetch", {}) or {}
    return DatasetFetcher(
        fetch_cfg["url"],
        timeout=fetch_cfg.get("timeout_seconds"),
        chunk_size=fetch_cfg.get("chunk_size") or 8192,
    )


def build_stages(
    config: Dict[str, Any],
    paths: PipelinePaths,
    *,
    fetcher: Optional[Fetcher] = None,
    process_runner: ProcessRunner = run_process,
) -> List[Stage]:
    """Retorna as etapas fetch → extract → partition, nesta ordem."""
    fetch_cfg = config.get("fetch", {}) or {}
    extract_cfg = config.get("extract", {}) or {}
    partition_cfg = config.get("partition", {}) or {}

    def _fetch(ctx: RunContext) -> None:
        # token validado antes de qualquer acesso à rede
        token = read_token(ctx.env, fetch_cfg.get("token_env") or "KAGGLE_API_TOKEN")
        client = fetcher if fetcher is not None else default_fetcher(config)
        client.download(paths.archive, token)

    def _extract(ctx: RunContext) -> None:
        files = extract_archive(
            paths.archive,
            paths.extracted_dir,
            buffer_size=int(extract_cfg.get("buffer_size") or BUFFER_SIZE),
        )
        ctx.log(stage=EXTRACT, level="info", message="Archive extracted", files=files)

    def _partition(ctx: RunContext) -> None:
        run_partition_job(
            command=list(partition_cfg.get("command") or []),
            input_dir=paths.extracted_dir,
            output_dir=paths.partitioned_dir,
            staging_dir=paths.partition_staging_dir,
            base_dir=paths.base_dir,
            cwd=partition_cfg.get("cwd"),
            runner=process_runner,
        )

    return [
        Stage(
            name=FETCH,
            output=paths.archive,
            output_kind=OutputKind.FILE,
            runner=_fetch,
            description="Downloading dataset",
        ),
        Stage(
            name=EXTRACT,
            output=paths.extracted_dir,
            output_kind=OutputKind.DIRECTORY,
            runner=_extract,
            description="Extracting dataset",
        ),
        Stage(
            name=PARTITION,
            output=paths.partitioned_dir,
            output_kind=OutputKind.DIRECTORY,
            runner=_partition,
            description="Running partitioning job",
        ),
    ]


def build_orchestrator(
    config: Dict[str, Any],
    *,
    root: Optional[Union[str, Path]] = None,
    env: Optional[Mapping[str, str]] = None,
    fetcher: Optional[Fetcher] = None,
    process_runner: ProcessRunner = run_process,
    run_id: Optional[str] = None,
) -> Orchestrator:
    """Cria um Orchestrator pronto para `run()` a partir da configuração resolvida."""
    from ingest_orchestrator import __version__

    now = datetime.now(timezone.utc)
    paths = resolve_paths(config, root=root)
    ctx = RunContext(
        run_id=run_id or new_run_id(now),
        created_at=now,
        config=config,
        env=os.environ if env is None else env,
        meta={"base_dir": str(paths.base_dir)},
    )
    trace_cfg = config.get("traceability", {}) or {}
    return Orchestrator(
        stages=build_stages(config, paths, fetcher=fetcher, process_runner=process_runner),
        ctx=ctx,
        workspace=paths.base_dir,
        manifest_dir=paths.runs_dir if trace_cfg.get("manifest", True) else None,
        version=__version__,
    )
