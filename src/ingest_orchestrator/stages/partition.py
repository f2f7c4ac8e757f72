# src/ingest_orchestrator/stages/partition.py
"""Etapa partition: executa o job externo de particionamento.

Responsabilidades:
- montar o comando a partir da configuração (placeholders {input_dir}, {output_dir}, {base_dir})
- executar o job herdando stdin/stdout/stderr do processo pai e aguardar seu término
- exit code não-zero → ExternalJobError com o exit code
- finalização atômica: o job escreve em um diretório de staging, que só é
  renomeado para o diretório final após exit code 0

Com isso "saída existe" passa a significar "saída completa": um job que
morre no meio deixa apenas o staging, que é descartado na próxima run.

Limites explícitos:
- NÃO aplica timeout nem cancelamento
- NÃO interpreta a saída do job
"""

from __future__ import annotations

import logging
import os
import shutil
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Dict, List, Mapping, Optional, Sequence, Union

from ingest_orchestrator.core.errors import external_job_failed
from ingest_orchestrator.core.engine.gate import list_directory

logger = logging.getLogger("ingest_orchestrator.partition")


@dataclass(frozen=True)
class ProcessSpec:
    """Especificação de um processo externo.

    `inherit_io=True` faz o filho compartilhar os streams padrão do pai
    (saída ao vivo no console); com False, stdout/stderr são descartados.
    """
    command: Sequence[str]
    inherit_io: bool = True
    cwd: Optional[Union[str, Path]] = None
    env: Optional[Mapping[str, str]] = None


ProcessRunner = Callable[[ProcessSpec], int]


def run_process(spec: ProcessSpec) -> int:
    """Inicia o processo, bloqueia até o término e retorna o exit code."""
    logger.info("Executing external job: %s", " ".join(spec.command))
    kwargs: Dict[str, object] = {}
    if not spec.inherit_io:
        kwargs["stdout"] = subprocess.DEVNULL
        kwargs["stderr"] = subprocess.DEVNULL
    completed = subprocess.run(
        list(spec.command),
        cwd=os.fspath(spec.cwd) if spec.cwd is not None else None,
        env=dict(spec.env) if spec.env is not None else None,
        check=False,
        **kwargs,
    )
    return completed.returncode


def build_command(template: Sequence[str], **values: Union[str, Path]) -> List[str]:
    """Substitui os placeholders conhecidos `{nome}`; demais chaves ficam literais."""
    rendered = {"{" + k + "}": os.fspath(v) for k, v in values.items()}
    argv: List[str] = []
    for arg in template:
        arg = str(arg)
        for placeholder, value in rendered.items():
            arg = arg.replace(placeholder, value)
        argv.append(arg)
    return argv


def _has_entries(path: Path) -> bool:
    return path.is_dir() and len(list_directory(path, limit=1)) > 0


def run_partition_job(
    *,
    command: Sequence[str],
    input_dir: Path,
    output_dir: Path,
    staging_dir: Path,
    base_dir: Optional[Path] = None,
    cwd: Optional[Union[str, Path]] = None,
    runner: ProcessRunner = run_process,
) -> Path:
    """
    Executa o job de particionamento e promove o staging para `output_dir`.

    Raises:
        ExternalJobError: exit code não-zero, ou exit 0 sem produzir saída.
        OSError: falha ao preparar o staging ou ao promovê-lo.
    """
    if staging_dir.exists():
        logger.info("Removing stale staging directory %s", staging_dir)
        shutil.rmtree(staging_dir)
    staging_dir.parent.mkdir(parents=True, exist_ok=True)

    argv = build_command(
        command,
        input_dir=input_dir,
        output_dir=staging_dir,
        base_dir=base_dir or output_dir.parent,
    )
    exit_code = runner(ProcessSpec(command=argv, inherit_io=True, cwd=cwd))
    if exit_code != 0:
        raise external_job_failed(command=argv, exit_code=exit_code)

    if not staging_dir.exists() or not _has_entries(staging_dir):
        raise external_job_failed(
            command=argv,
            exit_code=exit_code,
            reason=f"External job exited 0 without writing to {staging_dir}",
        )

    # diretório final vazio (ou arquivo solto) não é saída válida; é substituído
    if output_dir.is_dir():
        output_dir.rmdir()
    elif output_dir.exists():
        output_dir.unlink()
    output_dir.parent.mkdir(parents=True, exist_ok=True)
    os.replace(staging_dir, output_dir)
    logger.info("Partitioned output promoted to %s", output_dir)
    return output_dir
