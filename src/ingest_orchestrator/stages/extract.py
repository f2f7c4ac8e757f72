# src/ingest_orchestrator/stages/extract.py
"""Etapa extract: descompacta o zip do dataset em um diretório de destino.

Responsabilidades:
- criar o diretório de destino (idempotente)
- percorrer as entradas do zip sequencialmente
- rejeitar qualquer entrada cujo caminho normalizado escape do destino (Zip Slip)
- copiar cada arquivo em blocos de tamanho fixo, sobrescrevendo se já existir

Limites explícitos:
- NÃO remove conteúdo pré-existente no destino
- NÃO desfaz a extração parcial em caso de erro
- NÃO segue nem cria symlinks declarados no zip (entradas são tratadas como arquivos)
"""

from __future__ import annotations

import logging
import os
import shutil
import zipfile
from pathlib import Path
from typing import Union

from ingest_orchestrator.core.errors import unsafe_entry
from ingest_orchestrator.core.exceptions import ExtractionError

logger = logging.getLogger("ingest_orchestrator.extract")

BUFFER_SIZE = 8192


def _is_within(root: str, candidate: str) -> bool:
    return candidate == root or candidate.startswith(root.rstrip(os.sep) + os.sep)


def safe_target(dest_dir: Union[str, Path], entry_name: str) -> Path:
    """
    Resolve o caminho de destino de uma entrada e garante que ele fica dentro de `dest_dir`.

    O caminho é normalizado (`.`/`..` resolvidos) sem seguir symlinks.
    Nomes absolutos (`/etc/passwd`) e sequências `../` que escapam do
    destino levantam ExtractionError("unsafe entry: <nome>").
    """
    root = os.path.normpath(os.path.abspath(os.fspath(dest_dir)))
    # separadores do zip são sempre "/"; barras invertidas também são tratadas como separador
    relative = entry_name.replace("\\", "/")
    candidate = os.path.normpath(os.path.join(root, *relative.split("/")))

    if os.path.isabs(relative) or os.path.splitdrive(relative)[0] or not _is_within(root, candidate):
        raise unsafe_entry(entry_name=entry_name, dest_dir=root)
    return Path(candidate)


def extract_archive(
    archive_path: Union[str, Path],
    dest_dir: Union[str, Path],
    *,
    buffer_size: int = BUFFER_SIZE,
) -> int:
    """
    Extrai `archive_path` em `dest_dir` e retorna o número de arquivos gravados.

    Raises:
        ExtractionError: zip ilegível/corrompido, falha de I/O ou entrada insegura.
    """
    archive = Path(archive_path)
    dest = Path(dest_dir)
    logger.info("Extracting %s to %s", archive, dest)

    files = 0
    try:
        dest.mkdir(parents=True, exist_ok=True)
        with zipfile.ZipFile(archive) as zf:
            for info in zf.infolist():
                target = safe_target(dest, info.filename)

                if info.is_dir():
                    target.mkdir(parents=True, exist_ok=True)
                    continue

                target.parent.mkdir(parents=True, exist_ok=True)
                with zf.open(info) as src, target.open("wb") as dst:
                    shutil.copyfileobj(src, dst, buffer_size)
                files += 1
    except ExtractionError:
        raise
    except (zipfile.BadZipFile, zipfile.LargeZipFile, OSError, EOFError, RuntimeError) as e:
        raise ExtractionError(
            message=f"Failed to extract {archive}: {e}",
            details={
                "archive": str(archive),
                "dest_dir": str(dest),
                "error_type": e.__class__.__name__,
            },
        ) from e

    logger.info("Successfully extracted %d files to %s", files, dest)
    return files
