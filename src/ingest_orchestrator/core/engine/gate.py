# src/ingest_orchestrator/core/engine/gate.py
"""
Stage Gate — decide se a saída de uma etapa já está presente.

Regras:
    - Arquivo: presente sse existe
    - Diretório: presente sse existe **e** contém ao menos uma entrada
      (diretório vazio não conta como saída concluída)

Falhas de inspeção ou listagem (permissão, nome longo demais, ...) são
rebaixadas: geram um warning e a saída é tratada como ausente, o que
apenas provoca a (re)execução da etapa. O gate é puramente observacional.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import List, Optional, Union

from ingest_orchestrator.core.exceptions import DirectoryListError
from ingest_orchestrator.core.pipeline.context import RunContext
from ingest_orchestrator.core.pipeline.types import OutputKind

logger = logging.getLogger("ingest_orchestrator.gate")


def list_directory(path: Path, *, limit: Optional[int] = None) -> List[str]:
    """Lista até `limit` entradas de `path`, convertendo OSError em DirectoryListError."""
    try:
        names: List[str] = []
        with os.scandir(path) as it:
            for entry in it:
                names.append(entry.name)
                if limit is not None and len(names) >= limit:
                    break
        return names
    except OSError as e:
        raise DirectoryListError(
            message=f"Failed to list directory {path}: {e}",
            details={"path": str(path), "error_type": e.__class__.__name__},
        ) from e


def _exists(path: Path) -> bool:
    """Como `Path.exists`, mas qualquer OSError além de "não existe" vira DirectoryListError."""
    try:
        os.stat(path)
    except (FileNotFoundError, NotADirectoryError):
        return False
    except OSError as e:
        raise DirectoryListError(
            message=f"Failed to inspect {path}: {e}",
            details={"path": str(path), "error_type": e.__class__.__name__},
        ) from e
    return True


def is_output_present(
    location: Union[str, Path],
    *,
    kind: OutputKind,
    ctx: Optional[RunContext] = None,
    stage: Optional[str] = None,
) -> bool:
    """
    Retorna True se a saída em `location` já existe (e, para diretórios,
    não está vazia).

    Nunca levanta por falha de inspeção ou listagem: `DirectoryListError`
    é registrado como warning em `ctx` (quando fornecido) e resulta em False.
    """
    path = Path(location)

    try:
        if not _exists(path):
            return False
        if kind == OutputKind.FILE:
            return True
        return len(list_directory(path, limit=1)) > 0
    except DirectoryListError as e:
        if ctx is not None:
            ctx.add_warning(stage=stage or str(path), message=str(e))
            ctx.log(
                stage=stage,
                level="warning",
                message="Failed to check stage output; stage will run",
                path=str(path),
            )
        else:
            logger.warning("%s; treating output as absent", e)
        return False
