# src/ingest_orchestrator/core/config/loader.py
"""
Carregamento e resolução da configuração efetiva.

Política de resolução:
    1. DEFAULT_CONFIG (embutido)
    2. arquivo de defaults opcional (deve existir se informado)
    3. arquivo local opcional (ignorado se não existir)

A resolução utiliza `deep_merge`; overrides nunca mutam as camadas anteriores.
Também deriva os caminhos absolutos usados pelas etapas (`resolve_paths`).
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml  # PyYAML

from .defaults import DEFAULT_CONFIG
from .errors import (
    DefaultsNotFoundError,
    InvalidConfigRootTypeError,
    UnsupportedConfigFormatError,
)
from .merge import deep_merge

PathLike = Union[str, Path]


def _load_file(path: Path) -> Dict[str, Any]:
    """
    Lê um arquivo de configuração e valida sua estrutura básica.

    Arquivos vazios são interpretados como dicionários vazios.

    Raises:
        DefaultsNotFoundError: Se o arquivo não existir.
        UnsupportedConfigFormatError: Se o formato não for suportado.
        InvalidConfigRootTypeError: Se o conteúdo raiz não for um dicionário.
    """
    if not path.exists():
        raise DefaultsNotFoundError(f"Arquivo de configuração não encontrado: {path}")

    suffix = path.suffix.lower()

    if suffix in {".yaml", ".yml"}:
        with path.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f)

    elif suffix == ".json":
        with path.open("r", encoding="utf-8") as f:
            data = json.load(f)

    else:
        raise UnsupportedConfigFormatError(f"Formato não suportado: {path.suffix}")

    if data is None:
        data = {}

    if not isinstance(data, dict):
        raise InvalidConfigRootTypeError(
            f"Config root deve ser dict, recebido: {type(data).__name__}"
        )

    return data


def load_config(
    *,
    defaults_path: Optional[PathLike] = None,
    local_path: Optional[PathLike] = None,
) -> Dict[str, Any]:
    """
    Carrega e resolve a configuração efetiva do pipeline.

    Args:
        defaults_path: Arquivo base opcional; se informado, deve existir.
        local_path: Overrides locais opcionais; ignorado se o arquivo não existir.

    Returns:
        Dict[str, Any]: Configuração final resolvida.

    Raises:
        DefaultsNotFoundError: Se `defaults_path` for informado e não existir.
        UnsupportedConfigFormatError: Se o formato do arquivo não for suportado.
        InvalidConfigRootTypeError: Se o conteúdo não for um dicionário.
        ConfigTypeConflictError: Se ocorrer conflito estrutural durante o merge.
    """
    effective = deep_merge(DEFAULT_CONFIG, {})

    if defaults_path is not None:
        effective = deep_merge(effective, _load_file(Path(defaults_path)))

    if local_path is not None:
        local_file = Path(local_path)
        if local_file.exists():
            effective = deep_merge(effective, _load_file(local_file))

    return effective


@dataclass(frozen=True)
class PipelinePaths:
    """Localizações absolutas de saída de cada etapa."""

    base_dir: Path
    archive: Path
    extracted_dir: Path
    partitioned_dir: Path
    partition_staging_dir: Path
    runs_dir: Path


def resolve_paths(config: Dict[str, Any], *, root: Optional[PathLike] = None) -> PipelinePaths:
    """
    Deriva o layout de diretórios a partir de `config["paths"]`.

    Caminhos relativos de `base_dir` são resolvidos a partir de `root`
    (padrão: diretório corrente). Os demais são relativos a `base_dir`.
    """
    paths_cfg = (config or {}).get("paths", {}) or {}
    trace_cfg = (config or {}).get("traceability", {}) or {}

    base = Path(paths_cfg.get("base_dir") or "data").expanduser()
    if not base.is_absolute():
        base = Path(root or Path.cwd()) / base
    base = Path(base).absolute()

    archive_name = str(paths_cfg.get("archive_name") or "dataset")
    if not archive_name.endswith(".zip"):
        archive_name = f"{archive_name}.zip"

    partitioned_name = str(paths_cfg.get("partitioned_dir") or "partitioned")

    return PipelinePaths(
        base_dir=base,
        archive=base / archive_name,
        extracted_dir=base / str(paths_cfg.get("extracted_dir") or "extracted"),
        partitioned_dir=base / partitioned_name,
        partition_staging_dir=base / f".{Path(partitioned_name).name}.partial",
        runs_dir=base / str(trace_cfg.get("runs_dir") or "runs"),
    )
