# src/ingest_orchestrator/core/config/__init__.py
"""
Camada de configuração do Ingest Orchestrator.

Responsabilidades do pacote:
    - Defaults embutidos que reproduzem o layout fixo de diretórios
    - Carregamento de arquivos de configuração (YAML/JSON) + overrides locais
    - Resolução determinística via deep-merge
    - Derivação dos caminhos absolutos de cada etapa
    - Hash canônico para rastreabilidade

Limites explícitos:
    - Segredos (token) nunca vêm de arquivo: apenas do ambiente
    - Não executa pipeline
"""

from .defaults import DEFAULT_CONFIG
from .errors import (
    ConfigError,
    ConfigTypeConflictError,
    DefaultsNotFoundError,
    InvalidConfigRootTypeError,
    UnsupportedConfigFormatError,
)
from .hashing import compute_config_hash
from .loader import PipelinePaths, load_config, resolve_paths
from .merge import deep_merge

__all__ = [
    "DEFAULT_CONFIG",
    "ConfigError",
    "ConfigTypeConflictError",
    "DefaultsNotFoundError",
    "InvalidConfigRootTypeError",
    "UnsupportedConfigFormatError",
    "PipelinePaths",
    "compute_config_hash",
    "deep_merge",
    "load_config",
    "resolve_paths",
]
