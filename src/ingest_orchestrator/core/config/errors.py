# src/ingest_orchestrator/core/config/errors.py
"""
Exceções da camada de configuração.

Representam violações estruturais de arquivos de configuração e são
levantadas antes de qualquer etapa do pipeline começar. Não confundir
com `ConfigurationError` (core.exceptions), que sinaliza entrada de
ambiente ausente durante a run.
"""


class ConfigError(Exception):
    """
    Exceção base para erros de carregamento e resolução de configuração.

    Limites explícitos:
        - Não representa erro de execução de etapa
    """


class DefaultsNotFoundError(ConfigError):
    """
    Arquivo de defaults explicitamente informado não existe.

    Decisões arquiteturais:
        - Um caminho de defaults informado pelo operador é obrigatório
        - Não há fallback silencioso para os defaults embutidos
    """


class UnsupportedConfigFormatError(ConfigError):
    """
    Formato de arquivo não suportado pelo loader.

    Formatos suportados:
        - YAML (.yaml, .yml)
        - JSON (.json)
    """


class InvalidConfigRootTypeError(ConfigError):
    """Conteúdo raiz do arquivo não é um mapa chave-valor."""


class ConfigTypeConflictError(ConfigError):
    """
    Conflito de tipos durante o deep-merge.

    Exemplo de conflito:
        - base:     {"paths": {"base_dir": "data"}}
        - override: {"paths": "data"}

    Nenhum merge parcial é produzido em caso de conflito.
    """
