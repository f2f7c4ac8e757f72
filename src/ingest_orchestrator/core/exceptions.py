"""
Ingest Orchestrator — exceções canônicas.

Este módulo define as exceções tipadas levantadas pelas etapas do pipeline.

Objetivo:
- Permitir que cada etapa sinalize falhas semânticas tipadas
- Facilitar o mapeamento determinístico para IngestErrorPayload (Manifest)
- Evitar RuntimeError/IOError genéricos nas fronteiras críticas

Regras:
- Todas as exceções fatais herdam de `IngestException`
- `DirectoryListError` é a única exceção não fatal: o Stage Gate a rebaixa
  para a decisão conservadora de reexecutar a etapa
- Exceções carregam apenas dados estruturados (serializáveis) em `details`
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional


@dataclass(frozen=True, eq=False)
class IngestException(Exception):
    """Base class para exceções internas do orquestrador.

    Importante:
    - Sempre carregar dados estruturados em `details`
    - Não embedar stack trace em payloads de erro
    - Mensagem deve ser curta e humana
    """

    message: str
    details: Dict[str, Any] = field(default_factory=dict)
    hint: Optional[str] = None

    def __str__(self) -> str:
        return self.message


# ---------------------------------------------------------------------------
# Configuração
# ---------------------------------------------------------------------------

class ConfigurationError(IngestException):
    """Entrada obrigatória de ambiente/configuração ausente ou inválida."""


# ---------------------------------------------------------------------------
# Fetch
# ---------------------------------------------------------------------------

class FetchError(IngestException):
    """Download do dataset falhou (resposta não-200 ou falha de transporte)."""

    @property
    def status_code(self) -> Optional[int]:
        return self.details.get("status_code")

    @property
    def body(self) -> Optional[str]:
        return self.details.get("body")


# ---------------------------------------------------------------------------
# Extract
# ---------------------------------------------------------------------------

class ExtractionError(IngestException):
    """Falha de leitura do arquivo zip ou entrada insegura (path traversal)."""


# ---------------------------------------------------------------------------
# Partition
# ---------------------------------------------------------------------------

class ExternalJobError(IngestException):
    """Processo externo terminou com exit code não-zero (ou sem produzir saída)."""

    @property
    def exit_code(self) -> Optional[int]:
        return self.details.get("exit_code")


# ---------------------------------------------------------------------------
# Stage Gate (não fatal)
# ---------------------------------------------------------------------------

class DirectoryListError(IngestException):
    """Falha ao listar o diretório de saída de uma etapa.

    Nunca interrompe a run: o Stage Gate registra um warning e trata
    a saída como ausente.
    """
