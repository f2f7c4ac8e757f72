"""
Ingest Orchestrator — estruturas canônicas de erro.

Erros fatais de uma run são registrados no Manifest como payloads
serializáveis. Este módulo define esse payload, o catálogo de códigos
estáveis e o mapeamento de exceções para payload.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict, Optional

from .exceptions import (
    ConfigurationError,
    ExternalJobError,
    ExtractionError,
    FetchError,
    IngestException,
)


# ---------------------------------------------------------------------------
# Payload canônico
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class IngestErrorPayload:
    """
    Payload canônico de erro de uma etapa.

    Campos:
    - type: código estável do erro (não é texto livre)
    - message: mensagem curta, humana e objetiva
    - stage: nome da etapa que falhou
    - details: dados estruturados relevantes para diagnóstico
    - hint: ação sugerida ao operador
    """

    type: str
    message: str
    stage: Optional[str]
    details: Dict[str, Any]
    hint: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


# ---------------------------------------------------------------------------
# Catálogo canônico de tipos de erro
# ---------------------------------------------------------------------------

CONFIGURATION_ERROR = "CONFIGURATION_ERROR"
FETCH_ERROR = "FETCH_ERROR"
EXTRACTION_ERROR = "EXTRACTION_ERROR"
EXTERNAL_JOB_ERROR = "EXTERNAL_JOB_ERROR"
UNEXPECTED_ERROR = "UNEXPECTED_ERROR"

_CODES = {
    ConfigurationError: CONFIGURATION_ERROR,
    FetchError: FETCH_ERROR,
    ExtractionError: EXTRACTION_ERROR,
    ExternalJobError: EXTERNAL_JOB_ERROR,
}


def exception_to_payload(exc: BaseException, *, stage: Optional[str]) -> IngestErrorPayload:
    """Converte uma exceção em IngestErrorPayload (sem stack trace).

    Regras:
    - IngestException: código do catálogo + details/hint da própria exceção
    - Outras exceções: UNEXPECTED_ERROR com a classe da exceção em `details`
    """
    if isinstance(exc, IngestException):
        code = next(
            (c for cls, c in _CODES.items() if isinstance(exc, cls)),
            UNEXPECTED_ERROR,
        )
        return IngestErrorPayload(
            type=code,
            message=str(exc) or "Erro de execução",
            stage=stage,
            details=dict(exc.details or {}),
            hint=exc.hint,
        )

    return IngestErrorPayload(
        type=UNEXPECTED_ERROR,
        message=str(exc) or "Erro inesperado durante execução",
        stage=stage,
        details={"exception_class": exc.__class__.__name__},
        hint="Verifique o log técnico da run",
    )


# ---------------------------------------------------------------------------
# Helpers de fábrica
# ---------------------------------------------------------------------------

def missing_token(*, env_var: str) -> ConfigurationError:
    return ConfigurationError(
        message=f"{env_var} environment variable not set",
        details={"env_var": env_var},
        hint=f"Exporte {env_var} (ou declare-o em .env) antes de executar o pipeline.",
    )


def fetch_failed(*, url: str, status_code: Optional[int], body: Optional[str]) -> FetchError:
    if status_code is None:
        message = f"Download failed for {url}"
    elif body:
        message = f"Dataset API returned {status_code}: {body}"
    else:
        message = f"Dataset API returned {status_code}"
    return FetchError(
        message=message,
        details={"url": url, "status_code": status_code, "body": body},
        hint="Verifique o token e a disponibilidade do endpoint do dataset.",
    )


def unsafe_entry(*, entry_name: str, dest_dir: str) -> ExtractionError:
    return ExtractionError(
        message=f"unsafe entry: {entry_name}",
        details={"entry": entry_name, "dest_dir": dest_dir},
        hint="O arquivo zip contém caminhos fora do diretório de destino e não pode ser extraído.",
    )


def external_job_failed(*, command: list, exit_code: int, reason: Optional[str] = None) -> ExternalJobError:
    message = reason or f"External job failed with exit code: {exit_code}"
    return ExternalJobError(
        message=message,
        details={"command": list(command), "exit_code": exit_code},
        hint="Consulte a saída do job acima; a etapa será reexecutada na próxima run.",
    )
