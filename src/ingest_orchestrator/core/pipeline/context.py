# src/ingest_orchestrator/core/pipeline/context.py
"""
Contexto de execução de uma run.

Este módulo define o `RunContext`, a estrutura passada a todas as etapas
durante uma run do pipeline.

Responsabilidades do módulo:
    - Manter identidade e configuração resolvida da run
    - Registrar eventos de log estruturados (sempre com `run_id` e `stage`)
    - Encaminhar cada evento ao logger `ingest_orchestrator` (sink configurado)
    - Coletar warnings não fatais por etapa

Invariantes:
    - Cada run possui seu próprio RunContext
    - Eventos são mantidos na ordem em que foram emitidos
    - Warnings são agrupados por `stage`

Limites explícitos:
    - Não executa etapas
    - Não decide skip/run
    - Não configura handlers de logging (responsabilidade da CLI)
"""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Mapping, Optional

logger = logging.getLogger("ingest_orchestrator")

_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warning": logging.WARNING,
    "warn": logging.WARNING,
    "error": logging.ERROR,
    "critical": logging.CRITICAL,
}


def new_run_id(now: Optional[datetime] = None) -> str:
    ts = (now or datetime.now(timezone.utc)).strftime("%Y%m%dT%H%M%SZ")
    return f"run-{ts}-{uuid.uuid4().hex[:8]}"


@dataclass
class RunContext:
    """
    Contexto compartilhado de uma run.

    O `env` é o mapeamento de variáveis de ambiente visto pelas etapas;
    por padrão o Orchestrator injeta `os.environ`, e testes injetam um
    dicionário controlado.
    """
    run_id: str
    created_at: datetime
    config: Dict[str, Any]
    env: Mapping[str, str] = field(default_factory=dict)
    meta: Dict[str, Any] = field(default_factory=dict)

    events: List[Dict[str, Any]] = field(default_factory=list, init=False)
    warnings: Dict[str, List[str]] = field(default_factory=dict, init=False)

    # -----------------------------
    # Logging & warnings
    # -----------------------------
    def log(
        self,
        *,
        stage: Optional[str],
        level: str,
        message: str,
        exc_info: Any = None,
        **extra: Any,
    ) -> None:
        event = {
            "run_id": self.run_id,
            "stage": stage,
            "level": level,
            "message": message,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }
        event.update(extra)
        self.events.append(event)

        prefix = f"[{stage}] " if stage else ""
        suffix = " ".join(f"{k}={v}" for k, v in extra.items())
        logger.log(
            _LEVELS.get(level.lower(), logging.INFO),
            "%s%s%s",
            prefix,
            message,
            f" ({suffix})" if suffix else "",
            exc_info=exc_info,
        )

    def add_warning(self, *, stage: str, message: str) -> None:
        if stage not in self.warnings:
            self.warnings[stage] = []
        self.warnings[stage].append(message)
