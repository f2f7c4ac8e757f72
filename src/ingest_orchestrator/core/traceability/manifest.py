# src/ingest_orchestrator/core/traceability/manifest.py
"""
Manifest de run — registro forense de uma execução do pipeline.

Estrutura:
    - run: run_id, started_at, finished_at, status, version, meta
    - inputs: config_hash
    - stages: estado final de cada etapa (status, duração, erro)
    - events: Event Log ordenado

Decisões arquiteturais:
    - O Manifest não emite eventos implicitamente
    - Timestamps são sempre UTC ISO 8601
    - A gravação é atômica (arquivo temporário + rename)

Limites explícitos:
    - Não decide políticas de execução
    - Não é consultado pelo Stage Gate (a presença das saídas é a fonte de verdade)
"""

from __future__ import annotations

import json
import os
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional, Union


def _iso(dt: datetime) -> str:
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc).isoformat()


@dataclass
class RunManifest:
    run: Dict[str, Any]
    inputs: Dict[str, Any]
    stages: Dict[str, Dict[str, Any]] = field(default_factory=dict)
    events: List[Dict[str, Any]] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "run": dict(self.run),
            "inputs": dict(self.inputs),
            "stages": {k: dict(v) for k, v in self.stages.items()},
            "events": [dict(e) for e in self.events],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "RunManifest":
        return cls(
            run=dict(data.get("run", {})),
            inputs=dict(data.get("inputs", {})),
            stages={k: dict(v) for k, v in (data.get("stages", {}) or {}).items()},
            events=[dict(e) for e in (data.get("events", []) or [])],
        )


def create_manifest(
    *,
    run_id: str,
    started_at: datetime,
    version: str,
    config_hash: str,
    meta: Optional[Dict[str, Any]] = None,
) -> RunManifest:
    """Cria o Manifest inicial (status in_progress, sem etapas nem eventos)."""
    return RunManifest(
        run={
            "run_id": run_id,
            "started_at": _iso(started_at),
            "finished_at": None,
            "status": "in_progress",
            "version": version,
            "meta": dict(meta or {}),
        },
        inputs={"config_hash": config_hash},
    )


def add_event(
    manifest: RunManifest,
    *,
    event_type: str,
    ts: datetime,
    stage: Optional[str] = None,
    payload: Optional[Dict[str, Any]] = None,
) -> None:
    manifest.events.append(
        {
            "event_type": event_type,
            "ts": _iso(ts),
            "stage": stage,
            "payload": dict(payload or {}),
        }
    )


def record_stage(
    manifest: RunManifest,
    *,
    stage: str,
    status: str,
    ts: datetime,
    duration_ms: int = 0,
    summary: str = "",
    error: Optional[Dict[str, Any]] = None,
) -> None:
    """Registra o estado final de uma etapa e o evento correspondente."""
    entry: Dict[str, Any] = {
        "status": status,
        "finished_at": _iso(ts),
        "duration_ms": int(duration_ms),
        "summary": summary,
    }
    if error is not None:
        entry["error"] = dict(error)
    manifest.stages[stage] = entry
    add_event(
        manifest,
        event_type=f"stage_{status}",
        ts=ts,
        stage=stage,
        payload={"error": error} if error is not None else None,
    )


def finalize_manifest(manifest: RunManifest, *, status: str, ts: datetime) -> None:
    manifest.run["status"] = status
    manifest.run["finished_at"] = _iso(ts)
    add_event(manifest, event_type=f"run_{status}", ts=ts)


def save_manifest(manifest: RunManifest, path: Union[str, Path]) -> Path:
    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    tmp = target.with_name(target.name + ".tmp")
    with tmp.open("w", encoding="utf-8") as f:
        json.dump(manifest.to_dict(), f, ensure_ascii=False, indent=2, sort_keys=True)
    os.replace(tmp, target)
    return target


def load_manifest(path: Union[str, Path]) -> RunManifest:
    with Path(path).open("r", encoding="utf-8") as f:
        return RunManifest.from_dict(json.load(f))
