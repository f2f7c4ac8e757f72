# src/ingest_orchestrator/core/traceability/__init__.py
"""
Rastreabilidade das runs.

Cada run produz um Manifest JSON com identidade da run, hash da
configuração, estado de cada etapa e o Event Log ordenado.
"""

from .manifest import (
    RunManifest,
    add_event,
    create_manifest,
    finalize_manifest,
    load_manifest,
    record_stage,
    save_manifest,
)

__all__ = [
    "RunManifest",
    "add_event",
    "create_manifest",
    "finalize_manifest",
    "load_manifest",
    "record_stage",
    "save_manifest",
]
