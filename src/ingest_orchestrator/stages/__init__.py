# src/ingest_orchestrator/stages/__init__.py
"""
Etapas concretas do pipeline de ingestão.

    - fetch     → download autenticado do arquivo zip do dataset
    - extract   → extração segura (proteção contra Zip Slip)
    - partition → job externo de particionamento, com finalização atômica
"""

from .extract import extract_archive
from .fetch import DatasetFetcher, read_token
from .partition import ProcessSpec, run_partition_job, run_process

__all__ = [
    "DatasetFetcher",
    "ProcessSpec",
    "extract_archive",
    "read_token",
    "run_partition_job",
    "run_process",
]
