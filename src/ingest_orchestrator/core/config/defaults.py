# src/ingest_orchestrator/core/config/defaults.py
"""
Configuração embutida do orquestrador.

Reproduz o layout fixo de diretórios (`data/`, `data/extracted/`,
`data/partitioned/`), o endpoint do dataset e o comando do job de
particionamento. Arquivos YAML/JSON apenas sobrescrevem estas chaves.

Placeholders aceitos em `partition.command`:
    - {input_dir}  → diretório extraído
    - {output_dir} → diretório de staging onde o job deve escrever
    - {base_dir}   → diretório base de trabalho
"""

from typing import Any, Dict

DEFAULT_CONFIG: Dict[str, Any] = {
    "paths": {
        "base_dir": "data",
        "archive_name": "brazilian-ecommerce",
        "extracted_dir": "extracted",
        "partitioned_dir": "partitioned",
    },
    "fetch": {
        "url": "https://www.kaggle.com/api/v1/datasets/download/olistbr/brazilian-ecommerce",
        "token_env": "KAGGLE_API_TOKEN",
        "timeout_seconds": 300,
        "chunk_size": 8192,
    },
    "extract": {
        "buffer_size": 8192,
    },
    "partition": {
        "command": [
            "java",
            "-Xmx256m",
            "-jar",
            "jars/java-data-partitioning-job-1.0.0.jar",
            "{input_dir}",
            "{output_dir}",
        ],
        "cwd": None,
    },
    "logging": {
        "level": "INFO",
        "dir": "logs",
        "file": "orchestrator.log",
    },
    "traceability": {
        "manifest": True,
        "runs_dir": "runs",
    },
}
