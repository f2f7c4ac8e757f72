# src/ingest_orchestrator/core/config/hashing.py
"""
Hash canônico da configuração efetiva.

O hash identifica estruturalmente a configuração usada em uma run e é
gravado no Manifest. Serialização JSON com chaves ordenadas, separadores
compactos, UTF-8 e SHA-256.
"""

import hashlib
import json
from typing import Any, Dict


def compute_config_hash(config: Dict[str, Any]) -> str:
    """Retorna o SHA-256 hexadecimal (64 caracteres) da configuração."""
    if not isinstance(config, dict):
        raise TypeError(
            f"Config para hashing deve ser dict, recebido: {type(config).__name__}"
        )

    canonical_json = json.dumps(
        config,
        sort_keys=True,
        separators=(",", ":"),
        ensure_ascii=False,
        default=str,
    )
    return hashlib.sha256(canonical_json.encode("utf-8")).hexdigest()
