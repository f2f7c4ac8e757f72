# src/ingest_orchestrator/stages/fetch.py
"""Etapa fetch: download autenticado do dataset.

Responsabilidades:
- ler o bearer token do ambiente (ausente/vazio → ConfigurationError, antes de qualquer I/O de rede)
- executar GET autenticado no endpoint fixo do dataset
- exigir HTTP 200; qualquer outro status → FetchError com status e corpo
- gravar o corpo em streaming em `<destino>.part` e renomear para o destino só ao final

Limites explícitos:
- NÃO faz retry nem backoff
- NÃO valida o conteúdo do zip (responsabilidade da etapa extract)
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Mapping, Optional, Union

import requests

from ingest_orchestrator.core.errors import fetch_failed, missing_token

logger = logging.getLogger("ingest_orchestrator.fetch")

DEFAULT_CHUNK_SIZE = 8192
# corpo de erro é truncado para não inflar logs/manifest
_MAX_ERROR_BODY = 2000


def read_token(env: Mapping[str, str], env_var: str) -> str:
    """Retorna o token de `env[env_var]` ou levanta ConfigurationError se ausente/vazio."""
    token = (env.get(env_var) or "").strip()
    if not token:
        raise missing_token(env_var=env_var)
    return token


class DatasetFetcher:
    """Cliente HTTP mínimo para o endpoint de download do dataset."""

    def __init__(
        self,
        url: str,
        *,
        timeout: Optional[float] = 300,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
        session: Optional[requests.Session] = None,
    ):
        self.url = url
        self.timeout = timeout
        self.chunk_size = int(chunk_size)
        self.session = session or requests.Session()

    def download(self, destination: Union[str, Path], token: str) -> Path:
        """
        Baixa o dataset para `destination` usando `token` como bearer.

        Raises:
            FetchError: resposta não-200 ou falha de transporte.
            OSError: falha ao gravar em disco.
        """
        dest = Path(destination)
        part = dest.with_name(dest.name + ".part")
        headers = {"Authorization": f"Bearer {token}"}

        try:
            response = self.session.get(self.url, headers=headers, stream=True, timeout=self.timeout)
        except requests.RequestException as exc:
            raise fetch_failed(url=self.url, status_code=None, body=str(exc)) from exc

        with response:
            if response.status_code != 200:
                body = (response.text or "")[:_MAX_ERROR_BODY]
                raise fetch_failed(url=self.url, status_code=response.status_code, body=body)

            dest.parent.mkdir(parents=True, exist_ok=True)
            written = 0
            try:
                with part.open("wb") as f:
                    for chunk in response.iter_content(chunk_size=self.chunk_size):
                        if chunk:
                            f.write(chunk)
                            written += len(chunk)
            except requests.RequestException as exc:
                raise fetch_failed(url=self.url, status_code=200, body=str(exc)) from exc

        os.replace(part, dest)
        logger.info("Dataset downloaded to: %s (%d bytes)", dest, written)
        return dest
