# src/ingest_orchestrator/cli.py
"""
Ponto de entrada de linha de comando.

Uso:
    ingest-orchestrator [--config PATH] [--local-config PATH]
                        [--base-dir PATH] [--log-level LEVEL]
    python -m ingest_orchestrator ...

Exit codes:
    0 → todas as etapas concluídas ou puladas
    1 → qualquer erro fatal (logado antes de sair)
    2 → argumentos inválidos (argparse)
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from dotenv import find_dotenv, load_dotenv

from ingest_orchestrator.core.config import ConfigError, deep_merge, load_config
from ingest_orchestrator.pipeline import build_orchestrator

LOG_FORMAT = "%(asctime)s %(levelname)-7s %(name)s - %(message)s"


def configure_logging(config: Dict[str, Any]) -> None:
    """Instala handler de console e, se `logging.dir` estiver definido, um handler de arquivo."""
    log_cfg = config.get("logging", {}) or {}
    level = getattr(logging, str(log_cfg.get("level") or "INFO").upper(), logging.INFO)

    handlers: List[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    log_dir = log_cfg.get("dir")
    if log_dir:
        path = Path(log_dir)
        path.mkdir(parents=True, exist_ok=True)
        handlers.append(
            logging.FileHandler(path / (log_cfg.get("file") or "orchestrator.log"), encoding="utf-8")
        )

    logging.basicConfig(level=level, format=LOG_FORMAT, handlers=handlers, force=True)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(
        prog="ingest-orchestrator",
        description="Download, extract and partition the dataset, skipping stages already done.",
    )
    p.add_argument("--config", "-c", help="YAML/JSON configuration file (overrides built-in defaults)")
    p.add_argument("--local-config", help="Optional local overrides, ignored if missing")
    p.add_argument("--base-dir", help="Working directory for archive and outputs (default: data)")
    p.add_argument("--log-level", help="Logging level (default: INFO)")
    return p.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    # .env do diretório corrente (ou ancestrais); variáveis já exportadas prevalecem
    load_dotenv(find_dotenv(usecwd=True))

    try:
        config = load_config(defaults_path=args.config, local_path=args.local_config)
    except ConfigError as e:
        logging.basicConfig(level=logging.ERROR, format=LOG_FORMAT)
        logging.getLogger("ingest_orchestrator").error("Invalid configuration: %s", e)
        return 1

    overrides: Dict[str, Any] = {}
    if args.base_dir:
        overrides.setdefault("paths", {})["base_dir"] = args.base_dir
    if args.log_level:
        overrides.setdefault("logging", {})["level"] = args.log_level
    if overrides:
        config = deep_merge(config, overrides)

    configure_logging(config)
    outcome = build_orchestrator(config).run()
    return outcome.exit_code


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
