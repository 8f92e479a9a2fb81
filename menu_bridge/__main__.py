"""Point d'entrée ``python -m menu_bridge``: lance l'API FastAPI avec uvicorn."""
from __future__ import annotations

import argparse
import logging
from typing import Sequence

import uvicorn

LOGGER = logging.getLogger(__name__)


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Lance l'API des menus de compte réconciliés",
    )
    parser.add_argument(
        "--port",
        type=int,
        default=8000,
        help="Port sur lequel exposer l'API (défaut: 8000)",
    )
    parser.add_argument(
        "--host",
        default="127.0.0.1",
        help="Adresse d'écoute d'uvicorn (défaut: 127.0.0.1)",
    )
    parser.add_argument(
        "--reload",
        action="store_true",
        help="Recharge automatiquement le serveur en développement",
    )
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    args = parse_args(argv)
    LOGGER.info("[MENU] Starting API on %s:%s", args.host, args.port)
    uvicorn.run("menu_bridge.app:app", host=args.host, port=args.port, reload=args.reload)
    return 0


if __name__ == "__main__":  # pragma: no cover - point d'entrée standard
    raise SystemExit(main())
