"""Chargement minimaliste des variables depuis le fichier .env."""
from __future__ import annotations

import os
from pathlib import Path
import threading

_loaded = False
_lock = threading.Lock()

ENV_PATH = Path(__file__).resolve().parents[2] / ".env"


def _parse_line(line: str) -> tuple[str, str] | None:
    stripped = line.strip()
    if not stripped or stripped.startswith("#") or "=" not in stripped:
        return None
    key, value = stripped.split("=", 1)
    key = key.strip()
    value = value.strip()
    if len(value) >= 2 and value[0] == value[-1] and value[0] in ("'", '"'):
        value = value[1:-1]
    if not key:
        return None
    return key, value


def load_env(env_path: Path | None = None) -> None:
    """Charge les variables du fichier .env à la racine du dépôt si présent.

    Les variables déjà définies dans l'environnement ne sont jamais écrasées.
    """
    global _loaded
    if _loaded and env_path is None:
        return
    with _lock:
        if _loaded and env_path is None:
            return
        path = env_path or ENV_PATH
        if path.exists():
            for line in path.read_text(encoding="utf-8").splitlines():
                parsed = _parse_line(line)
                if parsed:
                    os.environ.setdefault(*parsed)
        if env_path is None:
            _loaded = True
