"""Configuration statique du moteur de menus."""
from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from menu_bridge.core import menu_registry
from menu_bridge.core.env_loader import load_env

_TRUE_VALUES = {"1", "true", "yes", "on", "y", "t"}
_FALSE_VALUES = {"0", "false", "no", "off", "n", "f"}

PROJECT_ROOT = Path(__file__).resolve().parents[2]


def _get_env_flag(name: str, default: bool = False) -> bool:
    """Retourne une valeur booléenne à partir d'une variable d'environnement."""

    value = os.getenv(name)
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in _TRUE_VALUES:
        return True
    if normalized in _FALSE_VALUES:
        return False
    return default


def _get_env_str(name: str, default: str) -> str:
    value = os.getenv(name)
    if value is None:
        return default
    stripped = value.strip()
    return stripped or default


@dataclass(frozen=True)
class Settings:
    """Paramètres globaux lus depuis l'environnement."""

    MENU_ADMIN_ROLE: str = menu_registry.DEFAULT_ADMINISTRATOR_ROLE
    MENU_DEBUG: bool = False
    MENU_LOG_DIR: Path = PROJECT_ROOT / "logs"


def load_settings() -> Settings:
    load_env()
    return Settings(
        MENU_ADMIN_ROLE=_get_env_str("MENU_ADMIN_ROLE", menu_registry.DEFAULT_ADMINISTRATOR_ROLE),
        MENU_DEBUG=_get_env_flag("MENU_DEBUG", default=False),
        MENU_LOG_DIR=Path(_get_env_str("MENU_LOG_DIR", str(PROJECT_ROOT / "logs"))),
    )


settings = load_settings()
