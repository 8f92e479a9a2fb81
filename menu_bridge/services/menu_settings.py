"""Assainissement des réglages du menu avant leur passage au moteur."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Mapping

from pydantic import ValidationError

from menu_bridge.core import models
from menu_bridge.core.config import settings
from menu_bridge.core.models_menu import Configuration, CustomMenuItemSpec

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SettingsIssue:
    index: int | None
    field: str | None
    message: str


@dataclass(frozen=True)
class SanitizedSettings:
    configuration: Configuration
    errors: list[SettingsIssue] = field(default_factory=list)


def _issues_from_error(index: int, exc: ValidationError) -> list[SettingsIssue]:
    issues: list[SettingsIssue] = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()))
        message = str(error.get("msg", "Valeur invalide"))
        if message.startswith("Value error, "):
            message = message[len("Value error, "):]
        issues.append(SettingsIssue(index=index, field=location or None, message=message))
    return issues


def _label_of(item: Any) -> str:
    if isinstance(item, Mapping):
        return str(item.get("label") or "")
    return ""


def sanitize_settings(raw: Mapping[str, Any] | models.MenuSettingsPayload | None) -> SanitizedSettings:
    """Valide les réglages bruts élément par élément.

    Un élément invalide est ignoré et signalé; les autres sont conservés avec
    leur index d'origine.
    """

    if isinstance(raw, models.MenuSettingsPayload):
        payload = raw
    else:
        payload = models.MenuSettingsPayload.model_validate(dict(raw or {}))

    custom_items: dict[int, CustomMenuItemSpec] = {}
    errors: list[SettingsIssue] = []
    for index, item in payload.custom_items.items():
        try:
            parsed = models.CustomMenuItemPayload.model_validate(item)
        except ValidationError as exc:
            item_issues = _issues_from_error(index, exc)
            for issue in item_issues:
                logger.warning(
                    "[MENU-SETTINGS] Custom item %s (%r) rejected: %s",
                    index,
                    _label_of(item),
                    issue.message,
                )
            errors.extend(item_issues)
            continue
        if not parsed.roles and settings.MENU_DEBUG:
            logger.warning(
                "[MENU-SETTINGS] Custom menu item %r has no roles selected, visible to all",
                parsed.label,
            )
        custom_items[index] = parsed.to_spec()

    configuration = Configuration(
        suppressed_b_items=frozenset(payload.suppressed_b_items),
        custom_items=custom_items,
    )
    return SanitizedSettings(configuration=configuration, errors=errors)


def settings_warnings(configuration: Configuration) -> list[str]:
    return [
        f"L'élément « {spec.label} » n'a aucun rôle sélectionné et sera visible par tous les utilisateurs."
        for spec in configuration.custom_items.values()
        if not spec.allowed_roles
    ]


def dump_settings(configuration: Configuration) -> dict[str, Any]:
    """Retourne la forme persistée d'une configuration."""

    return models.MenuSettingsOut(
        suppressed_b_items=sorted(configuration.suppressed_b_items),
        custom_items={
            index: models.CustomMenuItemPayload.from_spec(spec)
            for index, spec in configuration.custom_items.items()
        },
    ).model_dump(exclude_none=True)


def load_configuration(raw: Mapping[str, Any] | None) -> Configuration:
    return sanitize_settings(raw).configuration


__all__ = [
    "SanitizedSettings",
    "SettingsIssue",
    "dump_settings",
    "load_configuration",
    "sanitize_settings",
    "settings_warnings",
]
