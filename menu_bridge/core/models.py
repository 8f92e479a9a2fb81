"""Modèles Pydantic pour la configuration persistée et l'API."""
from __future__ import annotations

import re
from typing import Any, Literal, Optional

from pydantic import (
    AliasChoices,
    BaseModel,
    Field,
    HttpUrl,
    TypeAdapter,
    field_validator,
    model_validator,
)

from menu_bridge.core.models_menu import (
    CustomMenuItemSpec,
    MenuScope,
    RouteTarget,
    UrlTarget,
)

_ABSOLUTE_URL_PATTERN = re.compile(
    r"^(https?://)([\da-z.-]+)\.([a-z]{2,63})(:[0-9]{1,5})?([/\w .-]*)/?$"
)
_HTTP_URL_ADAPTER = TypeAdapter(HttpUrl)

_TYPE_ALIASES: dict[str, str] = {
    "url": "url",
    "route": "route",
    "hivepress_route": "route",
}

_MENU_ALIASES: dict[str, str] = {
    "a": "A",
    "hivepress": "A",
    "b": "B",
    "woocommerce": "B",
    "both": "both",
}


def is_absolute_url(value: str) -> bool:
    if not _ABSOLUTE_URL_PATTERN.match(value):
        return False
    try:
        _HTTP_URL_ADAPTER.validate_python(value)
    except ValueError:
        return False
    return True


def _clean_strings(values: Any) -> list[str]:
    if values is None:
        return []
    if isinstance(values, str):
        values = [values]
    if not isinstance(values, (list, tuple, set, frozenset)):
        raise ValueError("liste de chaînes attendue")
    cleaned: list[str] = []
    seen: set[str] = set()
    for raw in values:
        if raw is None:
            continue
        if not isinstance(raw, (str, int)) or isinstance(raw, bool):
            raise ValueError("liste de chaînes attendue")
        value = str(raw).strip()
        if not value or value in seen:
            continue
        cleaned.append(value)
        seen.add(value)
    return cleaned


class CustomMenuItemPayload(BaseModel):
    label: str = Field(..., min_length=1, max_length=256)
    type: Literal["url", "route"]
    url: Optional[str] = None
    route: Optional[str] = None
    menu: Literal["A", "B", "both"] = "both"
    position: Optional[int] = Field(default=None, ge=0)
    roles: list[str] = Field(default_factory=list)

    @field_validator("label", mode="before")
    @classmethod
    def _strip_label(cls, value: object) -> object:
        return value.strip() if isinstance(value, str) else value

    @field_validator("type", mode="before")
    @classmethod
    def _normalize_type(cls, value: object) -> object:
        if value is None:
            raise ValueError("Type manquant")
        if isinstance(value, str):
            return _TYPE_ALIASES.get(value.strip().lower(), value)
        return value

    @field_validator("url", "route", mode="before")
    @classmethod
    def _strip_target(cls, value: object) -> object:
        if value is None:
            return None
        return str(value).strip() or None

    @field_validator("menu", mode="before")
    @classmethod
    def _normalize_menu(cls, value: object) -> str:
        if isinstance(value, str):
            return _MENU_ALIASES.get(value.strip().lower(), "both")
        return "both"

    @field_validator("position", mode="before")
    @classmethod
    def _absolute_position(cls, value: object) -> Optional[int]:
        if value is None or isinstance(value, bool):
            return None
        if isinstance(value, str):
            value = value.strip()
            if not value:
                return None
        try:
            return abs(int(value))
        except (TypeError, ValueError):
            return None

    @field_validator("roles", mode="before")
    @classmethod
    def _coerce_roles(cls, value: object) -> list[str]:
        return _clean_strings(value)

    @model_validator(mode="after")
    def _ensure_target(self) -> "CustomMenuItemPayload":
        if self.type == "route":
            if not self.route:
                raise ValueError(f"La route de l'élément « {self.label} » ne peut pas être vide")
            self.url = None
        else:
            if not self.url:
                raise ValueError(f"L'URL de l'élément « {self.label} » ne peut pas être vide")
            if not is_absolute_url(self.url):
                raise ValueError(
                    f"URL invalide pour l'élément « {self.label} » (URL absolue attendue, ex. https://example.com)"
                )
            self.route = None
        return self

    def to_spec(self) -> CustomMenuItemSpec:
        target = RouteTarget(self.route) if self.type == "route" else UrlTarget(self.url or "")
        return CustomMenuItemSpec(
            label=self.label,
            target=target,
            scope=MenuScope(self.menu),
            position=self.position,
            allowed_roles=frozenset(self.roles),
        )

    @classmethod
    def from_spec(cls, spec: CustomMenuItemSpec) -> "CustomMenuItemPayload":
        is_route = isinstance(spec.target, RouteTarget)
        return cls(
            label=spec.label,
            type="route" if is_route else "url",
            url=None if is_route else spec.target.url,
            route=spec.target.name if is_route else None,
            menu=spec.scope.value,
            position=spec.position,
            roles=sorted(spec.allowed_roles),
        )


class MenuSettingsPayload(BaseModel):
    """Forme logique des réglages persistés; les éléments restent bruts jusqu'à l'assainissement."""

    suppressed_b_items: list[str] = Field(
        default_factory=list,
        validation_alias=AliasChoices("suppressed_b_items", "suppressedBItems", "woocommerce_items_to_hide"),
    )
    custom_items: dict[int, Any] = Field(
        default_factory=dict,
        validation_alias=AliasChoices("custom_items", "customItems", "custom_menu_items"),
    )

    @field_validator("suppressed_b_items", mode="before")
    @classmethod
    def _coerce_suppressed(cls, value: object) -> list[str]:
        return _clean_strings(value)

    @field_validator("custom_items", mode="before")
    @classmethod
    def _index_items(cls, value: object) -> object:
        if value is None:
            return {}
        if isinstance(value, (list, tuple)):
            return dict(enumerate(value))
        return value


class MenuEntry(BaseModel):
    label: str
    url: str


class EndpointUrlResponse(BaseModel):
    endpoint: str
    url: str


class SettingsIssueOut(BaseModel):
    index: int | None = None
    field: str | None = None
    message: str


class MenuSettingsOut(BaseModel):
    suppressed_b_items: list[str] = Field(default_factory=list)
    custom_items: dict[int, CustomMenuItemPayload] = Field(default_factory=dict)


class SettingsValidationResponse(BaseModel):
    settings: MenuSettingsOut
    errors: list[SettingsIssueOut] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)


class MenuChoices(BaseModel):
    routes: dict[str, str]
    b_endpoints: dict[str, str]
