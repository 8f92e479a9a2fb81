"""Typed in-memory model of the account menus and their administrator settings."""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Mapping, Optional, Union

from menu_bridge.core import menu_registry


class MenuScope(str, Enum):
    """Which reconciled listing(s) a custom item may appear in."""

    A_ONLY = "A"
    B_ONLY = "B"
    BOTH = "both"

    def includes(self, listing: "Listing") -> bool:
        if self is MenuScope.BOTH:
            return True
        if self is MenuScope.A_ONLY:
            return listing is Listing.A
        return listing is Listing.B


class Listing(str, Enum):
    A = "a"
    B = "b"


@dataclass(frozen=True)
class UrlTarget:
    url: str


@dataclass(frozen=True)
class RouteTarget:
    name: str


Target = Union[UrlTarget, RouteTarget]


@dataclass(frozen=True)
class CustomMenuItemSpec:
    label: str
    target: Target
    scope: MenuScope = MenuScope.BOTH
    position: Optional[int] = None
    allowed_roles: frozenset[str] = field(default_factory=frozenset)

    def is_well_formed(self) -> bool:
        if not isinstance(self.label, str) or not self.label.strip():
            return False
        if isinstance(self.target, UrlTarget):
            return bool(self.target.url)
        if isinstance(self.target, RouteTarget):
            return bool(self.target.name)
        return False


@dataclass(frozen=True)
class Configuration:
    """Administrator settings, read-only for the engine.

    ``custom_items`` is keyed by the stable index persisted with each entry;
    the index is part of the derived item key (``custom-<index>``).
    """

    suppressed_b_items: frozenset[str] = field(default_factory=frozenset)
    custom_items: Mapping[int, CustomMenuItemSpec] = field(default_factory=dict)

    def custom_item_for_key(self, key: str) -> tuple[int, CustomMenuItemSpec] | None:
        index = parse_custom_key(key)
        if index is None:
            return None
        spec = self.custom_items.get(index)
        if spec is None:
            return None
        return index, spec


@dataclass(frozen=True)
class MenuItem:
    key: str
    label: str
    url: str
    order: int = menu_registry.DEFAULT_ORDER

    def as_dict(self) -> dict[str, str]:
        return {"label": self.label, "url": self.url}


@dataclass(frozen=True)
class NativeAItem:
    """Raw entry produced by the A-menu provider."""

    key: str
    label: str = ""
    url: str = ""
    route: str = ""
    order: Optional[int] = None


@dataclass(frozen=True)
class NativeBItem:
    """Raw entry produced by the B-menu provider; its URL comes from ``url_for_key``."""

    key: str
    label: str


@dataclass(frozen=True)
class Viewer:
    user_id: Optional[int] = None
    roles: frozenset[str] = field(default_factory=frozenset)
    is_authenticated: bool = False

    @classmethod
    def anonymous(cls) -> "Viewer":
        return cls()


@dataclass(frozen=True)
class PageContext:
    is_account_domain_page: bool = False


def custom_key(index: int) -> str:
    return f"{menu_registry.CUSTOM_KEY_PREFIX}{index}"


def parse_custom_key(key: str) -> int | None:
    if not isinstance(key, str) or not key.startswith(menu_registry.CUSTOM_KEY_PREFIX):
        return None
    suffix = key[len(menu_registry.CUSTOM_KEY_PREFIX):]
    if not (suffix.isascii() and suffix.isdigit()) or str(int(suffix)) != suffix:
        return None
    return int(suffix)


__all__ = [
    "Configuration",
    "CustomMenuItemSpec",
    "Listing",
    "MenuItem",
    "MenuScope",
    "NativeAItem",
    "NativeBItem",
    "PageContext",
    "RouteTarget",
    "Target",
    "UrlTarget",
    "Viewer",
    "custom_key",
    "parse_custom_key",
]
