"""Capabilities injected by the host into the menu engine."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, Mapping, Optional, Protocol

from menu_bridge.core.models_menu import NativeAItem, NativeBItem


class ANativeMenuProbe(Protocol):
    def __call__(self) -> Iterable[NativeAItem]: ...


class BNativeMenuProbe(Protocol):
    def items(self) -> Iterable[NativeBItem]: ...

    def url_for_key(self, key: str) -> Optional[str]: ...


class RouteResolver(Protocol):
    def url_for(self, route: str, params: Mapping[str, Any]) -> Optional[str]: ...


class VendorDirectory(Protocol):
    def vendor_id_for(self, user_id: int) -> Optional[int]: ...


@dataclass(frozen=True)
class MenuSources:
    a_probe: ANativeMenuProbe
    b_probe: BNativeMenuProbe
    router: RouteResolver
    vendors: Optional[VendorDirectory] = None


__all__ = [
    "ANativeMenuProbe",
    "BNativeMenuProbe",
    "MenuSources",
    "RouteResolver",
    "VendorDirectory",
]
