"""Wiring of the menu engine to a host application."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Mapping

from fastapi import FastAPI, Request

from menu_bridge.core.models_menu import Configuration, PageContext, Viewer
from menu_bridge.services.menu.endpoints import EndpointLookupBridge
from menu_bridge.services.menu.reconciler import MenuReconciler
from menu_bridge.services.menu.sources import MenuSources
from menu_bridge.services.menu_settings import load_configuration

SettingsLoader = Callable[[], Mapping[str, Any] | None]
ViewerProvider = Callable[[Request], Viewer]
PageContextProvider = Callable[[Request], PageContext]


def _anonymous_viewer(_request: Request) -> Viewer:
    return Viewer.anonymous()


def _account_page_context(_request: Request) -> PageContext:
    return PageContext(is_account_domain_page=True)


@dataclass
class MenuRuntime:
    sources: MenuSources
    settings_loader: SettingsLoader
    viewer_provider: ViewerProvider = _anonymous_viewer
    page_context_provider: PageContextProvider = _account_page_context
    admin_role: str | None = None
    reconciler: MenuReconciler = field(init=False)
    bridge: EndpointLookupBridge = field(init=False)

    def __post_init__(self) -> None:
        self.reconciler = MenuReconciler(self.sources, admin_role=self.admin_role)
        self.bridge = EndpointLookupBridge(self.reconciler)

    def configuration(self) -> Configuration:
        return load_configuration(self.settings_loader())


def install_runtime(app: FastAPI, runtime: MenuRuntime | None) -> None:
    app.state.menu_runtime = runtime


def get_runtime(app: FastAPI) -> MenuRuntime | None:
    return getattr(app.state, "menu_runtime", None)


__all__ = ["MenuRuntime", "get_runtime", "install_runtime"]
