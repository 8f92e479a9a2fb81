"""Point lookups of account menu endpoint URLs."""
from __future__ import annotations

import logging
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Iterator

from menu_bridge.core.models_menu import Configuration, PageContext, Viewer, parse_custom_key
from menu_bridge.services.menu.reconciler import MenuReconciler

logger = logging.getLogger(__name__)

_lookup_in_progress: ContextVar[bool] = ContextVar("menu_bridge_lookup_in_progress", default=False)


@contextmanager
def _lookup_guard() -> Iterator[None]:
    token = _lookup_in_progress.set(True)
    try:
        yield
    finally:
        _lookup_in_progress.reset(token)


def lookup_in_progress() -> bool:
    return _lookup_in_progress.get()


class EndpointLookupBridge:
    """Answers single endpoint URL queries consistently with the reconciled listings.

    The in-progress flag lives in a :class:`contextvars.ContextVar`, so it is
    private to the current thread or task and restored on every exit path.
    """

    def __init__(self, reconciler: MenuReconciler) -> None:
        self._reconciler = reconciler

    def url_for(
        self,
        endpoint: str,
        input_url: str,
        viewer: Viewer,
        context: PageContext,
        config: Configuration,
    ) -> str:
        if not context.is_account_domain_page:
            return input_url
        if lookup_in_progress():
            logger.debug("[MENU-URL] Re-entrant lookup of %s passed through", endpoint)
            return input_url
        with _lookup_guard():
            return self._resolve(endpoint, input_url, viewer, config)

    def _resolve(self, endpoint: str, input_url: str, viewer: Viewer, config: Configuration) -> str:
        index = parse_custom_key(endpoint)
        if index is not None and index in config.custom_items:
            url = self._reconciler.custom_item_url(config, index, viewer)
            if url:
                return url
        native_url = self._reconciler.native_a_url(endpoint)
        if native_url:
            return native_url
        return input_url


__all__ = ["EndpointLookupBridge", "lookup_in_progress"]
