"""Merge of the A and B account menus with the administrator's custom entries.

Both listings run the same pipeline, parameterised by the primary source:

1. primary native entries (B entries listed in the suppression set are dropped),
2. custom entries scoped into the listing, visible to the viewer and resolvable,
3. native entries of the other source (A wins on key collisions),
4. a final scope check on every ``custom-<index>`` key,
5. a stable sort on ``order``.

A listing is never reconciled inside its own reconciliation: a probe that
calls back into the reconciler for the listing being built gets an empty
listing instead of recursing.
"""
from __future__ import annotations

import logging
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Iterator, Optional

from menu_bridge.core import menu_registry
from menu_bridge.core.access import can_view
from menu_bridge.core.models_menu import (
    Configuration,
    Listing,
    MenuItem,
    NativeAItem,
    Viewer,
    custom_key,
)
from menu_bridge.services.menu.sources import MenuSources
from menu_bridge.services.menu.targets import TargetResolver

logger = logging.getLogger(__name__)

_active_listings: ContextVar[frozenset[Listing]] = ContextVar(
    "menu_bridge_active_listings", default=frozenset()
)


@contextmanager
def _reconciling(listing: Listing) -> Iterator[None]:
    token = _active_listings.set(_active_listings.get() | {listing})
    try:
        yield
    finally:
        _active_listings.reset(token)


def is_reconciling(listing: Listing) -> bool:
    return listing in _active_listings.get()


def humanize_key(key: str) -> str:
    return " ".join(word[:1].upper() + word[1:] for word in key.replace("_", " ").split(" "))


class MenuReconciler:
    def __init__(
        self,
        sources: MenuSources,
        *,
        targets: TargetResolver | None = None,
        admin_role: str | None = None,
    ) -> None:
        self._sources = sources
        self._targets = targets or TargetResolver(sources.router, sources.vendors)
        self._admin_role = admin_role

    def reconcile_a(self, config: Configuration, viewer: Viewer) -> list[MenuItem]:
        return self.reconcile(Listing.A, config, viewer)

    def reconcile_b(self, config: Configuration, viewer: Viewer) -> list[MenuItem]:
        return self.reconcile(Listing.B, config, viewer)

    def reconcile(self, listing: Listing, config: Configuration, viewer: Viewer) -> list[MenuItem]:
        if is_reconciling(listing):
            logger.debug("[MENU] Re-entrant reconciliation of listing %s ignored", listing.value)
            return []
        with _reconciling(listing):
            working: dict[str, MenuItem] = {}
            if listing is Listing.A:
                a_natives = self._native_a_items(fallback_start=None)
                working.update(a_natives)
                self._merge_custom_items(working, listing, config, viewer)
                self._merge_b_natives(working, config, exclude=set(a_natives))
            else:
                self._merge_b_natives(working, config, exclude=set())
                self._merge_custom_items(working, listing, config, viewer)
                self._merge_a_natives(working)
            self._drop_out_of_scope(working, listing, config)
        return sorted(working.values(), key=lambda item: item.order)

    def native_a_url(self, key: str) -> Optional[str]:
        """Return the URL of native A entry ``key`` as the A listing would show it."""

        with _reconciling(Listing.A):
            items = list(self._sources.a_probe())
        for raw in items:
            if raw.key == key:
                entry = self._native_a_entry(raw, menu_registry.DEFAULT_ORDER)
                return entry.url if entry else None
        return None

    def custom_item_url(
        self, config: Configuration, index: int, viewer: Viewer
    ) -> Optional[str]:
        spec = config.custom_items.get(index)
        if spec is None or not spec.is_well_formed():
            return None
        if not can_view(spec.allowed_roles, viewer, admin_role=self._admin_role):
            return None
        return self._targets.resolve(spec, viewer)

    def _native_a_entry(self, raw: NativeAItem, fallback_order: int) -> Optional[MenuItem]:
        url = raw.url
        if not url and raw.route:
            url = self._sources.router.url_for(raw.route, {}) or ""
        if not url:
            logger.debug("[MENU] Native A entry %s has no URL", raw.key)
            return None
        return MenuItem(
            key=raw.key,
            label=raw.label or humanize_key(raw.key),
            url=url,
            order=raw.order if raw.order is not None else fallback_order,
        )

    def _native_a_items(self, fallback_start: Optional[int]) -> dict[str, MenuItem]:
        # fallback_start=None gives hint-less entries the default sentinel,
        # otherwise a running counter starting at fallback_start.
        items: dict[str, MenuItem] = {}
        counter = fallback_start
        for raw in self._sources.a_probe():
            fallback = menu_registry.DEFAULT_ORDER if counter is None else counter
            entry = self._native_a_entry(raw, fallback)
            if entry is None:
                continue
            items[entry.key] = entry
            if counter is not None:
                counter += menu_registry.NATIVE_A_CROSS_ORDER_STEP
        return items

    def _merge_a_natives(self, working: dict[str, MenuItem]) -> None:
        for key, entry in self._native_a_items(menu_registry.NATIVE_A_CROSS_ORDER_START).items():
            if key in working and key.startswith(menu_registry.CUSTOM_KEY_PREFIX):
                continue
            working[key] = entry

    def _merge_b_natives(
        self, working: dict[str, MenuItem], config: Configuration, *, exclude: set[str]
    ) -> None:
        probe = self._sources.b_probe
        order = menu_registry.NATIVE_B_ORDER_START
        for raw in probe.items():
            if raw.key in config.suppressed_b_items or raw.key in exclude or raw.key in working:
                continue
            url = probe.url_for_key(raw.key)
            if not url:
                continue
            working[raw.key] = MenuItem(
                key=raw.key,
                label=raw.label or humanize_key(raw.key),
                url=url,
                order=order,
            )
            order += menu_registry.NATIVE_B_ORDER_STEP

    def _merge_custom_items(
        self,
        working: dict[str, MenuItem],
        listing: Listing,
        config: Configuration,
        viewer: Viewer,
    ) -> None:
        counter = menu_registry.CUSTOM_ORDER_START
        for index, spec in config.custom_items.items():
            if not spec.is_well_formed():
                logger.debug("[MENU] Malformed custom item %s skipped", index)
                continue
            if not spec.scope.includes(listing):
                continue
            if not can_view(spec.allowed_roles, viewer, admin_role=self._admin_role):
                continue
            url = self._targets.resolve(spec, viewer)
            if not url:
                continue
            key = custom_key(index)
            working[key] = MenuItem(
                key=key,
                label=spec.label,
                url=url,
                order=spec.position if spec.position else counter,
            )
            counter += menu_registry.CUSTOM_ORDER_STEP

    @staticmethod
    def _drop_out_of_scope(
        working: dict[str, MenuItem], listing: Listing, config: Configuration
    ) -> None:
        for key in list(working):
            found = config.custom_item_for_key(key)
            if found is not None and not found[1].scope.includes(listing):
                del working[key]


__all__ = ["MenuReconciler", "humanize_key", "is_reconciling"]
