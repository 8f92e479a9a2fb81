"""Resolution of custom menu targets into concrete URLs."""
from __future__ import annotations

import logging
from typing import Any, Callable, Mapping, Optional

from menu_bridge.core import menu_registry
from menu_bridge.core.models_menu import CustomMenuItemSpec, RouteTarget, UrlTarget, Viewer
from menu_bridge.services.menu.sources import RouteResolver, VendorDirectory

logger = logging.getLogger(__name__)

# Returns the route parameters for a viewer, or ``None`` when the viewer lacks
# the entity the route points at.
RouteParamsProvider = Callable[[Viewer, Optional[VendorDirectory]], Optional[dict[str, Any]]]


def vendor_profile_params(
    viewer: Viewer, vendors: Optional[VendorDirectory]
) -> Optional[dict[str, Any]]:
    if vendors is None or viewer.user_id is None:
        return None
    vendor_id = vendors.vendor_id_for(viewer.user_id)
    if vendor_id is None:
        return None
    return {"vendor_id": vendor_id}


DEFAULT_PARAM_PROVIDERS: dict[str, RouteParamsProvider] = {
    menu_registry.VENDOR_PROFILE_ROUTE: vendor_profile_params,
}


class TargetResolver:
    """Turns a custom item target into a URL for the current viewer."""

    def __init__(
        self,
        router: RouteResolver,
        vendors: Optional[VendorDirectory] = None,
        param_providers: Mapping[str, RouteParamsProvider] | None = None,
    ) -> None:
        self._router = router
        self._vendors = vendors
        self._param_providers = dict(
            DEFAULT_PARAM_PROVIDERS if param_providers is None else param_providers
        )

    def resolve(self, spec: CustomMenuItemSpec, viewer: Viewer) -> Optional[str]:
        target = spec.target
        if isinstance(target, UrlTarget):
            return target.url or None
        if isinstance(target, RouteTarget):
            return self.route_url(target.name, viewer)
        return None

    def route_url(self, route: str, viewer: Viewer) -> Optional[str]:
        if not route:
            return None
        params: dict[str, Any] = {}
        provider = self._param_providers.get(route)
        if provider is not None:
            provided = provider(viewer, self._vendors)
            if provided is None:
                logger.debug("[MENU] Route %s has no parameters for viewer %s", route, viewer.user_id)
                return None
            params = provided
        url = self._router.url_for(route, params)
        return url or None


__all__ = ["DEFAULT_PARAM_PROVIDERS", "RouteParamsProvider", "TargetResolver", "vendor_profile_params"]
