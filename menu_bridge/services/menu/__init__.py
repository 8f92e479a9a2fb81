"""Account menu reconciliation engine."""
from __future__ import annotations

from menu_bridge.services.menu.endpoints import EndpointLookupBridge
from menu_bridge.services.menu.reconciler import MenuReconciler
from menu_bridge.services.menu.sources import MenuSources
from menu_bridge.services.menu.targets import TargetResolver

__all__ = ["EndpointLookupBridge", "MenuReconciler", "MenuSources", "TargetResolver"]
