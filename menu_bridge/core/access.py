"""Role based visibility of custom menu entries."""
from __future__ import annotations

from typing import Iterable

from menu_bridge.core.config import settings
from menu_bridge.core.models_menu import Viewer


def can_view(
    allowed_roles: Iterable[str],
    viewer: Viewer | None,
    *,
    admin_role: str | None = None,
) -> bool:
    """Return ``True`` when ``viewer`` may see an entry restricted to ``allowed_roles``.

    An empty role list is visible to everyone. Administrators bypass the
    restriction unless the administrator role is itself one of the allowed
    roles, in which case the plain intersection applies.
    """

    allowed = frozenset(allowed_roles)
    if not allowed:
        return True
    if viewer is None or not viewer.is_authenticated:
        return False
    admin = admin_role or settings.MENU_ADMIN_ROLE
    if admin in viewer.roles and admin not in allowed:
        return True
    return not allowed.isdisjoint(viewer.roles)


__all__ = ["can_view"]
