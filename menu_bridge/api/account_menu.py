"""Routes exposant les menus de compte réconciliés."""
from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Body, Depends, HTTPException, Request
from pydantic import ValidationError

from menu_bridge.core import menu_registry, models
from menu_bridge.core.models_menu import Configuration, Listing
from menu_bridge.services import menu_settings
from menu_bridge.services.menu.runtime import MenuRuntime, get_runtime

router = APIRouter()


def require_runtime(request: Request) -> MenuRuntime:
    runtime = get_runtime(request.app)
    if runtime is None:
        raise HTTPException(status_code=503, detail="Menu non configuré")
    return runtime


def _configuration(runtime: MenuRuntime) -> Configuration:
    try:
        return runtime.configuration()
    except ValidationError as exc:
        raise HTTPException(status_code=503, detail="Réglages du menu invalides") from exc


@router.get("/choices", response_model=models.MenuChoices)
def get_menu_choices() -> models.MenuChoices:
    return models.MenuChoices(
        routes=dict(menu_registry.ROUTE_CATALOG),
        b_endpoints=dict(menu_registry.B_ENDPOINT_CATALOG),
    )


@router.get("/endpoint-url", response_model=models.EndpointUrlResponse)
def get_endpoint_url(
    request: Request,
    endpoint: str,
    url: str = "",
    runtime: MenuRuntime = Depends(require_runtime),
) -> models.EndpointUrlResponse:
    normalized = endpoint.strip()
    if not normalized:
        raise HTTPException(status_code=400, detail="endpoint invalide")
    resolved = runtime.bridge.url_for(
        normalized,
        url,
        runtime.viewer_provider(request),
        runtime.page_context_provider(request),
        _configuration(runtime),
    )
    return models.EndpointUrlResponse(endpoint=normalized, url=resolved)


@router.post("/settings/validate", response_model=models.SettingsValidationResponse)
def validate_settings(
    payload: dict[str, Any] = Body(...),
) -> models.SettingsValidationResponse:
    try:
        sanitized = menu_settings.sanitize_settings(payload)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    return models.SettingsValidationResponse(
        settings=models.MenuSettingsOut(**menu_settings.dump_settings(sanitized.configuration)),
        errors=[
            models.SettingsIssueOut(index=issue.index, field=issue.field, message=issue.message)
            for issue in sanitized.errors
        ],
        warnings=menu_settings.settings_warnings(sanitized.configuration),
    )


@router.get("/{listing}", response_model=list[models.MenuEntry])
def get_listing(
    request: Request,
    listing: str,
    runtime: MenuRuntime = Depends(require_runtime),
) -> list[models.MenuEntry]:
    try:
        selected = Listing(listing.strip().lower())
    except ValueError as exc:
        raise HTTPException(status_code=400, detail="listing invalide") from exc
    items = runtime.reconciler.reconcile(
        selected,
        _configuration(runtime),
        runtime.viewer_provider(request),
    )
    return [models.MenuEntry(**item.as_dict()) for item in items]
