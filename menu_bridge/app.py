"""Application FastAPI principale pour Menu Bridge."""
from fastapi import FastAPI

from menu_bridge.api import account_menu
from menu_bridge.core.logging_config import configure_logging
from menu_bridge.services.menu.runtime import MenuRuntime, install_runtime


configure_logging()


def create_app(runtime: MenuRuntime | None = None) -> FastAPI:
    application = FastAPI(title="Menu Bridge API", version="1.0.0")
    install_runtime(application, runtime)
    application.include_router(account_menu.router, prefix="/account-menu", tags=["account-menu"])
    return application


app = create_app()
