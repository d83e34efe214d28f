"""FastAPI application factory for the bizdash dashboard API."""

from __future__ import annotations

import logging
from pathlib import Path

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from bizdash import __version__
from bizdash.catalog.loader import default_catalog, load_catalog
from bizdash.store.base import ProfileStore
from bizdash.store.factory import build_store
from bizdash.upgrade.handler import build_upgrade_handlers
from dashboard.backend.config import DashboardConfig
from dashboard.backend.routers import access, health, sidebar, upgrade
from dashboard.backend.routers import dashboard as dashboard_router
from dashboard.backend.services.access_service import AccessService
from dashboard.backend.services.sidebar_service import SidebarService
from dashboard.backend.services.upgrade_service import UpgradeService

logger = logging.getLogger(__name__)


def create_app(
    config: DashboardConfig | None = None,
    store: ProfileStore | None = None,
) -> FastAPI:
    """Build and return the FastAPI application.

    Services are initialised from *config* (or env defaults) and
    injected into each router via its ``init_router()`` function. An
    explicit *store* takes precedence over the configured one.
    """
    if config is None:
        config = DashboardConfig.from_env()

    app = FastAPI(
        title="bizdash Dashboard",
        version=__version__,
        docs_url="/api/docs",
        openapi_url="/api/openapi.json",
    )

    # --- CORS (dev mode only) ---
    if config.dev_mode:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=["http://localhost:5173"],  # Vite dev server
            allow_methods=["*"],
            allow_headers=["*"],
        )

    # --- Core Services ---
    project = config.project_config()
    catalog = load_catalog(config.catalog_file) if config.catalog_file else default_catalog()
    if store is None:
        store = build_store(project)
    logger.info(
        "Dashboard using %s with %d catalog area(s)", type(store).__name__, len(catalog),
    )

    access_svc = AccessService(catalog, store)
    sidebar_svc = SidebarService(access_svc)
    upgrade_svc = UpgradeService(
        access_svc,
        build_upgrade_handlers(project.upgrade),
    )

    # --- Routers ---
    health.init_router(access_svc, __version__)
    access.init_router(access_svc)
    sidebar.init_router(sidebar_svc)
    dashboard_router.init_router(access_svc)
    upgrade.init_router(upgrade_svc)

    app.include_router(health.router)
    app.include_router(access.router)
    app.include_router(sidebar.router)
    app.include_router(dashboard_router.router)
    app.include_router(upgrade.router)

    # --- App state ---
    app.state.access_service = access_svc
    app.state.sidebar_service = sidebar_svc
    app.state.upgrade_service = upgrade_svc

    # --- Static files (built frontend) ---
    frontend_dist = Path(__file__).resolve().parent.parent / "frontend" / "dist"
    if frontend_dist.is_dir():
        app.mount("/", StaticFiles(directory=str(frontend_dist), html=True), name="frontend")

    return app
