"""
Application FastAPI de HomeFlix.

Initialise l'application web avec le Container DI, charge le catalogue au
démarrage, lance la surveillance du fichier de bibliothèque et monte les routes.
"""

import asyncio
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI

from .. import __version__
from ..container import Container
from ..core.exceptions import HomeflixError
from .errors import homeflix_error_handler
from .network import LanOnlyMiddleware
from .routes.asset import router as asset_router
from .routes.health import router as health_router
from .routes.library import router as library_router
from .routes.stream import router as stream_router


def create_app(container: Optional[Container] = None) -> FastAPI:
    """Construit l'application à partir d'un Container (nouveau par défaut)."""
    container = container or Container()
    settings = container.config()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Charge le catalogue au démarrage et surveille le fichier jusqu'à l'arrêt."""
        store = container.catalog_store()
        watcher = container.config_watcher()
        watcher.capture()
        await asyncio.to_thread(store.reload)
        watcher.start()
        try:
            yield
        finally:
            await watcher.stop()

    app = FastAPI(title="HomeFlix", version=__version__, lifespan=lifespan)
    app.state.container = container

    app.add_exception_handler(HomeflixError, homeflix_error_handler)
    if settings.lan_only:
        app.add_middleware(LanOnlyMiddleware)

    # Routes
    app.include_router(health_router)
    app.include_router(library_router)
    app.include_router(stream_router)
    app.include_router(asset_router)
    return app


app = create_app()
