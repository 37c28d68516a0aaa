# Uvicorn application factory <https://www.uvicorn.org/#application-factories>
from contextlib import asynccontextmanager

from fastapi import FastAPI

from connected_screens.logging import logger
from connected_screens.managers.broadcaster import PositionBroadcaster
from connected_screens.routing import collect_subrouters
from connected_screens.settings import Settings, app_settings
from connected_screens.uvicorn_filters import install_access_log_filter

__version__ = "1.0.0"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    FastAPI lifespan context manager for startup and shutdown.

    Startup operations:
    - Hides monitoring endpoints from uvicorn's access log
    - Logs the WebSocket path screens connect to

    Shutdown operations:
    - Logs how many screens were still connected
    """
    install_access_log_filter()
    # The bound address is only known to the server; run_server.py and the
    # CLI log it before starting uvicorn
    logger.info(
        f"WebSocket server is accepting screens on path "
        f"{app.state.settings.WS_PATH}"
    )

    yield  # Application runs here

    logger.info(
        f"Application shutdown with "
        f"{len(app.state.broadcaster.registry)} connected clients"
    )


def application(settings: Settings = app_settings) -> FastAPI:
    """
    Initializes and configures the FastAPI application.

    The application owns exactly one `PositionBroadcaster`, stored on
    `app.state.broadcaster`; its initial state and move bounds come from
    `settings`. HTTP routers (health, metrics, state) and the WebSocket
    consumer, mounted at `settings.WS_PATH`, are collected by
    `collect_subrouters()`.

    Args:
        settings: Settings used to build the broadcaster and the routes.

    Returns:
        The configured FastAPI application.
    """
    app = FastAPI(
        title="Connected screens relay",
        description="Relays one shared ball position between connected screens",
        version=__version__,
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.broadcaster = PositionBroadcaster.from_settings(settings)

    app.include_router(collect_subrouters(settings))

    return app


app = application()  # Need for fastapi cli
