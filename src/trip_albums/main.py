import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from prometheus_fastapi_instrumentator import Instrumentator

from trip_albums.api.api import api_router
from trip_albums.core.config import configs
from trip_albums.core.logger import setup_logging
from trip_albums.core.uvicorn_config import uvicorn_settings

setup_logging()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Starting application lifespan...")
    yield
    logger.info("Shutting down application lifespan...")


def init_cors(app: FastAPI) -> None:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=configs.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )


def init_routers(app: FastAPI) -> None:
    app.include_router(api_router, prefix="/api")

    @app.get("/", tags=["Root"])
    async def read_root():
        return {"message": "Welcome to the Trip Album Suggestions API!", "docs_url": "/docs"}

    @app.get("/health")
    async def health_check():
        """Health check endpoint."""
        return {"status": "healthy"}


def init_monitoring(app: FastAPI) -> None:
    # exposes /metrics
    Instrumentator().instrument(app).expose(app)


def init_log_filter() -> None:
    class EndpointFilter(logging.Filter):
        def filter(self, record: logging.LogRecord) -> bool:
            return "/metrics" not in record.getMessage()

    logging.getLogger("uvicorn.access").addFilter(EndpointFilter())


def create_app() -> FastAPI:
    app = FastAPI(
        title=configs.APP_NAME,
        description="Suggests photo albums for a trip by clustering its photos in time and space.",
        version="1.0.0",
        lifespan=lifespan,
    )

    init_routers(app=app)
    init_monitoring(app=app)
    init_log_filter()
    init_cors(app=app)
    return app


app = create_app()

if __name__ == "__main__":
    is_dev = configs.ENVIRONMENT != "production"

    run_config = {
        "app": "trip_albums.main:app",
        "host": configs.APP_HOST,
        "port": configs.APP_PORT,
        **uvicorn_settings
    }

    if is_dev:
        run_config["reload"] = True
        run_config["workers"] = 1

    uvicorn.run(**run_config)
