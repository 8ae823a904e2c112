from fastapi import FastAPI, Request
from contextlib import asynccontextmanager
from typing import Optional
import logging
import uuid

from api import recipes
from config.settings import load_settings
from constants import ServerConfig
from database import ContextOptions, dispose_engine
from init_db import init_database
from utils.logging_utils import configure_logging, set_logging_context, clear_logging_context

logger = logging.getLogger(__name__)


def create_app(options: Optional[ContextOptions] = None, configure_logs: bool = True) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        options: Database options; the configured database when omitted
        configure_logs: Install the file and console log handlers on startup
    """
    settings = load_settings()
    context_options = options or ContextOptions.from_settings(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if configure_logs:
            configure_logging(settings)
        init_database(context_options)
        logger.info(f"Recipe backend ready on {ServerConfig.url()}")
        yield
        dispose_engine(context_options)
        logger.info("Recipe backend stopped")

    app = FastAPI(title="Recipe Manager", lifespan=lifespan)
    app.state.context_options = context_options

    @app.middleware("http")
    async def request_logging_context(request: Request, call_next):
        set_logging_context(request_id=uuid.uuid4().hex, path=request.url.path)
        try:
            return await call_next(request)
        finally:
            clear_logging_context()

    @app.get("/health")
    async def health():
        return {"status": "ok"}

    app.include_router(recipes.router, prefix=ServerConfig.API_PREFIX, tags=["recipes"])
    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=ServerConfig.HOST, port=ServerConfig.PORT)
