"""FastAPI application factory and lifespan."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.api.v1 import api_router
from app.core.config import get_settings
from app.core.exceptions import UserNotFound
from app.db.session import engine

settings = get_settings()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup: log the store; shutdown: dispose the engine (one per process)."""
    logger.info("Starting %s (%s) on %s", settings.app_name, settings.environment, engine.dialect.name)
    yield
    await engine.dispose()


async def user_not_found_handler(request: Request, exc: UserNotFound):
    return JSONResponse(status_code=404, content={"detail": str(exc)})


def create_application() -> FastAPI:
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    app = FastAPI(
        title=settings.app_name,
        version="0.1.0",
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
    )
    # CORS: allow everything in debug; in production use CORS_ORIGINS env (comma-separated)
    if settings.debug:
        cors_origins = ["*"]
    elif settings.environment == "development":
        cors_origins = ["http://localhost:3000", "http://127.0.0.1:3000"]
    else:
        cors_origins = [o.strip() for o in settings.cors_origins.split(",") if o.strip()]
    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_exception_handler(UserNotFound, user_not_found_handler)

    @app.get("/")
    def root():
        return {"status": "ok", "message": settings.app_name}

    app.include_router(api_router, prefix=settings.api_v1_prefix)
    return app


app = create_application()
