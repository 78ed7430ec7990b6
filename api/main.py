import logging
import os
import time
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from auth import router as auth_router
from core import config
from core.db import Database
from core.errors import ApiError
from core.logging_config import setup_logging
from core.middleware import RateLimitMiddleware, SecurityHeadersMiddleware, UnhandledErrorMiddleware
from inventory import router as inventory_router

logger = logging.getLogger(__name__)

_STARTED_AT = time.monotonic()


def uptime_s() -> float:
    return time.monotonic() - _STARTED_AT


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging(config.log_level())
    # One pool per process, shared by every request.
    db = Database()
    await db.connect()
    await db.ping()
    app.state.db = db
    try:
        yield
    finally:
        await db.close()


async def _api_error_handler(_: Request, exc: ApiError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=exc.body)


async def _request_validation_handler(_: Request, exc: RequestValidationError) -> JSONResponse:
    logger.info("malformed_request errors=%s", exc.errors())
    return JSONResponse(status_code=400, content={"error": "Malformed request body."})


def create_app(*, static_dir: str | None = None) -> FastAPI:
    app = FastAPI(lifespan=lifespan)

    app.add_exception_handler(ApiError, _api_error_handler)
    app.add_exception_handler(RequestValidationError, _request_validation_handler)

    # Added last runs first: security headers wrap everything, including 429s
    # and the 500s produced for unexpected errors.
    app.add_middleware(UnhandledErrorMiddleware)
    app.add_middleware(GZipMiddleware)
    app.add_middleware(
        RateLimitMiddleware,
        max_requests=config.rate_limit_max(),
        window_s=config.rate_limit_window_s(),
    )
    origin = config.cors_origin()
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[origin] if origin else [],
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(SecurityHeadersMiddleware)

    app.include_router(inventory_router.router, tags=["inventory"])
    app.include_router(auth_router.router, tags=["auth"])

    @app.get("/health")
    def health() -> dict:
        return {"status": "OK", "uptime": uptime_s()}

    # Built frontend, served for anything the API routes do not match.
    static_dir = static_dir or config.static_dir()
    if os.path.isdir(static_dir):
        app.mount("/", StaticFiles(directory=static_dir, html=True), name="static")
    else:
        logger.info("static_dir_missing path=%s", static_dir)

    return app


app = create_app()


def run() -> None:
    setup_logging(config.log_level())
    logger.info("Server running on port %s", config.port())
    uvicorn.run(app, host=config.host(), port=config.port(), server_header=False)


if __name__ == "__main__":
    run()
