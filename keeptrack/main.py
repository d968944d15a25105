# keeptrack/main.py

import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from keeptrack import config
from keeptrack.api import assets, auth, maintenance
from keeptrack.core.errors import ServiceError
from keeptrack.database import Database
from keeptrack.models.schemas import HealthResponse


logger = logging.getLogger(__name__)


# -------------------------------
# Error Handlers
# -------------------------------

async def service_error_handler(request: Request, exc: ServiceError):
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail},
        headers=getattr(exc, "headers", None)
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    message = "Invalid request"
    if errors:
        message = str(errors[0].get("msg", message)).removeprefix("Value error, ")
    return JSONResponse(
        status_code=400,
        content={"error": message, "details": jsonable_encoder(errors)}
    )


async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=500,
        content={"error": "Internal server error", "details": type(exc).__name__}
    )


# -------------------------------
# Application Factory
# -------------------------------

def create_app(database: Optional[Database] = None) -> FastAPI:
    """
    Builds the API around a store handle. The handle is opened (tables
    created) on startup and disposed on shutdown.
    """
    database = database or Database(config.DATABASE_URL)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        database.init_db()
        try:
            yield
        finally:
            database.dispose()

    app = FastAPI(title="KeepTrack", lifespan=lifespan)
    app.state.database = database

    app.add_middleware(
        CORSMiddleware,
        allow_origins=[config.FRONTEND_URL],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(ServiceError, service_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)

    app.include_router(auth.router, prefix=config.API_PREFIX)
    app.include_router(assets.router, prefix=config.API_PREFIX)
    app.include_router(maintenance.router, prefix=config.API_PREFIX)

    @app.get("/health", response_model=HealthResponse)
    def health():
        return {"status": "OK", "timestamp": datetime.now(timezone.utc).isoformat()}

    return app


logging.basicConfig(
    level=config.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s"
)

app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("keeptrack.main:app", host="0.0.0.0", port=8000)
