"""Handbook API - FastAPI app entry point."""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from handbook.core.config import get_settings
from handbook.core.errors import ServiceError
from handbook.core.logging import configure_logging
from handbook.db.base import Base
from handbook.db.session import engine
from handbook.routers import auth, courses, programs, users
from handbook.services.catalog import get_catalog

settings = get_settings()
configure_logging(settings)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    # fail fast on a missing or malformed catalog file
    get_catalog()
    logger.info("%s started", settings.app_name)

    yield
    await engine.dispose()


app = FastAPI(
    title=settings.app_name,
    description="University handbook: accounts, course lists and course reviews",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(ServiceError)
async def service_error_handler(request: Request, exc: ServiceError) -> JSONResponse:
    """Typed service outcome -> {statusCode, message} with the same HTTP status."""
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return JSONResponse(
        status_code=exc.status_code,
        content={"statusCode": exc.status_code, "message": exc.message},
    )


@app.exception_handler(RequestValidationError)
async def request_validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Malformed request body, query or header -> 400 {statusCode, message}."""
    errors = exc.errors()
    error = errors[0] if errors else {}
    # drop the "body"/"query" prefix, keep the field path
    field = ".".join(str(part) for part in error.get("loc", ())[1:])
    message = error.get("msg", "Invalid request")
    if field:
        message = f"{field}: {message}"
    return JSONResponse(status_code=400, content={"statusCode": 400, "message": message})


app.include_router(auth.router)
app.include_router(users.router)
app.include_router(courses.router)
app.include_router(programs.router)


@app.get("/health")
async def health():
    return {"status": "ok"}
