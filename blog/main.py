"""FastAPI application entrypoint. No business logic; only wiring, lifecycle and error mapping."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, Response
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from blog.api import router as api_router
from blog.core.config import Settings, get_settings
from blog.core.database import Database
from blog.core.gate import RouteGateMiddleware
from blog.core.logging_config import configure_logging
from blog.services.errors import ServiceError
from blog.web import templates
from blog.web.pages import router as pages_router

logger = logging.getLogger(__name__)


def _is_api_request(request: Request) -> bool:
    prefix = request.app.state.settings.API_PREFIX
    path = request.url.path
    return path == prefix or path.startswith(prefix + "/")


def _error_json(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def _error_page(request: Request, status_code: int, message: str | None = None) -> Response:
    template = "not_found.html" if status_code == 404 else "error.html"
    return templates.TemplateResponse(
        request,
        template,
        {"message": message, "current": None, "error": None, "success": None},
        status_code=status_code,
    )


def _first_validation_message(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Invalid request"
    first = errors[0]
    location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    message = first.get("msg", "Invalid value")
    return f"{location}: {message}" if location else message


def register_exception_handlers(app: FastAPI) -> None:
    """Every API error leaves as {"error": message}; pages get the fallback views."""

    @app.exception_handler(ServiceError)
    async def service_error_handler(request: Request, exc: ServiceError) -> Response:
        if _is_api_request(request):
            return _error_json(exc.status_code, exc.message)
        return _error_page(request, exc.status_code, exc.message)

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException) -> Response:
        detail = exc.detail if isinstance(exc.detail, str) else "Request failed"
        if _is_api_request(request):
            response = _error_json(exc.status_code, detail)
            if exc.headers:
                response.headers.update(exc.headers)
            return response
        return _error_page(request, exc.status_code, detail if exc.status_code != 404 else None)

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError
    ) -> Response:
        message = _first_validation_message(exc)
        if _is_api_request(request):
            return _error_json(400, message)
        return _error_page(request, 400, message)

    @app.exception_handler(SQLAlchemyError)
    async def database_error_handler(request: Request, exc: SQLAlchemyError) -> Response:
        logger.exception("Persistence failure on %s %s", request.method, request.url.path)
        if _is_api_request(request):
            return _error_json(500, "Internal server error")
        return _error_page(request, 500)

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception) -> Response:
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        if _is_api_request(request):
            return _error_json(500, "Internal server error")
        return _error_page(request, 500)


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the app. The persistence client is created here and connected in the lifespan."""
    settings = settings or get_settings()
    database = Database.from_settings(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        database.connect()
        if settings.DB_CREATE_ALL:
            database.create_all()
        logger.info("Blog started (env=%s)", settings.APP_ENV)
        try:
            yield
        finally:
            database.dispose()

    app = FastAPI(
        title="Blog",
        version="0.1.0",
        docs_url="/docs" if settings.APP_ENV == "dev" else None,
        redoc_url=None,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.database = database

    app.add_middleware(RouteGateMiddleware)
    register_exception_handlers(app)

    app.include_router(api_router, prefix=settings.API_PREFIX)
    app.include_router(pages_router)
    return app


def build_app() -> FastAPI:
    """Process entry: load .env, configure logging, build from env settings.

    Run with: uvicorn blog.main:build_app --factory
    """
    load_dotenv()
    settings = get_settings()
    configure_logging(settings.LOG_LEVEL)
    return create_app(settings)

