import time
from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import HTMLResponse, RedirectResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from library_catalog.core.config import Settings, settings as default_settings
from library_catalog.core.database import close_db_connection, create_db_engine, create_session_factory, init_db
from library_catalog.core.exceptions import CatalogException
from library_catalog.core.logger_config import log_business_error, log_db_error, log_performance, logger, setup_logging
from library_catalog.core.middleware import RequestLoggingMiddleware
from library_catalog.core.templating import templates
from library_catalog.routers.authors import router as authors_router
from library_catalog.routers.genres import router as genres_router


def render_error(request: Request, status_code: int, message: str, error_code: str = None) -> HTMLResponse:
    return templates.TemplateResponse(
        request,
        "error.html",
        {"title": "Error", "message": message, "status_code": status_code, "error_code": error_code},
        status_code=status_code,
    )


def _request_context(request: Request) -> dict:
    return {
        "request_id": getattr(request.state, "request_id", "-"),
        "method": request.method,
        "path": request.url.path,
    }


def register_exception_handlers(app: FastAPI) -> None:
    """
    Render errors that reach the application boundary as the error page.

    Unexpected exceptions are rendered by Starlette's server-error middleware, which then
    re-raises them to the server. They are already logged with their traceback by
    ``RequestLoggingMiddleware``, so the handler here only renders.
    """

    @app.exception_handler(CatalogException)
    async def catalog_exception_handler(request: Request, exc: CatalogException):
        log_business_error(message=str(exc), context=_request_context(request))
        return render_error(request, exc.status_code, exc.message, exc.error_code)

    @app.exception_handler(SQLAlchemyError)
    async def database_exception_handler(request: Request, exc: SQLAlchemyError):
        log_db_error(exc, operation="request", context=_request_context(request))
        return render_error(request, status.HTTP_500_INTERNAL_SERVER_ERROR, "Database error", "database_error")

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        log_business_error(message=f"Malformed request: {exc.errors()}", context=_request_context(request))
        return render_error(request, 422, "Invalid request parameters", "validation_error")

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        return render_error(request, exc.status_code, str(exc.detail))

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        return render_error(request, status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error", "internal_error")


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Build the catalog application.

    The store engine and session factory are created once here and kept on ``app.state``
    for the lifetime of the process; handlers receive them through dependencies.
    """
    settings = settings or default_settings
    setup_logging(settings)

    engine = create_db_engine(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        start_time = time.time()
        logger.info("Starting application...")
        await init_db(engine)
        try:
            yield
        finally:
            await close_db_connection(engine)
            log_performance("application_lifespan", time.time() - start_time)
            logger.info("Application stopped")

    app = FastAPI(lifespan=lifespan, title=settings.PROJECT_NAME, version=settings.VERSION, debug=settings.DEBUG)
    app.state.settings = settings
    app.state.engine = engine
    app.state.session_factory = create_session_factory(engine)

    app.add_middleware(RequestLoggingMiddleware)
    register_exception_handlers(app)

    app.include_router(authors_router)
    app.include_router(genres_router)

    @app.get("/", include_in_schema=False)
    async def root():
        return RedirectResponse("/catalog/authors", status_code=status.HTTP_302_FOUND)

    @app.get("/health")
    async def health_check():
        return {"status": "healthy", "version": settings.VERSION}

    return app


def run() -> None:
    logger.info("Starting Uvicorn server...")
    uvicorn.run(
        "library_catalog.main:create_app",
        factory=True,
        host=default_settings.HOST,
        port=default_settings.PORT,
        reload=default_settings.DEBUG,
        log_level=default_settings.LOG_LEVEL.lower(),
    )


if __name__ == "__main__":
    run()
