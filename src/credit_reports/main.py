from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError

from credit_reports.api.health import router as health_router
from credit_reports.api.middleware.error_handler import (
    handle_generic_error,
    handle_report_processing_error,
    handle_validation_error,
)
from credit_reports.api.middleware.logging import RequestLoggingMiddleware
from credit_reports.api.v1 import router as v1_router
from credit_reports.config import Settings, settings as default_settings
from credit_reports.core.exceptions import ReportProcessingError
from credit_reports.core.logger import setup_logging
from credit_reports.parsers.registry import build_default_registry


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or default_settings
    setup_logging(settings.log_level)

    app = FastAPI(
        title="Credit Report Parser API",
        description="Structured account extraction from credit bureau reports",
        version="0.1.0",
        debug=settings.debug,
    )

    # Built once, shared read-only by every request
    app.state.settings = settings
    app.state.registry = build_default_registry(settings)

    app.add_middleware(RequestLoggingMiddleware)

    # Register exception handlers (order matters - most specific first)
    app.add_exception_handler(ReportProcessingError, handle_report_processing_error)
    app.add_exception_handler(RequestValidationError, handle_validation_error)
    app.add_exception_handler(Exception, handle_generic_error)

    app.include_router(health_router)
    app.include_router(v1_router)

    return app


app = create_app()
