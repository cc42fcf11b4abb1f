# src/api/app.py — v1
"""FastAPI application exposing the analysis endpoint.

Every failure leaves as ``{"error": message}`` with 400 (bad or missing
input) or 500 (configuration or provider failure); nothing propagates as an
unhandled exception.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import FileResponse, JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from glucolens.api.examples import find_example, list_examples
from glucolens.api.facade import AnalysisPipeline
from glucolens.api.models import AnalysisResponse, ErrorResponse, ExampleAsset, HealthResponse
from glucolens.config.settings import Settings
from glucolens.core.errors import PROVIDER_ERROR_MESSAGE, GlucolensError
from glucolens.logging.context import clear_context, new_request_id, set_request_context
from glucolens.version import __version__

if TYPE_CHECKING:
    from glucolens.llm.base_client import BaseLLMClient

logger = logging.getLogger(__name__)

ANALYZE_PATH = "/api/analyze-glucose"

_ERROR_RESPONSES = {
    400: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
}


def create_app(
    settings: Settings | None = None,
    llm: BaseLLMClient | None = None,
) -> FastAPI:
    """Build the application.

    Args:
        settings: Application settings. Loaded from .env if None.
        llm: Provider client override (tests inject a mock here).
    """
    settings = settings or Settings()

    app = FastAPI(
        title="glucolens",
        description="Blood-glucose curve analysis with Claude vision",
        version=__version__,
    )
    app.state.settings = settings
    app.state.pipeline = AnalysisPipeline.from_settings(settings, llm=llm)

    _register_middleware(app)
    _register_exception_handlers(app)
    _register_routes(app)

    if not app.state.pipeline.is_configured:
        logger.warning("ANTHROPIC_API_KEY is not configured; analyses will fail with 500")

    return app


def get_pipeline(request: Request) -> AnalysisPipeline:
    return request.app.state.pipeline


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=ErrorResponse(error=message).model_dump())


def _register_middleware(app: FastAPI) -> None:
    @app.middleware("http")
    async def request_context(request: Request, call_next):
        request_id = request.headers.get("x-request-id") or new_request_id()
        set_request_context(request_id)
        try:
            response = await call_next(request)
        finally:
            clear_context()
        response.headers["X-Request-ID"] = request_id
        return response


def _register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(GlucolensError)
    async def handle_analysis_error(request: Request, exc: GlucolensError) -> JSONResponse:
        logger.info("Request failed: kind=%s, status=%d", exc.kind.value, exc.status_code)
        return _error(exc.status_code, exc.message)

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_error(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        return _error(exc.status_code, str(exc.detail))

    @app.exception_handler(RequestValidationError)
    async def handle_validation_error(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        return _error(400, "Invalid request")

    @app.exception_handler(Exception)
    async def handle_unexpected(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled error while processing %s", request.url.path)
        return _error(500, PROVIDER_ERROR_MESSAGE)


def _register_routes(app: FastAPI) -> None:
    @app.post(ANALYZE_PATH, response_model=AnalysisResponse, responses=_ERROR_RESPONSES)
    async def analyze_glucose(
        request: Request,
        pipeline: AnalysisPipeline = Depends(get_pipeline),
    ) -> AnalysisResponse:
        """Analyze an uploaded glucose-curve image (multipart field ``image``)."""
        pipeline.ensure_configured()
        async with request.form() as form:
            image = await pipeline.read_upload(form.get("image"))
        analysis = await pipeline.run(image)
        return AnalysisResponse(analysis=analysis)

    @app.get("/api/examples", response_model=list[ExampleAsset])
    async def examples(settings: Settings = Depends(get_settings)) -> list[ExampleAsset]:
        return list_examples(settings.examples_dir)

    @app.get("/examples/{name}", responses={404: {"model": ErrorResponse}})
    async def example_image(name: str, settings: Settings = Depends(get_settings)):
        path = find_example(settings.examples_dir, name)
        if path is None:
            return _error(404, f"Example not found: {name}")
        return FileResponse(path)

    @app.get("/api/health", response_model=HealthResponse)
    async def health(pipeline: AnalysisPipeline = Depends(get_pipeline)) -> HealthResponse:
        return HealthResponse(version=__version__, configured=pipeline.is_configured)
