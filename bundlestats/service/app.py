"""FastAPI application entrypoint for bundlestats service mode."""

from __future__ import annotations

import asyncio
from typing import Any, Callable, Dict, Optional, Union

from fastapi import Depends, FastAPI
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from ..config import (
    BUNDLE_SIZE_THRESHOLD,
    DEFAULT_STATS_PATH,
    FAIL_ON_THRESHOLD_EXCEED,
    STATS_PATH,
    TOTAL_SIZE_THRESHOLD,
    build_config,
)
from ..errors import BundleStatsError
from ..orchestrator import BundleReport, Orchestrator


class AnalyzeRequest(BaseModel):
    stats: Any
    bundle_size_threshold: Optional[int] = None
    total_size_threshold: Optional[int] = None
    fail_on_threshold_exceed: Optional[bool] = None


class SummaryModel(BaseModel):
    total_size: Union[int, float]
    total_size_text: str
    file_count: int
    exceeded_file_count: int


class AnalyzeResponse(BaseModel):
    exceeded: bool
    failed: bool
    individual_exceeded: list[str]
    total_exceeded: bool
    summary: SummaryModel
    comment_body: str
    badge_svg: str
    status_badge_svg: str


class HealthResponse(BaseModel):
    status: str


def _default_orchestrator() -> Orchestrator:
    return Orchestrator()


def create_app(
    orchestrator_factory: Callable[[], Orchestrator] = _default_orchestrator,
) -> FastAPI:
    """Create the FastAPI application exposing bundle analysis."""

    app = FastAPI(title="Bundle Stats Service", version="1.0.0")

    async def get_orchestrator() -> Orchestrator:
        # Lazy-instantiate per request to keep state predictable.
        return orchestrator_factory()

    @app.get("/health", response_model=HealthResponse)
    async def health() -> HealthResponse:
        return HealthResponse(status="ok")

    @app.post("/analyze", response_model=AnalyzeResponse)
    async def analyze(
        payload: AnalyzeRequest,
        orchestrator: Orchestrator = Depends(get_orchestrator),
    ) -> AnalyzeResponse:
        config = build_config(
            {
                STATS_PATH: DEFAULT_STATS_PATH,
                BUNDLE_SIZE_THRESHOLD: payload.bundle_size_threshold,
                TOTAL_SIZE_THRESHOLD: payload.total_size_threshold,
                FAIL_ON_THRESHOLD_EXCEED: payload.fail_on_threshold_exceed,
            }
        )

        def _run() -> BundleReport:
            manifest = orchestrator.parser.parse_data(payload.stats)
            return orchestrator.build_report(manifest, config)

        loop = asyncio.get_running_loop()
        report = await loop.run_in_executor(None, _run)

        result = report.result
        return AnalyzeResponse(
            exceeded=report.exceeded,
            failed=report.exceeded and config.fail_on_threshold_exceed,
            individual_exceeded=list(result.threshold.individual_exceeded),
            total_exceeded=result.threshold.total_exceeded,
            summary=SummaryModel(
                total_size=result.summary.total_size,
                total_size_text=result.summary.total_size_text,
                file_count=result.summary.file_count,
                exceeded_file_count=result.summary.exceeded_file_count,
            ),
            comment_body=report.comment_body,
            badge_svg=report.badge_svg,
            status_badge_svg=report.status_badge_svg,
        )

    @app.exception_handler(BundleStatsError)
    async def bundle_stats_error_handler(_: Any, exc: BundleStatsError) -> JSONResponse:
        content: Dict[str, Any] = {"code": exc.code.value, "detail": exc.message}
        return JSONResponse(status_code=400, content=content)

    return app


def run_service(
    host: str = "0.0.0.0", port: int = 8000
) -> None:  # pragma: no cover - integration path
    import uvicorn

    app = create_app()
    uvicorn.run(app, host=host, port=port)
