"""PDF analysis endpoints."""

from __future__ import annotations

import asyncio
from typing import Awaitable, Callable

from packages.tdg_sdk.gateway import RequestGateway
from packages.tdg_sdk.models import (
    ExtractedVariable,
    PdfAnalysisProgress,
    Template,
    variable_list,
)
from packages.tdg_sdk.request import FormFile
from packages.tdg_sdk.result import ApiResult

DEFAULT_POLL_INTERVAL_SECONDS = 1.0
DEFAULT_MAX_POLLS = 60

Sleep = Callable[[float], Awaitable[None]]


async def analyze_pdf(gateway: RequestGateway, file: FormFile) -> ApiResult[Template]:
    """Upload a PDF and return the template derived from its variables."""
    return await gateway.upload("/pdf/analyze", file, decode=Template.model_validate)


async def check_analysis_status(
    gateway: RequestGateway, analysis_id: str
) -> ApiResult[PdfAnalysisProgress]:
    """Return the current progress of one analysis."""
    return await gateway.get(
        f"/pdf/status/{analysis_id}", decode=PdfAnalysisProgress.model_validate
    )


async def get_extracted_variables(
    gateway: RequestGateway, analysis_id: str
) -> ApiResult[list[ExtractedVariable]]:
    """Return variables extracted by one analysis."""
    return await gateway.get(f"/pdf/variables/{analysis_id}", decode=variable_list)


async def wait_for_analysis(
    gateway: RequestGateway,
    analysis_id: str,
    *,
    interval_seconds: float = DEFAULT_POLL_INTERVAL_SECONDS,
    max_polls: int = DEFAULT_MAX_POLLS,
    sleep: Sleep = asyncio.sleep,
) -> ApiResult[PdfAnalysisProgress]:
    """Poll analysis status until it finishes, a poll fails, or polls run out.

    Returns the last status result observed. A failed poll is returned as-is
    and ends polling.
    """
    if max_polls < 1:
        raise ValueError("max_polls must be at least 1")

    result = await check_analysis_status(gateway, analysis_id)
    for _ in range(max_polls - 1):
        if not result.ok or result.payload is None or result.payload.finished:
            break
        await sleep(interval_seconds)
        result = await check_analysis_status(gateway, analysis_id)
    return result
