"""Batch generation endpoints."""

from __future__ import annotations

from packages.tdg_sdk.gateway import RequestGateway
from packages.tdg_sdk.models import (
    BatchGenerationRequest,
    BatchGenerationResult,
    batch_result_list,
)
from packages.tdg_sdk.result import ApiResult


async def generate_batch(
    gateway: RequestGateway, request: BatchGenerationRequest
) -> ApiResult[list[BatchGenerationResult]]:
    """Generate data for several templates and return per-template outcomes."""
    return await gateway.post("/batch/generate", request, decode=batch_result_list)


def batch_archive_filename(batch_id: str) -> str:
    """Return the filename a batch archive is saved under."""
    return f"batch_{batch_id}.zip"


async def download_batch_results(gateway: RequestGateway, batch_id: str) -> bool:
    """Save a batch's zipped results through the gateway's blob sink."""
    return await gateway.download(
        f"/batch/download/{batch_id}", batch_archive_filename(batch_id)
    )
