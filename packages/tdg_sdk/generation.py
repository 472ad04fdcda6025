"""Single-template generation endpoints."""

from __future__ import annotations

import json

from packages.tdg_sdk.gateway import RequestGateway
from packages.tdg_sdk.models import GenerationRequest, OutputFormat, PreviewRequest
from packages.tdg_sdk.request import ResponseKind, query_value
from packages.tdg_sdk.result import ApiResult

DEFAULT_GENERATED_FILENAME = "generated_data"
DEFAULT_PREVIEW_ROWS = 5


async def generate_data(
    gateway: RequestGateway, request: GenerationRequest
) -> ApiResult[bytes]:
    """Generate data and return the raw bytes instead of saving them."""
    return await gateway.post(
        "/generate", request, response_kind=ResponseKind.BINARY
    )


def generated_filename(request: GenerationRequest) -> str:
    """Return ``<filename>.<format>``, defaulting to ``generated_data.csv``."""
    extension = (request.output_format or OutputFormat.CSV).value.lower()
    return f"{request.filename or DEFAULT_GENERATED_FILENAME}.{extension}"


async def download_generated_data(
    gateway: RequestGateway, request: GenerationRequest
) -> bool:
    """Generate data and save it through the gateway's blob sink."""
    params = {
        "templateId": str(request.template_id),
        "rowCount": query_value(request.row_count or None),
        "format": query_value(request.output_format),
    }
    return await gateway.download(
        f"/generate/{request.template_id}", generated_filename(request), params
    )


async def generate_data_preview(
    gateway: RequestGateway,
    template_id: int,
    row_count: int = DEFAULT_PREVIEW_ROWS,
    output_format: OutputFormat = OutputFormat.CSV,
) -> ApiResult[str]:
    """Return the first rows of generated data as text."""
    request = PreviewRequest(
        template_id=template_id, row_count=row_count, output_format=output_format
    )
    return await gateway.post("/generate/preview", request, decode=_as_text)


def _as_text(value: object) -> str:
    """Keep text previews as-is; re-serialize previews sent as JSON documents."""
    if isinstance(value, str):
        return value
    return json.dumps(value, indent=2)
