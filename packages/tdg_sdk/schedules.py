"""Generation schedule endpoints."""

from __future__ import annotations

from packages.tdg_sdk.gateway import RequestGateway
from packages.tdg_sdk.models import (
    GenerationSchedule,
    SchedulePage,
    ScheduleStatus,
    schedule_list,
    string_list,
)
from packages.tdg_sdk.request import query_value
from packages.tdg_sdk.result import ApiResult

DEFAULT_EXECUTION_PREVIEW_COUNT = 5


async def get_schedules(
    gateway: RequestGateway,
    *,
    page: int | None = None,
    size: int | None = None,
    sort: str | None = None,
    status: ScheduleStatus | str | None = None,
) -> ApiResult[SchedulePage]:
    """Return one page of schedules, optionally filtered by status."""
    return await gateway.get(
        "/schedules",
        {
            "page": query_value(page),
            "size": query_value(size),
            "sort": sort or None,
            "status": query_value(status or None),
        },
        decode=SchedulePage.model_validate,
    )


async def get_schedule(
    gateway: RequestGateway, schedule_id: int
) -> ApiResult[GenerationSchedule]:
    """Return one schedule by id."""
    return await gateway.get(
        f"/schedules/{schedule_id}", decode=GenerationSchedule.model_validate
    )


async def create_schedule(
    gateway: RequestGateway, schedule: GenerationSchedule
) -> ApiResult[GenerationSchedule]:
    """Create a schedule and return the stored record."""
    return await gateway.post(
        "/schedules", schedule, decode=GenerationSchedule.model_validate
    )


async def update_schedule(
    gateway: RequestGateway, schedule_id: int, schedule: GenerationSchedule
) -> ApiResult[GenerationSchedule]:
    """Replace an existing schedule."""
    return await gateway.put(
        f"/schedules/{schedule_id}",
        schedule,
        decode=GenerationSchedule.model_validate,
    )


async def delete_schedule(gateway: RequestGateway, schedule_id: int) -> ApiResult[None]:
    """Delete a schedule."""
    return await gateway.delete(f"/schedules/{schedule_id}")


async def get_schedules_for_template(
    gateway: RequestGateway, template_id: int
) -> ApiResult[list[GenerationSchedule]]:
    """Return every schedule bound to one template."""
    return await gateway.get(
        f"/schedules/byTemplate/{template_id}", decode=schedule_list
    )


async def get_schedules_by_status(
    gateway: RequestGateway, status: ScheduleStatus | str
) -> ApiResult[list[GenerationSchedule]]:
    """Return every schedule in one lifecycle state."""
    return await gateway.get(
        f"/schedules/byStatus/{query_value(status)}", decode=schedule_list
    )


async def activate_schedule(
    gateway: RequestGateway, schedule_id: int
) -> ApiResult[GenerationSchedule]:
    """Move a schedule to ACTIVE."""
    return await gateway.post(
        f"/schedules/{schedule_id}/activate", decode=GenerationSchedule.model_validate
    )


async def pause_schedule(
    gateway: RequestGateway, schedule_id: int
) -> ApiResult[GenerationSchedule]:
    """Move a schedule to PAUSED."""
    return await gateway.post(
        f"/schedules/{schedule_id}/pause", decode=GenerationSchedule.model_validate
    )


async def execute_schedule_now(gateway: RequestGateway, schedule_id: int) -> ApiResult[None]:
    """Run a schedule immediately, outside its cron cadence."""
    return await gateway.post(f"/schedules/{schedule_id}/execute")


async def get_next_execution_times(
    gateway: RequestGateway,
    cron_expression: str,
    count: int = DEFAULT_EXECUTION_PREVIEW_COUNT,
) -> ApiResult[list[str]]:
    """Return upcoming fire times for a cron expression."""
    return await gateway.get(
        "/schedules/nextExecutions",
        {"cronExpression": cron_expression, "count": str(count)},
        decode=string_list,
    )
