"""Template endpoints."""

from __future__ import annotations

from packages.tdg_sdk.gateway import RequestGateway
from packages.tdg_sdk.models import (
    DataType,
    Template,
    TemplatePage,
    data_type_map,
    template_list,
)
from packages.tdg_sdk.request import query_value
from packages.tdg_sdk.result import ApiResult


async def get_templates(
    gateway: RequestGateway,
    *,
    page: int | None = None,
    size: int | None = None,
    sort: str | None = None,
) -> ApiResult[TemplatePage]:
    """Return one page of templates."""
    return await gateway.get(
        "/templates",
        {"page": query_value(page), "size": query_value(size), "sort": sort or None},
        decode=TemplatePage.model_validate,
    )


async def get_template(gateway: RequestGateway, template_id: int) -> ApiResult[Template]:
    """Return one template by id."""
    return await gateway.get(f"/templates/{template_id}", decode=Template.model_validate)


async def create_template(gateway: RequestGateway, template: Template) -> ApiResult[Template]:
    """Create a template and return the stored record."""
    return await gateway.post("/templates", template, decode=Template.model_validate)


async def update_template(
    gateway: RequestGateway, template_id: int, template: Template
) -> ApiResult[Template]:
    """Replace an existing template."""
    return await gateway.put(
        f"/templates/{template_id}", template, decode=Template.model_validate
    )


async def delete_template(gateway: RequestGateway, template_id: int) -> ApiResult[None]:
    """Delete a template."""
    return await gateway.delete(f"/templates/{template_id}")


async def search_templates(
    gateway: RequestGateway,
    name: str | None = None,
    *,
    column_type: str | None = None,
) -> ApiResult[list[Template]]:
    """Search templates by name and, optionally, by contained column type."""
    return await gateway.get(
        "/templates/search",
        {"name": name, "columnType": column_type},
        decode=template_list,
    )


async def get_data_types(gateway: RequestGateway) -> ApiResult[dict[str, DataType]]:
    """Return available column data types keyed by type name."""
    return await gateway.get("/templates/datatypes", decode=data_type_map)
