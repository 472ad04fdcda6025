"""tdg command-line interface implemented with Typer."""

from __future__ import annotations

import asyncio
import dataclasses
import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Awaitable, Callable

import typer
from pydantic import ValidationError

from packages.tdg_sdk import (
    ApiResult,
    BatchGenerationRequest,
    GenerationRequest,
    GenerationSchedule,
    OutputFormat,
    ScheduleStatus,
    TdgClient,
    Template,
    WireModel,
    activate_schedule,
    analyze_pdf,
    check_analysis_status,
    create_schedule,
    create_template,
    delete_schedule,
    delete_template,
    download_batch_results,
    download_generated_data,
    execute_schedule_now,
    generate_batch,
    generate_data_preview,
    get_data_types,
    get_extracted_variables,
    get_next_execution_times,
    get_schedule,
    get_schedules,
    get_schedules_by_status,
    get_schedules_for_template,
    get_template,
    get_templates,
    pause_schedule,
    search_templates,
    wait_for_analysis,
)
from packages.tdg_sdk.request import FormFile
from packages.tdg_shared.config import load_settings
from packages.tdg_shared.logging import configure_logging

SUCCESS_EXIT_CODE = 0
API_ERROR_EXIT_CODE = 3
TRANSPORT_ERROR_EXIT_CODE = 4
DOWNLOAD_ERROR_EXIT_CODE = 5


@dataclass(frozen=True)
class CliConfig:
    """Global CLI runtime options propagated to SDK calls."""

    base_url: str
    timeout: float
    download_dir: Path
    as_json: bool
    config_path: Path | None = None


Invoke = Callable[[TdgClient], Awaitable["ApiResult[Any] | bool"]]


def _serialize(value: Any) -> Any:
    """Convert results to JSON-serializable structures in wire (camelCase) form."""
    if value is None or isinstance(value, (bool, int, float, str)):
        return value
    if isinstance(value, bytes):
        return value.decode("utf-8", errors="replace")
    if isinstance(value, Path):
        return str(value)
    if isinstance(value, WireModel):
        return _serialize(value.to_wire())
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return _serialize(dataclasses.asdict(value))
    if isinstance(value, dict):
        return {str(key): _serialize(item) for key, item in value.items()}
    if isinstance(value, (list, tuple, set)):
        return [_serialize(item) for item in value]
    return str(value)


def _emit_output(payload: Any, as_json: bool) -> None:
    """Render a successful payload in the requested format."""
    data = _serialize(payload)
    if as_json:
        typer.echo(json.dumps(data, sort_keys=True, separators=(",", ":")))
        return
    if data is None:
        typer.echo("ok")
        return
    typer.echo(_render_human(data))


def _emit_error(message: str, status: int, as_json: bool) -> None:
    """Render a failure to stderr."""
    if as_json:
        typer.echo(json.dumps({"error": message, "status": status}), err=True)
        return
    prefix = f"error ({status})" if status else "error"
    typer.echo(f"{prefix}: {message}", err=True)


def _render_human(data: Any) -> str:
    """Return human-oriented rendering for recognized response shapes."""
    if isinstance(data, str):
        return data
    if _looks_like_page(data):
        rows = _render_rows(data["content"])
        footer = (
            f"page {data['number'] + 1}/{max(data['totalPages'], 1)} "
            f"({data['totalElements']} total)"
        )
        return "\n".join([*rows, footer]) if rows else f"No results. {footer}"
    if isinstance(data, list) and all(_looks_like_record(item) for item in data):
        rows = _render_rows(data)
        return "\n".join(rows) if rows else "No results."
    return json.dumps(data, indent=2, sort_keys=True)


def _looks_like_page(value: Any) -> bool:
    """Return True for paginated list envelopes."""
    return (
        isinstance(value, dict)
        and isinstance(value.get("content"), list)
        and "totalElements" in value
        and "number" in value
    )


def _looks_like_record(value: Any) -> bool:
    """Return True for records carrying a name."""
    return isinstance(value, dict) and "name" in value


def _render_rows(items: list[Any]) -> list[str]:
    """Render one line per named record."""
    lines: list[str] = []
    for item in items:
        if not isinstance(item, dict):
            lines.append(f"- {item}")
            continue
        ident = item.get("id")
        line = f"- {item.get('name', '<unnamed>')}"
        if ident is not None:
            line = f"- [{ident}] {item.get('name', '<unnamed>')}"
        status = item.get("status")
        if isinstance(status, str) and status != "":
            line = f"{line} ({status})"
        lines.append(line)
    return lines


def _with_client(cfg: CliConfig) -> TdgClient:
    """Return one SDK client built from global CLI settings."""
    return TdgClient(
        base_url=cfg.base_url,
        timeout=cfg.timeout,
        download_dir=cfg.download_dir,
        config_path=cfg.config_path,
    )


def _run_command(cfg: CliConfig, invoke: Invoke) -> None:
    """Execute one SDK call and map its outcome to process semantics."""

    async def _call() -> ApiResult[Any] | bool:
        async with _with_client(cfg) as client:
            return await invoke(client)

    outcome = asyncio.run(_call())

    if isinstance(outcome, bool):
        if not outcome:
            _emit_error("download failed", 0, cfg.as_json)
            raise typer.Exit(code=DOWNLOAD_ERROR_EXIT_CODE)
        _emit_output({"saved": True, "directory": cfg.download_dir}, cfg.as_json)
        raise typer.Exit(code=SUCCESS_EXIT_CODE)

    if not outcome.ok:
        _emit_error(outcome.error_message or "request failed", outcome.status, cfg.as_json)
        code = TRANSPORT_ERROR_EXIT_CODE if outcome.is_transport_failure else API_ERROR_EXIT_CODE
        raise typer.Exit(code=code)

    _emit_output(outcome.payload, cfg.as_json)
    raise typer.Exit(code=SUCCESS_EXIT_CODE)


def _require_config(ctx: typer.Context) -> CliConfig:
    """Return required CLI config from Typer context."""
    config = ctx.obj
    if not isinstance(config, CliConfig):
        raise RuntimeError("CLI configuration not initialized")
    return config


def _read_model(path: Path, model: type[Any]) -> Any:
    """Load one JSON document from disk into a wire model."""
    try:
        return model.model_validate_json(path.read_text(encoding="utf-8"))
    except (OSError, ValidationError) as exc:
        raise typer.BadParameter(f"{path}: {exc}") from exc


app = typer.Typer(no_args_is_help=True, help="Test data generator command-line interface")
templates_app = typer.Typer(help="Template commands")
schedules_app = typer.Typer(help="Schedule commands")
batch_app = typer.Typer(help="Batch generation commands")
generate_app = typer.Typer(help="Single-template generation commands")
pdf_app = typer.Typer(help="PDF analysis commands")


@app.callback()
def main(
    ctx: typer.Context,
    base_url: str | None = typer.Option(
        None, help="Backend API base URL (overrides TDG_API__BASE_URL)"
    ),
    timeout: float | None = typer.Option(
        None, min=0.001, help="Request timeout in seconds"
    ),
    download_dir: Path | None = typer.Option(
        None, help="Directory downloaded files are written to"
    ),
    config: Path | None = typer.Option(None, help="Path to a YAML settings file"),
    as_json: bool = typer.Option(False, "--json", help="Emit JSON output"),
) -> None:
    """Store global options for all resource commands."""
    try:
        settings = load_settings(
            cli_params={
                "api": {
                    "base_url": base_url,
                    "timeout_seconds": timeout,
                    "download_dir": download_dir,
                }
            },
            config_path=config,
        )
    except ValidationError as exc:
        raise typer.BadParameter(f"invalid settings: {exc}") from exc
    configure_logging(
        level=settings.logging.level,
        json_output=settings.logging.json_output,
        service=settings.logging.service,
        environment=settings.logging.environment,
    )
    ctx.obj = CliConfig(
        base_url=settings.api.base_url,
        timeout=settings.api.timeout_seconds,
        download_dir=settings.api.download_dir,
        as_json=as_json,
        config_path=config,
    )


@templates_app.command("list")
def templates_list(
    ctx: typer.Context,
    page: int | None = typer.Option(None, min=0, help="Zero-based page number"),
    size: int | None = typer.Option(None, min=1, help="Page size"),
    sort: str | None = typer.Option(None, help="Sort expression, e.g. name,asc"),
) -> None:
    """List templates."""
    cfg = _require_config(ctx)
    _run_command(
        cfg,
        lambda client: get_templates(client.gateway, page=page, size=size, sort=sort),
    )


@templates_app.command("get")
def templates_get(ctx: typer.Context, template_id: int = typer.Argument(...)) -> None:
    """Show one template."""
    cfg = _require_config(ctx)
    _run_command(cfg, lambda client: get_template(client.gateway, template_id))


@templates_app.command("create")
def templates_create(
    ctx: typer.Context,
    path: Path = typer.Argument(..., help="JSON file describing the template"),
) -> None:
    """Create a template from a JSON file."""
    cfg = _require_config(ctx)
    template = _read_model(path, Template)
    _run_command(cfg, lambda client: create_template(client.gateway, template))


@templates_app.command("search")
def templates_search(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="Name fragment"),
    column_type: str | None = typer.Option(None, help="Only templates with this column type"),
) -> None:
    """Search templates."""
    cfg = _require_config(ctx)
    _run_command(
        cfg,
        lambda client: search_templates(client.gateway, name, column_type=column_type),
    )


@templates_app.command("delete")
def templates_delete(ctx: typer.Context, template_id: int = typer.Argument(...)) -> None:
    """Delete one template."""
    cfg = _require_config(ctx)
    _run_command(cfg, lambda client: delete_template(client.gateway, template_id))


@templates_app.command("datatypes")
def templates_datatypes(ctx: typer.Context) -> None:
    """List supported column data types."""
    cfg = _require_config(ctx)
    _run_command(cfg, lambda client: get_data_types(client.gateway))


@schedules_app.command("list")
def schedules_list(
    ctx: typer.Context,
    page: int | None = typer.Option(None, min=0, help="Zero-based page number"),
    size: int | None = typer.Option(None, min=1, help="Page size"),
    sort: str | None = typer.Option(None, help="Sort expression"),
    status: ScheduleStatus | None = typer.Option(None, case_sensitive=False),
) -> None:
    """List schedules."""
    cfg = _require_config(ctx)
    _run_command(
        cfg,
        lambda client: get_schedules(
            client.gateway, page=page, size=size, sort=sort, status=status
        ),
    )


@schedules_app.command("get")
def schedules_get(ctx: typer.Context, schedule_id: int = typer.Argument(...)) -> None:
    """Show one schedule."""
    cfg = _require_config(ctx)
    _run_command(cfg, lambda client: get_schedule(client.gateway, schedule_id))


@schedules_app.command("create")
def schedules_create(
    ctx: typer.Context,
    path: Path = typer.Argument(..., help="JSON file describing the schedule"),
) -> None:
    """Create a schedule from a JSON file."""
    cfg = _require_config(ctx)
    schedule = _read_model(path, GenerationSchedule)
    _run_command(cfg, lambda client: create_schedule(client.gateway, schedule))


@schedules_app.command("delete")
def schedules_delete(ctx: typer.Context, schedule_id: int = typer.Argument(...)) -> None:
    """Delete one schedule."""
    cfg = _require_config(ctx)
    _run_command(cfg, lambda client: delete_schedule(client.gateway, schedule_id))


@schedules_app.command("by-template")
def schedules_by_template(ctx: typer.Context, template_id: int = typer.Argument(...)) -> None:
    """List schedules bound to one template."""
    cfg = _require_config(ctx)
    _run_command(cfg, lambda client: get_schedules_for_template(client.gateway, template_id))


@schedules_app.command("by-status")
def schedules_by_status(
    ctx: typer.Context,
    status: ScheduleStatus = typer.Argument(..., case_sensitive=False),
) -> None:
    """List schedules in one lifecycle state."""
    cfg = _require_config(ctx)
    _run_command(cfg, lambda client: get_schedules_by_status(client.gateway, status))


@schedules_app.command("activate")
def schedules_activate(ctx: typer.Context, schedule_id: int = typer.Argument(...)) -> None:
    """Activate one schedule."""
    cfg = _require_config(ctx)
    _run_command(cfg, lambda client: activate_schedule(client.gateway, schedule_id))


@schedules_app.command("pause")
def schedules_pause(ctx: typer.Context, schedule_id: int = typer.Argument(...)) -> None:
    """Pause one schedule."""
    cfg = _require_config(ctx)
    _run_command(cfg, lambda client: pause_schedule(client.gateway, schedule_id))


@schedules_app.command("execute")
def schedules_execute(ctx: typer.Context, schedule_id: int = typer.Argument(...)) -> None:
    """Run one schedule now."""
    cfg = _require_config(ctx)
    _run_command(cfg, lambda client: execute_schedule_now(client.gateway, schedule_id))


@schedules_app.command("next-runs")
def schedules_next_runs(
    ctx: typer.Context,
    cron_expression: str = typer.Argument(..., help="Cron expression"),
    count: int = typer.Option(5, min=1, help="Number of fire times"),
) -> None:
    """Preview upcoming fire times for a cron expression."""
    cfg = _require_config(ctx)
    _run_command(
        cfg,
        lambda client: get_next_execution_times(client.gateway, cron_expression, count),
    )


@batch_app.command("generate")
def batch_generate(
    ctx: typer.Context,
    template_ids: list[int] = typer.Argument(..., help="Template ids"),
    rows: int | None = typer.Option(None, min=1, help="Rows per template"),
    output_format: OutputFormat | None = typer.Option(
        None, "--format", case_sensitive=False
    ),
    parallel: bool | None = typer.Option(None, "--parallel/--sequential"),
) -> None:
    """Generate data for several templates."""
    cfg = _require_config(ctx)
    request = BatchGenerationRequest(
        template_ids=template_ids,
        row_count=rows,
        output_format=output_format,
        parallel=parallel,
    )
    _run_command(cfg, lambda client: generate_batch(client.gateway, request))


@batch_app.command("download")
def batch_download(ctx: typer.Context, batch_id: str = typer.Argument(...)) -> None:
    """Download a batch's zipped results."""
    cfg = _require_config(ctx)
    _run_command(cfg, lambda client: download_batch_results(client.gateway, batch_id))


@generate_app.command("preview")
def generate_preview(
    ctx: typer.Context,
    template_id: int = typer.Argument(...),
    rows: int = typer.Option(5, min=1, help="Preview rows"),
    output_format: OutputFormat = typer.Option(
        OutputFormat.CSV, "--format", case_sensitive=False
    ),
) -> None:
    """Print the first rows of generated data."""
    cfg = _require_config(ctx)
    _run_command(
        cfg,
        lambda client: generate_data_preview(client.gateway, template_id, rows, output_format),
    )


@generate_app.command("download")
def generate_download(
    ctx: typer.Context,
    template_id: int = typer.Argument(...),
    rows: int | None = typer.Option(None, min=1, help="Rows to generate"),
    output_format: OutputFormat | None = typer.Option(
        None, "--format", case_sensitive=False
    ),
    filename: str | None = typer.Option(None, help="Base filename, without extension"),
) -> None:
    """Generate data and save it to the download directory."""
    cfg = _require_config(ctx)
    request = GenerationRequest(
        template_id=template_id,
        row_count=rows,
        output_format=output_format,
        filename=filename,
    )
    _run_command(cfg, lambda client: download_generated_data(client.gateway, request))


@pdf_app.command("analyze")
def pdf_analyze(
    ctx: typer.Context,
    path: Path = typer.Argument(..., exists=True, dir_okay=False, readable=True),
) -> None:
    """Upload a PDF and derive a template from it."""
    cfg = _require_config(ctx)
    file = FormFile.from_path(path, content_type="application/pdf")
    _run_command(cfg, lambda client: analyze_pdf(client.gateway, file))


@pdf_app.command("status")
def pdf_status(ctx: typer.Context, analysis_id: str = typer.Argument(...)) -> None:
    """Show analysis progress."""
    cfg = _require_config(ctx)
    _run_command(cfg, lambda client: check_analysis_status(client.gateway, analysis_id))


@pdf_app.command("variables")
def pdf_variables(ctx: typer.Context, analysis_id: str = typer.Argument(...)) -> None:
    """List variables extracted from an analyzed PDF."""
    cfg = _require_config(ctx)
    _run_command(cfg, lambda client: get_extracted_variables(client.gateway, analysis_id))


@pdf_app.command("wait")
def pdf_wait(
    ctx: typer.Context,
    analysis_id: str = typer.Argument(...),
    interval: float = typer.Option(1.0, min=0.0, help="Seconds between polls"),
    max_polls: int = typer.Option(60, min=1, help="Give up after this many polls"),
) -> None:
    """Poll until an analysis finishes and print the final status."""
    cfg = _require_config(ctx)
    _run_command(
        cfg,
        lambda client: wait_for_analysis(
            client.gateway,
            analysis_id,
            interval_seconds=interval,
            max_polls=max_polls,
        ),
    )


app.add_typer(templates_app, name="templates")
app.add_typer(schedules_app, name="schedules")
app.add_typer(batch_app, name="batch")
app.add_typer(generate_app, name="generate")
app.add_typer(pdf_app, name="pdf")


if __name__ == "__main__":
    app()
