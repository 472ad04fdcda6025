"""Public tdg SDK interface for applications and the CLI."""

from packages.tdg_sdk.batch import batch_archive_filename, download_batch_results, generate_batch
from packages.tdg_sdk.client import TdgClient
from packages.tdg_sdk.config import GatewayConfig
from packages.tdg_sdk.errors import (
    EmptyErrorBody,
    ErrorBody,
    StructuredErrorBody,
    TextErrorBody,
)
from packages.tdg_sdk.gateway import RequestGateway
from packages.tdg_sdk.generation import (
    download_generated_data,
    generate_data,
    generate_data_preview,
    generated_filename,
)
from packages.tdg_sdk.models import (
    AnalysisStatus,
    BatchGenerationRequest,
    BatchGenerationResult,
    ColumnDefinition,
    DataType,
    ExtractedVariable,
    GenerationRequest,
    GenerationSchedule,
    OutputFormat,
    Page,
    PdfAnalysisProgress,
    SchedulePage,
    ScheduleStatus,
    Template,
    TemplatePage,
    WireModel,
)
from packages.tdg_sdk.observability import (
    FailureKind,
    GatewayFailure,
    GatewayObserver,
    LoggingGatewayObserver,
)
from packages.tdg_sdk.pdf import (
    analyze_pdf,
    check_analysis_status,
    get_extracted_variables,
    wait_for_analysis,
)
from packages.tdg_sdk.request import (
    FormBody,
    FormFile,
    HttpMethod,
    JsonBody,
    RequestSpec,
    ResponseKind,
)
from packages.tdg_sdk.result import ApiResult
from packages.tdg_sdk.schedules import (
    activate_schedule,
    create_schedule,
    delete_schedule,
    execute_schedule_now,
    get_next_execution_times,
    get_schedule,
    get_schedules,
    get_schedules_by_status,
    get_schedules_for_template,
    pause_schedule,
    update_schedule,
)
from packages.tdg_sdk.storage import BlobSink, FilesystemBlobSink
from packages.tdg_sdk.templates import (
    create_template,
    delete_template,
    get_data_types,
    get_template,
    get_templates,
    search_templates,
    update_template,
)

__all__ = [
    "AnalysisStatus",
    "ApiResult",
    "BatchGenerationRequest",
    "BatchGenerationResult",
    "BlobSink",
    "ColumnDefinition",
    "DataType",
    "EmptyErrorBody",
    "ErrorBody",
    "ExtractedVariable",
    "FailureKind",
    "FilesystemBlobSink",
    "FormBody",
    "FormFile",
    "GatewayConfig",
    "GatewayFailure",
    "GatewayObserver",
    "GenerationRequest",
    "GenerationSchedule",
    "HttpMethod",
    "JsonBody",
    "LoggingGatewayObserver",
    "OutputFormat",
    "Page",
    "PdfAnalysisProgress",
    "RequestGateway",
    "RequestSpec",
    "ResponseKind",
    "SchedulePage",
    "ScheduleStatus",
    "StructuredErrorBody",
    "Template",
    "TemplatePage",
    "TdgClient",
    "TextErrorBody",
    "WireModel",
    "activate_schedule",
    "analyze_pdf",
    "batch_archive_filename",
    "check_analysis_status",
    "create_schedule",
    "create_template",
    "delete_schedule",
    "delete_template",
    "download_batch_results",
    "download_generated_data",
    "execute_schedule_now",
    "generate_batch",
    "generate_data",
    "generate_data_preview",
    "generated_filename",
    "get_data_types",
    "get_extracted_variables",
    "get_next_execution_times",
    "get_schedule",
    "get_schedules",
    "get_schedules_by_status",
    "get_schedules_for_template",
    "get_template",
    "get_templates",
    "pause_schedule",
    "search_templates",
    "update_schedule",
    "update_template",
    "wait_for_analysis",
]
