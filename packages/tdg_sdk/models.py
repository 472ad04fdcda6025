"""Data-transfer shapes mirrored from the backend's camelCase JSON."""

from __future__ import annotations

from enum import Enum
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter
from pydantic.alias_generators import to_camel

T = TypeVar("T")


class WireModel(BaseModel):
    """Base for server records: camelCase on the wire, snake_case in Python."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    def to_wire(self) -> dict[str, Any]:
        """Return the JSON-ready camelCase representation, unset fields dropped."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class OutputFormat(str, Enum):
    """Serialization formats the generator supports."""

    CSV = "CSV"
    JSON = "JSON"
    XML = "XML"


class ScheduleStatus(str, Enum):
    """Lifecycle states of a generation schedule."""

    CREATED = "CREATED"
    ACTIVE = "ACTIVE"
    PAUSED = "PAUSED"
    COMPLETED = "COMPLETED"
    ERROR = "ERROR"


class AnalysisStatus(str, Enum):
    """States reported while a PDF is analyzed."""

    PROCESSING = "PROCESSING"
    COMPLETED = "COMPLETED"
    FAILED = "FAILED"


class Page(WireModel, Generic[T]):
    """Paginated list envelope."""

    content: list[T]
    total_elements: int
    total_pages: int
    size: int
    number: int


class ColumnDefinition(WireModel):
    """One generated column inside a template."""

    id: int | None = None
    name: str
    type: str
    sequence_number: int
    is_nullable: bool
    null_probability: float
    constraints: dict[str, Any] = Field(default_factory=dict)


class Template(WireModel):
    """Template describing the columns of generated data."""

    id: int | None = None
    name: str
    description: str
    column_definitions: list[ColumnDefinition] = Field(default_factory=list)
    default_output_format: OutputFormat
    default_row_count: int
    created_at: str | None = None
    updated_at: str | None = None
    created_by: str | None = None


class DataType(WireModel):
    """Metadata for one column type the generator understands."""

    type: str
    display_name: str
    category: str
    description: str
    constraints_metadata: dict[str, str] = Field(default_factory=dict)


class GenerationSchedule(WireModel):
    """Recurring generation job bound to a template."""

    id: int | None = None
    name: str
    description: str | None = None
    template_id: int
    status: ScheduleStatus | None = None
    next_run_time: str | None = None
    cron_expression: str | None = None
    row_count: int
    output_format: OutputFormat
    created_at: str | None = None
    updated_at: str | None = None
    created_by: str | None = None
    last_run_time: str | None = None
    last_run_result: str | None = None


class BatchGenerationRequest(WireModel):
    """Generate data for several templates in one call."""

    template_ids: list[int]
    row_count: int | None = None
    output_format: OutputFormat | None = None
    parallel: bool | None = None


class BatchGenerationResult(WireModel):
    """Outcome for one template of a batch."""

    template_id: int
    template_name: str | None = None
    success: bool
    message: str
    duration_millis: int
    output_format: OutputFormat | None = None
    data_size: int | None = None
    data_preview: str | None = None
    download_url: str | None = None


class GenerationRequest(WireModel):
    """Single-template generation request."""

    template_id: int
    row_count: int | None = None
    output_format: OutputFormat | None = None
    filename: str | None = None


class PreviewRequest(WireModel):
    """Request for the first rows of generated data."""

    template_id: int
    row_count: int = 5
    output_format: OutputFormat = OutputFormat.CSV


class PdfAnalysisProgress(WireModel):
    """Progress snapshot of a PDF analysis."""

    status: AnalysisStatus
    current_step: int
    total_steps: int
    step_name: str
    message: str | None = None
    progress: float

    @property
    def finished(self) -> bool:
        """Return True once the analysis reached a terminal state."""
        return self.status is not AnalysisStatus.PROCESSING


class ExtractedVariable(WireModel):
    """Variable detected in an analyzed PDF."""

    name: str
    original_name: str
    type: str
    confidence: float
    occurrences: int
    possible_types: list[str] = Field(default_factory=list)


TemplatePage = Page[Template]
SchedulePage = Page[GenerationSchedule]

template_list = TypeAdapter(list[Template]).validate_python
schedule_list = TypeAdapter(list[GenerationSchedule]).validate_python
data_type_map = TypeAdapter(dict[str, DataType]).validate_python
batch_result_list = TypeAdapter(list[BatchGenerationResult]).validate_python
variable_list = TypeAdapter(list[ExtractedVariable]).validate_python
string_list = TypeAdapter(list[str]).validate_python
