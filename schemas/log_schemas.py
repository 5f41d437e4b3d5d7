from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

FieldValue = Optional[Union[str, int, float]]
FieldSet = Dict[str, FieldValue]


class LogLevel(str, Enum):
    """Levels understood by the remote sink"""
    INFORMATION = "Information"
    WARNING = "Warning"
    ERROR = "Error"


class StackFrame(BaseModel):
    """Schema for one resolved stack frame"""
    model_config = ConfigDict(frozen=True)

    function_name: str = Field(default="<anonymous>", description="Function or method name")
    file_name: str = Field(default="<unknown>", description="Source file the frame points into")
    line_number: int = Field(default=0, description="1-based line number")
    column_number: int = Field(default=0, description="Column offset, 0 when unknown")

    def __str__(self) -> str:
        return f"{self.function_name}@{self.file_name}:{self.line_number}:{self.column_number}"


class PipelineConfig(BaseModel):
    """Schema for the active pipeline configuration"""
    model_config = ConfigDict(frozen=True)

    app_name: str = Field(description="Application name reported to the sink")
    log_endpoint: str = Field(description="URL the transport delivers records to")
    environment: str = Field(description="Deployment environment, e.g. 'production'")


class LogRecord(BaseModel):
    """Schema for a finished record handed to the transport"""
    model_config = ConfigDict(frozen=True)

    level: LogLevel = Field(description="Record severity")
    message: str = Field(description="Normalized message text")
    fields: Mapping[str, FieldValue] = Field(
        default_factory=dict, validate_default=True, description="Standard and call-specific fields")

    @field_validator("fields", mode="before")
    @classmethod
    def _copy_fields(cls, value: Any) -> Any:
        return dict(value) if value is not None else {}

    @field_validator("fields", mode="after")
    @classmethod
    def _freeze_fields(cls, value: Mapping[str, FieldValue]) -> Mapping[str, FieldValue]:
        # Read-only view over a private copy; the record cannot change after construction.
        return MappingProxyType(dict(value))

    def to_wire(self) -> Dict[str, Any]:
        """Return the JSON-ready ``{level, message, fields}`` shape the sink expects."""
        return {
            "level": self.level.value,
            "message": self.message,
            "fields": dict(self.fields),
        }
