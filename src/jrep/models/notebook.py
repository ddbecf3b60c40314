"""Data models for notebook documents."""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _as_lines(value: Any) -> Any:
    """Split a multiline string into lines, keeping line endings.

    Notebooks written by hand or by older tools sometimes store line arrays
    as a single string. Anything that is not a string is left for
    validation to accept or reject.
    """
    if isinstance(value, str):
        return value.splitlines(keepends=True)
    return value


class Output(BaseModel):
    """Represents one output attached to a code cell.

    Attributes:
        output_type: Descriptive tag such as execute_result or stream
        data: Mapping of MIME type to payload (shape depends on MIME type)
        text: Literal text lines (used by stream outputs)
    """

    output_type: str
    data: Optional[dict[str, Any]] = None
    text: Optional[list[str]] = None

    model_config = ConfigDict(frozen=True)

    @field_validator("text", mode="before")
    @classmethod
    def split_text(cls, v: Any) -> Any:
        """Accept text stored as a single string."""
        return _as_lines(v)


class Cell(BaseModel):
    """Represents a single notebook cell.

    Attributes:
        cell_type: Type of cell (conventionally markdown, code or raw)
        execution_count: Execution number for executed code cells
        source: Cell content as a list of lines
        outputs: Outputs produced by a code cell
    """

    cell_type: str
    execution_count: Optional[int] = Field(default=None, ge=0)
    source: list[str] = Field(default_factory=list)
    outputs: Optional[list[Output]] = None

    model_config = ConfigDict(frozen=True)

    @field_validator("source", mode="before")
    @classmethod
    def split_source(cls, v: Any) -> Any:
        """Accept source stored as a single string."""
        return _as_lines(v)


class Notebook(BaseModel):
    """Decoded notebook: an ordered sequence of cells."""

    cells: list[Cell]

    model_config = ConfigDict(frozen=True)
