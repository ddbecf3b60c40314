"""Data models for search configuration and match results."""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from jrep import ConfigError

DEFAULT_CELL_TYPES = ("markdown", "code", "raw")
DEFAULT_OUTPUT_TYPES = ("text/plain",)
TEXT_MIME_TYPES = ("text/plain",)

# Selects the most verbose detail template.
MAX_LINE_DETAIL = 255


class Origin(Enum):
    """Where in a cell a match was found."""

    SOURCE = "source"
    OUTPUT_TEXT = "output/text"
    OUTPUT_DATA = "output/data"


@dataclass(frozen=True)
class MatchRecord:
    """One matched line (or opaque payload).

    Spans are UTF-8 byte offsets into ``line`` with exclusive ends. They are
    empty for opaque matches and for inverted matching.
    """

    line: str
    line_number: int
    spans: tuple[tuple[int, int], ...] = ()
    is_text: bool = True


@dataclass(frozen=True)
class ScanHit:
    """A match record plus where it came from."""

    record: MatchRecord
    cell_index: int
    execution_count: Optional[int]
    origin: Origin
    output_index: Optional[int] = None
    mime_type: Optional[str] = None


class SearchOptions(BaseModel):
    """Resolved configuration for one search run.

    Attributes:
        pattern: Compiled regular expression (always multiline)
        invert_match: Report lines that do not match
        cell_types: Cell types to scan
        output_types: Output MIME types to scan (empty disables outputs)
        text_mime_types: MIME types whose data is matched line by line
        include_source: Whether to scan cell source
        show_file_name: Prefix each match with its file name
        show_line_detail: Detail verbosity (0 = none)
        color_matches: Emphasize matched text
        recursive: Descend into subdirectories
    """

    pattern: re.Pattern
    invert_match: bool = False
    cell_types: frozenset[str] = frozenset(DEFAULT_CELL_TYPES)
    output_types: frozenset[str] = frozenset(DEFAULT_OUTPUT_TYPES)
    text_mime_types: frozenset[str] = frozenset(TEXT_MIME_TYPES)
    include_source: bool = True
    show_file_name: bool = False
    show_line_detail: int = Field(default=0, ge=0, le=MAX_LINE_DETAIL)
    color_matches: bool = False
    recursive: bool = False

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    @property
    def include_output(self) -> bool:
        """Output scanning is on whenever any output type is selected."""
        return bool(self.output_types)

    @classmethod
    def build(cls, pattern: str, ignore_case: bool = False, **kwargs) -> "SearchOptions":
        """Compile ``pattern`` and create options.

        Multiline mode is always on so that ``$`` matches before the newline
        that ends each notebook line.

        Raises:
            ConfigError: If the pattern is not a valid regular expression
        """
        flags = re.MULTILINE
        if ignore_case:
            flags |= re.IGNORECASE
        try:
            compiled = re.compile(pattern, flags)
        except re.error as e:
            raise ConfigError(f"The search pattern was not valid: {e}") from e
        return cls(pattern=compiled, **kwargs)
