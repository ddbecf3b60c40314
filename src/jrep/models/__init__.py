"""Data models for jrep."""

from jrep.models.notebook import Cell, Notebook, Output
from jrep.models.search import (
    DEFAULT_CELL_TYPES,
    DEFAULT_OUTPUT_TYPES,
    MAX_LINE_DETAIL,
    TEXT_MIME_TYPES,
    MatchRecord,
    Origin,
    ScanHit,
    SearchOptions,
)

__all__ = [
    "Cell",
    "Notebook",
    "Output",
    "MatchRecord",
    "Origin",
    "ScanHit",
    "SearchOptions",
    "DEFAULT_CELL_TYPES",
    "DEFAULT_OUTPUT_TYPES",
    "TEXT_MIME_TYPES",
    "MAX_LINE_DETAIL",
]
