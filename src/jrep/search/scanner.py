"""Cell selection and scanning."""

import logging
from collections.abc import Callable, Iterator
from typing import Any, Optional

from jrep import FieldShapeError
from jrep.models import Cell, Notebook, Origin, Output, ScanHit, SearchOptions
from jrep.search.matcher import match_lines, match_opaque

logger = logging.getLogger(__name__)

ErrorHandler = Callable[[FieldShapeError], None]


class CellScanner:
    """Scan a notebook's cells and outputs according to search options.

    Cells are visited in document order. For each selected cell the source
    is matched first, then each output in order. A malformed output data
    entry is reported through ``on_error`` and skipped; the scan continues.

    Attributes:
        found_match: True once any hit has been produced
    """

    def __init__(self, options: SearchOptions, on_error: Optional[ErrorHandler] = None):
        """Initialize the scanner.

        Args:
            options: Search options
            on_error: Called with each recoverable data entry error
                (logged as a warning when None)
        """
        self.options = options
        self.on_error = on_error or _log_field_error
        self.found_match = False

    def scan(self, notebook: Notebook) -> Iterator[ScanHit]:
        """Lazily yield every hit in ``notebook``.

        Args:
            notebook: Decoded notebook

        Yields:
            ScanHit: Match record tagged with its cell and origin
        """
        for cell_index, cell in enumerate(notebook.cells):
            if cell.cell_type not in self.options.cell_types:
                continue
            for hit in self._scan_cell(cell_index, cell):
                self.found_match = True
                yield hit

    def _scan_cell(self, cell_index: int, cell: Cell) -> Iterator[ScanHit]:
        opts = self.options

        if opts.include_source:
            for record in match_lines(cell.source, opts.pattern, opts.invert_match):
                yield ScanHit(record, cell_index, cell.execution_count, Origin.SOURCE)

        if not opts.include_output or not cell.outputs:
            return

        for output_index, output in enumerate(cell.outputs):
            yield from self._scan_output(cell_index, cell, output_index, output)

    def _scan_output(
        self, cell_index: int, cell: Cell, output_index: int, output: Output
    ) -> Iterator[ScanHit]:
        opts = self.options

        for mime_type, value in (output.data or {}).items():
            if mime_type not in opts.output_types:
                continue

            try:
                if mime_type in opts.text_mime_types:
                    lines = _text_payload(value, mime_type)
                    records = match_lines(lines, opts.pattern, opts.invert_match)
                    origin = Origin.OUTPUT_TEXT
                else:
                    datum = _opaque_payload(value, mime_type)
                    record = match_opaque(datum, opts.pattern, opts.invert_match)
                    records = [record] if record else []
                    origin = Origin.OUTPUT_DATA
            except FieldShapeError as e:
                e.cell_index = cell_index
                e.output_index = output_index
                self.on_error(e)
                continue

            for record in records:
                yield ScanHit(
                    record,
                    cell_index,
                    cell.execution_count,
                    origin,
                    output_index=output_index,
                    mime_type=mime_type,
                )

        # Stream outputs carry resolved text directly; not gated by MIME type.
        if output.text is not None:
            for record in match_lines(output.text, opts.pattern, opts.invert_match):
                yield ScanHit(
                    record,
                    cell_index,
                    cell.execution_count,
                    Origin.OUTPUT_TEXT,
                    output_index=output_index,
                )


def scan(
    notebook: Notebook, options: SearchOptions, on_error: Optional[ErrorHandler] = None
) -> Iterator[ScanHit]:
    """Lazily yield every hit in ``notebook`` for ``options``."""
    return CellScanner(options, on_error=on_error).scan(notebook)


def _text_payload(value: Any, mime_type: str) -> list[str]:
    """Convert a text MIME payload to a list of lines."""
    if isinstance(value, str):
        return value.splitlines(keepends=True)
    if not isinstance(value, list):
        raise FieldShapeError(
            f"Expected an array for output text values, got {type(value).__name__}",
            mime_type,
        )
    if not all(isinstance(el, str) for el in value):
        raise FieldShapeError(
            "Expected a string for all elements of output text value", mime_type
        )
    return value


def _opaque_payload(value: Any, mime_type: str) -> str:
    """Convert a non-text MIME payload to a single string."""
    if not isinstance(value, str):
        raise FieldShapeError(
            f"Unexpected type for non-text data: {type(value).__name__}", mime_type
        )
    return value


def _log_field_error(error: FieldShapeError) -> None:
    logger.warning("Skipping output data entry: %s", error)
