"""Rendering of search hits to an output stream."""

import sys
from pathlib import Path
from typing import Optional, TextIO

from rich.color import ColorSystem
from rich.console import Console
from rich.style import Style

from jrep.models import ScanHit, SearchOptions

NON_TEXT_NOTICE = "Non-text output data matches."

EMPHASIS = Style(color="bright_red", bold=True)


class PlainSink:
    """Write text without any styling."""

    def __init__(self, stream: TextIO):
        self.stream = stream

    def write(self, text: str) -> None:
        self.stream.write(text)

    def write_emphasized(self, text: str) -> None:
        self.stream.write(text)

    def end_line(self) -> None:
        self.stream.write("\n")
        self.stream.flush()


class StyledSink(PlainSink):
    """Write text, wrapping emphasized runs in terminal style codes."""

    def __init__(self, console: Console):
        super().__init__(console.file)
        self.console = console

    def write_emphasized(self, text: str) -> None:
        if text:
            self.stream.write(EMPHASIS.render(text, color_system=ColorSystem.STANDARD))


def make_sink(color: bool, stream: Optional[TextIO] = None) -> PlainSink:
    """Pick the output sink once for the whole run.

    Coloring falls back to plain text when the terminal cannot show it
    (for example a dumb terminal or NO_COLOR set).

    Args:
        color: Whether matches should be emphasized
        stream: Destination (defaults to stdout)

    Returns:
        PlainSink: The sink to render into
    """
    stream = stream or sys.stdout
    if not color:
        return PlainSink(stream)

    console = Console(file=stream, force_terminal=True)
    if console.color_system is None or console.no_color:
        return PlainSink(stream)
    return StyledSink(console)


class ResultRenderer:
    """Turn search hits into output lines.

    Each line is built from an optional file name, a location prefix whose
    detail depends on ``show_line_detail``, and the matched line itself
    (or a fixed notice for non-text data).
    """

    def __init__(self, options: SearchOptions, sink: PlainSink):
        """Initialize the renderer.

        Args:
            options: Search options (file name and detail settings)
            sink: Output sink chosen by ``make_sink``
        """
        self.options = options
        self.sink = sink

    def render(self, hit: ScanHit, filename: Path | str) -> None:
        """Write one hit as a single line.

        Args:
            hit: The hit to render
            filename: File the hit was found in
        """
        self.sink.write(self.prefix(hit, filename))

        record = hit.record
        if not record.is_text:
            self.sink.write_emphasized(NON_TEXT_NOTICE)
        elif not self.options.color_matches:
            self.sink.write(trim_newline(record.line))
        else:
            self._write_highlighted(record.line, record.spans)

        self.sink.end_line()

    def prefix(self, hit: ScanHit, filename: Path | str) -> str:
        """Build the file name and location prefix for ``hit``."""
        parts = []
        if self.options.show_file_name:
            parts.append(f"{filename}: ")

        level = self.options.show_line_detail
        if level == 0:
            parts.append("\t")
        else:
            parts.append(f"{line_detail(hit, level)}: \t")
        return "".join(parts)

    def _write_highlighted(self, line: str, spans: tuple[tuple[int, int], ...]) -> None:
        # Spans are byte offsets, so slice the encoded line rather than the str.
        data = line.encode("utf-8")
        stop = len(data)
        if data.endswith(b"\n"):
            stop -= 1
            if data[:stop].endswith(b"\r"):
                stop -= 1

        pos = 0
        for start, end in spans:
            start = min(start, stop)
            end = min(end, stop)
            self.sink.write(data[pos:start].decode("utf-8"))
            self.sink.write_emphasized(data[start:end].decode("utf-8"))
            pos = end
        self.sink.write(data[pos:stop].decode("utf-8"))


def line_detail(hit: ScanHit, level: int) -> str:
    """Describe where a hit is, with more detail at higher levels.

    Args:
        hit: The hit to describe
        level: Detail level, 1 or higher

    Returns:
        str: Location description (line numbers are 1-based)
    """
    line_no = hit.record.line_number + 1
    origin = hit.origin.value

    if level >= 4:
        count = hit.execution_count if hit.execution_count is not None else "None"
        return f"Cell #{hit.cell_index} (exec. [{count}]) {origin}, line {line_no}"

    exec_count = f" [{hit.execution_count}]" if hit.execution_count is not None else ""
    if level == 1:
        return f"c.{hit.cell_index} l.{line_no}"
    if level == 2:
        return f"c.{hit.cell_index}{exec_count} l.{line_no}"
    return f"c.{hit.cell_index}{exec_count} ({origin}) l.{line_no}"


def trim_newline(line: str) -> str:
    """Remove one trailing newline and then one trailing carriage return."""
    if line.endswith("\n"):
        line = line[:-1]
        if line.endswith("\r"):
            line = line[:-1]
    return line
