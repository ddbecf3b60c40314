"""Per-file search driver."""

import logging
from collections.abc import Iterable
from pathlib import Path
from typing import Optional

from rich.console import Console

from jrep import DecodeError, FieldShapeError
from jrep.models import SearchOptions
from jrep.output.renderer import ResultRenderer
from jrep.parsing.notebook import NotebookDecoder
from jrep.search.scanner import CellScanner

logger = logging.getLogger(__name__)


class NotebookSearch:
    """Search notebook files one at a time and render every hit.

    A file that cannot be decoded is reported on ``err_console`` and
    skipped. Malformed output entries are reported the same way, attributed
    to their file, and the rest of that file is still searched.
    """

    def __init__(
        self,
        options: SearchOptions,
        renderer: ResultRenderer,
        err_console: Optional[Console] = None,
        decoder: Optional[NotebookDecoder] = None,
    ):
        self.options = options
        self.renderer = renderer
        self.err_console = err_console or Console(stderr=True)
        self.decoder = decoder or NotebookDecoder()
        self.failed_files: list[Path] = []

    def search_file(self, filepath: Path | str) -> bool:
        """Search one notebook.

        Args:
            filepath: Notebook to search

        Returns:
            bool: True if anything matched

        Raises:
            DecodeError: If the notebook cannot be read or decoded
        """
        notebook = self.decoder.read(filepath)

        def report(error: FieldShapeError) -> None:
            logger.debug("Field error in %s: %r", filepath, error)
            self._report(filepath, str(error))

        scanner = CellScanner(self.options, on_error=report)
        for hit in scanner.scan(notebook):
            self.renderer.render(hit, filepath)
        return scanner.found_match

    def search_files(self, filepaths: Iterable[Path | str]) -> bool:
        """Search each notebook in turn, continuing past bad files.

        Returns:
            bool: True if anything matched in any file
        """
        found = False
        for filepath in filepaths:
            logger.debug("Searching %s", filepath)
            try:
                found = self.search_file(filepath) or found
            except DecodeError as e:
                self.failed_files.append(Path(filepath))
                self._report(filepath, str(e))
        return found

    def _report(self, filepath: Path | str, message: str) -> None:
        self.err_console.print(
            f"Error in file {filepath}: {message}", markup=False, highlight=False, soft_wrap=True
        )


def search_notebook(
    filepath: Path | str, options: SearchOptions, renderer: ResultRenderer
) -> bool:
    """Search a single notebook and render its hits.

    Raises:
        DecodeError: If the notebook cannot be read or decoded
    """
    return NotebookSearch(options, renderer).search_file(filepath)
