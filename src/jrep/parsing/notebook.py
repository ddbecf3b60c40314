"""Jupyter notebook decoding."""

import logging
from pathlib import Path

from pydantic import ValidationError

from jrep import DecodeError
from jrep.models import Notebook

logger = logging.getLogger(__name__)


class NotebookDecoder:
    """Decoder for Jupyter notebooks.

    Reads the raw JSON document into the cell/output model without any
    normalization, so output payloads keep the shape they have on disk.
    """

    def decode(self, raw: bytes | str) -> Notebook:
        """Decode notebook content.

        Args:
            raw: Document content (UTF-8 bytes or text)

        Returns:
            Notebook: Decoded notebook

        Raises:
            DecodeError: If the content is not valid JSON or not shaped like a notebook
        """
        try:
            return Notebook.model_validate_json(raw)
        except ValidationError as e:
            raise DecodeError(f"Not a valid notebook: {_first_error(e)}") from e

    def read(self, filepath: Path | str) -> Notebook:
        """Read and decode a notebook file.

        Args:
            filepath: Path to the notebook (any extension)

        Returns:
            Notebook: Decoded notebook

        Raises:
            DecodeError: If the file cannot be read or decoded
        """
        filepath = Path(filepath)
        try:
            raw = filepath.read_bytes()
        except OSError as e:
            raise DecodeError(f"Failed to read {filepath}: {e.strerror or e}") from e

        notebook = self.decode(raw)
        logger.debug("Decoded %s: %d cells", filepath, len(notebook.cells))
        return notebook


def _first_error(error: ValidationError) -> str:
    """Summarize a validation error by its first problem."""
    details = error.errors()
    if not details:
        return str(error)
    first = details[0]
    loc = ".".join(str(part) for part in first["loc"])
    more = f" (and {len(details) - 1} more)" if len(details) > 1 else ""
    if loc:
        return f"{loc}: {first['msg']}{more}"
    return f"{first['msg']}{more}"
