"""jrep - grep for Jupyter notebooks.

Parses notebooks first and only then searches the cells and outputs you ask
for, so embedded image data never swamps the results.
"""

__version__ = "0.1.0"


class JrepError(Exception):
    """Base exception for all jrep errors."""

    pass


class ConfigError(JrepError):
    """Raised when the search pattern or option combination is invalid."""

    pass


class PathError(JrepError):
    """Raised when an input path cannot be resolved to notebook files."""

    pass


class DecodeError(JrepError):
    """Raised when a notebook file cannot be read or decoded."""

    pass


class FieldShapeError(JrepError):
    """Raised when an output data entry has the wrong shape for its MIME type."""

    def __init__(
        self,
        message: str,
        mime_type: str,
        cell_index: int | None = None,
        output_index: int | None = None,
    ):
        super().__init__(message)
        self.mime_type = mime_type
        self.cell_index = cell_index
        self.output_index = output_index

    def __str__(self) -> str:
        where = []
        if self.cell_index is not None:
            where.append(f"cell {self.cell_index}")
        if self.output_index is not None:
            where.append(f"output {self.output_index}")
        where.append(f"'{self.mime_type}'")
        return f"{', '.join(where)}: {self.args[0]}"
