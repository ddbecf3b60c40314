"""Expansion of input paths into notebook files."""

import logging
import os
import stat
from collections.abc import Iterable
from pathlib import Path
from typing import Literal, Optional

from jrep import PathError

logger = logging.getLogger(__name__)

PathKind = Literal["file", "dir", "other"]


class LocalFileSystem:
    """The real file system, as seen by the path resolver."""

    def kind(self, path: Path) -> PathKind:
        """Classify ``path``, following symlinks.

        Raises:
            OSError: If the path's metadata cannot be read
        """
        mode = os.stat(path).st_mode
        if stat.S_ISDIR(mode):
            return "dir"
        if stat.S_ISREG(mode):
            return "file"
        return "other"

    def canonical(self, path: Path) -> str:
        """Absolute path with every symlink resolved."""
        return str(path.resolve(strict=True))

    def list_dir(self, path: Path) -> list[Path]:
        """Immediate entries of a directory, in the order the OS gives them."""
        with os.scandir(path) as it:
            return [Path(entry.path) for entry in it]


class PathResolver:
    """Expand files and directories into a list of notebook files.

    Explicit files are always included whatever their extension. Directories
    contribute the files whose names end with ``extension``, and with
    ``recursive`` their subdirectories too. Each directory is entered at most
    once (by canonical path), so symlink cycles terminate.
    """

    def __init__(
        self,
        recursive: bool = False,
        extension: str = ".ipynb",
        fs: Optional[LocalFileSystem] = None,
    ):
        """Initialize the resolver.

        Args:
            recursive: Descend into subdirectories
            extension: Suffix of notebook files found in directories
            fs: File system to resolve against (the local one if None)
        """
        self.recursive = recursive
        self.extension = extension
        self.fs = fs or LocalFileSystem()

    def resolve(self, input_paths: Iterable[Path | str]) -> list[Path]:
        """Resolve input paths into notebook files.

        Args:
            input_paths: Files and directories, in the order given

        Returns:
            list[Path]: De-duplicated notebook files in discovery order

        Raises:
            PathError: If an input path cannot be read
        """
        files: list[Path] = []
        seen_files: set[str] = set()
        visited_dirs: set[str] = set()

        for raw in input_paths:
            path = Path(raw)
            try:
                kind = self.fs.kind(path)
                if kind == "dir":
                    self._collect(path, files, seen_files, visited_dirs, top_level=True)
                elif kind == "file":
                    self._add_file(path, files, seen_files)
                else:
                    logger.warning("Skipping %s: not a regular file or directory", path)
            except OSError as e:
                raise PathError(f"Cannot read {path}: {e.strerror or e}") from e

        logger.debug("Resolved %d notebook file(s)", len(files))
        return files

    def _collect(
        self,
        dirpath: Path,
        files: list[Path],
        seen_files: set[str],
        visited_dirs: set[str],
        top_level: bool = False,
    ) -> None:
        canon = self.fs.canonical(dirpath)
        if canon in visited_dirs:
            logger.debug("Already visited %s, skipping", dirpath)
            return
        visited_dirs.add(canon)

        try:
            entries = self.fs.list_dir(dirpath)
        except OSError as e:
            if top_level:
                raise
            logger.warning("Skipping directory %s: %s", dirpath, e.strerror or e)
            return

        for entry in entries:
            try:
                kind = self.fs.kind(entry)
                if kind == "dir" and self.recursive:
                    self._collect(entry, files, seen_files, visited_dirs)
                elif kind == "file" and entry.name.endswith(self.extension):
                    self._add_file(entry, files, seen_files)
            except OSError as e:
                logger.warning("Skipping %s: %s", entry, e.strerror or e)

    def _add_file(self, path: Path, files: list[Path], seen_files: set[str]) -> None:
        canon = self.fs.canonical(path)
        if canon in seen_files:
            return
        seen_files.add(canon)
        files.append(path)


def resolve_paths(
    input_paths: Iterable[Path | str], recursive: bool = False, extension: str = ".ipynb"
) -> list[Path]:
    """Resolve input paths into notebook files on the local file system."""
    return PathResolver(recursive=recursive, extension=extension).resolve(input_paths)
