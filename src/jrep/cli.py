"""Command-line interface for jrep."""

import logging
import sys
from pathlib import Path
from typing import NoReturn, Optional

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from jrep import ConfigError, PathError, __version__
from jrep.config import get_config
from jrep.models import MAX_LINE_DETAIL, SearchOptions
from jrep.output.renderer import ResultRenderer, make_sink
from jrep.paths import PathResolver
from jrep.search.runner import NotebookSearch

# sysexits.h EX_USAGE
EXIT_USAGE = 64
EXIT_NO_MATCH = 1

err_console = Console(stderr=True)


def _setup_logging(quiet: bool, debug: bool) -> None:
    level = logging.DEBUG if debug else logging.ERROR if quiet else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=err_console, show_time=False, show_path=False)],
        force=True,
    )


def _fail(message: str) -> NoReturn:
    err_console.print(f"[red]Error:[/red] {escape(message)}", highlight=False, soft_wrap=True)
    sys.exit(EXIT_USAGE)


class JrepCommand(click.Command):
    """Command whose usage errors exit with EX_USAGE like every other setup error."""

    def parse_args(self, ctx: click.Context, args: list[str]) -> list[str]:
        try:
            return super().parse_args(ctx, args)
        except click.UsageError as e:
            e.exit_code = EXIT_USAGE
            raise


def resolve_show_filenames(policy: str, paths: tuple[Path, ...]) -> bool:
    """Decide whether matches are prefixed with their file name.

    'auto' shows names when more than one path was given or any given path
    is a directory.
    """
    if policy == "auto":
        return len(paths) > 1 or any(p.is_dir() for p in paths)
    return policy == "always"


def resolve_color(policy: str) -> bool:
    """Decide whether to color matches; 'auto' colors only on a terminal."""
    if policy == "auto":
        return sys.stdout.isatty()
    return policy == "always"


def resolve_output_types(
    output_types: tuple[str, ...],
    include_output: bool,
    no_include_output: bool,
    default: list[str],
) -> list[str]:
    """Combine the output type options.

    --no-include-output wins over --include-output, which wins over -O.
    Any -O value replaces the default list.
    """
    if no_include_output:
        return []
    if include_output or not output_types:
        return list(default)
    return list(output_types)


@click.command(cls=JrepCommand, context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(version=__version__, prog_name="jrep")
@click.argument("pattern")
@click.argument("paths", nargs=-1, type=click.Path(path_type=Path))
@click.option(
    "--color",
    type=click.Choice(["never", "always", "auto"]),
    default=None,
    help="When to color matches (default: auto, color only on a terminal)",
)
@click.option("--ignore-case", "-i", is_flag=True, help="Ignore case when matching")
@click.option(
    "--invert-match", "-v", is_flag=True, help="Match lines that do *not* contain PATTERN"
)
@click.option(
    "--include-source/--no-include-source",
    " /-X",
    default=True,
    help="Search cell source (default). Whichever of the pair comes last wins.",
)
@click.option(
    "--cell-type",
    "-t",
    "cell_types",
    type=click.Choice(["markdown", "code", "raw"]),
    multiple=True,
    help="Cell type to search; repeat for several (default: all)",
)
@click.option(
    "--output-type",
    "-O",
    "output_types",
    multiple=True,
    help="Output type to search, e.g. image/png; repeat for several (default: text/plain)",
)
@click.option(
    "--include-output",
    is_flag=True,
    help="Reset searched output types to the default (text/plain)",
)
@click.option("--no-include-output", is_flag=True, help="Do not search any cell output")
@click.option(
    "--line-info",
    "-n",
    count=True,
    help="Show where each match is in the notebook; repeat for more detail",
)
@click.option(
    "--max-line-info", "-N", is_flag=True, help="Show the maximum line detail (like -nnnn)"
)
@click.option(
    "--show-filenames",
    "-H",
    type=click.Choice(["never", "always", "auto"]),
    default=None,
    help="When to show file names (default: auto, if several files or a directory)",
)
@click.option(
    "--always-show-filename", "-F", is_flag=True, help="Alias for --show-filenames=always"
)
@click.option("--recursive", "-R", is_flag=True, help="Search directories recursively")
@click.option("--quiet", "-q", is_flag=True, help="Only report errors, not warnings")
@click.option("--debug", is_flag=True, help="Log debug details to stderr")
def main(
    pattern: str,
    paths: tuple[Path, ...],
    color: Optional[str],
    ignore_case: bool,
    invert_match: bool,
    include_source: bool,
    cell_types: tuple[str, ...],
    output_types: tuple[str, ...],
    include_output: bool,
    no_include_output: bool,
    line_info: int,
    max_line_info: bool,
    show_filenames: Optional[str],
    always_show_filename: bool,
    recursive: bool,
    quiet: bool,
    debug: bool,
):
    """grep for Jupyter notebooks.

    Search PATHS (notebook files, or directories holding .ipynb files;
    default: the current directory) for the regular expression PATTERN.
    Cell source of every cell type and text/plain outputs are searched by
    default; image and other non-text output is skipped unless requested
    with -O.
    """
    _setup_logging(quiet, debug)
    config = get_config()
    paths = paths or (Path("."),)

    filename_policy = "always" if always_show_filename else (show_filenames or config.show_filenames)

    try:
        options = SearchOptions.build(
            pattern,
            ignore_case=ignore_case,
            invert_match=invert_match,
            cell_types=cell_types or config.cell_types,
            output_types=resolve_output_types(
                output_types, include_output, no_include_output, config.output_types
            ),
            text_mime_types=config.text_mime_types,
            include_source=include_source,
            show_file_name=resolve_show_filenames(filename_policy, paths),
            show_line_detail=MAX_LINE_DETAIL if max_line_info else min(line_info, MAX_LINE_DETAIL),
            color_matches=resolve_color(color or config.color),
            recursive=recursive,
        )
    except ConfigError as e:
        _fail(str(e))

    resolver = PathResolver(recursive=options.recursive, extension=config.notebook_extension)
    try:
        files = resolver.resolve(paths)
    except PathError as e:
        _fail(str(e))
    if not files:
        _fail("No notebook files listed or found in the given directories.")

    renderer = ResultRenderer(options, make_sink(options.color_matches, sys.stdout))
    search = NotebookSearch(options, renderer, err_console=err_console)
    found = search.search_files(files)

    sys.exit(0 if found else EXIT_NO_MATCH)


if __name__ == "__main__":
    main()
