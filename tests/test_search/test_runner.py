"""Tests for the per-file search driver."""

import io
import json

import pytest
from rich.console import Console

from jrep import DecodeError
from jrep.models import SearchOptions
from jrep.output.renderer import PlainSink, ResultRenderer
from jrep.search.runner import NotebookSearch, search_notebook


def make_search(pattern="numpy", **kwargs):
    out = io.StringIO()
    err = io.StringIO()
    options = SearchOptions.build(pattern, **kwargs)
    search = NotebookSearch(
        options,
        ResultRenderer(options, PlainSink(out)),
        err_console=Console(file=err, width=200),
    )
    return search, out, err


class TestNotebookSearch:
    """Tests for NotebookSearch class."""

    def test_search_file(self, numpy_notebook):
        search, out, err = make_search(show_line_detail=3)
        assert search.search_file(numpy_notebook) is True
        assert out.getvalue().splitlines() == [
            "c.0 (source) l.1: \t# Using numpy",
            "c.1 [1] (source) l.1: \timport numpy as np",
            "c.2 [2] (source) l.2: \tprint('numpy done')",
            "c.2 [2] (output/text) l.1: \tnumpy done",
        ]
        assert err.getvalue() == ""

    def test_no_match(self, numpy_notebook):
        search, out, _ = make_search("tensorflow")
        assert search.search_file(numpy_notebook) is False
        assert out.getvalue() == ""

    def test_bad_file_reported_and_skipped(self, tmp_path, numpy_notebook):
        bad = tmp_path / "bad.ipynb"
        bad.write_text("not json", encoding="utf-8")
        search, out, err = make_search(show_file_name=True)

        assert search.search_files([bad, numpy_notebook]) is True
        assert f"Error in file {bad}" in err.getvalue()
        assert search.failed_files == [bad]
        assert f"{numpy_notebook}: " in out.getvalue()

    def test_field_error_attributed_to_file(self, tmp_path):
        path = tmp_path / "shape.ipynb"
        path.write_text(
            json.dumps(
                {
                    "cells": [
                        {
                            "cell_type": "code",
                            "execution_count": 1,
                            "source": ["numpy\n"],
                            "outputs": [{"output_type": "execute_result", "data": {"text/plain": 5}}],
                        }
                    ]
                }
            ),
            encoding="utf-8",
        )
        search, out, err = make_search()

        assert search.search_files([path]) is True
        assert out.getvalue() == "\tnumpy\n"
        assert f"Error in file {path}: cell 0, output 0, 'text/plain'" in err.getvalue()
        assert search.failed_files == []

    def test_search_notebook_raises_decode_error(self, tmp_path):
        options = SearchOptions.build("x")
        renderer = ResultRenderer(options, PlainSink(io.StringIO()))
        with pytest.raises(DecodeError):
            search_notebook(tmp_path / "missing.ipynb", options, renderer)
