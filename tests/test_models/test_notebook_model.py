"""Tests for notebook data models."""

import pytest
from pydantic import ValidationError

from jrep.models import Cell, Notebook, Output


class TestCell:
    """Tests for Cell model."""

    def test_source_lines_kept_in_order(self):
        cell = Cell(cell_type="code", source=["a = 1\n", "b = 2"])
        assert cell.source == ["a = 1\n", "b = 2"]
        assert cell.execution_count is None
        assert cell.outputs is None

    def test_string_source_is_split_into_lines(self):
        """Test that a single-string source becomes a line list."""
        cell = Cell(cell_type="markdown", source="# Title\n\nBody")
        assert cell.source == ["# Title\n", "\n", "Body"]

    def test_other_cell_types_are_accepted(self):
        cell = Cell(cell_type="heading", source=[])
        assert cell.cell_type == "heading"

    def test_negative_execution_count_rejected(self):
        with pytest.raises(ValidationError):
            Cell(cell_type="code", source=[], execution_count=-1)

    def test_non_string_source_rejected(self):
        with pytest.raises(ValidationError):
            Cell(cell_type="code", source=[1, 2])

    def test_cell_is_immutable(self):
        cell = Cell(cell_type="code", source=[])
        with pytest.raises(ValidationError):
            cell.cell_type = "markdown"


class TestOutput:
    """Tests for Output model."""

    def test_data_and_text_are_optional(self):
        output = Output(output_type="error")
        assert output.data is None
        assert output.text is None

    def test_data_keeps_raw_shapes(self):
        """Test that payload shapes are not normalized."""
        output = Output(
            output_type="display_data",
            data={"text/plain": ["a\n", "b"], "image/png": "iVBOR", "application/json": {"k": 1}},
        )
        assert output.data["text/plain"] == ["a\n", "b"]
        assert output.data["image/png"] == "iVBOR"
        assert output.data["application/json"] == {"k": 1}

    def test_string_text_is_split_into_lines(self):
        output = Output(output_type="stream", text="one\ntwo\n")
        assert output.text == ["one\n", "two\n"]


class TestNotebook:
    """Tests for Notebook model."""

    def test_from_dict(self, sample_notebook_data):
        notebook = Notebook.model_validate(sample_notebook_data)
        assert [c.cell_type for c in notebook.cells] == ["markdown", "code", "code", "raw"]
        assert notebook.cells[1].outputs[0].output_type == "execute_result"
        assert notebook.cells[2].outputs[1].text == ["done plotting\n"]

    def test_cells_required(self):
        with pytest.raises(ValidationError):
            Notebook.model_validate({"metadata": {}})
