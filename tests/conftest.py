"""Pytest configuration and fixtures."""

import nbformat
import pytest

from jrep.config import reset_config

PNG_DATA = "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAYAAAAfFcSJAAAADUlEQVR42mNk+M9QDwADhgGAWjR9awAAAABJRU5ErkJggg=="


@pytest.fixture(autouse=True)
def reset_config_after_test():
    """Reset global config after each test."""
    yield
    reset_config()


@pytest.fixture
def sample_notebook_data():
    """Sample notebook data as it appears on disk."""
    return {
        "cells": [
            {
                "cell_type": "markdown",
                "source": ["# Analysis\n", "\n", "We use numpy here."],
                "metadata": {},
            },
            {
                "cell_type": "code",
                "execution_count": 1,
                "source": ["import numpy as np\n", "np.array([1, 2, 3])"],
                "outputs": [
                    {
                        "data": {"text/plain": ["array([1, 2, 3])"]},
                        "execution_count": 1,
                        "metadata": {},
                        "output_type": "execute_result",
                    }
                ],
                "metadata": {},
            },
            {
                "cell_type": "code",
                "execution_count": 2,
                "source": ["plt.plot([1, 2, 3], [1, 4, 9])\n", "plt.show()"],
                "outputs": [
                    {
                        "data": {"image/png": PNG_DATA, "text/plain": ["<Figure size 640x480>"]},
                        "metadata": {},
                        "output_type": "display_data",
                    },
                    {
                        "name": "stdout",
                        "output_type": "stream",
                        "text": ["done plotting\n"],
                    },
                ],
                "metadata": {},
            },
            {
                "cell_type": "raw",
                "source": ["raw numpy text"],
                "metadata": {},
            },
        ],
        "metadata": {},
        "nbformat": 4,
        "nbformat_minor": 5,
    }


def _write_notebook(path, cells):
    nb = nbformat.v4.new_notebook()
    nb.cells.extend(cells)
    with open(path, "w", encoding="utf-8") as f:
        nbformat.write(nb, f)
    return path


@pytest.fixture
def numpy_notebook(tmp_path):
    """A notebook with source, text output, image output and stream output."""
    v4 = nbformat.v4
    cells = [
        v4.new_markdown_cell("# Using numpy\nSee the user guide"),
        v4.new_code_cell(
            "import numpy as np\nnp.array([1, 2, 3])",
            execution_count=1,
            outputs=[
                v4.new_output(
                    "execute_result",
                    data={"text/plain": "array([1, 2, 3])"},
                    execution_count=1,
                )
            ],
        ),
        v4.new_code_cell(
            "plt.plot(x)\nprint('numpy done')",
            execution_count=2,
            outputs=[
                v4.new_output("display_data", data={"image/png": PNG_DATA}),
                v4.new_output("stream", name="stdout", text="numpy done\n"),
            ],
        ),
        v4.new_code_cell("# never run"),
    ]
    return _write_notebook(tmp_path / "numpy.ipynb", cells)


@pytest.fixture
def make_notebook(tmp_path):
    """Factory writing a notebook of nbformat v4 cells under tmp_path."""

    def make(name, cells):
        return _write_notebook(tmp_path / name, cells)

    return make


@pytest.fixture
def png_data():
    """Base64 payload of a 1x1 PNG image."""
    return PNG_DATA
