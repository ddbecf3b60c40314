"""Configuration management for jrep."""

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class JrepSettings(BaseSettings):
    """Default search settings loaded from environment variables.

    Environment variables should be prefixed with JREP_
    Example: JREP_COLOR=never

    Attributes:
        color: When to color matches (auto colors only on a terminal)
        show_filenames: When to prefix matches with the file name
        cell_types: Cell types searched when none are given
        output_types: Output MIME types searched when none are given
        text_mime_types: MIME types whose data is searched line by line
        notebook_extension: File extension picked up when expanding directories
    """

    color: Literal["never", "always", "auto"] = Field(
        default="auto",
        description="When to color matches",
    )
    show_filenames: Literal["never", "always", "auto"] = Field(
        default="auto",
        description="When to show file names",
    )
    cell_types: list[str] = Field(
        default_factory=lambda: ["markdown", "code", "raw"],
        description="Cell types to search by default",
    )
    output_types: list[str] = Field(
        default_factory=lambda: ["text/plain"],
        description="Output MIME types to search by default",
    )
    text_mime_types: list[str] = Field(
        default_factory=lambda: ["text/plain"],
        description="MIME types treated as line-oriented text",
    )
    notebook_extension: str = Field(
        default=".ipynb",
        description="Extension of notebook files found in directories",
    )

    model_config = SettingsConfigDict(
        env_prefix="JREP_",
        case_sensitive=False,
        extra="ignore",
    )


# Global config instance (lazy-loaded)
_config: JrepSettings | None = None


def get_config() -> JrepSettings:
    """Get or create the global configuration instance.

    Returns:
        JrepSettings: The configuration object
    """
    global _config
    if _config is None:
        _config = JrepSettings()
    return _config


def reset_config() -> None:
    """Reset the global configuration (useful for testing)."""
    global _config
    _config = None
