"""Configuration management using pydantic-settings."""

from functools import lru_cache
from pathlib import Path
from typing import Annotated, Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from mflow.core.constants import DEFAULT_DELIMITER, MFW_EXTENSION, HeaderDialect


class Settings(BaseSettings):
    """Application settings with environment variable support."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="MFLOW_",
        extra="ignore",
    )

    # Header Parsing
    header_dialect: Annotated[
        HeaderDialect,
        Field(description="Header syntax, or auto to detect it per flow"),
    ] = HeaderDialect.AUTO

    delimiter: Annotated[
        str,
        Field(min_length=1, description="Lane separator for the delimited dialect"),
    ] = DEFAULT_DELIMITER

    # Layout
    strict_self_transitions: Annotated[
        bool,
        Field(description="Treat arrows to the current lane as document errors"),
    ] = False

    # Input/Output
    file_extension: Annotated[
        str,
        Field(description="Required extension of input documents"),
    ] = MFW_EXTENSION

    output_format: Annotated[
        Literal["html", "csv"],
        Field(description="Output format: html page or csv tables"),
    ] = "html"

    output_dir: Annotated[
        Path | None,
        Field(description="Output directory (None to write beside the input)"),
    ] = None

    # Logging Configuration
    log_level: Annotated[
        str,
        Field(description="Logging level"),
    ] = "INFO"

    log_file: Annotated[
        Path | None,
        Field(description="Log file path (None for stdout only)"),
    ] = None


@lru_cache
def get_settings() -> Settings:
    """Get cached application settings."""
    return Settings()
