"""Configuration management for gmlview using Pydantic models."""

import json
import logging
from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

CONFIG_FILE_NAME = ".gmlview.json"


class LayoutName(str, Enum):
    """Layout algorithms selectable by name."""
    FORCE_DIRECTED = "force-directed"
    GRID = "grid"
    CONCENTRIC = "concentric"
    LAYERED = "layered"


class ExportFormat(str, Enum):
    """Scene export formats."""
    PNG = "png"
    MERMAID = "mermaid"


class LogLevel(str, Enum):
    """Logging levels."""
    ERROR = "error"
    WARN = "warn"
    INFO = "info"
    DEBUG = "debug"

    def to_logging(self) -> int:
        return {
            LogLevel.ERROR: logging.ERROR,
            LogLevel.WARN: logging.WARNING,
            LogLevel.INFO: logging.INFO,
            LogLevel.DEBUG: logging.DEBUG,
        }[self]


class ViewerConfig(BaseModel):
    """Viewer configuration section."""
    default_layout: LayoutName = Field(alias="defaultLayout", default=LayoutName.FORCE_DIRECTED)
    width: int = 800
    height: int = 600
    padding: int = 30
    fit_after_layout: bool = Field(alias="fitAfterLayout", default=True)

    @field_validator("width", "height")
    @classmethod
    def validate_dimensions(cls, v):
        if v < 1:
            raise ValueError("viewport dimensions must be >= 1")
        return v

    @field_validator("padding")
    @classmethod
    def validate_padding(cls, v):
        if v < 0:
            raise ValueError("padding must be >= 0")
        return v

    model_config = ConfigDict(populate_by_name=True)


class LayoutConfig(BaseModel):
    """Layout algorithm configuration section."""
    seed: int = 42
    iterations: int = 50
    scale: float = 300.0
    spacing: float = 80.0

    @field_validator("iterations")
    @classmethod
    def validate_iterations(cls, v):
        if v < 1:
            raise ValueError("iterations must be >= 1")
        return v

    @field_validator("scale", "spacing")
    @classmethod
    def validate_positive(cls, v):
        if v <= 0:
            raise ValueError("scale and spacing must be > 0")
        return v

    model_config = ConfigDict(populate_by_name=True)


class StyleConfig(BaseModel):
    """Scene styling section."""
    node_size: float = Field(alias="nodeSize", default=24.0)
    node_color: str = Field(alias="nodeColor", default="#888888")
    node_border_color: str = Field(alias="nodeBorderColor", default="#333333")
    selected_border_color: str = Field(alias="selectedBorderColor", default="#0a84ff")
    placeholder_color: str = Field(alias="placeholderColor", default="#dddddd")
    edge_color: str = Field(alias="edgeColor", default="#bbbbbb")
    font_size: float = Field(alias="fontSize", default=10.0)
    max_label_length: int = Field(alias="maxLabelLength", default=30)

    @field_validator("max_label_length")
    @classmethod
    def validate_label_length(cls, v):
        if v < 4:
            raise ValueError("max_label_length must be >= 4")
        return v

    model_config = ConfigDict(populate_by_name=True)


class ExportConfig(BaseModel):
    """Export configuration section."""
    format: ExportFormat = ExportFormat.PNG
    dpi: int = 150
    file_name: str = Field(alias="fileName", default="graph.png")
    background: str = "#ffffff"

    @field_validator("dpi")
    @classmethod
    def validate_dpi(cls, v):
        if not (10 <= v <= 1200):
            raise ValueError(f"dpi must be between 10-1200, got: {v}")
        return v

    model_config = ConfigDict(populate_by_name=True)


class LoggingConfig(BaseModel):
    """Logging configuration section."""
    level: LogLevel = LogLevel.WARN


class GmlviewConfig(BaseModel):
    """Complete gmlview configuration model."""
    viewer: ViewerConfig = Field(default_factory=ViewerConfig)
    layout: LayoutConfig = Field(default_factory=LayoutConfig)
    style: StyleConfig = Field(default_factory=StyleConfig)
    export: ExportConfig = Field(default_factory=ExportConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    model_config = ConfigDict(extra="forbid")


def load_config(config_path: str | Path | None = None) -> GmlviewConfig:
    """Load configuration from file with fallback to defaults.

    Args:
        config_path: Optional path to configuration file. If None, searches
                    current directory and parents for .gmlview.json

    Returns:
        GmlviewConfig: Loaded and validated configuration

    Raises:
        ValueError: If configuration is invalid
    """
    if config_path is None:
        config_path = find_config_file()
    else:
        config_path = Path(config_path)

    if config_path and config_path.exists():
        try:
            with open(config_path, encoding="utf-8") as f:
                config_data = json.load(f)
            return GmlviewConfig(**config_data)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON in config file {config_path}: {e}")
        except (ValidationError, TypeError) as e:
            raise ValueError(f"Failed to load config from {config_path}: {e}")
    else:
        return create_default_config()


def find_config_file(start_dir: Path | None = None) -> Path | None:
    """Find .gmlview.json configuration file by searching up directory tree.

    Args:
        start_dir: Directory to start search from (default: current directory)

    Returns:
        Path to config file if found, None otherwise
    """
    if start_dir is None:
        start_dir = Path.cwd()

    current = Path(start_dir).resolve()

    while True:
        config_file = current / CONFIG_FILE_NAME
        if config_file.exists():
            return config_file

        parent = current.parent
        if parent == current:  # Reached root directory
            break
        current = parent

    return None


def create_default_config() -> GmlviewConfig:
    """Create zero-config defaults."""
    return GmlviewConfig()
