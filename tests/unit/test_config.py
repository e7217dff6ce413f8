"""Unit tests for configuration management."""

import json
import logging
from pathlib import Path
from tempfile import TemporaryDirectory

import pytest
from pydantic import ValidationError

from gmlview.config import (
    CONFIG_FILE_NAME,
    ExportConfig,
    ExportFormat,
    GmlviewConfig,
    LayoutName,
    LogLevel,
    ViewerConfig,
    create_default_config,
    find_config_file,
    load_config,
)


class TestGmlviewConfig:
    """Test complete GmlviewConfig model."""

    def test_defaults(self):
        config = create_default_config()
        assert config.viewer.default_layout == LayoutName.FORCE_DIRECTED
        assert config.viewer.fit_after_layout is True
        assert config.export.format == ExportFormat.PNG
        assert config.logging.level == LogLevel.WARN

    def test_config_from_aliases(self):
        """Test config creation from camelCase keys."""
        config = GmlviewConfig(**{
            "viewer": {"defaultLayout": "layered", "fitAfterLayout": False},
            "style": {"nodeSize": 40, "selectedBorderColor": "#ff0000"},
            "export": {"format": "mermaid", "fileName": "out.mmd"},
        })
        assert config.viewer.default_layout == LayoutName.LAYERED
        assert config.viewer.fit_after_layout is False
        assert config.style.node_size == 40
        assert config.style.selected_border_color == "#ff0000"
        assert config.export.format == ExportFormat.MERMAID
        assert config.export.file_name == "out.mmd"

    def test_unknown_section_rejected(self):
        with pytest.raises(ValidationError):
            GmlviewConfig(**{"renderer": {}})

    def test_invalid_layout_name(self):
        with pytest.raises(ValidationError):
            ViewerConfig(defaultLayout="spiral")

    def test_invalid_dimensions(self):
        with pytest.raises(ValidationError):
            ViewerConfig(width=0)

    def test_invalid_dpi(self):
        with pytest.raises(ValidationError):
            ExportConfig(dpi=5)

    def test_log_level_mapping(self):
        assert LogLevel.WARN.to_logging() == logging.WARNING
        assert LogLevel.DEBUG.to_logging() == logging.DEBUG


class TestConfigLoading:
    """Test configuration loading functions."""

    def test_load_missing_file_returns_defaults(self):
        with TemporaryDirectory() as temp_dir:
            config = load_config(Path(temp_dir) / "nope.json")
        assert config == create_default_config()

    def test_load_valid_file(self):
        with TemporaryDirectory() as temp_dir:
            config_file = Path(temp_dir) / CONFIG_FILE_NAME
            config_file.write_text(json.dumps({"layout": {"seed": 7, "spacing": 50}}))
            config = load_config(config_file)
        assert config.layout.seed == 7
        assert config.layout.spacing == 50

    def test_load_invalid_json(self):
        with TemporaryDirectory() as temp_dir:
            config_file = Path(temp_dir) / CONFIG_FILE_NAME
            config_file.write_text("{not json")
            with pytest.raises(ValueError, match="Invalid JSON"):
                load_config(config_file)

    def test_load_invalid_values(self):
        with TemporaryDirectory() as temp_dir:
            config_file = Path(temp_dir) / CONFIG_FILE_NAME
            config_file.write_text(json.dumps({"layout": {"iterations": 0}}))
            with pytest.raises(ValueError, match="Failed to load config"):
                load_config(config_file)

    def test_find_config_in_parent(self):
        with TemporaryDirectory() as temp_dir:
            root = Path(temp_dir)
            (root / CONFIG_FILE_NAME).write_text("{}")
            nested = root / "a" / "b"
            nested.mkdir(parents=True)
            assert find_config_file(nested) == (root / CONFIG_FILE_NAME).resolve()
