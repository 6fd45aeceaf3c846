"""Tests for the configuration module."""

import tempfile
from pathlib import Path

import pytest
import yaml

from snipsnap_export.config import (
    ATTACHMENT_FIELDS,
    DEFAULT_FIELDS,
    ExportSettings,
    LoggingSettings,
    Settings,
)


class TestSettings:
    """Tests for Settings class."""

    def test_default_settings(self) -> None:
        """Default settings have expected values."""
        settings = Settings.default()

        assert settings.export.root_name == "snipspace"
        assert settings.export.attachments_field == "attachments"
        assert settings.export.index_width == 4
        assert settings.export.require_records is False

    def test_load_nonexistent_file(self) -> None:
        """Loading nonexistent file raises error."""
        with pytest.raises(FileNotFoundError):
            Settings.load("/nonexistent/path/settings.yaml")

    def test_load_valid_yaml(self) -> None:
        """Valid YAML file loads correctly."""
        with tempfile.NamedTemporaryFile(mode="w", suffix=".yaml", delete=False) as f:
            f.write(
                """
logging:
  level: DEBUG
  file: ./logs/snipexport.log
export:
  root_name: wikispace
  index_width: 6
  require_records: true
  default_fields:
    snip: [name, content]
            """
            )
            f.flush()

            settings = Settings.load(f.name)

            assert settings.logging.level == "DEBUG"
            assert settings.logging.file == "./logs/snipexport.log"
            assert settings.export.root_name == "wikispace"
            assert settings.export.index_width == 6
            assert settings.export.require_records is True
            assert settings.fields_for("snip") == ("name", "content")
            # Kinds not mentioned keep their defaults
            assert settings.fields_for("user") == DEFAULT_FIELDS["user"]

            Path(f.name).unlink()

    def test_load_empty_yaml(self) -> None:
        """Empty YAML file uses defaults."""
        with tempfile.NamedTemporaryFile(mode="w", suffix=".yaml", delete=False) as f:
            f.write("")
            f.flush()

            settings = Settings.load(f.name)

            assert settings.export.root_name == "snipspace"
            assert settings.export.attachment_fields == ATTACHMENT_FIELDS

            Path(f.name).unlink()

    def test_load_invalid_yaml(self) -> None:
        with tempfile.NamedTemporaryFile(mode="w", suffix=".yaml", delete=False) as f:
            f.write("export: [unclosed\n")
            f.flush()

            with pytest.raises(yaml.YAMLError):
                Settings.load(f.name)

            Path(f.name).unlink()

    def test_fields_for_unknown_kind(self) -> None:
        with pytest.raises(KeyError):
            Settings.default().fields_for("page")


class TestLoggingSettings:
    """Tests for LoggingSettings class."""

    def test_defaults(self) -> None:
        """Default logging settings."""
        settings = LoggingSettings()

        assert settings.level == "INFO"
        assert settings.file is None
        assert settings.format == "%(message)s"


class TestExportSettings:
    """Tests for ExportSettings class."""

    def test_default_field_lists(self) -> None:
        """Both record kinds ship a default field list."""
        settings = ExportSettings()

        assert settings.default_fields["user"][0] == "login"
        assert len(settings.default_fields["user"]) == 11
        assert settings.default_fields["snip"][0] == "name"
        assert "attachments" in settings.default_fields["snip"]
        assert len(settings.default_fields["snip"]) == 16

    def test_attachment_fields(self) -> None:
        assert ExportSettings().attachment_fields == (
            "name",
            "content-type",
            "size",
            "date",
            "location",
            "data",
        )

    def test_default_fields_read_only(self) -> None:
        """The field table can't be changed in place."""
        with pytest.raises(TypeError):
            ExportSettings().default_fields["page"] = ("title",)


class TestSettingsValidation:
    """Tests for malformed settings files."""

    @pytest.mark.parametrize(
        "content",
        ["- just\n- a list\n", "export: [name]\n", "logging: verbose\n"],
    )
    def test_non_mapping_rejected(self, tmp_path: Path, content: str) -> None:
        path = tmp_path / "settings.yaml"
        path.write_text(content)

        with pytest.raises(ValueError, match="expected a mapping"):
            Settings.load(path)

    def test_empty_sections_use_defaults(self, tmp_path: Path) -> None:
        path = tmp_path / "settings.yaml"
        path.write_text("logging:\nexport:\n")

        settings = Settings.load(path)

        assert settings.logging.level == "INFO"
        assert settings.export.root_name == "snipspace"

    def test_directory_is_not_a_settings_file(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            Settings.load(tmp_path)
