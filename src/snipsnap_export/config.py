"""Settings and configuration loading for the exporter."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Mapping

import yaml


USER_FIELDS = (
    "login",
    "passwd",
    "email",
    "roles",
    "status",
    "cTime",
    "mTime",
    "lastAccess",
    "lastLogin",
    "lastLogout",
    "application",
)

SNIP_FIELDS = (
    "name",
    "oUser",
    "cUser",
    "mUser",
    "cTime",
    "mTime",
    "permissions",
    "backlinks",
    "sniplinks",
    "labels",
    "attachments",
    "viewCount",
    "content",
    "application",
    "parentSnip",
    "commentSnip",
)

ATTACHMENT_FIELDS = (
    "name",
    "content-type",
    "size",
    "date",
    "location",
    "data",
)


def _freeze_fields(data: Mapping[str, object]) -> Mapping[str, tuple[str, ...]]:
    """Build a read-only kind -> field names table."""
    return MappingProxyType({str(kind): tuple(names) for kind, names in data.items()})


DEFAULT_FIELDS = _freeze_fields({"user": USER_FIELDS, "snip": SNIP_FIELDS})


def _section(value: object, name: str) -> dict:
    """A YAML mapping, with a missing or empty one read as ``{}``."""
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ValueError(f"{name}: expected a mapping, got {type(value).__name__}")
    return value


@dataclass
class LoggingSettings:
    """Logging configuration."""

    level: str = "INFO"
    file: str | None = None
    format: str = "%(message)s"


@dataclass
class ExportSettings:
    """What to look for in the dump and how to name the output."""

    root_name: str = "snipspace"
    attachments_field: str = "attachments"
    attachment_name: str = "attachment"
    attachment_fields: tuple[str, ...] = ATTACHMENT_FIELDS
    index_width: int = 4
    require_records: bool = False
    default_fields: Mapping[str, tuple[str, ...]] = field(
        default_factory=lambda: DEFAULT_FIELDS
    )


@dataclass
class Settings:
    """Main settings container for the exporter."""

    logging: LoggingSettings = field(default_factory=LoggingSettings)
    export: ExportSettings = field(default_factory=ExportSettings)

    def fields_for(self, kind: str) -> tuple[str, ...]:
        """Default field list for a record kind.

        Raises:
            KeyError: If no default list is configured for ``kind``.
        """
        return self.export.default_fields[kind]

    @classmethod
    def load(cls, path: str | Path) -> "Settings":
        """Load settings from a YAML file.

        An empty file gives the defaults.

        Raises:
            FileNotFoundError: If the settings file doesn't exist.
            yaml.YAMLError: If the file contains invalid YAML.
            ValueError: If the file or one of its sections isn't a mapping.
        """
        path = Path(path)
        if not path.is_file():
            raise FileNotFoundError(f"Settings file not found: {path}")

        data = yaml.safe_load(path.read_text(encoding="utf-8"))
        return cls._from_dict(_section(data, str(path)))

    @classmethod
    def _from_dict(cls, data: dict) -> "Settings":
        """Create Settings from a dictionary."""
        logging_data = _section(data.get("logging"), "logging")
        logging_settings = LoggingSettings(
            level=logging_data.get("level", "INFO"),
            file=logging_data.get("file"),
            format=logging_data.get("format", "%(message)s"),
        )

        export_data = _section(data.get("export"), "export")
        default_fields = dict(DEFAULT_FIELDS)
        default_fields.update(
            _section(export_data.get("default_fields"), "export.default_fields")
        )
        export_settings = ExportSettings(
            root_name=export_data.get("root_name", "snipspace"),
            attachments_field=export_data.get("attachments_field", "attachments"),
            attachment_name=export_data.get("attachment_name", "attachment"),
            attachment_fields=tuple(
                export_data.get("attachment_fields", ATTACHMENT_FIELDS)
            ),
            index_width=int(export_data.get("index_width", 4)),
            require_records=bool(export_data.get("require_records", False)),
            default_fields=_freeze_fields(default_fields),
        )

        return cls(logging=logging_settings, export=export_settings)

    @classmethod
    def default(cls) -> "Settings":
        """Create Settings with default values."""
        return cls()
