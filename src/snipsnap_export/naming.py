"""Output file names for exported fields."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

INDEX_WIDTH = 4


def format_index(index: int, width: int = INDEX_WIDTH) -> str:
    """Zero-pad ``index`` to ``width`` digits.

    Larger values widen instead of being truncated, so ``10000`` stays
    ``"10000"`` and names remain unique.
    """
    if index < 0:
        raise ValueError(f"Index must not be negative: {index}")
    return f"{index:0{width}d}"


def record_file_name(record_index: int, field: str, width: int = INDEX_WIDTH) -> str:
    """File name for a record field, e.g. ``0003-email``."""
    return f"{format_index(record_index, width)}-{field}"


def attachment_file_name(
    record_index: int,
    attachment_index: int,
    field: str,
    width: int = INDEX_WIDTH,
) -> str:
    """File name for an attachment field, e.g. ``0000-attachment-0001-size``."""
    return (
        f"{format_index(record_index, width)}-attachment-"
        f"{format_index(attachment_index, width)}-{field}"
    )


@dataclass(frozen=True)
class OutputNamer:
    """Maps record and attachment indices to paths inside one directory."""

    output_dir: Path
    width: int = INDEX_WIDTH

    def record_path(self, record_index: int, field: str) -> Path:
        return self.output_dir / record_file_name(record_index, field, self.width)

    def attachment_path(
        self, record_index: int, attachment_index: int, field: str
    ) -> Path:
        return self.output_dir / attachment_file_name(
            record_index, attachment_index, field, self.width
        )
