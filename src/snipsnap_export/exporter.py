"""Export records of a SnipSnap dump into one file per field."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, Literal

from lxml import etree

from snipsnap_export.config import Settings
from snipsnap_export.document import (
    SnipspaceDocument,
    element_text,
    find_child,
    iter_records,
    local_name,
)
from snipsnap_export.logging_config import Reporter
from snipsnap_export.naming import OutputNamer

logger = logging.getLogger(__name__)


class OutputDirectoryError(Exception):
    """The output directory could not be created."""

    def __init__(self, path: Path, cause: OSError):
        super().__init__(f"cannot create {path} directory")
        self.path = path
        self.cause = cause


@dataclass
class RecordReport:
    """What happened to a single record."""

    index: int
    tag: str
    files: list[str] = field(default_factory=list)
    missing: list[str] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)
    attachments: int = 0

    @property
    def status(self) -> Literal["success", "partial", "failed"]:
        if not self.missing and not self.errors:
            return "success"
        if not self.files:
            return "failed"
        return "partial"


@dataclass
class ExportResult:
    """Result of a full export run."""

    records: int = 0
    files_written: int = 0
    missing_fields: int = 0
    write_errors: int = 0
    attachments: int = 0
    total_time_ms: int = 0
    record_reports: list[RecordReport] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        """True when every requested field was written."""
        return self.missing_fields == 0 and self.write_errors == 0


class SnipExporter:
    """Walks the records of a dump and writes their fields to disk."""

    def __init__(self, settings: Settings, reporter: Reporter):
        self.settings = settings
        self.reporter = reporter

    def create_output_dir(self, path: str | Path) -> Path:
        """Create the output directory, which must not exist yet.

        Raises:
            OutputDirectoryError: If the directory can't be created.
        """
        path = Path(path)
        try:
            path.mkdir()
        except OSError as e:
            raise OutputDirectoryError(path, e) from e
        logger.debug(f"Created output directory {path}")
        return path

    def export(
        self,
        document: SnipspaceDocument,
        output_dir: str | Path,
        element_name: str,
        fields: Iterable[str],
    ) -> ExportResult:
        """Create ``output_dir`` and export every ``element_name`` record into it.

        Args:
            document: The parsed dump.
            output_dir: Directory to create; it must not exist.
            element_name: Tag of the first-level records to export.
            fields: Field names to export from each record, in order.

        Returns:
            ExportResult with counters and per-record reports.

        Raises:
            OutputDirectoryError: If the directory can't be created.
        """
        output_dir = self.create_output_dir(output_dir)
        return self.export_records(document, output_dir, element_name, fields)

    def export_records(
        self,
        document: SnipspaceDocument,
        output_dir: str | Path,
        element_name: str,
        fields: Iterable[str],
    ) -> ExportResult:
        """Export records into an existing directory."""
        start_time = time.time()
        fields = list(fields)
        namer = OutputNamer(Path(output_dir), self.settings.export.index_width)
        result = ExportResult()

        logger.info(f"Exporting <{element_name}> records from {document.path}")

        for index, record in enumerate(document.records(element_name)):
            report = self._export_record(record, index, fields, namer)
            result.record_reports.append(report)
            result.records += 1
            result.files_written += len(report.files)
            result.missing_fields += len(report.missing)
            result.write_errors += len(report.errors)
            result.attachments += report.attachments

        result.total_time_ms = int((time.time() - start_time) * 1000)

        if result.records == 0:
            logger.info(f"No <{element_name}> records found")

        logger.info(
            f"Export complete: {result.records} records, "
            f"{result.files_written} files, {result.total_time_ms}ms"
        )
        return result

    def _export_record(
        self,
        record: etree._Element,
        index: int,
        fields: list[str],
        namer: OutputNamer,
    ) -> RecordReport:
        """Export the requested fields of one record."""
        report = RecordReport(index=index, tag=local_name(record))
        logger.debug(f"Record {index}: <{report.tag}>")

        for name in fields:
            if name == self.settings.export.attachments_field:
                self._export_attachments(record, index, namer, report)
            else:
                self._export_field(record, name, namer.record_path(index, name), report)

        return report

    def _export_attachments(
        self,
        record: etree._Element,
        index: int,
        namer: OutputNamer,
        report: RecordReport,
    ) -> None:
        """Export every attachment of a record, field by field."""
        export_settings = self.settings.export
        container = find_child(record, export_settings.attachments_field)
        if container is None:
            logger.debug(
                f"Record {index} has no <{export_settings.attachments_field}>"
            )
            return

        attachments = iter_records(container, export_settings.attachment_name)
        for attachment_index, attachment in enumerate(attachments):
            report.attachments += 1
            for name in export_settings.attachment_fields:
                path = namer.attachment_path(index, attachment_index, name)
                self._export_field(attachment, name, path, report)

    def _export_field(
        self,
        node: etree._Element,
        name: str,
        path: Path,
        report: RecordReport,
    ) -> None:
        """Write the text of ``node``'s child ``name`` to ``path``."""
        child = find_child(node, name)
        if child is None:
            self.reporter.warning(
                f"file {path}: no element <{name}> in <{local_name(node)}>"
            )
            report.missing.append(name)
            return

        try:
            with open(path, "w", encoding="utf-8", newline="") as f:
                f.write(element_text(child))
        except OSError as e:
            self.reporter.error(f"cannot open file {path}", e)
            report.errors.append(str(path))
            return

        report.files.append(str(path))
