"""SnipSnap XML dump exporter.

A Python library and CLI tool for exporting the records of a SnipSnap
wiki XML dump into a flat directory, one plain file per field.
"""

from snipsnap_export.config import Settings
from snipsnap_export.document import (
    DocumentError,
    DocumentParser,
    EmptyDocumentError,
    SnipspaceDocument,
    UnparsableDocumentError,
    WrongRootError,
)
from snipsnap_export.naming import OutputNamer
from snipsnap_export.exporter import ExportResult, OutputDirectoryError, SnipExporter

__version__ = "0.1.0"

__all__ = [
    "Settings",
    "DocumentParser",
    "SnipspaceDocument",
    "DocumentError",
    "UnparsableDocumentError",
    "EmptyDocumentError",
    "WrongRootError",
    "OutputNamer",
    "SnipExporter",
    "ExportResult",
    "OutputDirectoryError",
]
