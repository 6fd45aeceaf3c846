"""Load SnipSnap XML dumps and walk their records."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Iterator

from lxml import etree


class DocumentError(ValueError):
    """The input document cannot be used for an export."""


class UnparsableDocumentError(DocumentError):
    """The input file cannot be read or is not well-formed XML."""


class EmptyDocumentError(DocumentError):
    """The input file has no root element."""


class WrongRootError(DocumentError):
    """The root element is not the expected one."""


def local_name(node: etree._Element) -> str | None:
    """Tag name without its namespace, or None for comments and PIs."""
    if not isinstance(node.tag, str):
        return None
    return etree.QName(node).localname


def iter_records(root: etree._Element, tag: str) -> Iterator[etree._Element]:
    """Yield the direct children of ``root`` named ``tag``, in document order.

    Names are compared literally against the local tag name, so ``*`` or
    ``{uri}name`` only match elements actually called that. Comments,
    processing instructions and text between elements are skipped. Each
    call starts again from the first child.
    """
    for child in root:
        if local_name(child) == tag:
            yield child


def find_child(
    parent: etree._Element | None, tag: str
) -> etree._Element | None:
    """Return the first direct element child named ``tag``, or None."""
    if parent is None:
        return None
    return next(iter_records(parent, tag), None)


def element_text(element: etree._Element) -> str:
    """Full text content of an element, untrimmed.

    Text of nested elements and CDATA sections is included, comments and
    processing instructions are not.
    """
    return str(element.xpath("string()"))


@dataclass
class SnipspaceDocument:
    """A parsed dump. The tree is only ever read."""

    path: Path
    root: etree._Element

    def records(self, tag: str) -> Iterator[etree._Element]:
        """Iterate the first-level records named ``tag``."""
        return iter_records(self.root, tag)

    def count_records(self, tag: str) -> int:
        """Number of first-level records named ``tag``."""
        return sum(1 for _ in self.records(tag))


class DocumentParser:
    """Parses SnipSnap XML dumps."""

    def __init__(self, root_name: str = "snipspace"):
        self.root_name = root_name

    def parse(self, path: str | Path) -> SnipspaceDocument:
        """Parse a dump file and check its root element.

        Args:
            path: Path to the XML dump.

        Returns:
            SnipspaceDocument holding the root element.

        Raises:
            UnparsableDocumentError: If the file can't be read or parsed.
            EmptyDocumentError: If the document has no root element.
            WrongRootError: If the root element isn't ``root_name``.
        """
        path = Path(path)
        try:
            data = path.read_bytes()
        except OSError as e:
            raise UnparsableDocumentError(f"cannot read document {path}") from e

        if not data.strip():
            raise EmptyDocumentError("empty document")

        # Internal entities are expanded so their text is exported as content
        parser = etree.XMLParser(huge_tree=True, no_network=True)
        try:
            root = etree.fromstring(data, parser=parser, base_url=str(path))
        except etree.XMLSyntaxError as e:
            raise UnparsableDocumentError("document not parsed successfully") from e

        if root is None:
            raise EmptyDocumentError("empty document")

        if local_name(root) != self.root_name:
            raise WrongRootError(
                f"document of the wrong type, root node != {self.root_name}"
            )

        return SnipspaceDocument(path=path, root=root)
