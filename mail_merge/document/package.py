"""
In-memory word-processing package access built on python-docx.
"""

import io
from typing import Optional

from docx import Document
from lxml import etree

from ..core.config import Config
from ..core.errors import MalformedDocument, PackagingFailure
from ..utils.logging_config import get_docx_logger


class DocxPackage:
    """
    A single open package and its main document body.

    Each instance owns its own element tree; two merges never share one.
    """

    def __init__(self, document, index: Optional[int] = None):
        self.document = document
        self.index = index
        self.logger = get_docx_logger()

    @classmethod
    def open(cls, data: bytes, index: Optional[int] = None) -> 'DocxPackage':
        """
        Open a package from bytes for read-write.

        Args:
            data: Serialized package bytes
            index: Position of the buffer in a batch, reported on failure

        Returns:
            DocxPackage wrapping the parsed document

        Raises:
            MalformedDocument: If the bytes are not a package with a body element
        """
        if not data:
            raise MalformedDocument("empty buffer", index)
        try:
            document = Document(io.BytesIO(data))
        except Exception as e:
            raise MalformedDocument(f"{type(e).__name__}: {e}", index) from e

        package = cls(document, index)
        # Fail early so callers never get a package without a body
        package.require_body()
        return package

    def require_body(self) -> etree._Element:
        """Return the ``w:body`` element, raising MalformedDocument if it is missing."""
        body = self.document.element.find(Config.w('body'))
        if body is None:
            raise MalformedDocument("main document part has no body element", self.index)
        return body

    @property
    def body(self) -> etree._Element:
        """The ``w:body`` element of the main document part."""
        return self.require_body()

    def replace_body(self, new_body: etree._Element) -> None:
        """Give the existing ``w:body`` element the children of ``new_body``."""
        if new_body.tag != Config.w('body'):
            raise PackagingFailure(f"Replacement element is not a body: {new_body.tag}")
        body = self.body
        for child in list(body):
            body.remove(child)
        body.extend(list(new_body))
        self.logger.debug("  > Replaced body content (%d children)", len(body))

    def to_bytes(self) -> bytes:
        """Serialize the whole package back to bytes."""
        buffer = io.BytesIO()
        try:
            self.document.save(buffer)
        except Exception as e:
            raise PackagingFailure(f"Could not save package: {type(e).__name__}: {e}") from e
        data = buffer.getvalue()
        self.logger.debug("  > Serialized package (%d bytes)", len(data))
        return data

    @staticmethod
    def paragraph_count(body: etree._Element) -> int:
        """Number of top-level paragraphs in a body."""
        return len(body.findall(Config.w('p')))
