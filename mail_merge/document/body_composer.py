"""
Combining several merged documents into one, separated by page breaks.
"""

import copy
from typing import List, Sequence

from docx.oxml import OxmlElement
from docx.oxml.ns import qn
from lxml import etree

from ..core.config import Config
from ..core.errors import EmptyInputSet, MergeError, MergeResult
from ..utils.logging_config import get_composer_logger
from .package import DocxPackage


class BodyComposer:
    """
    Concatenates document bodies in order.

    The first document is the base package: its styles, numbering, headers
    and final section properties are kept. Later documents contribute only
    their body content; their relationship ids are not reconciled.
    """

    def __init__(self):
        self.logger = get_composer_logger()
        self.sect_pr_tag = Config.w('sectPr')

    @staticmethod
    def build_page_break() -> etree._Element:
        """Return a new ``<w:p><w:r><w:br w:type="page"/></w:r></w:p>`` element."""
        paragraph = OxmlElement('w:p')
        run = OxmlElement('w:r')
        br = OxmlElement('w:br')
        br.set(qn('w:type'), Config.PAGE_BREAK_TYPE)
        run.append(br)
        paragraph.append(run)
        return paragraph

    @staticmethod
    def is_page_break(element: etree._Element) -> bool:
        """True for a paragraph holding nothing but a page break run."""
        if element.tag != Config.w('p') or len(element) != 1:
            return False
        run = element[0]
        if run.tag != Config.w('r') or len(run) != 1:
            return False
        br = run[0]
        return br.tag == Config.w('br') and br.get(Config.w('type')) == Config.PAGE_BREAK_TYPE

    def _append(self, working: etree._Element, element: etree._Element) -> None:
        # The trailing sectPr has to remain the last child of the body
        if len(working) and working[-1].tag == self.sect_pr_tag:
            working[-1].addprevious(element)
        else:
            working.append(element)

    def compose_bodies(self, bodies: Sequence[etree._Element]) -> etree._Element:
        """
        Build a new body from ``bodies``.

        The result is a deep copy of the first body followed, for each later
        body, by a page break paragraph and copies of its content. Section
        properties of later bodies are dropped. Inputs are not modified.
        """
        if not bodies:
            raise EmptyInputSet()

        working = copy.deepcopy(bodies[0])
        for body in bodies[1:]:
            self._append(working, self.build_page_break())
            for child in body:
                if child.tag == self.sect_pr_tag:
                    continue
                self._append(working, copy.deepcopy(child))
        return working

    def combine(self, buffers: Sequence[bytes]) -> bytes:
        """
        Combine serialized documents into a single package.

        Args:
            buffers: Ordered list of at least one package byte buffer

        Returns:
            Bytes of the base package with the combined body

        Raises:
            EmptyInputSet: If ``buffers`` is empty
            MalformedDocument: If a buffer does not parse; carries its index
            PackagingFailure: If the combined package cannot be saved
        """
        if not buffers:
            raise EmptyInputSet()

        self.logger.info("📄 Combining %d document(s)...", len(buffers))
        base = DocxPackage.open(buffers[0], index=0)
        bodies = [base.body]
        expected_paragraphs = DocxPackage.paragraph_count(base.body)

        for index in range(1, len(buffers)):
            package = DocxPackage.open(buffers[index], index=index)
            bodies.append(package.body)
            expected_paragraphs += DocxPackage.paragraph_count(package.body) + 1
            self.logger.debug("  > Document %d: %d paragraph(s)", index,
                              DocxPackage.paragraph_count(package.body))

        combined_body = self.compose_bodies(bodies)
        # Only swap the body once every input is in; a failure above leaves the base untouched
        base.replace_body(combined_body)

        actual_paragraphs = DocxPackage.paragraph_count(combined_body)
        if actual_paragraphs != expected_paragraphs:
            self.logger.warning("  > ⚠️ Expected %d paragraphs, composed %d",
                                expected_paragraphs, actual_paragraphs)

        combined = base.to_bytes()
        self.logger.info("✅ Combined %d document(s) with %d page break(s)",
                         len(buffers), len(buffers) - 1)
        return combined

    def combine_result(self, buffers: Sequence[bytes]) -> MergeResult:
        """Like ``combine`` but returns a MergeResult instead of raising."""
        try:
            return MergeResult.ok(self.combine(buffers))
        except MergeError as e:
            self.logger.error("❌ %s", e.describe())
            return MergeResult.failure(e)


def combine_docs(docs: List[bytes]) -> bytes:
    """Combine documents held as bytes into one; see ``BodyComposer.combine``."""
    return BodyComposer().combine(docs)
