"""
Locating and overwriting the visible «placeholder» text of merge fields.
"""

from typing import List

from lxml import etree

from ..core.config import Config
from ..core.errors import PackagingFailure


class RunTextMatcher:
    """
    Finds text nodes that display a merge field placeholder.

    Matching is exact equality on a single ``w:t`` node. A placeholder that
    the authoring tool split over several runs (``«Name`` + ``»``) is not
    reassembled and yields no match.
    """

    def __init__(self):
        self.text_tag = Config.w('t')
        self.space_attr = f"{{{Config.XML_NAMESPACE}}}space"

    def find_display_nodes(self, body: etree._Element, field_name: str) -> List[etree._Element]:
        """
        Return every text node whose whole content is ``«field_name»``.

        Args:
            body: Element tree to search
            field_name: Non-empty field name

        Returns:
            List of matching ``w:t`` elements in document order, possibly empty
        """
        if not field_name:
            raise ValueError("field_name must be a non-empty string")
        placeholder = Config.format_placeholder(field_name)
        return [node for node in body.iter(self.text_tag) if node.text == placeholder]

    def apply(self, node: etree._Element, value: str) -> None:
        """Overwrite the text of a single node. Run properties are not touched."""
        node.text = value
        if value and (value[0].isspace() or value[-1].isspace()):
            node.set(self.space_attr, 'preserve')

    def replace(self, body: etree._Element, field_name: str, value: str) -> int:
        """
        Overwrite every display node of ``field_name``; return how many were replaced.

        Raises:
            PackagingFailure: ``value`` holds characters XML cannot carry
        """
        nodes = self.find_display_nodes(body, field_name)
        for node in nodes:
            try:
                self.apply(node, value)
            except ValueError as e:
                raise PackagingFailure(f"Value for {field_name} cannot be stored in the document: {e}") from e
        return len(nodes)
