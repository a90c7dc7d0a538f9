"""
Merge field detection in a document body.
"""

from typing import Iterator, Optional

from lxml import etree

from ..core.config import Config
from ..core.errors import MalformedField


class FieldMarker:
    """A field code found in the document and the field name it instructs."""

    def __init__(self, instruction: str, node: etree._Element):
        self.instruction = instruction
        self.node = node
        self.field_name = FieldMarker.derive_field_name(instruction)

    @staticmethod
    def derive_field_name(instruction: str) -> Optional[str]:
        """
        Derive the field name from field code instruction text.

        The name is whatever follows the last occurrence of the delimiter,
        trimmed. Case and inner whitespace are kept as written.

        Returns:
            The field name, or None when the delimiter is missing
        """
        start = instruction.rfind(Config.FIELD_DELIMITER)
        if start < 0:
            return None
        return instruction[start + len(Config.FIELD_DELIMITER):].strip()

    def require_name(self) -> str:
        """Return the field name or raise MalformedField when it is missing or blank."""
        if not self.field_name:
            raise MalformedField(self.instruction)
        return self.field_name

    @property
    def is_simple(self) -> bool:
        return self.node.tag == Config.w('fldSimple')

    def __repr__(self) -> str:
        return f"FieldMarker({self.instruction!r})"


class FieldLocator:
    """Scans a body for field codes, at any depth and in document order."""

    def __init__(self):
        self.instr_text_tag = Config.w('instrText')
        self.simple_field_tag = Config.w('fldSimple')
        self.instr_attr = Config.w('instr')

    def locate(self, body: etree._Element) -> Iterator[FieldMarker]:
        """
        Yield every field marker in ``body``.

        Complex fields contribute their ``w:instrText`` nodes, simple fields
        their ``w:instr`` attribute. Each call is a fresh scan.
        """
        for node in body.iter(self.instr_text_tag, self.simple_field_tag):
            if node.tag == self.simple_field_tag:
                instruction = node.get(self.instr_attr, '')
            else:
                instruction = node.text or ''
            yield FieldMarker(instruction, node)
