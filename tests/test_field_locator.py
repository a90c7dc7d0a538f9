"""
Unit tests for the FieldLocator class.
"""

import unittest

from docx.oxml import parse_xml
from docx.oxml.ns import nsdecls

from mail_merge.core.errors import MalformedField
from mail_merge.document.field_locator import FieldLocator, FieldMarker
from tests.test_config import TestUtils


class TestFieldLocator(unittest.TestCase):
    """Test cases for FieldLocator class."""

    def setUp(self):
        """Set up test fixtures."""
        self.locator = FieldLocator()

    def test_derive_field_name_basic(self):
        """Test deriving a name from a standard instruction."""
        self.assertEqual(FieldMarker.derive_field_name(" MERGEFIELD FirstName "), "FirstName")

    def test_derive_field_name_uses_last_delimiter(self):
        """Test that the last occurrence of the delimiter wins."""
        instruction = " MERGEFIELD Outer MERGEFIELD Inner "
        self.assertEqual(FieldMarker.derive_field_name(instruction), "Inner")

    def test_derive_field_name_keeps_case_and_inner_spaces(self):
        """Test that the name is only trimmed, not normalized."""
        self.assertEqual(FieldMarker.derive_field_name(" MERGEFIELD  Post Code  "), "Post Code")
        self.assertEqual(FieldMarker.derive_field_name(" MERGEFIELD city "), "city")

    def test_derive_field_name_missing_delimiter(self):
        """Test that an instruction without the delimiter yields no name."""
        self.assertIsNone(FieldMarker.derive_field_name(" PAGE "))
        self.assertIsNone(FieldMarker.derive_field_name("MERGEFIELD Name"))

    def test_require_name_raises_malformed_field(self):
        """Test that a marker without a name reports MalformedField."""
        marker = FieldMarker(" DATE \\@ \"d MMMM yyyy\" ", node=None)
        with self.assertRaises(MalformedField) as ctx:
            marker.require_name()
        self.assertEqual(ctx.exception.kind, "MalformedField")

    def test_require_name_blank_name(self):
        """Test that a delimiter followed by nothing is malformed."""
        marker = FieldMarker(" MERGEFIELD   ", node=None)
        self.assertEqual(marker.field_name, "")
        with self.assertRaises(MalformedField):
            marker.require_name()

    def test_locate_in_document_order(self):
        """Test that fields are found in document order."""
        document = TestUtils.letter_template()
        markers = list(self.locator.locate(document.element.body))

        names = [m.field_name for m in markers]
        self.assertEqual(names, ["FirstName", "LastName", "City", "FirstName"])

    def test_locate_inside_table(self):
        """Test that fields at any depth are found."""
        document = TestUtils.create_document("Intro")
        table = document.add_table(rows=1, cols=2)
        TestUtils.add_merge_field(table.rows[0].cells[1].paragraphs[0], "Amount")

        markers = list(self.locator.locate(document.element.body))
        self.assertEqual([m.field_name for m in markers], ["Amount"])

    def test_locate_simple_field(self):
        """Test that fldSimple fields are reported with their instr attribute."""
        document = TestUtils.create_document()
        paragraph = document.add_paragraph("Hello ")
        TestUtils.add_simple_field(paragraph, "Title")

        markers = list(self.locator.locate(document.element.body))
        self.assertEqual(len(markers), 1)
        self.assertTrue(markers[0].is_simple)
        self.assertEqual(markers[0].field_name, "Title")

    def test_locate_is_restartable(self):
        """Test that each call performs a fresh scan."""
        document = TestUtils.letter_template()
        body = document.element.body
        first = [m.field_name for m in self.locator.locate(body)]
        second = [m.field_name for m in self.locator.locate(body)]
        self.assertEqual(first, second)

    def test_locate_is_lazy(self):
        """Test that locate returns a generator rather than a list."""
        document = TestUtils.letter_template()
        markers = self.locator.locate(document.element.body)
        self.assertEqual(next(markers).field_name, "FirstName")

    def test_locate_reports_non_merge_fields(self):
        """Test that other field codes are located and carry no name."""
        document = TestUtils.create_document()
        paragraph = document.add_paragraph()
        paragraph._p.append(parse_xml(
            '<w:r %s><w:instrText xml:space="preserve"> PAGE </w:instrText></w:r>' % nsdecls('w')))

        markers = list(self.locator.locate(document.element.body))
        self.assertEqual(len(markers), 1)
        self.assertIsNone(markers[0].field_name)

    def test_locate_empty_body(self):
        """Test that a document without fields yields nothing."""
        document = TestUtils.create_document("Plain text only")
        self.assertEqual(list(self.locator.locate(document.element.body)), [])


if __name__ == '__main__':
    unittest.main()
