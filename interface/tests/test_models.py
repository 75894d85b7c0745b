"""
Unit tests for models.py

Tests projecting SourceKit dictionaries into declaration records.
"""

import unittest

from interface.access import AccessLevel
from interface.models import DeclarationRecord


STRUCT_PAYLOAD = {
    "key.kind": "source.lang.swift.decl.struct",
    "key.name": "Point",
    "key.accessibility": "source.lang.swift.accessibility.public",
    "key.doc.comment": "A point.",
    "key.parsed_declaration": "public struct Point",
    "key.offset": 120,
    "key.substructure": [
        {
            "key.kind": "source.lang.swift.decl.var.instance",
            "key.name": "x",
            "key.accessibility": "source.lang.swift.accessibility.public",
            "key.parsed_declaration": "public var x: Int",
        },
        {
            "key.kind": "source.lang.swift.decl.var.instance",
            "key.name": "y",
            "key.parsed_declaration": "var y: Int",
        },
    ],
}


class TestFromDict(unittest.TestCase):
    """Test DeclarationRecord.from_dict."""

    def test_fields(self):
        record = DeclarationRecord.from_dict(STRUCT_PAYLOAD)
        self.assertEqual(record.kind, "source.lang.swift.decl.struct")
        self.assertEqual(record.name, "Point")
        self.assertEqual(record.documentation, "A point.")
        self.assertEqual(record.signature, "public struct Point")
        self.assertEqual(record.access_level, AccessLevel.PUBLIC)

    def test_children_keep_source_order(self):
        record = DeclarationRecord.from_dict(STRUCT_PAYLOAD)
        self.assertEqual([child.name for child in record.children], ["x", "y"])

    def test_missing_accessibility_is_private(self):
        record = DeclarationRecord.from_dict(STRUCT_PAYLOAD)
        self.assertEqual(record.children[1].access_level, AccessLevel.PRIVATE)

    def test_empty_payload(self):
        """Test a synthetic node with nothing in it."""
        record = DeclarationRecord.from_dict({})
        self.assertIsNone(record.kind)
        self.assertIsNone(record.signature)
        self.assertIsNone(record.documentation)
        self.assertEqual(record.children, ())
        self.assertEqual(record.access_level, AccessLevel.PRIVATE)

    def test_wrong_types_are_ignored(self):
        record = DeclarationRecord.from_dict({
            "key.kind": 42,
            "key.parsed_declaration": ["not", "text"],
            "key.substructure": [{"key.name": "ok"}, "junk", None],
        })
        self.assertIsNone(record.kind)
        self.assertIsNone(record.signature)
        self.assertEqual(len(record.children), 1)
        self.assertEqual(record.children[0].name, "ok")

    def test_substructure_not_a_list(self):
        record = DeclarationRecord.from_dict({"key.substructure": {"key.name": "x"}})
        self.assertEqual(record.children, ())

    def test_input_not_mutated(self):
        before = repr(STRUCT_PAYLOAD)
        DeclarationRecord.from_dict(STRUCT_PAYLOAD)
        self.assertEqual(repr(STRUCT_PAYLOAD), before)


class TestPredicates(unittest.TestCase):
    """Test derived kind predicates."""

    def test_container_kinds(self):
        for kind in (
            "source.lang.swift.decl.struct",
            "source.lang.swift.decl.class",
            "source.lang.swift.decl.enum",
            "source.lang.swift.decl.protocol",
            "source.lang.swift.decl.extension",
            "source.lang.swift.decl.extension.class",
            "source.lang.swift.decl.extension.enum",
            "source.lang.swift.decl.extension.protocol",
            "source.lang.swift.decl.extension.struct",
        ):
            self.assertTrue(DeclarationRecord(kind=kind).is_container_kind, kind)

    def test_non_container_kinds(self):
        for kind in (
            None,
            "source.lang.swift.decl.function.method.instance",
            "source.lang.swift.decl.var.instance",
            "source.lang.swift.decl.enumcase",
            "source.lang.swift.decl.typealias",
        ):
            self.assertFalse(DeclarationRecord(kind=kind).is_container_kind, kind)

    def test_enum_case_group(self):
        self.assertTrue(
            DeclarationRecord(kind="source.lang.swift.decl.enumcase").is_enum_case_group
        )
        self.assertFalse(
            DeclarationRecord(kind="source.lang.swift.decl.enumelement").is_enum_case_group
        )

    def test_records_are_immutable(self):
        record = DeclarationRecord(kind="source.lang.swift.decl.struct")
        with self.assertRaises(AttributeError):
            record.kind = "source.lang.swift.decl.class"


if __name__ == "__main__":
    unittest.main()
