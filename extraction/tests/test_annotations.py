"""
Unit tests for annotations.py

Tests string literal extraction from single-member annotations and set rendering.
"""

import unittest

from extraction.annotations import (
    extract_annotation_contents,
    normalize_roles,
    render_role_set,
    single_line,
)
from extraction.models import Annotation, AnnotationValue


class TestExtractAnnotationContents(unittest.TestCase):
    """Test the single-value-or-list extraction contract."""

    def test_absent_annotation(self):
        """Test that a missing annotation yields the empty set."""
        self.assertEqual(extract_annotation_contents(None), ())

    def test_marker_annotation(self):
        """Test that an annotation without a single-member value yields the empty set."""
        self.assertEqual(extract_annotation_contents(Annotation("RolesAllowed")), ())

    def test_single_string_literal(self):
        """Test @RolesAllowed("admin")."""
        annotation = Annotation("RolesAllowed", AnnotationValue.string("admin"))
        self.assertEqual(extract_annotation_contents(annotation), ("admin",))

    def test_list_is_sorted(self):
        """Test that list elements come back ascending."""
        annotation = Annotation(
            "RolesAllowed",
            AnnotationValue.array(
                AnnotationValue.string("user"),
                AnnotationValue.string("admin"),
                AnnotationValue.string("auditor"),
            ),
        )
        self.assertEqual(
            extract_annotation_contents(annotation),
            ("admin", "auditor", "user"),
        )

    def test_list_is_deduplicated(self):
        """Test that repeated literals collapse."""
        annotation = Annotation(
            "RolesAllowed",
            AnnotationValue.array(
                AnnotationValue.string("admin"),
                AnnotationValue.string("admin"),
            ),
        )
        self.assertEqual(extract_annotation_contents(annotation), ("admin",))

    def test_empty_list(self):
        """Test @RolesAllowed({})."""
        annotation = Annotation("RolesAllowed", AnnotationValue.array())
        self.assertEqual(extract_annotation_contents(annotation), ())

    def test_non_string_value(self):
        """Test that a constant reference yields the empty set."""
        annotation = Annotation("RolesAllowed", AnnotationValue.other("Roles.ADMIN"))
        self.assertEqual(extract_annotation_contents(annotation), ())

    def test_non_string_elements_skipped(self):
        """Test that non-literal list elements are ignored."""
        annotation = Annotation(
            "RolesAllowed",
            AnnotationValue.array(
                AnnotationValue.other("Roles.ADMIN"),
                AnnotationValue.string("user"),
            ),
        )
        self.assertEqual(extract_annotation_contents(annotation), ("user",))


class TestRendering(unittest.TestCase):
    """Test bracketed set rendering."""

    def test_empty(self):
        self.assertEqual(render_role_set(()), "[]")

    def test_single(self):
        self.assertEqual(render_role_set(("admin",)), "[admin]")

    def test_multiple_use_semicolons(self):
        """Test that members never introduce a CSV comma."""
        rendered = render_role_set(("admin", "user"))
        self.assertEqual(rendered, "[admin; user]")
        self.assertNotIn(",", rendered)

    def test_line_breaks_folded(self):
        """Test that multi-line text renders on a single line."""
        rendered = render_role_set(("\n        Opens an\n        account\n",))
        self.assertEqual(rendered, "[Opens an account]")
        self.assertEqual(single_line("a\r\n  b"), "a b")

    def test_normalize_roles(self):
        self.assertEqual(normalize_roles(["b", "a", "b"]), ("a", "b"))


if __name__ == "__main__":
    unittest.main()
