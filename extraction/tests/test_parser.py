"""
Unit tests for parser.py

Tests tree-sitter parser initialization, byte parsing, and file parsing.
"""

import os
import tempfile
import unittest

from core.errors import SyntaxFailure, TraversalIOFailure
from extraction.parser import count_error_nodes, create_parser, parse_bytes, parse_file


VALID_SOURCE = b"""
package com.example;

@Stateless
public class OrderBean {
    public void place() {}
}
"""

BROKEN_SOURCE = b"public class Broken { void x( }"


class TestParserInitialization(unittest.TestCase):
    """Test parser creation and initialization."""

    def test_create_parser(self):
        """Test that create_parser returns a parser with a language set."""
        parser = create_parser()
        self.assertIsNotNone(parser)
        self.assertIsNotNone(parser.language)


class TestParseBytes(unittest.TestCase):
    """Test parsing raw bytes of Java code."""

    def test_parse_class(self):
        tree = parse_bytes(VALID_SOURCE)
        self.assertEqual(tree.root_node.type, "program")
        self.assertFalse(tree.root_node.has_error)
        self.assertEqual(count_error_nodes(tree), 0)

    def test_parse_empty(self):
        tree = parse_bytes(b"")
        self.assertEqual(tree.root_node.type, "program")
        self.assertEqual(len(tree.root_node.children), 0)

    def test_parse_invalid_type(self):
        """Test that non-bytes input raises TypeError."""
        with self.assertRaises(TypeError):
            parse_bytes("class A {}")

    def test_parse_broken_source_counts_errors(self):
        tree = parse_bytes(BROKEN_SOURCE)
        self.assertTrue(tree.root_node.has_error)
        self.assertGreater(count_error_nodes(tree), 0)


class TestParseFile(unittest.TestCase):
    """Test parsing source files from disk."""

    def _write(self, content: bytes) -> str:
        handle = tempfile.NamedTemporaryFile(suffix=".java", delete=False)
        handle.write(content)
        handle.close()
        self.addCleanup(os.unlink, handle.name)
        return handle.name

    def test_parse_valid_file(self):
        path = self._write(VALID_SOURCE)
        tree, source = parse_file(path)
        self.assertEqual(source, VALID_SOURCE)
        self.assertEqual(tree.root_node.type, "program")

    def test_missing_file(self):
        with self.assertRaises(TraversalIOFailure) as ctx:
            parse_file("/nonexistent/OrderBean.java")
        self.assertEqual(ctx.exception.path, "/nonexistent/OrderBean.java")
        self.assertIsInstance(ctx.exception.__cause__, OSError)

    def test_strict_syntax_error(self):
        path = self._write(BROKEN_SOURCE)
        with self.assertRaises(SyntaxFailure) as ctx:
            parse_file(path)
        self.assertIn("syntax error", str(ctx.exception))
        self.assertEqual(ctx.exception.path, path)

    def test_lenient_syntax_error(self):
        path = self._write(BROKEN_SOURCE)
        with self.assertLogs("extraction.parser", level="WARNING"):
            tree, _ = parse_file(path, strict=False)
        self.assertTrue(tree.root_node.has_error)


if __name__ == "__main__":
    unittest.main()
