"""
Tree-sitter parser initialization and file parsing utilities.

This module provides functions to initialize the Java parser and parse source files.
"""

import logging
from typing import Optional, Tuple
import tree_sitter_java as tsjava
from tree_sitter import Language, Node, Parser, Tree

from core.errors import SyntaxFailure, TraversalIOFailure

# Configure logging
logger = logging.getLogger(__name__)

# Module-level language constant
JAVA_LANGUAGE = Language(tsjava.language())


def create_parser() -> Parser:
    """Create and configure a tree-sitter parser for Java.

    Returns:
        A Parser instance configured with the Java language.

    Example:
        >>> parser = create_parser()
        >>> tree = parser.parse(b"class A {}")
    """
    parser = Parser(JAVA_LANGUAGE)
    logger.debug("Created tree-sitter Java parser")
    return parser


def parse_bytes(source: bytes) -> Tree:
    """Parse raw bytes of Java source code.

    Args:
        source: UTF-8 encoded bytes of Java source code.

    Returns:
        A Tree object representing the parsed syntax tree.

    Raises:
        TypeError: If source is not bytes.

    Example:
        >>> tree = parse_bytes(b"public class A {}")
        >>> tree.root_node.type
        'program'
    """
    if not isinstance(source, bytes):
        raise TypeError(f"Source must be bytes, got {type(source).__name__}")

    parser = create_parser()
    tree = parser.parse(source)

    logger.debug(f"Parsed {len(source)} bytes of Java code")
    return tree


def count_error_nodes(tree: Tree) -> int:
    """Count ERROR and MISSING nodes in a parsed tree."""
    count = 0
    stack = [tree.root_node]
    while stack:
        node = stack.pop()
        if node.is_error or node.is_missing:
            count += 1
        stack.extend(node.children)
    return count


def first_error_node(tree: Tree) -> Optional[Node]:
    """Return the first ERROR or MISSING node in document order, if any."""
    stack = [tree.root_node]
    while stack:
        node = stack.pop()
        if node.is_error or node.is_missing:
            return node
        if node.has_error:
            stack.extend(reversed(node.children))
    return None


def parse_file(file_path: str, strict: bool = True) -> Tuple[Tree, bytes]:
    """Parse a Java source file from disk.

    Args:
        file_path: Path to the .java file.
        strict: If True, a tree containing syntax errors raises SyntaxFailure.
            If False, errors are logged and the partial tree is returned.

    Returns:
        A tuple of (Tree, source_bytes).

    Raises:
        TraversalIOFailure: If the file cannot be read.
        SyntaxFailure: If ``strict`` and the file contains syntax errors.
    """
    try:
        with open(file_path, "rb") as f:
            source_bytes = f.read()
    except OSError as e:
        logger.error(f"Error reading file {file_path}: {e}")
        raise TraversalIOFailure(f"Cannot read source file {file_path}: {e}", path=file_path) from e

    tree = parse_bytes(source_bytes)

    if tree.root_node.has_error:
        error_count = count_error_nodes(tree)
        node = first_error_node(tree)
        location = ""
        if node is not None:
            location = f" (first at line {node.start_point.row + 1}, column {node.start_point.column + 1})"
        message = f"File {file_path} contains {error_count} syntax error(s){location}"
        if strict:
            raise SyntaxFailure(message, path=file_path)
        logger.warning(message)

    logger.debug(f"Successfully parsed file: {file_path}")
    return tree, source_bytes
