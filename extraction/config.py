"""
Configuration constants for Java security annotation extraction.

Defines the tree-sitter node type strings and the annotation names that
drive the role extraction policy.
"""

from typing import FrozenSet, Set, Tuple

# Annotation simple names inspected by the engine
ROLES_ALLOWED: str = "RolesAllowed"
PERMIT_ALL: str = "PermitAll"
DESCRIPTION: str = "Description"

# Class-level tags that mark a type as a container-managed component
STEREOTYPE_TAGS: FrozenSet[str] = frozenset({
    "Stateless",
    "Stateful",
    "Local",
    "Remote",
})

# Container-invoked hooks, never user-invocable
LIFECYCLE_MARKERS: FrozenSet[str] = frozenset({
    "PostConstruct",
    "PreDestroy",
})

# Effective role sets denoting internal-only access; such methods are not reported
SUPPRESSED_ROLE_SETS: Tuple[Tuple[str, ...], ...] = (
    ("system",),
    ("system", "system-web"),
)

PERMIT_ALL_DISPLAY: str = "[all]"
CLASS_MEMBER_NAME: str = "*"
ROLE_SEPARATOR: str = "; "

# Top-level declaration node types
CLASS_NODE: str = "class_declaration"
INTERFACE_NODE: str = "interface_declaration"
OTHER_TYPE_NODES: Set[str] = {
    "enum_declaration",
    "record_declaration",
    "annotation_type_declaration",
}

# Member node types
METHOD_NODE: str = "method_declaration"
CONSTRUCTOR_NODE: str = "constructor_declaration"
FIELD_NODES: Set[str] = {
    "field_declaration",
    "constant_declaration",
}

# Annotation node types
MODIFIERS_NODE: str = "modifiers"
MARKER_ANNOTATION_NODE: str = "marker_annotation"
ANNOTATION_NODE: str = "annotation"
ELEMENT_VALUE_PAIR_NODE: str = "element_value_pair"
ARRAY_INITIALIZER_NODE: str = "element_value_array_initializer"
STRING_LITERAL_NODE: str = "string_literal"

# Comment node types (skipped wherever they may appear between values)
COMMENT_NODES: Set[str] = {
    "line_comment",
    "block_comment",
}

# Java source files
JAVA_EXTENSION: str = ".java"

# Filename substrings that mark a candidate component source unit
DEFAULT_FILE_NAME_MARKERS: Tuple[str, ...] = ("Bean", "me")

# Syntax policy default: error nodes abort the run
DEFAULT_STRICT_SYNTAX: bool = True
