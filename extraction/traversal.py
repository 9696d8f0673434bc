"""
Syntax tree traversal and declaration extraction logic.

This module walks the top level of a parsed Java compilation unit and builds
the read-only declaration model (types, members, annotations) consumed by
the role extraction engine.
"""

import logging
from typing import List, Optional, Tuple
from tree_sitter import Node, Tree

from extraction.config import (
    CLASS_NODE,
    INTERFACE_NODE,
    OTHER_TYPE_NODES,
    METHOD_NODE,
    CONSTRUCTOR_NODE,
    FIELD_NODES,
    MODIFIERS_NODE,
    MARKER_ANNOTATION_NODE,
    ANNOTATION_NODE,
    ELEMENT_VALUE_PAIR_NODE,
    ARRAY_INITIALIZER_NODE,
    STRING_LITERAL_NODE,
    COMMENT_NODES,
)
from extraction.models import (
    Annotation,
    AnnotationValue,
    DeclarationKind,
    MemberDeclaration,
    MemberKind,
    TypeDeclaration,
)

logger = logging.getLogger(__name__)


def node_text(node: Optional[Node]) -> str:
    """Decode the source text of a node, or '' for None."""
    if node is None or node.text is None:
        return ""
    return node.text.decode("utf-8", errors="replace")


def simple_name(name_node: Optional[Node]) -> str:
    """Return the last segment of an identifier or scoped identifier.

    ``@javax.annotation.security.RolesAllowed`` and ``@RolesAllowed`` both
    resolve to ``RolesAllowed``.
    """
    text = node_text(name_node).strip()
    return text.rsplit(".", 1)[-1].strip()


def string_literal_content(node: Node) -> str:
    """Return the raw content between the quotes of a string literal.

    Escape sequences are kept as written in the source.
    """
    text = node_text(node)
    if text.startswith('"""') and text.endswith('"""') and len(text) >= 6:
        return text[3:-3]
    if len(text) >= 2 and text[0] == '"' and text[-1] == '"':
        return text[1:-1]
    return text


def extract_annotation_value(node: Node) -> AnnotationValue:
    """Convert an element value node into an AnnotationValue."""
    if node.type == STRING_LITERAL_NODE:
        return AnnotationValue.string(string_literal_content(node))
    if node.type == ARRAY_INITIALIZER_NODE:
        return AnnotationValue.array(
            *(extract_annotation_value(child) for child in node.named_children
              if child.type not in COMMENT_NODES)
        )
    return AnnotationValue.other(node_text(node))


def extract_annotation(node: Node) -> Optional[Annotation]:
    """Build an Annotation from a marker_annotation or annotation node.

    Only single-member annotations carry a value. ``@A(value = "x")`` is a
    key=value annotation and yields no value.
    """
    if node.type == MARKER_ANNOTATION_NODE:
        return Annotation(name=simple_name(node.child_by_field_name("name")))

    if node.type != ANNOTATION_NODE:
        return None

    name = simple_name(node.child_by_field_name("name"))
    arguments = node.child_by_field_name("arguments")
    if arguments is None:
        return Annotation(name=name)

    values = [child for child in arguments.named_children if child.type not in COMMENT_NODES]
    if len(values) != 1 or values[0].type == ELEMENT_VALUE_PAIR_NODE:
        logger.debug(f"Annotation @{name} at line {node.start_point.row + 1} is not single-member")
        return Annotation(name=name)

    return Annotation(name=name, value=extract_annotation_value(values[0]))


def extract_modifiers(node: Node) -> Tuple[Tuple[str, ...], Tuple[Annotation, ...]]:
    """Collect modifier keywords and annotations of a declaration node.

    Returns:
        A tuple of (keywords, annotations), both in source order.
    """
    keywords: List[str] = []
    annotations: List[Annotation] = []

    for child in node.children:
        if child.type != MODIFIERS_NODE:
            continue
        for modifier in child.children:
            if modifier.type in (MARKER_ANNOTATION_NODE, ANNOTATION_NODE):
                annotation = extract_annotation(modifier)
                if annotation is not None:
                    annotations.append(annotation)
            elif not modifier.is_named:
                keywords.append(modifier.type)

    return tuple(keywords), tuple(annotations)


def classify_member(node: Node) -> MemberKind:
    """Map a body child node type to its MemberKind."""
    if node.type == METHOD_NODE:
        return MemberKind.METHOD
    if node.type == CONSTRUCTOR_NODE:
        return MemberKind.CONSTRUCTOR
    if node.type in FIELD_NODES:
        return MemberKind.FIELD
    if classify_declaration(node) is not None:
        return MemberKind.TYPE
    return MemberKind.OTHER


def classify_declaration(node: Node) -> Optional[DeclarationKind]:
    """Map a node to its DeclarationKind, or None if it declares no type."""
    if node.type == CLASS_NODE:
        return DeclarationKind.CLASS
    if node.type == INTERFACE_NODE:
        return DeclarationKind.INTERFACE
    if node.type in OTHER_TYPE_NODES:
        return DeclarationKind.OTHER
    return None


def extract_member(node: Node) -> Optional[MemberDeclaration]:
    """Build a MemberDeclaration from a type body child."""
    if not node.is_named or node.type in COMMENT_NODES:
        return None

    kind = classify_member(node)
    keywords, annotations = extract_modifiers(node)
    name = node_text(node.child_by_field_name("name"))

    return MemberDeclaration(
        kind=kind,
        name=name,
        modifiers=keywords,
        annotations=annotations,
        start_line=node.start_point.row + 1,
    )


def extract_type_declaration(node: Node) -> Optional[TypeDeclaration]:
    """Build a TypeDeclaration from a top-level declaration node.

    Args:
        node: A class, interface, enum, record or annotation type declaration.

    Returns:
        The TypeDeclaration, or None if the node declares no type.
    """
    kind = classify_declaration(node)
    if kind is None:
        return None

    name = node_text(node.child_by_field_name("name"))
    _, annotations = extract_modifiers(node)

    members: List[MemberDeclaration] = []
    body = node.child_by_field_name("body")
    if body is not None:
        for child in body.children:
            member = extract_member(child)
            if member is not None:
                members.append(member)

    declaration = TypeDeclaration(
        kind=kind,
        name=name,
        annotations=annotations,
        members=tuple(members),
        start_line=node.start_point.row + 1,
    )
    logger.debug(
        f"Extracted {kind.value} {name} with {len(annotations)} annotations "
        f"and {len(members)} members"
    )
    return declaration


def extract_declarations_from_tree(tree: Tree, file_path: str = "<bytes>") -> List[TypeDeclaration]:
    """Extract every top-level type declaration of a parsed compilation unit.

    Args:
        tree: The parsed syntax tree.
        file_path: Source path, used for logging only.

    Returns:
        Type declarations in source order.
    """
    declarations = []
    for child in tree.root_node.named_children:
        declaration = extract_type_declaration(child)
        if declaration is not None:
            declarations.append(declaration)
    logger.debug(f"Found {len(declarations)} type declarations in {file_path}")
    return declarations
