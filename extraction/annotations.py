"""
Annotation content extraction.

Pulls string literal values out of single-value-or-list annotation arguments
such as ``@RolesAllowed("admin")`` or ``@RolesAllowed({"admin", "user"})``.
"""

import logging
import re
from typing import Iterable, Optional

from extraction.config import ROLE_SEPARATOR
from extraction.models import Annotation, RoleSet, ValueKind

logger = logging.getLogger(__name__)
_LINE_BREAK_RE = re.compile(r"\s*[\r\n]+\s*")


def normalize_roles(values: Iterable[str]) -> RoleSet:
    """Deduplicate and sort role names ascending."""
    return tuple(sorted(set(values)))


def extract_annotation_contents(annotation: Optional[Annotation]) -> RoleSet:
    """Return the normalized set of string literals carried by an annotation.

    Args:
        annotation: The annotation, or None if absent.

    Returns:
        A one-element set for a single string literal, the set of string
        elements for an array, and the empty set for an absent annotation,
        a marker or key=value annotation, or a non-string value.
    """
    if annotation is None or annotation.value is None:
        return ()

    value = annotation.value
    if value.kind is ValueKind.STRING:
        return (value.text,)
    if value.kind is ValueKind.ARRAY:
        literals = []
        for element in value.elements:
            if element.kind is ValueKind.STRING:
                literals.append(element.text)
            else:
                logger.debug(f"Ignoring non-literal element {element.text!r} in @{annotation.name}")
        return normalize_roles(literals)

    logger.debug(f"Ignoring non-literal value {value.text!r} in @{annotation.name}")
    return ()


def single_line(value: str) -> str:
    """Fold line breaks and their surrounding indentation into single spaces."""
    return _LINE_BREAK_RE.sub(" ", value).strip()


def render_role_set(values: RoleSet) -> str:
    """Render a set as ``[a; b]``; the empty set renders as ``[]``.

    Members are folded onto one line so each row stays one report line.
    """
    return "[" + ROLE_SEPARATOR.join(single_line(value) for value in values) + "]"
