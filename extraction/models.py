"""
Read-only declaration model consumed by the role extraction engine,
and the report row it produces.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

# Deduplicated, ascending-sorted role names
RoleSet = Tuple[str, ...]


class DeclarationKind(str, Enum):
    """Kinds of top-level type declarations."""

    CLASS = "class"
    INTERFACE = "interface"
    OTHER = "other"


class MemberKind(str, Enum):
    """Kinds of type body members."""

    METHOD = "method"
    CONSTRUCTOR = "constructor"
    FIELD = "field"
    TYPE = "type"
    OTHER = "other"


class ValueKind(str, Enum):
    """Kinds of single-member annotation values."""

    STRING = "string"
    ARRAY = "array"
    OTHER = "other"


@dataclass(frozen=True)
class AnnotationValue:
    """The argument of a single-member annotation.

    Attributes:
        kind: STRING for a string literal, ARRAY for ``{...}``, OTHER otherwise.
        text: Literal content for STRING (without quotes), source text for OTHER.
        elements: Ordered element values for ARRAY.
    """

    kind: ValueKind
    text: str = ""
    elements: Tuple["AnnotationValue", ...] = ()

    @classmethod
    def string(cls, text: str) -> "AnnotationValue":
        return cls(kind=ValueKind.STRING, text=text)

    @classmethod
    def array(cls, *elements: "AnnotationValue") -> "AnnotationValue":
        return cls(kind=ValueKind.ARRAY, elements=tuple(elements))

    @classmethod
    def other(cls, text: str) -> "AnnotationValue":
        return cls(kind=ValueKind.OTHER, text=text)


@dataclass(frozen=True)
class Annotation:
    """An annotation by simple name.

    ``value`` is set only for single-member annotations such as
    ``@RolesAllowed("admin")``; marker and key=value forms leave it None.
    """

    name: str
    value: Optional[AnnotationValue] = None


@dataclass(frozen=True)
class MemberDeclaration:
    """A member of a type body (method, constructor, field, nested type)."""

    kind: MemberKind
    name: str
    modifiers: Tuple[str, ...] = ()
    annotations: Tuple[Annotation, ...] = ()
    start_line: int = 0

    @property
    def is_public(self) -> bool:
        return "public" in self.modifiers


@dataclass(frozen=True)
class TypeDeclaration:
    """A top-level type declaration of a source unit."""

    kind: DeclarationKind
    name: str
    annotations: Tuple[Annotation, ...] = ()
    members: Tuple[MemberDeclaration, ...] = ()
    start_line: int = 0


@dataclass(frozen=True)
class ReportRow:
    """One line of the security report.

    Attributes:
        class_name: Simple name of the type.
        member_name: Method name, or ``*`` for a class-level row.
        description: Rendered description set, e.g. ``[does bar]``.
        roles_display: ``[all]`` or the rendered role set, e.g. ``[admin; user]``.
    """

    class_name: str
    member_name: str
    description: str
    roles_display: str

    def to_line(self) -> str:
        """Render the CSV line, including the trailing empty column."""
        return f"{self.class_name},{self.member_name},{self.description},{self.roles_display},\n"
