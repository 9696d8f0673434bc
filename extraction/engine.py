"""
Role extraction engine.

Decides, for each type declaration, which report rows to emit and which
roles each row grants:

1. A class carrying ``@Description`` yields a single class-wide row with
   member ``*`` and its members are not examined.
2. Otherwise only managed components (``@Stateless``, ``@Stateful``,
   ``@Local``, ``@Remote``) are audited, one row per public, documented,
   non-lifecycle method.
3. ``@PermitAll`` at the class or method scope displays ``[all]``. Otherwise
   method roles override class roles, and methods restricted to internal
   system roles are left out.

The engine is a pure function of the declaration model and performs no I/O.
"""

import logging
from dataclasses import dataclass
from typing import Iterator, Optional

from extraction.annotations import extract_annotation_contents, render_role_set
from extraction.config import (
    ROLES_ALLOWED,
    PERMIT_ALL,
    DESCRIPTION,
    STEREOTYPE_TAGS,
    LIFECYCLE_MARKERS,
    SUPPRESSED_ROLE_SETS,
    PERMIT_ALL_DISPLAY,
    CLASS_MEMBER_NAME,
)
from extraction.models import (
    Annotation,
    DeclarationKind,
    MemberDeclaration,
    MemberKind,
    ReportRow,
    RoleSet,
    TypeDeclaration,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ClassPolicy:
    """Security annotations found at class level."""

    roles: RoleSet
    permit_all: bool
    description: Optional[Annotation]
    is_managed_component: bool


@dataclass(frozen=True)
class MethodPolicy:
    """Security annotations found on a method."""

    roles: RoleSet
    permit_all: bool
    description: RoleSet
    is_lifecycle_hook: bool


def classify_class_annotations(declaration: TypeDeclaration) -> ClassPolicy:
    """Scan a type's annotations once and classify them."""
    roles_annotation = None
    description_annotation = None
    permit_all = False
    is_managed_component = False

    for annotation in declaration.annotations:
        if annotation.name == ROLES_ALLOWED:
            roles_annotation = annotation
        elif annotation.name == PERMIT_ALL:
            permit_all = True
        elif annotation.name == DESCRIPTION:
            description_annotation = annotation
        elif annotation.name in STEREOTYPE_TAGS:
            is_managed_component = True

    return ClassPolicy(
        roles=extract_annotation_contents(roles_annotation),
        permit_all=permit_all,
        description=description_annotation,
        is_managed_component=is_managed_component,
    )


def classify_method_annotations(method: MemberDeclaration) -> MethodPolicy:
    """Scan a method's annotations once and classify them."""
    roles_annotation = None
    description_annotation = None
    permit_all = False
    is_lifecycle_hook = False

    for annotation in method.annotations:
        if annotation.name == ROLES_ALLOWED:
            roles_annotation = annotation
        elif annotation.name == PERMIT_ALL:
            permit_all = True
        elif annotation.name == DESCRIPTION:
            description_annotation = annotation
        elif annotation.name in LIFECYCLE_MARKERS:
            is_lifecycle_hook = True

    return MethodPolicy(
        roles=extract_annotation_contents(roles_annotation),
        permit_all=permit_all,
        description=extract_annotation_contents(description_annotation),
        is_lifecycle_hook=is_lifecycle_hook,
    )


def is_suppressed_role_set(roles: RoleSet) -> bool:
    """True if the roles denote internal-only access."""
    return tuple(roles) in SUPPRESSED_ROLE_SETS


def class_row(declaration: TypeDeclaration, policy: ClassPolicy) -> ReportRow:
    """Build the single class-wide row of a documented class."""
    roles_display = PERMIT_ALL_DISPLAY if policy.permit_all else render_role_set(policy.roles)
    return ReportRow(
        class_name=declaration.name,
        member_name=CLASS_MEMBER_NAME,
        description=render_role_set(extract_annotation_contents(policy.description)),
        roles_display=roles_display,
    )


def method_row(
    declaration: TypeDeclaration,
    class_policy: ClassPolicy,
    method: MemberDeclaration,
) -> Optional[ReportRow]:
    """Build the row of one method, or None if the method is not audited."""
    if not method.is_public:
        logger.debug(f"Skipping non-public method {declaration.name}.{method.name}")
        return None

    policy = classify_method_annotations(method)

    if policy.is_lifecycle_hook:
        logger.debug(f"Skipping lifecycle hook {declaration.name}.{method.name}")
        return None

    if not policy.description:
        logger.debug(f"Skipping undocumented method {declaration.name}.{method.name}")
        return None

    if class_policy.permit_all or policy.permit_all:
        roles_display = PERMIT_ALL_DISPLAY
    else:
        effective_roles = policy.roles if policy.roles else class_policy.roles
        if is_suppressed_role_set(effective_roles):
            logger.debug(
                f"Suppressing internal-only method {declaration.name}.{method.name} "
                f"({render_role_set(effective_roles)})"
            )
            return None
        roles_display = render_role_set(effective_roles)

    return ReportRow(
        class_name=declaration.name,
        member_name=method.name,
        description=render_role_set(policy.description),
        roles_display=roles_display,
    )


def extract_report_rows(declaration: TypeDeclaration) -> Iterator[ReportRow]:
    """Yield the report rows for one top-level type declaration.

    Args:
        declaration: A type declaration from the syntax tree adapter.

    Yields:
        ReportRow values in member declaration order.
    """
    if declaration.kind is DeclarationKind.OTHER:
        return
    if declaration.kind not in (DeclarationKind.CLASS, DeclarationKind.INTERFACE):
        raise ValueError(f"Unknown declaration kind: {declaration.kind!r}")

    policy = classify_class_annotations(declaration)

    if policy.description is not None:
        yield class_row(declaration, policy)
        return

    if not policy.is_managed_component:
        logger.debug(f"Skipping {declaration.name}: not a managed component")
        return

    for member in declaration.members:
        if member.kind is not MemberKind.METHOD:
            continue
        row = method_row(declaration, policy, member)
        if row is not None:
            yield row
