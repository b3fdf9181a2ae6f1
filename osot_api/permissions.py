"""
Privilege checks for membership category operations.
"""

from osot_api.errors import PermissionDeniedError
from osot_api.models import AccessModifier, MembershipCategoryRecord, Privilege

CREATE_PRIVILEGES = frozenset({Privilege.OWNER, Privilege.ADMIN, Privilege.MAIN})
ADMIN_PRIVILEGES = frozenset({Privilege.ADMIN, Privilege.MAIN})


def can_create(privilege: Privilege | None) -> bool:
    return privilege in CREATE_PRIVILEGES


def can_view_all(privilege: Privilege | None) -> bool:
    return privilege in ADMIN_PRIVILEGES


def can_delete(privilege: Privilege | None) -> bool:
    return privilege in ADMIN_PRIVILEGES


def can_read_record(privilege: Privilege | None, record: MembershipCategoryRecord) -> bool:
    """ADMIN and MAIN read everything; everyone else only PUBLIC records."""
    return can_view_all(privilege) or record.access_modifier == AccessModifier.PUBLIC


def require_create(privilege: Privilege | None) -> None:
    if not can_create(privilege):
        raise PermissionDeniedError(
            "Insufficient privileges to create membership category",
            details={"privilege": int(privilege) if privilege is not None else None},
        )


def require_delete(privilege: Privilege | None) -> None:
    if not can_delete(privilege):
        raise PermissionDeniedError(
            "Only ADMIN or MAIN privilege can delete membership categories",
            details={"privilege": int(privilege) if privilege is not None else None},
        )
