"""
Conversions between Dataverse rows, internal records and API payloads.
"""

import logging
from datetime import date, datetime
from typing import Any

from osot_api.models import (
    AccessModifier,
    AffiliateEligibility,
    Category,
    MembershipCategoryRecord,
    MembershipEligibility,
    ParentalLeaveExpected,
    Privilege,
    UserGroup,
)
from osot_api.models.enums import (
    get_access_modifier_display_name,
    get_affiliate_eligibility_display_name,
    get_category_display_name,
    get_eligibility_display_name,
    get_parental_leave_expected_display_name,
    get_privilege_display_name,
    get_user_group_display_name,
)
from osot_api.services.accounts import ACCOUNTS_TABLE, AFFILIATES_TABLE
from osot_api.services.dataverse import odata_bind
from osot_api.services.membership_category.constants import Fields

logger = logging.getLogger(__name__)


def _to_enum(enum_cls, value: Any):
    if value is None or value == "":
        return None
    try:
        return enum_cls(int(value))
    except (TypeError, ValueError):
        logger.warning(f"Ignoring unknown {enum_cls.__name__} value: {value!r}")
        return None


def _to_date(value: Any) -> date | None:
    if not value:
        return None
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(str(value)[:10])
    except ValueError:
        logger.warning(f"Ignoring malformed date value: {value!r}")
        return None


def _to_datetime(value: Any) -> datetime | None:
    if not value:
        return None
    if isinstance(value, datetime):
        return value
    try:
        return datetime.fromisoformat(str(value).replace("Z", "+00:00"))
    except ValueError:
        logger.warning(f"Ignoring malformed timestamp value: {value!r}")
        return None


def _iso(value: date | None) -> str | None:
    return value.isoformat() if value else None


def record_from_row(row: dict[str, Any]) -> MembershipCategoryRecord:
    """Build an internal record from a Dataverse row."""
    return MembershipCategoryRecord(
        id=row[Fields.ID],
        membership_year=str(row.get(Fields.MEMBERSHIP_YEAR) or ""),
        category_id=row.get(Fields.CATEGORY_ID),
        account_id=row.get(Fields.ACCOUNT_LOOKUP),
        affiliate_id=row.get(Fields.AFFILIATE_LOOKUP),
        membership_category=_to_enum(Category, row.get(Fields.MEMBERSHIP_CATEGORY)),
        users_group=_to_enum(UserGroup, row.get(Fields.USERS_GROUP)),
        eligibility=_to_enum(MembershipEligibility, row.get(Fields.ELIGIBILITY)),
        eligibility_affiliate=_to_enum(
            AffiliateEligibility, row.get(Fields.ELIGIBILITY_AFFILIATE)
        ),
        parental_leave_from=_to_date(row.get(Fields.PARENTAL_LEAVE_FROM)),
        parental_leave_to=_to_date(row.get(Fields.PARENTAL_LEAVE_TO)),
        parental_leave_expected=_to_enum(
            ParentalLeaveExpected, row.get(Fields.PARENTAL_LEAVE_EXPECTED)
        ),
        retirement_start=_to_date(row.get(Fields.RETIREMENT_START)),
        privilege=_to_enum(Privilege, row.get(Fields.PRIVILEGE)),
        access_modifier=_to_enum(AccessModifier, row.get(Fields.ACCESS_MODIFIERS)),
        created_on=_to_datetime(row.get(Fields.CREATED_ON)),
        modified_on=_to_datetime(row.get(Fields.MODIFIED_ON)),
        owner_id=row.get(Fields.OWNER_ID),
    )


def build_create_payload(
    user_type: str,
    user_guid: str,
    membership_year: str,
    category: Category,
    user_group: UserGroup,
    eligibility: MembershipEligibility | None = None,
    eligibility_affiliate: AffiliateEligibility | None = None,
    parental_leave_from: date | None = None,
    parental_leave_to: date | None = None,
    parental_leave_expected: ParentalLeaveExpected | None = None,
    retirement_start: date | None = None,
    privilege: Privilege = Privilege.OWNER,
    access_modifier: AccessModifier = AccessModifier.PRIVATE,
) -> dict[str, Any]:
    """
    Build the POST body for a new membership category row.

    The user reference is written as an OData bind; only non-null optional
    fields are included.
    """
    if user_type == "account":
        payload: dict[str, Any] = {Fields.ACCOUNT_BIND: odata_bind(ACCOUNTS_TABLE, user_guid)}
    else:
        payload = {Fields.AFFILIATE_BIND: odata_bind(AFFILIATES_TABLE, user_guid)}

    payload.update({
        Fields.MEMBERSHIP_YEAR: membership_year,
        Fields.MEMBERSHIP_CATEGORY: int(category),
        Fields.USERS_GROUP: int(user_group),
        Fields.PRIVILEGE: int(privilege),
        Fields.ACCESS_MODIFIERS: int(access_modifier),
    })

    optional = {
        Fields.ELIGIBILITY: eligibility,
        Fields.ELIGIBILITY_AFFILIATE: eligibility_affiliate,
        Fields.PARENTAL_LEAVE_EXPECTED: parental_leave_expected,
    }
    for field_name, value in optional.items():
        if value is not None:
            payload[field_name] = int(value)

    dates = {
        Fields.PARENTAL_LEAVE_FROM: parental_leave_from,
        Fields.PARENTAL_LEAVE_TO: parental_leave_to,
        Fields.RETIREMENT_START: retirement_start,
    }
    for field_name, value in dates.items():
        if value is not None:
            payload[field_name] = value.isoformat()

    return payload


def record_to_response(
    record: MembershipCategoryRecord,
    today: date | None = None,
) -> dict[str, Any]:
    """
    Render a record for API output.

    Choice fields are shown as display labels; lookups are left out in favour
    of the user type.
    """
    return {
        "osot_table_membership_categoryid": record.id,
        "osot_category_id": record.category_id,
        "osot_membership_year": record.membership_year,
        "user_type": record.user_type,
        "osot_membership_category": (
            get_category_display_name(record.membership_category)
            if record.membership_category is not None else None
        ),
        "osot_users_group": (
            get_user_group_display_name(record.users_group)
            if record.users_group is not None else None
        ),
        "osot_eligibility": (
            get_eligibility_display_name(record.eligibility)
            if record.eligibility is not None else None
        ),
        "osot_eligibility_affiliate": (
            get_affiliate_eligibility_display_name(record.eligibility_affiliate)
            if record.eligibility_affiliate is not None else None
        ),
        "osot_parental_leave_from": _iso(record.parental_leave_from),
        "osot_parental_leave_to": _iso(record.parental_leave_to),
        "osot_parental_leave_expected": (
            get_parental_leave_expected_display_name(record.parental_leave_expected)
            if record.parental_leave_expected is not None else None
        ),
        "osot_retirement_start": _iso(record.retirement_start),
        "osot_privilege": (
            get_privilege_display_name(record.privilege)
            if record.privilege is not None else None
        ),
        "osot_access_modifiers": (
            get_access_modifier_display_name(record.access_modifier)
            if record.access_modifier is not None else None
        ),
        "is_on_parental_leave": record.is_on_parental_leave(today),
        "is_retired": record.is_retired(today),
        "createdon": record.created_on.isoformat() if record.created_on else None,
        "modifiedon": record.modified_on.isoformat() if record.modified_on else None,
    }
