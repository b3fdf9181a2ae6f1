"""
Parental leave and retirement date rules.

Each parental leave insurance option (full year, six months) can be used once
per lifetime; usage is read from every historical membership record.
"""

import logging
from datetime import date
from typing import Iterable

from osot_api.models import (
    MembershipCategoryRecord,
    MembershipEligibility,
    ParentalLeaveExpected,
    ParentalLeaveOptions,
    RequiredDateFields,
    UserGroup,
    UserType,
    ValidationResult,
)
from osot_api.models.enums import get_parental_leave_expected_display_name
from osot_api.services.membership_category.constants import (
    MAX_PARENTAL_LEAVE_DAYS,
    PARENTAL_LEAVE_DATE_FIELDS,
    RETIREMENT_DATE_FIELDS,
    Messages,
)
from osot_api.services.membership_category.repository import MembershipCategoryRepository
from osot_api.services.membership_category.usergroup import UserGroupResolver

logger = logging.getLogger(__name__)

ALL_PARENTAL_LEAVE_OPTIONS = (ParentalLeaveExpected.FULL_YEAR, ParentalLeaveExpected.SIX_MONTHS)


def get_required_date_fields(eligibility: int | None) -> RequiredDateFields:
    """Date fields that must accompany an eligibility answer."""
    result = RequiredDateFields()
    if eligibility == MembershipEligibility.QUESTION_6:
        result.requires_parental_leave = True
        result.parental_leave_fields = list(PARENTAL_LEAVE_DATE_FIELDS)
    elif eligibility == MembershipEligibility.QUESTION_5:
        result.requires_retirement = True
        result.retirement_fields = list(RETIREMENT_DATE_FIELDS)
    return result


def validate_date_fields(
    parental_leave_from: date | None = None,
    parental_leave_to: date | None = None,
    retirement_start: date | None = None,
    today: date | None = None,
) -> ValidationResult:
    """
    Consistency checks for any supplied dates, whatever the eligibility.

    Parental leave dates come as a pair, run forwards and span at most
    MAX_PARENTAL_LEAVE_DAYS; a retirement start cannot be in the future.
    """
    if (parental_leave_from is None) != (parental_leave_to is None):
        return ValidationResult.fail(Messages.PARENTAL_LEAVE_INCOMPLETE)

    if parental_leave_from is not None and parental_leave_to is not None:
        if parental_leave_from >= parental_leave_to:
            return ValidationResult.fail(Messages.PARENTAL_LEAVE_RANGE)
        if (parental_leave_to - parental_leave_from).days > MAX_PARENTAL_LEAVE_DAYS:
            return ValidationResult.fail(
                Messages.PARENTAL_LEAVE_TOO_LONG.format(days=MAX_PARENTAL_LEAVE_DAYS)
            )

    if retirement_start is not None and retirement_start > (today or date.today()):
        return ValidationResult.fail(Messages.RETIREMENT_IN_FUTURE)

    return ValidationResult.ok()


def validate_required_date_fields(
    eligibility: int | None,
    parental_leave_from: date | None = None,
    parental_leave_to: date | None = None,
    retirement_start: date | None = None,
    today: date | None = None,
) -> ValidationResult:
    """Required dates for the eligibility answer, then the general date checks."""
    required = get_required_date_fields(eligibility)

    if required.requires_parental_leave and (parental_leave_from is None or parental_leave_to is None):
        return ValidationResult.fail(Messages.PARENTAL_LEAVE_DATES_REQUIRED)

    if required.requires_retirement and retirement_start is None:
        return ValidationResult.fail(Messages.RETIREMENT_DATE_REQUIRED)

    return validate_date_fields(parental_leave_from, parental_leave_to, retirement_start, today)


def used_parental_leave_options(
    records: Iterable[MembershipCategoryRecord],
) -> list[ParentalLeaveExpected]:
    """Distinct parental leave options recorded across all years."""
    used = {
        record.parental_leave_expected
        for record in records
        if record.parental_leave_expected is not None
    }
    return sorted(used)


def parental_leave_options_from_history(
    records: Iterable[MembershipCategoryRecord],
) -> ParentalLeaveOptions:
    used = used_parental_leave_options(records)
    available = [option for option in ALL_PARENTAL_LEAVE_OPTIONS if option not in used]
    return ParentalLeaveOptions(
        available=[int(option) for option in available],
        used=[int(option) for option in used],
    )


def check_parental_leave_expected(
    value: int | None,
    user_type: UserType,
    user_group: UserGroup,
    eligibility: int | None,
    parental_leave_from: date | None,
    parental_leave_to: date | None,
    available: Iterable[int],
) -> ValidationResult:
    """
    Apply the parental-leave-expected rules in order, stopping at the first failure.

    Not supplying the field always passes.
    """
    if value is None:
        return ValidationResult.ok()
    if user_type == "affiliate":
        return ValidationResult.fail(Messages.EXPECTED_NOT_FOR_AFFILIATES)
    if user_group not in (UserGroup.OT, UserGroup.OTA):
        return ValidationResult.fail(Messages.EXPECTED_ONLY_OT_OTA)
    if eligibility != MembershipEligibility.QUESTION_6:
        return ValidationResult.fail(Messages.EXPECTED_REQUIRES_ELIGIBILITY)
    if parental_leave_from is None or parental_leave_to is None:
        return ValidationResult.fail(Messages.EXPECTED_REQUIRES_DATES)
    if value not in set(available):
        return ValidationResult.fail(
            Messages.EXPECTED_ALREADY_USED.format(
                option=get_parental_leave_expected_display_name(value)
            )
        )
    return ValidationResult.ok()


class ParentalLeaveService:
    """Parental leave lookups backed by the membership category history."""

    def __init__(
        self,
        repository: MembershipCategoryRepository,
        usergroups: UserGroupResolver,
    ):
        self.repository = repository
        self.usergroups = usergroups

    async def get_options_for_guid(
        self,
        user_type: UserType,
        user_guid: str,
    ) -> ParentalLeaveOptions:
        if user_type == "affiliate":
            return ParentalLeaveOptions()
        history = await self.repository.find_by_user_guid(user_type, user_guid)
        return parental_leave_options_from_history(history)

    async def get_parental_leave_options(
        self,
        business_id: str,
        user_type: UserType,
    ) -> ParentalLeaveOptions:
        """
        Get the parental leave options still available to a user.

        Affiliates never have any.
        """
        if user_type == "affiliate":
            return ParentalLeaveOptions()
        user_guid = await self.usergroups.resolve_user_guid(business_id, user_type)
        return await self.get_options_for_guid(user_type, user_guid)

    async def validate_parental_leave_expected(
        self,
        value: int | None,
        user_type: UserType,
        user_guid: str,
        user_group: UserGroup,
        eligibility: int | None,
        parental_leave_from: date | None,
        parental_leave_to: date | None,
    ) -> ValidationResult:
        if value is None:
            return ValidationResult.ok()

        available: list[int] = []
        if user_type == "account" and user_group in (UserGroup.OT, UserGroup.OTA):
            options = await self.get_options_for_guid(user_type, user_guid)
            available = options.available

        result = check_parental_leave_expected(
            value,
            user_type,
            user_group,
            eligibility,
            parental_leave_from,
            parental_leave_to,
            available,
        )
        if not result.is_valid:
            logger.info(f"Parental leave expected rejected for {user_guid[:8]}: {result.message}")
        return result
