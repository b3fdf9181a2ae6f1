"""
Creation-gate business rules.

Pure validators over already-loaded facts. Only the authentication rule
short-circuits; every other rule contributes its message to the report.
"""

from typing import Iterable

from osot_api.models import (
    AccountStatus,
    MembershipCategoryRecord,
    UserEligibilityInfo,
    ValidationReport,
    ValidationResult,
)
from osot_api.models.enums import get_account_status_display_name
from osot_api.services.membership_category.constants import Messages


def validate_authenticated(user_info: UserEligibilityInfo | None) -> ValidationResult:
    if user_info is None:
        return ValidationResult.fail(Messages.NOT_AUTHENTICATED)
    return ValidationResult.ok()


def validate_user_reference(account_id: str | None, affiliate_id: str | None) -> ValidationResult:
    """Exactly one of account or affiliate must be referenced."""
    if not account_id and not affiliate_id:
        return ValidationResult.fail(Messages.NO_USER_REFERENCE)
    if account_id and affiliate_id:
        return ValidationResult.fail(Messages.BOTH_USER_REFERENCES)
    return ValidationResult.ok()


def validate_account_status(user_info: UserEligibilityInfo) -> ValidationResult:
    if user_info.account_status != AccountStatus.ACTIVE:
        status = (
            get_account_status_display_name(user_info.account_status)
            if user_info.account_status is not None
            else "Unknown"
        )
        return ValidationResult.fail(Messages.ACCOUNT_NOT_ACTIVE.format(status=status))
    return ValidationResult.ok()


def validate_not_active_member(user_info: UserEligibilityInfo) -> ValidationResult:
    if user_info.active_member:
        return ValidationResult.fail(Messages.ALREADY_ACTIVE_MEMBER)
    return ValidationResult.ok()


def validate_unique_for_year(
    existing: Iterable[MembershipCategoryRecord],
    user_info: UserEligibilityInfo,
    membership_year: str,
) -> ValidationResult:
    if any(record.membership_year == membership_year for record in existing):
        return ValidationResult.fail(
            Messages.ALREADY_EXISTS_FOR_USER.format(
                user_type=user_info.user_type,
                user_id=user_info.user_id,
                year=membership_year,
            )
        )
    return ValidationResult.ok()


def validate_user_eligibility(
    user_info: UserEligibilityInfo | None,
    account_id: str | None,
    affiliate_id: str | None,
    membership_year: str,
    existing: Iterable[MembershipCategoryRecord] = (),
) -> ValidationReport:
    """
    Run every creation-gate rule and collect the failures.

    Args:
        user_info: Status facts of the user, None if it could not be resolved
        account_id: Account GUID referenced by the new record
        affiliate_id: Affiliate GUID referenced by the new record
        membership_year: Year the record is being created for
        existing: The user's existing membership category records
    """
    report = ValidationReport()

    report.add(validate_authenticated(user_info), Messages.NOT_AUTHENTICATED)
    if not report.is_valid:
        return report

    report.add(validate_user_reference(account_id, affiliate_id), Messages.NO_USER_REFERENCE)
    report.add(validate_account_status(user_info), "Account status is not active")
    report.add(validate_not_active_member(user_info), Messages.ALREADY_ACTIVE_MEMBER)
    report.add(
        validate_unique_for_year(existing, user_info, membership_year),
        "Membership category already exists",
    )
    return report
