"""
Creation-gate orchestration.

Loads the facts the business rules need for a create payload, runs them,
and raises a single BusinessRuleViolationError carrying every failure.
"""

import logging
from datetime import date
from typing import Any

from osot_api.errors import BusinessRuleViolationError, ValidationError
from osot_api.models import UserGroup, UserType, ValidationReport
from osot_api.services.dataverse import parse_odata_bind
from osot_api.services.membership_category import rules
from osot_api.services.membership_category.constants import Fields
from osot_api.services.membership_category.parental_leave import ParentalLeaveService
from osot_api.services.membership_category.repository import MembershipCategoryRepository
from osot_api.services.membership_category.validation import ValidationService

logger = logging.getLogger(__name__)


def _bind_guid(payload: dict[str, Any], field: str) -> str | None:
    bind = payload.get(field)
    if not bind:
        return None
    try:
        return parse_odata_bind(bind)[1]
    except ValueError as e:
        raise ValidationError(str(e), details={"field": field})


def _payload_date(payload: dict[str, Any], field: str) -> date | None:
    value = payload.get(field)
    return date.fromisoformat(value) if value else None


class BusinessRuleService:
    def __init__(
        self,
        validation: ValidationService,
        repository: MembershipCategoryRepository,
        parental_leave: ParentalLeaveService,
    ):
        self.validation = validation
        self.repository = repository
        self.parental_leave = parental_leave

    async def validate_create(self, payload: dict[str, Any]) -> ValidationReport:
        """Run the creation gate against a create payload."""
        account_guid = _bind_guid(payload, Fields.ACCOUNT_BIND)
        affiliate_guid = _bind_guid(payload, Fields.AFFILIATE_BIND)
        membership_year = str(payload.get(Fields.MEMBERSHIP_YEAR) or "")

        user_type: UserType = "account" if account_guid else "affiliate"
        user_guid = account_guid or affiliate_guid

        user_info = None
        existing = []
        if user_guid:
            user_info = await self.validation.get_user_info(user_type, user_guid)
            if user_info is not None:
                existing = await self.repository.find_by_user_guid(user_type, user_guid)

        report = rules.validate_user_eligibility(
            user_info,
            account_guid,
            affiliate_guid,
            membership_year,
            existing,
        )
        if user_info is None:
            return report

        expected = payload.get(Fields.PARENTAL_LEAVE_EXPECTED)
        if expected is not None:
            users_group = payload.get(Fields.USERS_GROUP)
            result = await self.parental_leave.validate_parental_leave_expected(
                expected,
                user_type,
                user_guid,
                UserGroup(users_group) if users_group is not None else UserGroup.OTHER,
                payload.get(Fields.ELIGIBILITY),
                _payload_date(payload, Fields.PARENTAL_LEAVE_FROM),
                _payload_date(payload, Fields.PARENTAL_LEAVE_TO),
            )
            report.add(result, "Parental leave expected is not allowed")

        return report

    async def enforce_create(self, payload: dict[str, Any]) -> None:
        """
        Run the creation gate and raise on any failure.

        Raises:
            BusinessRuleViolationError: With every failed rule's message
        """
        report = await self.validate_create(payload)
        if not report.is_valid:
            logger.warning(f"Membership category creation blocked: {report.errors}")
            raise BusinessRuleViolationError(
                "Membership category business rule validation failed",
                errors=report.errors,
            )
