"""
Membership category registration workflow and service facade.

Registration runs the three-step determination (user group, eligibility,
category), checks the date rules, then hands the payload to the CRUD service
which applies the creation gate before writing to Dataverse.
"""

import logging
from datetime import date
from typing import Any

from osot_api.errors import ConflictError, ValidationError
from osot_api.models import (
    CategoryDetermination,
    CurrentUser,
    UserCreationData,
    UserGroup,
    ValidationResult,
)
from osot_api.schemas.membership_category import MembershipCategoryRegister
from osot_api.services.accounts import (
    AccountRepository,
    AffiliateRepository,
    EducationRepository,
)
from osot_api.services.dataverse import DataverseClient
from osot_api.services.membership_category.business_rules import BusinessRuleService
from osot_api.services.membership_category.constants import (
    DEFAULT_ACCESS_MODIFIER,
    DEFAULT_PRIVILEGE,
    Messages,
)
from osot_api.services.membership_category.crud import MembershipCategoryCrudService
from osot_api.services.membership_category.determination import determine_category
from osot_api.services.membership_category.eligibility import (
    EligibilityResolver,
    is_eligibility_required,
    validate_eligibility_choice,
)
from osot_api.services.membership_category.mapper import (
    build_create_payload,
    record_to_response,
)
from osot_api.services.membership_category.parental_leave import (
    ParentalLeaveService,
    get_required_date_fields,
    validate_date_fields,
    validate_required_date_fields,
)
from osot_api.services.membership_category.repository import MembershipCategoryRepository
from osot_api.services.membership_category.usergroup import UserGroupResolver
from osot_api.services.membership_category.validation import ValidationService
from osot_api.services.membership_settings import MembershipYearService

logger = logging.getLogger(__name__)


class MembershipCategoryService:
    """Entry point used by the router for every membership category operation."""

    def __init__(
        self,
        usergroups: UserGroupResolver,
        eligibility: EligibilityResolver,
        parental_leave: ParentalLeaveService,
        validation: ValidationService,
        crud: MembershipCategoryCrudService,
        years: MembershipYearService,
    ):
        self.usergroups = usergroups
        self.eligibility = eligibility
        self.parental_leave = parental_leave
        self.validation = validation
        self.crud = crud
        self.years = years

    def validate_registration(
        self,
        user_group: UserGroup,
        registration: MembershipCategoryRegister,
        today: date | None = None,
    ) -> ValidationResult:
        """
        Eligibility choice and date checks, stopping at the first failure.

        Supplied dates are checked for every user group; the dates an
        eligibility answer requires only apply to OT and OTA.
        """
        if not is_eligibility_required(user_group):
            return validate_date_fields(
                registration.osot_parental_leave_from,
                registration.osot_parental_leave_to,
                registration.osot_retirement_start,
                today,
            )

        result = validate_eligibility_choice(user_group, registration.osot_eligibility)
        if not result.is_valid:
            return result
        return validate_required_date_fields(
            registration.osot_eligibility,
            registration.osot_parental_leave_from,
            registration.osot_parental_leave_to,
            registration.osot_retirement_start,
            today,
        )

    def determine(
        self,
        user_data: UserCreationData,
        registration: MembershipCategoryRegister,
    ) -> CategoryDetermination:
        eligibility = (
            registration.osot_eligibility
            if is_eligibility_required(user_data.user_group) else None
        )
        category = determine_category(
            user_data.user_group,
            eligibility,
            registration.osot_eligibility_affiliate,
        )
        return CategoryDetermination(
            user_group=user_data.user_group,
            membership_category=category,
            requires_eligibility=is_eligibility_required(user_data.user_group),
            required_date_fields=get_required_date_fields(eligibility),
            user_guid=user_data.user_guid,
        )

    async def register(
        self,
        current_user: CurrentUser,
        registration: MembershipCategoryRegister,
        operation_id: str,
    ) -> dict[str, Any]:
        """
        Register the caller for the active membership year.

        Args:
            current_user: Authenticated caller
            registration: Eligibility answer and date fields
            operation_id: Operation ID for log correlation

        Returns:
            Created record plus how its category was determined

        Raises:
            NotFoundError: If no membership year is active
            AccountNotFoundError: If the caller's account does not exist
            ConflictError: If the caller already registered this year
            ValidationError: If the eligibility answer or dates are invalid
            BusinessRuleViolationError: If the creation gate fails
        """
        short_id = current_user.user_id[:8]
        logger.info(
            f"[{operation_id}] Membership registration started for "
            f"{current_user.user_type} {short_id}"
        )

        membership_year = await self.years.get_current_year(current_user.organization_id)
        user_data = await self.usergroups.collect_user_creation_data(
            current_user.user_id, current_user.user_type
        )

        if await self.validation.membership_exists(
            user_data.user_type, user_data.user_guid, membership_year
        ):
            raise ConflictError(
                Messages.ALREADY_REGISTERED.format(year=membership_year),
                details={"membership_year": membership_year},
            )

        result = self.validate_registration(user_data.user_group, registration)
        if not result.is_valid:
            raise ValidationError(
                result.message or "Membership category validation failed",
                details={"validation_errors": [result.message]},
            )

        determination = self.determine(user_data, registration)
        is_affiliate = user_data.user_type == "affiliate"

        payload = build_create_payload(
            user_type=user_data.user_type,
            user_guid=user_data.user_guid,
            membership_year=membership_year,
            category=determination.membership_category,
            user_group=determination.user_group,
            eligibility=registration.osot_eligibility if determination.requires_eligibility else None,
            eligibility_affiliate=registration.osot_eligibility_affiliate if is_affiliate else None,
            parental_leave_from=registration.osot_parental_leave_from,
            parental_leave_to=registration.osot_parental_leave_to,
            parental_leave_expected=registration.osot_parental_leave_expected,
            retirement_start=registration.osot_retirement_start,
            privilege=DEFAULT_PRIVILEGE,
            access_modifier=DEFAULT_ACCESS_MODIFIER,
        )

        record = await self.crud.create(payload, current_user.privilege)
        logger.info(
            f"[{operation_id}] Membership category {record.id} created: "
            f"group={determination.user_group.name}, "
            f"category={determination.membership_category.name}, year={membership_year}"
        )

        response = record_to_response(record)
        required = determination.required_date_fields
        response["membership_process"] = {
            "user_group": int(determination.user_group),
            "membership_category": int(determination.membership_category),
            "requires_eligibility": determination.requires_eligibility,
            "required_date_fields": {
                "requires_parental_leave": required.requires_parental_leave,
                "requires_retirement": required.requires_retirement,
                "parental_leave_fields": required.parental_leave_fields,
                "retirement_fields": required.retirement_fields,
            },
        }
        return response

    async def list_my_categories(self, current_user: CurrentUser) -> list[dict[str, Any]]:
        records = await self.crud.list_for_user(current_user.user_id, current_user.user_type)
        return [record_to_response(record) for record in records]

    async def get_parental_leave_options(self, current_user: CurrentUser) -> dict[str, list[int]]:
        options = await self.parental_leave.get_parental_leave_options(
            current_user.user_id, current_user.user_type
        )
        return {"available": options.available, "used": options.used}

    async def get_eligibility(self, current_user: CurrentUser) -> dict[str, Any]:
        """Eligibility options for the caller plus whether they can register now."""
        options = await self.eligibility.get_eligibility_options_for_user(
            current_user.user_id, current_user.user_type
        )
        readiness = await self.validation.check_user_eligibility(
            current_user.user_id, current_user.user_type
        )
        return {**options, **readiness}

    async def get_by_category_id(
        self,
        category_id: str,
        current_user: CurrentUser,
    ) -> dict[str, Any]:
        record = await self.crud.get_by_category_id(category_id, current_user.privilege)
        return record_to_response(record)

    async def delete(self, guid: str, current_user: CurrentUser) -> None:
        await self.crud.delete(guid, current_user.privilege)


def build_membership_category_service(client: DataverseClient) -> MembershipCategoryService:
    """Wire the membership category services over one Dataverse client."""
    accounts = AccountRepository(client)
    affiliates = AffiliateRepository(client)
    educations = EducationRepository(client)
    repository = MembershipCategoryRepository(client)

    usergroups = UserGroupResolver(accounts, affiliates, educations)
    validation = ValidationService(accounts, affiliates, repository)
    parental_leave = ParentalLeaveService(repository, usergroups)
    business_rules = BusinessRuleService(validation, repository, parental_leave)

    return MembershipCategoryService(
        usergroups=usergroups,
        eligibility=EligibilityResolver(usergroups),
        parental_leave=parental_leave,
        validation=validation,
        crud=MembershipCategoryCrudService(repository, business_rules, usergroups),
        years=MembershipYearService(client),
    )
