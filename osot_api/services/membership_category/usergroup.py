"""
User-group resolution.

Maps the caller's account group and most recent education record onto one of
the nine user groups. Affiliates always resolve to AFFILIATE.
"""

import logging

from osot_api.errors import AccountNotFoundError, InvalidEducationCategoryError
from osot_api.models import (
    AccountGroup,
    EducationCategory,
    UserCreationData,
    UserGroup,
    UserType,
)
from osot_api.services.accounts import (
    OT_EDUCATIONS_TABLE,
    OTA_EDUCATIONS_TABLE,
    AccountRepository,
    AffiliateRepository,
    EducationRepository,
)

logger = logging.getLogger(__name__)

EDUCATION_TABLE_BY_GROUP: dict[AccountGroup, str] = {
    AccountGroup.OCCUPATIONAL_THERAPIST: OT_EDUCATIONS_TABLE,
    AccountGroup.OCCUPATIONAL_THERAPIST_ASSISTANT: OTA_EDUCATIONS_TABLE,
}

OT_GROUP_BY_EDUCATION: dict[EducationCategory, UserGroup] = {
    EducationCategory.GRADUATED: UserGroup.OT,
    EducationCategory.STUDENT: UserGroup.OT_STUDENT,
    EducationCategory.NEW_GRADUATED: UserGroup.OT_STUDENT_NEW_GRAD,
}

OTA_GROUP_BY_EDUCATION: dict[EducationCategory, UserGroup] = {
    EducationCategory.GRADUATED: UserGroup.OTA,
    EducationCategory.STUDENT: UserGroup.OTA_STUDENT,
    EducationCategory.NEW_GRADUATED: UserGroup.OTA_STUDENT_NEW_GRAD,
}


def user_group_from_education(
    account_group: AccountGroup,
    education_category: int | None,
) -> UserGroup:
    """
    Resolve the user group of an OT or OTA account from its education category.

    A missing category falls back to OTHER; an unknown one is rejected.

    Raises:
        InvalidEducationCategoryError: If the category is not 0, 1 or 2
    """
    if education_category is None:
        logger.warning(
            f"No education category for {account_group.name} account, falling back to OTHER"
        )
        return UserGroup.OTHER

    try:
        category = EducationCategory(education_category)
    except ValueError:
        raise InvalidEducationCategoryError(
            f"Invalid education category: {education_category}",
            details={"education_category": education_category},
        )

    if account_group == AccountGroup.OCCUPATIONAL_THERAPIST:
        return OT_GROUP_BY_EDUCATION[category]
    return OTA_GROUP_BY_EDUCATION[category]


class UserGroupResolver:
    """Determines user groups by reading account and education records."""

    def __init__(
        self,
        accounts: AccountRepository,
        affiliates: AffiliateRepository,
        educations: EducationRepository,
    ):
        self.accounts = accounts
        self.affiliates = affiliates
        self.educations = educations

    async def resolve_user_guid(self, business_id: str, user_type: UserType) -> str:
        """
        Look up the Dataverse GUID behind a business ID.

        Raises:
            AccountNotFoundError: If no such account or affiliate exists
        """
        repository = self.affiliates if user_type == "affiliate" else self.accounts
        user = await repository.find_by_business_id(business_id)
        if user is None:
            raise AccountNotFoundError(
                "Affiliate not found" if user_type == "affiliate" else "Account not found",
                details={"business_id": business_id, "user_type": user_type},
            )
        return user.id

    async def determine_user_group(self, business_id: str, user_type: UserType) -> UserGroup:
        """
        Resolve the user group for a caller.

        Raises:
            AccountNotFoundError: If the account does not exist
            InvalidEducationCategoryError: If the education record is corrupt
        """
        data = await self.collect_user_creation_data(business_id, user_type)
        return data.user_group

    async def collect_user_creation_data(
        self,
        business_id: str,
        user_type: UserType,
    ) -> UserCreationData:
        """
        Gather the GUID, user group and education facts needed for registration.

        Raises:
            AccountNotFoundError: If the account or affiliate does not exist
            InvalidEducationCategoryError: If the education record is corrupt
        """
        if user_type == "affiliate":
            affiliate = await self.affiliates.find_by_business_id(business_id)
            if affiliate is None:
                raise AccountNotFoundError(
                    "Affiliate not found",
                    details={"business_id": business_id, "user_type": user_type},
                )
            return UserCreationData(
                user_type="affiliate",
                user_guid=affiliate.id,
                business_id=business_id,
                user_group=UserGroup.AFFILIATE,
            )

        account = await self.accounts.find_by_business_id(business_id)
        if account is None:
            raise AccountNotFoundError(
                "Account not found",
                details={"business_id": business_id, "user_type": user_type},
            )

        data = UserCreationData(
            user_type="account",
            user_guid=account.id,
            business_id=business_id,
            user_group=UserGroup.OTHER,
        )

        if account.account_group == AccountGroup.OTHER:
            return data
        if account.account_group == AccountGroup.VENDOR_ADVERTISER:
            data.user_group = UserGroup.VENDOR_ADVERTISER_RECRUITER
            return data

        table = EDUCATION_TABLE_BY_GROUP.get(account.account_group)
        if table is None:
            logger.warning(
                f"Unknown account group {account.account_group} for account "
                f"{account.id[:8]}, falling back to OTHER"
            )
            return data

        education = await self.educations.find_latest(table, account.id)
        data.education_table = table
        if education is None:
            logger.warning(
                f"No education record in {table} for account {account.id[:8]}, "
                f"falling back to OTHER"
            )
            return data

        data.education_category = education.education_category
        data.user_group = user_group_from_education(
            account.account_group, education.education_category
        )
        return data
