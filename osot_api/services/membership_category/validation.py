"""
Validation lookups that need Dataverse: user status facts, per-year
uniqueness and the registration readiness check.
"""

import logging

from osot_api.models import AccountStatus, UserEligibilityInfo, UserType
from osot_api.models.enums import get_account_status_display_name
from osot_api.services.accounts import AccountRepository, AffiliateRepository
from osot_api.services.membership_category.repository import MembershipCategoryRepository

logger = logging.getLogger(__name__)


class ValidationService:
    def __init__(
        self,
        accounts: AccountRepository,
        affiliates: AffiliateRepository,
        repository: MembershipCategoryRepository,
    ):
        self.accounts = accounts
        self.affiliates = affiliates
        self.repository = repository

    async def get_user_info(self, user_type: UserType, user_guid: str) -> UserEligibilityInfo | None:
        """Load status facts for a user by GUID, or None if the user does not exist."""
        if user_type == "affiliate":
            affiliate = await self.affiliates.find_by_guid(user_guid)
            if affiliate is None:
                return None
            return UserEligibilityInfo(
                user_type="affiliate",
                user_id=affiliate.id,
                account_status=affiliate.account_status,
                active_member=affiliate.active_member,
            )

        account = await self.accounts.find_by_guid(user_guid)
        if account is None:
            return None
        return UserEligibilityInfo(
            user_type="account",
            user_id=account.id,
            account_status=account.account_status,
            active_member=account.active_member,
        )

    async def membership_exists(
        self,
        user_type: UserType,
        user_guid: str,
        membership_year: str,
    ) -> bool:
        return await self.repository.exists_for_user_year(user_type, user_guid, membership_year)

    async def check_user_eligibility(self, business_id: str, user_type: UserType) -> dict:
        """
        Quick registration readiness check.

        Returns:
            Dict with eligible flag, the reasons blocking registration and the
            user's status facts
        """
        repository = self.affiliates if user_type == "affiliate" else self.accounts
        user = await repository.find_by_business_id(business_id)
        if user is None:
            return {
                "eligible": False,
                "reasons": ["User not found"],
                "account_status": None,
                "active_member": False,
            }

        reasons = []
        if user.account_status != AccountStatus.ACTIVE:
            reasons.append(
                "Account status is "
                f"{get_account_status_display_name(user.account_status)}, must be Active"
            )
        if user.active_member:
            reasons.append("User is already an active member")

        return {
            "eligible": not reasons,
            "reasons": reasons,
            "account_status": (
                get_account_status_display_name(user.account_status)
                if user.account_status is not None else None
            ),
            "active_member": user.active_member,
        }
