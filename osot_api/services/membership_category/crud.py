"""
CRUD and lookup operations with privilege checks.
"""

import logging
from typing import Any

from osot_api.errors import NotFoundError, ValidationError
from osot_api.models import MembershipCategoryRecord, Privilege, UserType
from osot_api.permissions import can_read_record, require_create, require_delete
from osot_api.services.membership_category.business_rules import BusinessRuleService
from osot_api.services.membership_category.constants import CATEGORY_ID_PATTERN, Messages
from osot_api.services.membership_category.repository import MembershipCategoryRepository
from osot_api.services.membership_category.usergroup import UserGroupResolver

logger = logging.getLogger(__name__)


class MembershipCategoryCrudService:
    def __init__(
        self,
        repository: MembershipCategoryRepository,
        business_rules: BusinessRuleService,
        usergroups: UserGroupResolver,
    ):
        self.repository = repository
        self.business_rules = business_rules
        self.usergroups = usergroups

    async def create(
        self,
        payload: dict[str, Any],
        privilege: Privilege | None,
    ) -> MembershipCategoryRecord:
        """
        Create a membership category after the creation gate passes.

        Raises:
            PermissionDeniedError: If the privilege may not create
            BusinessRuleViolationError: If any business rule fails
        """
        require_create(privilege)
        await self.business_rules.enforce_create(payload)
        return await self.repository.create(payload)

    async def get_by_id(
        self,
        guid: str,
        privilege: Privilege | None,
    ) -> MembershipCategoryRecord:
        """
        Raises:
            NotFoundError: If the record does not exist or is not visible
        """
        record = await self.repository.find_by_id(guid)
        if record is None or not can_read_record(privilege, record):
            raise NotFoundError("Membership category not found", details={"id": guid})
        return record

    async def get_by_category_id(
        self,
        category_id: str,
        privilege: Privilege | None,
    ) -> MembershipCategoryRecord:
        """
        Raises:
            ValidationError: If the ID is not in osot-cat-NNNNNNN form
            NotFoundError: If the record does not exist or is not visible
        """
        if not CATEGORY_ID_PATTERN.match(category_id):
            raise ValidationError(
                Messages.INVALID_CATEGORY_ID,
                details={"category_id": category_id},
            )
        record = await self.repository.find_by_category_id(category_id)
        if record is None or not can_read_record(privilege, record):
            raise NotFoundError(
                "Membership category not found",
                details={"category_id": category_id},
            )
        return record

    async def list_for_user(
        self,
        business_id: str,
        user_type: UserType,
    ) -> list[MembershipCategoryRecord]:
        """The caller's own records, newest membership year first."""
        user_guid = await self.usergroups.resolve_user_guid(business_id, user_type)
        return await self.repository.find_by_user_guid(user_type, user_guid)

    async def delete(self, guid: str, privilege: Privilege | None) -> None:
        """
        Raises:
            PermissionDeniedError: Unless ADMIN or MAIN
            NotFoundError: If the record does not exist
        """
        require_delete(privilege)
        deleted = await self.repository.delete(guid)
        if not deleted:
            raise NotFoundError("Membership category not found", details={"id": guid})
        logger.info(f"Membership category {guid} deleted by privilege {privilege}")
