"""
Dataverse repository for osot_table_membership_categories.
"""

import logging

from osot_api.errors import DataverseNotFoundError, DataverseServiceError
from osot_api.models import MembershipCategoryRecord, UserType
from osot_api.services.dataverse import DataverseClient, build_query, odata_literal
from osot_api.services.membership_category.constants import (
    SELECT_FIELDS,
    TABLE_NAME,
    Fields,
)
from osot_api.services.membership_category.mapper import record_from_row

logger = logging.getLogger(__name__)


def _lookup_field(user_type: UserType) -> str:
    return Fields.ACCOUNT_LOOKUP if user_type == "account" else Fields.AFFILIATE_LOOKUP


class MembershipCategoryRepository:
    """CRUD and lookup queries for membership category rows."""

    def __init__(self, client: DataverseClient):
        self.client = client

    async def create(self, payload: dict) -> MembershipCategoryRecord:
        """
        Insert a row and return it as stored.

        Raises:
            DataverseServiceError: If the platform rejects the insert or
                returns no representation
        """
        row = await self.client.request("POST", TABLE_NAME, payload)
        if not row or Fields.ID not in row:
            raise DataverseServiceError("Dataverse did not return the created membership category")
        record = record_from_row(row)
        logger.info(
            f"Created membership category {record.id} (year={record.membership_year}, "
            f"category={record.membership_category})"
        )
        return record

    async def find_by_id(self, guid: str) -> MembershipCategoryRecord | None:
        row = await self.client.fetch_one(
            build_query(f"{TABLE_NAME}({guid})", select=SELECT_FIELDS)
        )
        return record_from_row(row) if row else None

    async def find_by_category_id(self, category_id: str) -> MembershipCategoryRecord | None:
        rows = await self.client.fetch_all(
            build_query(
                TABLE_NAME,
                filter=f"{Fields.CATEGORY_ID} eq {odata_literal(category_id)}",
                select=SELECT_FIELDS,
                top=1,
            )
        )
        return record_from_row(rows[0]) if rows else None

    async def find_by_user_guid(
        self,
        user_type: UserType,
        user_guid: str,
    ) -> list[MembershipCategoryRecord]:
        """All records of one user, newest membership year first."""
        rows = await self.client.fetch_all(
            build_query(
                TABLE_NAME,
                filter=f"{_lookup_field(user_type)} eq {user_guid}",
                select=SELECT_FIELDS,
                orderby=f"{Fields.MEMBERSHIP_YEAR} desc",
            )
        )
        return [record_from_row(row) for row in rows]

    async def exists_for_user_year(
        self,
        user_type: UserType,
        user_guid: str,
        membership_year: str,
    ) -> bool:
        """Check whether the user already holds a record for the given year."""
        filter_expr = (
            f"{_lookup_field(user_type)} eq {user_guid} and "
            f"{Fields.MEMBERSHIP_YEAR} eq {odata_literal(membership_year)}"
        )
        rows = await self.client.fetch_all(
            build_query(TABLE_NAME, filter=filter_expr, select=[Fields.ID], top=1)
        )
        return bool(rows)

    async def delete(self, guid: str) -> bool:
        """Delete a row. Returns False when it does not exist."""
        try:
            await self.client.request("DELETE", f"{TABLE_NAME}({guid})")
        except DataverseNotFoundError:
            return False
        logger.info(f"Deleted membership category {guid}")
        return True
