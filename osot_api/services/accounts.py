"""
Read-only repositories for the user tables the membership rules consult:
accounts, affiliates and the OT/OTA education tables.
"""

import logging
from typing import Any

from osot_api.models import (
    AccountGroup,
    AccountSnapshot,
    AccountStatus,
    AffiliateSnapshot,
    EducationSnapshot,
)
from osot_api.services.dataverse import DataverseClient, build_query, odata_literal

logger = logging.getLogger(__name__)

ACCOUNTS_TABLE = "osot_table_accounts"
AFFILIATES_TABLE = "osot_table_account_affiliates"
OT_EDUCATIONS_TABLE = "osot_table_ot_educations"
OTA_EDUCATIONS_TABLE = "osot_table_ota_educations"

ACCOUNT_FIELDS = [
    "osot_table_accountid",
    "osot_account_id",
    "osot_account_group",
    "osot_account_status",
    "osot_active_member",
    "osot_email",
    "osot_first_name",
    "osot_last_name",
]

AFFILIATE_FIELDS = [
    "osot_table_account_affiliateid",
    "osot_affiliate_id",
    "osot_account_status",
    "osot_active_member",
    "osot_affiliate_email",
    "osot_affiliate_name",
]


def _coerce_enum(enum_cls, value: Any):
    """Convert a raw option-set value, returning None for unknown values."""
    if value is None:
        return None
    try:
        return enum_cls(int(value))
    except (TypeError, ValueError):
        logger.warning(f"Unknown {enum_cls.__name__} value from Dataverse: {value!r}")
        return None


def account_from_row(row: dict) -> AccountSnapshot:
    return AccountSnapshot(
        id=row["osot_table_accountid"],
        business_id=row.get("osot_account_id") or "",
        account_group=_coerce_enum(AccountGroup, row.get("osot_account_group")),
        account_status=_coerce_enum(AccountStatus, row.get("osot_account_status")),
        active_member=bool(row.get("osot_active_member")),
        email=row.get("osot_email"),
        first_name=row.get("osot_first_name"),
        last_name=row.get("osot_last_name"),
    )


def affiliate_from_row(row: dict) -> AffiliateSnapshot:
    return AffiliateSnapshot(
        id=row["osot_table_account_affiliateid"],
        business_id=row.get("osot_affiliate_id") or "",
        account_status=_coerce_enum(AccountStatus, row.get("osot_account_status")),
        active_member=bool(row.get("osot_active_member")),
        email=row.get("osot_affiliate_email"),
        name=row.get("osot_affiliate_name"),
    )


class AccountRepository:
    """Lookups against osot_table_accounts."""

    def __init__(self, client: DataverseClient):
        self.client = client

    async def find_by_business_id(self, business_id: str) -> AccountSnapshot | None:
        rows = await self.client.fetch_all(
            build_query(
                ACCOUNTS_TABLE,
                filter=f"osot_account_id eq {odata_literal(business_id)}",
                select=ACCOUNT_FIELDS,
                top=1,
            )
        )
        return account_from_row(rows[0]) if rows else None

    async def find_by_guid(self, guid: str) -> AccountSnapshot | None:
        row = await self.client.fetch_one(
            build_query(f"{ACCOUNTS_TABLE}({guid})", select=ACCOUNT_FIELDS)
        )
        return account_from_row(row) if row else None


class AffiliateRepository:
    """Lookups against osot_table_account_affiliates."""

    def __init__(self, client: DataverseClient):
        self.client = client

    async def find_by_business_id(self, business_id: str) -> AffiliateSnapshot | None:
        rows = await self.client.fetch_all(
            build_query(
                AFFILIATES_TABLE,
                filter=f"osot_affiliate_id eq {odata_literal(business_id)}",
                select=AFFILIATE_FIELDS,
                top=1,
            )
        )
        return affiliate_from_row(rows[0]) if rows else None

    async def find_by_guid(self, guid: str) -> AffiliateSnapshot | None:
        row = await self.client.fetch_one(
            build_query(f"{AFFILIATES_TABLE}({guid})", select=AFFILIATE_FIELDS)
        )
        return affiliate_from_row(row) if row else None


class EducationRepository:
    """
    Lookups against the OT and OTA education tables.

    Only the most recent record per account matters for user-group resolution.
    """

    def __init__(self, client: DataverseClient):
        self.client = client

    async def find_latest(self, table: str, account_guid: str) -> EducationSnapshot | None:
        """
        Get the newest education record for an account.

        Args:
            table: osot_table_ot_educations or osot_table_ota_educations
            account_guid: Account GUID the education row points at
        """
        id_field = f"{table[:-1]}id"
        rows = await self.client.fetch_all(
            build_query(
                table,
                filter=f"_osot_table_account_value eq {account_guid}",
                select=[id_field, "_osot_table_account_value", "osot_education_category"],
                orderby="createdon desc",
                top=1,
            )
        )
        if not rows:
            return None
        row = rows[0]
        raw_category = row.get("osot_education_category")
        return EducationSnapshot(
            id=row.get(id_field, ""),
            account_id=row.get("_osot_table_account_value") or account_guid,
            education_category=int(raw_category) if raw_category is not None else None,
        )
