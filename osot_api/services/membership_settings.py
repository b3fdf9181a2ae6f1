"""
Active membership year lookup.

The membership year is never chosen by the caller: it comes from the
osot_table_membership_settings row whose year status is active.
"""

import logging
from dataclasses import dataclass
from datetime import date

from osot_api.errors import NotFoundError
from osot_api.services.dataverse import DataverseClient, build_query

logger = logging.getLogger(__name__)

SETTINGS_TABLE = "osot_table_membership_settings"
ACTIVE_YEAR_STATUS = 1


@dataclass
class MembershipYear:
    year: str
    year_starts: date | None = None
    year_ends: date | None = None


def _parse_date(value: str | None) -> date | None:
    if not value:
        return None
    return date.fromisoformat(value[:10])


class MembershipYearService:
    """Resolves the currently active membership year for an organization."""

    def __init__(self, client: DataverseClient):
        self.client = client

    async def get_active_year(self, organization_id: str | None = None) -> MembershipYear:
        """
        Get the active membership year.

        Args:
            organization_id: Organization GUID to scope the lookup, if any

        Raises:
            NotFoundError: If no active membership year is configured
        """
        filter_expr = f"osot_membership_year_status eq {ACTIVE_YEAR_STATUS}"
        if organization_id:
            filter_expr += f" and _osot_table_organization_value eq {organization_id}"

        rows = await self.client.fetch_all(
            build_query(
                SETTINGS_TABLE,
                filter=filter_expr,
                select=["osot_membership_year", "osot_year_starts", "osot_year_ends"],
                orderby="createdon desc",
                top=1,
            )
        )
        if not rows or not rows[0].get("osot_membership_year"):
            logger.warning(f"No active membership year found (organization={organization_id})")
            raise NotFoundError(
                "No active membership year found. Please contact support.",
                details={"organization_id": organization_id},
            )

        row = rows[0]
        return MembershipYear(
            year=str(row["osot_membership_year"]),
            year_starts=_parse_date(row.get("osot_year_starts")),
            year_ends=_parse_date(row.get("osot_year_ends")),
        )

    async def get_current_year(self, organization_id: str | None = None) -> str:
        active = await self.get_active_year(organization_id)
        return active.year
