"""
Application services for the OSOT membership API.
"""

from osot_api.services.dataverse import DataverseClient, get_dataverse_client
from osot_api.services.accounts import (
    AccountRepository,
    AffiliateRepository,
    EducationRepository,
)
from osot_api.services.membership_settings import MembershipYear, MembershipYearService

__all__ = [
    # Dataverse
    "DataverseClient",
    "get_dataverse_client",
    # User tables
    "AccountRepository",
    "AffiliateRepository",
    "EducationRepository",
    # Membership settings
    "MembershipYear",
    "MembershipYearService",
]
