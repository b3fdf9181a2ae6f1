"""
Domain types for the OSOT membership API.
"""

from osot_api.models.enums import (
    AccessModifier,
    AccountGroup,
    AccountStatus,
    AffiliateEligibility,
    Category,
    EducationCategory,
    MembershipEligibility,
    ParentalLeaveExpected,
    Privilege,
    UserGroup,
)
from osot_api.models.membership_category import (
    AccountSnapshot,
    AffiliateSnapshot,
    CategoryDetermination,
    CurrentUser,
    EducationSnapshot,
    MembershipCategoryRecord,
    ParentalLeaveOptions,
    RequiredDateFields,
    UserCreationData,
    UserEligibilityInfo,
    UserType,
    ValidationReport,
    ValidationResult,
)

__all__ = [
    # Enums
    "AccessModifier",
    "AccountGroup",
    "AccountStatus",
    "AffiliateEligibility",
    "Category",
    "EducationCategory",
    "MembershipEligibility",
    "ParentalLeaveExpected",
    "Privilege",
    "UserGroup",
    # Records
    "AccountSnapshot",
    "AffiliateSnapshot",
    "CategoryDetermination",
    "CurrentUser",
    "EducationSnapshot",
    "MembershipCategoryRecord",
    "ParentalLeaveOptions",
    "RequiredDateFields",
    "UserCreationData",
    "UserEligibilityInfo",
    "UserType",
    "ValidationReport",
    "ValidationResult",
]
