"""
Pydantic schemas for API request/response validation.
"""

from osot_api.schemas.membership_category import (
    EligibilityOption,
    EligibilityResponse,
    MembershipCategoryRegister,
    MembershipCategoryRegistrationResponse,
    MembershipCategoryResponse,
    MembershipProcess,
    ParentalLeaveOptionsResponse,
    RequiredDateFieldsResponse,
)

__all__ = [
    "EligibilityOption",
    "EligibilityResponse",
    "MembershipCategoryRegister",
    "MembershipCategoryRegistrationResponse",
    "MembershipCategoryResponse",
    "MembershipProcess",
    "ParentalLeaveOptionsResponse",
    "RequiredDateFieldsResponse",
]
