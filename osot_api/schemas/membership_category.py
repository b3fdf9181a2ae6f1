"""
Pydantic schemas for membership category requests and responses.
"""

from datetime import date
from typing import List, Literal, Optional

from pydantic import BaseModel, Field


class MembershipCategoryRegister(BaseModel):
    """
    Schema for self-registration.

    Year, category, user group and the user reference are determined by the
    system and are not accepted from the caller.
    """
    osot_eligibility: Optional[int] = Field(
        None, description="Eligibility answer (OT/OTA users only)"
    )
    osot_eligibility_affiliate: Optional[int] = Field(
        None, description="Affiliate eligibility: 1=Primary, 2=Premium"
    )
    osot_parental_leave_from: Optional[date] = Field(None, description="Parental leave start")
    osot_parental_leave_to: Optional[date] = Field(None, description="Parental leave end")
    osot_parental_leave_expected: Optional[int] = Field(
        None, ge=1, le=2, description="1=Full Year (12 months), 2=Six Months"
    )
    osot_retirement_start: Optional[date] = Field(None, description="Retirement start date")


class MembershipCategoryResponse(BaseModel):
    """Schema for a membership category record."""
    osot_table_membership_categoryid: str
    osot_category_id: Optional[str] = None
    osot_membership_year: str
    user_type: Optional[Literal["account", "affiliate"]] = None
    osot_membership_category: Optional[str] = None
    osot_users_group: Optional[str] = None
    osot_eligibility: Optional[str] = None
    osot_eligibility_affiliate: Optional[str] = None
    osot_parental_leave_from: Optional[str] = None
    osot_parental_leave_to: Optional[str] = None
    osot_parental_leave_expected: Optional[str] = None
    osot_retirement_start: Optional[str] = None
    osot_privilege: Optional[str] = None
    osot_access_modifiers: Optional[str] = None
    is_on_parental_leave: bool = False
    is_retired: bool = False
    createdon: Optional[str] = None
    modifiedon: Optional[str] = None

    class Config:
        from_attributes = True


class RequiredDateFieldsResponse(BaseModel):
    requires_parental_leave: bool
    requires_retirement: bool
    parental_leave_fields: List[str] = []
    retirement_fields: List[str] = []

    class Config:
        from_attributes = True


class MembershipProcess(BaseModel):
    """How the category of a new registration was determined."""
    user_group: int = Field(..., description="Resolved user group value")
    membership_category: int = Field(..., description="Determined category value")
    requires_eligibility: bool
    required_date_fields: RequiredDateFieldsResponse


class MembershipCategoryRegistrationResponse(MembershipCategoryResponse):
    """Schema for a successful registration."""
    membership_process: MembershipProcess


class ParentalLeaveOptionsResponse(BaseModel):
    available: List[int] = Field(..., description="Options the user may still select")
    used: List[int] = Field(..., description="Options already used in any year")


class EligibilityOption(BaseModel):
    value: int
    label: str
    description: str


class EligibilityResponse(BaseModel):
    """Eligibility options plus registration readiness."""
    requires_eligibility: bool
    options: List[EligibilityOption]
    eligible: bool
    reasons: List[str] = []
    account_status: Optional[str] = None
    active_member: bool = False
