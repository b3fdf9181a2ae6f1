"""
OData names, defaults and user-facing messages for membership categories.
"""

import re

from osot_api.models import AccessModifier, MembershipEligibility, Privilege

TABLE_NAME = "osot_table_membership_categories"


class Fields:
    """Column names on osot_table_membership_categories."""
    ID = "osot_table_membership_categoryid"
    CATEGORY_ID = "osot_category_id"
    ACCOUNT_LOOKUP = "_osot_table_account_value"
    AFFILIATE_LOOKUP = "_osot_table_account_affiliate_value"
    ACCOUNT_BIND = "osot_Table_Account@odata.bind"
    AFFILIATE_BIND = "osot_Table_Account_Affiliate@odata.bind"
    MEMBERSHIP_YEAR = "osot_membership_year"
    ELIGIBILITY = "osot_eligibility"
    ELIGIBILITY_AFFILIATE = "osot_eligibility_affiliate"
    MEMBERSHIP_CATEGORY = "osot_membership_category"
    USERS_GROUP = "osot_users_group"
    PARENTAL_LEAVE_FROM = "osot_parental_leave_from"
    PARENTAL_LEAVE_TO = "osot_parental_leave_to"
    PARENTAL_LEAVE_EXPECTED = "osot_parental_leave_expected"
    RETIREMENT_START = "osot_retirement_start"
    ACCESS_MODIFIERS = "osot_access_modifiers"
    PRIVILEGE = "osot_privilege"
    CREATED_ON = "createdon"
    MODIFIED_ON = "modifiedon"
    OWNER_ID = "_ownerid_value"


SELECT_FIELDS = [
    Fields.ID,
    Fields.CATEGORY_ID,
    Fields.ACCOUNT_LOOKUP,
    Fields.AFFILIATE_LOOKUP,
    Fields.MEMBERSHIP_YEAR,
    Fields.ELIGIBILITY,
    Fields.ELIGIBILITY_AFFILIATE,
    Fields.MEMBERSHIP_CATEGORY,
    Fields.USERS_GROUP,
    Fields.PARENTAL_LEAVE_FROM,
    Fields.PARENTAL_LEAVE_TO,
    Fields.PARENTAL_LEAVE_EXPECTED,
    Fields.RETIREMENT_START,
    Fields.ACCESS_MODIFIERS,
    Fields.PRIVILEGE,
    Fields.CREATED_ON,
    Fields.MODIFIED_ON,
    Fields.OWNER_ID,
]

DEFAULT_PRIVILEGE = Privilege.OWNER
DEFAULT_ACCESS_MODIFIER = AccessModifier.PRIVATE

CATEGORY_ID_PATTERN = re.compile(r"^osot-cat-\d{7,}$")

PARENTAL_LEAVE_DATE_FIELDS = (Fields.PARENTAL_LEAVE_FROM, Fields.PARENTAL_LEAVE_TO)
RETIREMENT_DATE_FIELDS = (Fields.RETIREMENT_START,)
MAX_PARENTAL_LEAVE_DAYS = 730

ELIGIBILITY_DESCRIPTIONS: dict[MembershipEligibility, str] = {
    MembershipEligibility.NONE: "Select if none of the other options apply to your situation",
    MembershipEligibility.QUESTION_1: "For OT professionals currently practicing in Ontario",
    MembershipEligibility.QUESTION_2: "For those in the process of registration with the College",
    MembershipEligibility.QUESTION_3: "For OTA professionals currently working in Ontario",
    MembershipEligibility.QUESTION_4: "For those who previously worked as an OT assistant",
    MembershipEligibility.QUESTION_5: "For retired or resigned professionals",
    MembershipEligibility.QUESTION_6: "For those currently on parental leave",
}
DEFAULT_ELIGIBILITY_DESCRIPTION = "Please contact support for more information"


class Messages:
    PARENTAL_LEAVE_DATES_REQUIRED = (
        "Parental leave dates (from and to) are required when selecting parental leave eligibility"
    )
    PARENTAL_LEAVE_INCOMPLETE = "Parental leave from and to dates must be provided together"
    PARENTAL_LEAVE_RANGE = "Parental leave end date must be after start date"
    PARENTAL_LEAVE_TOO_LONG = "Parental leave period cannot exceed {days} days"
    RETIREMENT_DATE_REQUIRED = (
        "Retirement start date is required when selecting retired/resigned eligibility"
    )
    RETIREMENT_IN_FUTURE = "Retirement date cannot be in the future"

    EXPECTED_NOT_FOR_AFFILIATES = (
        "Parental Leave Expected is not available for Affiliate users. "
        "This feature is only for Account users (OT/OTA practitioners)"
    )
    EXPECTED_ONLY_OT_OTA = "Parental Leave Expected is only available for OT or OTA practitioners"
    EXPECTED_REQUIRES_ELIGIBILITY = (
        'Parental Leave Expected requires eligibility "On Parental Leave" (value 6)'
    )
    EXPECTED_REQUIRES_DATES = (
        "Parental Leave Expected requires both parental leave from and to dates"
    )
    EXPECTED_ALREADY_USED = (
        "{option} parental leave has already been used. Each parental leave option "
        "can only be used once for insurance coverage purposes."
    )

    NOT_AUTHENTICATED = "User must be authenticated to create membership category"
    NO_USER_REFERENCE = "Membership category must be linked to either Account or Affiliate"
    BOTH_USER_REFERENCES = "Membership category cannot be linked to both Account and Affiliate"
    ACCOUNT_NOT_ACTIVE = (
        "User account status must be ACTIVE to register for membership. Current status: {status}"
    )
    ALREADY_ACTIVE_MEMBER = (
        "User is already an active member and cannot create new membership category"
    )
    ALREADY_EXISTS_FOR_USER = "Membership category already exists for {user_type} {user_id} in year {year}"
    ALREADY_REGISTERED = "Membership category already exists for this user in year {year}"

    INVALID_ELIGIBILITY_CHOICE = (
        "Invalid eligibility choice {choice} for {group} user. Available options: {options}"
    )
    ELIGIBILITY_REQUIRED = "Eligibility is required for {group} user group"
    INVALID_ELIGIBILITY_FOR_GROUP = "Invalid eligibility {eligibility} for {group} user group"
    AFFILIATE_ELIGIBILITY_REQUIRED = "Eligibility affiliate is required for affiliate user group"
    INVALID_AFFILIATE_ELIGIBILITY = "Invalid affiliate eligibility: {eligibility}"
    INVALID_CATEGORY_ID = "Invalid category ID format. Expected osot-cat-NNNNNNN"
