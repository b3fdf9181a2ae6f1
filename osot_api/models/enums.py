"""
Choice sets stored on the Dataverse tables, with display-name lookups.

Values are the integer option-set codes used by the platform.
"""

from enum import IntEnum


class Category(IntEnum):
    """Final membership category."""
    OT_PR = 1
    OT_NP = 2
    OT_RET = 3
    OT_NG = 4
    OT_STU = 5
    OT_LIFE = 6
    OTA_PR = 7
    OTA_NP = 8
    OTA_RET = 9
    OTA_NG = 10
    OTA_STU = 11
    OTA_LIFE = 12
    ASSOC = 13
    AFF_PRIM = 14
    AFF_PREM = 15


class UserGroup(IntEnum):
    """Internal classification derived from account group and education."""
    OT_STUDENT = 1
    OTA_STUDENT = 2
    OT_STUDENT_NEW_GRAD = 3
    OTA_STUDENT_NEW_GRAD = 4
    OT = 5
    OTA = 6
    VENDOR_ADVERTISER_RECRUITER = 7
    OTHER = 8
    AFFILIATE = 9


class MembershipEligibility(IntEnum):
    """Self-reported eligibility answer for account users."""
    NONE = 0
    QUESTION_1 = 1
    QUESTION_2 = 2
    QUESTION_3 = 3
    QUESTION_4 = 4
    QUESTION_5 = 5
    QUESTION_6 = 6
    QUESTION_7 = 7


class AffiliateEligibility(IntEnum):
    """Eligibility answer for affiliate (organization) users."""
    PRIMARY = 1
    PREMIUM = 2


class ParentalLeaveExpected(IntEnum):
    """Expected parental leave duration, each usable once per lifetime."""
    FULL_YEAR = 1
    SIX_MONTHS = 2


class AccountGroup(IntEnum):
    OCCUPATIONAL_THERAPIST = 1
    OCCUPATIONAL_THERAPIST_ASSISTANT = 2
    VENDOR_ADVERTISER = 3
    OTHER = 4


class EducationCategory(IntEnum):
    GRADUATED = 0
    STUDENT = 1
    NEW_GRADUATED = 2


class AccountStatus(IntEnum):
    ACTIVE = 1
    INACTIVE = 2
    PENDING = 3


class Privilege(IntEnum):
    OWNER = 1
    ADMIN = 2
    MAIN = 3


class AccessModifier(IntEnum):
    PUBLIC = 1
    PROTECTED = 2
    PRIVATE = 3


CATEGORY_DISPLAY_NAMES: dict[Category, str] = {
    Category.OT_PR: "OT Practising",
    Category.OT_NP: "OT Non-Practising",
    Category.OT_RET: "OT Retired",
    Category.OT_NG: "OT New Graduate",
    Category.OT_STU: "OT Student",
    Category.OT_LIFE: "OT Life Member",
    Category.OTA_PR: "OTA Practising",
    Category.OTA_NP: "OTA Non-Practising",
    Category.OTA_RET: "OTA Retired",
    Category.OTA_NG: "OTA New Graduate",
    Category.OTA_STU: "OTA Student",
    Category.OTA_LIFE: "OTA Life Member",
    Category.ASSOC: "Associate",
    Category.AFF_PRIM: "Affiliate Primary",
    Category.AFF_PREM: "Affiliate Premium",
}

USER_GROUP_DISPLAY_NAMES: dict[UserGroup, str] = {
    UserGroup.OT_STUDENT: "OT Student",
    UserGroup.OTA_STUDENT: "OTA Student",
    UserGroup.OT_STUDENT_NEW_GRAD: "OT Student / New Graduate",
    UserGroup.OTA_STUDENT_NEW_GRAD: "OTA Student / New Graduate",
    UserGroup.OT: "Occupational Therapist",
    UserGroup.OTA: "Occupational Therapist Assistant",
    UserGroup.VENDOR_ADVERTISER_RECRUITER: "Vendor / Advertiser / Recruiter",
    UserGroup.OTHER: "Other",
    UserGroup.AFFILIATE: "Affiliate",
}

ELIGIBILITY_DISPLAY_NAMES: dict[MembershipEligibility, str] = {
    MembershipEligibility.NONE: "None of the above",
    MembershipEligibility.QUESTION_1: "Living and working as an occupational therapist",
    MembershipEligibility.QUESTION_2: "Registering with the College",
    MembershipEligibility.QUESTION_3: "Living and working as an occupational therapist assistant",
    MembershipEligibility.QUESTION_4: "Previously worked as an occupational therapist assistant",
    MembershipEligibility.QUESTION_5: "Retired or resigned",
    MembershipEligibility.QUESTION_6: "On parental leave",
    MembershipEligibility.QUESTION_7: "Life membership",
}

AFFILIATE_ELIGIBILITY_DISPLAY_NAMES: dict[AffiliateEligibility, str] = {
    AffiliateEligibility.PRIMARY: "Primary",
    AffiliateEligibility.PREMIUM: "Premium",
}

PARENTAL_LEAVE_EXPECTED_DISPLAY_NAMES: dict[ParentalLeaveExpected, str] = {
    ParentalLeaveExpected.FULL_YEAR: "Full Year (12 months)",
    ParentalLeaveExpected.SIX_MONTHS: "Six Months",
}

ACCOUNT_STATUS_DISPLAY_NAMES: dict[AccountStatus, str] = {
    AccountStatus.ACTIVE: "Active",
    AccountStatus.INACTIVE: "Inactive",
    AccountStatus.PENDING: "Pending",
}

PRIVILEGE_DISPLAY_NAMES: dict[Privilege, str] = {
    Privilege.OWNER: "Owner",
    Privilege.ADMIN: "Admin",
    Privilege.MAIN: "Main",
}

ACCESS_MODIFIER_DISPLAY_NAMES: dict[AccessModifier, str] = {
    AccessModifier.PUBLIC: "Public",
    AccessModifier.PROTECTED: "Protected",
    AccessModifier.PRIVATE: "Private",
}


def _lookup(names: dict, enum_cls: type[IntEnum], value: int | None) -> str:
    try:
        return names[enum_cls(value)]
    except (ValueError, TypeError, KeyError):
        return "Unknown"


def get_category_display_name(value: int | None) -> str:
    return _lookup(CATEGORY_DISPLAY_NAMES, Category, value)


def get_user_group_display_name(value: int | None) -> str:
    return _lookup(USER_GROUP_DISPLAY_NAMES, UserGroup, value)


def get_eligibility_display_name(value: int | None) -> str:
    return _lookup(ELIGIBILITY_DISPLAY_NAMES, MembershipEligibility, value)


def get_affiliate_eligibility_display_name(value: int | None) -> str:
    return _lookup(AFFILIATE_ELIGIBILITY_DISPLAY_NAMES, AffiliateEligibility, value)


def get_parental_leave_expected_display_name(value: int | None) -> str:
    return _lookup(PARENTAL_LEAVE_EXPECTED_DISPLAY_NAMES, ParentalLeaveExpected, value)


def get_account_status_display_name(value: int | None) -> str:
    return _lookup(ACCOUNT_STATUS_DISPLAY_NAMES, AccountStatus, value)


def get_privilege_display_name(value: int | None) -> str:
    return _lookup(PRIVILEGE_DISPLAY_NAMES, Privilege, value)


def get_access_modifier_display_name(value: int | None) -> str:
    return _lookup(ACCESS_MODIFIER_DISPLAY_NAMES, AccessModifier, value)
