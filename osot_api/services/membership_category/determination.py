"""
Category determination.

(user group, eligibility) -> membership category, as static lookup tables.
"""

from osot_api.errors import ValidationError
from osot_api.models import (
    AffiliateEligibility,
    Category,
    MembershipEligibility,
    UserGroup,
)
from osot_api.services.membership_category.constants import Messages

# Groups whose category does not depend on eligibility
FIXED_CATEGORIES: dict[UserGroup, Category] = {
    UserGroup.OT_STUDENT: Category.OT_STU,
    UserGroup.OTA_STUDENT: Category.OTA_STU,
    UserGroup.OT_STUDENT_NEW_GRAD: Category.OT_NG,
    UserGroup.OTA_STUDENT_NEW_GRAD: Category.OTA_NG,
    UserGroup.VENDOR_ADVERTISER_RECRUITER: Category.ASSOC,
    UserGroup.OTHER: Category.ASSOC,
}

OT_CATEGORIES: dict[MembershipEligibility, Category] = {
    MembershipEligibility.NONE: Category.ASSOC,
    MembershipEligibility.QUESTION_1: Category.OT_PR,
    MembershipEligibility.QUESTION_2: Category.OT_NP,
    MembershipEligibility.QUESTION_5: Category.OT_RET,
    MembershipEligibility.QUESTION_6: Category.OT_NP,
    MembershipEligibility.QUESTION_7: Category.OT_LIFE,
}

OTA_CATEGORIES: dict[MembershipEligibility, Category] = {
    MembershipEligibility.NONE: Category.ASSOC,
    MembershipEligibility.QUESTION_3: Category.OTA_PR,
    MembershipEligibility.QUESTION_4: Category.OTA_NP,
    MembershipEligibility.QUESTION_5: Category.OTA_RET,
    MembershipEligibility.QUESTION_6: Category.OTA_NP,
    MembershipEligibility.QUESTION_7: Category.OTA_LIFE,
}

AFFILIATE_CATEGORIES: dict[AffiliateEligibility, Category] = {
    AffiliateEligibility.PRIMARY: Category.AFF_PRIM,
    AffiliateEligibility.PREMIUM: Category.AFF_PREM,
}

ELIGIBILITY_TABLES: dict[UserGroup, tuple[str, dict[MembershipEligibility, Category]]] = {
    UserGroup.OT: ("OT", OT_CATEGORIES),
    UserGroup.OTA: ("OTA", OTA_CATEGORIES),
}


def determine_category(
    user_group: UserGroup,
    eligibility: int | None = None,
    eligibility_affiliate: int | None = None,
) -> Category:
    """
    Map a user group and eligibility answer to the final category.

    Raises:
        ValidationError: If a required eligibility is missing or the pair has
            no category
    """
    if user_group in FIXED_CATEGORIES:
        return FIXED_CATEGORIES[user_group]

    if user_group in ELIGIBILITY_TABLES:
        group_name, table = ELIGIBILITY_TABLES[user_group]
        if eligibility is None:
            raise ValidationError(
                Messages.ELIGIBILITY_REQUIRED.format(group=group_name),
                details={"user_group": int(user_group)},
            )
        try:
            return table[MembershipEligibility(eligibility)]
        except (ValueError, KeyError):
            raise ValidationError(
                Messages.INVALID_ELIGIBILITY_FOR_GROUP.format(
                    eligibility=eligibility, group=group_name
                ),
                details={"user_group": int(user_group), "eligibility": eligibility},
            )

    if user_group == UserGroup.AFFILIATE:
        if eligibility_affiliate is None:
            raise ValidationError(Messages.AFFILIATE_ELIGIBILITY_REQUIRED)
        try:
            return AFFILIATE_CATEGORIES[AffiliateEligibility(eligibility_affiliate)]
        except (ValueError, KeyError):
            raise ValidationError(
                Messages.INVALID_AFFILIATE_ELIGIBILITY.format(eligibility=eligibility_affiliate),
                details={"eligibility_affiliate": eligibility_affiliate},
            )

    raise ValidationError(
        f"Unsupported user group: {user_group}",
        details={"user_group": user_group},
    )
