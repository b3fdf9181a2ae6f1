"""
Eligibility options per user group.

Only OT and OTA users answer the eligibility question. QUESTION_7 (life
membership) is assigned administratively and never offered.
"""

from osot_api.models import MembershipEligibility, UserGroup, UserType, ValidationResult
from osot_api.models.enums import get_eligibility_display_name
from osot_api.services.membership_category.constants import (
    DEFAULT_ELIGIBILITY_DESCRIPTION,
    ELIGIBILITY_DESCRIPTIONS,
    Messages,
)
from osot_api.services.membership_category.usergroup import UserGroupResolver

ELIGIBILITY_OPTIONS: dict[UserGroup, tuple[MembershipEligibility, ...]] = {
    UserGroup.OT: (
        MembershipEligibility.NONE,
        MembershipEligibility.QUESTION_1,
        MembershipEligibility.QUESTION_2,
        MembershipEligibility.QUESTION_5,
        MembershipEligibility.QUESTION_6,
    ),
    UserGroup.OTA: (
        MembershipEligibility.NONE,
        MembershipEligibility.QUESTION_3,
        MembershipEligibility.QUESTION_4,
        MembershipEligibility.QUESTION_5,
        MembershipEligibility.QUESTION_6,
    ),
}


def get_available_eligibility_options(user_group: UserGroup) -> list[MembershipEligibility]:
    return list(ELIGIBILITY_OPTIONS.get(user_group, ()))


def is_eligibility_required(user_group: UserGroup) -> bool:
    return user_group in ELIGIBILITY_OPTIONS


def validate_eligibility_choice(
    user_group: UserGroup,
    choice: int | None,
) -> ValidationResult:
    """
    Check a self-reported eligibility answer against the user group.

    Groups that do not answer the question accept anything; the category
    determination step decides what to do with it.
    """
    if not is_eligibility_required(user_group):
        return ValidationResult.ok()

    allowed = ELIGIBILITY_OPTIONS[user_group]
    group_name = "OT" if user_group == UserGroup.OT else "OTA"
    if choice is None:
        return ValidationResult.fail(Messages.ELIGIBILITY_REQUIRED.format(group=group_name))
    if choice not in {int(option) for option in allowed}:
        return ValidationResult.fail(
            Messages.INVALID_ELIGIBILITY_CHOICE.format(
                choice=choice,
                group=group_name,
                options=", ".join(str(int(option)) for option in allowed),
            )
        )
    return ValidationResult.ok()


def get_eligibility_description(eligibility: MembershipEligibility) -> str:
    return ELIGIBILITY_DESCRIPTIONS.get(eligibility, DEFAULT_ELIGIBILITY_DESCRIPTION)


def describe_options(user_group: UserGroup) -> dict:
    """Options for a user group in display form."""
    if not is_eligibility_required(user_group):
        return {"requires_eligibility": False, "options": []}
    return {
        "requires_eligibility": True,
        "options": [
            {
                "value": int(option),
                "label": get_eligibility_display_name(option),
                "description": get_eligibility_description(option),
            }
            for option in ELIGIBILITY_OPTIONS[user_group]
        ],
    }


class EligibilityResolver:
    """Eligibility lookups that need the caller's user group."""

    def __init__(self, usergroups: UserGroupResolver):
        self.usergroups = usergroups

    async def get_eligibility_options_for_user(
        self,
        business_id: str,
        user_type: UserType,
    ) -> dict:
        user_group = await self.usergroups.determine_user_group(business_id, user_type)
        return describe_options(user_group)
