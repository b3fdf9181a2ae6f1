"""
Membership category module.

Determines a member's category for the active membership year:

- UserGroupResolver: account group + education -> user group
- EligibilityResolver: eligibility options per user group
- determine_category: (user group, eligibility) -> category
- ParentalLeaveService: date rules and one-time parental leave options
- BusinessRuleService: creation gate
- MembershipCategoryService: registration workflow and facade
"""

from osot_api.services.membership_category.business_rules import BusinessRuleService
from osot_api.services.membership_category.crud import MembershipCategoryCrudService
from osot_api.services.membership_category.determination import determine_category
from osot_api.services.membership_category.eligibility import (
    EligibilityResolver,
    get_available_eligibility_options,
    is_eligibility_required,
    validate_eligibility_choice,
)
from osot_api.services.membership_category.parental_leave import (
    ParentalLeaveService,
    get_required_date_fields,
    validate_date_fields,
    validate_required_date_fields,
)
from osot_api.services.membership_category.repository import MembershipCategoryRepository
from osot_api.services.membership_category.service import (
    MembershipCategoryService,
    build_membership_category_service,
)
from osot_api.services.membership_category.usergroup import UserGroupResolver
from osot_api.services.membership_category.validation import ValidationService

__all__ = [
    # Rules
    "determine_category",
    "get_available_eligibility_options",
    "get_required_date_fields",
    "is_eligibility_required",
    "validate_eligibility_choice",
    "validate_date_fields",
    "validate_required_date_fields",
    # Services
    "BusinessRuleService",
    "EligibilityResolver",
    "MembershipCategoryCrudService",
    "MembershipCategoryRepository",
    "MembershipCategoryService",
    "ParentalLeaveService",
    "UserGroupResolver",
    "ValidationService",
    "build_membership_category_service",
]
