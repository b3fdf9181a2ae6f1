"""
Internal record types for membership categories and the user snapshots the
rules engine reads from Dataverse.
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Literal

from osot_api.models.enums import (
    AccessModifier,
    AccountGroup,
    AccountStatus,
    AffiliateEligibility,
    Category,
    MembershipEligibility,
    ParentalLeaveExpected,
    Privilege,
    UserGroup,
)

UserType = Literal["account", "affiliate"]


@dataclass
class CurrentUser:
    """Identity carried by the caller's bearer token."""
    user_id: str
    user_type: UserType
    privilege: Privilege = Privilege.OWNER
    organization_id: str | None = None
    email: str | None = None


@dataclass
class AccountSnapshot:
    """Fields of an account record used by the rules engine."""
    id: str
    business_id: str
    account_group: AccountGroup | None
    account_status: AccountStatus | None
    active_member: bool = False
    email: str | None = None
    first_name: str | None = None
    last_name: str | None = None

    @property
    def full_name(self) -> str:
        return " ".join(part for part in (self.first_name, self.last_name) if part)


@dataclass
class AffiliateSnapshot:
    """Fields of an affiliate (organization) record used by the rules engine."""
    id: str
    business_id: str
    account_status: AccountStatus | None
    active_member: bool = False
    email: str | None = None
    name: str | None = None


@dataclass
class EducationSnapshot:
    """Education record; education_category is the raw platform value."""
    id: str
    account_id: str
    education_category: int | None


@dataclass
class UserCreationData:
    """
    Everything the registration workflow needs to know about the caller.

    Attributes:
        user_type: account or affiliate
        user_guid: Dataverse GUID of the account/affiliate row
        business_id: Human-facing ID (osot-0000187)
        user_group: Resolved user group
        education_table: Education table consulted, if any
        education_category: Category of the education record consulted
    """
    user_type: UserType
    user_guid: str
    business_id: str
    user_group: UserGroup
    education_table: str | None = None
    education_category: int | None = None


@dataclass
class UserEligibilityInfo:
    """Account status facts checked by the creation gate."""
    user_type: UserType
    user_id: str
    account_status: AccountStatus | None
    active_member: bool


@dataclass
class ValidationResult:
    """Single-rule outcome."""
    is_valid: bool
    message: str | None = None

    @classmethod
    def ok(cls) -> "ValidationResult":
        return cls(is_valid=True)

    @classmethod
    def fail(cls, message: str) -> "ValidationResult":
        return cls(is_valid=False, message=message)


@dataclass
class ValidationReport:
    """Aggregated outcome of several rules."""
    is_valid: bool = True
    errors: list[str] = field(default_factory=list)

    def add(self, result: ValidationResult, fallback: str) -> None:
        if not result.is_valid:
            self.is_valid = False
            self.errors.append(result.message or fallback)


@dataclass
class RequiredDateFields:
    requires_parental_leave: bool = False
    requires_retirement: bool = False
    parental_leave_fields: list[str] = field(default_factory=list)
    retirement_fields: list[str] = field(default_factory=list)


@dataclass
class ParentalLeaveOptions:
    available: list[int] = field(default_factory=list)
    used: list[int] = field(default_factory=list)


@dataclass
class CategoryDetermination:
    """Result of running the three determination steps for one user."""
    user_group: UserGroup
    membership_category: Category
    requires_eligibility: bool
    required_date_fields: RequiredDateFields
    user_guid: str


@dataclass
class MembershipCategoryRecord:
    """Internal representation of an osot_table_membership_categories row."""
    id: str
    membership_year: str
    category_id: str | None = None
    account_id: str | None = None
    affiliate_id: str | None = None
    membership_category: Category | None = None
    users_group: UserGroup | None = None
    eligibility: MembershipEligibility | None = None
    eligibility_affiliate: AffiliateEligibility | None = None
    parental_leave_from: date | None = None
    parental_leave_to: date | None = None
    parental_leave_expected: ParentalLeaveExpected | None = None
    retirement_start: date | None = None
    privilege: Privilege | None = None
    access_modifier: AccessModifier | None = None
    created_on: datetime | None = None
    modified_on: datetime | None = None
    owner_id: str | None = None

    @property
    def user_type(self) -> UserType | None:
        if self.account_id:
            return "account"
        if self.affiliate_id:
            return "affiliate"
        return None

    def is_on_parental_leave(self, today: date | None = None) -> bool:
        today = today or date.today()
        if not (self.parental_leave_from and self.parental_leave_to):
            return False
        return self.parental_leave_from <= today <= self.parental_leave_to

    def is_retired(self, today: date | None = None) -> bool:
        today = today or date.today()
        return self.retirement_start is not None and self.retirement_start <= today
