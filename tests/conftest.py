"""
Pytest configuration and fixtures for the OSOT membership API tests.

Dataverse is replaced by in-memory repositories with the same interface as
the real ones, so the full service stack runs without network access.
"""

from datetime import date
from uuid import uuid4

import pytest

from osot_api.errors import NotFoundError
from osot_api.models import (
    AccountGroup,
    AccountSnapshot,
    AccountStatus,
    AffiliateSnapshot,
    CurrentUser,
    EducationSnapshot,
    MembershipCategoryRecord,
    Privilege,
)
from osot_api.services.accounts import OT_EDUCATIONS_TABLE, OTA_EDUCATIONS_TABLE
from osot_api.services.dataverse import parse_odata_bind
from osot_api.services.membership_category.business_rules import BusinessRuleService
from osot_api.services.membership_category.constants import Fields
from osot_api.services.membership_category.crud import MembershipCategoryCrudService
from osot_api.services.membership_category.eligibility import EligibilityResolver
from osot_api.services.membership_category.mapper import record_from_row
from osot_api.services.membership_category.parental_leave import ParentalLeaveService
from osot_api.services.membership_category.service import MembershipCategoryService
from osot_api.services.membership_category.usergroup import UserGroupResolver
from osot_api.services.membership_category.validation import ValidationService
from osot_api.services.membership_settings import MembershipYear


# Configure pytest-asyncio for async tests
pytest_plugins = ('pytest_asyncio',)


class FakeAccountRepository:
    def __init__(self):
        self.accounts: list[AccountSnapshot] = []

    async def find_by_business_id(self, business_id):
        return next((a for a in self.accounts if a.business_id == business_id), None)

    async def find_by_guid(self, guid):
        return next((a for a in self.accounts if a.id == guid), None)


class FakeAffiliateRepository:
    def __init__(self):
        self.affiliates: list[AffiliateSnapshot] = []

    async def find_by_business_id(self, business_id):
        return next((a for a in self.affiliates if a.business_id == business_id), None)

    async def find_by_guid(self, guid):
        return next((a for a in self.affiliates if a.id == guid), None)


class FakeEducationRepository:
    def __init__(self):
        self.latest: dict[tuple[str, str], EducationSnapshot] = {}

    async def find_latest(self, table, account_guid):
        return self.latest.get((table, account_guid))


class FakeMembershipCategoryRepository:
    """Stores rows the way Dataverse would after a create."""

    def __init__(self):
        self.records: list[MembershipCategoryRecord] = []
        self.created_payloads: list[dict] = []

    def add(self, **kwargs) -> MembershipCategoryRecord:
        record = MembershipCategoryRecord(id=kwargs.pop("id", str(uuid4())), **kwargs)
        self.records.append(record)
        return record

    async def create(self, payload):
        self.created_payloads.append(payload)
        row = {
            key: value for key, value in payload.items()
            if not key.endswith("@odata.bind")
        }
        row[Fields.ID] = str(uuid4())
        row[Fields.CATEGORY_ID] = f"osot-cat-{len(self.records) + 1:07d}"
        if Fields.ACCOUNT_BIND in payload:
            row[Fields.ACCOUNT_LOOKUP] = parse_odata_bind(payload[Fields.ACCOUNT_BIND])[1]
        if Fields.AFFILIATE_BIND in payload:
            row[Fields.AFFILIATE_LOOKUP] = parse_odata_bind(payload[Fields.AFFILIATE_BIND])[1]
        record = record_from_row(row)
        self.records.append(record)
        return record

    async def find_by_id(self, guid):
        return next((r for r in self.records if r.id == guid), None)

    async def find_by_category_id(self, category_id):
        return next((r for r in self.records if r.category_id == category_id), None)

    async def find_by_user_guid(self, user_type, user_guid):
        attr = "account_id" if user_type == "account" else "affiliate_id"
        matches = [r for r in self.records if getattr(r, attr) == user_guid]
        return sorted(matches, key=lambda r: r.membership_year, reverse=True)

    async def exists_for_user_year(self, user_type, user_guid, membership_year):
        history = await self.find_by_user_guid(user_type, user_guid)
        return any(r.membership_year == membership_year for r in history)

    async def delete(self, guid):
        record = await self.find_by_id(guid)
        if record is None:
            return False
        self.records.remove(record)
        return True


class FakeMembershipYearService:
    def __init__(self, year: str | None = "2025"):
        self.year = year

    async def get_active_year(self, organization_id=None):
        if self.year is None:
            raise NotFoundError("No active membership year found. Please contact support.")
        return MembershipYear(year=self.year, year_starts=date(2025, 1, 1), year_ends=date(2025, 12, 31))

    async def get_current_year(self, organization_id=None):
        return (await self.get_active_year(organization_id)).year


class FakeDataverse:
    """Bundle of in-memory repositories plus seeding helpers."""

    def __init__(self):
        self.accounts = FakeAccountRepository()
        self.affiliates = FakeAffiliateRepository()
        self.educations = FakeEducationRepository()
        self.categories = FakeMembershipCategoryRepository()
        self.years = FakeMembershipYearService()

    def add_account(
        self,
        business_id: str = "osot-0000187",
        account_group: AccountGroup | None = AccountGroup.OCCUPATIONAL_THERAPIST,
        education_category: int | None = 0,
        with_education: bool = True,
        account_status: AccountStatus | None = AccountStatus.ACTIVE,
        active_member: bool = False,
    ) -> AccountSnapshot:
        account = AccountSnapshot(
            id=str(uuid4()),
            business_id=business_id,
            account_group=account_group,
            account_status=account_status,
            active_member=active_member,
            email=f"{business_id}@example.com",
            first_name="Test",
            last_name="Member",
        )
        self.accounts.accounts.append(account)
        table = {
            AccountGroup.OCCUPATIONAL_THERAPIST: OT_EDUCATIONS_TABLE,
            AccountGroup.OCCUPATIONAL_THERAPIST_ASSISTANT: OTA_EDUCATIONS_TABLE,
        }.get(account_group)
        if table and with_education:
            self.educations.latest[(table, account.id)] = EducationSnapshot(
                id=str(uuid4()),
                account_id=account.id,
                education_category=education_category,
            )
        return account

    def add_affiliate(
        self,
        business_id: str = "osot-af-0000042",
        account_status: AccountStatus | None = AccountStatus.ACTIVE,
        active_member: bool = False,
    ) -> AffiliateSnapshot:
        affiliate = AffiliateSnapshot(
            id=str(uuid4()),
            business_id=business_id,
            account_status=account_status,
            active_member=active_member,
            email="org@example.com",
            name="Test Clinic",
        )
        self.affiliates.affiliates.append(affiliate)
        return affiliate

    def build_service(self) -> MembershipCategoryService:
        usergroups = UserGroupResolver(self.accounts, self.affiliates, self.educations)
        validation = ValidationService(self.accounts, self.affiliates, self.categories)
        parental_leave = ParentalLeaveService(self.categories, usergroups)
        business_rules = BusinessRuleService(validation, self.categories, parental_leave)
        return MembershipCategoryService(
            usergroups=usergroups,
            eligibility=EligibilityResolver(usergroups),
            parental_leave=parental_leave,
            validation=validation,
            crud=MembershipCategoryCrudService(self.categories, business_rules, usergroups),
            years=self.years,
        )


@pytest.fixture
def dataverse() -> FakeDataverse:
    """Empty in-memory Dataverse."""
    return FakeDataverse()


@pytest.fixture
def service(dataverse) -> MembershipCategoryService:
    return dataverse.build_service()


@pytest.fixture
def ot_user(dataverse) -> CurrentUser:
    """Active, graduated OT account."""
    account = dataverse.add_account()
    return CurrentUser(user_id=account.business_id, user_type="account")


@pytest.fixture
def affiliate_user(dataverse) -> CurrentUser:
    affiliate = dataverse.add_affiliate()
    return CurrentUser(user_id=affiliate.business_id, user_type="affiliate")


@pytest.fixture
def admin_user() -> CurrentUser:
    return CurrentUser(user_id="osot-0000001", user_type="account", privilege=Privilege.ADMIN)
