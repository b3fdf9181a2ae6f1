"""
Tests for user-group resolution.
"""

import logging

import pytest

from osot_api.errors import AccountNotFoundError, InvalidEducationCategoryError
from osot_api.models import AccountGroup, UserGroup
from osot_api.services.accounts import OT_EDUCATIONS_TABLE, OTA_EDUCATIONS_TABLE
from osot_api.services.membership_category.usergroup import (
    UserGroupResolver,
    user_group_from_education,
)


@pytest.fixture
def resolver(dataverse):
    return UserGroupResolver(dataverse.accounts, dataverse.affiliates, dataverse.educations)


class TestUserGroupFromEducation:
    @pytest.mark.parametrize("account_group,education,expected", [
        (AccountGroup.OCCUPATIONAL_THERAPIST, 0, UserGroup.OT),
        (AccountGroup.OCCUPATIONAL_THERAPIST, 1, UserGroup.OT_STUDENT),
        (AccountGroup.OCCUPATIONAL_THERAPIST, 2, UserGroup.OT_STUDENT_NEW_GRAD),
        (AccountGroup.OCCUPATIONAL_THERAPIST_ASSISTANT, 0, UserGroup.OTA),
        (AccountGroup.OCCUPATIONAL_THERAPIST_ASSISTANT, 1, UserGroup.OTA_STUDENT),
        (AccountGroup.OCCUPATIONAL_THERAPIST_ASSISTANT, 2, UserGroup.OTA_STUDENT_NEW_GRAD),
    ])
    def test_education_mapping(self, account_group, education, expected):
        assert user_group_from_education(account_group, education) == expected

    def test_missing_category_falls_back_to_other(self, caplog):
        """Test a record without a category resolves to OTHER with a warning."""
        with caplog.at_level(logging.WARNING):
            result = user_group_from_education(AccountGroup.OCCUPATIONAL_THERAPIST, None)
        assert result == UserGroup.OTHER
        assert "falling back to OTHER" in caplog.text

    @pytest.mark.parametrize("education", [3, 99, -1])
    def test_unknown_category_rejected(self, education):
        with pytest.raises(InvalidEducationCategoryError) as exc_info:
            user_group_from_education(AccountGroup.OCCUPATIONAL_THERAPIST, education)
        assert exc_info.value.code.value == "INVALID_EDUCATION_CATEGORY"


class TestUserGroupResolver:
    @pytest.mark.asyncio
    async def test_affiliate_always_affiliate(self, dataverse, resolver):
        dataverse.add_affiliate(business_id="osot-af-0000010")
        assert await resolver.determine_user_group("osot-af-0000010", "affiliate") == UserGroup.AFFILIATE

    @pytest.mark.asyncio
    async def test_graduated_ot(self, dataverse, resolver):
        dataverse.add_account(business_id="osot-0000010", education_category=0)
        assert await resolver.determine_user_group("osot-0000010", "account") == UserGroup.OT

    @pytest.mark.asyncio
    async def test_ota_student(self, dataverse, resolver):
        dataverse.add_account(
            business_id="osot-0000011",
            account_group=AccountGroup.OCCUPATIONAL_THERAPIST_ASSISTANT,
            education_category=1,
        )
        assert await resolver.determine_user_group("osot-0000011", "account") == UserGroup.OTA_STUDENT

    @pytest.mark.asyncio
    async def test_vendor(self, dataverse, resolver):
        dataverse.add_account(business_id="osot-0000012", account_group=AccountGroup.VENDOR_ADVERTISER)
        result = await resolver.determine_user_group("osot-0000012", "account")
        assert result == UserGroup.VENDOR_ADVERTISER_RECRUITER

    @pytest.mark.asyncio
    async def test_other_account_group(self, dataverse, resolver):
        dataverse.add_account(business_id="osot-0000013", account_group=AccountGroup.OTHER)
        assert await resolver.determine_user_group("osot-0000013", "account") == UserGroup.OTHER

    @pytest.mark.asyncio
    async def test_missing_account_group_falls_back(self, dataverse, resolver):
        dataverse.add_account(business_id="osot-0000014", account_group=None)
        assert await resolver.determine_user_group("osot-0000014", "account") == UserGroup.OTHER

    @pytest.mark.asyncio
    async def test_no_education_record_falls_back(self, dataverse, resolver, caplog):
        """Test an OT without any education record resolves to OTHER."""
        dataverse.add_account(business_id="osot-0000015", with_education=False)
        with caplog.at_level(logging.WARNING):
            result = await resolver.determine_user_group("osot-0000015", "account")
        assert result == UserGroup.OTHER
        assert "No education record" in caplog.text

    @pytest.mark.asyncio
    async def test_invalid_education_category(self, dataverse, resolver):
        dataverse.add_account(business_id="osot-0000016", education_category=7)
        with pytest.raises(InvalidEducationCategoryError):
            await resolver.determine_user_group("osot-0000016", "account")

    @pytest.mark.asyncio
    async def test_account_not_found(self, resolver):
        with pytest.raises(AccountNotFoundError) as exc_info:
            await resolver.determine_user_group("osot-0000404", "account")
        assert exc_info.value.status_code == 404

    @pytest.mark.asyncio
    async def test_collect_creation_data(self, dataverse, resolver):
        """Test creation data records the GUID and the education consulted."""
        account = dataverse.add_account(
            business_id="osot-0000017",
            account_group=AccountGroup.OCCUPATIONAL_THERAPIST_ASSISTANT,
            education_category=2,
        )

        data = await resolver.collect_user_creation_data("osot-0000017", "account")

        assert data.user_guid == account.id
        assert data.user_type == "account"
        assert data.user_group == UserGroup.OTA_STUDENT_NEW_GRAD
        assert data.education_table == OTA_EDUCATIONS_TABLE
        assert data.education_category == 2

    @pytest.mark.asyncio
    async def test_collect_creation_data_ot_table(self, dataverse, resolver):
        dataverse.add_account(business_id="osot-0000018")
        data = await resolver.collect_user_creation_data("osot-0000018", "account")
        assert data.education_table == OT_EDUCATIONS_TABLE

    @pytest.mark.asyncio
    async def test_resolve_user_guid(self, dataverse, resolver):
        affiliate = dataverse.add_affiliate(business_id="osot-af-0000019")
        assert await resolver.resolve_user_guid("osot-af-0000019", "affiliate") == affiliate.id
