"""
Tests for the error taxonomy, operation scopes and privilege checks.
"""

import pytest

from osot_api.errors import (
    AccountNotFoundError,
    AppError,
    BusinessRuleViolationError,
    ConflictError,
    DataverseNotFoundError,
    DataverseServiceError,
    ErrorCode,
    InvalidEducationCategoryError,
    PermissionDeniedError,
    ValidationError,
    new_operation_id,
    operation_scope,
)
from osot_api.models import AccessModifier, MembershipCategoryRecord, Privilege
from osot_api.permissions import (
    can_create,
    can_delete,
    can_read_record,
    require_create,
    require_delete,
)


class TestAppErrors:
    @pytest.mark.parametrize("error_cls,status_code", [
        (ValidationError, 400),
        (InvalidEducationCategoryError, 400),
        (ConflictError, 409),
        (AccountNotFoundError, 404),
        (PermissionDeniedError, 403),
        (DataverseServiceError, 502),
    ])
    def test_status_codes(self, error_cls, status_code):
        assert error_cls("boom").status_code == status_code

    def test_business_rule_violation_carries_errors(self):
        error = BusinessRuleViolationError("failed", errors=["a", "b"])
        assert error.status_code == 422
        assert error.to_dict() == {
            "code": "BUSINESS_RULE_VIOLATION",
            "message": "failed",
            "operation_id": None,
            "details": {"errors": ["a", "b"]},
        }

    def test_subclasses_share_base(self):
        assert issubclass(InvalidEducationCategoryError, ValidationError)
        assert issubclass(DataverseNotFoundError, DataverseServiceError)
        assert DataverseNotFoundError("x").code == ErrorCode.DATAVERSE_SERVICE_ERROR


class TestOperationScope:
    def test_new_operation_id(self):
        operation_id = new_operation_id("register")
        assert operation_id.startswith("register_")
        assert new_operation_id("register") != operation_id

    def test_scope_stamps_operation_id(self):
        with pytest.raises(ConflictError) as exc_info:
            with operation_scope("op_123"):
                raise ConflictError("exists")
        assert exc_info.value.operation_id == "op_123"

    def test_scope_keeps_existing_operation_id(self):
        with pytest.raises(AppError) as exc_info:
            with operation_scope("op_outer"):
                raise AppError("boom", operation_id="op_inner")
        assert exc_info.value.operation_id == "op_inner"

    def test_scope_ignores_other_exceptions(self):
        with pytest.raises(KeyError):
            with operation_scope("op"):
                raise KeyError("x")


class TestPermissions:
    @pytest.mark.parametrize("privilege", list(Privilege))
    def test_every_privilege_can_create(self, privilege):
        assert can_create(privilege) is True
        require_create(privilege)

    def test_missing_privilege_cannot_create(self):
        assert can_create(None) is False
        with pytest.raises(PermissionDeniedError):
            require_create(None)

    def test_delete_requires_admin_or_main(self):
        assert can_delete(Privilege.ADMIN) is True
        assert can_delete(Privilege.MAIN) is True
        assert can_delete(Privilege.OWNER) is False
        with pytest.raises(PermissionDeniedError):
            require_delete(Privilege.OWNER)

    def test_read_visibility(self):
        private = MembershipCategoryRecord(id="1", membership_year="2025", access_modifier=AccessModifier.PRIVATE)
        public = MembershipCategoryRecord(id="2", membership_year="2025", access_modifier=AccessModifier.PUBLIC)
        assert can_read_record(Privilege.OWNER, private) is False
        assert can_read_record(Privilege.OWNER, public) is True
        assert can_read_record(Privilege.ADMIN, private) is True
