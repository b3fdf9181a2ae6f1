"""
Membership category routes.

All routes act on behalf of the authenticated caller; the membership year,
user group and category are always determined server-side.
"""

import logging
from typing import List

from fastapi import APIRouter, Depends, Response

from osot_api.dependencies import get_current_user, get_membership_category_service
from osot_api.errors import new_operation_id, operation_scope
from osot_api.models import CurrentUser
from osot_api.schemas.membership_category import (
    EligibilityResponse,
    MembershipCategoryRegister,
    MembershipCategoryRegistrationResponse,
    MembershipCategoryResponse,
    ParentalLeaveOptionsResponse,
)
from osot_api.services.membership_category import MembershipCategoryService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/private/membership-categories", tags=["membership-categories"])


@router.post("/me", response_model=MembershipCategoryRegistrationResponse, status_code=201)
async def register_my_membership_category(
    registration: MembershipCategoryRegister,
    current_user: CurrentUser = Depends(get_current_user),
    service: MembershipCategoryService = Depends(get_membership_category_service),
):
    """
    Register the caller for the active membership year.

    The response includes how the category was determined.
    """
    operation_id = new_operation_id("register_membership_category")
    with operation_scope(operation_id):
        return await service.register(current_user, registration, operation_id)


@router.get("/me", response_model=List[MembershipCategoryResponse])
async def list_my_membership_categories(
    current_user: CurrentUser = Depends(get_current_user),
    service: MembershipCategoryService = Depends(get_membership_category_service),
):
    """Caller's membership categories, newest year first."""
    with operation_scope(new_operation_id("list_membership_categories")):
        return await service.list_my_categories(current_user)


@router.get("/me/parental-leave-options", response_model=ParentalLeaveOptionsResponse)
async def get_my_parental_leave_options(
    current_user: CurrentUser = Depends(get_current_user),
    service: MembershipCategoryService = Depends(get_membership_category_service),
):
    with operation_scope(new_operation_id("get_parental_leave_options")):
        return await service.get_parental_leave_options(current_user)


@router.get("/me/eligibility", response_model=EligibilityResponse)
async def get_my_eligibility(
    current_user: CurrentUser = Depends(get_current_user),
    service: MembershipCategoryService = Depends(get_membership_category_service),
):
    """Eligibility options for the caller and whether they can register now."""
    with operation_scope(new_operation_id("get_eligibility_options")):
        return await service.get_eligibility(current_user)


@router.get("/{category_id}", response_model=MembershipCategoryResponse)
async def get_membership_category(
    category_id: str,
    current_user: CurrentUser = Depends(get_current_user),
    service: MembershipCategoryService = Depends(get_membership_category_service),
):
    """Get a membership category by its business ID (osot-cat-NNNNNNN)."""
    with operation_scope(new_operation_id("get_membership_category")):
        return await service.get_by_category_id(category_id, current_user)


@router.delete("/{id}", status_code=204)
async def delete_membership_category(
    id: str,
    current_user: CurrentUser = Depends(get_current_user),
    service: MembershipCategoryService = Depends(get_membership_category_service),
):
    """Delete a membership category. ADMIN and MAIN only."""
    with operation_scope(new_operation_id("delete_membership_category")):
        await service.delete(id, current_user)
    return Response(status_code=204)
