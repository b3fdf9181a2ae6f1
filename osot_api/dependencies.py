"""
FastAPI dependencies: bearer-token authentication and service wiring.

Tokens are signed, timestamped payloads (itsdangerous) carrying the caller's
business ID, user type, privilege and organization.
"""

import logging

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from itsdangerous import BadSignature, SignatureExpired, URLSafeTimedSerializer

from osot_api.config import get_settings
from osot_api.errors import UnauthorizedError
from osot_api.models import CurrentUser, Privilege
from osot_api.services.dataverse import DataverseClient, get_dataverse_client
from osot_api.services.membership_category import (
    MembershipCategoryService,
    build_membership_category_service,
)

logger = logging.getLogger(__name__)

TOKEN_SALT = "osot-membership-auth"

bearer_scheme = HTTPBearer(auto_error=False)


def get_token_serializer() -> URLSafeTimedSerializer:
    return URLSafeTimedSerializer(get_settings().secret_key, salt=TOKEN_SALT)


def issue_token(user: CurrentUser) -> str:
    """Mint a bearer token for a user."""
    return get_token_serializer().dumps({
        "user_id": user.user_id,
        "user_type": user.user_type,
        "privilege": int(user.privilege),
        "organization_id": user.organization_id,
        "email": user.email,
    })


def read_token(token: str) -> CurrentUser:
    """
    Verify a bearer token and return its identity.

    Raises:
        UnauthorizedError: If the token is expired, tampered with or malformed
    """
    settings = get_settings()
    try:
        claims = get_token_serializer().loads(token, max_age=settings.token_max_age)
    except SignatureExpired:
        raise UnauthorizedError("Token has expired")
    except BadSignature:
        raise UnauthorizedError("Invalid token")

    if not isinstance(claims, dict):
        raise UnauthorizedError("Invalid token")

    user_id = claims.get("user_id")
    user_type = claims.get("user_type")
    if not user_id or user_type not in ("account", "affiliate"):
        raise UnauthorizedError("Token is missing user identity")

    try:
        privilege = Privilege(claims.get("privilege", Privilege.OWNER))
    except ValueError:
        raise UnauthorizedError("Token carries an unknown privilege")

    return CurrentUser(
        user_id=user_id,
        user_type=user_type,
        privilege=privilege,
        organization_id=claims.get("organization_id"),
        email=claims.get("email"),
    )


async def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> CurrentUser:
    if credentials is None or not credentials.credentials:
        raise UnauthorizedError("Authentication required")
    return read_token(credentials.credentials)


def get_membership_category_service(
    client: DataverseClient = Depends(get_dataverse_client),
) -> MembershipCategoryService:
    return build_membership_category_service(client)
