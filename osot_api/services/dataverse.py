"""
Dataverse Web API client.

Thin OData gateway over httpx: acquires an Azure AD access token with the
client credentials flow, caches it until shortly before expiry, and issues
JSON requests against the Dataverse Web API.
"""

import logging
import re
import time
from functools import lru_cache
from typing import Any
from urllib.parse import quote

import httpx

from osot_api.config import get_settings
from osot_api.errors import DataverseNotFoundError, DataverseServiceError

logger = logging.getLogger(__name__)

# Refresh the token this many seconds before it actually expires
TOKEN_EXPIRY_MARGIN = 60

_ODATA_BIND_PATTERN = re.compile(r"^/?([^/(]+)(?:\(([^)]+)\)|/([^/)]+))$")


def odata_literal(value: str) -> str:
    """Quote a string for use inside an OData filter expression."""
    return "'" + value.replace("'", "''") + "'"


def odata_bind(table: str, guid: str) -> str:
    """Build a lookup bind value, e.g. /osot_table_accounts(<guid>)."""
    return f"/{table}({guid})"


def parse_odata_bind(bind: str) -> tuple[str, str]:
    """
    Split an OData bind into (table, guid).

    Accepts both /table(guid) and /table/guid forms.

    Raises:
        ValueError: If the bind is not in a recognised format
    """
    match = _ODATA_BIND_PATTERN.match(bind.strip())
    if not match:
        raise ValueError(f"Invalid OData bind format: {bind}")
    table, paren_id, slash_id = match.groups()
    return table, paren_id or slash_id


def build_query(
    table: str,
    filter: str | None = None,
    select: list[str] | None = None,
    orderby: str | None = None,
    top: int | None = None,
    skip: int | None = None,
) -> str:
    """Compose a table endpoint with OData system query options."""
    options = []
    if filter:
        options.append(f"$filter={quote(filter, safe='')}")
    if select:
        options.append(f"$select={','.join(select)}")
    if orderby:
        options.append(f"$orderby={quote(orderby, safe=',')}")
    if top is not None:
        options.append(f"$top={top}")
    if skip is not None:
        options.append(f"$skip={skip}")
    if not options:
        return table
    return f"{table}?{'&'.join(options)}"


class DataverseClient:
    """
    Dataverse Web API client.

    API Documentation: https://learn.microsoft.com/power-apps/developer/data-platform/webapi/overview
    """

    def __init__(
        self,
        api_base: str,
        token_url: str,
        client_id: str,
        client_secret: str,
        scope: str,
        timeout: float = 30.0,
        http_client: httpx.AsyncClient | None = None,
    ):
        """
        Initialize the client.

        Args:
            api_base: Web API root, e.g. https://org.crm.dynamics.com/api/data/v9.2/
            token_url: Azure AD token endpoint
            client_id: App registration client ID
            client_secret: App registration secret
            scope: OAuth scope, usually {dataverse_url}/.default
            timeout: Request timeout in seconds
            http_client: Optional preconfigured AsyncClient (tests use MockTransport)
        """
        self.api_base = api_base if api_base.endswith("/") else api_base + "/"
        self.token_url = token_url
        self.client_id = client_id
        self.client_secret = client_secret
        self.scope = scope
        self.timeout = timeout
        self._http = http_client or httpx.AsyncClient(timeout=timeout)
        self._token: str | None = None
        self._token_expires_at: float = 0.0

    async def _get_access_token(self) -> str:
        """Return a cached token, requesting a new one when it is about to expire."""
        if self._token and self._token_expires_at > time.time() + TOKEN_EXPIRY_MARGIN:
            return self._token

        try:
            response = await self._http.post(
                self.token_url,
                data={
                    "client_id": self.client_id,
                    "client_secret": self.client_secret,
                    "grant_type": "client_credentials",
                    "scope": self.scope,
                },
                headers={"Content-Type": "application/x-www-form-urlencoded"},
            )
        except httpx.RequestError as e:
            raise DataverseServiceError(f"Dataverse token request failed: {str(e)}")

        if response.status_code != 200:
            logger.error(
                f"Failed to obtain Dataverse token: status={response.status_code}, "
                f"client_id={self.client_id}"
            )
            raise DataverseServiceError(
                "Failed to obtain Dataverse access token",
                status=response.status_code,
            )

        payload = response.json()
        token = payload.get("access_token")
        if not isinstance(token, str):
            raise DataverseServiceError("Access token not found in token response")

        self._token = token
        self._token_expires_at = time.time() + int(payload.get("expires_in", 3600))
        return token

    async def request(
        self,
        method: str,
        endpoint: str,
        data: dict[str, Any] | None = None,
    ) -> dict[str, Any] | None:
        """
        Issue a request against the Web API.

        Args:
            method: GET, POST, PATCH or DELETE
            endpoint: Path relative to the API root, including any query string
            data: JSON body for POST/PATCH

        Returns:
            Decoded JSON body, or None for empty responses (204)

        Raises:
            DataverseNotFoundError: On 404
            DataverseServiceError: On any other failure
        """
        token = await self._get_access_token()
        headers = {
            "Authorization": f"Bearer {token}",
            "Accept": "application/json",
            "OData-MaxVersion": "4.0",
            "OData-Version": "4.0",
        }
        if method == "POST":
            headers["Prefer"] = "return=representation"

        url = self.api_base + endpoint.lstrip("/")
        logger.debug(f"Dataverse request: {method} {endpoint}")

        try:
            response = await self._http.request(
                method,
                url,
                json=data,
                headers=headers,
                timeout=self.timeout,
            )
        except httpx.RequestError as e:
            raise DataverseServiceError(
                f"Dataverse request failed: {str(e)}",
                details={"method": method, "endpoint": endpoint},
            )

        if response.status_code == 404:
            raise DataverseNotFoundError(
                "Dataverse record not found",
                status=404,
                details={"endpoint": endpoint},
            )
        if response.status_code >= 400:
            error_message = self._extract_error_message(response)
            logger.error(
                f"Dataverse error: {method} {endpoint} -> {response.status_code}: {error_message}"
            )
            raise DataverseServiceError(
                f"Dataverse error: {error_message}",
                status=response.status_code,
                details={"method": method, "endpoint": endpoint},
            )

        if response.status_code == 204 or not response.content:
            return None
        return response.json()

    @staticmethod
    def _extract_error_message(response: httpx.Response) -> str:
        try:
            body = response.json()
        except ValueError:
            return f"HTTP {response.status_code}"
        error = body.get("error") if isinstance(body, dict) else None
        if isinstance(error, dict) and error.get("message"):
            return error["message"]
        return f"HTTP {response.status_code}"

    async def fetch_all(self, endpoint: str) -> list[dict[str, Any]]:
        """GET a collection endpoint and return its value array."""
        response = await self.request("GET", endpoint)
        if not response:
            return []
        return list(response.get("value", []))

    async def fetch_one(self, endpoint: str) -> dict[str, Any] | None:
        """GET a single record, returning None when it does not exist."""
        try:
            return await self.request("GET", endpoint)
        except DataverseNotFoundError:
            return None

    async def close(self) -> None:
        await self._http.aclose()


@lru_cache
def get_dataverse_client() -> DataverseClient:
    """
    Get the process-wide Dataverse client.

    Raises:
        DataverseServiceError: If Dataverse is not configured
    """
    settings = get_settings()
    if not settings.dataverse_configured:
        raise DataverseServiceError(
            "Dataverse not configured. Set DATAVERSE_URL, DATAVERSE_TENANT_ID, "
            "DATAVERSE_CLIENT_ID and DATAVERSE_CLIENT_SECRET in .env"
        )
    return DataverseClient(
        api_base=settings.dataverse_api_base,
        token_url=settings.dataverse_token_url,
        client_id=settings.dataverse_client_id,
        client_secret=settings.dataverse_client_secret,
        scope=f"{settings.dataverse_url.rstrip('/')}/.default",
        timeout=settings.dataverse_timeout,
    )
