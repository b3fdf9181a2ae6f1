"""
Tests for the Dataverse Web API client.

Uses httpx.MockTransport so no network calls are made.
"""

import json
from urllib.parse import parse_qs

import httpx
import pytest

from osot_api.errors import DataverseNotFoundError, DataverseServiceError
from osot_api.services.dataverse import (
    DataverseClient,
    build_query,
    odata_bind,
    odata_literal,
    parse_odata_bind,
)

API_BASE = "https://org.crm3.dynamics.com/api/data/v9.2/"
TOKEN_URL = "https://login.microsoftonline.com/tenant/oauth2/v2.0/token"


def make_client(handler) -> DataverseClient:
    return DataverseClient(
        api_base=API_BASE,
        token_url=TOKEN_URL,
        client_id="client-id",
        client_secret="client-secret",
        scope="https://org.crm3.dynamics.com/.default",
        http_client=httpx.AsyncClient(transport=httpx.MockTransport(handler)),
    )


def token_response(expires_in: int = 3600) -> httpx.Response:
    return httpx.Response(200, json={"access_token": "token-abc", "expires_in": expires_in})


class TestODataHelpers:
    def test_odata_bind(self):
        assert odata_bind("osot_table_accounts", "abc-123") == "/osot_table_accounts(abc-123)"

    def test_parse_parenthesised_bind(self):
        assert parse_odata_bind("/osot_table_accounts(abc-123)") == ("osot_table_accounts", "abc-123")

    def test_parse_slash_bind(self):
        assert parse_odata_bind("osot_table_account_affiliates/def-456") == (
            "osot_table_account_affiliates",
            "def-456",
        )

    @pytest.mark.parametrize("bind", ["", "/osot_table_accounts", "/a(b)/c(d)"])
    def test_parse_invalid_bind(self, bind):
        with pytest.raises(ValueError):
            parse_odata_bind(bind)

    def test_odata_literal_escapes_quotes(self):
        assert odata_literal("o'brien") == "'o''brien'"

    def test_build_query_without_options(self):
        assert build_query("osot_table_accounts") == "osot_table_accounts"

    def test_build_query_with_options(self):
        query = build_query(
            "osot_table_accounts",
            filter="osot_account_id eq 'osot-0000187'",
            select=["osot_table_accountid", "osot_account_group"],
            orderby="createdon desc",
            top=1,
        )
        table, options = query.split("?", 1)
        params = parse_qs(options)
        assert table == "osot_table_accounts"
        assert params["$filter"] == ["osot_account_id eq 'osot-0000187'"]
        assert params["$select"] == ["osot_table_accountid,osot_account_group"]
        assert params["$orderby"] == ["createdon desc"]
        assert params["$top"] == ["1"]


class TestDataverseClient:
    @pytest.mark.asyncio
    async def test_token_cached_between_requests(self):
        """Test the client credentials token is requested once."""
        calls = {"token": 0, "api": 0}

        def handler(request: httpx.Request) -> httpx.Response:
            if str(request.url) == TOKEN_URL:
                calls["token"] += 1
                body = parse_qs(request.content.decode())
                assert body["grant_type"] == ["client_credentials"]
                assert body["scope"] == ["https://org.crm3.dynamics.com/.default"]
                return token_response()
            calls["api"] += 1
            assert request.headers["Authorization"] == "Bearer token-abc"
            assert request.headers["OData-Version"] == "4.0"
            assert request.headers["OData-MaxVersion"] == "4.0"
            return httpx.Response(200, json={"value": []})

        client = make_client(handler)
        await client.request("GET", "osot_table_accounts")
        await client.request("GET", "osot_table_accounts")

        assert calls == {"token": 1, "api": 2}

    @pytest.mark.asyncio
    async def test_token_refreshed_near_expiry(self):
        """Test a token inside the refresh margin is replaced."""
        calls = {"token": 0}

        def handler(request: httpx.Request) -> httpx.Response:
            if str(request.url) == TOKEN_URL:
                calls["token"] += 1
                return token_response(expires_in=30)
            return httpx.Response(200, json={"value": []})

        client = make_client(handler)
        await client.request("GET", "osot_table_accounts")
        await client.request("GET", "osot_table_accounts")

        assert calls["token"] == 2

    @pytest.mark.asyncio
    async def test_token_failure(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(401, json={"error": "invalid_client"})

        client = make_client(handler)
        with pytest.raises(DataverseServiceError) as exc_info:
            await client.request("GET", "osot_table_accounts")
        assert exc_info.value.status == 401
        assert exc_info.value.status_code == 502

    @pytest.mark.asyncio
    async def test_post_requests_representation(self):
        """Test POST asks Dataverse to return the created row."""
        captured = {}

        def handler(request: httpx.Request) -> httpx.Response:
            if str(request.url) == TOKEN_URL:
                return token_response()
            captured["prefer"] = request.headers.get("Prefer")
            captured["body"] = json.loads(request.content)
            captured["url"] = str(request.url)
            return httpx.Response(201, json={"osot_table_membership_categoryid": "new-guid"})

        client = make_client(handler)
        result = await client.request("POST", "osot_table_membership_categories", {"osot_membership_year": "2025"})

        assert result == {"osot_table_membership_categoryid": "new-guid"}
        assert captured["prefer"] == "return=representation"
        assert captured["body"] == {"osot_membership_year": "2025"}
        assert captured["url"] == API_BASE + "osot_table_membership_categories"

    @pytest.mark.asyncio
    async def test_not_found(self):
        def handler(request: httpx.Request) -> httpx.Response:
            if str(request.url) == TOKEN_URL:
                return token_response()
            return httpx.Response(404, json={"error": {"message": "Does Not Exist"}})

        client = make_client(handler)
        with pytest.raises(DataverseNotFoundError):
            await client.request("GET", "osot_table_accounts(abc)")
        assert await client.fetch_one("osot_table_accounts(abc)") is None

    @pytest.mark.asyncio
    async def test_platform_error_message(self):
        def handler(request: httpx.Request) -> httpx.Response:
            if str(request.url) == TOKEN_URL:
                return token_response()
            return httpx.Response(400, json={"error": {"code": "0x0", "message": "Bad filter"}})

        client = make_client(handler)
        with pytest.raises(DataverseServiceError) as exc_info:
            await client.request("GET", "osot_table_accounts?$filter=bad")
        assert exc_info.value.message == "Dataverse error: Bad filter"
        assert exc_info.value.status == 400

    @pytest.mark.asyncio
    async def test_network_error(self):
        def handler(request: httpx.Request) -> httpx.Response:
            if str(request.url) == TOKEN_URL:
                return token_response()
            raise httpx.ConnectError("connection refused")

        client = make_client(handler)
        with pytest.raises(DataverseServiceError) as exc_info:
            await client.request("GET", "osot_table_accounts")
        assert "Dataverse request failed" in exc_info.value.message

    @pytest.mark.asyncio
    async def test_delete_returns_none(self):
        def handler(request: httpx.Request) -> httpx.Response:
            if str(request.url) == TOKEN_URL:
                return token_response()
            assert request.method == "DELETE"
            return httpx.Response(204)

        client = make_client(handler)
        assert await client.request("DELETE", "osot_table_membership_categories(abc)") is None

    @pytest.mark.asyncio
    async def test_fetch_all_returns_value(self):
        def handler(request: httpx.Request) -> httpx.Response:
            if str(request.url) == TOKEN_URL:
                return token_response()
            return httpx.Response(200, json={"value": [{"a": 1}, {"a": 2}]})

        client = make_client(handler)
        assert await client.fetch_all("osot_table_accounts") == [{"a": 1}, {"a": 2}]
        await client.close()
