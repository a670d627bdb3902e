"""Tests for the Monday.com GraphQL client."""

from __future__ import annotations

import json

import httpx
import pytest

from quickcut.services.monday import MondayAPIError, MondayClient, best_effort, create_monday_client


def make_client(handler) -> MondayClient:
    return MondayClient(
        api_key="secret-token",
        board_id="111",
        group_id="topics",
        api_url="https://monday.test/v2",
        transport=httpx.MockTransport(handler),
    )


def graphql_body(request: httpx.Request) -> dict:
    return json.loads(request.content)


class TestColumnValues:
    def test_builds_values_for_configured_columns(self) -> None:
        client = make_client(lambda request: httpx.Response(200, json={}))
        values = client.build_column_values(
            status="Not Started",
            priority="Urgent",
            due_date="2025-02-01",
            file_url="https://example.com/raw.zip",
        )
        assert values == {
            "project_status": {"label": "Not Started"},
            "priority__1": {"label": "Urgent"},
            "date": {"date": "2025-02-01"},
            "link__1": {"url": "https://example.com/raw.zip", "text": "Project File"},
        }

    def test_omits_empty_fields(self) -> None:
        client = make_client(lambda request: httpx.Response(200, json={}))
        assert client.build_column_values(status="Not Started") == {"project_status": {"label": "Not Started"}}


class TestRequests:
    @pytest.mark.asyncio
    async def test_create_item(self) -> None:
        seen = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={"data": {"create_item": {"id": 424242}}})

        item_id = await make_client(handler).create_item(name="Jane - Promo", status="Not Started", priority="Urgent")

        assert item_id == "424242"
        request = seen[0]
        assert request.headers["authorization"] == "secret-token"
        variables = graphql_body(request)["variables"]
        assert variables["boardId"] == "111"
        assert variables["groupId"] == "topics"
        assert variables["itemName"] == "Jane - Promo"
        assert json.loads(variables["columnValues"])["priority__1"] == {"label": "Urgent"}

    @pytest.mark.asyncio
    async def test_set_status(self) -> None:
        seen = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(graphql_body(request))
            return httpx.Response(200, json={"data": {"change_multiple_column_values": {"id": 1}}})

        await make_client(handler).set_status("99", "Completed")

        variables = seen[0]["variables"]
        assert variables["itemId"] == "99"
        assert json.loads(variables["columnValues"]) == {"project_status": {"label": "Completed"}}

    @pytest.mark.asyncio
    async def test_add_update(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            assert graphql_body(request)["variables"] == {"itemId": "99", "body": "Looks great"}
            return httpx.Response(200, json={"data": {"create_update": {"id": "u-1"}}})

        assert await make_client(handler).add_update("99", "Looks great") == "u-1"

    @pytest.mark.asyncio
    async def test_get_item_missing(self) -> None:
        client = make_client(lambda request: httpx.Response(200, json={"data": {"items": []}}))
        assert await client.get_item("99") is None

    @pytest.mark.asyncio
    async def test_graphql_errors_raise(self) -> None:
        client = make_client(
            lambda request: httpx.Response(200, json={"errors": [{"message": "Column not found"}]})
        )
        with pytest.raises(MondayAPIError, match="Column not found"):
            await client.add_update("99", "x")

    @pytest.mark.asyncio
    async def test_http_errors_raise(self) -> None:
        client = make_client(lambda request: httpx.Response(401, text="unauthorized"))
        with pytest.raises(MondayAPIError, match="401"):
            await client.get_item("99")

    @pytest.mark.asyncio
    async def test_transport_errors_raise(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("no route to host")

        with pytest.raises(MondayAPIError, match="no route to host"):
            await make_client(handler).get_item("99")


class TestBestEffort:
    @pytest.mark.asyncio
    async def test_returns_result(self) -> None:
        async def call() -> str:
            return "ok"

        assert await best_effort(call(), "test") == "ok"

    @pytest.mark.asyncio
    async def test_swallows_failure(self) -> None:
        async def call() -> str:
            raise MondayAPIError("boom")

        assert await best_effort(call(), "test") is None


def test_client_disabled_without_credentials() -> None:
    assert create_monday_client() is None
