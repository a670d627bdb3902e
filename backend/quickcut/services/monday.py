"""Monday.com board client using the GraphQL API."""
import json
from datetime import date
from typing import Any, Awaitable, Dict, Optional, TypeVar

import httpx

from quickcut.config import settings
from quickcut.constants import DEFAULT_FILE_NAME
from quickcut.utils.exceptions import AppException
from quickcut.utils.logger import logger

T = TypeVar("T")

CREATE_ITEM_MUTATION = """
mutation ($boardId: ID!, $groupId: String!, $itemName: String!, $columnValues: JSON!) {
  create_item(board_id: $boardId, group_id: $groupId, item_name: $itemName, column_values: $columnValues) {
    id
  }
}
"""

UPDATE_ITEM_MUTATION = """
mutation ($boardId: ID!, $itemId: ID!, $columnValues: JSON!) {
  change_multiple_column_values(board_id: $boardId, item_id: $itemId, column_values: $columnValues) {
    id
  }
}
"""

CREATE_UPDATE_MUTATION = """
mutation ($itemId: ID!, $body: String!) {
  create_update(item_id: $itemId, body: $body) {
    id
  }
}
"""

GET_ITEM_QUERY = """
query ($itemId: [ID!]) {
  items(ids: $itemId) {
    id
    name
    column_values {
      id
      text
      value
    }
  }
}
"""


class MondayAPIError(AppException):
    """Raised when the Monday.com API rejects a request."""
    pass


class MondayClient:
    """Client for creating and updating items on the projects board."""

    def __init__(
        self,
        api_key: str,
        board_id: str,
        group_id: str,
        api_url: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.api_key = api_key
        self.board_id = board_id
        self.group_id = group_id
        self.api_url = api_url or settings.monday_api_url
        self.timeout = timeout or settings.monday_timeout_seconds
        self._transport = transport
        self.columns = {
            "status": settings.monday_status_col_id,
            "priority": settings.monday_priority_col_id,
            "file": settings.monday_file_col_id,
            "due_date": settings.monday_duedate_col_id,
        }

    async def _request(self, query: str, variables: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """Run a GraphQL operation and return its ``data`` object."""
        headers = {
            "Content-Type": "application/json",
            "Authorization": self.api_key,
        }

        async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
            try:
                response = await client.post(
                    self.api_url,
                    headers=headers,
                    json={"query": query, "variables": variables or {}},
                )
            except httpx.HTTPError as e:
                raise MondayAPIError(f"Monday.com API request failed: {e}") from e

        if response.status_code != 200:
            raise MondayAPIError(
                f"Monday.com API error: {response.status_code} - {response.reason_phrase}"
            )

        data = response.json()
        if data.get("errors"):
            raise MondayAPIError(f"Monday.com API error: {data['errors'][0].get('message')}")

        return data.get("data") or {}

    def build_column_values(
        self,
        status: Optional[str] = None,
        priority: Optional[str] = None,
        due_date: Optional[date | str] = None,
        file_url: Optional[str] = None,
        file_name: Optional[str] = None,
    ) -> Dict[str, Any]:
        """Build the ``column_values`` object for a new item."""
        c = self.columns
        column_values: Dict[str, Any] = {}

        if status:
            column_values[c["status"]] = {"label": status}
        if priority:
            column_values[c["priority"]] = {"label": priority}
        if due_date:
            # Board date columns take YYYY-MM-DD
            column_values[c["due_date"]] = {
                "date": due_date.isoformat() if isinstance(due_date, date) else due_date
            }
        if file_url:
            column_values[c["file"]] = {"url": file_url, "text": file_name or DEFAULT_FILE_NAME}

        return column_values

    async def create_item(
        self,
        name: str,
        status: str,
        priority: Optional[str] = None,
        due_date: Optional[date | str] = None,
        file_url: Optional[str] = None,
        file_name: Optional[str] = None,
    ) -> str:
        """
        Create an item in the configured board group.

        Returns:
            The new item ID
        """
        column_values = self.build_column_values(status, priority, due_date, file_url, file_name)
        logger.info(f"Creating Monday.com item {name!r} with columns: {column_values}")

        try:
            data = await self._request(
                CREATE_ITEM_MUTATION,
                {
                    "boardId": self.board_id,
                    "groupId": self.group_id,
                    "itemName": name,
                    "columnValues": json.dumps(column_values),
                },
            )
        except MondayAPIError:
            logger.error(f"Error creating item, column values sent: {json.dumps(column_values)}")
            raise

        item_id = str(data["create_item"]["id"])
        logger.info(f"Monday.com item created: {item_id}")
        return item_id

    async def update_item(self, item_id: str, column_values: Dict[str, Any]) -> None:
        """Change one or more column values on an existing item."""
        await self._request(
            UPDATE_ITEM_MUTATION,
            {
                "boardId": self.board_id,
                "itemId": item_id,
                "columnValues": json.dumps(column_values),
            },
        )
        logger.info(f"Monday.com item updated: {item_id}")

    async def set_status(self, item_id: str, status: str) -> None:
        await self.update_item(item_id, {self.columns["status"]: {"label": status}})

    async def add_update(self, item_id: str, body: str) -> str:
        """
        Post an update (comment) on an item.

        Returns:
            The new update ID
        """
        data = await self._request(CREATE_UPDATE_MUTATION, {"itemId": item_id, "body": body})
        return str(data["create_update"]["id"])

    async def get_item(self, item_id: str) -> Optional[Dict[str, Any]]:
        """Fetch an item with its column values, or None if it does not exist."""
        data = await self._request(GET_ITEM_QUERY, {"itemId": [item_id]})
        items = data.get("items") or []
        return items[0] if items else None


def create_monday_client() -> Optional[MondayClient]:
    """Return a board client, or None when the board is not configured."""
    if not settings.monday_enabled:
        logger.warning("Monday.com credentials not configured")
        return None

    return MondayClient(
        api_key=settings.monday_api_key,
        board_id=settings.monday_board_id,
        group_id=settings.monday_group_id,
    )


async def best_effort(call: Awaitable[T], action: str) -> Optional[T]:
    """
    Await a board call whose failure must not abort the caller.

    Returns:
        The call's result, or None if it failed
    """
    try:
        return await call
    except Exception as e:
        logger.error(f"Monday.com {action} failed: {e}", exc_info=True)
        return None
