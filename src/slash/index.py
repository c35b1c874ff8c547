"""GraphQL client for the account balance index."""

from typing import Any

import httpx
from pydantic import ValidationError

from src.helpers.constants import DEFAULT_TIMEOUT, INDEX_PAGE_SIZE
from src.slash.errors import IndexQueryError
from src.slash.models import AccountsConnection, BalancesResponse
from src.slash.queries import BALANCES_QUERY


class IndexClient:
    """GraphQL client for the balance index (a Subsquid-style stats API)."""

    def __init__(
        self,
        api_url: str,
        timeout: float = DEFAULT_TIMEOUT,
        page_size: int = INDEX_PAGE_SIZE,
    ) -> None:
        """Initialize index client.

        Args:
            api_url: GraphQL endpoint URL
            timeout: Default timeout for requests in seconds
            page_size: Accounts requested per page

        Raises:
            ValueError: If api_url is empty or None
        """
        if not api_url:
            msg = "Index API URL cannot be empty"
            raise ValueError(msg)

        self.api_url = api_url
        self.timeout = timeout
        self.page_size = page_size

    async def query(
        self,
        client: httpx.AsyncClient,
        document: str,
        variables: dict[str, Any] | None = None,
        *,
        timeout: float | None = None,
    ) -> dict[str, Any]:
        """Execute a GraphQL query and return its data payload.

        Args:
            client: HTTP client instance
            document: GraphQL query document
            variables: Query variables
            timeout: Optional timeout override

        Returns:
            The "data" object of the response

        Raises:
            IndexQueryError: If the request fails or the response carries errors
        """
        payload = {"query": document, "variables": variables or {}}

        try:
            response = await client.post(
                self.api_url, json=payload, timeout=timeout or self.timeout
            )
            response.raise_for_status()
            result = response.json()
        except httpx.HTTPError as e:
            msg = f"Index request to {self.api_url} failed: {e}"
            raise IndexQueryError(msg) from e
        except ValueError as e:
            msg = f"Index returned invalid JSON: {e}"
            raise IndexQueryError(msg) from e

        if not isinstance(result, dict):
            msg = f"Index returned unexpected payload: {result!r}"
            raise IndexQueryError(msg)

        if result.get("errors"):
            msg = f"GraphQL error: {result['errors']}"
            raise IndexQueryError(msg)

        data = result.get("data")
        if not isinstance(data, dict):
            msg = "Index response has no data"
            raise IndexQueryError(msg)

        return data

    async def fetch_balances_page(
        self,
        client: httpx.AsyncClient,
        threshold: int,
        after: str | None = None,
    ) -> AccountsConnection:
        """Fetch one page of accounts whose free balance exceeds threshold.

        Args:
            client: HTTP client instance
            threshold: Free balance threshold in minor units
            after: Continuation cursor from the previous page, None for the first

        Returns:
            The accounts connection page

        Raises:
            IndexQueryError: If the request fails or the page cannot be parsed

        Example:
            ```python
            index = IndexClient("https://squid.example.com/graphql")
            async with httpx.AsyncClient() as client:
                page = await index.fetch_balances_page(client, 10**12)
                if page.page_info.has_next_page:
                    page = await index.fetch_balances_page(
                        client, 10**12, page.page_info.end_cursor
                    )
            ```
        """
        variables: dict[str, Any] = {
            "first": self.page_size,
            "threshold": str(threshold),
        }
        if after is not None:
            variables["after"] = after

        data = await self.query(client, BALANCES_QUERY, variables)

        try:
            return BalancesResponse.model_validate(data).accounts_connection
        except ValidationError as e:
            msg = f"Malformed balances page: {e}"
            raise IndexQueryError(msg) from e


__all__ = ["IndexClient"]
