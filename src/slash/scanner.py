"""Drive the balance index to completion for one threshold."""

from decimal import Decimal

import httpx

from src.helpers.constants import DEFAULT_INDEX_MAX_RETRIES, RETRY_BASE_DELAY
from src.helpers.http import retry_with_backoff
from src.helpers.logging import get_logger
from src.helpers.parsers import to_minor_units
from src.slash.errors import IndexQueryError
from src.slash.index import IndexClient
from src.slash.models import AccountBalance, AccountsConnection


logger = get_logger(__name__)


class BalanceScanner:
    """Collect every account whose free balance exceeds a threshold.

    Pages are pulled one at a time until the index reports no further pages.
    With the default of a single attempt per page, any failure aborts the
    scan; a partial account list is never returned.
    """

    def __init__(
        self,
        index: IndexClient,
        max_retries: int = DEFAULT_INDEX_MAX_RETRIES,
        retry_base_delay: float = RETRY_BASE_DELAY,
    ) -> None:
        """Initialize scanner.

        Args:
            index: Index client used to fetch pages
            max_retries: Attempts per page (1 disables retrying)
            retry_base_delay: Initial backoff delay in seconds
        """
        self.index = index
        self.max_retries = max_retries
        self.retry_base_delay = retry_base_delay

    async def _fetch_page(
        self,
        client: httpx.AsyncClient,
        threshold: int,
        after: str | None,
    ) -> AccountsConnection:
        fetch = retry_with_backoff(
            max_retries=self.max_retries,
            base_delay=self.retry_base_delay,
            retry_on=(IndexQueryError,),
        )(self.index.fetch_balances_page)
        return await fetch(client, threshold, after)

    async def scan(
        self,
        client: httpx.AsyncClient,
        threshold: Decimal | int,
        chain_decimals: int,
    ) -> list[AccountBalance]:
        """Fetch all accounts over threshold.

        Args:
            client: HTTP client instance
            threshold: Balance threshold in major units
            chain_decimals: Chain decimal count used to scale the threshold

        Returns:
            Accounts from every page, in the order the index returned them

        Raises:
            IndexQueryError: If any page fails
        """
        chain_threshold = to_minor_units(threshold, chain_decimals)
        logger.debug(
            "Querying index for accounts with free balance above %d", chain_threshold
        )

        accounts: list[AccountBalance] = []
        after: str | None = None
        pages = 0

        while True:
            page = await self._fetch_page(client, chain_threshold, after)
            pages += 1
            accounts.extend(page.accounts)
            logger.debug("Got %d accounts (page %d)", len(page.edges), pages)

            if not page.page_info.has_next_page:
                break

            if not page.page_info.end_cursor:
                msg = f"Index reported another page after page {pages} without a cursor"
                raise IndexQueryError(msg)

            logger.debug("Has next page")
            after = page.page_info.end_cursor

        return accounts


__all__ = ["BalanceScanner"]
