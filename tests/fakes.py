"""Test doubles for the index and ledger collaborators."""

from decimal import Decimal

from typing import Any

from src.helpers.config import RunConfig
from src.slash.errors import TransferError
from src.slash.models import (
    AccountBalance,
    AccountEdge,
    AccountsConnection,
    PageInfo,
    TransferOutcome,
)


def make_account(address: str, free: int, reserved: int = 0) -> AccountBalance:
    """Build an account with total = free + reserved."""
    return AccountBalance(id=address, total=free + reserved, free=free, reserved=reserved)


def make_page(
    accounts: list[AccountBalance],
    *,
    has_next_page: bool = False,
    end_cursor: str | None = None,
) -> AccountsConnection:
    """Wrap accounts in a connection page."""
    return AccountsConnection(
        edges=[AccountEdge(node=account) for account in accounts],
        total_count=None,
        page_info=PageInfo(end_cursor=end_cursor, has_next_page=has_next_page),
    )


def make_config(**overrides: Any) -> RunConfig:
    """Build a RunConfig with test defaults."""
    values: dict[str, Any] = {
        "chain_decimals": 10,
        "balance_threshold": Decimal(1000),
        "balance_target": Decimal(500),
        "node_url": "ws://node.test:9944",
        "stats_api_url": "https://index.test/graphql",
        "root_mnemonic": "//Alice",
        "dry_run": False,
    }
    values.update(overrides)
    return RunConfig(**values)


class FakeIndex:
    """Index client returning queued pages or raising queued errors."""

    def __init__(self, responses: list[AccountsConnection | Exception]) -> None:
        self.responses = list(responses)
        self.calls: list[tuple[int, str | None]] = []

    async def fetch_balances_page(
        self, client: Any, threshold: int, after: str | None = None
    ) -> AccountsConnection:
        self.calls.append((threshold, after))
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response


class FakeLedger:
    """Ledger client recording transfers; fails for addresses in fail_on."""

    def __init__(self, fail_on: set[str] | None = None) -> None:
        self.fail_on = fail_on or set()
        self.calls: list[tuple[str, int, bool]] = []
        self.committed: list[tuple[str, int]] = []

    async def force_transfer(
        self, from_address: str, amount: int, *, dry_run: bool
    ) -> TransferOutcome:
        self.calls.append((from_address, amount, dry_run))
        if from_address in self.fail_on:
            raise TransferError(from_address, amount, "Priority is too low")
        if not dry_run:
            self.committed.append((from_address, amount))
        return TransferOutcome(
            address=from_address,
            amount=amount,
            dry_run=dry_run,
            success=True,
            detail="0x0000" if dry_run else f"0xhash-{from_address}",
        )
