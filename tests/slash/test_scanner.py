"""Tests for the paginated balance scanner."""

from decimal import Decimal

import pytest

from src.slash.errors import IndexQueryError
from src.slash.scanner import BalanceScanner
from tests.fakes import FakeIndex, make_account, make_page


def _accounts(prefix: str, count: int) -> list:
    return [make_account(f"{prefix}{i}", free=10_000 + i) for i in range(count)]


class TestBalanceScanner:
    """Tests for BalanceScanner.scan."""

    @pytest.mark.asyncio
    async def test_collects_all_pages_in_order(self) -> None:
        """Test three pages of 50, 50 and 7 accounts."""
        first, second, third = _accounts("p1-", 50), _accounts("p2-", 50), _accounts("p3-", 7)
        index = FakeIndex([
            make_page(first, has_next_page=True, end_cursor="c1"),
            make_page(second, has_next_page=True, end_cursor="c2"),
            make_page(third, has_next_page=False, end_cursor="c3"),
        ])
        scanner = BalanceScanner(index)  # type: ignore[arg-type]

        accounts = await scanner.scan(None, 1, 0)  # type: ignore[arg-type]

        assert len(accounts) == 107
        assert accounts == first + second + third
        assert len(index.calls) == 3

    @pytest.mark.asyncio
    async def test_follows_continuation_cursor(self) -> None:
        """Test the first request has no cursor and later ones use endCursor."""
        index = FakeIndex([
            make_page(_accounts("a", 1), has_next_page=True, end_cursor="cursor-1"),
            make_page(_accounts("b", 1), has_next_page=True, end_cursor="cursor-2"),
            make_page([], has_next_page=False),
        ])
        scanner = BalanceScanner(index)  # type: ignore[arg-type]

        await scanner.scan(None, 1, 0)  # type: ignore[arg-type]

        assert [after for _, after in index.calls] == [None, "cursor-1", "cursor-2"]

    @pytest.mark.asyncio
    async def test_threshold_converted_to_minor_units(self) -> None:
        """Test the index is queried with the scaled integer threshold."""
        index = FakeIndex([make_page([])])
        scanner = BalanceScanner(index)  # type: ignore[arg-type]

        await scanner.scan(None, Decimal("1.5"), 10)  # type: ignore[arg-type]

        assert index.calls == [(15_000_000_000, None)]

    @pytest.mark.asyncio
    async def test_threshold_truncates_fraction_of_minor_unit(self) -> None:
        """Test sub-minor-unit precision is truncated."""
        index = FakeIndex([make_page([])])
        scanner = BalanceScanner(index)  # type: ignore[arg-type]

        await scanner.scan(None, Decimal("1.99"), 1)  # type: ignore[arg-type]

        assert index.calls == [(19, None)]

    @pytest.mark.asyncio
    async def test_does_not_deduplicate(self) -> None:
        """Test accounts repeated across pages are all kept."""
        account = make_account("dup", free=10_000)
        index = FakeIndex([
            make_page([account], has_next_page=True, end_cursor="c1"),
            make_page([account]),
        ])
        scanner = BalanceScanner(index)  # type: ignore[arg-type]

        accounts = await scanner.scan(None, 1, 0)  # type: ignore[arg-type]

        assert accounts == [account, account]

    @pytest.mark.asyncio
    async def test_page_failure_aborts_without_retry(self) -> None:
        """Test a failing page propagates and no partial result is returned."""
        index = FakeIndex([
            make_page(_accounts("a", 50), has_next_page=True, end_cursor="c1"),
            IndexQueryError("connection reset"),
        ])
        scanner = BalanceScanner(index)  # type: ignore[arg-type]

        with pytest.raises(IndexQueryError, match="connection reset"):
            await scanner.scan(None, 1, 0)  # type: ignore[arg-type]

        assert len(index.calls) == 2

    @pytest.mark.asyncio
    async def test_retries_page_when_enabled(self) -> None:
        """Test bounded retry re-requests the same page."""
        index = FakeIndex([
            make_page(_accounts("a", 2), has_next_page=True, end_cursor="c1"),
            IndexQueryError("timeout"),
            make_page(_accounts("b", 1)),
        ])
        scanner = BalanceScanner(index, max_retries=3, retry_base_delay=0.0)  # type: ignore[arg-type]

        accounts = await scanner.scan(None, 1, 0)  # type: ignore[arg-type]

        assert len(accounts) == 3
        assert [after for _, after in index.calls] == [None, "c1", "c1"]

    @pytest.mark.asyncio
    async def test_retry_exhaustion_raises(self) -> None:
        """Test the last error propagates once retries run out."""
        index = FakeIndex([IndexQueryError("down"), IndexQueryError("still down")])
        scanner = BalanceScanner(index, max_retries=2, retry_base_delay=0.0)  # type: ignore[arg-type]

        with pytest.raises(IndexQueryError, match="still down"):
            await scanner.scan(None, 1, 0)  # type: ignore[arg-type]

    @pytest.mark.asyncio
    async def test_next_page_without_cursor_is_protocol_error(self) -> None:
        """Test hasNextPage without endCursor does not loop forever."""
        index = FakeIndex([make_page(_accounts("a", 1), has_next_page=True)])
        scanner = BalanceScanner(index)  # type: ignore[arg-type]

        with pytest.raises(IndexQueryError, match="without a cursor"):
            await scanner.scan(None, 1, 0)  # type: ignore[arg-type]
