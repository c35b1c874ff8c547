"""Compute how much to slash from each account."""

from collections.abc import Iterable, Mapping
from decimal import Decimal

from src.helpers.logging import get_logger
from src.helpers.parsers import to_minor_units
from src.slash.models import AccountBalance, WhitelistEntry


logger = get_logger(__name__)

type SlashPlan = dict[str, int]


def _index_whitelist(whitelist: Iterable[WhitelistEntry]) -> dict[str, WhitelistEntry]:
    """Map address to entry, keeping the first entry for duplicated addresses."""
    by_address: dict[str, WhitelistEntry] = {}
    for entry in whitelist:
        by_address.setdefault(entry.address, entry)
    return by_address


def compute_slash_plan(
    whitelist: Iterable[WhitelistEntry],
    accounts: Iterable[AccountBalance],
    chain_decimals: int,
    balance_target: Decimal | int,
) -> SlashPlan:
    """Filter accounts through the whitelist and compute amounts to slash.

    Accounts whitelisted without a cap are skipped. Every other account is
    brought down to its whitelist cap, or to the global target when it has no
    entry. Accounts already at or below their cap produce no entry, so every
    amount in the plan is strictly positive.

    Args:
        whitelist: Whitelist entries
        accounts: Scanned accounts in index order
        chain_decimals: Chain decimal count
        balance_target: Global target balance in major units

    Returns:
        Mapping of address to amount in minor units, in account order

    Example:
        >>> accounts = [AccountBalance(id="a", total=1200, free=1200, reserved=0)]
        >>> compute_slash_plan([], accounts, 0, 500)
        {'a': 700}
    """
    entries = _index_whitelist(whitelist)
    default_cap = to_minor_units(balance_target, chain_decimals)

    plan: SlashPlan = {}
    for account in accounts:
        entry = entries.get(account.id)
        if entry is not None and entry.max_balance is None:
            logger.debug("%s is whitelisted", account.id)
            continue

        cap = (
            to_minor_units(entry.max_balance, chain_decimals)
            if entry is not None and entry.max_balance is not None
            else default_cap
        )
        if account.free <= cap:
            continue

        amount = account.free - cap
        logger.debug(
            "Pushing %s with target balance %d - to be slashed %d",
            account.id,
            cap,
            amount,
        )
        plan[account.id] = amount

    logger.debug("Filtered accounts pushed")
    return plan


def narrow_to_address(plan: Mapping[str, int], address: str | None) -> SlashPlan:
    """Restrict a plan to a single forced address.

    Args:
        plan: Computed slash plan
        address: Address to keep, or None to keep the whole plan

    Returns:
        The plan unchanged when address is None, otherwise a plan holding at
        most that one address

    Example:
        >>> narrow_to_address({"a": 1, "b": 2}, "b")
        {'b': 2}
        >>> narrow_to_address({"a": 1}, "z")
        {}
    """
    if address is None:
        return dict(plan)
    if address in plan:
        return {address: plan[address]}
    return {}


def total_amount(plan: Mapping[str, int]) -> int:
    """Sum of all planned amounts in minor units."""
    return sum(plan.values(), 0)


__all__ = [
    "SlashPlan",
    "compute_slash_plan",
    "narrow_to_address",
    "total_amount",
]
