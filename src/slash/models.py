"""Pydantic models for balance index responses, whitelist entries and run results."""

from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field


class AccountBalance(BaseModel):
    """Ledger account as reported by the balance index.

    Balances arrive as integer strings in minor units and are parsed into
    Python ints, so no precision is lost.
    """

    id: str = Field(..., description="Chain-native account address")
    total: int = Field(..., ge=0, description="Total balance in minor units")
    free: int = Field(..., ge=0, description="Free balance in minor units")
    reserved: int = Field(..., ge=0, description="Reserved balance in minor units")

    model_config = ConfigDict(frozen=True)


class AccountEdge(BaseModel):
    """Connection edge wrapping one account node."""

    node: AccountBalance


class PageInfo(BaseModel):
    """Cursor pagination state of an accounts connection."""

    end_cursor: str | None = Field(default=None, alias="endCursor")
    has_next_page: bool = Field(..., alias="hasNextPage")

    model_config = ConfigDict(populate_by_name=True)


class AccountsConnection(BaseModel):
    """One page of the accountsConnection query."""

    edges: list[AccountEdge]
    total_count: int | None = Field(default=None, alias="totalCount")
    page_info: PageInfo = Field(..., alias="pageInfo")

    model_config = ConfigDict(populate_by_name=True)

    @property
    def accounts(self) -> list[AccountBalance]:
        """Accounts on this page in index order."""
        return [edge.node for edge in self.edges]


class BalancesResponse(BaseModel):
    """Data payload of the Balances query."""

    accounts_connection: AccountsConnection = Field(..., alias="accountsConnection")

    model_config = ConfigDict(populate_by_name=True)


class WhitelistEntry(BaseModel):
    """Account protected from slashing, or slashed down to its own cap."""

    name: str
    address: str
    max_balance: Decimal | None = Field(
        default=None,
        ge=0,
        alias="maxBalance",
        description="Cap in major units; None means never slash",
    )

    model_config = ConfigDict(frozen=True, populate_by_name=True)


class TransferOutcome(BaseModel):
    """Result of one privileged transfer, real or simulated."""

    address: str
    amount: int
    dry_run: bool
    success: bool
    detail: str | None = None


class SlashReport(BaseModel):
    """Summary of a slashing run."""

    candidates: int = Field(..., description="Accounts found over the threshold")
    planned: int = Field(..., description="Transfers executed after filtering")
    recovered: int = Field(..., description="Sum of transferred amounts in minor units")
    dry_run: bool
    outcomes: list[TransferOutcome] = Field(default_factory=list)


__all__ = [
    "AccountBalance",
    "AccountEdge",
    "AccountsConnection",
    "BalancesResponse",
    "PageInfo",
    "SlashReport",
    "TransferOutcome",
    "WhitelistEntry",
]
