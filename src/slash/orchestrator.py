"""Scan, plan and execute a slashing run."""

import json

import httpx
from rich.console import Console

from src.helpers.config import RunConfig
from src.helpers.http import create_http_client
from src.helpers.logging import get_logger
from src.helpers.parsers import from_minor_units
from src.helpers.progress import track_progress
from src.slash.index import IndexClient
from src.slash.ledger import LedgerClient
from src.slash.models import SlashReport, TransferOutcome
from src.slash.plan import (
    SlashPlan,
    compute_slash_plan,
    narrow_to_address,
    total_amount,
)
from src.slash.scanner import BalanceScanner
from src.slash.whitelist import load_whitelist


logger = get_logger(__name__)


class SlashOrchestrator:
    """Run the slashing pipeline end to end.

    Stages run strictly in order: scan the index, load the whitelist,
    compute the plan, optionally narrow it to one forced address, then
    submit one transfer per planned address. Transfers are awaited one at
    a time because a single signer issues all of them and the ledger
    requires strictly ordered nonces. The first failing transfer stops the
    run; transfers already submitted stay on chain.
    """

    def __init__(
        self,
        config: RunConfig,
        ledger: LedgerClient,
        index: IndexClient | None = None,
        console: Console | None = None,
    ) -> None:
        """Initialize orchestrator.

        Args:
            config: Validated run configuration
            ledger: Ledger client used for privileged transfers
            index: Index client; built from config.stats_api_url when omitted
            console: Rich console for the transfer progress bar
        """
        self.config = config
        self.ledger = ledger
        self.index = index or IndexClient(
            config.stats_api_url, page_size=config.index_page_size
        )
        self.scanner = BalanceScanner(self.index, max_retries=config.index_max_retries)
        self.console = console or Console()

    async def build_plan(self, client: httpx.AsyncClient) -> tuple[int, SlashPlan]:
        """Scan, filter and narrow without moving any funds.

        Args:
            client: HTTP client for the index

        Returns:
            Tuple of (number of accounts over threshold, plan to execute)

        Raises:
            IndexQueryError: If the scan fails
            WhitelistParseError: If the whitelist is malformed
        """
        config = self.config
        logger.info(
            "Looking for accounts with balances bigger than %s", config.balance_threshold
        )
        accounts = await self.scanner.scan(
            client, config.balance_threshold, config.chain_decimals
        )
        logger.info("Accounts exceeding threshold: [%d]", len(accounts))

        whitelist = load_whitelist(config.whitelist_path)

        logger.info(
            "Calculating amounts to slash to leave them all with %s",
            config.balance_target,
        )
        plan = compute_slash_plan(
            whitelist, accounts, config.chain_decimals, config.balance_target
        )
        logger.info("Filtered amounts to slash: [%d]", len(plan))

        if config.address_to_slash:
            logger.info(
                "Forced address to slash is set. Keeping only [%s]",
                config.address_to_slash,
            )
            plan = narrow_to_address(plan, config.address_to_slash)

        logger.debug(
            "Filtered amounts to slash %s",
            json.dumps({address: str(amount) for address, amount in plan.items()}),
        )
        return len(accounts), plan

    async def execute(self, plan: SlashPlan) -> list[TransferOutcome]:
        """Submit (or simulate) one transfer per plan entry, in plan order.

        Raises:
            TransferError: On the first failed transfer; later entries are not attempted
        """
        outcomes: list[TransferOutcome] = []
        with track_progress(
            "Slashing accounts",
            total=len(plan),
            console=self.console,
            disable=not plan,
        ) as (progress, task):
            for address, amount in plan.items():
                outcome = await self.ledger.force_transfer(
                    address, amount, dry_run=self.config.dry_run
                )
                if not outcome.success:
                    logger.warning(
                        "Transfer from %s reported failure: %s", address, outcome.detail
                    )
                outcomes.append(outcome)
                progress.update(task, advance=1)
        return outcomes

    async def run(self) -> SlashReport:
        """Run the whole pipeline.

        Returns:
            Report with candidate count, executed transfer count and total recovered

        Raises:
            IndexQueryError: If the scan fails
            WhitelistParseError: If the whitelist is malformed
            TransferError: If a transfer fails
        """
        logger.info("Starting...")
        if self.config.dry_run:
            logger.info("Dry run enabled, no funds will be moved")

        async with create_http_client() as client:
            candidates, plan = await self.build_plan(client)

        to_slash = total_amount(plan)
        logger.info(
            "Amount to slash: %d (%s) across %d accounts",
            to_slash,
            from_minor_units(to_slash, self.config.chain_decimals),
            len(plan),
        )

        outcomes = await self.execute(plan)
        recovered = sum(outcome.amount for outcome in outcomes)

        logger.info(
            "Process completed. Accounts slashed: %d. Tokens recovered: %d (%s)",
            len(outcomes),
            recovered,
            from_minor_units(recovered, self.config.chain_decimals),
        )
        return SlashReport(
            candidates=candidates,
            planned=len(outcomes),
            recovered=recovered,
            dry_run=self.config.dry_run,
            outcomes=outcomes,
        )


__all__ = ["SlashOrchestrator"]
