"""Slash accounts holding more than the allowed balance.

Scans the balance index for accounts whose free balance exceeds
BALANCE_THRESHOLD, skips whitelisted accounts, and force-transfers the
excess over BALANCE_TARGET (or the account's whitelist cap) to the sudo
account. Settings come from the environment or a `.env` file.

Usage:
    python -m src.slash_accounts [--dry-run] [--address ADDRESS] [--whitelist PATH]
"""

import argparse
import asyncio
import sys

from rich.console import Console

from src.helpers.config import load_run_config
from src.helpers.logging import get_logger, set_log_level
from src.slash.errors import SlashError
from src.slash.ledger import SubstrateLedgerClient
from src.slash.models import SlashReport
from src.slash.orchestrator import SlashOrchestrator


logger = get_logger(__name__)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line flags that override environment settings."""
    parser = argparse.ArgumentParser(
        description="Force-transfer balances above the configured target"
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        default=None,
        help="Simulate transfers with system_dryRun instead of submitting them",
    )
    parser.add_argument(
        "--address",
        default=None,
        help="Only slash this address (if it is in the plan)",
    )
    parser.add_argument(
        "--whitelist",
        default=None,
        help="Path to the whitelist YAML file",
    )
    return parser.parse_args(argv)


async def slash_accounts(args: argparse.Namespace) -> SlashReport:
    """Build the configuration, connect to the node and run the pipeline."""
    config = load_run_config(
        dry_run=args.dry_run,
        address_to_slash=args.address,
        whitelist_path=args.whitelist,
    )
    set_log_level(config.log_level)

    ledger = await asyncio.to_thread(
        SubstrateLedgerClient.connect, config.node_url, config.root_mnemonic
    )
    orchestrator = SlashOrchestrator(config, ledger)
    return await orchestrator.run()


def main(argv: list[str] | None = None) -> int:
    """Run the slasher and return the process exit status."""
    args = parse_args(argv)
    console = Console()

    try:
        report = asyncio.run(slash_accounts(args))
    except SlashError as e:
        logger.error("Slashing aborted during %s: %s", e.stage, e)
        return 1
    except Exception:
        logger.exception("Slashing aborted")
        return 1

    mode = "simulated" if report.dry_run else "submitted"
    console.print(
        f"[bold green]✓ {report.planned} transfers {mode}[/bold green] "
        f"({report.candidates} accounts over threshold, "
        f"{report.recovered:,} recovered)"
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
