"""Exceptions raised by the slashing pipeline."""


class SlashError(Exception):
    """Base class for every error that aborts a slashing run."""

    stage = "run"


class ConfigurationError(SlashError, ValueError):
    """A required setting is missing or invalid."""

    stage = "config"


class WhitelistParseError(SlashError):
    """The whitelist file exists but is not a valid list of entries."""

    stage = "whitelist"


class IndexQueryError(SlashError):
    """A balance index page could not be fetched or understood."""

    stage = "scan"


class TransferError(SlashError):
    """A privileged transfer could not be simulated or submitted."""

    stage = "transfer"

    def __init__(self, address: str, amount: int, reason: str) -> None:
        """Initialize with the account the transfer was meant to slash.

        Args:
            address: Source address of the failed transfer
            amount: Amount in minor units
            reason: Human readable failure description
        """
        super().__init__(f"Transfer of {amount} from {address} failed: {reason}")
        self.address = address
        self.amount = amount


__all__ = [
    "ConfigurationError",
    "IndexQueryError",
    "SlashError",
    "TransferError",
    "WhitelistParseError",
]
