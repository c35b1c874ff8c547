"""Configuration management and environment variable utilities."""

from decimal import Decimal
import os

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field

from src.helpers.constants import (
    DEFAULT_INDEX_MAX_RETRIES,
    DEFAULT_WHITELIST_PATH,
    INDEX_PAGE_SIZE,
)
from src.helpers.parsers import parse_bool, parse_decimal
from src.slash.errors import ConfigurationError


# Load environment variables from .env file
load_dotenv()


class RunConfig(BaseModel):
    """Resolved settings for one slashing run.

    Built once at startup and handed to every component explicitly.
    """

    chain_decimals: int = Field(..., gt=0)
    balance_threshold: Decimal = Field(..., gt=0, description="Major units")
    balance_target: Decimal = Field(..., gt=0, description="Major units")
    node_url: str = Field(..., min_length=1)
    stats_api_url: str = Field(..., min_length=1)
    root_mnemonic: str = Field(..., min_length=1, repr=False)
    dry_run: bool = False
    address_to_slash: str | None = None
    whitelist_path: str = DEFAULT_WHITELIST_PATH
    log_level: str = "INFO"
    index_max_retries: int = Field(default=DEFAULT_INDEX_MAX_RETRIES, ge=1)
    index_page_size: int = Field(default=INDEX_PAGE_SIZE, ge=1)

    model_config = ConfigDict(frozen=True)


def get_required_env(key: str) -> str:
    """Get a required environment variable.

    Args:
        key: Environment variable name

    Returns:
        Environment variable value

    Raises:
        ConfigurationError: If the environment variable is not set

    Example:
        ```python
        from src.helpers.config import get_required_env

        node_url = get_required_env("NODE_URL")
        ```
    """
    value = os.getenv(key)
    if not value:
        msg = f"{key} environment variable is not set"
        raise ConfigurationError(msg)
    return value


def get_optional_env(key: str, default: str | None = None) -> str | None:
    """Get an optional environment variable with a default value.

    Args:
        key: Environment variable name
        default: Default value if not set

    Returns:
        Environment variable value or default

    Example:
        ```python
        from src.helpers.config import get_optional_env

        whitelist_path = get_optional_env("WHITELIST_PATH", "./whitelist.yml")
        ```
    """
    return os.getenv(key, default)


def get_required_amount(key: str) -> Decimal:
    """Get a required, non-zero major-unit amount from the environment.

    Args:
        key: Environment variable name

    Returns:
        Parsed amount

    Raises:
        ConfigurationError: If the variable is unset, not a number, or not positive
    """
    raw = get_required_env(key)
    try:
        value = parse_decimal(raw)
    except ValueError as e:
        msg = f"{key} must be a number, got {raw!r}"
        raise ConfigurationError(msg) from e

    if not value.is_finite() or value <= 0:
        msg = f"{key} must be greater than zero, got {raw!r}"
        raise ConfigurationError(msg)
    return value


def get_positive_int(key: str, default: int | None = None) -> int:
    """Get a positive integer from the environment.

    Args:
        key: Environment variable name
        default: Value used when the variable is unset; None makes it required

    Returns:
        Parsed integer

    Raises:
        ConfigurationError: If the variable is missing (without default),
            not an integer, or not positive
    """
    raw = get_optional_env(key)
    if not raw:
        if default is None:
            msg = f"{key} environment variable is not set"
            raise ConfigurationError(msg)
        return default

    try:
        value = int(raw)
    except ValueError as e:
        msg = f"{key} must be an integer, got {raw!r}"
        raise ConfigurationError(msg) from e

    if value <= 0:
        msg = f"{key} must be greater than zero, got {raw!r}"
        raise ConfigurationError(msg)
    return value


def load_run_config(
    *,
    dry_run: bool | None = None,
    address_to_slash: str | None = None,
    whitelist_path: str | None = None,
) -> RunConfig:
    """Build the run configuration from the environment.

    Keyword arguments override the matching environment variables, which
    lets the CLI flags win over `.env`.

    Args:
        dry_run: Override for DRY_RUN
        address_to_slash: Override for FORCED_ADDRESS_TO_SLASH
        whitelist_path: Override for WHITELIST_PATH

    Returns:
        Validated RunConfig

    Raises:
        ConfigurationError: If any required setting is missing or invalid

    Example:
        ```python
        from src.helpers.config import load_run_config

        config = load_run_config(dry_run=True)
        ```
    """
    chain_decimals = get_positive_int("CHAIN_DECIMALS")
    balance_threshold = get_required_amount("BALANCE_THRESHOLD")
    balance_target = get_required_amount("BALANCE_TARGET")
    root_mnemonic = get_required_env("ROOT_MNEMONIC")

    node_url = get_optional_env("NODE_URL")
    stats_api_url = get_optional_env("STATS_API_URL")
    if not node_url or not stats_api_url:
        msg = "NODE_URL and STATS_API_URL environment variables must be set"
        raise ConfigurationError(msg)

    if dry_run is None:
        try:
            dry_run = parse_bool(get_optional_env("DRY_RUN"))
        except ValueError as e:
            msg = f"DRY_RUN is not a valid flag: {e}"
            raise ConfigurationError(msg) from e

    return RunConfig(
        chain_decimals=chain_decimals,
        balance_threshold=balance_threshold,
        balance_target=balance_target,
        node_url=node_url,
        stats_api_url=stats_api_url,
        root_mnemonic=root_mnemonic,
        dry_run=dry_run,
        address_to_slash=address_to_slash
        or get_optional_env("FORCED_ADDRESS_TO_SLASH")
        or None,
        whitelist_path=whitelist_path
        or get_optional_env("WHITELIST_PATH", DEFAULT_WHITELIST_PATH)
        or DEFAULT_WHITELIST_PATH,
        log_level=(get_optional_env("LOG_LEVEL") or "INFO").upper(),
        index_max_retries=get_positive_int(
            "INDEX_MAX_RETRIES", DEFAULT_INDEX_MAX_RETRIES
        ),
        index_page_size=get_positive_int("INDEX_PAGE_SIZE", INDEX_PAGE_SIZE),
    )


__all__ = [
    "RunConfig",
    "get_optional_env",
    "get_positive_int",
    "get_required_amount",
    "get_required_env",
    "load_run_config",
]
