"""Common configuration constants used across the application."""

# HTTP and Network Constants
DEFAULT_TIMEOUT = 30.0
"""Default HTTP request timeout in seconds"""

# Retry Configuration
DEFAULT_INDEX_MAX_RETRIES = 1
"""Attempts per index page; 1 means a failed page aborts the scan immediately"""

MAX_RETRIES = 5
"""Default maximum number of retry attempts for the retry decorator"""

RETRY_BASE_DELAY = 1.0
"""Base delay for exponential backoff in seconds"""

RETRY_MAX_DELAY = 60.0
"""Maximum delay between retries in seconds"""

# Index Query Constants
INDEX_PAGE_SIZE = 50
"""Number of accounts requested per index page"""

# Whitelist
DEFAULT_WHITELIST_PATH = "./whitelist.yml"
"""Whitelist location relative to the working directory"""

# Ledger
DRY_RUN_OK = "0x0000"
"""SCALE encoding of ApplyExtrinsicResult::Ok(Ok(()))"""


__all__ = [
    "DEFAULT_INDEX_MAX_RETRIES",
    "DEFAULT_TIMEOUT",
    "DEFAULT_WHITELIST_PATH",
    "DRY_RUN_OK",
    "INDEX_PAGE_SIZE",
    "MAX_RETRIES",
    "RETRY_BASE_DELAY",
    "RETRY_MAX_DELAY",
]
