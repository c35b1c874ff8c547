"""Load the operator whitelist from YAML."""

from pathlib import Path

from pydantic import TypeAdapter, ValidationError
import yaml

from src.helpers.constants import DEFAULT_WHITELIST_PATH
from src.helpers.logging import get_logger
from src.slash.errors import WhitelistParseError
from src.slash.models import WhitelistEntry


logger = get_logger(__name__)

_whitelist_adapter = TypeAdapter(list[WhitelistEntry])


def load_whitelist(path: str | Path = DEFAULT_WHITELIST_PATH) -> list[WhitelistEntry]:
    """Load whitelist entries from a YAML file.

    The file is a list of mappings with ``name``, ``address`` and an optional
    ``maxBalance`` in major units:

        - name: treasury
          address: 5GrwvaEF5zXb26Fz9rcQpDWS57CtERHpNehXCPcNoHGKutQY
        - name: faucet
          address: 5FHneW46xGXgs5mUiveU4sbTyGBzmstUspZC92UhjJM694ty
          maxBalance: 1000

    A missing file is not an error: nothing is excluded. A file that exists
    but does not have this shape aborts the run.

    Args:
        path: Whitelist file location

    Returns:
        Whitelist entries in file order

    Raises:
        WhitelistParseError: If the file cannot be read or is malformed
    """
    whitelist_path = Path(path)
    if not whitelist_path.exists():
        logger.debug("Whitelist %s not found", whitelist_path)
        return []

    try:
        raw = yaml.safe_load(whitelist_path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError) as e:
        msg = f"Could not read whitelist {whitelist_path}: {e}"
        raise WhitelistParseError(msg) from e
    except yaml.YAMLError as e:
        msg = f"Whitelist {whitelist_path} is not valid YAML: {e}"
        raise WhitelistParseError(msg) from e

    if raw is None:
        logger.debug("Whitelist %s is empty", whitelist_path)
        return []

    if not isinstance(raw, list):
        msg = f"Whitelist {whitelist_path} must be a list of entries"
        raise WhitelistParseError(msg)

    try:
        whitelist = _whitelist_adapter.validate_python(raw)
    except ValidationError as e:
        msg = f"Whitelist {whitelist_path} has the wrong format: {e}"
        raise WhitelistParseError(msg) from e

    logger.debug("Got whitelist with %d entries", len(whitelist))
    return whitelist


__all__ = ["load_whitelist"]
