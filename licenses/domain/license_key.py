"""
License key format.

Keys look like ``PACK-1A2B-3C4D-5E6F-7A8B``: a prefix followed by 16
uppercase hex digits from a CSPRNG in four groups of four.
"""

import re
import secrets
from typing import Any, Optional

KEY_BYTES = 8
GROUP_SIZE = 4
DEFAULT_PREFIX = "PACK"

_PREFIX_PATTERN = re.compile(r"^[A-Z0-9]+$")
_KEY_PATTERN = re.compile(r"^[A-Z0-9]+(-[0-9A-F]{4}){4}$")


def normalize_key_prefix(prefix: str) -> str:
    """
    Upper-case a configured key prefix and check that keys minted with
    it can be looked up again.

    Raises:
        ValueError: If the prefix is not alphanumeric
    """
    normalized = (prefix or "").strip().upper()
    if not _PREFIX_PATTERN.match(normalized):
        raise ValueError(f"License key prefix must be alphanumeric, got {prefix!r}")
    return normalized


def generate_license_key(prefix: str = DEFAULT_PREFIX) -> str:
    """
    Generate a license key in format: PREFIX-XXXX-XXXX-XXXX-XXXX.

    Args:
        prefix: Key prefix (e.g., 'PACK')

    Returns:
        Generated license key string
    """
    digits = secrets.token_hex(KEY_BYTES).upper()
    groups = [digits[i : i + GROUP_SIZE] for i in range(0, len(digits), GROUP_SIZE)]
    return f"{prefix}-{'-'.join(groups)}"


def normalize_license_key(value: Any) -> Optional[str]:
    """
    Normalise a license key taken from user input.

    Surrounding whitespace is dropped and the key upper-cased. Input
    that cannot be a key (wrong type, wrong shape) yields None.
    """
    if not isinstance(value, str):
        return None
    key = value.strip().upper()
    if not _KEY_PATTERN.match(key):
        return None
    return key


def key_prefix_for_logs(key: str) -> str:
    """First two groups of a key, enough to correlate log lines."""
    return "-".join(key.split("-")[:2])
