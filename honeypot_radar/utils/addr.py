# honeypot_radar/utils/addr.py
from web3 import Web3

from honeypot_radar.models import ZERO_ADDRESS


def normalize_evm_address(raw: str) -> str:
    """
    Checksum a user-supplied token address.

    Raises ValueError with a message fit for the report's "error" field;
    truncated explorer copies ("0x1234...abcd") get their own message.
    """
    s = (raw or "").strip()
    if "..." in s:
        raise ValueError("Ellipses ('...') are not allowed. Provide the full 42-char 0x address.")
    if not s.lower().startswith("0x") or len(s) != 42:
        raise ValueError("Invalid address: must be 0x-prefixed and 42 characters long (0x + 40 hex).")
    if not Web3.is_address(s.lower()):
        raise ValueError("Invalid address: not a valid hex string.")
    return Web3.to_checksum_address(s.lower())


def same_address(a: str, b: str) -> bool:
    return (a or "").lower() == (b or "").lower()


def is_zero_address(a: str) -> bool:
    # getPair answers 0x0 when no pool exists
    return not a or same_address(a, ZERO_ADDRESS)
