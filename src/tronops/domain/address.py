"""Tron address conversion.

Two forms matter: base58check (``T...``) and 21-byte hex with the ``41``
mainnet prefix. ABI fields carry only the 20-byte body.
"""

from tronpy.exceptions import BadAddress
from tronpy.keys import to_base58check_address, to_hex_address

from tronops.exceptions import AddressFormatError

MAINNET_PREFIX = "41"
HEX_LENGTH = 42  # prefix byte + 20-byte body


def to_hex(address: str) -> str:
    """Return the ``41``-prefixed hex form of a base58 or hex address."""
    if not isinstance(address, str) or not address.strip():
        raise AddressFormatError(f"Invalid Tron address: {address!r}")
    try:
        hex_addr = to_hex_address(address.strip()).lower()
    except (BadAddress, ValueError) as exc:
        raise AddressFormatError(f"Invalid Tron address: {address!r}") from exc

    if len(hex_addr) != HEX_LENGTH or not hex_addr.startswith(MAINNET_PREFIX):
        raise AddressFormatError(f"Not a Tron mainnet address: {address!r}")
    return hex_addr


def to_base58(address: str) -> str:
    """Canonical base58check form of any accepted address."""
    return to_base58check_address(to_hex(address))


def abi_body(address: str) -> str:
    """20-byte hex body with the network prefix stripped."""
    return to_hex(address)[len(MAINNET_PREFIX):]


def same_address(a: str, b: str) -> bool:
    return to_hex(a) == to_hex(b)
