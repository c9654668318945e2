"""Minimal ABI encoder for static `address` / `uint256` arguments.

Each argument occupies one 32-byte word, right-aligned and zero-padded.
Tron addresses lose their ``41`` prefix byte; the word holds only the
20-byte body.
"""

from collections.abc import Sequence

from tronops.domain import address as addr

WORD_HEX_CHARS = 64
UINT256_MAX = 2**256 - 1

TRANSFER_SELECTOR = "transfer(address,uint256)"


def encode_address(address: str) -> str:
    return addr.abi_body(address).rjust(WORD_HEX_CHARS, "0")


def encode_uint256(value: int) -> str:
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"uint256 expects int, got {type(value).__name__}")
    if value < 0 or value > UINT256_MAX:
        raise ValueError(f"uint256 out of range: {value}")
    return format(value, "x").rjust(WORD_HEX_CHARS, "0")


_ENCODERS = {
    "address": encode_address,
    "uint256": encode_uint256,
}


def encode_arguments(args: Sequence[tuple[str, object]]) -> str:
    """Encode a typed argument list ``[(abi_type, value), ...]`` in order."""
    words = []
    for abi_type, value in args:
        encoder = _ENCODERS.get(abi_type)
        if encoder is None:
            raise ValueError(f"Unsupported ABI type: {abi_type}")
        words.append(encoder(value))  # type: ignore[operator]
    return "".join(words)


def selector_types(function_selector: str) -> list[str]:
    """``transfer(address,uint256)`` -> ``["address", "uint256"]``."""
    open_idx = function_selector.find("(")
    if open_idx <= 0 or not function_selector.endswith(")"):
        raise ValueError(f"Malformed function selector: {function_selector}")
    inner = function_selector[open_idx + 1:-1]
    return [t.strip() for t in inner.split(",")] if inner else []


def encode_transfer(to_address: str, atomic_amount: int) -> str:
    """Parameter blob for ``transfer(address,uint256)``: 128 hex chars."""
    return encode_arguments([("address", to_address), ("uint256", atomic_amount)])
