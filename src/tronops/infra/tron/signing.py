"""Local transaction signing."""

import hashlib

from tronpy.keys import PrivateKey

from tronops.domain.address import same_address
from tronops.exceptions import AddressFormatError, SigningError


def owner_address(tx: dict) -> str:
    """owner_address of the first contract in raw_data."""
    try:
        return tx["raw_data"]["contract"][0]["parameter"]["value"]["owner_address"]
    except (KeyError, IndexError, TypeError) as exc:
        raise SigningError("Transaction has no owner_address", payload=tx) from exc


def sign_transaction(tx: dict, signer: PrivateKey) -> dict:
    """Return a copy of `tx` with the signer's signature appended.

    The txID must be sha256(raw_data_hex) and the owner must be the signer.
    """
    txid = tx.get("txID")
    raw_data_hex = tx.get("raw_data_hex")
    if not txid or not raw_data_hex:
        raise SigningError("Transaction is missing txID or raw_data_hex", payload=tx)

    try:
        digest = hashlib.sha256(bytes.fromhex(raw_data_hex)).hexdigest()
    except ValueError as exc:
        raise SigningError("raw_data_hex is not hex", payload=tx) from exc
    if digest != txid.lower():
        raise SigningError(f"txID {txid} does not match raw_data_hex digest {digest}", payload=tx)

    signer_address = signer.public_key.to_base58check_address()
    owner = owner_address(tx)
    try:
        matches = same_address(owner, signer_address)
    except AddressFormatError as exc:
        raise SigningError(f"Bad owner_address {owner!r}", payload=tx) from exc
    if not matches:
        raise SigningError(
            f"Signer {signer_address} is not the transaction owner {owner}", payload=tx
        )

    signature = signer.sign_msg_hash(bytes.fromhex(digest)).hex()
    return {**tx, "signature": [*tx.get("signature", []), signature]}
