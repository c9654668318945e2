"""Signing-key loading: BIP39 mnemonic -> BIP44 Tron key, or a raw hex key."""

import logging
import string

from bip_utils import (
    Bip32KeyError,
    Bip39MnemonicValidator,
    Bip39SeedGenerator,
    Bip44,
    Bip44Changes,
    Bip44Coins,
)
from tronpy.exceptions import BadKey
from tronpy.keys import PrivateKey

from tronops.config import Settings
from tronops.exceptions import CredentialDerivationError

logger = logging.getLogger(__name__)

TRON_COIN_TYPE = 195


def derivation_path(account: int, index: int) -> str:
    return f"m/44'/{TRON_COIN_TYPE}'/{account}'/0/{index}"


def normalize_private_key(key_hex: str) -> str:
    """Strip an optional ``0x`` prefix and lowercase; must be 32 bytes of hex."""
    key = key_hex.strip()
    if key[:2].lower() == "0x":
        key = key[2:]
    key = key.lower()
    if len(key) != 64 or any(c not in string.hexdigits for c in key):
        raise CredentialDerivationError("Private key must be 64 hex characters")
    return key


def derive_private_key(
    mnemonic: str,
    account: int = 0,
    index: int = 0,
    passphrase: str = "",
    word_count: int | None = 24,
) -> str:
    """Derive the Tron private key (hex, no ``0x``) at m/44'/195'/account'/0/index."""
    words = mnemonic.split()
    if word_count is not None and len(words) != word_count:
        raise CredentialDerivationError(f"Mnemonic must have {word_count} words, got {len(words)}")

    phrase = " ".join(words)
    if not Bip39MnemonicValidator().IsValid(phrase):
        raise CredentialDerivationError("Mnemonic failed BIP39 validation")

    try:
        seed = Bip39SeedGenerator(phrase).Generate(passphrase)
        node = (
            Bip44.FromSeed(seed, Bip44Coins.TRON)
            .Purpose()
            .Coin()
            .Account(account)
            .Change(Bip44Changes.CHAIN_EXT)
            .AddressIndex(index)
        )
    except (Bip32KeyError, ValueError) as exc:
        raise CredentialDerivationError(f"Key derivation failed: {exc}") from exc

    return normalize_private_key(node.PrivateKey().Raw().ToHex())


def load_signer(settings: Settings) -> PrivateKey:
    """Build the signing key from settings. A raw private key wins over a mnemonic."""
    raw_key = settings.tron_private_key.get_secret_value()
    mnemonic = settings.tron_mnemonic.get_secret_value()

    if raw_key:
        key_hex = normalize_private_key(raw_key)
        source = "private key"
    elif mnemonic:
        key_hex = derive_private_key(
            mnemonic,
            account=settings.tron_derivation_account,
            index=settings.tron_derivation_index,
            passphrase=settings.tron_mnemonic_passphrase.get_secret_value(),
            word_count=settings.tron_mnemonic_words,
        )
        source = derivation_path(settings.tron_derivation_account, settings.tron_derivation_index)
    else:
        raise CredentialDerivationError("Set TRON_MNEMONIC or TRON_PRIVATE_KEY")

    try:
        signer = PrivateKey(bytes.fromhex(key_hex))
    except (BadKey, ValueError) as exc:
        raise CredentialDerivationError(f"Unusable private key: {exc}") from exc

    logger.info("Signer %s loaded from %s", signer.public_key.to_base58check_address(), source)
    return signer
