import hashlib

import pytest
from tronpy.keys import PrivateKey

USDT_CONTRACT = "TR7NHqjeKQxGTCi8q8ZY4pL8otSzgjLj6t"
USDT_CONTRACT_HEX = "41a614f803b6fd780986a42c78ec9c7f77e6ded13c"
DESTINATION = "TYnTHdrVK1h6RoVwAmNEhYHXJu4Fhf7c8W"

SIGNER_KEY_HEX = "11" * 32

RAW_DATA_HEX = "0a0207e722086f4c2d9e6a1b3c5d40e8b3d6a5e5315aae01081f12a9010a31747970652e676f6f676c65617069732e636f6d"


@pytest.fixture()
def signer() -> PrivateKey:
    return PrivateKey(bytes.fromhex(SIGNER_KEY_HEX))


@pytest.fixture()
def signer_address(signer) -> str:
    return signer.public_key.to_base58check_address()


def build_transaction(owner: str, raw_data_hex: str = RAW_DATA_HEX) -> dict:
    """Unsigned transaction shaped like a triggersmartcontract response (visible=true)."""
    return {
        "visible": True,
        "txID": hashlib.sha256(bytes.fromhex(raw_data_hex)).hexdigest(),
        "raw_data": {
            "contract": [
                {
                    "parameter": {
                        "value": {
                            "data": "a9059cbb",
                            "owner_address": owner,
                            "contract_address": USDT_CONTRACT,
                        },
                        "type_url": "type.googleapis.com/protocol.TriggerSmartContract",
                    },
                    "type": "TriggerSmartContract",
                }
            ],
            "fee_limit": 20_000_000,
        },
        "raw_data_hex": raw_data_hex,
    }


@pytest.fixture()
def unsigned_tx(signer_address) -> dict:
    return build_transaction(signer_address)
