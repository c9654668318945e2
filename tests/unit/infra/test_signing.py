import pytest
from tronpy.keys import PrivateKey

from tronops.domain.address import to_hex
from tronops.exceptions import SigningError
from tronops.infra.tron.signing import owner_address, sign_transaction

from conftest import DESTINATION, build_transaction


class TestSignTransaction:
    def test_appends_one_signature(self, signer, unsigned_tx):
        signed = sign_transaction(unsigned_tx, signer)
        assert len(signed["signature"]) == 1
        assert len(signed["signature"][0]) == 130  # r, s, v

    def test_does_not_mutate_input(self, signer, unsigned_tx):
        sign_transaction(unsigned_tx, signer)
        assert "signature" not in unsigned_tx

    def test_keeps_transaction_fields(self, signer, unsigned_tx):
        signed = sign_transaction(unsigned_tx, signer)
        assert signed["txID"] == unsigned_tx["txID"]
        assert signed["raw_data"] == unsigned_tx["raw_data"]

    def test_signature_is_deterministic(self, signer, unsigned_tx):
        assert sign_transaction(unsigned_tx, signer)["signature"] == sign_transaction(unsigned_tx, signer)["signature"]

    def test_hex_owner_address_accepted(self, signer, signer_address):
        tx = build_transaction(to_hex(signer_address))
        assert len(sign_transaction(tx, signer)["signature"]) == 1

    def test_txid_mismatch(self, signer, unsigned_tx):
        unsigned_tx["txID"] = "00" * 32
        with pytest.raises(SigningError, match="does not match"):
            sign_transaction(unsigned_tx, signer)

    def test_owner_mismatch(self, signer):
        tx = build_transaction(DESTINATION)
        with pytest.raises(SigningError, match="not the transaction owner"):
            sign_transaction(tx, signer)

    def test_other_key_rejected(self, unsigned_tx):
        other = PrivateKey(bytes.fromhex("22" * 32))
        with pytest.raises(SigningError):
            sign_transaction(unsigned_tx, other)

    def test_missing_fields(self, signer):
        with pytest.raises(SigningError, match="missing"):
            sign_transaction({"raw_data": {}}, signer)

    def test_raw_data_not_hex(self, signer, unsigned_tx):
        unsigned_tx["raw_data_hex"] = "xyz"
        with pytest.raises(SigningError, match="not hex"):
            sign_transaction(unsigned_tx, signer)

    def test_error_carries_transaction(self, signer, unsigned_tx):
        unsigned_tx["txID"] = "00" * 32
        with pytest.raises(SigningError) as exc_info:
            sign_transaction(unsigned_tx, signer)
        assert exc_info.value.payload is unsigned_tx


class TestOwnerAddress:
    def test_extracts_owner(self, unsigned_tx, signer_address):
        assert owner_address(unsigned_tx) == signer_address

    def test_missing_contract(self):
        with pytest.raises(SigningError):
            owner_address({"raw_data": {"contract": []}})
