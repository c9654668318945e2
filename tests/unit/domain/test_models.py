from decimal import Decimal

import pytest

from tronops.domain.abi import TRANSFER_SELECTOR, encode_transfer
from tronops.domain.models import ContractCall, TransferRequest

from conftest import DESTINATION, USDT_CONTRACT


def _call(**overrides) -> ContractCall:
    fields = {
        "contract_address": USDT_CONTRACT,
        "function_selector": TRANSFER_SELECTOR,
        "arguments": [("address", DESTINATION), ("uint256", 4_000_000)],
        "owner_address": "TKRRiqco4M5ryEb1YmjtzwdRZyAS1mArQk",
        "fee_limit": 20_000_000,
    }
    fields.update(overrides)
    return ContractCall(**fields)


class TestContractCall:
    def test_parameter_matches_transfer_encoding(self):
        assert _call().parameter() == encode_transfer(DESTINATION, 4_000_000)

    def test_argument_types_must_mirror_selector(self):
        call = _call(arguments=[("uint256", 4_000_000), ("address", DESTINATION)])
        with pytest.raises(ValueError, match="do not match"):
            call.parameter()

    def test_payload(self):
        payload = _call().to_payload()
        assert payload["contract_address"] == USDT_CONTRACT
        assert payload["function_selector"] == "transfer(address,uint256)"
        assert payload["owner_address"] == "TKRRiqco4M5ryEb1YmjtzwdRZyAS1mArQk"
        assert payload["fee_limit"] == 20_000_000
        assert payload["call_value"] == 0
        assert payload["visible"] is True
        assert len(payload["parameter"]) == 128


class TestTransferRequest:
    def test_defaults(self):
        req = TransferRequest(
            from_address="TKRRiqco4M5ryEb1YmjtzwdRZyAS1mArQk",
            to_address=DESTINATION,
            token_contract=USDT_CONTRACT,
            amount="4",
        )
        assert req.amount == Decimal("4")
        assert req.decimals == 6
        assert req.symbol == "USDT"
        assert req.fee_limit == 20_000_000
