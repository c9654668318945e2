"""Data types for the transfer pipeline."""

from decimal import Decimal
from typing import Any

from pydantic import BaseModel, Field

from tronops.domain import abi


class TransferRequest(BaseModel):
    """One TRC20 transfer: who pays, who receives, which token, how much."""

    from_address: str
    to_address: str
    token_contract: str
    amount: Decimal  # human units, e.g. Decimal("4") USDT
    decimals: int = 6
    symbol: str = "USDT"
    fee_limit: int = 20_000_000  # sun


class ContractCall(BaseModel):
    """A smart-contract invocation ready for the node's trigger endpoint."""

    contract_address: str
    function_selector: str
    arguments: list[tuple[str, Any]]  # (abi_type, value) in signature order
    owner_address: str
    fee_limit: int
    call_value: int = 0

    def parameter(self) -> str:
        """ABI blob for `arguments`; types must mirror the selector."""
        types = [t for t, _ in self.arguments]
        expected = abi.selector_types(self.function_selector)
        if types != expected:
            raise ValueError(f"Arguments {types} do not match {self.function_selector}")
        return abi.encode_arguments(self.arguments)

    def to_payload(self) -> dict[str, Any]:
        return {
            "owner_address": self.owner_address,
            "contract_address": self.contract_address,
            "function_selector": self.function_selector,
            "parameter": self.parameter(),
            "fee_limit": self.fee_limit,
            "call_value": self.call_value,
            "visible": True,
        }


class TransferReceipt(BaseModel):
    """Terminal artifact of a successful broadcast. Not persisted."""

    txid: str
    transaction: dict[str, Any] = Field(default_factory=dict)
    broadcast: dict[str, Any] = Field(default_factory=dict)
