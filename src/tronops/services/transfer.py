"""TRC20 transfer via direct contract invocation.

Goes through triggersmartcontract instead of the node's token-transfer
helpers, which some full nodes reject with "account does not exist" for
accounts they have not synced yet.

Strictly linear: encode -> build (simulate) -> sign -> broadcast, with the
signer derived before the invoker exists. The first failure ends the run.
Nothing is retried or deduplicated; running twice sends twice.
"""

import json
import logging

from tronpy.keys import PrivateKey

from tronops.domain import abi, address, units
from tronops.domain.models import ContractCall, TransferReceipt, TransferRequest
from tronops.exceptions import BroadcastError, ContractCallBuildError, ExternalServiceError
from tronops.infra.tron.node_client import TronNodeClient, decode_node_message
from tronops.infra.tron.signing import sign_transaction

logger = logging.getLogger(__name__)


def _with_decoded_message(result: dict) -> dict:
    if isinstance(result, dict) and result.get("message"):
        return {**result, "message": decode_node_message(result["message"])}
    return result


class TransferInvoker:
    def __init__(self, node: TronNodeClient, signer: PrivateKey) -> None:
        self._node = node
        self._signer = signer

    def prepare_call(self, request: TransferRequest) -> ContractCall:
        """Validate inputs and build the `transfer(address,uint256)` call."""
        from_address = address.to_base58(request.from_address)
        to_hex = address.to_hex(request.to_address)
        contract = address.to_base58(request.token_contract)
        atomic = units.to_atomic(request.amount, request.decimals)

        logger.info("From : %s", from_address)
        logger.info("To   : %s (hex: %s)", address.to_base58(to_hex), to_hex)

        return ContractCall(
            contract_address=contract,
            function_selector=abi.TRANSFER_SELECTOR,
            arguments=[("address", to_hex), ("uint256", atomic)],
            owner_address=from_address,
            fee_limit=request.fee_limit,
        )

    async def build(self, call: ContractCall) -> dict:
        """Simulate the call on the node; return the unsigned transaction."""
        response = await self._node.trigger_smart_contract(call)
        result = response.get("result")
        if not isinstance(result, dict):
            result = {}
        transaction = response.get("transaction")
        if not result.get("result") or not transaction:
            detail = _with_decoded_message(result)
            raise ContractCallBuildError(
                f"triggersmartcontract rejected the call: {detail.get('message') or detail.get('code') or 'no result'}",
                payload=detail or response,
            )
        return transaction

    def sign(self, transaction: dict) -> dict:
        return sign_transaction(transaction, self._signer)

    async def broadcast(self, signed: dict) -> TransferReceipt:
        try:
            response = await self._node.broadcast_transaction(signed)
        except ExternalServiceError as exc:
            raise BroadcastError(f"Broadcast failed: {exc}", payload=exc.payload) from exc

        logger.info("Broadcast result: %s", json.dumps(response, indent=2))

        code = response.get("code")
        rejected = response.get("result") is False or (code is not None and code != "SUCCESS")
        if rejected or not (response.get("result") is True or response.get("txid")):
            detail = _with_decoded_message(response)
            raise BroadcastError(
                f"Node rejected the transaction: {detail.get('code', 'unknown')} {detail.get('message', '')}".rstrip(),
                payload=detail,
            )

        txid = response.get("txid") or (response.get("transaction") or {}).get("txID") or signed.get("txID")
        if not txid:
            raise BroadcastError("Broadcast accepted but no transaction id returned", payload=response)
        return TransferReceipt(txid=txid, transaction=signed, broadcast=response)

    async def run(self, request: TransferRequest) -> TransferReceipt:
        call = self.prepare_call(request)
        logger.info("Sending %s %s via triggersmartcontract", request.amount, request.symbol)
        transaction = await self.build(call)
        signed = self.sign(transaction)
        return await self.broadcast(signed)

    async def dry_run(self, request: TransferRequest) -> dict:
        """Validate and simulate only. Returns the unsigned transaction."""
        call = self.prepare_call(request)
        logger.info("Simulating %s %s via triggersmartcontract", request.amount, request.symbol)
        return await self.build(call)
