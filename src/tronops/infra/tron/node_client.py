"""Tron full-node HTTP API client (TronGrid-compatible): trigger + broadcast.

Each call is a single attempt.
"""

import logging

from tronops.domain.models import ContractCall
from tronops.infra.http.client import RateLimitedClient

logger = logging.getLogger(__name__)

TRIGGER_PATH = "/wallet/triggersmartcontract"
BROADCAST_PATH = "/wallet/broadcasttransaction"


def decode_node_message(message: str | None) -> str:
    """Node error messages arrive hex-encoded; fall back to the raw text."""
    if not message:
        return ""
    try:
        return bytes.fromhex(message).decode("utf-8", errors="replace")
    except ValueError:
        return message


class TronNodeClient:
    def __init__(self, http_client: RateLimitedClient) -> None:
        self._http = http_client

    async def trigger_smart_contract(self, call: ContractCall) -> dict:
        """Simulate and build a contract call.

        Returns the node response: ``{"result": {"result": true}, "transaction": {...}}``
        on success, ``{"result": {"code": ..., "message": <hex>}}`` on rejection.
        """
        payload = call.to_payload()
        logger.debug("triggersmartcontract %s %s", call.contract_address, call.function_selector)
        return await self._http.post_json(TRIGGER_PATH, payload)

    async def broadcast_transaction(self, signed_tx: dict) -> dict:
        """Submit a signed transaction.

        Returns ``{"result": true, "txid": ...}`` when accepted,
        ``{"code": ..., "message": <hex>, "txid": ...}`` when rejected.
        """
        logger.debug("broadcasttransaction %s", signed_tx.get("txID"))
        return await self._http.post_json(BROADCAST_PATH, signed_tx)
