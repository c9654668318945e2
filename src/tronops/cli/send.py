"""Send a TRC20 token transfer via direct contract invocation.

Usage:
    tronops-send                      # everything from env / .env
    tronops-send --to T... --amount 4
    tronops-send --dry-run            # simulate only, no signing or broadcast

Credentials come from TRON_MNEMONIC (+ TRON_DERIVATION_INDEX) or
TRON_PRIVATE_KEY. Exit code 0 on an accepted broadcast, 1 on any failure.
"""

import argparse
import asyncio
import json
import logging
from decimal import Decimal, InvalidOperation

from tronops.config import Settings
from tronops.container import Container
from tronops.domain.models import TransferRequest
from tronops.exceptions import AmountPrecisionError, TronOpsError

logger = logging.getLogger("tronops.send")


def _decimal_arg(value: str) -> Decimal:
    try:
        return Decimal(value)
    except InvalidOperation:
        raise argparse.ArgumentTypeError(f"not a decimal amount: {value!r}")


def build_request(settings: Settings, to_address: str | None = None, amount: Decimal | None = None) -> TransferRequest:
    amount = settings.tron_amount if amount is None else amount
    if not amount.is_finite() or amount <= 0:
        raise AmountPrecisionError(f"Transfer amount must be positive, got {amount}")
    return TransferRequest(
        from_address=settings.tron_from_address,
        to_address=to_address or settings.tron_to_address,
        token_contract=settings.tron_token_contract,
        amount=amount,
        decimals=settings.tron_token_decimals,
        symbol=settings.tron_token_symbol,
        fee_limit=settings.tron_fee_limit_sun,
    )


async def run_transfer(
    container: Container,
    to_address: str | None = None,
    amount: Decimal | None = None,
    dry_run: bool = False,
) -> int:
    settings = container.settings()
    try:
        request = build_request(settings, to_address, amount)
        signer = container.signer()

        async with container.http_client():
            invoker = container.transfer_invoker(signer=signer)
            if dry_run:
                transaction = await invoker.dry_run(request)
                print(json.dumps(transaction, indent=2))
                print(f"\n   Simulation OK, txID {transaction.get('txID')} (not signed, not broadcast)")
                return 0

            receipt = await invoker.run(request)
    except TronOpsError as exc:
        logger.error("%s: %s", type(exc).__name__, exc)
        if exc.payload is not None:
            logger.error("Details: %s", json.dumps(exc.payload, default=str))
        return 1
    except Exception:
        logger.exception("Transfer failed")
        return 1

    print(f"\n   TX ID: {receipt.txid}")
    print(f"   View:  {settings.explorer_url(receipt.txid)}")
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Send a TRC20 transfer via triggersmartcontract.")
    parser.add_argument("--to", help="Destination address (overrides TRON_TO_ADDRESS)")
    parser.add_argument("--amount", type=_decimal_arg, help="Amount in token units (overrides TRON_AMOUNT)")
    parser.add_argument("--dry-run", action="store_true", help="Simulate only; do not sign or broadcast")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)-5s %(name)s - %(message)s")
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)

    container = Container()
    return asyncio.run(run_transfer(container, to_address=args.to, amount=args.amount, dry_run=args.dry_run))


if __name__ == "__main__":
    raise SystemExit(main())
