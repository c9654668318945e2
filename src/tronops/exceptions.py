"""Error taxonomy. Every error is terminal for a run; the CLI maps them to exit code 1."""

from typing import Any


class TronOpsError(Exception):
    """Base error. `payload` holds the raw remote response when there is one."""

    def __init__(self, message: str, payload: Any = None) -> None:
        super().__init__(message)
        self.payload = payload


class ExternalServiceError(TronOpsError):
    """Transport or HTTP-status failure talking to a remote service."""


class TransferError(TronOpsError):
    pass


class CredentialDerivationError(TransferError):
    pass


class AddressFormatError(TransferError, ValueError):
    pass


class AmountPrecisionError(TransferError, ValueError):
    pass


class ContractCallBuildError(TransferError):
    """The node's simulation rejected the contract call."""


class SigningError(TransferError):
    pass


class BroadcastError(TransferError):
    pass


class BootstrapError(TronOpsError):
    """Replica-set bootstrap could not reach the desired state."""
