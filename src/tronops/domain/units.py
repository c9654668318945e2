"""Human <-> atomic token amount conversion.

Scaling is done on the decimal digits as integers, so no context
precision applies and nothing is ever rounded.
"""

from decimal import Decimal, InvalidOperation

from tronops.domain.abi import UINT256_MAX
from tronops.exceptions import AmountPrecisionError

_MAX_DIGITS = len(str(UINT256_MAX))


def to_atomic(amount: Decimal | int | str, decimals: int) -> int:
    """Scale a human amount to atomic units.

    Fractional digits beyond `decimals` are rejected, never rounded.
    """
    try:
        value = Decimal(str(amount))
    except InvalidOperation as exc:
        raise AmountPrecisionError(f"Not a number: {amount!r}") from exc

    if not value.is_finite():
        raise AmountPrecisionError(f"Not a finite amount: {amount!r}")
    if value < 0:
        raise AmountPrecisionError(f"Amount must be non-negative: {amount}")

    _, digits, exponent = value.as_tuple()
    coefficient = int("".join(map(str, digits)))
    if coefficient == 0:
        return 0

    shift = exponent + decimals
    if shift >= 0:
        if len(str(coefficient)) + shift > _MAX_DIGITS:
            raise AmountPrecisionError(f"Amount {amount} does not fit in uint256")
        atomic = coefficient * 10**shift
    else:
        atomic, remainder = divmod(coefficient, 10**-shift)
        if remainder:
            raise AmountPrecisionError(
                f"Amount {amount} has more than {decimals} fractional digits"
            )

    if atomic > UINT256_MAX:
        raise AmountPrecisionError(f"Amount {amount} does not fit in uint256")
    return atomic


def from_atomic(atomic: int, decimals: int) -> Decimal:
    sign = 1 if atomic < 0 else 0
    digits = tuple(int(d) for d in str(abs(atomic)))
    return Decimal((sign, digits, -decimals))
