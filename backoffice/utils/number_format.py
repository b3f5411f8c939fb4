"""Number parsing utilities for prices, percentages and quantities."""
import math
from decimal import Decimal, InvalidOperation
from typing import Any, Optional

from backoffice.exceptions import InvalidInputError


def to_decimal(value: Any, field: str = 'value') -> Decimal:
    """
    Strictly convert an admin-entered number to Decimal.

    Accepts int, float, Decimal and numeric strings ("1,250.50" is allowed,
    commas are treated as thousands separators). Floats go through str() so
    that 0.1 stays 0.1.

    Raises:
        InvalidInputError: if the value is missing, boolean, not numeric,
        NaN or infinite.
    """
    if value is None or isinstance(value, bool):
        raise InvalidInputError(f'{field} must be a number')

    if isinstance(value, Decimal):
        result = value
    else:
        if isinstance(value, float) and not math.isfinite(value):
            raise InvalidInputError(f'{field} must be a finite number')
        cleaned = str(value).strip().replace(',', '')
        if not cleaned:
            raise InvalidInputError(f'{field} must be a number')
        try:
            result = Decimal(cleaned)
        except (InvalidOperation, ValueError):
            raise InvalidInputError(f'{field} must be a number')

    if not result.is_finite():
        raise InvalidInputError(f'{field} must be a finite number')
    return result


def coerce_decimal(value: Any, default: Optional[Decimal] = None) -> Optional[Decimal]:
    """
    Lenient conversion used when reading stored snapshots.

    Returns `default` instead of raising when the value is missing or garbage.
    """
    if value is None or value == '' or isinstance(value, bool):
        return default
    try:
        return to_decimal(value)
    except InvalidInputError:
        return default


def coerce_int(value: Any, default: int) -> int:
    """Whole quantity from a snapshot; non-positive or garbage values give `default`."""
    number = coerce_decimal(value)
    if number is None:
        return default
    quantity = int(number)
    return quantity if quantity >= 1 else default
