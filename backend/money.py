# backend/money.py
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP

CENT = Decimal("0.01")
ZERO = Decimal("0")


def to_decimal(value):
    """Convert a JSON number or numeric string to Decimal without float noise."""
    if isinstance(value, Decimal):
        amount = value
    elif isinstance(value, (int, float, str)) and not isinstance(value, bool):
        try:
            # str() first so 0.1 becomes Decimal("0.1"), not its binary expansion
            amount = Decimal(str(value).strip())
        except InvalidOperation as e:
            raise ValueError(f"not a money amount: {value!r}") from e
    else:
        raise ValueError(f"not a money amount: {value!r}")

    if not amount.is_finite():
        raise ValueError(f"not a money amount: {value!r}")
    return amount


def round_money(value):
    """Round to 2 decimal places, half-up. Applied at every computation boundary."""
    return to_decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)


def money_to_json(value):
    return float(round_money(value))
