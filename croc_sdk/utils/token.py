"""Conversions between wei and display quantities"""

from decimal import Decimal, InvalidOperation, ROUND_DOWN, localcontext

from ..core.exceptions import QuantityError

# Widest value any on-chain amount can take (uint256)
MAX_DIGITS = 78


def to_display_qty(wei_qty, decimals):
    """
    Format a wei amount as a decimal string.

    Keeps at least one fractional digit and strips trailing zeros, so
    1500000 at 6 decimals is "1.5" and 10**18 at 18 decimals is "1.0".
    """
    wei_qty = int(wei_qty)
    if wei_qty < 0:
        raise QuantityError(f"Negative quantity: {wei_qty}")
    whole, frac = divmod(wei_qty, 10 ** decimals)
    frac_str = str(frac).rjust(decimals, "0").rstrip("0") if decimals else ""
    return f"{whole}.{frac_str or '0'}"


def from_display_qty(qty, decimals):
    """
    Parse a decimal string into a wei amount.

    Digits beyond the token's precision are truncated, not rounded.

    Raises:
        QuantityError: if qty is not a finite, non-negative decimal that
            fits in a uint256 once scaled
    """
    text = str(qty).strip()
    try:
        value = Decimal(text)
    except InvalidOperation:
        raise QuantityError(f"Invalid decimal quantity: {qty!r}")
    if not value.is_finite():
        raise QuantityError(f"Invalid decimal quantity: {qty!r}")
    if value < 0:
        raise QuantityError(f"Negative quantity: {qty!r}")
    if value and value.adjusted() + decimals >= MAX_DIGITS:
        raise QuantityError(f"Quantity too large: {qty!r}")

    try:
        # Default context precision (28 digits) would round large uint128 values
        with localcontext() as ctx:
            ctx.prec = max(MAX_DIGITS, len(text) + decimals)
            scaled = value.scaleb(decimals).to_integral_value(rounding=ROUND_DOWN)
    except ArithmeticError:
        raise QuantityError(f"Quantity out of range: {qty!r}")
    return int(scaled)
