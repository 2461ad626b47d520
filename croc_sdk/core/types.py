"""Token quantity types and CrocSwap protocol constants"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from enum import IntEnum
from typing import Union

from .exceptions import QuantityError

# Native ETH is represented by address zero in CrocSwap
ADDRESS_ZERO = "0x0000000000000000000000000000000000000000"

# Reported as the allowance of native ETH, which never needs approval
MAX_LIQ = 2 ** 128 - 1

# Lots of 0 bytes in calldata to save gas
APPROVAL_QTY = 2 ** 120

# userCmd callpath of the cold path proxy, which handles surplus collateral
COLD_PROXY_PATH = 0

NATIVE_DECIMALS = 18


class SurplusCode(IntEnum):
    """Cold path sub-commands that move surplus collateral"""

    DEPOSIT = 73
    WITHDRAW = 74
    TRANSFER = 75


@dataclass(frozen=True)
class WeiQty:
    """Exact amount in the token's smallest unit"""

    value: int

    def __post_init__(self):
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            raise QuantityError(f"Wei quantity must be an int, got {self.value!r}")
        if self.value < 0:
            raise QuantityError(f"Negative quantity: {self.value}")


@dataclass(frozen=True)
class DisplayQty:
    """Human readable decimal amount, e.g. "1.5" ETH"""

    value: str

    def __post_init__(self):
        if not isinstance(self.value, str):
            raise QuantityError(f"Display quantity must be text, got {self.value!r}")

    def __str__(self):
        return self.value


TokenQty = Union[WeiQty, DisplayQty, int, str, float, Decimal]


def as_token_qty(qty: TokenQty) -> Union[WeiQty, DisplayQty]:
    """
    Coerce a raw value into one of the two quantity variants.

    Plain ints are full wei values. Strings, floats and Decimals are
    decimal-normed display values, so 1 ETH is either 10**18, "1.0" or 1.0.
    """
    if isinstance(qty, (WeiQty, DisplayQty)):
        return qty
    if isinstance(qty, bool):
        raise QuantityError(f"Not a token quantity: {qty!r}")
    if isinstance(qty, int):
        return WeiQty(qty)
    if isinstance(qty, (str, float, Decimal)):
        return DisplayQty(str(qty))
    raise QuantityError(f"Not a token quantity: {qty!r}")
