"""Core module - configuration, connection, exceptions, and shared types"""

from .config import Config
from .connection import CrocContext
from .exceptions import CrocError, ConfigError, ConnectionError, TransactionError, QuantityError
from .types import ADDRESS_ZERO, MAX_LIQ, WeiQty, DisplayQty, as_token_qty

__all__ = [
    "Config",
    "CrocContext",
    "CrocError",
    "ConfigError",
    "ConnectionError",
    "TransactionError",
    "QuantityError",
    "ADDRESS_ZERO",
    "MAX_LIQ",
    "WeiQty",
    "DisplayQty",
    "as_token_qty",
]
