"""
Croc SDK - token balances and surplus collateral on CrocSwap
"""

from .core.connection import CrocContext
from .core.config import Config
from .core.exceptions import CrocError, ConfigError, ConnectionError, TransactionError, QuantityError
from .core.types import WeiQty, DisplayQty
from .operations.tokens import CrocTokenView
from .core.balances import BalanceQuery

__version__ = "0.1.0"
__all__ = [
    "CrocContext",
    "Config",
    "CrocTokenView",
    "BalanceQuery",
    "WeiQty",
    "DisplayQty",
    "CrocError",
    "ConfigError",
    "ConnectionError",
    "TransactionError",
    "QuantityError",
]
