"""Contract wrappers for ERC20 tokens, CrocSwapDex and CrocQuery"""

from .erc20 import ERC20
from .dex import CrocDex
from .query import CrocQuery

__all__ = ["ERC20", "CrocDex", "CrocQuery"]
