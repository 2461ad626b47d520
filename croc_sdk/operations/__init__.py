"""High-level token operations"""

from .tokens import CrocTokenView, encode_surplus_cmd, native_eth_view

__all__ = ["CrocTokenView", "encode_surplus_cmd", "native_eth_view"]
