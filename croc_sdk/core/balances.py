"""Wallet and surplus balance query operations"""

from .connection import CrocContext
from .config import Config
from .types import ADDRESS_ZERO
from ..operations.tokens import CrocTokenView


class BalanceQuery:
    """Query wallet and dex surplus balances for an address"""

    def __init__(self, context=None):
        """
        Args:
            context: CrocContext instance (created if None)
        """
        self.context = context or CrocContext(require_signer=False)
        self.config = Config()

    def get_token_balance(self, token_address, address=None):
        """Get wallet and surplus balance of one token (ADDRESS_ZERO for ETH)"""
        addr = self.context.checksum(address) if address else self.context.address
        view = CrocTokenView(token_address, self.context)

        if view.is_native_eth:
            symbol, name = "ETH", "Ether"
        else:
            token = self.context.erc20(token_address)
            symbol, name = token.symbol, token.name

        wallet_wei = view.wallet(addr)
        surplus_wei = view.balance(addr)
        return {
            "symbol": symbol,
            "name": name,
            "address": None if view.is_native_eth else token_address,
            "decimals": view.decimals,
            "wallet": view.to_display(wallet_wei),
            "wallet_wei": str(wallet_wei),
            "surplus": view.to_display(surplus_wei),
            "surplus_wei": str(surplus_wei),
        }

    def get_all_balances(self, address=None):
        """
        Get ETH and all configured token balances.

        Args:
            address: Address to query (uses context address if None)

        Returns:
            Dict with address and list of balances
        """
        addr = self.context.checksum(address) if address else self.context.address
        if not addr:
            raise ValueError("No address provided (pass --address or set PUBLIC_KEY)")

        balances = [self.get_token_balance(ADDRESS_ZERO, addr)]

        for symbol, token_address in self.config.common_tokens.items():
            try:
                balances.append(self.get_token_balance(token_address, addr))
            except Exception as e:
                balances.append({
                    "symbol": symbol,
                    "address": token_address,
                    "error": str(e),
                })

        return {
            "address": addr,
            "balances": balances,
        }
