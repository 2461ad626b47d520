"""ERC20 token contract wrapper"""

import logging

logger = logging.getLogger(__name__)


class ERC20:
    """Wrapper for ERC20 token interactions"""

    def __init__(self, context, address):
        """
        Args:
            context: CrocContext instance
            address: Token contract address
        """
        self.context = context
        self.address = context.checksum(address)
        self.contract = context.get_contract(self.address, "erc20")
        self._info = None

    @property
    def info(self):
        """Get token info (cached)"""
        if self._info is None:
            self._info = {
                "address": self.address,
                "symbol": self._get_text("symbol", "UNKNOWN"),
                "name": self._get_text("name", "Unknown Token"),
                "decimals": self.contract.functions.decimals().call(),
            }
        return self._info

    def _get_text(self, method, default):
        """Read a string getter, handling bytes32 tokens like MKR"""
        try:
            raw = getattr(self.contract.functions, method)().call()
        except Exception as e:
            logger.debug("%s() failed on %s: %s", method, self.address, e)
            return default
        if isinstance(raw, bytes):
            return raw.rstrip(b'\x00').decode('utf-8')
        return str(raw)

    @property
    def symbol(self):
        return self.info["symbol"]

    @property
    def name(self):
        return self.info["name"]

    @property
    def decimals(self):
        return self.info["decimals"]

    def balance_of(self, address=None):
        """Get token balance in wei"""
        addr = self.context.checksum(address or self.context.address)
        return self.contract.functions.balanceOf(addr).call()

    def allowance(self, spender, owner=None):
        """Get allowance for spender"""
        owner_addr = self.context.checksum(owner or self.context.address)
        return self.contract.functions.allowance(
            owner_addr, self.context.checksum(spender)
        ).call()

    def approve(self, spender, amount_wei, wait=False):
        """
        Approve spender to move amount_wei of the signer's tokens.

        Returns:
            Pending tx hash, or the receipt if wait=True
        """
        contract_func = self.contract.functions.approve(
            self.context.checksum(spender), amount_wei
        )
        return self.context.sender.send(
            contract_func,
            operation_type="approve",
            wait=wait,
        )
