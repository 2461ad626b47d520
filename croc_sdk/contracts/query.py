"""CrocQuery contract wrapper"""


class CrocQuery:
    """Read-only views over CrocSwapDex storage"""

    def __init__(self, context, address):
        """
        Args:
            context: CrocContext instance
            address: CrocQuery contract address
        """
        self.context = context
        self.address = context.checksum(address)
        self.contract = context.get_contract(self.address, "croc_query")

    def query_surplus(self, owner, token):
        """Surplus collateral of token held by the dex for owner, in wei"""
        return self.contract.functions.querySurplus(
            self.context.checksum(owner), self.context.checksum(token)
        ).call()
