"""CrocSwapDex contract wrapper"""


class CrocDex:
    """
    Wrapper for the CrocSwapDex entry point.

    Every dex operation goes through userCmd with a callpath selecting the
    proxy contract and an ABI-encoded command for it.
    """

    def __init__(self, context, address):
        """
        Args:
            context: CrocContext instance
            address: CrocSwapDex contract address
        """
        self.context = context
        self.address = context.checksum(address)
        self.contract = context.get_contract(self.address, "croc_dex")

    def user_cmd(self, callpath, cmd, value=0, operation_type="userCmd", wait=False):
        """
        Send a userCmd transaction.

        Args:
            callpath: Proxy index the command is routed to
            cmd: ABI-encoded command bytes
            value: ETH to attach in wei
            operation_type: Gas limit lookup key
            wait: Whether to wait for receipt

        Returns:
            Pending tx hash, or the receipt if wait=True
        """
        contract_func = self.contract.functions.userCmd(callpath, cmd)
        return self.context.sender.send(
            contract_func,
            operation_type=operation_type,
            value=value,
            wait=wait,
        )
