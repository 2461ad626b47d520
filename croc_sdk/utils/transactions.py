"""Signing and sending contract transactions"""

import logging

from ..core.exceptions import ConfigError

logger = logging.getLogger(__name__)

GAS_BUFFER = 1.2


class TransactionSender:
    """Sends contract calls from the context's signer as type 2 transactions"""

    def __init__(self, context, gas_policy):
        self.context = context
        self.gas_policy = gas_policy

    def send(self, contract_func, operation_type="default", value=0, wait=False):
        """
        Sign and broadcast contract_func.

        Args:
            contract_func: Bound contract function, e.g. functions.userCmd(0, cmd)
            operation_type: Key for the fallback gas limit
            value: ETH to attach in wei
            wait: Block for the receipt instead of returning the hash

        Raises:
            ConfigError: if the context has no signing account
            GasPriceTooHighError: if the base fee is above the fee cap
        """
        account = self.context.account
        if account is None:
            raise ConfigError("Sending transactions requires a signer (PRIVATE_KEY)")

        call_params = {"from": account.address}
        if value:
            call_params["value"] = value
        gas = self.gas_policy.estimate(contract_func, call_params, operation_type)

        tx = contract_func.build_transaction(dict(
            call_params,
            nonce=self.context.get_nonce(account.address),
            gas=int(gas * GAS_BUFFER),
            chainId=self.context.chain_id,
            type=2,
            **self.gas_policy.fee_params(),
        ))

        signed = account.sign_transaction(tx)
        tx_hash = self.context.w3.eth.send_raw_transaction(signed.raw_transaction)
        logger.info("Sent %s tx %s", operation_type, tx_hash.hex())

        if not wait:
            return tx_hash
        return self.context.wait_for_receipt(tx_hash)
