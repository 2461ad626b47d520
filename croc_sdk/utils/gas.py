"""EIP-1559 fee parameters for sent transactions"""

import json
import logging
from pathlib import Path

from ..core.exceptions import TransactionError

logger = logging.getLogger(__name__)

DEFAULT_PRIORITY_FEE_GWEI = 1.5

# Used when the node cannot estimate, e.g. a deposit sent before approval is mined
FALLBACK_GAS_LIMITS = {
    "approve": 65000,
    "deposit": 120000,
    "withdraw": 120000,
    "transfer": 100000,
    "default": 300000,
}


class GasPriceTooHighError(TransactionError):
    """Base fee is above the caller's fee cap"""
    pass


def load_gas_config(path=None):
    """Contents of the first gas_config.json found, or {}"""
    for candidate in (path, Path.cwd() / "gas_config.json",
                      Path.home() / ".croc-sdk" / "gas_config.json"):
        if candidate and Path(candidate).exists():
            logger.debug("Loading gas config from %s", candidate)
            with open(candidate) as f:
                return json.load(f)
    return {}


class GasPolicy:
    """
    Fee cap, tip and gas limit fallbacks for one connection.

    Explicit arguments win over gas_config.json keys (maxFeePerGas,
    maxPriorityFeePerGas in Gwei, gasLimit per operation).
    """

    def __init__(self, w3, max_fee_gwei=None, priority_fee_gwei=None, config=None):
        config = load_gas_config() if config is None else config
        self.w3 = w3
        self.max_fee_gwei = max_fee_gwei if max_fee_gwei is not None else config.get("maxFeePerGas")
        self.priority_fee_gwei = (priority_fee_gwei if priority_fee_gwei is not None
                                  else config.get("maxPriorityFeePerGas", DEFAULT_PRIORITY_FEE_GWEI))
        self.gas_limits = dict(FALLBACK_GAS_LIMITS, **config.get("gasLimit", {}))

    def fallback_limit(self, operation_type):
        return self.gas_limits.get(operation_type, self.gas_limits["default"])

    def fee_params(self):
        """
        maxFeePerGas / maxPriorityFeePerGas in wei.

        Without a cap the max fee leaves room for the base fee to double.

        Raises:
            GasPriceTooHighError: if the cap is below the current base fee
        """
        base_fee = self.w3.eth.get_block("latest").get("baseFeePerGas", 0)
        priority_fee = int(self.priority_fee_gwei * 10 ** 9)

        if self.max_fee_gwei is None:
            max_fee = 2 * base_fee + priority_fee
        else:
            max_fee = int(self.max_fee_gwei * 10 ** 9)
            if max_fee < base_fee:
                raise GasPriceTooHighError(
                    f"Base fee {base_fee / 10 ** 9:.2f} Gwei is above the "
                    f"{self.max_fee_gwei} Gwei cap"
                )

        return {"maxFeePerGas": max_fee, "maxPriorityFeePerGas": priority_fee}

    def estimate(self, contract_func, params, operation_type):
        """Node estimate, or the fallback limit when estimation fails"""
        try:
            return contract_func.estimate_gas(params)
        except Exception as e:
            fallback = self.fallback_limit(operation_type)
            logger.warning("Gas estimation for %s failed (%s), using %d",
                           operation_type, e, fallback)
            return fallback
