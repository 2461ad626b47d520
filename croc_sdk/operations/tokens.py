"""Per-token view over wallet and dex surplus balances"""

import logging
import threading

from eth_abi import encode

from ..core.types import (
    ADDRESS_ZERO,
    APPROVAL_QTY,
    COLD_PROXY_PATH,
    MAX_LIQ,
    NATIVE_DECIMALS,
    DisplayQty,
    SurplusCode,
    TokenQty,
    as_token_qty,
)
from ..utils.token import to_display_qty, from_display_qty

logger = logging.getLogger(__name__)


class CrocTokenView:
    """
    A token bound to a CrocSwap deployment.

    Quantities may be given either as wei (int or WeiQty) or as
    decimal-normed display values (str, float, Decimal or DisplayQty).
    Write operations return the pending tx hash, or the receipt with
    wait=True.
    """

    def __init__(self, token_address, context=None):
        """
        Args:
            token_address: ERC20 address, or ADDRESS_ZERO for native ETH
            context: CrocContext instance (read-only one created on first use if None)
        """
        self._context = context
        self._context_lock = threading.Lock()
        self.token_address = token_address
        self.is_native_eth = int(token_address, 16) == 0

        # Decimals memo: unresolved until first use, then resolved or failed for good
        self._decimals_lock = threading.Lock()
        self._decimals = NATIVE_DECIMALS if self.is_native_eth else None
        self._decimals_error = None

    @property
    def context(self):
        if self._context is None:
            with self._context_lock:
                if self._context is None:
                    from ..core.connection import CrocContext
                    self._context = CrocContext(require_signer=False)
        return self._context

    @property
    def decimals(self):
        """
        Token precision, fetched once.

        A failed lookup is remembered and re-raised on every later access.
        """
        if self._decimals is None:
            with self._decimals_lock:
                if self._decimals is None and self._decimals_error is None:
                    try:
                        self._decimals = self._resolve().decimals
                        logger.debug("Resolved %s decimals=%d", self.token_address, self._decimals)
                    except Exception as e:
                        self._decimals_error = e
                        raise
        if self._decimals_error is not None:
            # Drop frames left by earlier raises
            raise self._decimals_error.with_traceback(None)
        return self._decimals

    def _resolve(self):
        return self.context.erc20(self.token_address)

    def approve(self, wait=False):
        """Approve the dex to pull this token. Returns None for native ETH."""
        if self.is_native_eth:
            return None
        return self._resolve().approve(self.context.dex.address, APPROVAL_QTY, wait=wait)

    def wallet(self, address):
        """Wallet balance of address in wei"""
        if self.is_native_eth:
            return self.context.provider.get_balance(self.context.checksum(address))
        return self._resolve().balance_of(address)

    def wallet_display(self, address):
        return to_display_qty(self.wallet(address), self.decimals)

    def balance(self, address):
        """Surplus collateral held by the dex for address in wei"""
        return self.context.query.query_surplus(address, self.token_address)

    def balance_display(self, address):
        return to_display_qty(self.balance(address), self.decimals)

    def allowance(self, address):
        """Amount the dex may pull from address; unlimited for native ETH"""
        if self.is_native_eth:
            return MAX_LIQ
        return self._resolve().allowance(self.context.dex.address, owner=address)

    def norm_qty(self, qty: TokenQty) -> int:
        """Quantity in wei"""
        qty = as_token_qty(qty)
        if isinstance(qty, DisplayQty):
            return from_display_qty(qty.value, self.decimals)
        return qty.value

    def to_display(self, qty: TokenQty) -> str:
        """Quantity as a decimal string"""
        qty = as_token_qty(qty)
        if isinstance(qty, DisplayQty):
            return qty.value
        return to_display_qty(qty.value, self.decimals)

    def deposit(self, qty, recv, wait=False):
        """Move qty from the signer's wallet into recv's surplus"""
        return self._surplus_op(SurplusCode.DEPOSIT, qty, recv, self.is_native_eth, wait)

    def withdraw(self, qty, recv, wait=False):
        """Move qty of the signer's surplus out to recv's wallet"""
        return self._surplus_op(SurplusCode.WITHDRAW, qty, recv, wait=wait)

    def transfer(self, qty, recv, wait=False):
        """Move qty of the signer's surplus to recv's surplus"""
        return self._surplus_op(SurplusCode.TRANSFER, qty, recv, wait=wait)

    def _surplus_op(self, sub_code, qty, recv, use_msg_val=False, wait=False):
        wei_qty = self.norm_qty(qty)
        cmd = encode_surplus_cmd(sub_code, recv, wei_qty, self.token_address)
        value = wei_qty if use_msg_val else 0

        logger.info("Surplus %s of %d wei %s to %s",
                    SurplusCode(sub_code).name.lower(), wei_qty, self.token_address, recv)
        return self.context.dex.user_cmd(
            COLD_PROXY_PATH, cmd, value=value,
            operation_type=SurplusCode(sub_code).name.lower(), wait=wait,
        )

    def __repr__(self):
        return f"CrocTokenView({self.token_address})"


def encode_surplus_cmd(sub_code, recv, wei_qty, token_address):
    """ABI-encode a cold path surplus command"""
    return encode(
        ["uint8", "address", "uint128", "address"],
        [int(sub_code), recv, wei_qty, token_address],
    )


def native_eth_view(context=None):
    """Token view for the chain's native currency"""
    return CrocTokenView(ADDRESS_ZERO, context)
