"""CrocTokenView against fake dex, query and token contracts"""

import threading
import traceback

import pytest
from eth_abi import decode

from croc_sdk.core.exceptions import QuantityError
from croc_sdk.core.types import (
    ADDRESS_ZERO, APPROVAL_QTY, COLD_PROXY_PATH, MAX_LIQ, WeiQty, DisplayQty,
)
from croc_sdk.operations.tokens import CrocTokenView, encode_surplus_cmd, native_eth_view

from .conftest import DEX, OWNER, RECV, TOKEN, FakeContext, FakeERC20


def decode_cmd(cmd):
    return decode(["uint8", "address", "uint128", "address"], cmd)


class TestQuantities:

    def test_to_display_wei(self, context):
        view = CrocTokenView(TOKEN, context)
        assert view.to_display(1_500_000) == "1.5"

    def test_norm_qty_display(self, context):
        view = CrocTokenView(TOKEN, context)
        assert view.norm_qty("1.5") == 1_500_000
        assert view.norm_qty(1.5) == 1_500_000

    def test_to_display_passes_text_through(self, context, erc20):
        view = CrocTokenView(TOKEN, context)
        assert view.to_display("1.50") == "1.50"
        assert erc20.decimals_calls == 0

    def test_norm_qty_wei_ignores_decimals(self):
        broken = FakeERC20(decimals=RuntimeError("rpc down"))
        view = CrocTokenView(TOKEN, FakeContext(tokens={TOKEN: broken}))
        assert view.norm_qty(123) == 123
        assert view.norm_qty(WeiQty(456)) == 456
        assert broken.decimals_calls == 0

    def test_round_trip(self):
        for decimals in (0, 6, 8, 18):
            view = CrocTokenView(TOKEN, FakeContext(tokens={TOKEN: FakeERC20(decimals)}))
            for amount in (0, 1, 999, 1_500_000, 10 ** 18 + 7, 2 ** 128 - 1):
                assert view.norm_qty(view.to_display(amount)) == amount

    def test_invalid_text(self, context):
        view = CrocTokenView(TOKEN, context)
        with pytest.raises(QuantityError):
            view.norm_qty("one")

    def test_explicit_variants(self, context):
        view = CrocTokenView(TOKEN, context)
        assert view.norm_qty(DisplayQty("2")) == 2_000_000
        assert view.to_display(WeiQty(250_000)) == "0.25"


class TestDecimals:

    def test_native_eth_needs_no_lookup(self):
        context = FakeContext()
        view = native_eth_view(context)
        assert view.is_native_eth
        assert view.decimals == 18
        assert context.erc20_calls == 0

    def test_resolved_once(self, context, erc20):
        view = CrocTokenView(TOKEN, context)
        view.to_display(1)
        view.norm_qty("1")
        assert view.decimals == 6
        assert erc20.decimals_calls == 1

    def test_failure_is_remembered(self):
        broken = FakeERC20(decimals=RuntimeError("rpc down"))
        view = CrocTokenView(TOKEN, FakeContext(tokens={TOKEN: broken}))

        with pytest.raises(RuntimeError, match="rpc down"):
            view.to_display(1)

        broken._decimals = 6
        with pytest.raises(RuntimeError, match="rpc down"):
            view.norm_qty("1")
        assert broken.decimals_calls == 1

    def test_remembered_failure_keeps_traceback_short(self):
        broken = FakeERC20(decimals=RuntimeError("rpc down"))
        view = CrocTokenView(TOKEN, FakeContext(tokens={TOKEN: broken}))
        depths = []
        for _ in range(5):
            with pytest.raises(RuntimeError) as exc:
                view.norm_qty("1")
            depths.append(len(traceback.extract_tb(exc.value.__traceback__)))
        assert len(set(depths[1:])) == 1

    def test_concurrent_first_use(self):
        slow = FakeERC20(decimals=6, delay=0.05)
        view = CrocTokenView(TOKEN, FakeContext(tokens={TOKEN: slow}))
        results = []

        def worker():
            results.append(view.to_display(1_500_000))

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert results == ["1.5"] * 8
        assert slow.decimals_calls == 1


class TestReads:

    def test_wallet_erc20(self, context, erc20):
        erc20.balances[OWNER] = 2_500_000
        view = CrocTokenView(TOKEN, context)
        assert view.wallet(OWNER) == 2_500_000
        assert view.wallet_display(OWNER) == "2.5"

    def test_wallet_native(self):
        context = FakeContext(eth_balances={OWNER: 3 * 10 ** 18})
        view = native_eth_view(context)
        assert view.wallet(OWNER) == 3 * 10 ** 18
        assert view.wallet_display(OWNER) == "3.0"

    def test_balance_and_display_agree(self, erc20):
        context = FakeContext(tokens={TOKEN: erc20}, surplus={(OWNER, TOKEN): 1_234_567})
        view = CrocTokenView(TOKEN, context)
        assert view.balance(OWNER) == 1_234_567
        assert view.balance_display(OWNER) == view.to_display(view.balance(OWNER)) == "1.234567"

    def test_allowance_erc20(self, context, erc20):
        erc20.allowances[(OWNER, DEX)] = 77
        view = CrocTokenView(TOKEN, context)
        assert view.allowance(OWNER) == 77

    def test_allowance_native_is_max_liq(self):
        view = native_eth_view(FakeContext())
        assert view.allowance(OWNER) == MAX_LIQ
        assert view.allowance(RECV) == MAX_LIQ


class TestWrites:

    def test_approve_erc20(self, context, erc20):
        view = CrocTokenView(TOKEN, context)
        assert view.approve() == "0xapprove"
        assert erc20.approvals == [(DEX, 2 ** 120, False)]
        assert APPROVAL_QTY == 2 ** 120

    def test_approve_native_is_noop(self):
        context = FakeContext()
        assert native_eth_view(context).approve() is None
        assert context.erc20_calls == 0

    def test_deposit_native_attaches_value(self):
        context = FakeContext()
        view = native_eth_view(context)
        assert view.deposit(1_000_000, RECV) == "0xusercmd"

        call = context.dex.calls[0]
        assert call["callpath"] == COLD_PROXY_PATH == 0
        assert call["value"] == 1_000_000
        code, recv, qty, token = decode_cmd(call["cmd"])
        assert code == 73
        assert recv.lower() == RECV
        assert qty == 1_000_000
        assert token == ADDRESS_ZERO

    def test_deposit_erc20_attaches_no_value(self, context):
        view = CrocTokenView(TOKEN, context)
        view.deposit(1_000_000, RECV)

        call = context.dex.calls[0]
        assert call["value"] == 0
        code, _, qty, token = decode_cmd(call["cmd"])
        assert code == 73
        assert qty == 1_000_000
        assert token.lower() == TOKEN

    def test_withdraw_normalizes_display_qty(self, context):
        view = CrocTokenView(TOKEN, context)
        view.withdraw("2.5", RECV, wait=True)

        call = context.dex.calls[0]
        assert call["value"] == 0
        assert call["wait"] is True
        assert call["operation_type"] == "withdraw"
        code, _, qty, _ = decode_cmd(call["cmd"])
        assert (code, qty) == (74, 2_500_000)

    def test_native_withdraw_and_transfer_attach_no_value(self):
        context = FakeContext()
        view = native_eth_view(context)
        view.withdraw(5, RECV)
        view.transfer(6, RECV)

        assert [c["value"] for c in context.dex.calls] == [0, 0]
        assert [decode_cmd(c["cmd"])[0] for c in context.dex.calls] == [74, 75]

    def test_encode_surplus_cmd_layout(self):
        cmd = encode_surplus_cmd(75, RECV, 10, TOKEN)
        assert len(cmd) == 4 * 32
        assert cmd[31] == 75
        assert cmd[-20:] == bytes.fromhex(TOKEN[2:])


class TestInvalidQuantities:

    def test_negative_deposit_fails_before_sending(self, context):
        view = CrocTokenView(TOKEN, context)
        with pytest.raises(QuantityError):
            view.deposit("-1", RECV)
        with pytest.raises(QuantityError):
            view.withdraw(-5, RECV)
        assert context.dex.calls == []

    def test_oversized_display_qty(self, context):
        with pytest.raises(QuantityError):
            CrocTokenView(TOKEN, context).norm_qty("1e999999")

    def test_to_display_always_returns_text(self, context):
        view = CrocTokenView(TOKEN, context)
        assert view.to_display(1.5) == "1.5"
        with pytest.raises(QuantityError):
            view.to_display(DisplayQty(1.5))
