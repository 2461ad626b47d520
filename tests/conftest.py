"""In-memory stand-ins for the chain collaborators a token view talks to"""

import threading
import time

import pytest

from croc_sdk.core.config import Config

TOKEN = "0x" + "11" * 20
OWNER = "0x" + "22" * 20
RECV = "0x" + "33" * 20
DEX = "0x" + "aa" * 20


class FakeERC20:
    def __init__(self, decimals=6, balances=None, allowances=None, delay=0.0):
        self._decimals = decimals
        self.balances = balances or {}
        self.allowances = allowances or {}
        self.delay = delay
        self.decimals_calls = 0
        self.approvals = []
        self.symbol = "TKN"
        self.name = "Test Token"
        self._lock = threading.Lock()

    @property
    def decimals(self):
        with self._lock:
            self.decimals_calls += 1
        time.sleep(self.delay)
        if isinstance(self._decimals, Exception):
            raise self._decimals
        return self._decimals

    def balance_of(self, address=None):
        return self.balances.get(address, 0)

    def allowance(self, spender, owner=None):
        return self.allowances.get((owner, spender), 0)

    def approve(self, spender, amount_wei, wait=False):
        self.approvals.append((spender, amount_wei, wait))
        return "0xapprove"


class FakeDex:
    address = DEX

    def __init__(self):
        self.calls = []

    def user_cmd(self, callpath, cmd, value=0, operation_type="userCmd", wait=False):
        self.calls.append({
            "callpath": callpath,
            "cmd": cmd,
            "value": value,
            "operation_type": operation_type,
            "wait": wait,
        })
        return "0xusercmd"


class FakeQuery:
    def __init__(self, surplus=None):
        self.surplus = surplus or {}

    def query_surplus(self, owner, token):
        return self.surplus.get((owner, token), 0)


class FakeProvider:
    def __init__(self, balances=None):
        self.balances = balances or {}

    def get_balance(self, address):
        return self.balances.get(address, 0)


class FakeContext:
    address = OWNER

    def __init__(self, tokens=None, surplus=None, eth_balances=None):
        self.tokens = tokens or {}
        self.dex = FakeDex()
        self.query = FakeQuery(surplus)
        self.provider = FakeProvider(eth_balances)
        self.erc20_calls = 0

    def erc20(self, address):
        self.erc20_calls += 1
        return self.tokens[address]

    def checksum(self, address):
        return address


@pytest.fixture
def erc20():
    return FakeERC20(decimals=6)


@pytest.fixture
def context(erc20):
    return FakeContext(tokens={TOKEN: erc20})


@pytest.fixture
def fresh_config(monkeypatch, tmp_path):
    """Config singleton reloaded against an empty user config dir"""
    monkeypatch.setenv("CROC_CONFIG_DIR", str(tmp_path))
    monkeypatch.delenv("CROC_DEX_ADDRESS", raising=False)
    monkeypatch.delenv("CROC_QUERY_ADDRESS", raising=False)
    Config.reset()
    yield tmp_path
    Config.reset()
