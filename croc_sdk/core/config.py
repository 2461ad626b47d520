"""Configuration loading and management"""

import os
import json
from pathlib import Path
from .exceptions import ConfigError
from .types import ADDRESS_ZERO


# Chain ID to network name mapping
CHAIN_NAMES = {
    1: "mainnet",
    534352: "scroll",
}


class Config:
    """Centralized configuration manager for shared settings"""

    _instance = None
    _tokens = None
    _abis = None
    _addresses = None

    # Package files (not user-configurable)
    PACKAGE_ABIS = Path(__file__).parent.parent / "abis.json"
    PACKAGE_ADDRESSES = Path(__file__).parent.parent / "addresses.json"

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self):
        if Config._abis is None:
            self._load()

    @classmethod
    def reset(cls):
        """Drop cached files so the next Config() reloads them"""
        cls._instance = None
        cls._tokens = None
        cls._abis = None
        cls._addresses = None

    def _find_config_dir(self):
        """Find user config directory"""
        env_path = os.getenv("CROC_CONFIG_DIR")
        if env_path:
            path = Path(env_path)
            if path.exists():
                return path

        locations = [
            Path.cwd() / "config",
            Path.home() / ".croc-sdk" / "config",
        ]

        for path in locations:
            if path.exists():
                return path

        return None

    def _load(self):
        """Load configuration files"""
        if not self.PACKAGE_ABIS.exists():
            raise ConfigError(f"Shared ABIs not found: {self.PACKAGE_ABIS}")
        with open(self.PACKAGE_ABIS) as f:
            Config._abis = json.load(f)

        if not self.PACKAGE_ADDRESSES.exists():
            raise ConfigError(f"Contract addresses not found: {self.PACKAGE_ADDRESSES}")
        with open(self.PACKAGE_ADDRESSES) as f:
            Config._addresses = json.load(f)

        # tokens.json is optional, raw addresses always work
        Config._tokens = {}
        config_dir = self._find_config_dir()
        if config_dir:
            tokens_path = config_dir / "tokens.json"
            if tokens_path.exists():
                with open(tokens_path) as f:
                    Config._tokens = json.load(f)

    @property
    def common_tokens(self):
        """Common token symbol -> address mapping"""
        return Config._tokens or {}

    def get_abi(self, name):
        """Get ABI by name"""
        if name in Config._abis:
            return Config._abis[name]
        raise ConfigError(f"ABI not found: {name}")

    def get_contracts(self, chain_id=None):
        """Get CrocSwap contract addresses for a chain"""
        network = CHAIN_NAMES.get(chain_id) if chain_id else "mainnet"
        if network not in Config._addresses:
            raise ConfigError(f"No CrocSwap deployment configured for chain {chain_id}")
        return Config._addresses[network]

    def dex_address(self, chain_id=None):
        """CrocSwapDex address (CROC_DEX_ADDRESS overrides)"""
        return os.getenv("CROC_DEX_ADDRESS") or self.get_contracts(chain_id)["dex"]

    def query_address(self, chain_id=None):
        """CrocQuery address (CROC_QUERY_ADDRESS overrides)"""
        return os.getenv("CROC_QUERY_ADDRESS") or self.get_contracts(chain_id)["query"]

    def get_token_address(self, symbol_or_address):
        """Resolve token symbol to address, or validate address"""
        token = symbol_or_address.upper()

        if token == "ETH":
            return ADDRESS_ZERO

        if token in self.common_tokens:
            return self.common_tokens[token]

        if symbol_or_address.startswith("0x") and len(symbol_or_address) == 42:
            return symbol_or_address

        raise ConfigError(f"Unknown token: {symbol_or_address}")
