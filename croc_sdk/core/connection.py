"""Web3 connection management"""

import os
import logging
from eth_account import Account
from web3 import Web3
from dotenv import load_dotenv
from .config import Config
from .exceptions import ConnectionError, ConfigError, TransactionError
from ..utils.gas import GasPolicy
from ..utils.transactions import TransactionSender

logger = logging.getLogger(__name__)


class CrocContext:
    """
    Shared connection to a chain and its CrocSwap deployment.

    Hands out the collaborators token views work against: the dex and
    query contracts, an ERC20 binding factory and the node provider.
    """

    def __init__(self, require_signer=False, rpc_url=None,
                 max_fee_gwei=None, priority_fee_gwei=None):
        """
        Initialize Web3 connection.

        Args:
            require_signer: If True, loads private key for signing transactions
            rpc_url: Node URL (defaults to RPC_URL from the environment)
            max_fee_gwei: Max fee per gas cap for sent transactions
            priority_fee_gwei: Priority fee for sent transactions
        """
        load_dotenv()
        load_dotenv("wallet.env")

        self.config = Config()
        self._setup_web3(rpc_url)

        self.account = None
        if require_signer:
            self._setup_account()

        self.sender = TransactionSender(
            self, GasPolicy(self.w3, max_fee_gwei, priority_fee_gwei)
        )

        self._chain_id = None
        self._dex = None
        self._query = None

    def _setup_web3(self, rpc_url=None):
        """Setup Web3 connection"""
        rpc_url = rpc_url or os.getenv("RPC_URL")
        if not rpc_url:
            raise ConfigError("RPC_URL not found in environment")

        self.w3 = Web3(Web3.HTTPProvider(rpc_url))

        if not self.w3.is_connected():
            raise ConnectionError(f"Failed to connect to {rpc_url}")
        logger.info("Connected to %s", rpc_url)

    def _setup_account(self):
        """Setup signing account from private key"""
        private_key = os.getenv("PRIVATE_KEY")
        if not private_key:
            raise ConfigError("PRIVATE_KEY not found in wallet.env")

        self.account = Account.from_key(private_key)
        logger.info("Loaded signer %s", self.account.address)

    @property
    def address(self):
        """Get account address (from signer or PUBLIC_KEY in wallet.env)"""
        if self.account:
            return self.account.address
        # Fall back to PUBLIC_KEY for read-only operations
        public_key = os.getenv("PUBLIC_KEY")
        return public_key if public_key else None

    @property
    def chain_id(self):
        """Chain ID (cached after first lookup)"""
        if self._chain_id is None:
            self._chain_id = self.w3.eth.chain_id
        return self._chain_id

    @property
    def provider(self):
        """Node access for native ETH queries (get_balance etc.)"""
        return self.w3.eth

    @property
    def dex(self):
        """CrocSwapDex contract wrapper"""
        if self._dex is None:
            from ..contracts.dex import CrocDex
            self._dex = CrocDex(self, self.config.dex_address(self.chain_id))
        return self._dex

    @property
    def query(self):
        """CrocQuery contract wrapper"""
        if self._query is None:
            from ..contracts.query import CrocQuery
            self._query = CrocQuery(self, self.config.query_address(self.chain_id))
        return self._query

    def erc20(self, address):
        """Bind an ERC20 wrapper to a token address"""
        from ..contracts.erc20 import ERC20
        return ERC20(self, address)

    def get_nonce(self, address=None):
        """Get transaction count (nonce)"""
        addr = address or self.address
        if not addr:
            raise ValueError("No address provided")
        return self.w3.eth.get_transaction_count(addr)

    def get_contract(self, address, abi_name):
        """Create contract instance"""
        abi = self.config.get_abi(abi_name)
        return self.w3.eth.contract(
            address=Web3.to_checksum_address(address),
            abi=abi
        )

    def wait_for_receipt(self, tx_hash, timeout=120):
        """
        Block until a sent transaction is mined.

        Raises:
            TransactionError: If the transaction reverted
        """
        receipt = self.w3.eth.wait_for_transaction_receipt(tx_hash, timeout=timeout)
        if receipt.status != 1:
            raise TransactionError(f"Transaction failed: {receipt.transactionHash.hex()}")
        return receipt

    def checksum(self, address):
        """Convert address to checksum format"""
        return Web3.to_checksum_address(address)
