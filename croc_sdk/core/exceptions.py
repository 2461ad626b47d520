"""Custom exceptions for the Croc SDK"""


class CrocError(Exception):
    """Base exception for all Croc SDK errors"""
    pass


class ConfigError(CrocError):
    """Configuration-related errors"""
    pass


class ConnectionError(CrocError):
    """Web3 connection errors"""
    pass


class TransactionError(CrocError):
    """Transaction execution errors"""
    pass


class QuantityError(CrocError, ValueError):
    """Token quantity could not be parsed or converted"""
    pass
