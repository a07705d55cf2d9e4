"""Authorization oracle implementations for ledgersig."""

from ..providers.base import BaseOracle, ConnectionState
from ..providers.http import JsonRpcOracle

__all__ = [
    "BaseOracle",
    "ConnectionState",
    "JsonRpcOracle",
]
