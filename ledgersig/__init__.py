"""
ledgersig

Recoverable message signatures for ledger accounts: sign with a secret key,
verify by recovering the signer's key and asking an authorization oracle
whether that key is currently active for the claimed account.
"""

from .client import MessageSigner
from .constants import MAGIC_PREFIX, Network
from .exceptions import (
    LedgerSigError,
    ValidationError,
    InvalidHashError,
    InvalidAccountError,
    InvalidSignatureEncodingError,
    InvalidMessageError,
    InvalidSeedError,
    CryptoError,
    SignatureRecoveryError,
    ProviderError,
    OracleUnavailableError,
)
from .crypto import PrivateKey, PublicKey, Seed
from .message import (
    sign_message,
    sign_hash,
    verify_message_signature,
    verify_hash_signature,
)
from .providers import BaseOracle, ConnectionState, JsonRpcOracle
from .types import (
    HexHash,
    RawHash,
    DirectKey,
    SeedKey,
    SignedMessage,
    SignedHash,
    VerificationResult,
)

__version__ = "1.0.0"

__all__ = [
    # Main client
    "MessageSigner",
    "connect",
    
    # Operations
    "sign_message",
    "sign_hash",
    "verify_message_signature",
    "verify_hash_signature",
    
    # Constants
    "MAGIC_PREFIX",
    "Network",
    
    # Oracles
    "BaseOracle",
    "ConnectionState",
    "JsonRpcOracle",
    
    # Exceptions
    "LedgerSigError",
    "ValidationError",
    "InvalidHashError",
    "InvalidAccountError",
    "InvalidSignatureEncodingError",
    "InvalidMessageError",
    "InvalidSeedError",
    "CryptoError",
    "SignatureRecoveryError",
    "ProviderError",
    "OracleUnavailableError",
    
    # Crypto
    "PrivateKey",
    "PublicKey",
    "Seed",
    
    # Types
    "HexHash",
    "RawHash",
    "DirectKey",
    "SeedKey",
    "SignedMessage",
    "SignedHash",
    "VerificationResult",
]


def connect(network: Network = Network.MAINNET, **kwargs) -> MessageSigner:
    """
    Create a MessageSigner over a JSON-RPC oracle.
    
    Args:
        network: Network to verify against
        **kwargs: Additional JsonRpcOracle arguments
        
    Returns:
        MessageSigner instance; use as an async context manager to connect
        
    Example:
        >>> async with ledgersig.connect() as signer:
        ...     error, is_valid = await signer.verify_message(data)
    """
    return MessageSigner(oracle=JsonRpcOracle(network=network, **kwargs), network=network)
