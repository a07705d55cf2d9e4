"""Type definitions for ledgersig."""

# Common types
from ..types.common import (
    HexStr,
    Base64Str,
    Address as AddressStr,
    AccountId,
    PublicKeyHex,
    PrivateKeyBytes,
    PublicKeyBytes,
    SignatureBytes,
)

# Inputs and results
from ..types.inputs import (
    HexHash,
    RawHash,
    HashInput,
    DirectKey,
    SeedKey,
    KeyInput,
    AccountSelector,
    SignedMessage,
    SignedHash,
    VerificationResult,
)

__all__ = [
    # Common
    "HexStr",
    "Base64Str",
    "AddressStr",
    "AccountId",
    "PublicKeyHex",
    "PrivateKeyBytes",
    "PublicKeyBytes",
    "SignatureBytes",
    
    # Inputs and results
    "HexHash",
    "RawHash",
    "HashInput",
    "DirectKey",
    "SeedKey",
    "KeyInput",
    "AccountSelector",
    "SignedMessage",
    "SignedHash",
    "VerificationResult",
]
