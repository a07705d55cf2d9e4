"""Common type definitions for ledgersig."""

from typing import NewType

__all__ = [
    "HexStr",
    "Base64Str",
    "Address",
    "AccountId",
    "PublicKeyHex",
    "PrivateKeyBytes",
    "PublicKeyBytes",
    "SignatureBytes",
]

# Basic types
HexStr = NewType("HexStr", str)
"""Hexadecimal string representation."""

Base64Str = NewType("Base64Str", str)
"""Base64 transport text."""

# Identifiers
Address = NewType("Address", str)
"""Classic ledger address string (r...)."""

AccountId = NewType("AccountId", bytes)
"""20-byte account id (RIPEMD160 of SHA256 of the public key)."""

# Crypto types
PublicKeyHex = NewType("PublicKeyHex", str)
"""Compressed public key as hex (66 characters)."""

PrivateKeyBytes = NewType("PrivateKeyBytes", bytes)
"""32-byte private key."""

PublicKeyBytes = NewType("PublicKeyBytes", bytes)
"""33-byte compressed public key."""

SignatureBytes = NewType("SignatureBytes", bytes)
"""65-byte recoverable signature: recovery byte, r, s."""
