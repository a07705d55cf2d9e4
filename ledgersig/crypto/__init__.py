"""Cryptographic utilities for ledgersig."""

from ..crypto.keys import PrivateKey, PublicKey
from ..crypto.seed import (
    Seed,
    KeyDeriver,
    SeedDeriver,
    to_key_input,
    resolve_secret_key,
)
from ..crypto.signature import (
    RecoverableSignature,
    signing_digest,
    sign_hash_recoverable,
    recover_public_key,
)

__all__ = [
    # Keys
    "PrivateKey",
    "PublicKey",
    
    # Seeds
    "Seed",
    "KeyDeriver",
    "SeedDeriver",
    "to_key_input",
    "resolve_secret_key",
    
    # Signatures
    "RecoverableSignature",
    "signing_digest",
    "sign_hash_recoverable",
    "recover_public_key",
]
