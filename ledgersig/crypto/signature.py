"""Recoverable signatures for ledgersig."""

import logging
from dataclasses import dataclass

from coincurve import PublicKey as SecpPublicKey

from ..constants import N, RECOVERY_ID_OFFSET, SIGNATURE_LENGTH
from ..crypto.keys import PrivateKey, PublicKey
from ..exceptions import CryptoError, SignatureRecoveryError, SigningError
from ..types.common import SignatureBytes

__all__ = [
    "RecoverableSignature",
    "signing_digest",
    "sign_hash_recoverable",
    "recover_public_key",
]

logger = logging.getLogger(__name__)

DIGEST_LENGTH = 32


@dataclass(frozen=True)
class RecoverableSignature:
    """
    ECDSA signature with the recovery id that selects the signer's key.
    
    Byte layout is ``[27 + recovery_id] || r || s`` with r and s as
    32-byte big endian integers.
    """
    
    r: int
    s: int
    recovery_id: int
    
    def __post_init__(self) -> None:
        if not 0 <= self.recovery_id <= 3:
            raise SignatureRecoveryError(
                f"Recovery id out of range: {self.recovery_id}"
            )
        if not 0 < self.r < N:
            raise SignatureRecoveryError("Signature r value out of range")
        if not 0 < self.s < N:
            raise SignatureRecoveryError("Signature s value out of range")
            
    @classmethod
    def from_bytes(cls, data: bytes) -> "RecoverableSignature":
        """
        Parse the 65-byte layout.
        
        Raises:
            SignatureRecoveryError: If the bytes cannot be a recoverable signature
        """
        if len(data) != SIGNATURE_LENGTH:
            raise SignatureRecoveryError(
                f"Signature must be {SIGNATURE_LENGTH} bytes, got {len(data)}"
            )
        return cls(
            r=int.from_bytes(data[1:33], "big"),
            s=int.from_bytes(data[33:65], "big"),
            recovery_id=data[0] - RECOVERY_ID_OFFSET,
        )
        
    @classmethod
    def from_compact(cls, data: bytes) -> "RecoverableSignature":
        """Parse libsecp256k1 compact order: r, s, recovery id."""
        return cls(
            r=int.from_bytes(data[0:32], "big"),
            s=int.from_bytes(data[32:64], "big"),
            recovery_id=data[64],
        )
        
    def to_bytes(self) -> SignatureBytes:
        return SignatureBytes(
            bytes([RECOVERY_ID_OFFSET + self.recovery_id])
            + self.r.to_bytes(32, "big")
            + self.s.to_bytes(32, "big")
        )
        
    def to_compact(self) -> bytes:
        return (
            self.r.to_bytes(32, "big")
            + self.s.to_bytes(32, "big")
            + bytes([self.recovery_id])
        )


def signing_digest(hash_bytes: bytes) -> bytes:
    """
    Fit a hash of any length to the 256-bit curve size.
    
    Longer hashes keep their leftmost 32 bytes, shorter ones are left-padded
    with zero bytes so their integer value is unchanged.
    """
    if len(hash_bytes) >= DIGEST_LENGTH:
        return bytes(hash_bytes[:DIGEST_LENGTH])
    return bytes(hash_bytes).rjust(DIGEST_LENGTH, b"\x00")


def sign_hash_recoverable(hash_bytes: bytes, private_key: PrivateKey) -> RecoverableSignature:
    """
    Sign a normalized hash so the public key can be recovered later.
    
    Nonces are RFC 6979 deterministic and s is low-s canonical, so the same
    hash and key always produce the same signature.
    
    Args:
        hash_bytes: Canonical hash bytes
        private_key: Signing key
        
    Returns:
        RecoverableSignature whose recovery id reconstructs the signer's key
        
    Raises:
        SigningError: If the primitive fails
    """
    digest = signing_digest(hash_bytes)
    
    try:
        compact = private_key.sign_recoverable(digest)
    except CryptoError as e:
        raise SigningError(str(e)) from e
        
    signature = RecoverableSignature.from_compact(compact)
    
    # Fail closed if the recovery id does not select our own key
    if recover_public_key(hash_bytes, signature.to_bytes()) != private_key.public_key():
        raise SigningError("Signature does not recover the signing key")
        
    return signature


def recover_public_key(hash_bytes: bytes, signature: bytes) -> PublicKey:
    """
    Recover the signer's public key from a hash and signature bytes.
    
    Args:
        hash_bytes: Canonical hash bytes that were signed
        signature: 65-byte recoverable signature
        
    Returns:
        The public key selected by the embedded recovery id
        
    Raises:
        SignatureRecoveryError: If the signature is malformed or no key can
            be recovered
    """
    parsed = RecoverableSignature.from_bytes(signature)
    digest = signing_digest(hash_bytes)
    
    try:
        secp_key = SecpPublicKey.from_signature_and_message(
            parsed.to_compact(), digest, hasher=None
        )
    except (ValueError, TypeError) as e:
        logger.debug(f"Public key recovery failed: {e}")
        raise SignatureRecoveryError() from e
        
    return PublicKey.from_secp(secp_key)
