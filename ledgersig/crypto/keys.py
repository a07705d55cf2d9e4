"""Key management for ledgersig."""

import secrets
from typing import Union

from coincurve import PrivateKey as SecpPrivateKey, PublicKey as SecpPublicKey

from ..exceptions import CryptoError, ValidationError
from ..types.common import (
    AccountId,
    Address,
    PrivateKeyBytes,
    PublicKeyBytes,
    PublicKeyHex,
)
from ..utils.encoding import encode_account_id, hash160
from ..utils.validation import validate_private_key, validate_public_key

__all__ = ["PrivateKey", "PublicKey"]


class PrivateKey:
    """
    secp256k1 private key wrapper.
    
    Handles public key derivation and recoverable signing. The secret is
    never serialized by the signing code and is masked in ``repr``.
    """
    
    def __init__(self, key: Union[bytes, str, "PrivateKey"]) -> None:
        """
        Initialize private key.
        
        Args:
            key: Private key as 32 bytes, hex string, or another PrivateKey
            
        Raises:
            ValidationError: If key format is invalid
        """
        if isinstance(key, PrivateKey):
            self._secret = key._secret
            self._key = key._key
            return
            
        self._secret = PrivateKeyBytes(validate_private_key(key))
        self._key = SecpPrivateKey(self._secret)
            
    @classmethod
    def create(cls) -> "PrivateKey":
        """Create new random private key."""
        while True:
            key_bytes = secrets.token_bytes(32)
            try:
                return cls(key_bytes)
            except ValidationError:
                # Outside [1, n), try again
                continue
                
    @property
    def secret(self) -> PrivateKeyBytes:
        """Get private key as bytes."""
        return self._secret
        
    def hex(self) -> str:
        """Get private key as hex string."""
        return self._secret.hex()
        
    def public_key(self) -> "PublicKey":
        """Get corresponding compressed public key."""
        return PublicKey(self._key.public_key.format(compressed=True))
        
    def address(self) -> Address:
        """Get the classic address of this key's account."""
        return self.public_key().address()
        
    def sign_recoverable(self, digest: bytes) -> bytes:
        """
        Create recoverable signature over a 32-byte digest.
        
        Args:
            digest: 32-byte digest to sign, used as is
            
        Returns:
            65 bytes in libsecp256k1 compact order: r, s, recovery id
            
        Raises:
            CryptoError: If signing fails
        """
        if len(digest) != 32:
            raise ValueError("Digest must be 32 bytes")
            
        try:
            return self._key.sign_recoverable(digest, hasher=None)
        except Exception as e:
            raise CryptoError(f"Recoverable signing failed: {e}") from e
            
    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PrivateKey):
            return False
        return self._secret == other._secret
        
    def __hash__(self) -> int:
        return hash(self._secret)
        
    def __repr__(self) -> str:
        # Show first and last 4 chars of hex for security
        hex_str = self.hex()
        masked = f"{hex_str[:4]}...{hex_str[-4:]}"
        return f"PrivateKey({masked})"


class PublicKey:
    """
    secp256k1 public key wrapper.
    
    Always held in compressed form; ``hex()`` is the canonical external
    representation.
    """
    
    def __init__(self, key: Union[bytes, str, "PublicKey"]) -> None:
        """
        Initialize public key.
        
        Args:
            key: Public key as bytes, hex string, or another PublicKey
            
        Raises:
            ValidationError: If key is not a valid curve point
        """
        if isinstance(key, PublicKey):
            self._point = key._point
            return
            
        key_bytes = validate_public_key(key)
        try:
            secp_key = SecpPublicKey(key_bytes)
        except ValueError as e:
            raise ValidationError(f"Public key is not on the curve: {e}") from e
            
        self._point = PublicKeyBytes(secp_key.format(compressed=True))
        
    @classmethod
    def from_secp(cls, secp_key: SecpPublicKey) -> "PublicKey":
        return cls(secp_key.format(compressed=True))
        
    @property
    def point(self) -> PublicKeyBytes:
        """Get compressed public key bytes."""
        return self._point
        
    def hex(self) -> PublicKeyHex:
        """Get compressed public key as hex string."""
        return PublicKeyHex(self._point.hex())
        
    def account_id(self) -> AccountId:
        """Get the 20-byte account id of this key."""
        return AccountId(hash160(self._point))
        
    def address(self) -> Address:
        """Get the classic address of this key's account."""
        return encode_account_id(self.account_id())
        
    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PublicKey):
            return False
        return self._point == other._point
        
    def __hash__(self) -> int:
        return hash(self._point)
        
    def __repr__(self) -> str:
        return f"PublicKey({self.hex()})"
