"""Validation utilities for ledgersig."""

import re
from abc import ABC, abstractmethod
from typing import Any, Union

from ..constants import N
from ..exceptions import InvalidAccountError, InvalidHashError, ValidationError
from ..types.common import Address
from ..types.inputs import HashInput, HexHash, RawHash
from ..utils.encoding import decode_account_id

__all__ = [
    "to_hash_input",
    "normalize_hash",
    "is_valid_address",
    "validate_address",
    "AddressCodec",
    "AccountAddressCodec",
    "is_valid_private_key",
    "validate_private_key",
    "validate_public_key",
]

# Regex patterns
HEX_PATTERN = re.compile(r"[0-9a-fA-F]+")


def to_hash_input(value: Union[HashInput, str, bytes, bytearray, memoryview]) -> HashInput:
    """
    Tag a caller supplied hash with its encoding.
    
    Text is tagged as hex, bytes-like values as raw. Values that are
    already tagged are returned unchanged.
    
    Raises:
        InvalidHashError: If value is neither text nor bytes-like
    """
    if isinstance(value, (HexHash, RawHash)):
        return value
    if isinstance(value, str):
        return HexHash(value)
    if isinstance(value, (bytes, bytearray, memoryview)):
        return RawHash(bytes(value))
    raise InvalidHashError()


def normalize_hash(value: Union[HashInput, str, bytes, bytearray, memoryview]) -> bytes:
    """
    Convert a hash to its canonical byte form.
    
    Args:
        value: Hex text, raw bytes, or an already tagged hash
        
    Returns:
        Non-empty hash bytes
        
    Raises:
        InvalidHashError: If the hash is empty or not hex
    """
    tagged = to_hash_input(value)
    
    if isinstance(tagged, HexHash):
        text = tagged.value
        if not isinstance(text, str) or not HEX_PATTERN.fullmatch(text):
            raise InvalidHashError()
        if len(text) % 2:
            # Odd digit counts keep their integer value
            text = "0" + text
        try:
            return bytes.fromhex(text)
        except ValueError as e:
            raise InvalidHashError() from e
        
    raw = tagged.value
    if not isinstance(raw, (bytes, bytearray, memoryview)) or len(raw) == 0:
        raise InvalidHashError()
    return bytes(raw)


def is_valid_address(address: Any) -> bool:
    """
    Check if classic address format is valid.
    
    Args:
        address: Address to validate
        
    Returns:
        True if valid, False otherwise
    """
    try:
        decode_account_id(address)
        return True
    except ValidationError:
        return False


def validate_address(address: Any) -> Address:
    """
    Validate classic address and return it.
    
    Raises:
        InvalidAccountError: If address is invalid
    """
    if not address:
        raise InvalidAccountError()
    if not is_valid_address(address):
        raise InvalidAccountError(f"Invalid ledger address: {address}")
    return Address(address)


class AddressCodec(ABC):
    """Decides whether an account identifier is syntactically valid."""
    
    @abstractmethod
    def is_valid_account(self, identifier: Any) -> bool:
        raise NotImplementedError


class AccountAddressCodec(AddressCodec):
    """Classic base58check ledger addresses (r...)."""
    
    def is_valid_account(self, identifier: Any) -> bool:
        return is_valid_address(identifier)
        
    def __repr__(self) -> str:
        return f"{self.__class__.__name__}()"


def is_valid_private_key(key: Union[str, bytes]) -> bool:
    """Check if private key is 32 bytes (or 64 hex digits) within [1, n)."""
    try:
        validate_private_key(key)
        return True
    except ValidationError:
        return False


def validate_private_key(key: Union[str, bytes]) -> bytes:
    """
    Validate private key and return as bytes.
    
    Args:
        key: Private key as hex string or bytes
        
    Returns:
        Private key as 32 bytes
        
    Raises:
        ValidationError: If private key is invalid
    """
    if isinstance(key, str):
        if key.startswith("0x"):
            key = key[2:]
        if not HEX_PATTERN.fullmatch(key):
            raise ValidationError("Private key must be hexadecimal")
        try:
            key = bytes.fromhex(key)
        except ValueError as e:
            raise ValidationError(f"Invalid hex private key: {e}") from e
            
    if not isinstance(key, (bytes, bytearray)):
        raise ValidationError("Private key must be bytes or hex string")
    if len(key) != 32:
        raise ValidationError(f"Private key must be 32 bytes, got {len(key)}")
        
    key_int = int.from_bytes(key, "big")
    if key_int == 0:
        raise ValidationError("Private key cannot be zero")
    if key_int >= N:
        raise ValidationError("Private key exceeds curve order")
        
    return bytes(key)


def validate_public_key(key: Union[str, bytes]) -> bytes:
    """
    Validate public key encoding and return as bytes.
    
    Args:
        key: Public key as hex string or bytes
        
    Returns:
        Public key bytes (33 or 65 bytes)
        
    Raises:
        ValidationError: If public key is invalid
    """
    if isinstance(key, str):
        if not HEX_PATTERN.fullmatch(key):
            raise ValidationError("Public key must be hexadecimal")
        try:
            key = bytes.fromhex(key)
        except ValueError as e:
            raise ValidationError(f"Invalid hex public key: {e}") from e
            
    if len(key) == 33:
        if key[0] not in (0x02, 0x03):
            raise ValidationError("Compressed public key must start with 0x02 or 0x03")
    elif len(key) == 65:
        if key[0] != 0x04:
            raise ValidationError("Uncompressed public key must start with 0x04")
    else:
        raise ValidationError(f"Public key must be 33 or 65 bytes, got {len(key)}")
        
    return bytes(key)
