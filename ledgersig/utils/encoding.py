"""Encoding and decoding utilities for ledgersig."""

import base64
import binascii
import hashlib
import re
from typing import Union

from ..constants import ACCOUNT_ID_VERSION, LEDGER_ALPHABET
from ..exceptions import InvalidSignatureEncodingError, ValidationError
from ..types.common import AccountId, Address, Base64Str, HexStr

__all__ = [
    "hex_to_bytes",
    "bytes_to_hex",
    "bytes_to_int",
    "sha512",
    "sha512_half",
    "double_sha256",
    "hash160",
    "encode_base58",
    "decode_base58",
    "encode_base58_check",
    "decode_base58_check",
    "encode_account_id",
    "decode_account_id",
    "encode_signature",
    "decode_signature",
]

BASE64_PATTERN = re.compile(
    r"(?:[A-Za-z0-9+/]{4})*(?:[A-Za-z0-9+/]{2}==|[A-Za-z0-9+/]{3}=)?"
)


def hex_to_bytes(hex_str: Union[HexStr, str]) -> bytes:
    """
    Convert hex string to bytes.
    
    Args:
        hex_str: Hex string with or without 0x prefix
        
    Returns:
        Decoded bytes
        
    Raises:
        ValidationError: If hex string is invalid
    """
    try:
        if isinstance(hex_str, str) and hex_str.startswith("0x"):
            hex_str = hex_str[2:]
        return bytes.fromhex(hex_str)
    except ValueError as e:
        raise ValidationError(f"Invalid hex string: {hex_str}") from e


def bytes_to_hex(data: bytes, upper: bool = False) -> HexStr:
    """Convert bytes to hex string."""
    hex_str = data.hex()
    if upper:
        hex_str = hex_str.upper()
    return HexStr(hex_str)


def bytes_to_int(data: bytes, byteorder: str = "big") -> int:
    """Convert bytes to non-negative integer."""
    return int.from_bytes(data, byteorder=byteorder)


def sha512(data: bytes) -> bytes:
    """SHA-512 digest."""
    return hashlib.sha512(data).digest()


def sha512_half(data: bytes) -> bytes:
    """First 32 bytes of the SHA-512 digest."""
    return hashlib.sha512(data).digest()[:32]


def double_sha256(data: bytes) -> bytes:
    """Perform double SHA256 hash."""
    return hashlib.sha256(hashlib.sha256(data).digest()).digest()


def hash160(data: bytes) -> bytes:
    """Perform RIPEMD160(SHA256(data))."""
    sha256_hash = hashlib.sha256(data).digest()
    return hashlib.new("ripemd160", sha256_hash).digest()


def encode_base58(data: bytes, alphabet: str = LEDGER_ALPHABET) -> str:
    """
    Encode bytes as Base58 string.
    
    Args:
        data: Bytes to encode
        alphabet: 58-character alphabet, ledger alphabet by default
        
    Returns:
        Base58 encoded string
    """
    n = bytes_to_int(data)
    
    encoded = ""
    while n:
        n, remainder = divmod(n, 58)
        encoded = alphabet[remainder] + encoded
        
    # Leading zero bytes map to the first alphabet character
    for byte in data:
        if byte == 0:
            encoded = alphabet[0] + encoded
        else:
            break
            
    return encoded


def decode_base58(string: str, alphabet: str = LEDGER_ALPHABET) -> bytes:
    """
    Decode Base58 string to bytes.
    
    Args:
        string: Base58 string
        alphabet: 58-character alphabet, ledger alphabet by default
        
    Returns:
        Decoded bytes
        
    Raises:
        ValidationError: If string contains invalid characters
    """
    n = 0
    for char in string:
        index = alphabet.find(char)
        if index < 0:
            raise ValidationError(f"Invalid Base58 character: {char}")
        n = n * 58 + index
        
    body = n.to_bytes((n.bit_length() + 7) // 8, "big")
    leading_zeros = len(string) - len(string.lstrip(alphabet[0]))
    return b"\x00" * leading_zeros + body


def encode_base58_check(data: bytes, alphabet: str = LEDGER_ALPHABET) -> str:
    """Encode bytes as Base58Check (with 4-byte double SHA256 checksum)."""
    checksum = double_sha256(data)[:4]
    return encode_base58(data + checksum, alphabet)


def decode_base58_check(string: str, alphabet: str = LEDGER_ALPHABET) -> bytes:
    """
    Decode Base58Check string.
    
    Args:
        string: Base58Check string
        alphabet: 58-character alphabet, ledger alphabet by default
        
    Returns:
        Decoded data (without checksum)
        
    Raises:
        ValidationError: If checksum is invalid
    """
    data = decode_base58(string, alphabet)
    if len(data) < 5:
        raise ValidationError("Invalid Base58Check string: too short")
        
    payload, checksum = data[:-4], data[-4:]
    if checksum != double_sha256(payload)[:4]:
        raise ValidationError("Invalid Base58Check checksum")
        
    return payload


def encode_account_id(account_id: bytes) -> Address:
    """
    Encode a 20-byte account id as a classic address.
    
    Raises:
        ValidationError: If the account id is not 20 bytes
    """
    if len(account_id) != 20:
        raise ValidationError("Account id must be 20 bytes")
    return Address(encode_base58_check(bytes([ACCOUNT_ID_VERSION]) + account_id))


def decode_account_id(address: str) -> AccountId:
    """
    Decode a classic address to its 20-byte account id.
    
    Raises:
        ValidationError: If address is invalid
    """
    if not isinstance(address, str) or not address:
        raise ValidationError("Address cannot be empty")
        
    decoded = decode_base58_check(address)
    if len(decoded) != 21:
        raise ValidationError("Invalid address length")
    if decoded[0] != ACCOUNT_ID_VERSION:
        raise ValidationError(f"Unknown address version: {decoded[0]:#04x}")
        
    return AccountId(decoded[1:])


def encode_signature(signature: bytes) -> Base64Str:
    """Encode signature bytes as Base64 transport text."""
    return Base64Str(base64.b64encode(bytes(signature)).decode("ascii"))


def decode_signature(signature: str) -> bytes:
    """
    Decode Base64 transport text to signature bytes.
    
    Only the shape of the text is checked here; whether the bytes form a
    usable signature is decided during public key recovery.
    
    Raises:
        InvalidSignatureEncodingError: If text is not canonical Base64
    """
    if not isinstance(signature, str) or not signature:
        raise InvalidSignatureEncodingError()
    if not BASE64_PATTERN.fullmatch(signature):
        raise InvalidSignatureEncodingError()
        
    try:
        return base64.b64decode(signature, validate=True)
    except (binascii.Error, ValueError) as e:
        raise InvalidSignatureEncodingError() from e
