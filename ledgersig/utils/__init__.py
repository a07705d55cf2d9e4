"""Utility functions for ledgersig."""

from ..utils.encoding import (
    hex_to_bytes,
    bytes_to_hex,
    sha512,
    sha512_half,
    hash160,
    encode_base58_check,
    decode_base58_check,
    encode_account_id,
    decode_account_id,
    encode_signature,
    decode_signature,
)
from ..utils.validation import (
    to_hash_input,
    normalize_hash,
    is_valid_address,
    validate_address,
    AddressCodec,
    AccountAddressCodec,
)

__all__ = [
    # Encoding
    "hex_to_bytes",
    "bytes_to_hex",
    "sha512",
    "sha512_half",
    "hash160",
    "encode_base58_check",
    "decode_base58_check",
    "encode_account_id",
    "decode_account_id",
    "encode_signature",
    "decode_signature",
    
    # Validation
    "to_hash_input",
    "normalize_hash",
    "is_valid_address",
    "validate_address",
    "AddressCodec",
    "AccountAddressCodec",
]
