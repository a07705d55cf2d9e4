"""
Message signing and verification.

Signatures are recoverable: the verifier reconstructs the signer's public
key from the hash and signature alone, then asks an authorization oracle
whether that key may currently sign for the claimed account.

Free-form messages are hashed with ``MAGIC_PREFIX`` prepended so that a
signature over a message can never be passed off as covering some other
data that happens to share its hash.
"""

import logging
from typing import Any, Mapping, Optional, Union

from .authorization import check_authorization
from .constants import MAGIC_PREFIX
from .crypto.keys import PrivateKey
from .crypto.seed import KeyDeriver, Seed, resolve_secret_key
from .crypto.signature import recover_public_key, sign_hash_recoverable
from .exceptions import (
    InvalidAccountError,
    InvalidHashError,
    InvalidMessageError,
    LedgerSigError,
    OracleUnavailableError,
)
from .providers.base import BaseOracle
from .types.common import Base64Str
from .types.inputs import (
    AccountSelector,
    HashInput,
    KeyInput,
    SignedHash,
    SignedMessage,
    VerificationResult,
)
from .utils.encoding import decode_signature, encode_signature, sha512
from .utils.validation import AccountAddressCodec, AddressCodec, normalize_hash

__all__ = [
    "hash_message",
    "sign_message",
    "sign_hash",
    "verify_message_signature",
    "verify_hash_signature",
]

logger = logging.getLogger(__name__)

SecretKeyInput = Union[KeyInput, PrivateKey, Seed, str, bytes]
HashValue = Union[HashInput, str, bytes, bytearray, memoryview]

_default_codec = AccountAddressCodec()


def hash_message(message: Union[str, bytes]) -> bytes:
    """
    Hash a free-form message with the domain separation prefix.
    
    Raises:
        InvalidMessageError: If message is not text or bytes
    """
    if isinstance(message, str):
        message = message.encode("utf-8")
    elif isinstance(message, (bytes, bytearray)):
        message = bytes(message)
    else:
        raise InvalidMessageError("Message must be a string or bytes")
    return sha512(MAGIC_PREFIX.encode("utf-8") + message)


def sign_message(
    message: Union[str, bytes],
    secret_key: SecretKeyInput,
    account: Optional[AccountSelector] = None,
    *,
    deriver: Optional[KeyDeriver] = None,
) -> Base64Str:
    """
    Produce a Base64 recoverable signature over a message.
    
    The message is prefixed with ``MAGIC_PREFIX`` and hashed with SHA-512
    before signing.
    
    Args:
        message: Message to sign
        secret_key: PrivateKey, or seed material for the key-derivation service
        account: Account selecting which seed-derived key signs; the seed's
            default account when omitted
        deriver: Key-derivation service, ``SeedDeriver`` by default
        
    Returns:
        Base64-encoded signature
    """
    return sign_hash(hash_message(message), secret_key, account, deriver=deriver)


def sign_hash(
    hash: HashValue,
    secret_key: SecretKeyInput,
    account: Optional[AccountSelector] = None,
    *,
    deriver: Optional[KeyDeriver] = None,
) -> Base64Str:
    """
    Produce a Base64 recoverable signature over a hash.
    
    Args:
        hash: Hex string or raw bytes
        secret_key: PrivateKey, or seed material for the key-derivation service
        account: Account selecting which seed-derived key signs
        deriver: Key-derivation service, ``SeedDeriver`` by default
        
    Returns:
        Base64-encoded signature
        
    Raises:
        InvalidHashError: If hash is empty or not hex
        InvalidSeedError: If seed material is invalid
        SigningError: If the signing primitive fails
    """
    hash_bytes = normalize_hash(hash)
    private_key = resolve_secret_key(secret_key, account, deriver)
    
    signature = sign_hash_recoverable(hash_bytes, private_key)
    return encode_signature(signature.to_bytes())


def _as_signed_message(data: Union[SignedMessage, Mapping[str, Any]]) -> SignedMessage:
    if isinstance(data, SignedMessage):
        return data
    if isinstance(data, Mapping):
        return SignedMessage.from_dict(data)
    raise InvalidMessageError("Data must contain message field to verify signature")


def _as_signed_hash(data: Union[SignedHash, Mapping[str, Any]]) -> SignedHash:
    if isinstance(data, SignedHash):
        return data
    if isinstance(data, Mapping):
        return SignedHash.from_dict(data)
    raise InvalidHashError("Data must contain hash field to verify signature")


async def verify_message_signature(
    data: Union[SignedMessage, Mapping[str, Any]],
    oracle: BaseOracle,
    *,
    codec: Optional[AddressCodec] = None,
) -> VerificationResult:
    """
    Verify the signature on a message.
    
    Args:
        data: SignedMessage, or a mapping with ``message``, ``account`` (or
            ``address``) and ``signature``
        oracle: Connected authorization oracle
        codec: Address codec, classic ledger addresses by default
        
    Returns:
        VerificationResult unpacking as ``(error, is_valid)``
    """
    try:
        signed = _as_signed_message(data)
        message_hash = hash_message(signed.message)
    except LedgerSigError as e:
        logger.warning(f"Rejected message signature: {e}")
        return VerificationResult.failure(e)
        
    return await _verify(
        message_hash, signed.account, signed.signature, oracle, codec or _default_codec
    )


async def verify_hash_signature(
    data: Union[SignedHash, Mapping[str, Any]],
    oracle: BaseOracle,
    *,
    codec: Optional[AddressCodec] = None,
) -> VerificationResult:
    """
    Verify the signature on a hash.
    
    Steps run in order and stop at the first failure: hash, account,
    signature encoding, oracle connection, key recovery, authorization.
    
    Args:
        data: SignedHash, or a mapping with ``hash``, ``account`` (or
            ``address``) and ``signature``
        oracle: Connected authorization oracle
        codec: Address codec, classic ledger addresses by default
        
    Returns:
        VerificationResult unpacking as ``(error, is_valid)``
    """
    try:
        signed = _as_signed_hash(data)
        hash_bytes = normalize_hash(signed.hash)
    except LedgerSigError as e:
        logger.warning(f"Rejected hash signature: {e}")
        return VerificationResult.failure(e)
        
    return await _verify(
        hash_bytes, signed.account, signed.signature, oracle, codec or _default_codec
    )


async def _verify(
    hash_bytes: bytes,
    account: Any,
    signature: Any,
    oracle: BaseOracle,
    codec: AddressCodec,
) -> VerificationResult:
    try:
        if not account or not codec.is_valid_account(account):
            raise InvalidAccountError()
            
        signature_bytes = decode_signature(signature)
        
        if oracle is None or not oracle.is_connected:
            raise OracleUnavailableError()
            
        public_key = recover_public_key(hash_bytes, signature_bytes)
        logger.debug(f"Recovered public key {public_key.hex()} for {account}")
        
        is_valid = await check_authorization(public_key.hex(), account, oracle)
        
    except LedgerSigError as e:
        logger.warning(f"Signature verification failed for {account!r}: {e}")
        return VerificationResult.failure(e)
        
    if not is_valid:
        logger.info(f"Key {public_key.hex()} is not active for {account}")
    return VerificationResult.verdict(is_valid)
