"""Family seeds, deterministic account keys and secret key resolution."""

import logging
import re
import secrets
from abc import ABC, abstractmethod
from typing import Optional, Union

from ..constants import DEFAULT_MAX_LOOPS, FAMILY_SEED_VERSION, N
from ..crypto.keys import PrivateKey
from ..exceptions import InvalidSeedError, KeyDerivationError, ValidationError
from ..types.inputs import AccountSelector, DirectKey, KeyInput, SeedKey
from ..utils.encoding import (
    decode_base58_check,
    encode_base58_check,
    sha512,
    sha512_half,
)
from ..utils.validation import validate_address

__all__ = [
    "Seed",
    "KeyDeriver",
    "SeedDeriver",
    "to_key_input",
    "resolve_secret_key",
]

logger = logging.getLogger(__name__)

SEED_LENGTH = 16
SEED_HEX_PATTERN = re.compile(r"[0-9a-fA-F]{32}")


def _is_valid_scalar(candidate: bytes) -> bool:
    value = int.from_bytes(candidate, "big")
    return 0 < value < N


class Seed:
    """
    16 bytes of family seed entropy.
    
    A seed yields a root key and from it a sequence of account keys; the
    key at index 0 belongs to the seed's default account.
    """
    
    def __init__(self, entropy: bytes) -> None:
        if not isinstance(entropy, (bytes, bytearray)) or len(entropy) != SEED_LENGTH:
            raise InvalidSeedError(f"Seed entropy must be {SEED_LENGTH} bytes")
        self._entropy = bytes(entropy)
        
    @classmethod
    def generate(cls) -> "Seed":
        """Create new random seed."""
        return cls(secrets.token_bytes(SEED_LENGTH))
        
    @classmethod
    def from_passphrase(cls, passphrase: str) -> "Seed":
        """Seed from the first 16 bytes of SHA-512 of the passphrase."""
        return cls(sha512(passphrase.encode("utf-8"))[:SEED_LENGTH])
        
    @classmethod
    def from_json(cls, value: Union[str, bytes, "Seed"]) -> "Seed":
        """
        Parse seed material.
        
        Accepts an encoded family seed (``s...``), 32 hex digits of entropy,
        16 raw bytes, or any other non-empty text as a passphrase.
        
        Raises:
            InvalidSeedError: If the material cannot be a seed
        """
        if isinstance(value, Seed):
            return value
            
        if isinstance(value, (bytes, bytearray)):
            return cls(value)
            
        if not isinstance(value, str) or not value:
            raise InvalidSeedError("Seed material must be non-empty text or 16 bytes")
            
        if SEED_HEX_PATTERN.fullmatch(value):
            return cls(bytes.fromhex(value))
            
        if value.startswith("s"):
            try:
                payload = decode_base58_check(value)
            except ValidationError:
                payload = b""
            if len(payload) == SEED_LENGTH + 1 and payload[0] == FAMILY_SEED_VERSION:
                return cls(payload[1:])
            logger.debug("Seed text is not a family seed, treating it as a passphrase")
            
        return cls.from_passphrase(value)
        
    @property
    def entropy(self) -> bytes:
        return self._entropy
        
    def to_json(self) -> str:
        """Encode as family seed text."""
        return encode_base58_check(bytes([FAMILY_SEED_VERSION]) + self._entropy)
        
    def root_key(self) -> PrivateKey:
        """Get the root (generator) private key."""
        seq = 0
        while True:
            candidate = sha512_half(self._entropy + seq.to_bytes(4, "big"))
            if _is_valid_scalar(candidate):
                return PrivateKey(candidate)
            seq += 1
            
    def account_key(self, index: int, root: Optional[PrivateKey] = None) -> PrivateKey:
        """
        Derive the private key of the account at ``index``.
        
        Args:
            index: Account index, 0 for the default account
            root: Root key, computed when omitted
        """
        if index < 0:
            raise KeyDerivationError(f"Account index must be non-negative, got {index}")
            
        root = root or self.root_key()
        public_generator = root.public_key().point
        
        sub = 0
        while True:
            candidate = sha512_half(
                public_generator + index.to_bytes(4, "big") + sub.to_bytes(4, "big")
            )
            if _is_valid_scalar(candidate):
                break
            sub += 1
            
        secret = (int.from_bytes(root.secret, "big") + int.from_bytes(candidate, "big")) % N
        return PrivateKey(secret.to_bytes(32, "big"))
        
    def get_key(
        self,
        account: Optional[AccountSelector] = None,
        max_loops: int = DEFAULT_MAX_LOOPS,
    ) -> PrivateKey:
        """
        Get the private key for an account of this seed.
        
        Args:
            account: None for the default account, an account index, or an
                address to search for among the first ``max_loops`` accounts
            max_loops: Number of account indexes to search for an address
            
        Returns:
            Matching PrivateKey
            
        Raises:
            InvalidAccountError: If account is not a valid address
            KeyDerivationError: If no derived key matches the address
        """
        if account is None:
            return self.account_key(0)
            
        if isinstance(account, int) and not isinstance(account, bool):
            return self.account_key(account)
            
        target = validate_address(account)
        root = self.root_key()
        for index in range(max_loops):
            key = self.account_key(index, root)
            if key.address() == target:
                return key
                
        raise KeyDerivationError(
            f"Too many loops looking for a key yielding {target} from seed"
        )
        
    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Seed):
            return False
        return self._entropy == other._entropy
        
    def __repr__(self) -> str:
        return "Seed(***)"


class KeyDeriver(ABC):
    """Turns seed material into a private key handle."""
    
    @abstractmethod
    def derive(
        self,
        seed_material: Union[str, bytes],
        account: Optional[AccountSelector] = None,
    ) -> PrivateKey:
        """
        Derive the key for ``account``, or for the default account.
        
        Raises:
            InvalidSeedError: If the seed material is invalid
        """
        raise NotImplementedError


class SeedDeriver(KeyDeriver):
    """Key derivation from family seeds."""
    
    def __init__(self, max_loops: int = DEFAULT_MAX_LOOPS) -> None:
        self.max_loops = max_loops
        
    def derive(
        self,
        seed_material: Union[str, bytes],
        account: Optional[AccountSelector] = None,
    ) -> PrivateKey:
        return Seed.from_json(seed_material).get_key(account, max_loops=self.max_loops)
        
    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(max_loops={self.max_loops})"


def to_key_input(
    key: Union[KeyInput, PrivateKey, Seed, str, bytes],
    account: Optional[AccountSelector] = None,
) -> KeyInput:
    """
    Tag a caller supplied secret key with its kind.
    
    A PrivateKey is used directly; seed material is tagged for derivation
    with ``account`` as selector.
    
    Raises:
        InvalidSeedError: If key is neither a key handle nor seed material
    """
    if isinstance(key, DirectKey):
        return key
    if isinstance(key, SeedKey):
        if key.account is None and account is not None:
            return SeedKey(key.material, account)
        return key
    if isinstance(key, PrivateKey):
        return DirectKey(key)
    if isinstance(key, Seed):
        return SeedKey(key.entropy, account)
    if isinstance(key, (str, bytes, bytearray)):
        return SeedKey(bytes(key) if isinstance(key, bytearray) else key, account)
    raise InvalidSeedError("Secret key must be a PrivateKey or seed material")


def resolve_secret_key(
    key: Union[KeyInput, PrivateKey, Seed, str, bytes],
    account: Optional[AccountSelector] = None,
    deriver: Optional[KeyDeriver] = None,
) -> PrivateKey:
    """
    Get a usable private key handle.
    
    Direct keys pass through unchanged; seed material goes to ``deriver``
    (``SeedDeriver`` by default) whose errors propagate as raised.
    """
    key_input = to_key_input(key, account)
    
    if isinstance(key_input, DirectKey):
        if not isinstance(key_input.key, PrivateKey):
            raise InvalidSeedError("Direct key must be a PrivateKey")
        return key_input.key
        
    deriver = deriver or SeedDeriver()
    logger.debug(f"Deriving key via {deriver!r} for account {key_input.account!r}")
    return deriver.derive(key_input.material, key_input.account)
