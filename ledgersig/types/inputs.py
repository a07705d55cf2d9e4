"""Input and result types for signing and verification."""

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Mapping, NamedTuple, Optional, Union

from ..exceptions import LedgerSigError
from ..types.common import Address as AddressStr, Base64Str, HexStr

if TYPE_CHECKING:
    from ..crypto.keys import PrivateKey

__all__ = [
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


@dataclass(frozen=True)
class HexHash:
    """Hash supplied as hex text."""
    
    value: HexStr


@dataclass(frozen=True)
class RawHash:
    """Hash supplied as already decoded bytes."""
    
    value: bytes


HashInput = Union[HexHash, RawHash]

AccountSelector = Union[int, str]
"""Account index or address used to pick a key derived from a seed."""


@dataclass(frozen=True)
class DirectKey:
    """Secret key handle used as is."""
    
    key: "PrivateKey"


@dataclass(frozen=True)
class SeedKey:
    """Seed material to be handed to the key-derivation service."""
    
    material: Union[str, bytes]
    account: Optional[AccountSelector] = None
    
    def __repr__(self) -> str:
        return f"SeedKey(material=***, account={self.account!r})"


KeyInput = Union[DirectKey, SeedKey]


def _account_field(data: Mapping[str, Any]) -> Any:
    # "address" is accepted as an alias of "account"
    return data.get("account") or data.get("address")


@dataclass(frozen=True)
class SignedMessage:
    """A free-form message with its claimed signer and signature."""
    
    message: Union[str, bytes]
    account: AddressStr
    signature: Base64Str
    
    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "SignedMessage":
        return cls(
            message=data.get("message"),
            account=_account_field(data),
            signature=data.get("signature"),
        )


@dataclass(frozen=True)
class SignedHash:
    """A hash with its claimed signer and signature."""
    
    hash: Union[HashInput, str, bytes]
    account: AddressStr
    signature: Base64Str
    
    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "SignedHash":
        return cls(
            hash=data.get("hash"),
            account=_account_field(data),
            signature=data.get("signature"),
        )


class VerificationResult(NamedTuple):
    """
    Outcome of a verification.
    
    Unpacks as ``(error, is_valid)``. ``is_valid`` is only ever True
    when ``error`` is None.
    """
    
    error: Optional[LedgerSigError]
    is_valid: bool
    
    @classmethod
    def failure(cls, error: LedgerSigError) -> "VerificationResult":
        return cls(error=error, is_valid=False)
    
    @classmethod
    def verdict(cls, is_valid: bool) -> "VerificationResult":
        return cls(error=None, is_valid=is_valid)
    
    @property
    def ok(self) -> bool:
        """True when the signature was verified as currently authorized."""
        return self.error is None and self.is_valid
