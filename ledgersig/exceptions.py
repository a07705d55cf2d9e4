"""ledgersig exceptions hierarchy."""

from typing import Any, Optional

__all__ = [
    "LedgerSigError",
    "ValidationError",
    "InvalidHashError",
    "InvalidAccountError",
    "InvalidSignatureEncodingError",
    "InvalidMessageError",
    "InvalidSeedError",
    "CryptoError",
    "SigningError",
    "SignatureRecoveryError",
    "KeyDerivationError",
    "ProviderError",
    "OracleError",
    "OracleUnavailableError",
    "NetworkError",
    "TimeoutError",
    "RateLimitError",
    "APIError",
]


class LedgerSigError(Exception):
    """Base exception for all ledgersig errors."""
    
    def __init__(
        self, 
        message: str, 
        code: Optional[Any] = None, 
        data: Optional[Any] = None
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
        self.data = data
        
    def __str__(self) -> str:
        if self.code:
            return f"[{self.code}] {self.message}"
        return self.message


class ValidationError(LedgerSigError):
    """Raised when input validation fails."""
    pass


class InvalidHashError(ValidationError):
    """Raised when a hash is neither raw bytes nor a hex string."""
    
    def __init__(self, message: str = "Hash must be raw bytes or a hex-encoded string") -> None:
        super().__init__(message)


class InvalidAccountError(ValidationError):
    """Raised when an account identifier is not a valid address."""
    
    def __init__(self, message: str = "Account must be a valid ledger address") -> None:
        super().__init__(message)


class InvalidSignatureEncodingError(ValidationError):
    """Raised when a signature is not a Base64-encoded string."""
    
    def __init__(self, message: str = "Signature must be a Base64-encoded string") -> None:
        super().__init__(message)


class InvalidMessageError(ValidationError):
    """Raised when a message to sign or verify is missing or not text."""
    pass


class InvalidSeedError(ValidationError):
    """Raised when seed material cannot be parsed."""
    pass


class CryptoError(LedgerSigError):
    """Raised when cryptographic operation fails."""
    pass


class SigningError(CryptoError):
    """Raised when the signing primitive fails."""
    pass


class SignatureRecoveryError(CryptoError):
    """Raised when no public key can be recovered from a signature."""
    
    def __init__(self, message: str = "Could not recover public key from signature") -> None:
        super().__init__(message)


class KeyDerivationError(CryptoError):
    """Raised when no key matching the requested account can be derived."""
    pass


class ProviderError(LedgerSigError):
    """Raised when the authorization oracle encounters an error."""
    pass


class OracleError(ProviderError):
    """Raised when the oracle gives an unusable answer."""
    pass


class OracleUnavailableError(OracleError):
    """Raised when the oracle is not connected."""
    
    def __init__(self, message: str = "Must supply connected oracle to verify signature") -> None:
        super().__init__(message)


class NetworkError(ProviderError):
    """Raised when network communication fails."""
    pass


class TimeoutError(NetworkError):
    """Raised when operation times out."""
    pass


class RateLimitError(NetworkError):
    """Raised when rate limit is exceeded."""
    
    def __init__(
        self, 
        message: str = "Rate limit exceeded",
        retry_after: Optional[int] = None
    ) -> None:
        super().__init__(message)
        self.retry_after = retry_after


class APIError(ProviderError):
    """Raised when the server returns an error response."""
    pass
