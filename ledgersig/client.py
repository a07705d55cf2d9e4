"""Main ledgersig client."""

import logging
from typing import Any, Mapping, Optional, Union

from .constants import Network
from .crypto.seed import KeyDeriver, SeedDeriver
from .message import (
    HashValue,
    SecretKeyInput,
    sign_hash,
    sign_message,
    verify_hash_signature,
    verify_message_signature,
)
from .providers import BaseOracle, JsonRpcOracle
from .types.common import Base64Str
from .types.inputs import AccountSelector, SignedHash, SignedMessage, VerificationResult
from .utils.validation import AccountAddressCodec, AddressCodec

__all__ = ["MessageSigner"]

logger = logging.getLogger(__name__)


class MessageSigner:
    """
    Signs and verifies messages for ledger accounts.
    
    Bundles the authorization oracle, the address codec and the
    key-derivation service so callers do not pass them on every call.
    """
    
    def __init__(
        self,
        oracle: Optional[BaseOracle] = None,
        network: Network = Network.MAINNET,
        codec: Optional[AddressCodec] = None,
        deriver: Optional[KeyDeriver] = None,
    ) -> None:
        """
        Initialize client.
        
        Args:
            oracle: Authorization oracle (default: JsonRpcOracle)
            network: Network for the default oracle
            codec: Address codec (default: classic ledger addresses)
            deriver: Key-derivation service (default: SeedDeriver)
        """
        self._oracle = oracle or JsonRpcOracle(network=network)
        self._network = network
        self._codec = codec or AccountAddressCodec()
        self._deriver = deriver or SeedDeriver()
        
        logger.info(
            f"Initialized MessageSigner for {network.value} "
            f"with {self._oracle.__class__.__name__}"
        )
        
    @property
    def oracle(self) -> BaseOracle:
        """Get current oracle."""
        return self._oracle
        
    @property
    def network(self) -> Network:
        """Get current network."""
        return self._network
        
    def sign_message(
        self,
        message: Union[str, bytes],
        secret_key: SecretKeyInput,
        account: Optional[AccountSelector] = None,
    ) -> Base64Str:
        """Sign a message. See :func:`ledgersig.message.sign_message`."""
        return sign_message(message, secret_key, account, deriver=self._deriver)
        
    def sign_hash(
        self,
        hash: HashValue,
        secret_key: SecretKeyInput,
        account: Optional[AccountSelector] = None,
    ) -> Base64Str:
        """Sign a hash. See :func:`ledgersig.message.sign_hash`."""
        return sign_hash(hash, secret_key, account, deriver=self._deriver)
        
    async def verify_message(
        self, data: Union[SignedMessage, Mapping[str, Any]]
    ) -> VerificationResult:
        """Verify a message signature against the current oracle view."""
        return await verify_message_signature(data, self._oracle, codec=self._codec)
        
    async def verify_hash(
        self, data: Union[SignedHash, Mapping[str, Any]]
    ) -> VerificationResult:
        """Verify a hash signature against the current oracle view."""
        return await verify_hash_signature(data, self._oracle, codec=self._codec)
        
    async def connect(self) -> None:
        """Connect to oracle."""
        await self._oracle.connect()
        logger.info("Oracle connected")
        
    async def disconnect(self) -> None:
        """Disconnect from oracle."""
        await self._oracle.disconnect()
        logger.info("Oracle disconnected")
        
    async def is_connected(self) -> bool:
        """Check if the oracle is online."""
        return self._oracle.is_connected
        
    async def __aenter__(self) -> "MessageSigner":
        """Async context manager entry."""
        await self.connect()
        return self
        
    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Async context manager exit."""
        await self.disconnect()
        
    def __repr__(self) -> str:
        return f"MessageSigner(network={self._network.value}, oracle={self._oracle!r})"
