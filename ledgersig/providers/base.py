"""Base authorization oracle interface for ledgersig."""

from abc import ABC, abstractmethod
from enum import Enum
import logging

from ..constants import Network

__all__ = ["BaseOracle", "ConnectionState"]

logger = logging.getLogger(__name__)


class ConnectionState(str, Enum):
    """Connection state of an oracle."""
    
    OFFLINE = "offline"
    CONNECTING = "connecting"
    ONLINE = "online"


class BaseOracle(ABC):
    """
    Abstract authorization oracle.
    
    An oracle holds the current ledger view and answers whether a public
    key is presently active for an account. Retry and timeout policy
    belong to the oracle, not to its callers.
    """
    
    def __init__(self, network: Network = Network.MAINNET) -> None:
        """
        Initialize oracle with network.
        
        Args:
            network: Ledger network the oracle answers for
        """
        self.network = network
        self._logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")
        
    @abstractmethod
    async def is_key_active(self, public_key_hex: str, account: str) -> bool:
        """
        Check whether a public key is currently active for an account.
        
        Args:
            public_key_hex: Compressed public key as hex
            account: Classic address of the account
            
        Returns:
            True if the key may currently sign for the account
            
        Raises:
            ProviderError: If the oracle cannot answer
        """
        raise NotImplementedError
        
    @abstractmethod
    async def connect(self) -> None:
        """
        Connect to the oracle.
        
        Raises:
            ProviderError: If connection fails
        """
        raise NotImplementedError
        
    @abstractmethod
    async def disconnect(self) -> None:
        """
        Disconnect from the oracle.
        """
        raise NotImplementedError
        
    @property
    @abstractmethod
    def state(self) -> ConnectionState:
        """Current connection state."""
        raise NotImplementedError
        
    @property
    def is_connected(self) -> bool:
        """
        Check if oracle is online.
        
        Returns:
            True if connected, False otherwise
        """
        return self.state is ConnectionState.ONLINE
        
    async def __aenter__(self) -> "BaseOracle":
        """Async context manager entry."""
        await self.connect()
        return self
        
    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Async context manager exit."""
        await self.disconnect()
        
    def __repr__(self) -> str:
        """String representation of oracle."""
        return f"{self.__class__.__name__}(network={self.network.value}, state={self.state.value})"
