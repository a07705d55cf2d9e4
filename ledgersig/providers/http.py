"""JSON-RPC authorization oracle over HTTP."""

import asyncio
import logging
from typing import Any, Optional

import aiohttp
from aiohttp import ClientSession, ClientTimeout

from ..constants import (
    API_ENDPOINTS,
    DEFAULT_TIMEOUT,
    LSF_DISABLE_MASTER,
    MAX_RETRIES,
    RETRY_DELAY,
    USER_AGENT,
    Network,
)
from ..crypto.keys import PublicKey
from ..exceptions import (
    APIError,
    NetworkError,
    OracleUnavailableError,
    ProviderError,
    RateLimitError,
    TimeoutError,
)
from ..providers.base import BaseOracle, ConnectionState

__all__ = ["JsonRpcOracle"]

logger = logging.getLogger(__name__)

ACCOUNT_NOT_FOUND = "actNotFound"
SLOW_DOWN = "slowDown"


class JsonRpcOracle(BaseOracle):
    """
    Authorization oracle backed by a ledger server's JSON-RPC API.
    
    A key is active for an account when it is the account's regular key,
    or the account's master key while the master key is not disabled.
    Unfunded accounts only accept their master key.
    """
    
    def __init__(
        self,
        network: Network = Network.MAINNET,
        endpoint: Optional[str] = None,
        timeout: int = DEFAULT_TIMEOUT,
        session: Optional[ClientSession] = None,
        proxy: Optional[str] = None,
        headers: Optional[dict[str, str]] = None,
        ledger_index: str = "validated",
        check_connection: bool = True,
    ) -> None:
        """
        Initialize JSON-RPC oracle.
        
        Args:
            network: Network to connect to
            endpoint: Custom server URL (overrides default)
            timeout: Request timeout in seconds
            session: Existing aiohttp session to use
            proxy: Proxy URL for requests
            headers: Additional headers for requests
            ledger_index: Ledger to read account state from
            check_connection: Ping the server before going online
        """
        super().__init__(network)
        
        self.endpoint = (endpoint or API_ENDPOINTS[network]).rstrip("/")
        self.timeout = ClientTimeout(total=timeout)
        self.proxy = proxy
        self.ledger_index = ledger_index
        self.check_connection = check_connection
        
        self.headers = {
            "User-Agent": USER_AGENT,
            "Content-Type": "application/json",
            **(headers or {}),
        }
        
        # Session management
        self._session = session
        self._owns_session = session is None
        self._state = ConnectionState.OFFLINE
        
    async def connect(self) -> None:
        """Open HTTP session and, optionally, ping the server."""
        self._state = ConnectionState.CONNECTING
        
        if self._session is None:
            self._session = ClientSession(
                timeout=self.timeout,
                headers=self.headers,
            )
            
        if self.check_connection:
            try:
                await self._call("ping", {})
            except ProviderError:
                self._state = ConnectionState.OFFLINE
                raise
                
        self._state = ConnectionState.ONLINE
        self._logger.info(f"Connected to {self.endpoint}")
        
    async def disconnect(self) -> None:
        """Close HTTP session."""
        if self._session and self._owns_session:
            await self._session.close()
            self._session = None
            
        self._state = ConnectionState.OFFLINE
        self._logger.info("Disconnected from oracle")
        
    @property
    def state(self) -> ConnectionState:
        if self._state is ConnectionState.ONLINE and (
            self._session is None or self._session.closed
        ):
            return ConnectionState.OFFLINE
        return self._state
        
    async def request(self, method: str, params: Optional[dict[str, Any]] = None) -> dict[str, Any]:
        """
        Call a JSON-RPC method with retries.
        
        Args:
            method: JSON-RPC method name
            params: Method parameters
            
        Returns:
            The ``result`` object of a successful response
            
        Raises:
            OracleUnavailableError: If not connected
            APIError: If the server reports an error
            RateLimitError: If rate limited on every attempt
            NetworkError: If the request failed on every attempt
        """
        if not self.is_connected:
            raise OracleUnavailableError()
        return await self._call(method, params or {})
        
    async def _call(self, method: str, params: dict[str, Any]) -> dict[str, Any]:
        for attempt in range(MAX_RETRIES):
            try:
                return await self._make_request(method, params)
                
            except (RateLimitError, TimeoutError):
                if attempt == MAX_RETRIES - 1:
                    raise
                    
            except NetworkError as e:
                if attempt == MAX_RETRIES - 1:
                    raise NetworkError(f"Request failed after {MAX_RETRIES} attempts") from e
                    
            # Exponential backoff
            await asyncio.sleep(RETRY_DELAY * (2 ** attempt))
            
        raise NetworkError(f"Request failed after {MAX_RETRIES} attempts")
        
    async def _make_request(self, method: str, params: dict[str, Any]) -> dict[str, Any]:
        """Make actual HTTP request."""
        if self._session is None:
            raise OracleUnavailableError()
            
        body = {"method": method, "params": [params]}
        
        try:
            self._logger.debug(f"Request: {method} {params}")
            
            async with self._session.post(
                self.endpoint,
                json=body,
                proxy=self.proxy,
            ) as response:
                self._logger.debug(f"Response: {response.status}")
                
                if response.status in (429, 503):
                    retry_after = response.headers.get("Retry-After")
                    raise RateLimitError(
                        "Rate limit exceeded",
                        retry_after=int(retry_after) if retry_after and retry_after.isdigit() else None
                    )
                    
                if response.status >= 500:
                    text = await response.text()
                    raise NetworkError(f"Server error {response.status}: {text}")
                    
                if response.status >= 400:
                    text = await response.text()
                    raise APIError(f"Client error {response.status}: {text}", code=response.status)
                    
                try:
                    payload = await response.json(content_type=None)
                except ValueError as e:
                    raise ProviderError(f"Invalid JSON response: {e}") from e
                    
        except asyncio.TimeoutError as e:
            raise TimeoutError("Request timed out") from e
        except aiohttp.ClientError as e:
            raise NetworkError(f"Network error: {e}") from e
            
        return self._parse_result(payload)
        
    def _parse_result(self, payload: Any) -> dict[str, Any]:
        """Extract ``result`` from a JSON-RPC response."""
        if not isinstance(payload, dict) or not isinstance(payload.get("result"), dict):
            raise ProviderError("Malformed JSON-RPC response: missing result")
            
        result = payload["result"]
        if result.get("status") == "error" or "error" in result:
            error = result.get("error", "unknown")
            if error == SLOW_DOWN:
                raise RateLimitError("Server asked to slow down")
            message = result.get("error_message") or error
            raise APIError(f"Server error: {message}", code=error, data=result)
            
        return result
        
    async def account_info(self, account: str) -> dict[str, Any]:
        """
        Get the AccountRoot fields of an account.
        
        Raises:
            APIError: With code ``actNotFound`` for unfunded accounts
        """
        result = await self.request(
            "account_info",
            {"account": account, "ledger_index": self.ledger_index},
        )
        account_data = result.get("account_data")
        if not isinstance(account_data, dict):
            raise ProviderError("Malformed account_info response: missing account_data")
        return account_data
        
    async def is_key_active(self, public_key_hex: str, account: str) -> bool:
        key_account = PublicKey(public_key_hex).address()
        
        try:
            account_data = await self.account_info(account)
        except APIError as e:
            if e.code == ACCOUNT_NOT_FOUND:
                # Unfunded accounts can only be controlled by their master key
                self._logger.debug(f"Account {account} not found, checking master key")
                return key_account == account
            raise
            
        regular_key = account_data.get("RegularKey")
        if regular_key and regular_key == key_account:
            return True
            
        try:
            flags = int(account_data.get("Flags", 0))
        except (TypeError, ValueError) as e:
            raise ProviderError(f"Malformed account flags for {account}") from e
        if account_data.get("Account") == key_account and not flags & LSF_DISABLE_MASTER:
            return True
            
        return False
        
    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(endpoint={self.endpoint}, state={self.state.value})"
