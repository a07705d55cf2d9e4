"""Authorization check of recovered public keys."""

import logging

from .exceptions import LedgerSigError, OracleError, OracleUnavailableError
from .providers.base import BaseOracle

__all__ = ["check_authorization"]

logger = logging.getLogger(__name__)


async def check_authorization(public_key_hex: str, account: str, oracle: BaseOracle) -> bool:
    """
    Ask the oracle whether a key is currently active for an account.
    
    The answer reflects the oracle's present view only and is never cached:
    the set of keys allowed to sign for an account changes over time.
    
    Args:
        public_key_hex: Compressed public key as hex
        account: Classic address of the account
        oracle: Connected authorization oracle
        
    Returns:
        The oracle's verdict
        
    Raises:
        OracleUnavailableError: If the oracle is not online
        OracleError: If the oracle fails or answers with something other than a bool
        ProviderError: Propagated from the oracle
    """
    if oracle is None or not oracle.is_connected:
        raise OracleUnavailableError()
        
    logger.debug(f"Checking key {public_key_hex} for {account}")
    try:
        verdict = await oracle.is_key_active(public_key_hex, account)
    except LedgerSigError:
        raise
    except Exception as e:
        raise OracleError(f"Oracle request failed: {e}") from e
    
    if not isinstance(verdict, bool):
        raise OracleError(f"Oracle returned a non-boolean verdict: {verdict!r}")
        
    return verdict
