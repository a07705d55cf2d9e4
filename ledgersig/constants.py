"""Constants and configuration for ledgersig."""

from enum import Enum

__all__ = [
    "Network",
    "API_ENDPOINTS",
    "DEFAULT_TIMEOUT",
    "MAX_RETRIES",
    "RETRY_DELAY",
    "USER_AGENT",
    "MAGIC_PREFIX",
    "LEDGER_ALPHABET",
    "ACCOUNT_ID_VERSION",
    "FAMILY_SEED_VERSION",
    "LSF_DISABLE_MASTER",
    "DEFAULT_MAX_LOOPS",
    "RECOVERY_ID_OFFSET",
    "SIGNATURE_LENGTH",
    "N",
]


class Network(Enum):
    """Ledger networks with public JSON-RPC servers."""
    
    MAINNET = "mainnet"
    TESTNET = "testnet"
    DEVNET = "devnet"


API_ENDPOINTS = {
    Network.MAINNET: "https://s1.ripple.com:51234",
    Network.TESTNET: "https://s.altnet.rippletest.net:51234",
    Network.DEVNET: "https://s.devnet.rippletest.net:51234",
}

# Provider settings
DEFAULT_TIMEOUT = 30
MAX_RETRIES = 3
RETRY_DELAY = 1.0
USER_AGENT = "ledgersig-python/1.0.0"

# Domain separation prefix for free-form messages
MAGIC_PREFIX = "Ripple Signed Message:\n"

# Address and seed encoding
LEDGER_ALPHABET = "rpshnaf39wBUDNEGHJKLM4PQRST7VWXYZ2bcdeCg65jkm8oFqi1tuvAxyz"
ACCOUNT_ID_VERSION = 0x00
FAMILY_SEED_VERSION = 0x21

# AccountRoot flag: master key pair disabled
LSF_DISABLE_MASTER = 0x00100000

# Account indexes searched when deriving a key for a given address
DEFAULT_MAX_LOOPS = 1

# Signature layout: [27 + recovery id] || r || s
RECOVERY_ID_OFFSET = 27
SIGNATURE_LENGTH = 65

# secp256k1 group order
N = 0xFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFEBAAEDCE6AF48A03BBFD25E8CD0364141
