"""
ledgersig usage examples

Signs a message with a family seed and verifies it against a public
ledger server.
"""

import asyncio
import logging

import ledgersig
from ledgersig import Network, Seed

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)


def signing_example() -> str:
    """Example 1: Sign a message offline."""
    print("\n=== Signing Example ===")
    
    seed = Seed.from_json("masterpassphrase")
    key = seed.get_key()
    
    signature = ledgersig.sign_message("hello", seed.to_json())
    print(f"Account:    {key.address()}")
    print(f"Public key: {key.public_key().hex()}")
    print(f"Signature:  {signature}")
    return signature


async def verification_example(signature: str) -> None:
    """Example 2: Verify against the current ledger state."""
    print("\n=== Verification Example ===")
    
    async with ledgersig.connect(network=Network.MAINNET) as signer:
        error, is_valid = await signer.verify_message({
            "message": "hello",
            "account": "rHb9CJAWyB4rj91VRWn96DkukG4bwdtyTh",
            "signature": signature,
        })
        
    if error is not None:
        print(f"Verification failed: {error}")
    else:
        print(f"Signature valid: {is_valid}")


async def main() -> None:
    signature = signing_example()
    await verification_example(signature)


if __name__ == "__main__":
    asyncio.run(main())
