"""COMP Delegation Signature Example.

This example creates a COMP delegation signature twice: once with a local
private key and once through a node's ``eth_signTypedData_v4`` (an unlocked
account on a local dev node, or any wallet behind a JSON-RPC endpoint).
The signature can then be submitted with ``delegateBySig`` by anyone.

Prerequisites:
1. pip install compound-eip712[examples]
2. Set environment variables:
   PRIVATE_KEY, DELEGATEE, optional RPC_URL and NONCE

Usage:
    python delegate_signature.py
"""

import asyncio
import logging
import os
from dotenv import load_dotenv

load_dotenv()

COMP_MAINNET = "0xc00e94Cb662C3520282E6f5717214004A7f26888"


async def main():
    # Import here to show what's needed
    from web3 import AsyncWeb3

    from compound_eip712 import CompoundAuthorizer, LocalKeySigner, WalletSigner
    from compound_eip712.typed_data import AsyncWeb3WalletProvider

    logging.basicConfig(level=logging.DEBUG)

    PRIVATE_KEY = os.environ.get("PRIVATE_KEY")
    DELEGATEE = os.environ.get("DELEGATEE")
    RPC_URL = os.environ.get("RPC_URL")
    NONCE = int(os.environ.get("NONCE", "0"))

    missing = [var for var in ("PRIVATE_KEY", "DELEGATEE") if not os.environ.get(var)]
    if missing:
        print(f"Missing required environment variables: {', '.join(missing)}")
        return

    authorizer = CompoundAuthorizer({
        "chain_id": 1,
        "comp_address": COMP_MAINNET,
    })

    print("\n[1] Signing with local key...")
    signer = LocalKeySigner.from_private_key(PRIVATE_KEY)
    print(f"    Signer: {signer.address}")
    signature = await authorizer.create_delegate_signature(signer, DELEGATEE, NONCE)
    print(f"    v={signature.v} r={signature.r} s={signature.s}")

    if not RPC_URL:
        print("\nRPC_URL not set, skipping wallet signing.")
        return

    print("\n[2] Signing through eth_signTypedData_v4...")
    w3 = AsyncWeb3(AsyncWeb3.AsyncHTTPProvider(RPC_URL))
    wallet = WalletSigner(AsyncWeb3WalletProvider(w3))
    signature = await authorizer.create_delegate_signature(wallet, DELEGATEE, NONCE)
    print(f"    v={signature.v} r={signature.r} s={signature.s}")


if __name__ == "__main__":
    asyncio.run(main())
