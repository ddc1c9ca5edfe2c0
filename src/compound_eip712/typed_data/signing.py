"""Typed Data Signing.

Provides EIP-712 signing that works with two kinds of signers:
- LocalKeySigner (private key held in-process, signs the raw digest)
- WalletSigner (browser extension, remote node; signs an
  ``eth_signTypedData_v4`` JSON payload over JSON-RPC)
"""

import logging
from dataclasses import dataclass
from typing import Any, List, Optional, Protocol, Union

from eth_account.signers.local import LocalAccount
from eth_keys import keys
from eth_keys.exceptions import BadSignature, ValidationError
from web3 import AsyncWeb3

from .digest import build_typed_data_payload, digest_to_sign
from .errors import SigningError
from .types import EIP712Domain, Message, Signature, TypeDictionary
from .utils import (
    SIGN_TYPED_DATA_V4,
    hex_to_bytes,
    normalize_v,
    split_signature,
    to_word_hex,
)

logger = logging.getLogger(__name__)


class DigestSigningKey(Protocol):
    """Protocol for keys that sign a 32-byte hash directly.

    ``eth_keys.keys.PrivateKey`` satisfies it; the returned object must
    expose integer ``r``, ``s`` and ``v`` attributes. ``public_key`` must
    provide ``to_checksum_address()``; it backs ``LocalKeySigner.address``.
    """

    public_key: Any

    def sign_msg_hash(self, message_hash: bytes) -> Any:
        ...


class WalletProvider(Protocol):
    """Protocol for wallets that can only sign a typed-data JSON payload."""

    async def get_address(self) -> str:
        """Get the address the wallet signs with."""
        ...

    async def json_rpc_fetch(self, method: str, params: List[Any]) -> Any:
        """Dispatch a raw JSON-RPC request and return its ``result``."""
        ...


@dataclass(frozen=True)
class LocalKeySigner:
    """Signer with direct access to a private key."""

    key: DigestSigningKey

    @classmethod
    def from_private_key(cls, private_key: Union[str, bytes]) -> "LocalKeySigner":
        """Create a signer from a private key.

        Args:
            private_key: 32-byte key as bytes or hex string (with or without 0x)

        Raises:
            SigningError: If the key is malformed
        """
        try:
            return cls(keys.PrivateKey(hex_to_bytes(private_key)))
        except Exception as e:
            raise SigningError(f"Invalid private key: {e}", e) from e

    @classmethod
    def from_account(cls, account: LocalAccount) -> "LocalKeySigner":
        """Create a signer from an ``eth_account`` local account."""
        return cls(keys.PrivateKey(bytes(account.key)))

    @property
    def address(self) -> str:
        """Checksum address derived from the key's ``public_key``."""
        return self.key.public_key.to_checksum_address()


@dataclass(frozen=True)
class WalletSigner:
    """Signer backed by a wallet's typed-data JSON-RPC method."""

    provider: WalletProvider
    rpc_method: str = SIGN_TYPED_DATA_V4


Signer = Union[LocalKeySigner, WalletSigner]


class AsyncWeb3WalletProvider:
    """WalletProvider over an ``AsyncWeb3`` connection.

    Uses the node's first unlocked account unless an address is given.
    """

    def __init__(self, w3: AsyncWeb3, address: Optional[str] = None) -> None:
        self._w3 = w3
        self._address = address

    async def get_address(self) -> str:
        if self._address:
            return self._address
        accounts = await self._w3.eth.accounts
        if not accounts:
            raise ValueError("Provider exposes no accounts")
        return accounts[0]

    async def json_rpc_fetch(self, method: str, params: List[Any]) -> Any:
        response = await self._w3.provider.make_request(method, params)
        if response.get("error"):
            raise ValueError(f"{method} failed: {response['error']}")
        return response["result"]


def _sign_digest(signer: LocalKeySigner, digest: bytes) -> Signature:
    try:
        raw = signer.key.sign_msg_hash(digest)
        v = normalize_v(int(raw.v))
        return Signature(r=to_word_hex(raw.r), s=to_word_hex(raw.s), v=hex(v))
    except Exception as e:
        logger.warning("Local key failed to sign digest 0x%s: %s", digest.hex(), e)
        raise SigningError(f"Failed to sign digest: {e}", e) from e


async def _sign_with_wallet(
    signer: WalletSigner,
    domain: EIP712Domain,
    primary_type: str,
    message: Message,
    types: TypeDictionary,
) -> Signature:
    try:
        address = await signer.provider.get_address()
        payload = build_typed_data_payload(domain, primary_type, message, types)
        logger.debug("Requesting %s from %s", signer.rpc_method, address)
        result = await signer.provider.json_rpc_fetch(
            signer.rpc_method, [address, payload]
        )
        r, s, v = split_signature(result)
    except Exception as e:
        logger.warning("Wallet failed to sign %s: %s", primary_type, e)
        raise SigningError(f"Wallet failed to sign typed data: {e}", e) from e

    return Signature(r=r, s=s, v=v)


def sign_local(
    domain: EIP712Domain,
    primary_type: str,
    message: Message,
    types: TypeDictionary,
    signer: LocalKeySigner,
) -> Signature:
    """Sign typed data with a local key, synchronously.

    Use this when you have direct access to a private key and no event loop.

    Returns:
        Signature with v normalized to 27/28

    Raises:
        EncodingError: If the message cannot be encoded
        UnsupportedTypeError: If a field is array-typed
        SigningError: If the key fails to sign
    """
    digest = digest_to_sign(domain, primary_type, message, types)
    return _sign_digest(signer, digest)


async def sign(
    domain: EIP712Domain,
    primary_type: str,
    message: Message,
    types: TypeDictionary,
    signer: Signer,
) -> Signature:
    """Sign EIP-712 typed data with any supported signer.

    The digest is always computed first, so encoding problems surface as
    EncodingError / UnsupportedTypeError before any key or wallet is touched.

    Args:
        domain: EIP-712 domain
        primary_type: Struct type of ``message``
        message: Message to sign
        types: Type dictionary (forwarded verbatim to wallets)
        signer: LocalKeySigner or WalletSigner

    Returns:
        Signature with r, s and v as hex strings

    Raises:
        EncodingError: If the message cannot be encoded
        UnsupportedTypeError: If a field is array-typed
        SigningError: If key access, RPC dispatch or signature parsing fails
    """
    digest = digest_to_sign(domain, primary_type, message, types)

    if isinstance(signer, LocalKeySigner):
        logger.debug("Signing %s digest with local key", primary_type)
        return _sign_digest(signer, digest)

    if isinstance(signer, WalletSigner):
        return await _sign_with_wallet(signer, domain, primary_type, message, types)

    raise TypeError(f"Unsupported signer type: {type(signer).__name__}")


def recover_signer(
    domain: EIP712Domain,
    primary_type: str,
    message: Message,
    types: TypeDictionary,
    signature: Union[Signature, str],
) -> str:
    """Recover the checksum address that produced ``signature``.

    Args:
        signature: Signature object or packed 65-byte hex string

    Raises:
        ValueError: If the signature is malformed
        eth_keys.exceptions.BadSignature: If no public key can be recovered
    """
    if isinstance(signature, Signature):
        r, s, v = signature.r, signature.s, signature.v
    else:
        r, s, v = split_signature(signature)

    digest = digest_to_sign(domain, primary_type, message, types)
    vrs = (normalize_v(int(v, 16)) - 27, int(r, 16), int(s, 16))
    public_key = keys.Signature(vrs=vrs).recover_public_key_from_msg_hash(digest)
    return public_key.to_checksum_address()


def verify_signature(
    domain: EIP712Domain,
    primary_type: str,
    message: Message,
    types: TypeDictionary,
    signature: Union[Signature, str],
    expected_signer: str,
) -> bool:
    """Verify a typed-data signature locally (EOA signatures only).

    Returns:
        True if the signature is valid and from ``expected_signer``
    """
    try:
        recovered = recover_signer(domain, primary_type, message, types, signature)
    except (ValueError, BadSignature, ValidationError):
        return False
    return recovered.lower() == expected_signer.lower()
