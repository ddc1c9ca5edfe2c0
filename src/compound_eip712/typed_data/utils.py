"""Utility functions for typed-data hashing and signing."""

from typing import Tuple, Union

from eth_utils import is_hex, remove_0x_prefix, to_bytes

# Fixed prefix of every EIP-712 digest pre-image
EIP712_PREFIX = b"\x19\x01"

# Wallet RPC method for signing typed data
SIGN_TYPED_DATA_V4 = "eth_signTypedData_v4"

SIGNATURE_HEX_LENGTH = 130  # 65 bytes


def to_word_hex(value: int) -> str:
    """Format an integer as a 0x-prefixed 32-byte hex string.

    Args:
        value: Non-negative integer below 2**256

    Returns:
        Hex string with 64 hex digits (e.g., "0x00...01")
    """
    return "0x" + value.to_bytes(32, "big").hex()


def hex_to_bytes(value: Union[str, bytes]) -> bytes:
    """Accept raw bytes or a 0x-prefixed hex string and return bytes."""
    if isinstance(value, (bytes, bytearray)):
        return bytes(value)
    return to_bytes(hexstr=value)


def normalize_v(v: int) -> int:
    """Convert a recovery id to the 27/28 convention.

    Args:
        v: Raw recovery id (0 or 1) or already-normalized id (27 or 28)

    Returns:
        27 or 28

    Raises:
        ValueError: If v is none of 0, 1, 27, 28
    """
    if v in (0, 1):
        return v + 27
    if v in (27, 28):
        return v
    raise ValueError(f"Invalid recovery id: {v}")


def split_signature(signature: str) -> Tuple[str, str, str]:
    """Split a packed 65-byte hex signature into r, s and v hex strings.

    Args:
        signature: Hex string ``r || s || v`` with or without 0x prefix

    Returns:
        Tuple of 0x-prefixed (r, s, v) hex strings

    Raises:
        ValueError: If the signature is not 65 bytes of hex
    """
    if not isinstance(signature, str) or not is_hex(signature):
        raise ValueError(f"Signature is not a hex string: {signature!r}")

    body = remove_0x_prefix(signature)
    if len(body) != SIGNATURE_HEX_LENGTH:
        raise ValueError(
            f"Invalid signature length: {len(body) // 2} bytes. Expected: 65 bytes"
        )

    r = "0x" + body[0:64]
    s = "0x" + body[64:128]
    v = "0x" + body[128:130]
    return r, s, v
