"""EIP-712 Domain Separator and Signing Digest.

Builds the ``EIP712Domain`` struct from whichever domain fields are set,
and assembles the final ``0x1901``-prefixed digest a signer signs.
"""

import json
import logging
from typing import Any, List

from eth_utils import keccak

from .encoding import struct_hash
from .types import EIP712Domain, FieldDescriptor, Message, TypedData, TypeDictionary
from .utils import EIP712_PREFIX

logger = logging.getLogger(__name__)

# Every possible EIP712Domain field, in canonical order
DOMAIN_FIELDS: List[FieldDescriptor] = [
    {"name": "name", "type": "string"},
    {"name": "version", "type": "string"},
    {"name": "chainId", "type": "uint256"},
    {"name": "verifyingContract", "type": "address"},
    {"name": "salt", "type": "bytes32"},
]


def domain_type(domain: EIP712Domain) -> List[FieldDescriptor]:
    """Field list of the ``EIP712Domain`` type for this domain.

    Fields whose value is absent or falsy are left out of the type entirely.

    Args:
        domain: EIP-712 domain dictionary

    Returns:
        Subset of DOMAIN_FIELDS, in canonical order
    """
    return [dict(field) for field in DOMAIN_FIELDS if domain.get(field["name"])]


def domain_separator(domain: EIP712Domain) -> bytes:
    """Hash the domain as an ``EIP712Domain`` struct."""
    types = {"EIP712Domain": domain_type(domain)}
    return struct_hash("EIP712Domain", domain, types)


def digest_to_sign(
    domain: EIP712Domain,
    primary_type: str,
    message: Message,
    types: TypeDictionary,
) -> bytes:
    """Compute the 32-byte EIP-712 digest.

    ``keccak256(0x1901 || domainSeparator || hashStruct(message))``

    Args:
        domain: EIP-712 domain
        primary_type: Struct type of ``message``
        message: Message to sign
        types: Type dictionary (may also contain ``EIP712Domain``)

    Returns:
        Digest bytes
    """
    separator = domain_separator(domain)
    message_hash = struct_hash(primary_type, message, types)
    digest = keccak(EIP712_PREFIX + separator + message_hash)
    logger.debug(
        "Computed %s digest 0x%s (domain separator 0x%s)",
        primary_type,
        digest.hex(),
        separator.hex(),
    )
    return digest


def build_typed_data(
    domain: EIP712Domain,
    primary_type: str,
    message: Message,
    types: TypeDictionary,
) -> TypedData:
    """Wrap the four parts in a ``TypedData`` envelope, in wallet key order."""
    return {
        "domain": domain,
        "primaryType": primary_type,
        "message": message,
        "types": types,
    }


def _json_default(value: Any) -> Any:
    if isinstance(value, (bytes, bytearray)):
        return "0x" + bytes(value).hex()
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def build_typed_data_payload(
    domain: EIP712Domain,
    primary_type: str,
    message: Message,
    types: TypeDictionary,
) -> str:
    """Serialize typed data to the compact JSON string wallets expect.

    Key order is preserved and no whitespace is emitted, so the payload is
    byte-for-byte what ``JSON.stringify`` would produce for the same objects.
    Byte values are rendered as 0x-prefixed hex.
    """
    return json.dumps(
        build_typed_data(domain, primary_type, message, types),
        separators=(",", ":"),
        ensure_ascii=False,
        default=_json_default,
    )
