"""Typed Data Types for EIP-712 hashing and signing.

User-facing types for type dictionaries, domains and signatures.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, TypedDict, Union


class FieldDescriptor(TypedDict):
    """One field of a struct type."""

    name: str
    type: str


TypeDictionary = Dict[str, List[FieldDescriptor]]
"""Struct type name -> ordered field list."""

Message = Dict[str, Any]


class EIP712Domain(TypedDict, total=False):
    """EIP-712 signing domain. Only truthy keys become part of the domain type."""

    name: str
    version: str
    chainId: int
    verifyingContract: str
    salt: Union[str, bytes]


class TypedData(TypedDict):
    """Full typed-data payload, as accepted by ``eth_signTypedData_v4``."""

    domain: EIP712Domain
    primaryType: str
    message: Message
    types: TypeDictionary


@dataclass(frozen=True)
class PrimitiveType:
    """Field type encoded directly as an ABI word (``address``, ``uint256``, ...)."""

    name: str


@dataclass(frozen=True)
class StructType:
    """Field type naming another struct in the same type dictionary."""

    name: str


@dataclass(frozen=True)
class ArrayType:
    """Field type with a trailing ``[]`` or ``[N]``."""

    element_type: str


FieldKind = Union[PrimitiveType, StructType, ArrayType]


@dataclass
class Signature:
    """ECDSA signature split into its components."""

    r: str
    """32-byte hex string, 0x-prefixed."""

    s: str
    """32-byte hex string, 0x-prefixed."""

    v: str
    """Recovery id as 0x-prefixed hex (0x1b or 0x1c)."""

    def to_dict(self) -> Dict[str, str]:
        return {"r": self.r, "s": self.s, "v": self.v}

    def to_hex(self) -> str:
        """Packed 65-byte ``r || s || v`` hex string."""
        return "0x" + self.r[2:] + self.s[2:] + format(int(self.v, 16), "02x")
