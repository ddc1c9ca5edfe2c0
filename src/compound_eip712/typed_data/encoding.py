"""EIP-712 Struct Encoding.

Implements the ``encodeType`` / ``hashStruct`` half of EIP-712:
- Dependency resolution (primary type first, the rest alphabetical)
- Canonical type strings and type hashes
- Struct data encoding into 32-byte ABI words
"""

from typing import Any, List, Mapping, Optional, Set, Tuple

from eth_abi import encode, is_encodable_type
from eth_abi.exceptions import EncodingError as ABIEncodingError
from eth_utils import keccak

from .errors import CyclicTypeError, EncodingError, UnsupportedTypeError
from .types import ArrayType, FieldKind, PrimitiveType, StructType, TypeDictionary
from .utils import hex_to_bytes


def classify_field_type(type_name: str, types: TypeDictionary) -> FieldKind:
    """Resolve a declared field type to a struct, array or primitive type.

    Args:
        type_name: Type as declared on the field (e.g. "Person", "uint256[]")
        types: Type dictionary the field belongs to

    Returns:
        StructType, ArrayType or PrimitiveType

    Raises:
        EncodingError: If the type is neither a known struct nor an ABI type
    """
    if type_name in types:
        return StructType(type_name)
    if type_name.endswith("]"):
        return ArrayType(type_name[: type_name.rindex("[")])
    if is_encodable_type(type_name):
        return PrimitiveType(type_name)
    raise EncodingError(f"Type '{type_name}' not defined in types", type_name)


def dependencies(
    primary_type: str,
    types: TypeDictionary,
    found: Optional[List[str]] = None,
    _in_progress: Optional[Set[str]] = None,
) -> List[str]:
    """Recursively find all struct types referenced by ``primary_type``.

    Args:
        primary_type: Type name to start from
        types: Type dictionary
        found: Types already discovered (extended in place)

    Returns:
        Discovered struct type names in first-seen order, ``primary_type``
        first. Names missing from ``types`` contribute nothing.

    Raises:
        CyclicTypeError: If a type is reached again while still being expanded
    """
    if found is None:
        found = []
    if _in_progress is None:
        _in_progress = set()

    # Arrays of structs depend on their element type
    if "[" in primary_type:
        primary_type = primary_type[: primary_type.index("[")]

    if primary_type in _in_progress:
        raise CyclicTypeError(
            f"Type '{primary_type}' references itself", primary_type
        )
    if primary_type in found or primary_type not in types:
        return found

    found.append(primary_type)
    _in_progress.add(primary_type)
    for field in types[primary_type]:
        dependencies(field["type"], types, found, _in_progress)
    _in_progress.discard(primary_type)

    return found


def encode_type(primary_type: str, types: TypeDictionary) -> str:
    """Render the canonical EIP-712 type string.

    The primary type comes first, followed by every other referenced struct
    sorted by name. Fields keep their declared order.

    Example:
        ``Mail(Person from,Person to,string contents)Person(string name,address wallet)``

    Raises:
        EncodingError: If a type in the dependency chain is not defined
    """
    if primary_type not in types:
        raise EncodingError(f"Type '{primary_type}' not defined in types", primary_type)

    deps = [t for t in dependencies(primary_type, types) if t != primary_type]
    ordered = [primary_type] + sorted(deps)

    result = ""
    for type_name in ordered:
        fields = types[type_name]
        for field in fields:
            classify_field_type(field["type"], types)
        members = ",".join(f"{field['type']} {field['name']}" for field in fields)
        result += f"{type_name}({members})"
    return result


def type_hash(primary_type: str, types: TypeDictionary) -> bytes:
    """keccak256 of the canonical type string."""
    return keccak(text=encode_type(primary_type, types))


def _coerce_primitive(abi_type: str, value: Any) -> Any:
    # Wallet-style JSON messages carry big integers and byte strings as text
    if isinstance(value, str):
        if abi_type.startswith(("uint", "int")):
            return int(value, 16) if value.startswith("0x") else int(value)
        if abi_type.startswith("bytes"):
            value = hex_to_bytes(value)

    if abi_type.startswith("bytes") and isinstance(value, (bytes, bytearray)):
        size = int(abi_type[len("bytes"):])
        if len(value) != size:
            raise ValueError(
                f"incorrect data length: expected {size} bytes, got {len(value)}"
            )
    return value


def _encode_field(
    name: str, declared_type: str, value: Any, types: TypeDictionary
) -> Tuple[str, Any]:
    if declared_type == "string":
        if isinstance(value, str):
            value = value.encode("utf-8")
        return "bytes32", keccak(value)

    if declared_type == "bytes":
        return "bytes32", keccak(hex_to_bytes(value))

    kind = classify_field_type(declared_type, types)

    if isinstance(kind, StructType):
        if not isinstance(value, Mapping):
            raise EncodingError(
                f"Value for field '{name}' must be a mapping for struct type "
                f"'{kind.name}'",
                kind.name,
            )
        return "bytes32", keccak(encode_data(kind.name, value, types))

    if isinstance(kind, ArrayType):
        raise UnsupportedTypeError(
            f"Array field '{name}' of type '{declared_type}' is not supported",
            declared_type,
        )

    return kind.name, _coerce_primitive(kind.name, value)


def encode_data(primary_type: str, data: Mapping[str, Any], types: TypeDictionary) -> bytes:
    """Encode struct data as the pre-image of its struct hash.

    Output is the type hash followed by one 32-byte word per field, in
    declared order. Strings, bytes and nested structs are hashed first.

    Args:
        primary_type: Struct type of ``data``
        data: Field name -> value
        types: Type dictionary

    Returns:
        ABI-encoded bytes (32 * (1 + number of fields) long)

    Raises:
        EncodingError: If a type is undefined or a value is missing or invalid
        UnsupportedTypeError: If a field is array-typed
    """
    if primary_type not in types:
        raise EncodingError(f"Type '{primary_type}' not defined in types", primary_type)

    words = [type_hash(primary_type, types)]

    for field in types[primary_type]:
        name, declared_type = field["name"], field["type"]
        if name not in data:
            raise EncodingError(
                f"Missing value for field '{name}' of type '{declared_type}'",
                primary_type,
            )

        try:
            abi_type, value = _encode_field(name, declared_type, data[name], types)
            words.append(encode([abi_type], [value]))
        except (ABIEncodingError, ValueError, TypeError) as e:
            raise EncodingError(
                f"Cannot encode field '{name}' of type '{declared_type}': {e}",
                primary_type,
            ) from e

    return b"".join(words)


def struct_hash(primary_type: str, data: Mapping[str, Any], types: TypeDictionary) -> bytes:
    """keccak256 of ``encode_data``."""
    return keccak(encode_data(primary_type, data, types))
