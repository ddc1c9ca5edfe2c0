"""EIP-712 Typed Data Module.

This module provides deterministic hashing and signing of EIP-712 typed
structured data.

Key components:
- Type encoding (dependency resolution, canonical type strings, type hashes)
- Struct data encoding and hashing
- Domain separator and signing digest
- Signing with a local key or a JSON-RPC wallet

Example usage:
    ```python
    from compound_eip712.typed_data import (
        LocalKeySigner,
        digest_to_sign,
        sign,
    )

    domain = {
        "name": "Compound",
        "chainId": 1,
        "verifyingContract": "0xc00e94Cb662C3520282E6f5717214004A7f26888",
    }
    types = {
        "Delegation": [
            {"name": "delegatee", "type": "address"},
            {"name": "nonce", "type": "uint256"},
            {"name": "expiry", "type": "uint256"},
        ],
    }
    message = {"delegatee": "0x...", "nonce": 0, "expiry": 10_000_000_000}

    # 32-byte digest
    digest = digest_to_sign(domain, "Delegation", message, types)

    # Sign with private key
    signer = LocalKeySigner.from_private_key("0x...")
    signature = await sign(domain, "Delegation", message, types, signer)
    ```
"""

from .types import (
    ArrayType,
    EIP712Domain,
    FieldDescriptor,
    FieldKind,
    Message,
    PrimitiveType,
    Signature,
    StructType,
    TypedData,
    TypeDictionary,
)
from .errors import (
    CyclicTypeError,
    EncodingError,
    SigningError,
    TypedDataError,
    UnsupportedTypeError,
)
from .encoding import (
    classify_field_type,
    dependencies,
    encode_data,
    encode_type,
    struct_hash,
    type_hash,
)
from .digest import (
    DOMAIN_FIELDS,
    build_typed_data,
    build_typed_data_payload,
    digest_to_sign,
    domain_separator,
    domain_type,
)
from .signing import (
    AsyncWeb3WalletProvider,
    DigestSigningKey,
    LocalKeySigner,
    Signer,
    WalletProvider,
    WalletSigner,
    recover_signer,
    sign,
    sign_local,
    verify_signature,
)
from .utils import (
    SIGN_TYPED_DATA_V4,
    normalize_v,
    split_signature,
)

__all__ = [
    # Types
    "ArrayType",
    "EIP712Domain",
    "FieldDescriptor",
    "FieldKind",
    "Message",
    "PrimitiveType",
    "Signature",
    "StructType",
    "TypedData",
    "TypeDictionary",
    # Errors
    "CyclicTypeError",
    "EncodingError",
    "SigningError",
    "TypedDataError",
    "UnsupportedTypeError",
    # Encoding
    "classify_field_type",
    "dependencies",
    "encode_data",
    "encode_type",
    "struct_hash",
    "type_hash",
    # Digest
    "DOMAIN_FIELDS",
    "build_typed_data",
    "build_typed_data_payload",
    "digest_to_sign",
    "domain_separator",
    "domain_type",
    # Signing
    "AsyncWeb3WalletProvider",
    "DigestSigningKey",
    "LocalKeySigner",
    "Signer",
    "WalletProvider",
    "WalletSigner",
    "recover_signer",
    "sign",
    "sign_local",
    "verify_signature",
    # Utils
    "SIGN_TYPED_DATA_V4",
    "normalize_v",
    "split_signature",
]
