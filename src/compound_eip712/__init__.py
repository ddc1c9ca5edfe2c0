"""EIP-712 typed-data hashing and signing for Compound authorizations."""

from .typed_data import (
    CyclicTypeError,
    EncodingError,
    LocalKeySigner,
    Signature,
    SigningError,
    TypedDataError,
    UnsupportedTypeError,
    WalletSigner,
    digest_to_sign,
    recover_signer,
    sign,
    sign_local,
    verify_signature,
)
from .authorizations import CompoundAuthorizer

__version__ = "0.1.0"

__all__ = [
    "CompoundAuthorizer",
    "CyclicTypeError",
    "EncodingError",
    "LocalKeySigner",
    "Signature",
    "SigningError",
    "TypedDataError",
    "UnsupportedTypeError",
    "WalletSigner",
    "digest_to_sign",
    "recover_signer",
    "sign",
    "sign_local",
    "verify_signature",
]
