"""
Exception definitions for typed-data encoding and signing.

Exception Hierarchy:
    TypedDataError (root)
    ├── EncodingError
    │   └── CyclicTypeError
    ├── UnsupportedTypeError
    └── SigningError
"""

from typing import Optional


class TypedDataError(Exception):
    """
    Root exception class for all typed-data errors.

    Catch this to handle any failure raised by the encoder or the signer.
    """
    pass


class EncodingError(TypedDataError):
    """
    Raised when a typed message cannot be encoded.

    This includes scenarios such as:
    - A struct type referenced by a field is missing from the type dictionary
    - A field value is missing from the message
    - A field value cannot be ABI-encoded as its declared type
    """

    def __init__(self, message: str, type_name: Optional[str] = None):
        super().__init__(message)
        self.type_name = type_name


class CyclicTypeError(EncodingError):
    """
    Raised when a struct type references itself, directly or through
    other struct types.
    """
    pass


class UnsupportedTypeError(TypedDataError):
    """
    Raised when a field declares an array type.

    Array members are not encoded; signing refuses to proceed instead.
    """

    def __init__(self, message: str, type_name: Optional[str] = None):
        super().__init__(message)
        self.type_name = type_name


class SigningError(TypedDataError):
    """
    Raised when producing a signature fails.

    This includes scenarios such as:
    - Private key access issues
    - Wallet JSON-RPC dispatch failure or user rejection
    - A returned signature that is not 65 bytes of hex

    The underlying exception is available as ``cause`` (and ``__cause__``).
    """

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.cause = cause
