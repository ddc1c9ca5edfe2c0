"""Compound authorization signatures built on the typed-data module."""

from .compound import (
    CompoundAuthorizer,
    build_allow_typed_data,
    build_delegation_typed_data,
    build_vote_typed_data,
)
from .types import (
    AUTHORIZATION_TYPES,
    BALLOT_TYPES,
    DEFAULT_DELEGATION_EXPIRY,
    DELEGATION_TYPES,
    AuthorizerConfig,
    ResolvedAuthorizerConfig,
)

__all__ = [
    "CompoundAuthorizer",
    "build_allow_typed_data",
    "build_delegation_typed_data",
    "build_vote_typed_data",
    "AUTHORIZATION_TYPES",
    "BALLOT_TYPES",
    "DEFAULT_DELEGATION_EXPIRY",
    "DELEGATION_TYPES",
    "AuthorizerConfig",
    "ResolvedAuthorizerConfig",
]
