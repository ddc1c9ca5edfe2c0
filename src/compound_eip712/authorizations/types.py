"""Authorization Types for Compound signatures.

EIP-712 struct definitions and authorizer configuration.
"""

from dataclasses import dataclass
from typing import Optional, TypedDict

from ..typed_data import TypeDictionary


# Default delegation expiry (unix seconds)
DEFAULT_DELEGATION_EXPIRY = 10_000_000_000

COMP_DOMAIN_NAME = "Compound"
GOVERNOR_BRAVO_DOMAIN_NAME = "Compound Governor Bravo"

# Vote support values accepted by Governor Bravo
VOTE_SUPPORT_VALUES = (0, 1, 2)


# EIP-712 types for COMP vote delegation
DELEGATION_TYPES: TypeDictionary = {
    "Delegation": [
        {"name": "delegatee", "type": "address"},
        {"name": "nonce", "type": "uint256"},
        {"name": "expiry", "type": "uint256"},
    ],
}

# EIP-712 types for Governor Bravo ballots
BALLOT_TYPES: TypeDictionary = {
    "Ballot": [
        {"name": "proposalId", "type": "uint256"},
        {"name": "support", "type": "uint8"},
    ],
}

# EIP-712 types for Comet manager authorization
AUTHORIZATION_TYPES: TypeDictionary = {
    "Authorization": [
        {"name": "owner", "type": "address"},
        {"name": "manager", "type": "address"},
        {"name": "isAllowed", "type": "bool"},
        {"name": "nonce", "type": "uint256"},
        {"name": "expiry", "type": "uint256"},
    ],
}


class AuthorizerConfig(TypedDict, total=False):
    """Configuration for CompoundAuthorizer."""

    chain_id: int
    """Chain ID. Default: 1 (Ethereum mainnet)"""

    comp_address: str
    """COMP token contract, the verifying contract for delegations"""

    governor_address: str
    """Governor Bravo contract, the verifying contract for ballots"""

    delegation_expiry: int
    """Default delegation expiry (unix seconds). Default: 10_000_000_000"""


@dataclass
class ResolvedAuthorizerConfig:
    """Authorizer configuration with all defaults applied."""

    chain_id: int
    comp_address: Optional[str]
    governor_address: Optional[str]
    delegation_expiry: int
