"""Compound Authorization Signatures.

Builds and signs the EIP-712 messages Compound contracts accept in place of
a transaction from the signer:

- Delegation: delegate COMP voting power (``delegateBySig``)
- Ballot: cast a Governor Bravo vote (``castVoteBySig``)
- Authorization: allow a Comet manager (``allowBySig``)

Nonces and contract metadata are read on-chain by the caller and passed in.
"""

import logging
from typing import Optional

from eth_utils import is_address, to_checksum_address

from ..typed_data import (
    EIP712Domain,
    Signature,
    Signer,
    TypedData,
    domain_type,
    sign,
)
from .types import (
    AUTHORIZATION_TYPES,
    BALLOT_TYPES,
    COMP_DOMAIN_NAME,
    DEFAULT_DELEGATION_EXPIRY,
    DELEGATION_TYPES,
    GOVERNOR_BRAVO_DOMAIN_NAME,
    VOTE_SUPPORT_VALUES,
    AuthorizerConfig,
    ResolvedAuthorizerConfig,
)

logger = logging.getLogger(__name__)


def _require_address(label: str, value: Optional[str]) -> str:
    if not value or not is_address(value):
        raise ValueError(f"Invalid {label}: {value}")
    return value


def _typed_data(domain: EIP712Domain, primary_type: str, message, types) -> TypedData:
    return {
        "domain": domain,
        "primaryType": primary_type,
        "message": message,
        "types": {"EIP712Domain": domain_type(domain), **types},
    }


def build_delegation_typed_data(
    delegatee: str,
    nonce: int,
    comp_address: str,
    chain_id: int = 1,
    expiry: int = DEFAULT_DELEGATION_EXPIRY,
) -> TypedData:
    """Build the typed data for a COMP delegation.

    Args:
        delegatee: Address to delegate voting power to
        nonce: Signer's current ``nonces(address)`` on the COMP contract
        comp_address: COMP token contract address
        chain_id: Chain ID (default: 1)
        expiry: Unix timestamp after which the signature is void

    Returns:
        TypedData ready for ``sign`` or ``eth_signTypedData_v4``

    Raises:
        ValueError: If an address is invalid
    """
    _require_address("delegatee", delegatee)
    _require_address("COMP address", comp_address)

    domain: EIP712Domain = {
        "name": COMP_DOMAIN_NAME,
        "chainId": chain_id,
        "verifyingContract": comp_address,
    }
    message = {"delegatee": delegatee, "nonce": nonce, "expiry": expiry}
    return _typed_data(domain, "Delegation", message, DELEGATION_TYPES)


def build_vote_typed_data(
    proposal_id: int,
    support: int,
    governor_address: str,
    chain_id: int = 1,
) -> TypedData:
    """Build the typed data for a Governor Bravo ballot.

    Args:
        proposal_id: Proposal to vote on
        support: 0 (against), 1 (for) or 2 (abstain)
        governor_address: Governor Bravo contract address
        chain_id: Chain ID (default: 1)

    Raises:
        ValueError: If support is out of range or the address is invalid
    """
    if support not in VOTE_SUPPORT_VALUES:
        raise ValueError(f"Invalid support: {support}. Must be one of 0, 1, 2")
    _require_address("governor address", governor_address)

    domain: EIP712Domain = {
        "name": GOVERNOR_BRAVO_DOMAIN_NAME,
        "chainId": chain_id,
        "verifyingContract": governor_address,
    }
    message = {"proposalId": proposal_id, "support": support}
    return _typed_data(domain, "Ballot", message, BALLOT_TYPES)


def build_allow_typed_data(
    owner: str,
    manager: str,
    is_allowed: bool,
    nonce: int,
    expiry: int,
    comet_address: str,
    comet_name: str,
    comet_version: str,
    chain_id: int = 1,
) -> TypedData:
    """Build the typed data for a Comet manager authorization.

    Args:
        owner: Account granting (or revoking) the permission
        manager: Account receiving it; checksummed before signing
        is_allowed: True to allow, False to revoke
        nonce: Owner's current ``userNonce(address)`` on the Comet contract
        expiry: Unix timestamp after which the signature is void
        comet_address: Comet market contract address
        comet_name: Comet ``name()``
        comet_version: Comet ``version()``
        chain_id: Chain ID (default: 1)

    Raises:
        ValueError: If an address is invalid
    """
    _require_address("owner", owner)
    _require_address("manager", manager)
    _require_address("Comet address", comet_address)

    domain: EIP712Domain = {
        "name": comet_name,
        "version": comet_version,
        "chainId": chain_id,
        "verifyingContract": comet_address,
    }
    message = {
        "owner": owner,
        "manager": to_checksum_address(manager),
        "isAllowed": is_allowed,
        "nonce": nonce,
        "expiry": expiry,
    }
    return _typed_data(domain, "Authorization", message, AUTHORIZATION_TYPES)


async def _sign_typed_data(typed_data: TypedData, signer: Signer) -> Signature:
    return await sign(
        typed_data["domain"],
        typed_data["primaryType"],
        typed_data["message"],
        typed_data["types"],
        signer,
    )


class CompoundAuthorizer:
    """Creates Compound authorization signatures for one network.

    Example:
        ```python
        authorizer = CompoundAuthorizer({
            "chain_id": 1,
            "comp_address": "0xc00e94Cb662C3520282E6f5717214004A7f26888",
            "governor_address": "0xc0Da02939E1441F497fd74F78cE7Decb17B66529",
        })

        signer = LocalKeySigner.from_private_key("0x...")
        signature = await authorizer.create_delegate_signature(
            signer, delegatee="0x...", nonce=0
        )
        ```
    """

    def __init__(self, config: Optional[AuthorizerConfig] = None):
        """Initialize the authorizer.

        Args:
            config: Optional configuration
        """
        config = config or {}
        self._config = ResolvedAuthorizerConfig(
            chain_id=config.get("chain_id", 1),
            comp_address=config.get("comp_address"),
            governor_address=config.get("governor_address"),
            delegation_expiry=config.get(
                "delegation_expiry", DEFAULT_DELEGATION_EXPIRY
            ),
        )

    def get_config(self) -> ResolvedAuthorizerConfig:
        """Get the authorizer configuration."""
        return self._config

    async def create_delegate_signature(
        self,
        signer: Signer,
        delegatee: str,
        nonce: int,
        expiry: Optional[int] = None,
    ) -> Signature:
        """Sign a COMP delegation to ``delegatee``.

        Raises:
            ValueError: If no COMP address is configured or delegatee is invalid
        """
        if not self._config.comp_address:
            raise ValueError("comp_address is required for delegation signatures.")

        typed_data = build_delegation_typed_data(
            delegatee=delegatee,
            nonce=nonce,
            comp_address=self._config.comp_address,
            chain_id=self._config.chain_id,
            expiry=expiry if expiry is not None else self._config.delegation_expiry,
        )
        logger.debug("Signing delegation to %s (nonce %s)", delegatee, nonce)
        return await _sign_typed_data(typed_data, signer)

    async def create_vote_signature(
        self,
        signer: Signer,
        proposal_id: int,
        support: int,
    ) -> Signature:
        """Sign a Governor Bravo ballot.

        To create an empty ballot, call this three times with support 0, 1 and 2.

        Raises:
            ValueError: If no governor address is configured or support is invalid
        """
        if not self._config.governor_address:
            raise ValueError("governor_address is required for vote signatures.")

        typed_data = build_vote_typed_data(
            proposal_id=proposal_id,
            support=support,
            governor_address=self._config.governor_address,
            chain_id=self._config.chain_id,
        )
        logger.debug("Signing ballot for proposal %s (support %s)", proposal_id, support)
        return await _sign_typed_data(typed_data, signer)

    async def create_allow_signature(
        self,
        signer: Signer,
        comet_address: str,
        comet_name: str,
        comet_version: str,
        owner: str,
        manager: str,
        is_allowed: bool,
        nonce: int,
        expiry: int,
    ) -> Signature:
        """Sign a Comet manager authorization.

        Raises:
            ValueError: If an address is invalid
        """
        typed_data = build_allow_typed_data(
            owner=owner,
            manager=manager,
            is_allowed=is_allowed,
            nonce=nonce,
            expiry=expiry,
            comet_address=comet_address,
            comet_name=comet_name,
            comet_version=comet_version,
            chain_id=self._config.chain_id,
        )
        logger.debug("Signing Comet authorization of %s for %s", manager, owner)
        return await _sign_typed_data(typed_data, signer)


__all__ = [
    "CompoundAuthorizer",
    "build_allow_typed_data",
    "build_delegation_typed_data",
    "build_vote_typed_data",
]
