"""Domain-Separated Hash Engine."""

from .domains import (
    ALL_DOMAINS,
    DOMAIN_EVM_LINK,
    DOMAIN_FEEDBACK,
    DOMAIN_INTERACTION,
    DOMAIN_REPUTATION,
    DOMAIN_VALIDATION,
)
from .hashes import (
    compute_attestation_nonce,
    compute_data_hash,
    compute_data_hash_from_hashes,
    compute_data_hash_from_strings,
    compute_delegation_nonce,
    compute_evm_link_hash,
    compute_feedback_hash,
    compute_interaction_hash,
    compute_reputation_hash,
    compute_reputation_nonce,
    compute_validation_hash,
    keccak256,
    zero_data_hash,
)

__all__ = [
    "ALL_DOMAINS",
    "DOMAIN_EVM_LINK",
    "DOMAIN_FEEDBACK",
    "DOMAIN_INTERACTION",
    "DOMAIN_REPUTATION",
    "DOMAIN_VALIDATION",
    "keccak256",
    "compute_interaction_hash",
    "compute_feedback_hash",
    "compute_validation_hash",
    "compute_reputation_hash",
    "compute_attestation_nonce",
    "compute_reputation_nonce",
    "compute_delegation_nonce",
    "compute_evm_link_hash",
    "compute_data_hash",
    "compute_data_hash_from_hashes",
    "compute_data_hash_from_strings",
    "zero_data_hash",
]
