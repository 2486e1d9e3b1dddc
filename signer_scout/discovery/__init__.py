# Signer discovery engine: list signatures, fetch transactions, extract and deduplicate signers.

from signer_scout.discovery.address_set import AddressSetBuilder
from signer_scout.discovery.extractor import extract_signers
from signer_scout.discovery.fetcher import TransactionFetcher
from signer_scout.discovery.lister import SignatureLister
from signer_scout.discovery.pipeline import (
    DiscoveryPipeline,
    DiscoveryResult,
    DiscoveryStats,
    PipelineState,
)
from signer_scout.discovery.policy import (
    AbortAndReturnPartial,
    FailurePolicy,
    SkipAndContinue,
    failure_policy_from_name,
)
from signer_scout.discovery.rate_limiter import RateLimiter

__all__ = [
    "AbortAndReturnPartial",
    "AddressSetBuilder",
    "DiscoveryPipeline",
    "DiscoveryResult",
    "DiscoveryStats",
    "FailurePolicy",
    "PipelineState",
    "RateLimiter",
    "SignatureLister",
    "SkipAndContinue",
    "TransactionFetcher",
    "extract_signers",
    "failure_policy_from_name",
]
