"""
Signer discovery pipeline: contract addresses → signatures → transactions → signers.

For each contract address (caller order) the pipeline lists one page of
signatures, then for each signature (ledger order, newest-first) fetches the
parsed transaction, extracts signer pubkeys and merges them into a run-wide
AddressSetBuilder. Exactly one RPC call is in flight at any time.

Failure handling:
- listing failure: SignatureListingError propagates, the run is ABORTED and
  no result is produced;
- transaction not found / message without accounts: logged, skipped, no cooldown;
- transient fetch failure: handled by the injected FailurePolicy
  (SkipAndContinue waits its cooldown and moves on; AbortAndReturnPartial
  returns the set accumulated before the failing signature).
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterable

from signer_scout.core.exceptions import SignatureListingError, TransientFetchError
from signer_scout.discovery.address_set import AddressSetBuilder
from signer_scout.discovery.extractor import extract_signers
from signer_scout.discovery.fetcher import TransactionFetcher
from signer_scout.discovery.lister import SignatureLister
from signer_scout.discovery.policy import AbortAndReturnPartial, FailurePolicy, SkipAndContinue
from signer_scout.discovery.rate_limiter import RateLimiter, SleepFn
from signer_scout.scout_logging import get_logger
from signer_scout.utils.address_utils import validate_addresses

DEFAULT_TX_DELAY_SEC = 0.1
DEFAULT_LISTING_DELAY_SEC = 0.0


def _rpc_method(error: BaseException) -> str | None:
    """RPC method name carried by the RpcError behind a wrapped failure, if any."""
    return getattr(error.__cause__, "method", None)


class PipelineState(str, Enum):
    IDLE = "idle"
    LISTING_SIGNATURES = "listing_signatures"
    FETCHING_TRANSACTION = "fetching_transaction"
    EXTRACTING_SIGNERS = "extracting_signers"
    MERGING = "merging"
    DELAYING = "delaying"
    DONE = "done"
    ABORTED = "aborted"


@dataclass
class DiscoveryStats:
    """Counters for one run; reported in the completion log event."""

    addresses_scanned: int = 0
    signatures_listed: int = 0
    transactions_processed: int = 0
    transactions_not_found: int = 0
    transactions_without_accounts: int = 0
    fetch_failures: int = 0

    def to_dict(self) -> dict[str, int]:
        return {
            "addresses_scanned": self.addresses_scanned,
            "signatures_listed": self.signatures_listed,
            "transactions_processed": self.transactions_processed,
            "transactions_not_found": self.transactions_not_found,
            "transactions_without_accounts": self.transactions_without_accounts,
            "fetch_failures": self.fetch_failures,
        }


@dataclass
class DiscoveryResult:
    """Outcome of a run. addresses is in discovery (insertion) order."""

    addresses: list[str]
    aborted: bool = False
    failed_signature: str | None = None
    stats: DiscoveryStats = field(default_factory=DiscoveryStats)


class DiscoveryPipeline:
    """
    Orchestrates lister, fetcher, extractor, rate limiters and the address set.

    failure_policy is required: the two behaviours (skip and abort) are both
    legitimate, so the caller must pick one.
    """

    def __init__(
        self,
        lister: SignatureLister,
        fetcher: TransactionFetcher,
        failure_policy: FailurePolicy,
        *,
        tx_delay_sec: float = DEFAULT_TX_DELAY_SEC,
        listing_delay_sec: float = DEFAULT_LISTING_DELAY_SEC,
        sleep: SleepFn | None = None,
        logger: Any = None,
    ) -> None:
        if not isinstance(failure_policy, (SkipAndContinue, AbortAndReturnPartial)):
            raise TypeError(f"Unsupported failure policy: {failure_policy!r}")
        self._lister = lister
        self._fetcher = fetcher
        self._policy = failure_policy
        self._sleep = sleep or asyncio.sleep
        self._tx_limiter = RateLimiter(tx_delay_sec, sleep=self._sleep)
        self._listing_limiter = RateLimiter(listing_delay_sec, sleep=self._sleep)
        self._logger = logger or get_logger(__name__)
        self.state = PipelineState.IDLE

    @property
    def failure_policy(self) -> FailurePolicy:
        return self._policy

    def _transition(self, state: PipelineState) -> None:
        self.state = state

    async def run(self, contract_addresses: Iterable[str]) -> DiscoveryResult:
        """
        Discover unique signers for the given contract addresses.

        Raises:
            InvalidAddressError: if an address is not a valid public key (before any RPC call).
            SignatureListingError: if listing signatures for any address fails.
        """
        contracts = validate_addresses(list(contract_addresses))
        log = self._logger
        stats = DiscoveryStats()

        def _on_new(address: str, total: int) -> None:
            log.info("discovery_signer_found", address=address, total=total)

        found = AddressSetBuilder(on_new_address=_on_new)
        log.info(
            "discovery_started",
            contract_count=len(contracts),
            page_limit=self._lister.page_limit,
            failure_policy=self._policy.name,
        )

        for contract in contracts:
            self._transition(PipelineState.LISTING_SIGNATURES)
            log.info("discovery_listing_signatures", contract=contract)
            try:
                signatures = await self._lister.list_page(contract)
            except SignatureListingError as e:
                self._transition(PipelineState.ABORTED)
                log.error(
                    "discovery_listing_failed",
                    contract=contract,
                    method=_rpc_method(e),
                    error=str(e),
                )
                raise
            stats.addresses_scanned += 1
            stats.signatures_listed += len(signatures)
            log.info("discovery_signatures_listed", contract=contract, count=len(signatures))
            await self._listing_limiter.wait()

            current_slot: int | None = None
            for record in signatures:
                if record.slot != current_slot:
                    current_slot = record.slot
                    log.info("discovery_new_slot", slot=record.slot, block_time=record.block_time)

                self._transition(PipelineState.FETCHING_TRANSACTION)
                try:
                    tx = await self._fetcher.fetch(record.signature)
                except TransientFetchError as e:
                    stats.fetch_failures += 1
                    log.error(
                        "discovery_fetch_failed",
                        contract=contract,
                        signature=record.signature,
                        attempts=e.attempts,
                        method=_rpc_method(e),
                        error=str(e.__cause__ or e),
                    )
                    if isinstance(self._policy, AbortAndReturnPartial):
                        self._transition(PipelineState.DONE)
                        log.warning(
                            "discovery_aborted",
                            signature=record.signature,
                            unique_addresses=len(found),
                            **stats.to_dict(),
                        )
                        return DiscoveryResult(
                            addresses=found.addresses(),
                            aborted=True,
                            failed_signature=record.signature,
                            stats=stats,
                        )
                    self._transition(PipelineState.DELAYING)
                    log.info("discovery_cooldown", seconds=self._policy.cooldown_sec)
                    await self._sleep(self._policy.cooldown_sec)
                    await self._tx_limiter.wait()
                    continue

                if tx is None:
                    stats.transactions_not_found += 1
                    log.warning("discovery_transaction_not_found", signature=record.signature)
                    await self._tx_limiter.wait()
                    continue
                if tx.account_entries is None:
                    stats.transactions_without_accounts += 1
                    log.warning("discovery_message_missing", signature=record.signature)
                    await self._tx_limiter.wait()
                    continue

                self._transition(PipelineState.EXTRACTING_SIGNERS)
                signers = extract_signers(tx)
                self._transition(PipelineState.MERGING)
                found.add_all(signers)
                stats.transactions_processed += 1
                await self._tx_limiter.wait()

        self._transition(PipelineState.DONE)
        log.info("discovery_completed", unique_addresses=len(found), **stats.to_dict())
        return DiscoveryResult(addresses=found.addresses(), stats=stats)
