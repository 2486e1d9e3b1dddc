"""
Transaction retrieval with failure tolerance.

Three outcomes per signature:
- ParsedTransaction on success;
- None when the node has no such transaction (pruned history etc.);
- TransientFetchError when every attempt failed.

With max_retries > 0, transient errors are retried with exponential backoff
inside the same call. Retry state never outlives one fetch().
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Any

from signer_scout.core.exceptions import RpcError, TransientFetchError
from signer_scout.discovery.rate_limiter import SleepFn
from signer_scout.scout_logging import get_logger
from signer_scout.solana_rpc.client import LedgerClient
from signer_scout.solana_rpc.models import ParsedTransaction

MAX_SUPPORTED_TRANSACTION_VERSION = 0
DEFAULT_RETRY_BASE_DELAY_SEC = 1.0
DEFAULT_RETRY_MAX_DELAY_SEC = 30.0


@dataclass
class RetryState:
    """Attempt counter and backoff delay for one fetch() call."""

    max_retries: int
    delay: float
    max_delay: float
    attempt: int = 0

    def can_retry(self) -> bool:
        return self.attempt <= self.max_retries

    def next_delay(self) -> float:
        current = self.delay
        self.delay = min(self.delay * 2, self.max_delay)
        return current


def _is_retryable(error: Exception) -> bool:
    if isinstance(error, RpcError):
        return error.transient
    return True


class TransactionFetcher:
    """Fetches one parsed transaction per call. Holds no state across calls."""

    def __init__(
        self,
        client: LedgerClient,
        *,
        max_supported_transaction_version: int = MAX_SUPPORTED_TRANSACTION_VERSION,
        max_retries: int = 0,
        retry_base_delay_sec: float = DEFAULT_RETRY_BASE_DELAY_SEC,
        retry_max_delay_sec: float = DEFAULT_RETRY_MAX_DELAY_SEC,
        sleep: SleepFn | None = None,
        logger: Any = None,
    ) -> None:
        if max_retries < 0:
            raise ValueError("max_retries must be >= 0")
        self._client = client
        self._max_version = max_supported_transaction_version
        self._max_retries = max_retries
        self._base_delay = retry_base_delay_sec
        self._max_delay = retry_max_delay_sec
        self._sleep = sleep or asyncio.sleep
        self._logger = logger or get_logger(__name__)

    async def fetch(self, signature: str) -> ParsedTransaction | None:
        state = RetryState(
            max_retries=self._max_retries,
            delay=self._base_delay,
            max_delay=self._max_delay,
        )
        last_error: Exception | None = None
        while True:
            state.attempt += 1
            try:
                return await self._client.get_parsed_transaction(
                    signature,
                    max_supported_transaction_version=self._max_version,
                )
            except Exception as e:
                last_error = e
            if not _is_retryable(last_error) or not state.can_retry():
                break
            delay = state.next_delay()
            self._logger.warning(
                "fetch_retry",
                signature=signature[:16],
                attempt=state.attempt,
                max_retries=self._max_retries,
                backoff_sec=round(delay, 2),
                error=str(last_error),
            )
            await self._sleep(delay)
        raise TransientFetchError(signature, str(last_error), attempts=state.attempt) from last_error
