"""
Pytest fixtures for signer-scout tests. In-memory ledger client and a sleep that records delays.
"""

from __future__ import annotations

from typing import Any

import pytest

from signer_scout.solana_rpc.models import AccountEntry, ParsedTransaction, SignatureRecord


class FakeLedgerClient:
    """
    LedgerClient backed by dicts.

    signatures: address -> list[SignatureRecord] or an Exception to raise.
    transactions: signature -> ParsedTransaction | None | Exception, or a list of
    those consumed one per call (for retry scenarios). Unknown signatures return None.
    """

    def __init__(
        self,
        signatures: dict[str, Any] | None = None,
        transactions: dict[str, Any] | None = None,
    ) -> None:
        self.signatures = signatures or {}
        self.transactions = transactions or {}
        self.calls: list[tuple[Any, ...]] = []

    async def get_signatures_for_address(
        self,
        address: str,
        limit: int = 1000,
        before: str | None = None,
    ) -> list[SignatureRecord]:
        self.calls.append(("getSignaturesForAddress", address, limit, before))
        value = self.signatures.get(address, [])
        if isinstance(value, Exception):
            raise value
        return list(value)

    async def get_parsed_transaction(
        self,
        signature: str,
        max_supported_transaction_version: int = 0,
    ) -> ParsedTransaction | None:
        self.calls.append(("getTransaction", signature, max_supported_transaction_version))
        value = self.transactions.get(signature)
        if isinstance(value, list):
            value = value.pop(0)
        if isinstance(value, Exception):
            raise value
        return value

    def fetched_signatures(self) -> list[str]:
        return [c[1] for c in self.calls if c[0] == "getTransaction"]


class RecordingSleep:
    """Async stand-in for asyncio.sleep that records requested delays."""

    def __init__(self) -> None:
        self.delays: list[float] = []

    async def __call__(self, delay: float) -> None:
        self.delays.append(delay)


@pytest.fixture
def recording_sleep() -> RecordingSleep:
    return RecordingSleep()


@pytest.fixture
def fake_client_factory():
    """Return FakeLedgerClient so tests can build one with their own data."""
    return FakeLedgerClient


@pytest.fixture
def make_record():
    def _make(signature: str, slot: int = 100, block_time: int | None = 1700000000) -> SignatureRecord:
        return SignatureRecord(signature=signature, slot=slot, block_time=block_time)

    return _make


@pytest.fixture
def make_tx():
    """Build a ParsedTransaction from signer / non-signer pubkeys; accounts=None drops the account list."""

    def _make(
        signature: str,
        signers: list[str] | None = None,
        others: list[str] | None = None,
        *,
        accounts: bool = True,
    ) -> ParsedTransaction:
        if not accounts:
            entries = None
        else:
            entries = tuple(
                [AccountEntry(pubkey=s, signer=True, writable=True) for s in (signers or [])]
                + [AccountEntry(pubkey=o, signer=False) for o in (others or [])]
            )
        return ParsedTransaction(signature=signature, slot=100, block_time=1700000000, account_entries=entries)

    return _make
