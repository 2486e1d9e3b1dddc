"""
Data models for Solana RPC responses used by the discovery engine.

SignatureRecord mirrors one getSignaturesForAddress item; ParsedTransaction
keeps only what signer discovery needs from getTransaction.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class SignatureRecord:
    """
    Normalized transaction signature info from getSignaturesForAddress.

    Mirrors Solana RPC response fields. The RPC returns records newest-first.
    """

    signature: str
    slot: int
    block_time: int | None  # Unix timestamp; None if the node does not know it
    err: Any = None  # None if success; dict/object from RPC if failed
    memo: str | None = None
    confirmation_status: str | None = None  # processed | confirmed | finalized

    @classmethod
    def from_rpc_item(cls, item: dict[str, Any]) -> "SignatureRecord":
        """Build from a single getSignaturesForAddress result item."""
        block_time = item.get("blockTime")
        return cls(
            signature=item["signature"],
            slot=int(item["slot"]),
            block_time=int(block_time) if block_time is not None else None,
            err=item.get("err"),
            memo=item.get("memo"),
            confirmation_status=item.get("confirmationStatus"),
        )


@dataclass(frozen=True)
class AccountEntry:
    """One entry of a transaction message's account list."""

    pubkey: str
    signer: bool
    writable: bool = False
    source: str | None = None  # "transaction" | "lookupTable" for jsonParsed v0 messages


@dataclass(frozen=True)
class ParsedTransaction:
    """
    Transaction as seen by signer discovery.

    account_entries is None when the message or its account list was missing
    from the response; an empty tuple means the list was present but empty.
    """

    signature: str
    slot: int | None
    block_time: int | None
    account_entries: tuple[AccountEntry, ...] | None
