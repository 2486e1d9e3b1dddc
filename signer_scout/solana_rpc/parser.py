"""
getTransaction payload parser — raw RPC result to ParsedTransaction.

Purely structural. Handles both encodings:
- jsonParsed: accountKeys is a list of {pubkey, signer, writable, source};
- json: accountKeys is a list of base58 strings and the first
  header.numRequiredSignatures of them are the signers.
"""

from __future__ import annotations

from typing import Any

from signer_scout.scout_logging import get_logger
from signer_scout.solana_rpc.models import AccountEntry, ParsedTransaction

logger = get_logger(__name__)


def _entries_from_parsed_keys(keys: list[Any]) -> tuple[AccountEntry, ...]:
    out: list[AccountEntry] = []
    for k in keys:
        if not isinstance(k, dict):
            continue
        pubkey = k.get("pubkey")
        if not pubkey:
            continue
        out.append(
            AccountEntry(
                pubkey=str(pubkey),
                signer=bool(k.get("signer")),
                writable=bool(k.get("writable")),
                source=k.get("source"),
            )
        )
    return tuple(out)


def _entries_from_plain_keys(
    keys: list[Any],
    header: dict[str, Any],
) -> tuple[AccountEntry, ...]:
    num_signers = int(header.get("numRequiredSignatures") or 0)
    num_ro_signed = int(header.get("numReadonlySignedAccounts") or 0)
    num_ro_unsigned = int(header.get("numReadonlyUnsignedAccounts") or 0)
    total = len(keys)
    out: list[AccountEntry] = []
    for i, k in enumerate(keys):
        is_signer = i < num_signers
        if is_signer:
            writable = i < num_signers - num_ro_signed
        else:
            writable = i < total - num_ro_unsigned
        out.append(
            AccountEntry(pubkey=str(k), signer=is_signer, writable=writable, source="transaction")
        )
    return tuple(out)


def get_account_entries(message: dict[str, Any] | None) -> tuple[AccountEntry, ...] | None:
    """
    Resolve a message's accountKeys into AccountEntry tuples.

    Returns None when the message or its accountKeys field is missing.
    """
    if not isinstance(message, dict):
        return None
    keys = message.get("accountKeys")
    if keys is None or not isinstance(keys, list):
        return None
    if not keys:
        return ()
    if isinstance(keys[0], str):
        return _entries_from_plain_keys(keys, message.get("header") or {})
    return _entries_from_parsed_keys(keys)


def parse_transaction(signature: str, raw: dict[str, Any] | None) -> ParsedTransaction | None:
    """
    Turn a getTransaction result into a ParsedTransaction.

    Returns None when raw is None (the node reported "not found").
    """
    if raw is None:
        return None
    tx = raw.get("transaction")
    message = tx.get("message") if isinstance(tx, dict) else None
    entries = get_account_entries(message)
    if entries is None:
        logger.debug("parser_message_missing", signature=signature[:16])
    block_time = raw.get("blockTime")
    slot = raw.get("slot")
    return ParsedTransaction(
        signature=signature,
        slot=int(slot) if slot is not None else None,
        block_time=int(block_time) if block_time is not None else None,
        account_entries=entries,
    )
