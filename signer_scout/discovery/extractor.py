"""Signer extraction: ParsedTransaction -> set of signer pubkeys."""

from __future__ import annotations

from signer_scout.solana_rpc.models import ParsedTransaction


def extract_signers(tx: ParsedTransaction | None) -> set[str]:
    """
    Return the pubkeys of all account entries flagged as signers.

    A missing transaction, or one whose account list is missing, yields an
    empty set rather than an error.
    """
    if tx is None or tx.account_entries is None:
        return set()
    return {entry.pubkey for entry in tx.account_entries if entry.signer}
