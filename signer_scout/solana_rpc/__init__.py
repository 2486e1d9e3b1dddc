"""
Solana RPC package.

Async JSON-RPC client for getSignaturesForAddress / getTransaction and the
models the discovery engine consumes.
"""

from signer_scout.solana_rpc.client import LedgerClient, SolanaRpcClient
from signer_scout.solana_rpc.models import AccountEntry, ParsedTransaction, SignatureRecord
from signer_scout.solana_rpc.parser import parse_transaction

__all__ = [
    "AccountEntry",
    "LedgerClient",
    "ParsedTransaction",
    "SignatureRecord",
    "SolanaRpcClient",
    "parse_transaction",
]
