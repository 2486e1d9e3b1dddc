"""
signer-scout — discover the wallets that sign transactions against Solana programs.

Samples the most recent page of transaction signatures for each program,
fetches each transaction, and collects the unique signer addresses.
Modular layout: solana_rpc (ledger client), discovery (engine),
export (output sink), config, scout_logging, tools (CLI).
"""

__version__ = "0.1.0"
