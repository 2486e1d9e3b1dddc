"""
Main entrypoint: one signer discovery run, then write the address file.

Env: SOLANA_RPC_URL, CONTRACT_ADDRESSES, OUTPUT_PATH, FAILURE_POLICY, etc.
(see signer_scout/tools/discover_signers.py). CLI flags are passed through.

Equivalent: python -m signer_scout.tools.discover_signers
"""

import sys

from signer_scout.tools.discover_signers import main

if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
