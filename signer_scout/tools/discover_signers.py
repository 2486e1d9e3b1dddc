"""
Discover unique signer wallets that interacted with a list of Solana programs.

How to run:
    From project root (with .env configured):
        python -m signer_scout.tools.discover_signers --output addresses.csv
    Or with explicit programs:
        python -m signer_scout.tools.discover_signers \\
            --contract whirLbMiicVdio4qvUfM5KAg6Ct8VwpYzGff3uctyCc --policy abort

Env vars (all optional; CLI flags win):
    SOLANA_RPC_URL or HELIUS_API_KEY, CONTRACT_ADDRESSES (comma separated),
    OUTPUT_PATH, SIGNATURES_PAGE_LIMIT, TX_DELAY_SEC, LISTING_DELAY_SEC,
    FAILURE_POLICY (skip|abort), FAILURE_COOLDOWN_SEC, FETCH_MAX_RETRIES,
    FETCH_RETRY_BASE_DELAY_SEC, FETCH_RETRY_MAX_DELAY_SEC, RPC_TIMEOUT_SEC,
    RPC_COMMITMENT, LOG_LEVEL, LOG_FORMAT, LOG_DATE_FORMAT.

Only the most recent page (up to 1000 signatures) per program is sampled.

Output (single line, ';'-separated):
    Addr1;Addr2;Addr3

Exit codes: 0 success (also when a partial result was written under --policy abort),
1 signature listing failed (nothing written), 2 configuration error,
3 the output file could not be written (addresses are logged instead).
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from typing import Any

from signer_scout.config.env import mask_rpc_url
from signer_scout.config.settings import FAILURE_POLICY_NAMES, Settings, get_settings
from signer_scout.core.exceptions import ConfigError, InvalidAddressError, SignatureListingError
from signer_scout.discovery import (
    DiscoveryPipeline,
    DiscoveryResult,
    SignatureLister,
    TransactionFetcher,
    failure_policy_from_name,
)
from signer_scout.discovery.rate_limiter import SleepFn
from signer_scout.export import write_addresses
from signer_scout.scout_logging import configure_logging, get_logger
from signer_scout.solana_rpc import LedgerClient, SolanaRpcClient

logger = get_logger(__name__)

EXIT_OK = 0
EXIT_LISTING_FAILED = 1
EXIT_CONFIG_ERROR = 2
EXIT_WRITE_FAILED = 3


def build_pipeline(
    client: LedgerClient,
    settings: Settings,
    *,
    sleep: SleepFn | None = None,
    log: Any = None,
) -> DiscoveryPipeline:
    """Wire lister, fetcher and policy from settings around a ledger client."""
    fetcher = TransactionFetcher(
        client,
        max_retries=settings.fetch_max_retries,
        retry_base_delay_sec=settings.fetch_retry_base_delay_sec,
        retry_max_delay_sec=settings.fetch_retry_max_delay_sec,
        sleep=sleep,
        logger=log,
    )
    return DiscoveryPipeline(
        SignatureLister(client, page_limit=settings.signatures_page_limit),
        fetcher,
        failure_policy_from_name(settings.failure_policy, settings.failure_cooldown_sec),
        tx_delay_sec=settings.tx_delay_sec,
        listing_delay_sec=settings.listing_delay_sec,
        sleep=sleep,
        logger=log,
    )


async def run_discovery(
    settings: Settings,
    *,
    client: LedgerClient | None = None,
    sleep: SleepFn | None = None,
) -> DiscoveryResult:
    """Run one discovery pass. Opens (and closes) a SolanaRpcClient unless one is given."""
    if client is not None:
        return await build_pipeline(client, settings, sleep=sleep).run(settings.contract_addresses)
    async with SolanaRpcClient(
        settings.rpc_url,
        timeout_sec=settings.rpc_timeout_sec,
        commitment=settings.rpc_commitment,
    ) as rpc:
        return await build_pipeline(rpc, settings, sleep=sleep).run(settings.contract_addresses)


def _parse_args(argv: list[str] | None) -> argparse.Namespace:
    ap = argparse.ArgumentParser(
        description="Collect unique signer addresses from recent transactions of Solana programs",
    )
    ap.add_argument("--rpc-url", default=None, help="Solana RPC endpoint (default: SOLANA_RPC_URL)")
    ap.add_argument(
        "--contract",
        action="append",
        default=None,
        help="Program address to scan; repeat for several (default: CONTRACT_ADDRESSES)",
    )
    ap.add_argument("--output", default=None, help="Output file (default: OUTPUT_PATH or addresses.csv)")
    ap.add_argument("--limit", type=int, default=None, help="Signatures per program, 1-1000")
    ap.add_argument("--tx-delay", type=float, default=None, help="Seconds to wait after each signature")
    ap.add_argument(
        "--policy",
        choices=FAILURE_POLICY_NAMES,
        default=None,
        help="On transaction fetch failure: skip (cool down, continue) or abort (return partial)",
    )
    ap.add_argument("--cooldown", type=float, default=None, help="Cooldown seconds for --policy skip")
    ap.add_argument("--max-retries", type=int, default=None, help="Retries per transaction with backoff")
    ap.add_argument("--log-format", choices=("console", "json"), default=None)
    return ap.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)
    configure_logging(fmt=args.log_format)

    try:
        settings = get_settings().with_overrides(
            rpc_url=args.rpc_url,
            contract_addresses=tuple(args.contract) if args.contract else None,
            output_path=args.output,
            signatures_page_limit=args.limit,
            tx_delay_sec=args.tx_delay,
            failure_policy=args.policy,
            failure_cooldown_sec=args.cooldown,
            fetch_max_retries=args.max_retries,
        )
    except ConfigError as e:
        logger.error("discover_signers_config_error", error=str(e))
        return EXIT_CONFIG_ERROR

    logger.info(
        "discover_signers_start",
        rpc_url=mask_rpc_url(settings.rpc_url),
        contracts=list(settings.contract_addresses),
        output=settings.output_path,
        failure_policy=settings.failure_policy,
    )
    try:
        result = asyncio.run(run_discovery(settings))
    except InvalidAddressError as e:
        logger.error("discover_signers_invalid_address", error=str(e))
        return EXIT_CONFIG_ERROR
    except SignatureListingError as e:
        logger.error("discover_signers_listing_failed", contract=e.address, error=str(e))
        return EXIT_LISTING_FAILED

    try:
        write_addresses(result.addresses, settings.output_path)
    except OSError as e:
        logger.error(
            "discover_signers_write_failed",
            path=settings.output_path,
            error=str(e),
            addresses=result.addresses,
        )
        return EXIT_WRITE_FAILED
    logger.info(
        "discover_signers_done",
        unique_addresses=len(result.addresses),
        partial=result.aborted,
        output=settings.output_path,
    )
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
