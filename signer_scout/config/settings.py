"""
Application settings and environment configuration.

Responsibilities:
- Load configuration from environment variables and the .env file.
- Validate values and provide defaults for optional ones.
- Expose typed settings (RPC URL, contract list, delays, failure policy, ...)
  for the discovery CLI.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from typing import Any

from signer_scout.config.env import get_solana_rpc_url, load_scout_env
from signer_scout.core.exceptions import ConfigError
from signer_scout.discovery.policy import FAILURE_POLICY_NAMES

# Programs scanned when CONTRACT_ADDRESSES is not set
DEFAULT_CONTRACT_ADDRESSES: tuple[str, ...] = (
    "LBUZKhRxPF3XUpBCjp4YzTKgLccjZhTSDM9YuVaPwxo",
    "675kPX9MHTjS2zt1qfr1NYHuzeLXfQM9H24wFSUt1Mp8",
    "2wT8Yq49kHgDzXuPxZSaeLaH1qbmGXtEyPy64bL7aD3c",
    "whirLbMiicVdio4qvUfM5KAg6Ct8VwpYzGff3uctyCc",
)
DEFAULT_OUTPUT_PATH = "addresses.csv"
DEFAULT_SIGNATURES_PAGE_LIMIT = 1000
DEFAULT_TX_DELAY_SEC = 0.1
DEFAULT_LISTING_DELAY_SEC = 0.0
DEFAULT_FAILURE_POLICY = "skip"
DEFAULT_FAILURE_COOLDOWN_SEC = 10.0
DEFAULT_FETCH_MAX_RETRIES = 0
DEFAULT_FETCH_RETRY_BASE_DELAY_SEC = 1.0
DEFAULT_FETCH_RETRY_MAX_DELAY_SEC = 30.0
DEFAULT_RPC_TIMEOUT_SEC = 30.0
DEFAULT_RPC_COMMITMENT = "confirmed"

COMMITMENT_LEVELS = ("processed", "confirmed", "finalized")


@dataclass(frozen=True)
class Settings:
    """Resolved configuration for one discovery run."""

    rpc_url: str
    contract_addresses: tuple[str, ...] = DEFAULT_CONTRACT_ADDRESSES
    output_path: str = DEFAULT_OUTPUT_PATH
    signatures_page_limit: int = DEFAULT_SIGNATURES_PAGE_LIMIT
    tx_delay_sec: float = DEFAULT_TX_DELAY_SEC
    listing_delay_sec: float = DEFAULT_LISTING_DELAY_SEC
    failure_policy: str = DEFAULT_FAILURE_POLICY
    failure_cooldown_sec: float = DEFAULT_FAILURE_COOLDOWN_SEC
    fetch_max_retries: int = DEFAULT_FETCH_MAX_RETRIES
    fetch_retry_base_delay_sec: float = DEFAULT_FETCH_RETRY_BASE_DELAY_SEC
    fetch_retry_max_delay_sec: float = DEFAULT_FETCH_RETRY_MAX_DELAY_SEC
    rpc_timeout_sec: float = DEFAULT_RPC_TIMEOUT_SEC
    rpc_commitment: str = DEFAULT_RPC_COMMITMENT

    def __post_init__(self) -> None:
        if not self.rpc_url.strip():
            raise ConfigError("rpc_url must be non-empty")
        if not self.contract_addresses:
            raise ConfigError("at least one contract address is required")
        if not (1 <= self.signatures_page_limit <= 1000):
            raise ConfigError("signatures_page_limit must be between 1 and 1000")
        for name in (
            "tx_delay_sec",
            "listing_delay_sec",
            "failure_cooldown_sec",
            "fetch_retry_base_delay_sec",
            "fetch_retry_max_delay_sec",
        ):
            if getattr(self, name) < 0:
                raise ConfigError(f"{name} must be >= 0")
        if self.rpc_timeout_sec <= 0:
            raise ConfigError("rpc_timeout_sec must be positive")
        if self.fetch_max_retries < 0:
            raise ConfigError("fetch_max_retries must be >= 0")
        if self.failure_policy not in FAILURE_POLICY_NAMES:
            raise ConfigError(
                f"failure_policy must be one of {', '.join(FAILURE_POLICY_NAMES)}, got {self.failure_policy!r}"
            )
        if self.rpc_commitment not in COMMITMENT_LEVELS:
            raise ConfigError(
                f"rpc_commitment must be one of {', '.join(COMMITMENT_LEVELS)}, got {self.rpc_commitment!r}"
            )

    def with_overrides(self, **overrides: Any) -> "Settings":
        """Return a copy with non-None overrides applied (CLI flags)."""
        changes = {k: v for k, v in overrides.items() if v is not None}
        if not changes:
            return self
        return replace(self, **changes)


def _env_str(name: str, default: str) -> str:
    return (os.getenv(name) or "").strip() or default


def _env_int(name: str, default: int) -> int:
    raw = (os.getenv(name) or "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError as e:
        raise ConfigError(f"{name} must be an integer, got {raw!r}") from e


def _env_float(name: str, default: float) -> float:
    raw = (os.getenv(name) or "").strip()
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError as e:
        raise ConfigError(f"{name} must be a number, got {raw!r}") from e


def _env_addresses(name: str) -> tuple[str, ...]:
    raw = (os.getenv(name) or "").strip()
    if not raw:
        return DEFAULT_CONTRACT_ADDRESSES
    return tuple(a.strip() for a in raw.split(",") if a.strip())


def get_settings() -> Settings:
    """
    Return the current application settings resolved from the environment.

    Raises:
        ConfigError: if a value cannot be parsed or is out of range.
    """
    load_scout_env()
    return Settings(
        rpc_url=get_solana_rpc_url(),
        contract_addresses=_env_addresses("CONTRACT_ADDRESSES"),
        output_path=_env_str("OUTPUT_PATH", DEFAULT_OUTPUT_PATH),
        signatures_page_limit=_env_int("SIGNATURES_PAGE_LIMIT", DEFAULT_SIGNATURES_PAGE_LIMIT),
        tx_delay_sec=_env_float("TX_DELAY_SEC", DEFAULT_TX_DELAY_SEC),
        listing_delay_sec=_env_float("LISTING_DELAY_SEC", DEFAULT_LISTING_DELAY_SEC),
        failure_policy=_env_str("FAILURE_POLICY", DEFAULT_FAILURE_POLICY).lower(),
        failure_cooldown_sec=_env_float("FAILURE_COOLDOWN_SEC", DEFAULT_FAILURE_COOLDOWN_SEC),
        fetch_max_retries=_env_int("FETCH_MAX_RETRIES", DEFAULT_FETCH_MAX_RETRIES),
        fetch_retry_base_delay_sec=_env_float(
            "FETCH_RETRY_BASE_DELAY_SEC", DEFAULT_FETCH_RETRY_BASE_DELAY_SEC
        ),
        fetch_retry_max_delay_sec=_env_float(
            "FETCH_RETRY_MAX_DELAY_SEC", DEFAULT_FETCH_RETRY_MAX_DELAY_SEC
        ),
        rpc_timeout_sec=_env_float("RPC_TIMEOUT_SEC", DEFAULT_RPC_TIMEOUT_SEC),
        rpc_commitment=_env_str("RPC_COMMITMENT", DEFAULT_RPC_COMMITMENT).lower(),
    )
