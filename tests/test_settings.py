"""
Tests for environment-driven settings (get_settings) and RPC URL resolution.
"""

from __future__ import annotations

import pytest

from signer_scout.config.env import MAINNET_RPC_URL, get_solana_rpc_url, mask_rpc_url
from signer_scout.config.settings import DEFAULT_CONTRACT_ADDRESSES, Settings, get_settings
from signer_scout.core.exceptions import ConfigError

_ENV_VARS = (
    "SOLANA_RPC_URL",
    "HELIUS_API_KEY",
    "CONTRACT_ADDRESSES",
    "OUTPUT_PATH",
    "SIGNATURES_PAGE_LIMIT",
    "TX_DELAY_SEC",
    "LISTING_DELAY_SEC",
    "FAILURE_POLICY",
    "FAILURE_COOLDOWN_SEC",
    "FETCH_MAX_RETRIES",
    "FETCH_RETRY_BASE_DELAY_SEC",
    "FETCH_RETRY_MAX_DELAY_SEC",
    "RPC_TIMEOUT_SEC",
    "RPC_COMMITMENT",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)


def test_defaults():
    settings = get_settings()
    assert settings.rpc_url == MAINNET_RPC_URL
    assert settings.contract_addresses == DEFAULT_CONTRACT_ADDRESSES
    assert settings.output_path == "addresses.csv"
    assert settings.signatures_page_limit == 1000
    assert settings.tx_delay_sec == 0.1
    assert settings.failure_policy == "skip"
    assert settings.failure_cooldown_sec == 10.0
    assert settings.fetch_max_retries == 0
    assert settings.rpc_commitment == "confirmed"


def test_env_overrides(monkeypatch):
    monkeypatch.setenv("SOLANA_RPC_URL", "https://rpc.example.test")
    monkeypatch.setenv("CONTRACT_ADDRESSES", " AddrA , AddrB ,, ")
    monkeypatch.setenv("SIGNATURES_PAGE_LIMIT", "250")
    monkeypatch.setenv("TX_DELAY_SEC", "0.5")
    monkeypatch.setenv("FAILURE_POLICY", "ABORT")
    monkeypatch.setenv("FETCH_MAX_RETRIES", "3")

    settings = get_settings()

    assert settings.rpc_url == "https://rpc.example.test"
    assert settings.contract_addresses == ("AddrA", "AddrB")
    assert settings.signatures_page_limit == 250
    assert settings.tx_delay_sec == 0.5
    assert settings.failure_policy == "abort"
    assert settings.fetch_max_retries == 3


def test_helius_key_builds_rpc_url(monkeypatch):
    monkeypatch.setenv("HELIUS_API_KEY", "secret")
    url = get_solana_rpc_url()
    assert url == "https://mainnet.helius-rpc.com/?api-key=secret"
    assert mask_rpc_url(url) == "https://mainnet.helius-rpc.com/?api-key=***"


def test_explicit_rpc_url_wins_over_helius(monkeypatch):
    monkeypatch.setenv("HELIUS_API_KEY", "secret")
    monkeypatch.setenv("SOLANA_RPC_URL", "https://my-node.test")
    assert get_solana_rpc_url() == "https://my-node.test"


@pytest.mark.parametrize(
    "name,value",
    [
        ("SIGNATURES_PAGE_LIMIT", "abc"),
        ("SIGNATURES_PAGE_LIMIT", "0"),
        ("SIGNATURES_PAGE_LIMIT", "1001"),
        ("TX_DELAY_SEC", "-1"),
        ("TX_DELAY_SEC", "fast"),
        ("FAILURE_POLICY", "retry"),
        ("FAILURE_POLICY", "skip_and_continue"),
        ("RPC_COMMITMENT", "instant"),
        ("FETCH_MAX_RETRIES", "-2"),
    ],
)
def test_invalid_values_raise_config_error(monkeypatch, name, value):
    monkeypatch.setenv(name, value)
    with pytest.raises(ConfigError):
        get_settings()


def test_with_overrides_ignores_none_and_validates():
    base = Settings(rpc_url="https://rpc.example.test")
    assert base.with_overrides(output_path=None) is base
    changed = base.with_overrides(output_path="out.csv", failure_policy="abort")
    assert changed.output_path == "out.csv"
    assert changed.failure_policy == "abort"
    with pytest.raises(ConfigError):
        base.with_overrides(signatures_page_limit=0)


def test_empty_contract_list_rejected():
    with pytest.raises(ConfigError):
        Settings(rpc_url="https://rpc.example.test", contract_addresses=())
