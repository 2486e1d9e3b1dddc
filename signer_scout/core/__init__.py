"""
Core cross-cutting pieces shared by the RPC client, discovery engine and CLI.
"""

from signer_scout.core.exceptions import (
    ConfigError,
    InvalidAddressError,
    RpcError,
    ScoutError,
    SignatureListingError,
    TransientFetchError,
)

__all__ = [
    "ConfigError",
    "InvalidAddressError",
    "RpcError",
    "ScoutError",
    "SignatureListingError",
    "TransientFetchError",
]
