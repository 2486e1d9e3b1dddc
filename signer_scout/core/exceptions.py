"""
Application-level exceptions.

ScoutError is the root. SignatureListingError is fatal to a discovery run;
TransientFetchError is recovered by the pipeline according to its FailurePolicy.
"""

from __future__ import annotations


class ScoutError(Exception):
    """Base class for all signer-scout errors."""


class ConfigError(ScoutError):
    """Invalid or missing configuration value."""


class InvalidAddressError(ScoutError, ValueError):
    """A contract address is not a plausible base58 public key."""

    def __init__(self, address: str) -> None:
        super().__init__(f"Invalid base58 address: {address!r}")
        self.address = address


class RpcError(ScoutError):
    """
    Solana JSON-RPC call failed.

    status_code is set for HTTP-level failures, code for JSON-RPC error objects.
    Both are None for transport errors (connect, read timeout, ...).
    """

    def __init__(
        self,
        message: str,
        *,
        code: int | None = None,
        status_code: int | None = None,
        method: str | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.status_code = status_code
        self.method = method

    @property
    def transient(self) -> bool:
        """True when retrying the same call later may succeed."""
        if self.status_code is not None:
            return self.status_code == 429 or self.status_code >= 500
        if self.code is not None:
            # JSON-RPC "server error" range; Solana uses it for node-side conditions
            return -32099 <= self.code <= -32000
        return True


class SignatureListingError(ScoutError):
    """getSignaturesForAddress failed; there is nothing to iterate for this address."""

    def __init__(self, address: str, reason: str) -> None:
        super().__init__(f"Failed to list signatures for {address}: {reason}")
        self.address = address


class TransientFetchError(ScoutError):
    """getTransaction failed for one signature after all in-call retries."""

    def __init__(self, signature: str, reason: str, attempts: int = 1) -> None:
        super().__init__(f"Failed to fetch transaction {signature} after {attempts} attempt(s): {reason}")
        self.signature = signature
        self.attempts = attempts
