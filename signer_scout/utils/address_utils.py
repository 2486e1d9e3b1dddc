"""Address validation utilities."""

from __future__ import annotations

from solders.pubkey import Pubkey

from signer_scout.core.exceptions import InvalidAddressError


def is_valid_address(address: str) -> bool:
    """Return True if address parses as a Solana public key."""
    try:
        Pubkey.from_string(address.strip())
        return True
    except Exception:
        return False


def validate_addresses(addresses: list[str]) -> list[str]:
    """
    Strip and validate contract addresses, preserving caller order.

    Raises InvalidAddressError on the first address that is not a public key.
    Duplicates are kept; each listed address is scanned once per occurrence.
    """
    out: list[str] = []
    for raw in addresses:
        address = (raw or "").strip()
        if not address or not is_valid_address(address):
            raise InvalidAddressError(raw)
        out.append(address)
    return out
