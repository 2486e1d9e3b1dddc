"""Run-wide accumulator of unique signer addresses."""

from __future__ import annotations

from typing import Callable, Iterable

NewAddressObserver = Callable[[str, int], None]


class AddressSetBuilder:
    """
    Insertion-ordered set of addresses. Grows only; there is no removal.

    The optional observer is called as observer(address, total) for each
    address seen for the first time. It is for progress reporting only.
    """

    def __init__(self, on_new_address: NewAddressObserver | None = None) -> None:
        self._addresses: dict[str, None] = {}
        self._on_new_address = on_new_address

    def add(self, address: str) -> bool:
        """Add address; return True if it was new."""
        if address in self._addresses:
            return False
        self._addresses[address] = None
        if self._on_new_address is not None:
            self._on_new_address(address, len(self._addresses))
        return True

    def add_all(self, addresses: Iterable[str]) -> int:
        """Add each address; return how many were new. Order within one call is sorted for determinism."""
        return sum(1 for a in sorted(addresses) if self.add(a))

    def addresses(self) -> list[str]:
        return list(self._addresses)

    def __contains__(self, address: object) -> bool:
        return address in self._addresses

    def __len__(self) -> int:
        return len(self._addresses)
