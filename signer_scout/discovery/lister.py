"""Single-page signature listing for one contract address."""

from __future__ import annotations

from signer_scout.core.exceptions import SignatureListingError
from signer_scout.solana_rpc.client import MAX_SIGNATURES_LIMIT, LedgerClient
from signer_scout.solana_rpc.models import SignatureRecord

DEFAULT_PAGE_LIMIT = MAX_SIGNATURES_LIMIT


class SignatureLister:
    """
    Returns one page of SignatureRecord, newest-first, for an address.

    There is no automatic continuation past that page. Callers wanting full
    history pass the last signature of a page as the before cursor of the next call.
    Any failure is raised as SignatureListingError.
    """

    def __init__(self, client: LedgerClient, page_limit: int = DEFAULT_PAGE_LIMIT) -> None:
        if not (1 <= page_limit <= MAX_SIGNATURES_LIMIT):
            raise ValueError(f"page_limit must be between 1 and {MAX_SIGNATURES_LIMIT}")
        self._client = client
        self._page_limit = page_limit

    @property
    def page_limit(self) -> int:
        return self._page_limit

    async def list_page(self, address: str, before: str | None = None) -> list[SignatureRecord]:
        try:
            records = await self._client.get_signatures_for_address(
                address, limit=self._page_limit, before=before
            )
        except Exception as e:
            raise SignatureListingError(address, str(e)) from e
        return list(records or [])
