"""
Async Solana JSON-RPC client — the ledger-query capability consumed by discovery.

Responsibilities:
- getSignaturesForAddress: one page of SignatureRecord, newest-first.
- getTransaction (jsonParsed, maxSupportedTransactionVersion): ParsedTransaction or None.
- Map transport, HTTP and JSON-RPC failures to RpcError. No retries here;
  retry and skip decisions belong to the discovery engine.
"""

from __future__ import annotations

from typing import Any, Protocol

import httpx

from signer_scout.core.exceptions import RpcError
from signer_scout.scout_logging import get_logger
from signer_scout.solana_rpc.models import ParsedTransaction, SignatureRecord
from signer_scout.solana_rpc.parser import parse_transaction

logger = get_logger(__name__)

DEFAULT_TIMEOUT_SEC = 30.0
DEFAULT_COMMITMENT = "confirmed"
MAX_SIGNATURES_LIMIT = 1000


class LedgerClient(Protocol):
    """What the discovery engine needs from a ledger-query service."""

    async def get_signatures_for_address(
        self,
        address: str,
        limit: int = MAX_SIGNATURES_LIMIT,
        before: str | None = None,
    ) -> list[SignatureRecord]:
        ...

    async def get_parsed_transaction(
        self,
        signature: str,
        max_supported_transaction_version: int = 0,
    ) -> ParsedTransaction | None:
        ...


class SolanaRpcClient:
    """
    Minimal async JSON-RPC 2.0 client for a Solana node.

    Use as an async context manager, or call aclose() when done. An existing
    httpx.AsyncClient may be injected (e.g. with httpx.MockTransport in tests);
    an injected client is not closed by this class.
    """

    def __init__(
        self,
        rpc_url: str,
        *,
        timeout_sec: float = DEFAULT_TIMEOUT_SEC,
        commitment: str = DEFAULT_COMMITMENT,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        if not rpc_url.strip():
            raise ValueError("rpc_url must be non-empty")
        self._rpc_url = rpc_url.rstrip("/")
        self._commitment = commitment
        self._owns_client = http_client is None
        self._client = http_client or httpx.AsyncClient(timeout=httpx.Timeout(timeout_sec))
        self._request_id = 0

    async def __aenter__(self) -> "SolanaRpcClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    def _next_id(self) -> int:
        self._request_id += 1
        return self._request_id

    async def _call(self, method: str, params: list[Any]) -> Any:
        """Perform one JSON-RPC call; return the "result" member (which may be None)."""
        body = {"jsonrpc": "2.0", "id": self._next_id(), "method": method, "params": params}
        try:
            resp = await self._client.post(self._rpc_url, json=body)
        except httpx.HTTPError as e:
            raise RpcError(f"{type(e).__name__}: {e}", method=method) from e
        if resp.status_code >= 400:
            raise RpcError(
                f"HTTP {resp.status_code} from Solana RPC",
                status_code=resp.status_code,
                method=method,
            )
        try:
            data = resp.json()
        except ValueError as e:
            raise RpcError("Solana RPC returned invalid JSON", method=method) from e
        if not isinstance(data, dict):
            raise RpcError("Solana RPC returned a non-object response", method=method)
        if "error" in data:
            err = data["error"] or {}
            code = err.get("code") if isinstance(err, dict) else None
            message = err.get("message", err) if isinstance(err, dict) else err
            raise RpcError(
                f"Solana RPC error: {message} (code={code})",
                code=code,
                method=method,
            )
        if "result" not in data:
            raise RpcError("Solana RPC returned no result", method=method)
        return data["result"]

    async def get_signatures_for_address(
        self,
        address: str,
        limit: int = MAX_SIGNATURES_LIMIT,
        before: str | None = None,
    ) -> list[SignatureRecord]:
        """
        Fetch one page of signatures for address, newest-first.

        before is the pagination cursor (signature to start searching backwards from).
        """
        if not (1 <= limit <= MAX_SIGNATURES_LIMIT):
            raise ValueError(f"limit must be between 1 and {MAX_SIGNATURES_LIMIT}")
        opts: dict[str, Any] = {"limit": limit, "commitment": self._commitment}
        if before is not None:
            opts["before"] = before
        result = await self._call("getSignaturesForAddress", [address, opts])
        if not isinstance(result, list):
            raise RpcError(
                "getSignaturesForAddress returned a non-list result",
                method="getSignaturesForAddress",
            )
        records: list[SignatureRecord] = []
        for item in result:
            if not isinstance(item, dict) or "signature" not in item:
                continue
            try:
                records.append(SignatureRecord.from_rpc_item(item))
            except (KeyError, TypeError, ValueError) as e:
                logger.debug("rpc_skip_invalid_signature_item", error=str(e))
        return records

    async def get_parsed_transaction(
        self,
        signature: str,
        max_supported_transaction_version: int = 0,
    ) -> ParsedTransaction | None:
        """Fetch one transaction in jsonParsed encoding; None when the node does not have it."""
        opts = {
            "encoding": "jsonParsed",
            "commitment": self._commitment,
            "maxSupportedTransactionVersion": max_supported_transaction_version,
        }
        result = await self._call("getTransaction", [signature, opts])
        if result is not None and not isinstance(result, dict):
            raise RpcError("getTransaction returned a non-object result", method="getTransaction")
        return parse_transaction(signature, result)
