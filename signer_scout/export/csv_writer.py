"""
Address list sink.

The output is a single record: addresses joined by ';' and terminated by one
newline, e.g. "Addr1;Addr2;Addr3\\n". No header, no escaping (base58 has no ';').
"""

from __future__ import annotations

from pathlib import Path
from typing import Iterable

from signer_scout.scout_logging import get_logger

logger = get_logger(__name__)

DELIMITER = ";"


def format_addresses(addresses: Iterable[str]) -> str:
    return DELIMITER.join(addresses) + "\n"


def write_addresses(addresses: Iterable[str], path: str | Path) -> Path:
    """Write the address record to path (UTF-8), creating parent directories. Returns the path."""
    out = Path(path)
    items = list(addresses)
    out.parent.mkdir(parents=True, exist_ok=True)
    out.write_text(format_addresses(items), encoding="utf-8")
    logger.info("addresses_written", path=str(out), count=len(items))
    return out
