"""
Structured logging for signer-scout.

Console output for local runs, JSON for aggregation. Entry points call
configure_logging() once; modules use get_logger(__name__).
"""

from signer_scout.scout_logging.logger import configure_logging, get_logger

__all__ = ["configure_logging", "get_logger"]
