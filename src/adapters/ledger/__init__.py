"""Ledger adapters - Fee transfer implementations."""

from .console import ConsoleLedger

__all__ = ["ConsoleLedger"]
