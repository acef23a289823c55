"""Derive holdings, summary metrics and a value timeline from a trade ledger CSV."""

__version__ = "0.1.0"
