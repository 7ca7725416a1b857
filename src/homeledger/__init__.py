"""Household budget ledger with bank statement import."""

__version__ = "0.1.0"
