"""Utility functions for homeledger."""

from homeledger.utils.date_parser import parse_date, parse_statement_date
from homeledger.utils.amount_parser import format_amount, parse_amount

__all__ = ["parse_date", "parse_statement_date", "format_amount", "parse_amount"]
