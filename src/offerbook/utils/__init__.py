"""Utility functions for offerbook."""

from offerbook.utils.date_parser import parse_date
from offerbook.utils.amount_parser import parse_amount, coerce_amount
from offerbook.utils.local_store import LocalStore

__all__ = ["parse_date", "parse_amount", "coerce_amount", "LocalStore"]
