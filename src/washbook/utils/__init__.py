"""Utility functions for washbook."""

from washbook.utils.date_parser import parse_date, parse_datetime, parse_time
from washbook.utils.amount_parser import parse_amount

__all__ = ["parse_date", "parse_datetime", "parse_time", "parse_amount"]
