"""Utility functions for bulkledger."""

from bulkledger.utils.date_parser import parse_date, parse_short_date
from bulkledger.utils.amount_parser import parse_amount, parse_number
from bulkledger.utils.gst import split_gst

__all__ = ["parse_date", "parse_short_date", "parse_amount", "parse_number", "split_gst"]
