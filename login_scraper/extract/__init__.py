"""
login_scraper.extract
=====================
Sub-package for pulling structured data out of fetched HTML.

Public API
----------
    from login_scraper.extract import parse_table, rows_to_json
"""

from .soup import make_soup
from .table import TableRow, parse_table, rows_to_json

__all__ = ["make_soup", "TableRow", "parse_table", "rows_to_json"]
