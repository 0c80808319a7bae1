"""
login_scraper.extract.table
===========================
Turns the first ``<table><tbody>`` of a page into row records.

Cells are read by position:

    td[0] → ID    td[1] → Empresa    td[2] → Endereço    td[3] → Referência

Rows with fewer cells get empty strings for the missing fields.  The
functions here are pure – the same HTML always gives the same rows.
"""

import json
from dataclasses import dataclass

from ..config import ROW_FIELDS
from ..logging_setup import log
from .soup import make_soup

# whitespace trimmed from cell text; U+00A0 (&nbsp;) and other Unicode
# spaces are content
_TRIM_CHARS = " \t\n\r\x00\x0b"


@dataclass(frozen=True)
class TableRow:
    id: str = ""
    empresa: str = ""
    endereco: str = ""
    referencia: str = ""

    @classmethod
    def from_cells(cls, cells: list[str]) -> "TableRow":
        padded = list(cells[:len(ROW_FIELDS)]) + [""] * (len(ROW_FIELDS) - len(cells))
        return cls(*padded)

    def to_dict(self) -> dict[str, str]:
        return dict(zip(ROW_FIELDS, (self.id, self.empresa, self.endereco, self.referencia)))


def parse_table(html: str) -> list[TableRow]:
    """
    Return one TableRow per ``<tr>`` of the first ``table > tbody`` in
    *html*, in document order.

    A page without such a table (or with an empty one) gives ``[]``.
    """
    tbody = make_soup(html).select_one("table > tbody")
    if tbody is None:
        log.debug("[PARSE] No table > tbody found")
        return []

    rows = [
        TableRow.from_cells([
            td.get_text().strip(_TRIM_CHARS) for td in tr.find_all("td", recursive=False)
        ])
        for tr in tbody.find_all("tr", recursive=False)
    ]
    log.debug("[PARSE] %d row(s) extracted", len(rows))
    return rows


def rows_to_json(rows: list[TableRow]) -> str:
    """Serialise *rows* as an indented JSON array, non-ASCII kept as-is."""
    return json.dumps([row.to_dict() for row in rows], indent=4, ensure_ascii=False)
