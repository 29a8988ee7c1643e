"""Plain-text rendering of form notification bodies, as a configurable pipeline.

Fixed-width notifications are parsed column by column, so no step here may
collapse horizontal whitespace: runs of three or more spaces separate columns.

Usage:
    from src.utils.body_sanitizer import FORM_TEXT_PIPELINE, sanitize_email_body

    text = sanitize_email_body(raw_body, content_type="html", pipeline=FORM_TEXT_PIPELINE)
"""

import html
import re
from typing import Callable

from bs4 import BeautifulSoup, NavigableString

# (text, content_type) -> text
Sanitizer = Callable[[str, str], str]

# Wide enough that adjacent cells never merge into one column
CELL_GAP = " " * 3
TAB_WIDTH = 4


# -----------------------------------------------------------------------------
# Steps
# -----------------------------------------------------------------------------


# Forwarders double-encode apostrophes and the like (&amp;#039;); named
# entities left after one decode are literal text ("AT&amp;T") and are kept
_LEFTOVER_NUMERIC_ENTITY = re.compile(r"&#(?:x[0-9a-f]+|\d+);", re.I)


def decode_leftover_entities(text: str) -> str:
    """Decode numeric character references that survived HTML parsing."""
    return _LEFTOVER_NUMERIC_ENTITY.sub(lambda m: html.unescape(m.group()), text)


def _cell_line(cell) -> str:
    text = " ".join(cell.get_text(" ").split())
    return decode_leftover_entities(text).translate(_CHARACTER_MAP)


def _align_table_cells(soup) -> None:
    """Pad every cell to its column's widest text so each row renders as fixed-width columns."""
    for table in soup.find_all("table"):
        rows = []
        for row in table.find_all("tr"):
            # whitespace between cells would break the row across lines
            for child in list(row.children):
                if isinstance(child, NavigableString) and not child.strip():
                    child.extract()
            rows.append(row.find_all(["td", "th"], recursive=False))

        texts = [[_cell_line(cell) for cell in cells] for cells in rows]
        widths: dict[int, int] = {}
        for row_texts in texts:
            for index, text in enumerate(row_texts):
                widths[index] = max(widths.get(index, 0), len(text))

        for cells, row_texts in zip(rows, texts):
            for index, (cell, text) in enumerate(zip(cells, row_texts)):
                cell.string = text.ljust(widths[index]) + CELL_GAP


def html_to_text(text: str, content_type: str) -> str:
    """Render HTML as text: one row or block per line, table cells aligned in columns."""
    if content_type.lower() != "html" or not text.strip():
        return text

    soup = BeautifulSoup(text, "lxml")
    for el in soup(["script", "style", "head", "meta", "link", "title"]):
        el.decompose()

    for br in soup.find_all("br"):
        br.replace_with("\n")
    _align_table_cells(soup)
    for block in soup.find_all(["p", "div", "tr", "li", "pre", "table"]):
        block.insert_before("\n")
        block.insert_after("\n")

    return decode_leftover_entities(soup.get_text())


# zero-width space, non-joiner, joiner, BOM
_ZERO_WIDTH = dict.fromkeys((0x200B, 0x200C, 0x200D, 0xFEFF))
_CHARACTER_MAP = str.maketrans({
    **_ZERO_WIDTH,
    0x2018: "'",
    0x2019: "'",
    0x201C: '"',
    0x201D: '"',
    0x00A0: " ",
})


def normalize_characters(text: str, content_type: str) -> str:
    """Drop zero-width characters, plain-ify quotes and NBSP, unify line endings, expand tabs."""
    text = text.translate(_CHARACTER_MAP)
    text = text.replace("\r\n", "\n").replace("\r", "\n")
    return text.expandtabs(TAB_WIDTH)


# Warnings mail gateways prepend when a form notification is forwarded
_GATEWAY_BANNERS = (
    re.compile(r"^You don't often get e?-?mail from\s+.+$", re.I),
    re.compile(r"^(WARNING|CAUTION|EXTERNAL):\s*.*\b(external|outside)\b.*$", re.I),
    re.compile(r"^\[\s*(EXTERNAL|EXT|CAUTION)\s*\]:?\s*$", re.I),
    re.compile(r"^This\s+(message|e?-?mail)\s+(was\s+sent\s+)?from\s+(an?\s+)?(external|outside)\s+.*$", re.I),
)


def remove_security_banners(text: str, content_type: str) -> str:
    kept = (line for line in text.split("\n") if not any(p.match(line.strip()) for p in _GATEWAY_BANNERS))
    return "\n".join(kept)


def strip_trailing_whitespace(text: str, content_type: str) -> str:
    """Right-strip each line; indentation and inner column gaps are kept."""
    return "\n".join(line.rstrip() for line in text.split("\n"))


FORM_TEXT_PIPELINE: list[Sanitizer] = [
    html_to_text,
    normalize_characters,
    remove_security_banners,
    strip_trailing_whitespace,
]


def sanitize_email_body(
    text: str,
    content_type: str = "text",
    pipeline: list[Sanitizer] | None = None,
) -> str:
    """Run ``text`` through each step of ``pipeline`` (the form pipeline by default)."""
    if not text:
        return ""
    for step in pipeline or FORM_TEXT_PIPELINE:
        text = step(text, content_type)
    return text
