"""Form Parser: turn an intake email body into ordered question/answer pairs.

Microsoft Forms notifications carry a submission either as an HTML table (header
row = questions, single body row = answers) or, in plain-text renderings, as two
fixed-width lines whose columns are separated by runs of three or more spaces.
Parsing never raises: malformed HTML falls back to the text layout, and a body
with nothing recognisable yields an empty ``form_data``.
"""

import re

from bs4 import BeautifulSoup

from src.models.submission import QAPair, StructuredSubmission
from src.utils.body_sanitizer import FORM_TEXT_PIPELINE, decode_leftover_entities, sanitize_email_body
from src.utils.logger import get_logger

logger = get_logger("campaign_intake.intake.form_parser")

_COLUMN_GAP = re.compile(r" {3,}")
_HTML_MARKUP = re.compile(r"<\s*/?\s*(html|body|table|div|p|br|span|td|tr|pre)\b", re.I)
_WHITESPACE = re.compile(r"\s+")


def _cell_text(cell) -> str:
    text = decode_leftover_entities(cell.get_text(" ", strip=True))
    return _WHITESPACE.sub(" ", text).strip()


def parse_html_table(body: str) -> list[QAPair] | None:
    """Return pairs from the first table with a <thead> and <tbody>, or None when there is none."""
    soup = BeautifulSoup(body, "lxml")
    thead = soup.find("thead")
    if thead is None:
        return None
    table = thead.find_parent("table")
    tbody = table.find("tbody") if table is not None else None
    if tbody is None:
        return None

    header_row = thead.find("tr") or thead
    questions = [_cell_text(c) for c in header_row.find_all(["th", "td"])]
    data_row = tbody.find("tr")
    answers = [_cell_text(c) for c in data_row.find_all(["td", "th"])] if data_row else []

    pairs = []
    for index, question in enumerate(questions):
        if not question:
            continue
        answer = answers[index] if index < len(answers) else ""
        pairs.append(QAPair(question=question, answer=answer))
    return pairs


def column_spans(header_line: str) -> list[tuple[int, int | None]]:
    """Column [start, end) spans of a fixed-width header line; the last span is open-ended."""
    starts = [0]
    for match in _COLUMN_GAP.finditer(header_line):
        if match.end() > starts[-1]:
            starts.append(match.end())
    ends: list[int | None] = starts[1:] + [None]
    return list(zip(starts, ends))


def parse_fixed_width(text: str) -> list[QAPair]:
    """Pair the first two non-blank lines column by column."""
    lines = [line.rstrip() for line in text.split("\n") if line.strip()]
    if len(lines) < 2:
        return []
    question_line, answer_line = lines[0], lines[1]

    pairs = []
    for start, end in column_spans(question_line):
        question = question_line[start:end].strip()
        if not question:
            continue
        # slicing clamps to the answer line's length
        answer = answer_line[start:end].strip()
        pairs.append(QAPair(question=question, answer=answer))
    return pairs


def _to_plain_text(body: str) -> str:
    content_type = "html" if _HTML_MARKUP.search(body) else "text"
    return sanitize_email_body(body, content_type=content_type, pipeline=FORM_TEXT_PIPELINE)


def parse_form_submission(raw_email_body: str) -> StructuredSubmission:
    """Parse a raw email body into a StructuredSubmission."""
    body = raw_email_body or ""

    if "<table" in body.lower():
        try:
            pairs = parse_html_table(body)
        except Exception:
            logger.warning("form_parser.html_failed", exc_info=True)
            pairs = None
        if pairs is not None:
            logger.debug("form_parser.table_parsed", pairs=len(pairs))
            return StructuredSubmission(raw_text=body, form_data=tuple(pairs))

    try:
        pairs = parse_fixed_width(_to_plain_text(body))
    except Exception:
        logger.warning("form_parser.text_failed", exc_info=True)
        pairs = []
    logger.debug("form_parser.text_parsed", pairs=len(pairs))
    return StructuredSubmission(raw_text=body, form_data=tuple(pairs))
