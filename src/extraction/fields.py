"""Field Extractor: best-matching answers and typed sub-extractors.

All helpers return a "not found" sentinel (``""``, ``0.0``, ``{}``, ``[]``)
instead of raising, so a draft can always be assembled from sparse forms.
"""

import json
import math
import re
from collections.abc import Iterable, Sequence
from datetime import datetime, timezone
from typing import Any

from dateutil import parser

from src.models.submission import QAPair
from src.utils.logger import get_logger

logger = get_logger("campaign_intake.extraction.fields")

# Stripped from a question before exact comparison ("Budget?" == "budget")
_QUESTION_DECORATION = " \t?:*"
_AMOUNT_NOISE = re.compile(r"[£$€,\s]")
_LEADING_FLOAT = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")
_INTEGER = re.compile(r"\d+")
_LIST_SEPARATORS = re.compile(r"[,;\n]")

AGE_FLOOR = 13
AGE_CEILING = 99
YOUNG_AUDIENCE_MAX = 30


def find_answer(form_data: Sequence[QAPair], search_terms: Iterable[str]) -> str:
    """Answer to the best-matching question, or "".

    Every term is tried for an exact (case-insensitive) question match, in the
    order given, before any substring match is attempted. The substring pass
    returns the first question in submission order containing any term.
    """
    if not form_data:
        return ""
    terms = [t.lower() for t in search_terms if t]
    questions = [(pair.question.strip(_QUESTION_DECORATION).lower(), pair) for pair in form_data]

    for term in terms:
        for question, pair in questions:
            if question == term:
                return pair.answer or ""

    for question, pair in questions:
        if any(term in question for term in terms):
            return pair.answer or ""

    return ""


def parse_amount(text: Any) -> float:
    """Strip currency symbols, thousands separators and spaces, then read the leading number."""
    if text is None:
        return 0.0
    cleaned = _AMOUNT_NOISE.sub("", str(text))
    match = _LEADING_FLOAT.match(cleaned)
    if not match:
        return 0.0
    try:
        value = float(match.group())
    except ValueError:
        return 0.0
    # float() saturates to inf instead of raising on huge inputs
    return value if math.isfinite(value) else 0.0


def _parse(text: Any) -> datetime | None:
    if not text or not str(text).strip():
        return None
    try:
        # month-first, as form notifications render dates in en-US
        return parser.parse(str(text).strip(), dayfirst=False)
    except (ValueError, OverflowError):
        logger.debug("fields.unparseable_date", value=str(text))
        return None


def parse_date(text: Any) -> str:
    """ISO ``YYYY-MM-DD`` for the answer, or "" when it is not a date."""
    parsed = _parse(text)
    return parsed.date().isoformat() if parsed else ""


def parse_datetime(text: Any) -> str:
    """Full ISO-8601 timestamp (naive values are taken as UTC), or ""."""
    parsed = _parse(text)
    if parsed is None:
        return ""
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed.isoformat()


def parse_age_range(text: Any) -> dict[str, int]:
    """``{age_min, age_max}`` from answers like "25-54", "Women 18 to 34" or "65+"."""
    if not text:
        return {}
    numbers = [int(n) for n in _INTEGER.findall(str(text))]
    if len(numbers) >= 2:
        age_min, age_max = numbers[0], numbers[1]
        if AGE_FLOOR <= age_min <= age_max <= AGE_CEILING:
            return {"age_min": age_min, "age_max": age_max}
        return {}
    if len(numbers) == 1 and AGE_FLOOR <= numbers[0] <= AGE_CEILING:
        age = numbers[0]
        return {"age_min": age} if age <= YOUNG_AUDIENCE_MAX else {"age_max": age}
    return {}


def _flatten(items: Iterable[Any]) -> Iterable[Any]:
    for item in items:
        if isinstance(item, (list, tuple)):
            yield from _flatten(item)
        elif item is not None:
            yield item


def normalize_answer_list(answer: Any) -> list[str]:
    """Flat lowercase token list from a JSON-array string or a delimited string."""
    if answer is None:
        return []
    text = str(answer).strip()
    items: list[Any] | None = None
    if text.startswith("[") and text.endswith("]"):
        try:
            parsed = json.loads(text)
        except ValueError:
            logger.debug("fields.answer_not_json", answer=text)
            parsed = None
        if isinstance(parsed, list):
            items = list(_flatten(parsed))
    if items is None:
        items = _LIST_SEPARATORS.split(text)
    tokens = (str(item).strip().lower() for item in items)
    return [t for t in tokens if t]
