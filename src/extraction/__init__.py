"""Field extraction: ordered question matching and answer classification."""

from src.extraction.fields import (
    find_answer,
    normalize_answer_list,
    parse_age_range,
    parse_amount,
    parse_date,
    parse_datetime,
)

__all__ = [
    "find_answer",
    "normalize_answer_list",
    "parse_age_range",
    "parse_amount",
    "parse_date",
    "parse_datetime",
]
