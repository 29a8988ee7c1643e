"""Currency detection and display."""

import re
from collections.abc import Sequence
from types import MappingProxyType

from pydantic import BaseModel

from src.config import DEFAULT_CURRENCY
from src.extraction.fields import find_answer
from src.extraction.mapping import keyword_pattern
from src.extraction.terms import BUDGET_AMOUNT_TERMS, CURRENCY_TERMS
from src.models.submission import QAPair
from src.utils.logger import get_logger

logger = get_logger("campaign_intake.budget.currency")


class CurrencyConfig(BaseModel):
    """How a currency is displayed."""

    model_config = {"frozen": True}

    code: str
    symbol: str
    name: str
    position: str = "before"


CURRENCY_CONFIGS = MappingProxyType({
    "USD": CurrencyConfig(code="USD", symbol="$", name="US Dollar"),
    "GBP": CurrencyConfig(code="GBP", symbol="£", name="British Pound"),
    "EUR": CurrencyConfig(code="EUR", symbol="€", name="Euro"),
    "CAD": CurrencyConfig(code="CAD", symbol="C$", name="Canadian Dollar"),
})
# Symbols are the most reliable signal; "C$" must be checked before "$"
CURRENCY_SYMBOLS = (("CA$", "CAD"), ("C$", "CAD"), ("£", "GBP"), ("€", "EUR"), ("$", "USD"))
CURRENCY_WORD_RULES = (
    ("CAD", keyword_pattern(("canadian dollar",), ("cad",))),
    ("GBP", keyword_pattern(("pound", "sterling"), ("gbp",))),
    # whole words only: "Europe" in a geography answer is not a currency
    ("EUR", keyword_pattern(words=("eur", "euro", "euros"))),
    ("USD", keyword_pattern(("dollar", "us dollar"), ("usd",))),
)


def currency_in_text(text: str) -> str | None:
    """Currency named by a symbol or word in ``text``, or None."""
    if not text:
        return None
    for symbol, code in CURRENCY_SYMBOLS:
        if symbol in text:
            return code
    for code, pattern in CURRENCY_WORD_RULES:
        if pattern.search(text):
            return code
    return None


def detect_currency(form_data: Sequence[QAPair]) -> str:
    """Currency field, then the budget answer, then any answer; ``DEFAULT_CURRENCY`` otherwise."""
    currency_field = find_answer(form_data, CURRENCY_TERMS)
    sources = (
        ("currency_field", currency_field),
        ("budget_answer", find_answer(form_data, BUDGET_AMOUNT_TERMS)),
        ("all_answers", " ".join(pair.answer for pair in form_data or () if pair.answer)),
    )
    for source, text in sources:
        code = currency_in_text(text)
        if code:
            logger.debug("currency.detected", currency=code, source=source)
            return code
    # a currency field naming an unsupported code ("JPY") is logged and replaced
    return normalize_currency(currency_field)


def normalize_currency(code: str | None) -> str:
    """Upper-case supported code; anything else becomes ``DEFAULT_CURRENCY``."""
    candidate = (code or "").strip().upper()
    if candidate in CURRENCY_CONFIGS:
        return candidate
    if candidate:
        logger.warning("currency.unsupported", currency=candidate, fallback=DEFAULT_CURRENCY)
    return DEFAULT_CURRENCY


def format_currency_amount(amount: float, currency: str, show_code: bool = False) -> str:
    """``£300.00`` style amount; ``show_code`` appends the ISO code (``£300.00 GBP``)."""
    config = CURRENCY_CONFIGS.get(currency.upper()) if currency else None
    if config is None:
        return f"{currency} {amount:.2f}".strip()
    if config.position == "before":
        text = f"{config.symbol}{amount:.2f}"
    else:
        text = f"{amount:.2f}{config.symbol}"
    return f"{text} {config.code}" if show_code else text
