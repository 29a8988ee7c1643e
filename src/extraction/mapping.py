"""Free-text answer classification: objectives, geography, language, ids.

Rules are ordered ``(result, pattern)`` tuples; the first matching rule wins.
Long keywords match at the start of a word ("convert" matches "conversions");
short codes such as ``uk`` or ``fr`` only match as whole words so "Australia"
is never read as "us" and "Franchise" never as French.
"""

import re
from types import MappingProxyType

from src.config import DEFAULT_COUNTRY

_FLAGS = re.IGNORECASE


def keyword_pattern(prefixes: tuple[str, ...] = (), words: tuple[str, ...] = ()) -> re.Pattern:
    """Compile word-start ``prefixes`` and whole-word ``words`` into one pattern."""
    parts = []
    if prefixes:
        parts.append(r"\b(?:" + "|".join(re.escape(p) for p in prefixes) + ")")
    if words:
        parts.append(r"\b(?:" + "|".join(re.escape(w) for w in words) + r")\b")
    return re.compile("|".join(parts) or r"(?!)", _FLAGS)


def _first_match(text: str, rules, default):
    if not text:
        return default
    for result, pattern in rules:
        if pattern.search(text):
            return result
    return default


# -----------------------------------------------------------------------------
# Meta
# -----------------------------------------------------------------------------

META_OBJECTIVE_RULES = (
    ("AWARENESS", keyword_pattern(("awareness", "brand", "reach"))),
    ("TRAFFIC", keyword_pattern(("traffic", "visit", "website", "click"))),
    ("SALES", keyword_pattern(("sales", "conversion", "convert", "purchase", "revenue"))),
    ("APP_PROMOTION", keyword_pattern(("install", "download", "mobile"), ("app", "apps"))),
    ("LEADS", keyword_pattern(("lead", "generation", "signup", "sign up", "contact"))),
    ("ENGAGEMENT", keyword_pattern(("engagement", "engage", "share", "comment"), ("like", "likes"))),
)
DEFAULT_META_OBJECTIVE = "TRAFFIC"

META_API_OBJECTIVES = MappingProxyType({
    "AWARENESS": "OUTCOME_AWARENESS",
    "TRAFFIC": "OUTCOME_TRAFFIC",
    "ENGAGEMENT": "OUTCOME_ENGAGEMENT",
    "LEADS": "OUTCOME_LEADS",
    "APP_PROMOTION": "OUTCOME_APP_PROMOTION",
    "SALES": "OUTCOME_SALES",
})

META_BILLING_EVENTS = MappingProxyType({
    "AWARENESS": "IMPRESSIONS",
    "TRAFFIC": "LINK_CLICKS",
    "ENGAGEMENT": "POST_ENGAGEMENT",
    "LEADS": "NONE",
    "APP_PROMOTION": "APP_INSTALLS",
    "SALES": "PURCHASE",
})


def map_meta_objective(text: str) -> str:
    return _first_match(text, META_OBJECTIVE_RULES, DEFAULT_META_OBJECTIVE)


# -----------------------------------------------------------------------------
# LinkedIn
# -----------------------------------------------------------------------------

# Sponsored content is checked first: "brand awareness for hiring" stays SPONSORED_UPDATES
LINKEDIN_CAMPAIGN_TYPE_RULES = (
    ("TEXT_AD", keyword_pattern(("text ad",))),
    ("SPONSORED_UPDATES", keyword_pattern((
        "awareness", "brand", "engagement", "engage", "lead", "generation",
        "conversion", "convert", "traffic", "visit", "website", "video", "view",
    ))),
    ("DYNAMIC", keyword_pattern(("job", "hiring", "recruit"))),
    ("SPONSORED_INMAILS", keyword_pattern(("message", "inmail", "direct"))),
)
DEFAULT_LINKEDIN_CAMPAIGN_TYPE = "SPONSORED_UPDATES"


def map_linkedin_campaign_type(text: str) -> str:
    return _first_match(text, LINKEDIN_CAMPAIGN_TYPE_RULES, DEFAULT_LINKEDIN_CAMPAIGN_TYPE)


# -----------------------------------------------------------------------------
# TikTok
# -----------------------------------------------------------------------------

TIKTOK_OBJECTIVE_RULES = (
    ("REACH", keyword_pattern(("awareness", "brand", "reach"))),
    ("VIDEO_VIEWS", keyword_pattern(("video", "view"))),
    ("TRAFFIC", keyword_pattern(("traffic", "visit", "website", "click"))),
    ("WEB_CONVERSIONS", keyword_pattern(("sales", "conversion", "convert", "purchase", "revenue"))),
    ("APP_PROMOTION", keyword_pattern(("install", "download", "mobile"), ("app", "apps"))),
    ("LEAD_GENERATION", keyword_pattern(("lead", "generation", "signup", "sign up", "contact"))),
    ("ENGAGEMENT", keyword_pattern(("engagement", "engage", "follow", "share", "comment"), ("like", "likes"))),
)
DEFAULT_TIKTOK_OBJECTIVE = "TRAFFIC"


def map_tiktok_objective(text: str) -> str:
    return _first_match(text, TIKTOK_OBJECTIVE_RULES, DEFAULT_TIKTOK_OBJECTIVE)


# -----------------------------------------------------------------------------
# Geography and language
# -----------------------------------------------------------------------------

COUNTRY_RULES = (
    ("GB", keyword_pattern(("united kingdom", "britain", "british", "england", "scotland", "wales"), ("uk", "gb"))),
    ("US", keyword_pattern(("united states", "america"), ("us", "usa"))),
    ("CA", keyword_pattern(("canada", "canadian"))),
    ("AU", keyword_pattern(("australia",))),
    ("DE", keyword_pattern(("germany", "german", "deutschland"))),
    ("FR", keyword_pattern(("france", "french", "français"))),
    ("IT", keyword_pattern(("italy", "italian", "italia"))),
    ("ES", keyword_pattern(("spain", "spanish", "españa"))),
)
_COUNTRY_PATTERNS = MappingProxyType(dict(COUNTRY_RULES))

# LinkedIn campaigns target one country; earlier entries win
LINKEDIN_COUNTRY_PRECEDENCE = ("GB", "CA", "AU", "DE", "FR", "US")

LANGUAGE_RULES = (
    ("fr", keyword_pattern(("french", "français"), ("fr",))),
    ("de", keyword_pattern(("german", "deutsch"), ("de",))),
    ("es", keyword_pattern(("spanish", "español"), ("es",))),
    ("en", keyword_pattern(("english",), ("en",))),
)
DEFAULT_LANGUAGE = "en"


def map_geography_to_countries(text: str) -> list[str]:
    """Every country mentioned, in table order; ``[DEFAULT_COUNTRY]`` when none is."""
    found = [code for code, pattern in COUNTRY_RULES if text and pattern.search(text)]
    return found or [DEFAULT_COUNTRY]


def map_geography_to_country(text: str) -> str:
    """The single highest-precedence country mentioned, else ``DEFAULT_COUNTRY``."""
    if text:
        for code in LINKEDIN_COUNTRY_PRECEDENCE:
            if _COUNTRY_PATTERNS[code].search(text):
                return code
    return DEFAULT_COUNTRY


def map_language_code(text: str) -> str:
    return _first_match(text, LANGUAGE_RULES, DEFAULT_LANGUAGE)


# -----------------------------------------------------------------------------
# Identifiers
# -----------------------------------------------------------------------------

_NUMERIC_ID = re.compile(r"\b\d{10,20}\b")
_APP_STORE_MARKERS = ("http", "play.google.com", "apps.apple.com")


def extract_numeric_id(text: str) -> str:
    """First 10-20 digit run (Meta app and page ids), or ""."""
    if not text:
        return ""
    match = _NUMERIC_ID.search(text)
    return match.group() if match else ""


def extract_app_store_url(text: str) -> str:
    if text and any(marker in text for marker in _APP_STORE_MARKERS):
        return text.strip()
    return ""
