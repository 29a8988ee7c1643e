"""Platform Classifier: which ad platforms a submission asks for, and how they group.

Only channel/network/platform questions are scanned, so an objective such as
"grow our LinkedIn following" does not request LinkedIn. Each answer token is
assigned to every platform family it names (Meta, Google, LinkedIn, TikTok),
at most once per family; a token naming none of them is its own group. All Meta
placements therefore collapse into the single ``meta`` allocation unit.
"""

import re
from collections.abc import Sequence
from types import MappingProxyType

from src.extraction.fields import normalize_answer_list
from src.extraction.mapping import keyword_pattern
from src.extraction.terms import CAMPAIGN_TYPE_TERMS
from src.models.budget import MetaPublisherPlatform, PlatformDetection, PlatformToken
from src.models.submission import QAPair
from src.utils.logger import get_logger

logger = get_logger("campaign_intake.platforms.classifier")

PLATFORM_QUESTION = re.compile(r"channel|network|platform|preferred|social\s*media", re.IGNORECASE)

META_KEYWORDS = ("facebook", "instagram", "messenger", "threads", "meta")
META_SHORT_CODES = ("fb", "ig")
GOOGLE_SEARCH_KEYWORDS = (
    "google search",
    "search ads",
    "google ads search",
    "search campaigns",
    "paid search",
)
GOOGLE_DISPLAY_KEYWORDS = (
    "google display",
    "display ads",
    "google ads display",
    "display campaigns",
    "display network",
)
GOOGLE_GENERAL_KEYWORDS = ("google ads", "google", "adwords")
LINKEDIN_KEYWORDS = ("linkedin", "linked in", "professional network", "b2b")
TIKTOK_KEYWORDS = ("tiktok", "tik tok")

# Order is the order group keys are reported in
PLATFORM_PATTERNS = MappingProxyType({
    PlatformToken.META: keyword_pattern(META_KEYWORDS, META_SHORT_CODES),
    PlatformToken.GOOGLE: keyword_pattern(
        GOOGLE_SEARCH_KEYWORDS + GOOGLE_DISPLAY_KEYWORDS + GOOGLE_GENERAL_KEYWORDS
    ),
    PlatformToken.LINKEDIN: keyword_pattern(LINKEDIN_KEYWORDS),
    PlatformToken.TIKTOK: keyword_pattern(TIKTOK_KEYWORDS),
})

_GOOGLE_SEARCH = keyword_pattern(GOOGLE_SEARCH_KEYWORDS)
_GOOGLE_DISPLAY = keyword_pattern(GOOGLE_DISPLAY_KEYWORDS)
_CAMPAIGN_TYPE_QUESTION = re.compile(
    PLATFORM_QUESTION.pattern + "|" + "|".join(re.escape(t) for t in CAMPAIGN_TYPE_TERMS),
    re.IGNORECASE,
)

PUBLISHER_PLATFORM_RULES = (
    (MetaPublisherPlatform.FACEBOOK, keyword_pattern(("facebook",), ("fb",))),
    (MetaPublisherPlatform.INSTAGRAM, keyword_pattern(("instagram",), ("ig",))),
    (MetaPublisherPlatform.MESSENGER, keyword_pattern(("messenger",))),
    (MetaPublisherPlatform.THREADS, keyword_pattern(("threads",))),
    (MetaPublisherPlatform.AUDIENCE_NETWORK, keyword_pattern(("audience network",))),
)
DEFAULT_PUBLISHER_PLATFORMS = (MetaPublisherPlatform.FACEBOOK, MetaPublisherPlatform.INSTAGRAM)


def platform_answers(form_data: Sequence[QAPair], question_pattern: re.Pattern = PLATFORM_QUESTION) -> list[str]:
    """Answers to the questions that can name ad platforms, in submission order."""
    return [
        pair.answer
        for pair in form_data or ()
        if pair.answer and question_pattern.search(pair.question)
    ]


def platform_tokens(form_data: Sequence[QAPair]) -> list[str]:
    tokens: list[str] = []
    for answer in platform_answers(form_data):
        tokens.extend(normalize_answer_list(answer))
    return tokens


def platforms_in(token: str) -> list[PlatformToken]:
    """Platform families named by one token, in ``PLATFORM_PATTERNS`` order."""
    return [platform for platform, pattern in PLATFORM_PATTERNS.items() if pattern.search(token)]


def group_keys(token: str) -> list[str]:
    """Allocation group keys for a token; an unrecognised channel is its own group."""
    platforms = platforms_in(token)
    return [p.value for p in platforms] if platforms else [token]


def count_platform_groups(tokens: Sequence[str]) -> int:
    """Distinct allocation groups; any mix of Meta placements counts once."""
    return len(_groups(tokens))


def _groups(tokens: Sequence[str]) -> tuple[str, ...]:
    seen: dict[str, None] = {}
    for token in tokens:
        for key in group_keys(token.strip().lower()):
            seen.setdefault(key, None)
    return tuple(seen)


def detect_platforms(form_data: Sequence[QAPair]) -> PlatformDetection:
    """Requested platforms and allocation groups for a submission."""
    tokens = platform_tokens(form_data)
    groups = _groups(tokens)
    requested = frozenset(p for token in tokens for p in platforms_in(token))
    logger.debug(
        "classifier.detected",
        tokens=tokens,
        groups=list(groups),
        requested=sorted(p.value for p in requested),
    )
    return PlatformDetection(requested=requested, groups=groups, tokens=tuple(tokens))


def extract_publisher_platforms(form_data: Sequence[QAPair]) -> list[MetaPublisherPlatform]:
    """Meta placements named in the platform answers (may be empty)."""
    text = " ".join(" ".join(normalize_answer_list(a)) for a in platform_answers(form_data))
    return [platform for platform, pattern in PUBLISHER_PLATFORM_RULES if pattern.search(text)]


def publisher_platforms_for_draft(form_data: Sequence[QAPair]) -> list[MetaPublisherPlatform]:
    """Named Meta placements, or Facebook + Instagram when the form names none."""
    return extract_publisher_platforms(form_data) or list(DEFAULT_PUBLISHER_PLATFORMS)


def detect_google_campaign_type(form_data: Sequence[QAPair]) -> str:
    """SEARCH or DISPLAY; Search wins when both are mentioned, and is the default."""
    answers = " ".join(
        " ".join(normalize_answer_list(a))
        for a in platform_answers(form_data, _CAMPAIGN_TYPE_QUESTION)
    )
    if _GOOGLE_SEARCH.search(answers):
        return "SEARCH"
    if _GOOGLE_DISPLAY.search(answers):
        return "DISPLAY"
    return "SEARCH"
