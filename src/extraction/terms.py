"""Ordered question search terms per semantic field.

Each tuple is most-specific first: ``find_answer`` tries every term for an exact
question match before any substring match, so a generic term never shadows a
specific one that also exists on the form.
"""

CAMPAIGN_NAME_TERMS = (
    "campaign name",
    "name of campaign",
    "campaign title",
    "ad name",
    "advertisement name",
    "marketing campaign name",
)

AD_SET_NAME_TERMS = (
    "ad set name",
    "adset name",
    "ad name",
    "campaign name",
    "advertisement name",
)

# no bare "target": it would match "Target Geography" and "Target Audience"
OBJECTIVE_TERMS = (
    "objective",
    "goal",
    "key result",
    "kpi",
    "purpose",
    "primary objective",
    "campaign objective",
    "marketing objective",
)

GEOGRAPHY_TERMS = (
    "geography",
    "target geography",
    "target geographies",
    "location",
    "country",
    "countries",
    "region",
    "target location",
    "target region",
)

# no bare "age": it would match "agency"
AGE_RANGE_TERMS = (
    "target audience age range",
    "audience age range",
    "age range",
    "target age",
    "audience age",
    "demographic",
    "age group",
)

LANGUAGE_TERMS = (
    "language",
    "languages",
    "target language",
    "audience language",
)

START_DATE_TERMS = (
    "start date",
    "campaign start",
    "begin date",
    "launch date",
    "go live date",
    "start time",
)

END_DATE_TERMS = (
    "end date",
    "campaign end",
    "finish date",
    "completion date",
    "close date",
    "end time",
)

BUDGET_AMOUNT_TERMS = (
    "budget amount",
    "total budget",
    "campaign budget",
    "budget",
    "total spend",
    "campaign spend",
    "investment",
    "cost",
)

# Inserted ahead of the generic "budget" term for that platform
PLATFORM_BUDGET_TERMS = {
    "google": ("google budget", "search budget", "display budget", "ads budget"),
    "linkedin": ("linkedin budget", "b2b budget", "professional budget"),
    "meta": ("meta budget", "facebook budget", "instagram budget"),
    "tiktok": ("tiktok budget",),
}

BUDGET_PERIOD_TERMS = (
    "budget period",
    "budget type",
    "period",
    "daily",
    "lifetime",
    "total budget",
    "budget duration",
)

CURRENCY_TERMS = (
    "budget currency",
    "currency",
    "currency code",
    "payment currency",
)

APPLICATION_ID_TERMS = (
    "application id",
    "app id",
    "facebook app id",
    "mobile app id",
)

APP_STORE_URL_TERMS = (
    "app store url",
    "app url",
    "store url",
    "download url",
    "app link",
    "application url",
)

PAGE_ID_TERMS = (
    "page id",
    "facebook page id",
    "fb page id",
    "page identifier",
)

CAMPAIGN_TYPE_TERMS = (
    "campaign type",
    "ad type",
    "ad format",
)


def budget_terms_for(platform: str | None = None) -> tuple[str, ...]:
    """Budget amount terms with the platform's own budget questions ahead of the generic ones."""
    extra = PLATFORM_BUDGET_TERMS.get(platform or "", ())
    if not extra:
        return BUDGET_AMOUNT_TERMS
    split = BUDGET_AMOUNT_TERMS.index("budget")
    return BUDGET_AMOUNT_TERMS[:split] + extra + BUDGET_AMOUNT_TERMS[split:]
