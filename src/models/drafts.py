"""Per-platform campaign drafts and the draft bundle handed to the UI / API clients."""

from typing import Any, Literal, Optional, Union

from pydantic import BaseModel

from src.models.budget import (
    AllocatedBudget,
    BudgetSpec,
    BudgetSuggestion,
    MetaPublisherPlatform,
    PlatformDetection,
    PlatformToken,
    ValidationResult,
)


class MetaCampaignDraft(BaseModel):
    """Meta campaign. Budgets are integer cents; only the field matching ``budget_type`` is set."""

    name: str = ""
    objective: str = "TRAFFIC"
    status: str = "PAUSED"
    special_ad_categories: list[str] = []
    buying_type: str = "AUCTION"
    bid_strategy: str = "LOWEST_COST_WITHOUT_CAP"
    budget_type: Literal["LIFETIME", "DAILY"] = "LIFETIME"
    lifetime_budget: Optional[int] = None
    daily_budget: Optional[int] = None


class MetaTargeting(BaseModel):
    countries: list[str] = ["US"]
    age_min: int = 18
    age_max: int = 65
    publisher_platforms: list[MetaPublisherPlatform] = [
        MetaPublisherPlatform.FACEBOOK,
        MetaPublisherPlatform.INSTAGRAM,
    ]


class MetaAdSetDraft(BaseModel):
    """Meta ad set. App fields apply to APP_PROMOTION, ``page_id`` to LEADS."""

    name: str = ""
    status: str = "PAUSED"
    targeting: MetaTargeting = MetaTargeting()
    start_time: str = ""
    end_time: str = ""
    application_id: str = ""
    object_store_url: str = ""
    page_id: str = ""


class MetaDraft(BaseModel):
    campaign: MetaCampaignDraft = MetaCampaignDraft()
    ad_set: MetaAdSetDraft = MetaAdSetDraft()


class GoogleCampaignDraft(BaseModel):
    """Google Ads campaign. ``amount_micros`` is the daily spend the campaign budget carries."""

    name: str = ""
    campaign_type: Literal["SEARCH", "DISPLAY"] = "SEARCH"
    status: str = "PAUSED"
    budget_type: Literal["daily", "total"] = "total"
    budget_amount: float = 0.0
    daily_budget_amount: Optional[float] = None
    amount_micros: Optional[int] = None
    currency: str = "USD"
    start_date: str = ""
    end_date: str = ""


class LinkedInCampaignDraft(BaseModel):
    """LinkedIn campaign. ``budget_amount`` is a fixed two-decimal string."""

    name: str = ""
    campaign_type: str = "SPONSORED_UPDATES"
    status: str = "DRAFT"
    cost_type: str = "CPM"
    budget_type: Literal["daily", "total"] = "total"
    budget_amount: str = "0.00"
    currency: str = "USD"
    country: str = "US"
    language: str = "en"
    locale: str = "en_US"
    geo_urn: str = ""
    start_date: str = ""
    end_date: str = ""


class TikTokCampaignDraft(BaseModel):
    campaign_name: str = ""
    objective_type: str = "TRAFFIC"
    budget_mode: Literal["BUDGET_MODE_DAY", "BUDGET_MODE_TOTAL"] = "BUDGET_MODE_TOTAL"
    budget: str = "0.00"
    currency: str = "USD"
    schedule_start_time: str = ""
    schedule_end_time: str = ""
    operation_status: str = "DISABLE"


CampaignDraft = Union[MetaDraft, GoogleCampaignDraft, LinkedInCampaignDraft, TikTokCampaignDraft]


class DraftResult(BaseModel):
    """One platform's draft plus the feedback shown next to it.

    ``payload`` is the request body shape the platform API client sends.
    """

    platform: PlatformToken
    draft: CampaignDraft
    populated_fields: list[str] = []
    overridden_fields: list[str] = []
    warnings: list[str] = []
    validation: Optional[ValidationResult] = None
    allocation: AllocatedBudget
    suggestion: Optional[BudgetSuggestion] = None
    summary: str = ""
    payload: dict[str, Any] = {}


class DraftBundle(BaseModel):
    """Every selected platform's draft for one submission."""

    budget: BudgetSpec
    detection: PlatformDetection
    drafts: dict[str, DraftResult] = {}


class DraftRequest(BaseModel):
    """UI state: platform selection, Meta placements and manual overrides.

    ``overrides`` maps a platform to ``{dotted.field.path: value}``; for Meta the
    paths start at ``campaign`` or ``ad_set`` (``ad_set.targeting.age_min``).
    """

    selection: Optional[list[PlatformToken]] = None
    meta_publisher_platforms: Optional[list[MetaPublisherPlatform]] = None
    overrides: dict[PlatformToken, dict[str, Any]] = {}
