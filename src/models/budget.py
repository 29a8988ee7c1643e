"""Platform, budget and validation models."""

from enum import Enum
from typing import Optional, Union

from pydantic import BaseModel, Field, computed_field


class PlatformToken(str, Enum):
    """Ad platforms a submission can request. Each is one allocation unit."""

    GOOGLE = "google"
    META = "meta"
    LINKEDIN = "linkedin"
    TIKTOK = "tiktok"


class MetaPublisherPlatform(str, Enum):
    """Meta placements; all of them share the single ``meta`` allocation unit."""

    FACEBOOK = "facebook"
    INSTAGRAM = "instagram"
    MESSENGER = "messenger"
    THREADS = "threads"
    AUDIENCE_NETWORK = "audience_network"


class BudgetPeriod(str, Enum):
    """Whether the budget is spent per day or over the whole flight."""

    DAILY = "DAILY"
    TOTAL = "TOTAL"

    @property
    def meta_budget_type(self) -> str:
        return "DAILY" if self is BudgetPeriod.DAILY else "LIFETIME"

    @property
    def label(self) -> str:
        """Lowercase label used by Google, LinkedIn and the validators ("daily" / "total")."""
        return self.value.lower()


class BudgetSpec(BaseModel):
    """Total budget, currency and period derived once per submission."""

    model_config = {"frozen": True}

    total_amount: float = 0.0
    currency: str = "USD"
    period: BudgetPeriod = BudgetPeriod.TOTAL


class PlatformDetection(BaseModel):
    """Requested platforms and allocation groups found in a submission."""

    model_config = {"frozen": True}

    requested: frozenset[PlatformToken] = frozenset()
    groups: tuple[str, ...] = ()
    tokens: tuple[str, ...] = ()

    @computed_field
    @property
    def group_count(self) -> int:
        return len(self.groups)

    def is_requested(self, platform: PlatformToken) -> bool:
        return platform in self.requested


class AllocatedBudget(BaseModel):
    """One platform's share of the total, in major units and platform-native encoding."""

    platform: PlatformToken
    amount: float = 0.0
    amount_native: Union[int, str] = 0
    currency: str = "USD"
    period: BudgetPeriod = BudgetPeriod.TOTAL
    group_count: int = 0
    is_requested: bool = False


class ValidationResult(BaseModel):
    """Advisory minimum-spend check for one allocation."""

    is_valid: bool
    minimum_required: float
    message: str
    platform: Optional[PlatformToken] = None
    currency: str = "USD"


class LinkedInTargetingValidation(BaseModel):
    """Geo/locale/currency check for a LinkedIn campaign."""

    is_valid: bool = True
    geo_urn: str
    locale: str
    suggested_currency: Optional[str] = None
    warnings: list[str] = Field(default_factory=list)


class BudgetSuggestion(BaseModel):
    """Planning range for a campaign type, period and currency."""

    minimum: float
    suggested: float
    high: float
    currency: str
    message: str = ""
