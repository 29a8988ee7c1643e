"""Pydantic models for campaign intake."""

from src.models.budget import (
    AllocatedBudget,
    BudgetPeriod,
    BudgetSpec,
    BudgetSuggestion,
    LinkedInTargetingValidation,
    MetaPublisherPlatform,
    PlatformDetection,
    PlatformToken,
    ValidationResult,
)
from src.models.drafts import (
    DraftBundle,
    DraftRequest,
    DraftResult,
    GoogleCampaignDraft,
    LinkedInCampaignDraft,
    MetaAdSetDraft,
    MetaCampaignDraft,
    MetaDraft,
    MetaTargeting,
    TikTokCampaignDraft,
)
from src.models.email import InboundEmail, ParsedEmail
from src.models.submission import QAPair, StructuredSubmission

__all__ = [
    "QAPair",
    "StructuredSubmission",
    "InboundEmail",
    "ParsedEmail",
    "PlatformToken",
    "MetaPublisherPlatform",
    "BudgetPeriod",
    "BudgetSpec",
    "PlatformDetection",
    "AllocatedBudget",
    "ValidationResult",
    "LinkedInTargetingValidation",
    "BudgetSuggestion",
    "MetaCampaignDraft",
    "MetaTargeting",
    "MetaAdSetDraft",
    "MetaDraft",
    "GoogleCampaignDraft",
    "LinkedInCampaignDraft",
    "TikTokCampaignDraft",
    "DraftResult",
    "DraftBundle",
    "DraftRequest",
]
