"""Google Ads campaign draft (Search or Display)."""

from src.budget.allocator import daily_budget_for_period, to_micros
from src.budget.validator import budget_suggestions
from src.drafts.context import AssemblyContext, visible_fields
from src.drafts.overrides import apply_overrides
from src.drafts.registry import register_assembler
from src.models.budget import BudgetPeriod, PlatformToken
from src.models.drafts import DraftResult, GoogleCampaignDraft
from src.platforms.classifier import detect_google_campaign_type
from src.utils.logger import get_logger

logger = get_logger("campaign_intake.drafts.google")

MINIMUM_DAILY_BUDGET = 1.0
# Temporary resource name; the API client substitutes the customer id and
# creates the budget in the same mutate request as the campaign
BUDGET_TEMP_RESOURCE = "customers/{customer_id}/campaignBudgets/-1"


def _derive_daily(draft: GoogleCampaignDraft, applied: list[str], warnings: list[str]) -> GoogleCampaignDraft:
    """Fill the daily amount and micros from the final budget and dates unless set by hand."""
    if "amount_micros" in applied:
        return draft
    if "daily_budget_amount" not in applied:
        draft.daily_budget_amount = None
        if draft.budget_amount > 0:
            period = BudgetPeriod.DAILY if draft.budget_type == "daily" else BudgetPeriod.TOTAL
            try:
                draft.daily_budget_amount = daily_budget_for_period(
                    period, draft.budget_amount, draft.start_date, draft.end_date
                )
            except ValueError as e:
                warnings.append(f"Cannot compute daily budget: {e}")

    daily = draft.daily_budget_amount
    draft.amount_micros = to_micros(daily) if daily else None
    if daily is not None and daily < MINIMUM_DAILY_BUDGET:
        if draft.budget_type == "total":
            warnings.append(
                f"Daily budget too low: ${daily:.2f}. Try increasing your total budget "
                "or reducing the campaign duration."
            )
        else:
            warnings.append("Minimum daily budget is $1.00.")
    return draft


def build_google_payload(draft: GoogleCampaignDraft) -> dict:
    """Google Ads API ``campaign_budget`` + ``campaign`` create operations."""
    label = "Daily" if draft.budget_type == "daily" else "Total"
    campaign = {
        "name": draft.name,
        "advertising_channel_type": draft.campaign_type,
        "status": draft.status,
        "campaign_budget": BUDGET_TEMP_RESOURCE,
        "manual_cpc": {"enhanced_cpc_enabled": False},
    }
    if draft.start_date:
        campaign["start_date"] = draft.start_date
    if draft.end_date:
        campaign["end_date"] = draft.end_date
    if draft.campaign_type == "SEARCH":
        campaign["network_settings"] = {
            "target_google_search": True,
            "target_search_network": True,
        }
    return {
        "campaign_budget": {
            "resource_name": BUDGET_TEMP_RESOURCE,
            "name": f"{draft.name} Budget ({label})",
            "delivery_method": "STANDARD",
            "amount_micros": draft.amount_micros,
        },
        "campaign": campaign,
    }


@register_assembler(PlatformToken.GOOGLE)
def assemble_google(ctx: AssemblyContext) -> DraftResult:
    allocation = ctx.allocation(PlatformToken.GOOGLE)
    populated: list[tuple[str, str]] = []
    draft = GoogleCampaignDraft(
        campaign_type=detect_google_campaign_type(ctx.form_data),
        budget_type=allocation.period.label,
        budget_amount=round(allocation.amount, 2),
        currency=allocation.currency,
    )
    populated.append(("Campaign Type", "campaign_type"))

    name = ctx.campaign_name()
    if name:
        draft.name = name
        populated.insert(0, ("Campaign Name", "name"))
    if allocation.amount > 0:
        populated += [("Budget Type", "budget_type"), ("Budget Amount", "budget_amount")]
    start, end = ctx.start_date(), ctx.end_date()
    if start:
        draft.start_date = start
        populated.append(("Start Date", "start_date"))
    if end:
        draft.end_date = end
        populated.append(("End Date", "end_date"))

    draft, applied = apply_overrides(draft, ctx.overrides_for(PlatformToken.GOOGLE))
    warnings: list[str] = []
    validation = ctx.validation(allocation)
    if validation is not None and not validation.is_valid:
        warnings.append(validation.message)
    draft = _derive_daily(draft, applied, warnings)
    if not draft.name.strip():
        warnings.append("Campaign name is required")

    period = BudgetPeriod.DAILY if draft.budget_type == "daily" else BudgetPeriod.TOTAL
    suggestion = budget_suggestions(PlatformToken.GOOGLE, draft.campaign_type, period, draft.currency)
    logger.info(
        "google.assembled",
        campaign_type=draft.campaign_type,
        budget=draft.budget_amount,
        daily=draft.daily_budget_amount,
        warnings=len(warnings),
    )
    return DraftResult(
        platform=PlatformToken.GOOGLE,
        draft=draft,
        populated_fields=visible_fields(populated, applied),
        overridden_fields=applied,
        warnings=warnings,
        validation=validation,
        allocation=allocation,
        suggestion=suggestion,
        summary=ctx.summary(allocation, validation),
        payload=build_google_payload(draft),
    )
