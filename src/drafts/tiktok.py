"""TikTok campaign draft."""

from src.drafts.context import AssemblyContext, visible_fields
from src.drafts.overrides import apply_overrides
from src.drafts.registry import register_assembler
from src.extraction.fields import parse_amount
from src.extraction.mapping import map_tiktok_objective
from src.extraction.terms import OBJECTIVE_TERMS
from src.models.budget import BudgetPeriod, PlatformToken
from src.models.drafts import DraftResult, TikTokCampaignDraft
from src.utils.logger import get_logger

logger = get_logger("campaign_intake.drafts.tiktok")

BUDGET_MODES = {BudgetPeriod.DAILY: "BUDGET_MODE_DAY", BudgetPeriod.TOTAL: "BUDGET_MODE_TOTAL"}


def schedule_time(iso_date: str, end_of_day: bool = False) -> str:
    """``YYYY-MM-DD HH:MM:SS`` as the Marketing API expects, or ""."""
    if not iso_date:
        return ""
    return f"{iso_date} {'23:59:59' if end_of_day else '00:00:00'}"


def build_tiktok_payload(draft: TikTokCampaignDraft) -> dict:
    payload = {
        "campaign_name": draft.campaign_name,
        "objective_type": draft.objective_type,
        "budget_mode": draft.budget_mode,
        "budget": draft.budget,
        "operation_status": draft.operation_status,
    }
    # Schedules live on the ad group; carried here for the client to forward
    if draft.schedule_start_time:
        payload["schedule_start_time"] = draft.schedule_start_time
    if draft.schedule_end_time:
        payload["schedule_end_time"] = draft.schedule_end_time
    return payload


@register_assembler(PlatformToken.TIKTOK)
def assemble_tiktok(ctx: AssemblyContext) -> DraftResult:
    allocation = ctx.allocation(PlatformToken.TIKTOK)
    populated: list[tuple[str, str]] = []
    draft = TikTokCampaignDraft(
        budget_mode=BUDGET_MODES[allocation.period],
        budget=allocation.amount_native,
        currency=allocation.currency,
    )

    name = ctx.campaign_name()
    if name:
        draft.campaign_name = name
        populated.append(("Campaign Name", "campaign_name"))
    objective = ctx.answer(OBJECTIVE_TERMS)
    if objective:
        draft.objective_type = map_tiktok_objective(objective)
        populated.append(("Objective", "objective_type"))
    if allocation.amount > 0:
        populated += [("Budget Mode", "budget_mode"), ("Budget", "budget")]
    start, end = ctx.start_date(), ctx.end_date()
    if start:
        draft.schedule_start_time = schedule_time(start)
        populated.append(("Start Date", "schedule_start_time"))
    if end:
        draft.schedule_end_time = schedule_time(end, end_of_day=True)
        populated.append(("End Date", "schedule_end_time"))

    draft, applied = apply_overrides(draft, ctx.overrides_for(PlatformToken.TIKTOK))
    warnings: list[str] = []
    validation = ctx.validation(allocation)
    if validation is not None and not validation.is_valid:
        warnings.append(validation.message)
    if not draft.campaign_name.strip():
        warnings.append("Campaign name is required")
    if parse_amount(draft.budget) <= 0:
        warnings.append("Budget must be greater than 0")

    logger.info(
        "tiktok.assembled",
        objective=draft.objective_type,
        budget_mode=draft.budget_mode,
        budget=draft.budget,
        warnings=len(warnings),
    )
    return DraftResult(
        platform=PlatformToken.TIKTOK,
        draft=draft,
        populated_fields=visible_fields(populated, applied),
        overridden_fields=applied,
        warnings=warnings,
        validation=validation,
        allocation=allocation,
        summary=ctx.summary(allocation, validation),
        payload=build_tiktok_payload(draft),
    )
