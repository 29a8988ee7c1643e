"""LinkedIn campaign draft with geo / locale / currency correction."""

from datetime import datetime, timezone

from src.budget.allocator import to_decimal_string
from src.budget.linkedin_geo import split_locale, validate_linkedin_targeting
from src.budget.validator import budget_suggestions
from src.drafts.context import AssemblyContext, visible_fields
from src.drafts.overrides import apply_overrides
from src.drafts.registry import register_assembler
from src.extraction.fields import parse_amount
from src.extraction.mapping import map_geography_to_country, map_language_code, map_linkedin_campaign_type
from src.extraction.terms import CAMPAIGN_TYPE_TERMS, GEOGRAPHY_TERMS, LANGUAGE_TERMS, OBJECTIVE_TERMS
from src.models.budget import BudgetPeriod, PlatformToken
from src.models.drafts import DraftResult, LinkedInCampaignDraft
from src.utils.logger import get_logger

logger = get_logger("campaign_intake.drafts.linkedin")

LOCATIONS_FACET = "urn:li:adTargetingFacet:locations"
INTERFACE_LOCALES_FACET = "urn:li:adTargetingFacet:interfaceLocales"
# Message ads cannot use optimized creative rotation
CREATIVE_SELECTION = {"SPONSORED_INMAILS": "ROUND_ROBIN"}
CAMPAIGN_FORMATS = {"DYNAMIC": "SPOTLIGHT", "SPONSORED_UPDATES": "STANDARD_UPDATE"}


def _epoch_millis(iso_date: str) -> int:
    day = datetime.fromisoformat(iso_date[:10]).replace(tzinfo=timezone.utc)
    return int(day.timestamp() * 1000)


def targeting_criteria(geo_urn: str, locale: str) -> dict:
    return {
        "include": {
            "and": [
                {"or": {LOCATIONS_FACET: [geo_urn]}},
                {"or": {INTERFACE_LOCALES_FACET: [f"urn:li:locale:{locale}"]}},
            ]
        }
    }


def build_linkedin_payload(draft: LinkedInCampaignDraft) -> dict:
    """``adCampaigns`` create body, minus the account and campaign group the client supplies."""
    budget_key = "dailyBudget" if draft.budget_type == "daily" else "totalBudget"
    payload = {
        "name": draft.name,
        "type": draft.campaign_type,
        "costType": draft.cost_type,
        "status": draft.status,
        "locale": split_locale(draft.locale),
        budget_key: {"amount": draft.budget_amount, "currencyCode": draft.currency},
        "targetingCriteria": targeting_criteria(draft.geo_urn, draft.locale),
        "creativeSelection": CREATIVE_SELECTION.get(draft.campaign_type, "OPTIMIZED"),
        "audienceExpansionEnabled": False,
        "offsiteDeliveryEnabled": False,
        "unitCost": {"amount": "0", "currencyCode": draft.currency},
    }
    if draft.start_date:
        schedule = {"start": _epoch_millis(draft.start_date)}
        if draft.end_date:
            schedule["end"] = _epoch_millis(draft.end_date)
        payload["runSchedule"] = schedule
    if draft.campaign_type in CAMPAIGN_FORMATS:
        payload["format"] = CAMPAIGN_FORMATS[draft.campaign_type]
    return payload


@register_assembler(PlatformToken.LINKEDIN)
def assemble_linkedin(ctx: AssemblyContext) -> DraftResult:
    allocation = ctx.allocation(PlatformToken.LINKEDIN)
    populated: list[tuple[str, str]] = []
    draft = LinkedInCampaignDraft(
        budget_type=allocation.period.label,
        budget_amount=to_decimal_string(allocation.amount),
        currency=allocation.currency,
    )

    name = ctx.campaign_name()
    if name:
        draft.name = name
        populated.append(("Campaign Name", "name"))
    type_answer = ctx.answer(CAMPAIGN_TYPE_TERMS) or ctx.answer(OBJECTIVE_TERMS)
    if type_answer:
        draft.campaign_type = map_linkedin_campaign_type(type_answer)
        populated.append(("Campaign Type", "campaign_type"))
    if allocation.amount > 0:
        populated += [("Budget Type", "budget_type"), ("Budget Amount", "budget_amount")]
    populated.append(("Currency", "currency"))

    geography = ctx.answer(GEOGRAPHY_TERMS)
    if geography:
        draft.country = map_geography_to_country(geography)
        populated.append(("Country", "country"))
    language = ctx.answer(LANGUAGE_TERMS)
    if language:
        draft.language = map_language_code(language)
        populated.append(("Language", "language"))
    start, end = ctx.start_date(), ctx.end_date()
    if start:
        draft.start_date = start
        populated.append(("Start Date", "start_date"))
    if end:
        draft.end_date = end
        populated.append(("End Date", "end_date"))

    draft, applied = apply_overrides(draft, ctx.overrides_for(PlatformToken.LINKEDIN))

    # Geo and locale always follow the final country / language unless set by hand
    targeting = validate_linkedin_targeting(draft.country, draft.language, draft.currency)
    if "geo_urn" not in applied:
        draft.geo_urn = targeting.geo_urn
    if "locale" not in applied:
        draft.locale = targeting.locale

    warnings: list[str] = []
    validation = ctx.validation(allocation)
    if validation is not None and not validation.is_valid:
        warnings.append(validation.message)
    warnings.extend(targeting.warnings)
    if parse_amount(draft.budget_amount) <= 0:
        warnings.append("Budget amount is required and must be greater than 0")
    if not draft.start_date:
        warnings.append("Start date is required")

    period = BudgetPeriod.DAILY if draft.budget_type == "daily" else BudgetPeriod.TOTAL
    suggestion = budget_suggestions(PlatformToken.LINKEDIN, draft.campaign_type, period, draft.currency)
    logger.info(
        "linkedin.assembled",
        campaign_type=draft.campaign_type,
        country=draft.country,
        locale=draft.locale,
        budget=draft.budget_amount,
        warnings=len(warnings),
    )
    return DraftResult(
        platform=PlatformToken.LINKEDIN,
        draft=draft,
        populated_fields=visible_fields(populated, applied),
        overridden_fields=applied,
        warnings=warnings,
        validation=validation,
        allocation=allocation,
        suggestion=suggestion,
        summary=ctx.summary(allocation, validation),
        payload=build_linkedin_payload(draft),
    )
