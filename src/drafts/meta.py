"""Meta (Facebook / Instagram) campaign + ad set draft."""

import json

from src.drafts.context import AssemblyContext, visible_fields
from src.drafts.overrides import apply_overrides
from src.drafts.registry import register_assembler
from src.extraction.fields import parse_age_range, parse_datetime
from src.extraction.mapping import (
    META_API_OBJECTIVES,
    META_BILLING_EVENTS,
    extract_app_store_url,
    extract_numeric_id,
    map_geography_to_countries,
    map_meta_objective,
)
from src.extraction.terms import (
    AD_SET_NAME_TERMS,
    AGE_RANGE_TERMS,
    APP_STORE_URL_TERMS,
    APPLICATION_ID_TERMS,
    END_DATE_TERMS,
    GEOGRAPHY_TERMS,
    OBJECTIVE_TERMS,
    PAGE_ID_TERMS,
    START_DATE_TERMS,
)
from src.models.budget import AllocatedBudget, BudgetPeriod, PlatformToken
from src.models.drafts import (
    DraftResult,
    MetaAdSetDraft,
    MetaCampaignDraft,
    MetaDraft,
    MetaTargeting,
)
from src.platforms.classifier import extract_publisher_platforms, publisher_platforms_for_draft
from src.utils.logger import get_logger

logger = get_logger("campaign_intake.drafts.meta")

AD_SET_SUFFIX = " - Ad Set"
# Batch request reference to the campaign created earlier in the same batch
CAMPAIGN_BATCH_REF = "{result=create-campaign:$.id}"


def ad_set_name(answer: str) -> str:
    """Answer as-is when it already names an ad set, else suffixed with `` - Ad Set``."""
    lowered = answer.lower()
    if "ad set" in lowered or "adset" in lowered:
        return answer
    return f"{answer}{AD_SET_SUFFIX}"


def _campaign(ctx: AssemblyContext, allocation: AllocatedBudget, populated: list) -> MetaCampaignDraft:
    campaign = MetaCampaignDraft()
    name = ctx.campaign_name()
    if name:
        campaign.name = name
        populated.append(("Campaign Name", "campaign.name"))
    objective_answer = ctx.answer(OBJECTIVE_TERMS)
    if objective_answer:
        campaign.objective = map_meta_objective(objective_answer)
        populated.append(("Campaign Objective", "campaign.objective"))

    campaign.budget_type = allocation.period.meta_budget_type
    if ctx.budget.total_amount > 0 and allocation.amount_native > 0:
        if allocation.period is BudgetPeriod.DAILY:
            campaign.daily_budget = allocation.amount_native
            populated.append(("Daily Budget", "campaign.daily_budget"))
        else:
            campaign.lifetime_budget = allocation.amount_native
            populated.append(("Lifetime Budget", "campaign.lifetime_budget"))
    return campaign


def _ad_set(ctx: AssemblyContext, objective: str, populated: list) -> MetaAdSetDraft:
    ad_set = MetaAdSetDraft(targeting=MetaTargeting())

    name_answer = ctx.answer(AD_SET_NAME_TERMS).strip()
    if name_answer:
        ad_set.name = ad_set_name(name_answer)
        populated.append(("Ad Set Name", "ad_set.name"))

    geography = ctx.answer(GEOGRAPHY_TERMS)
    if geography:
        ad_set.targeting.countries = map_geography_to_countries(geography)
        populated.append(("Target Countries", "ad_set.targeting.countries"))

    ages = parse_age_range(ctx.answer(AGE_RANGE_TERMS))
    if ages:
        ad_set.targeting.age_min = ages.get("age_min", ad_set.targeting.age_min)
        ad_set.targeting.age_max = ages.get("age_max", ad_set.targeting.age_max)
        populated.extend(("Age Range", f"ad_set.targeting.{bound}") for bound in ages)

    if ctx.meta_publisher_platforms:
        ad_set.targeting.publisher_platforms = list(ctx.meta_publisher_platforms)
    else:
        ad_set.targeting.publisher_platforms = publisher_platforms_for_draft(ctx.form_data)
        if extract_publisher_platforms(ctx.form_data):
            populated.append(("Publisher Platforms", "ad_set.targeting.publisher_platforms"))

    start = parse_datetime(ctx.answer(START_DATE_TERMS))
    if start:
        ad_set.start_time = start
        populated.append(("Start Date", "ad_set.start_time"))
    end = parse_datetime(ctx.answer(END_DATE_TERMS))
    if end:
        ad_set.end_time = end
        populated.append(("End Date", "ad_set.end_time"))

    if objective == "APP_PROMOTION":
        app_id = extract_numeric_id(ctx.answer(APPLICATION_ID_TERMS))
        if app_id:
            ad_set.application_id = app_id
            populated.append(("Application ID", "ad_set.application_id"))
        store_url = extract_app_store_url(ctx.answer(APP_STORE_URL_TERMS))
        if store_url:
            ad_set.object_store_url = store_url
            populated.append(("App Store URL", "ad_set.object_store_url"))
    elif objective == "LEADS":
        page_id = extract_numeric_id(ctx.answer(PAGE_ID_TERMS))
        if page_id:
            ad_set.page_id = page_id
            populated.append(("Facebook Page ID", "ad_set.page_id"))
    return ad_set


def validate_meta_draft(draft: MetaDraft) -> list[str]:
    """Fields the Graph API would reject, as operator-facing messages."""
    errors: list[str] = []
    campaign, ad_set = draft.campaign, draft.ad_set
    targeting = ad_set.targeting
    if not campaign.name.strip():
        errors.append("Campaign name is required")
    if not campaign.objective:
        errors.append("Campaign objective is required")
    if campaign.budget_type == "LIFETIME" and not (campaign.lifetime_budget or 0) > 0:
        errors.append("Campaign lifetime budget must be greater than 0")
    if campaign.budget_type == "DAILY" and not (campaign.daily_budget or 0) > 0:
        errors.append("Campaign daily budget must be greater than 0")
    if not ad_set.name.strip():
        errors.append("Ad Set name is required")
    if not targeting.countries:
        errors.append("At least one target country is required")
    if not targeting.publisher_platforms:
        errors.append("At least one publisher platform is required")
    if targeting.age_min > targeting.age_max:
        errors.append("Minimum age cannot be greater than maximum age")
    if targeting.age_min < 13:
        errors.append("Minimum age cannot be less than 13")
    if targeting.age_max > 99:
        errors.append("Maximum age cannot be greater than 99")
    if not ad_set.start_time:
        errors.append("Start time is required")
    if not ad_set.end_time:
        errors.append("End time is required")
    if ad_set.start_time and ad_set.end_time and ad_set.end_time <= ad_set.start_time:
        errors.append("End time must be after start time")
    return errors


def build_meta_payload(draft: MetaDraft) -> dict:
    """Graph API batch bodies for ``create-campaign`` and the ad set that references it."""
    campaign, ad_set = draft.campaign, draft.ad_set
    campaign_body = {
        "name": campaign.name,
        "objective": META_API_OBJECTIVES.get(campaign.objective, campaign.objective),
        "status": campaign.status,
        "special_ad_categories": campaign.special_ad_categories,
        "buying_type": campaign.buying_type,
        "bid_strategy": campaign.bid_strategy,
    }
    if campaign.budget_type == "DAILY":
        campaign_body["daily_budget"] = campaign.daily_budget
    else:
        campaign_body["lifetime_budget"] = campaign.lifetime_budget

    targeting = {
        "geo_locations": {"countries": ad_set.targeting.countries},
        "age_min": ad_set.targeting.age_min,
        "age_max": ad_set.targeting.age_max,
        "publisher_platforms": [p.value for p in ad_set.targeting.publisher_platforms],
    }
    ad_set_body = {
        "name": ad_set.name,
        "campaign_id": CAMPAIGN_BATCH_REF,
        "billing_event": META_BILLING_EVENTS.get(campaign.objective, "IMPRESSIONS"),
        "targeting": json.dumps(targeting),
        "status": ad_set.status,
        "start_time": ad_set.start_time,
        "end_time": ad_set.end_time,
    }
    promoted_object = {}
    if ad_set.application_id:
        promoted_object["application_id"] = ad_set.application_id
    if ad_set.object_store_url:
        promoted_object["object_store_url"] = ad_set.object_store_url
    if ad_set.page_id:
        promoted_object["page_id"] = ad_set.page_id
    if promoted_object:
        ad_set_body["promoted_object"] = promoted_object
    return {"campaign": campaign_body, "ad_set": ad_set_body}


@register_assembler(PlatformToken.META)
def assemble_meta(ctx: AssemblyContext) -> DraftResult:
    overrides = ctx.overrides_for(PlatformToken.META)
    allocation = ctx.allocation(PlatformToken.META)
    populated: list[tuple[str, str]] = []

    campaign = _campaign(ctx, allocation, populated)
    # App / lead fields follow the objective the operator settles on
    objective = overrides.get("campaign.objective", campaign.objective)
    ad_set = _ad_set(ctx, objective, populated)

    draft, applied = apply_overrides(MetaDraft(campaign=campaign, ad_set=ad_set), overrides)
    validation = ctx.validation(allocation)
    warnings = validate_meta_draft(draft)
    if validation is not None and not validation.is_valid:
        warnings.insert(0, validation.message)

    logger.info(
        "meta.assembled",
        objective=draft.campaign.objective,
        budget_type=draft.campaign.budget_type,
        populated=len(populated),
        overridden=len(applied),
        warnings=len(warnings),
    )
    return DraftResult(
        platform=PlatformToken.META,
        draft=draft,
        populated_fields=visible_fields(populated, applied),
        overridden_fields=applied,
        warnings=warnings,
        validation=validation,
        allocation=allocation,
        summary=ctx.summary(allocation, validation),
        payload=build_meta_payload(draft),
    )
