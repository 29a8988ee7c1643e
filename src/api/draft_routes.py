"""Draft API: submission + UI state in, per-platform drafts out."""

from typing import Any, Optional

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, Field

from src.budget.validator import MINIMUM_BUDGETS
from src.drafts import build_drafts, list_assemblers
from src.intake.form_parser import parse_form_submission
from src.models.budget import MetaPublisherPlatform, PlatformToken
from src.models.drafts import DraftRequest
from src.models.submission import QAPair, StructuredSubmission
from src.utils.logger import get_logger

logger = get_logger("campaign_intake.api.drafts")

router = APIRouter(tags=["drafts"])


class DraftBody(BaseModel):
    """Either a raw email ``body`` or already-parsed ``form_data``."""

    model_config = {"populate_by_name": True}

    body: Optional[str] = None
    form_data: Optional[list[QAPair]] = Field(None, alias="formData")
    selection: Optional[list[PlatformToken]] = None
    meta_publisher_platforms: Optional[list[MetaPublisherPlatform]] = None
    overrides: dict[PlatformToken, dict[str, Any]] = {}


@router.post("/drafts")
async def create_drafts(payload: DraftBody) -> dict[str, Any]:
    """Build drafts for the selected (or detected) platforms. Nothing is stored."""
    if payload.form_data is not None:
        submission = StructuredSubmission.from_pairs(payload.form_data, raw_text=payload.body or "")
    elif payload.body is not None:
        submission = parse_form_submission(payload.body)
    else:
        raise HTTPException(status_code=400, detail="body or form_data is required")

    request = DraftRequest(
        selection=payload.selection,
        meta_publisher_platforms=payload.meta_publisher_platforms,
        overrides=payload.overrides,
    )
    try:
        bundle = build_drafts(submission, request)
    except ValueError as e:
        logger.warning("drafts.rejected", error=str(e))
        raise HTTPException(status_code=400, detail=str(e)) from e
    return bundle.model_dump(mode="json")


@router.get("/platforms")
async def list_platforms() -> dict[str, list[str]]:
    return {"platforms": list_assemblers()}


@router.get("/platforms/minimums")
async def platform_minimums() -> dict[str, dict[str, dict[str, float]]]:
    """Minimum daily / total spend per platform and currency."""
    return {
        platform.value: {code: row.model_dump() for code, row in table.items()}
        for platform, table in MINIMUM_BUDGETS.items()
    }
