"""Draft engine: one stateless call from a submission (plus UI state) to every platform draft."""

from typing import Optional

from src.budget.allocator import extract_budget_spec
from src.drafts.context import AssemblyContext
from src.drafts.registry import get_assembler
from src.models.budget import PlatformToken
from src.models.drafts import DraftBundle, DraftRequest
from src.models.submission import StructuredSubmission
from src.platforms.classifier import detect_platforms
from src.utils.logger import get_logger

logger = get_logger("campaign_intake.drafts.engine")


def selected_platforms(request: DraftRequest, requested: frozenset[PlatformToken]) -> list[PlatformToken]:
    """UI selection when given, else the detected platforms; always in enum order."""
    chosen = set(request.selection) if request.selection is not None else requested
    return [p for p in PlatformToken if p in chosen]


def build_drafts(submission: StructuredSubmission, request: Optional[DraftRequest] = None) -> DraftBundle:
    """Drafts for the selected platforms. Same submission and request, same bundle."""
    request = request or DraftRequest()
    detection = detect_platforms(submission.form_data)
    budget = extract_budget_spec(submission.form_data)
    ctx = AssemblyContext(
        submission=submission,
        detection=detection,
        budget=budget,
        overrides=request.overrides,
        meta_publisher_platforms=request.meta_publisher_platforms,
    )

    platforms = selected_platforms(request, detection.requested)
    drafts = {p.value: get_assembler(p)(ctx) for p in platforms}
    logger.info(
        "engine.drafts_built",
        platforms=[p.value for p in platforms],
        groups=detection.group_count,
        total=budget.total_amount,
        currency=budget.currency,
    )
    return DraftBundle(budget=budget, detection=detection, drafts=drafts)
