"""Inputs shared by every platform assembler for one submission."""

from collections.abc import Sequence
from typing import Any, Optional

from pydantic import BaseModel

from src.budget.allocator import allocate, allocation_summary
from src.budget.validator import validate_budget
from src.drafts.overrides import is_overridden
from src.extraction.fields import find_answer, parse_date
from src.extraction.terms import CAMPAIGN_NAME_TERMS, END_DATE_TERMS, START_DATE_TERMS
from src.models.budget import (
    AllocatedBudget,
    BudgetSpec,
    MetaPublisherPlatform,
    PlatformDetection,
    PlatformToken,
    ValidationResult,
)
from src.models.submission import QAPair, StructuredSubmission


class AssemblyContext(BaseModel):
    """Submission plus everything derived from it once: detection, budget, UI state."""

    model_config = {"frozen": True}

    submission: StructuredSubmission
    detection: PlatformDetection
    budget: BudgetSpec
    overrides: dict[PlatformToken, dict[str, Any]] = {}
    meta_publisher_platforms: Optional[list[MetaPublisherPlatform]] = None

    @property
    def form_data(self) -> Sequence[QAPair]:
        return self.submission.form_data

    def answer(self, terms: Sequence[str]) -> str:
        return find_answer(self.form_data, terms)

    def campaign_name(self) -> str:
        return self.answer(CAMPAIGN_NAME_TERMS).strip()

    def start_date(self) -> str:
        return parse_date(self.answer(START_DATE_TERMS))

    def end_date(self) -> str:
        return parse_date(self.answer(END_DATE_TERMS))

    def overrides_for(self, platform: PlatformToken) -> dict[str, Any]:
        return self.overrides.get(platform) or {}

    def allocation(self, platform: PlatformToken) -> AllocatedBudget:
        return allocate(self.form_data, platform, detection=self.detection, spec=self.budget)

    def validation(self, allocation: AllocatedBudget) -> Optional[ValidationResult]:
        """Minimum-spend check, only for a platform that actually received budget."""
        if allocation.amount <= 0:
            return None
        return validate_budget(allocation.amount, allocation.period, allocation.currency, allocation.platform)

    def summary(self, allocation: AllocatedBudget, validation: Optional[ValidationResult]) -> str:
        return allocation_summary(allocation.platform, self.budget, allocation, validation)


def visible_fields(populated: list[tuple[str, str]], applied: list[str]) -> list[str]:
    """Labels of ``(label, field path)`` pairs none of whose fields was overridden afterwards."""
    hidden = {label for label, path in populated if is_overridden(path, applied)}
    return list(dict.fromkeys(label for label, _ in populated if label not in hidden))
