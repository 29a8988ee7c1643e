"""Budget extraction, allocation and constraint validation."""

from src.budget.allocator import allocate, extract_budget_spec
from src.budget.validator import validate_budget

__all__ = ["allocate", "extract_budget_spec", "validate_budget"]
