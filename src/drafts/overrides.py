"""Manual overrides: operator edits that always win over extracted values."""

from typing import Any

from pydantic import BaseModel

from src.utils.logger import get_logger

logger = get_logger("campaign_intake.drafts.overrides")


def _set_path(data: dict[str, Any], path: str, value: Any) -> None:
    parts = path.split(".")
    node = data
    for depth, part in enumerate(parts):
        if not isinstance(node, dict) or part not in node:
            known = sorted(node) if isinstance(node, dict) else []
            raise ValueError(
                f"Unknown draft field: {'.'.join(parts[: depth + 1])!r}. Known: {known}"
            )
        if depth == len(parts) - 1:
            node[part] = value
        else:
            node = node[part]


def apply_overrides(draft: BaseModel, overrides: dict[str, Any] | None) -> tuple[BaseModel, list[str]]:
    """Return a copy of ``draft`` with every ``{dotted.path: value}`` applied, and the paths applied.

    Raises ValueError for a path the draft does not have, or a value its field rejects.
    """
    if not overrides:
        return draft, []
    data = draft.model_dump()
    for path, value in overrides.items():
        _set_path(data, path, value)
    updated = type(draft).model_validate(data)
    applied = list(overrides)
    logger.debug("overrides.applied", draft=type(draft).__name__, fields=applied)
    return updated, applied


def is_overridden(path: str, applied: list[str]) -> bool:
    """True when ``path`` or one of its parents / children was overridden."""
    return any(
        path == field or path.startswith(field + ".") or field.startswith(path + ".")
        for field in applied
    )
