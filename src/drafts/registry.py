"""Assembler registry: maps a platform to the function that builds its draft."""

from collections.abc import Callable

from src.models.budget import PlatformToken
from src.utils.logger import get_logger

logger = get_logger("campaign_intake.drafts.registry")

# Registry: platform -> fn(context) -> DraftResult
_ASSEMBLER_REGISTRY: dict[PlatformToken, Callable] = {}


def register_assembler(platform: PlatformToken | str):
    """Decorator to register a platform's draft assembler."""

    def decorator(fn: Callable):
        _ASSEMBLER_REGISTRY[PlatformToken(platform)] = fn
        return fn

    return decorator


def get_assembler(platform: PlatformToken | str) -> Callable:
    """Return the assembler for the given platform. Raises ValueError if unknown."""
    try:
        key = PlatformToken(platform)
    except ValueError:
        key = None
    if key not in _ASSEMBLER_REGISTRY:
        raise ValueError(
            f"Unknown platform: {platform!r}. Registered: {[p.value for p in _ASSEMBLER_REGISTRY]}"
        )
    return _ASSEMBLER_REGISTRY[key]


def list_assemblers() -> list[str]:
    """Return all platforms with a registered assembler."""
    return [p.value for p in _ASSEMBLER_REGISTRY]
