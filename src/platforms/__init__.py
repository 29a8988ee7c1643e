"""Ad platform detection and grouping."""

from src.platforms.classifier import count_platform_groups, detect_platforms

__all__ = ["detect_platforms", "count_platform_groups"]
