"""Per-platform campaign draft assembly."""

from src.drafts.registry import get_assembler, list_assemblers, register_assembler
from src.drafts.meta import assemble_meta
from src.drafts.google import assemble_google
from src.drafts.linkedin import assemble_linkedin
from src.drafts.tiktok import assemble_tiktok
from src.drafts.engine import build_drafts

__all__ = [
    "build_drafts",
    "get_assembler",
    "list_assemblers",
    "register_assembler",
    "assemble_meta",
    "assemble_google",
    "assemble_linkedin",
    "assemble_tiktok",
]
