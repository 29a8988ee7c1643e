"""Utility modules."""

from src.utils.logger import bind_context, clear_context, get_logger, submission_context
from src.utils.body_sanitizer import FORM_TEXT_PIPELINE, sanitize_email_body

__all__ = [
    "get_logger",
    "bind_context",
    "clear_context",
    "submission_context",
    "sanitize_email_body",
    "FORM_TEXT_PIPELINE",
]
