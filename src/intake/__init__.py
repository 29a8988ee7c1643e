"""Email intake: payload normalization and form parsing."""

from src.intake.form_parser import parse_form_submission
from src.intake.payload import extract_uuid_from_email, parse_inbound_email

__all__ = ["parse_form_submission", "parse_inbound_email", "extract_uuid_from_email"]
