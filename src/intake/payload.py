"""Normalize forwarded-email webhook payloads.

Mail forwarders disagree on where the recipient, subject and body live; each
helper checks the known locations in a fixed order. The recipient address
carries the organisation fragment (``forms+<uuid>@...``) that the caller uses
to resolve which organisation the submission belongs to.
"""

import re
from typing import Any, Optional

from src.config import INTAKE_MAILBOX_PREFIXES
from src.intake.form_parser import parse_form_submission
from src.models.email import InboundEmail, ParsedEmail
from src.utils.logger import get_logger

logger = get_logger("campaign_intake.intake.payload")

URL_RECIPIENT_PLACEHOLDER = "Unknown - extracted from URL"

_MAILBOX_PATTERN = re.compile(
    r"(?:" + "|".join(re.escape(p) for p in INTAKE_MAILBOX_PREFIXES) + r")\+([a-f0-9-]+)@",
    re.IGNORECASE,
)
_SUBJECT_PREFIX = re.compile(r"^Subject:\s*", re.IGNORECASE)


def extract_uuid_from_email(address: Any) -> Optional[str]:
    """Return the organisation fragment from ``<prefix>+<fragment>@domain``, else None."""
    if not address or not isinstance(address, str):
        logger.debug("payload.uuid_not_string", value_type=type(address).__name__)
        return None
    match = _MAILBOX_PATTERN.search(address)
    return match.group(1) if match else None


def parse_recipient_email(payload: InboundEmail, query_uuid: Optional[str] = None) -> tuple[str, Optional[str]]:
    """Return (recipient, uuid_fragment); a ``uuid`` query parameter is the last resort."""
    session_recipient = (payload.session or {}).get("recipient")
    candidates = (
        payload.to,
        payload.recipient,
        session_recipient,
        payload.recipients[0] if payload.recipients else None,
    )
    to = next((c for c in candidates if isinstance(c, str)), None)

    if to is None:
        if query_uuid:
            logger.info("payload.recipient_from_query", uuid_fragment=query_uuid)
            return URL_RECIPIENT_PLACEHOLDER, query_uuid
        logger.warning(
            "payload.recipient_missing",
            fields=sorted(payload.model_dump(exclude_none=True, by_alias=True)),
        )
        return "", None

    fragment = extract_uuid_from_email(to)
    logger.debug("payload.recipient_found", to=to, uuid_fragment=fragment)
    return to, fragment


def extract_subject(payload: InboundEmail) -> str:
    if isinstance(payload.subject, str):
        return payload.subject
    header_subject = (payload.headers or {}).get("subject")
    if header_subject:
        return str(header_subject)
    for header in payload.header_lines or []:
        if header.key and header.key.lower() == "subject" and header.line:
            return _SUBJECT_PREFIX.sub("", header.line)
    return ""


def extract_body(payload: InboundEmail) -> str:
    for candidate in (payload.text, payload.html, payload.body):
        if isinstance(candidate, str):
            return candidate
    return payload.text_as_html or ""


def parse_inbound_email(payload: InboundEmail, query_uuid: Optional[str] = None) -> ParsedEmail:
    """Recipient, subject, body and parsed form submission for one forwarded email."""
    to, fragment = parse_recipient_email(payload, query_uuid=query_uuid)
    body = extract_body(payload)
    submission = parse_form_submission(body)
    logger.info(
        "payload.parsed",
        uuid_fragment=fragment,
        questions=len(submission.form_data),
        body_chars=len(body),
    )
    return ParsedEmail(
        to=to,
        uuid_fragment=fragment,
        subject=extract_subject(payload),
        body=body,
        submission=submission,
    )
