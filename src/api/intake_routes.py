"""Intake API: forwarded form emails in, parsed submissions out."""

from typing import Any, Optional

from fastapi import APIRouter

from src.intake.payload import parse_inbound_email
from src.models.email import InboundEmail
from src.utils.logger import get_logger, submission_context

logger = get_logger("campaign_intake.api.intake")

router = APIRouter(prefix="/intake", tags=["intake"])


@router.post("/email")
async def receive_email(payload: InboundEmail, uuid: Optional[str] = None) -> dict[str, Any]:
    """Parse one forwarded submission.

    Always answers 200: a forwarder retries on any other status, and retrying
    an email without a recognisable recipient will never succeed.
    """
    parsed = parse_inbound_email(payload, query_uuid=uuid)
    with submission_context(uuid_fragment=parsed.uuid_fragment):
        if not parsed.to:
            logger.warning("intake.no_recipient")
            return {"success": False, "error": "No recipient email found"}
        if not parsed.uuid_fragment:
            logger.warning("intake.no_uuid", to=parsed.to)
            return {"success": False, "error": "Invalid email format - no UUID found", "to": parsed.to}
        logger.info("intake.received", questions=len(parsed.submission.form_data))
        return {
            "success": True,
            "to": parsed.to,
            "uuid_fragment": parsed.uuid_fragment,
            "subject": parsed.subject,
            "submission": parsed.submission.model_dump(by_alias=True),
        }
