"""Inbound email payload models (mail forwarding webhook)."""

from typing import Any, Optional

from pydantic import BaseModel, Field

from src.models.submission import StructuredSubmission


class HeaderLine(BaseModel):
    """Raw header line as delivered by the forwarding service."""

    key: Optional[str] = None
    line: Optional[str] = None


class InboundEmail(BaseModel):
    """Forwarded email. Recipient, subject and body may sit in several places depending on the forwarder."""

    model_config = {"populate_by_name": True, "extra": "allow"}

    to: Optional[Any] = None
    recipient: Optional[Any] = None
    recipients: Optional[list[Any]] = None
    session: Optional[dict[str, Any]] = None
    subject: Optional[Any] = None
    headers: Optional[dict[str, Any]] = None
    header_lines: Optional[list[HeaderLine]] = Field(None, alias="headerLines")
    text: Optional[Any] = None
    html: Optional[Any] = None
    body: Optional[Any] = None
    text_as_html: Optional[str] = Field(None, alias="textAsHtml")


class ParsedEmail(BaseModel):
    """Normalized inbound email plus its parsed form submission."""

    to: str = ""
    uuid_fragment: Optional[str] = None
    subject: str = ""
    body: str = ""
    submission: StructuredSubmission = Field(default_factory=StructuredSubmission)
