"""Tests for forwarded-email payload normalization."""

import sys
import unittest
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from src.intake.payload import (
    URL_RECIPIENT_PLACEHOLDER,
    extract_body,
    extract_subject,
    extract_uuid_from_email,
    parse_inbound_email,
    parse_recipient_email,
)
from src.models.email import InboundEmail

ORG_UUID = "3f2a9c1e-7b4d-4e2a-9f11-2c8d5e6a7b90"
INTAKE_ADDRESS = f"forms+{ORG_UUID}@intake.example.com"


class TestUuidExtraction(unittest.TestCase):
    def test_uuid_from_intake_address(self):
        self.assertEqual(extract_uuid_from_email(INTAKE_ADDRESS), ORG_UUID)

    def test_mailbox_prefix_is_case_insensitive(self):
        address = f"UnyteFormAutomation+{ORG_UUID}@example.com"
        self.assertEqual(extract_uuid_from_email(address), ORG_UUID)

    def test_non_intake_address_or_non_string(self):
        self.assertIsNone(extract_uuid_from_email("someone@example.com"))
        self.assertIsNone(extract_uuid_from_email(None))
        self.assertIsNone(extract_uuid_from_email(["forms+abc@example.com"]))


class TestRecipient(unittest.TestCase):
    """Recipient lookup order: to, recipient, session.recipient, recipients[0], ?uuid=."""

    def test_to_wins_over_other_locations(self):
        payload = InboundEmail(to=INTAKE_ADDRESS, recipient="other@example.com")
        self.assertEqual(parse_recipient_email(payload), (INTAKE_ADDRESS, ORG_UUID))

    def test_session_recipient(self):
        payload = InboundEmail(session={"recipient": INTAKE_ADDRESS})
        self.assertEqual(parse_recipient_email(payload), (INTAKE_ADDRESS, ORG_UUID))

    def test_recipients_list(self):
        payload = InboundEmail.model_validate({"recipients": [INTAKE_ADDRESS, "cc@example.com"]})
        self.assertEqual(parse_recipient_email(payload)[1], ORG_UUID)

    def test_query_uuid_is_last_resort(self):
        payload = InboundEmail(subject="no recipient")
        self.assertEqual(
            parse_recipient_email(payload, query_uuid="abc123"),
            (URL_RECIPIENT_PLACEHOLDER, "abc123"),
        )

    def test_missing_recipient(self):
        self.assertEqual(parse_recipient_email(InboundEmail()), ("", None))


class TestSubjectAndBody(unittest.TestCase):
    def test_subject_from_header_lines(self):
        payload = InboundEmail.model_validate(
            {"headerLines": [{"key": "subject", "line": "Subject: New response"}]}
        )
        self.assertEqual(extract_subject(payload), "New response")

    def test_subject_from_headers(self):
        payload = InboundEmail(headers={"subject": "Brief"})
        self.assertEqual(extract_subject(payload), "Brief")

    def test_text_body_preferred_over_html(self):
        payload = InboundEmail(text="plain", html="<p>html</p>")
        self.assertEqual(extract_body(payload), "plain")

    def test_text_as_html_fallback(self):
        payload = InboundEmail.model_validate({"textAsHtml": "<p>x</p>"})
        self.assertEqual(extract_body(payload), "<p>x</p>")

    def test_parse_inbound_email_parses_form(self):
        html = (
            "<table><thead><tr><th>Preferred Channels</th><th>Total Budget</th></tr></thead>"
            "<tbody><tr><td>Facebook</td><td>$1000</td></tr></tbody></table>"
        )
        parsed = parse_inbound_email(InboundEmail(to=INTAKE_ADDRESS, subject="Brief", html=html))
        self.assertEqual(parsed.uuid_fragment, ORG_UUID)
        self.assertEqual(parsed.subject, "Brief")
        self.assertEqual(parsed.submission.form_data[1].answer, "$1000")


if __name__ == "__main__":
    unittest.main()
