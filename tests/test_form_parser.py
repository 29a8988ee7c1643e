"""Tests for the form parser: HTML table layout, fixed-width fallback, never raising."""

import sys
import unittest
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from src.intake.form_parser import column_spans, parse_fixed_width, parse_form_submission
from src.models.submission import QAPair


def _fixed_width(*columns: tuple[str, str], width: int = 20) -> str:
    """Two aligned lines: questions, then answers."""
    questions = "".join(q.ljust(width) for q, _ in columns).rstrip()
    answers = "".join(a.ljust(width) for _, a in columns).rstrip()
    return f"{questions}\n{answers}\n"


class TestHtmlTable(unittest.TestCase):
    """Microsoft Forms HTML notifications."""

    def test_headers_become_questions_in_column_order(self):
        body = (
            "<html><body><table><thead><tr><th>Campaign Name</th><th>Budget</th></tr></thead>"
            "<tbody><tr><td>Spring &amp; Summer</td><td>$1,000</td></tr></tbody></table></body></html>"
        )
        submission = parse_form_submission(body)
        self.assertEqual(
            list(submission.form_data),
            [QAPair(question="Campaign Name", answer="Spring & Summer"), QAPair(question="Budget", answer="$1,000")],
        )
        self.assertEqual(submission.raw_text, body)

    def test_missing_answer_cells_are_empty(self):
        body = (
            "<table><thead><tr><th>Name</th><th>Budget</th><th>Notes</th></tr></thead>"
            "<tbody><tr><td>Acme</td></tr></tbody></table>"
        )
        submission = parse_form_submission(body)
        self.assertEqual([p.answer for p in submission.form_data], ["Acme", "", ""])

    def test_double_encoded_entities_are_decoded(self):
        body = (
            "<table><thead><tr><th>Client</th></tr></thead>"
            "<tbody><tr><td>O&amp;#039;Brien</td></tr></tbody></table>"
        )
        submission = parse_form_submission(body)
        self.assertEqual(submission.form_data[0].answer, "O'Brien")

    def test_literal_named_entity_survives(self):
        body = (
            "<table><thead><tr><th>Client</th></tr></thead>"
            "<tbody><tr><td>AT&amp;amp;T</td></tr></tbody></table>"
        )
        submission = parse_form_submission(body)
        self.assertEqual(submission.form_data[0].answer, "AT&amp;T")

    def test_table_without_thead_falls_back_to_text_columns(self):
        body = (
            "<table><tr><td>Budget</td><td>Channel</td></tr>"
            "<tr><td>$5,000</td><td>Google</td></tr></table>"
        )
        submission = parse_form_submission(body)
        self.assertEqual(
            list(submission.form_data),
            [QAPair(question="Budget", answer="$5,000"), QAPair(question="Channel", answer="Google")],
        )

    def test_headerless_table_cells_of_different_widths(self):
        body = (
            "<table><tr><td>Campaign Name</td><td>Budget</td></tr>"
            "<tr><td>Acme</td><td>$5,000</td></tr></table>"
        )
        submission = parse_form_submission(body)
        self.assertEqual(
            list(submission.form_data),
            [QAPair(question="Campaign Name", answer="Acme"), QAPair(question="Budget", answer="$5,000")],
        )

    def test_headerless_table_with_long_answers_and_indentation(self):
        body = (
            "<table>\n  <tr>\n    <td>Budget</td>\n    <td>Channel</td>\n  </tr>\n"
            "  <tr>\n    <td>$15,000 per month</td>\n    <td>LinkedIn</td>\n  </tr>\n</table>"
        )
        submission = parse_form_submission(body)
        self.assertEqual(
            list(submission.form_data),
            [
                QAPair(question="Budget", answer="$15,000 per month"),
                QAPair(question="Channel", answer="LinkedIn"),
            ],
        )


class TestFixedWidth(unittest.TestCase):
    """Plain-text notifications with columns separated by three or more spaces."""

    def test_column_spans(self):
        self.assertEqual(column_spans("Name   Budget   Geo"), [(0, 7), (7, 16), (16, None)])
        self.assertEqual(column_spans("Single"), [(0, None)])

    def test_columns_pair_by_position(self):
        text = _fixed_width(
            ("Campaign Name", "Spring Launch"),
            ("Total Budget", "$1000"),
            ("Target Geography", "United States"),
        )
        pairs = parse_fixed_width(text)
        self.assertEqual([p.question for p in pairs], ["Campaign Name", "Total Budget", "Target Geography"])
        self.assertEqual([p.answer for p in pairs], ["Spring Launch", "$1000", "United States"])

    def test_short_answer_line_is_clamped(self):
        text = _fixed_width(("Name", "Acme"), ("Budget", ""), ("Notes", ""))
        pairs = parse_fixed_width(text)
        self.assertEqual([p.answer for p in pairs], ["Acme", "", ""])

    def test_blank_lines_are_skipped(self):
        text = "\n\n" + _fixed_width(("Name", "Acme"), ("Budget", "$500"))
        submission = parse_form_submission(text)
        self.assertEqual(submission.form_data[1], QAPair(question="Budget", answer="$500"))

    def test_security_banner_is_ignored(self):
        text = "CAUTION: This email originated from outside the organization.\n" + _fixed_width(
            ("Name", "Acme"), ("Budget", "$500")
        )
        submission = parse_form_submission(text)
        self.assertEqual([p.question for p in submission.form_data], ["Name", "Budget"])

    def test_typographic_characters_are_normalized(self):
        nbsp, right_quote, zero_width = chr(0xA0), chr(0x2019), chr(0x200B)
        text = _fixed_width((f"Total{nbsp}Budget", "$500"), ("Client", f"O{right_quote}Brien{zero_width}"))
        pairs = parse_form_submission(text).form_data
        self.assertEqual(pairs[0], QAPair(question="Total Budget", answer="$500"))
        self.assertEqual(pairs[1].answer, "O'Brien")

    def test_fewer_than_two_lines_yields_empty_form_data(self):
        submission = parse_form_submission("Only one line here")
        self.assertEqual(submission.form_data, ())
        self.assertEqual(submission.raw_text, "Only one line here")

    def test_empty_and_none_bodies_never_raise(self):
        self.assertEqual(parse_form_submission("").form_data, ())
        self.assertEqual(parse_form_submission(None).form_data, ())


if __name__ == "__main__":
    unittest.main()
