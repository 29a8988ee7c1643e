"""Tests for advisory minimum-spend checks and LinkedIn targeting constraints."""

import sys
import unittest
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from src.budget.linkedin_geo import (
    LINKEDIN_GEO_MAPPINGS,
    split_locale,
    validate_linkedin_targeting,
)
from src.budget.validator import budget_suggestions, minimum_for, validate_budget
from src.models.budget import BudgetPeriod, PlatformToken


class TestValidateBudget(unittest.TestCase):
    def test_meets_minimum(self):
        result = validate_budget(300, BudgetPeriod.TOTAL, "GBP", PlatformToken.LINKEDIN)
        self.assertTrue(result.is_valid)
        self.assertEqual(result.minimum_required, 80)
        self.assertEqual(result.message, "Budget meets LinkedIn total minimum of GBP 80")

    def test_below_minimum(self):
        result = validate_budget(5, BudgetPeriod.DAILY, "usd", PlatformToken.LINKEDIN)
        self.assertFalse(result.is_valid)
        self.assertEqual(
            result.message,
            "Budget below LinkedIn daily minimum. Required: USD 10, Provided: USD 5",
        )

    def test_fractional_amounts_show_two_decimals(self):
        result = validate_budget(33.3333, BudgetPeriod.TOTAL, "USD", PlatformToken.TIKTOK)
        self.assertIn("Provided: USD 33.33", result.message)

    def test_exact_minimum_is_valid(self):
        self.assertTrue(validate_budget(30, BudgetPeriod.TOTAL, "USD", PlatformToken.META).is_valid)

    def test_unknown_currency_uses_usd_row(self):
        self.assertEqual(minimum_for(PlatformToken.GOOGLE, BudgetPeriod.TOTAL, "JPY"), 30)
        result = validate_budget(10, BudgetPeriod.TOTAL, "JPY", PlatformToken.GOOGLE)
        self.assertEqual(result.currency, "JPY")
        self.assertFalse(result.is_valid)


class TestBudgetSuggestions(unittest.TestCase):
    def test_google_search_total(self):
        suggestion = budget_suggestions(PlatformToken.GOOGLE, "SEARCH", BudgetPeriod.TOTAL, "GBP")
        self.assertEqual((suggestion.minimum, suggestion.suggested, suggestion.high), (25, 400, 2400))
        self.assertEqual(suggestion.currency, "GBP")

    def test_unknown_type_and_currency_fall_back(self):
        suggestion = budget_suggestions(PlatformToken.LINKEDIN, "VIDEO", BudgetPeriod.DAILY, "CAD")
        self.assertEqual(suggestion.currency, "USD")
        self.assertEqual(suggestion.suggested, 50)

    def test_no_suggestions_for_meta(self):
        self.assertIsNone(budget_suggestions(PlatformToken.META, "TRAFFIC", BudgetPeriod.TOTAL))


class TestLinkedInTargeting(unittest.TestCase):
    def test_us_english_usd_is_clean(self):
        result = validate_linkedin_targeting("US", "en", "USD")
        self.assertTrue(result.is_valid)
        self.assertEqual(result.locale, "en_US")
        self.assertEqual(result.warnings, [])

    def test_uk_english_is_served_as_en_us(self):
        result = validate_linkedin_targeting("GB", "en", "GBP")
        self.assertFalse(result.is_valid)
        self.assertEqual(result.geo_urn, LINKEDIN_GEO_MAPPINGS["GB"].geo_urn)
        self.assertEqual(result.locale, "en_US")
        self.assertEqual(result.suggested_currency, "USD")
        self.assertEqual(len(result.warnings), 2)
        self.assertIn("English-speaking countries use en_US", result.warnings[1])

    def test_germany_keeps_native_locale(self):
        result = validate_linkedin_targeting("DE", "de", "EUR")
        self.assertEqual(result.locale, "de_DE")
        self.assertEqual(len(result.warnings), 1)

    def test_language_not_supported_in_country(self):
        result = validate_linkedin_targeting("FR", "de", "USD")
        self.assertEqual(result.locale, "en_US")
        self.assertEqual(result.warnings, ["Locale adjusted from de_FR to en_US (LinkedIn supported locale)."])

    def test_unmapped_country_uses_default_geo(self):
        result = validate_linkedin_targeting("JP", "ja", "USD")
        self.assertEqual(result.geo_urn, LINKEDIN_GEO_MAPPINGS["US"].geo_urn)
        self.assertEqual(result.locale, "en_US")

    def test_split_locale(self):
        self.assertEqual(split_locale("de_DE"), {"country": "DE", "language": "de"})


if __name__ == "__main__":
    unittest.main()
