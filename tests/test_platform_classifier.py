"""Tests for platform detection, grouping and Meta placements."""

import sys
import unittest
from itertools import combinations
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from src.models.budget import MetaPublisherPlatform, PlatformToken
from src.models.submission import QAPair
from src.platforms.classifier import (
    count_platform_groups,
    detect_google_campaign_type,
    detect_platforms,
    extract_publisher_platforms,
    publisher_platforms_for_draft,
)

META_PLACEMENTS = ("facebook", "instagram", "messenger", "threads")


def _form(*pairs: tuple[str, str]) -> tuple[QAPair, ...]:
    return tuple(QAPair(question=q, answer=a) for q, a in pairs)


class TestGrouping(unittest.TestCase):
    def test_any_mix_of_meta_placements_is_one_group(self):
        for size in range(1, len(META_PLACEMENTS) + 1):
            for combo in combinations(META_PLACEMENTS, size):
                with self.subTest(combo=combo):
                    self.assertEqual(count_platform_groups(list(combo)), 1)

    def test_each_other_platform_is_its_own_group(self):
        self.assertEqual(count_platform_groups(["Facebook", "Instagram", "LinkedIn", "TikTok"]), 3)
        self.assertEqual(count_platform_groups([]), 0)

    def test_token_naming_two_families_counts_each_once(self):
        detection = detect_platforms(_form(("Channels", "Facebook Instagram LinkedIn, LinkedIn")))
        self.assertEqual(detection.groups, ("meta", "linkedin"))
        self.assertEqual(detection.requested, frozenset({PlatformToken.META, PlatformToken.LINKEDIN}))

    def test_unknown_channel_is_its_own_group_but_not_requested(self):
        detection = detect_platforms(_form(("Preferred Channels", "Facebook, Pinterest")))
        self.assertEqual(detection.group_count, 2)
        self.assertEqual(detection.requested, frozenset({PlatformToken.META}))


class TestDetection(unittest.TestCase):
    def test_json_array_answer(self):
        detection = detect_platforms(_form(("Preferred Channels", '["Facebook","Instagram"]')))
        self.assertEqual(detection.requested, frozenset({PlatformToken.META}))
        self.assertEqual(detection.group_count, 1)
        self.assertEqual(detection.tokens, ("facebook", "instagram"))

    def test_multi_platform_answer(self):
        detection = detect_platforms(_form(("Channels", "Facebook, LinkedIn, Google Search")))
        self.assertEqual(detection.groups, ("meta", "linkedin", "google"))
        self.assertTrue(detection.is_requested(PlatformToken.GOOGLE))
        self.assertFalse(detection.is_requested(PlatformToken.TIKTOK))

    def test_only_platform_questions_are_scanned(self):
        form = _form(
            ("Campaign Objective", "Grow our LinkedIn following"),
            ("Advertising Platform", "TikTok"),
        )
        self.assertEqual(detect_platforms(form).requested, frozenset({PlatformToken.TIKTOK}))

    def test_short_codes_match_whole_words_only(self):
        self.assertEqual(detect_platforms(_form(("Channels", "FB, IG"))).requested, frozenset({PlatformToken.META}))
        self.assertEqual(detect_platforms(_form(("Channels", "Digital signage"))).requested, frozenset())

    def test_nothing_requested(self):
        detection = detect_platforms(_form(("Budget", "$500")))
        self.assertEqual(detection.group_count, 0)
        self.assertEqual(detection.requested, frozenset())


class TestPlacementsAndGoogleType(unittest.TestCase):
    def test_publisher_platforms_named_in_form(self):
        form = _form(("Channels", "FB, IG, Messenger"))
        self.assertEqual(
            extract_publisher_platforms(form),
            [MetaPublisherPlatform.FACEBOOK, MetaPublisherPlatform.INSTAGRAM, MetaPublisherPlatform.MESSENGER],
        )

    def test_publisher_platforms_default(self):
        form = _form(("Channels", "LinkedIn"))
        self.assertEqual(extract_publisher_platforms(form), [])
        self.assertEqual(
            publisher_platforms_for_draft(form),
            [MetaPublisherPlatform.FACEBOOK, MetaPublisherPlatform.INSTAGRAM],
        )

    def test_google_campaign_type(self):
        self.assertEqual(detect_google_campaign_type(_form(("Channels", "Google Display, Google Search"))), "SEARCH")
        self.assertEqual(detect_google_campaign_type(_form(("Ad Type", "Display ads"))), "DISPLAY")
        self.assertEqual(detect_google_campaign_type(_form(("Channels", "Google"))), "SEARCH")


if __name__ == "__main__":
    unittest.main()
