import unittest

from smartstudy.schemas.shared import EventType, StudyGuide
from smartstudy.services.study_guide_templates import build_fallback_study_guide


class TestStudyGuideTemplates(unittest.TestCase):
    def test_every_type_and_timing_produces_a_valid_guide(self):
        for event_type in EventType:
            for days_until in (5, 1, 0, -2):
                with self.subTest(event_type=event_type, days_until=days_until):
                    guide = build_fallback_study_guide(event_type, "Chemistry", days_until)
                    self.assertIsInstance(guide, StudyGuide)
                    self.assertTrue(3 <= len(guide.howToComplete) <= 6)
                    self.assertTrue(3 <= len(guide.guides) <= 5)
                    self.assertEqual(len(guide.motivation), 3)
                    self.assertTrue(guide.suggestions)

    def test_guides_mention_the_subject(self):
        guide = build_fallback_study_guide(EventType.EXAM, "Geography", 3)
        self.assertIn("Geography", guide.suggestions)
        self.assertTrue(any("Geography" in step for step in guide.howToComplete))

    def test_timing_changes_the_guide(self):
        before = build_fallback_study_guide(EventType.EXAM, "Physics", 2)
        on_the_day = build_fallback_study_guide(EventType.EXAM, "Physics", 0)
        after = build_fallback_study_guide(EventType.EXAM, "Physics", -1)
        self.assertIn("2 days", before.suggestions)
        self.assertIn("exam day", on_the_day.suggestions)
        self.assertNotEqual(on_the_day, after)

    def test_accepts_plain_type_values(self):
        self.assertEqual(
            build_fallback_study_guide("Assignment", "History", 0),
            build_fallback_study_guide(EventType.ASSIGNMENT, "History", 0),
        )

    def test_unknown_type_is_rejected(self):
        with self.assertRaises(ValueError):
            build_fallback_study_guide("Quiz", "History", 0)


if __name__ == "__main__":
    unittest.main()
