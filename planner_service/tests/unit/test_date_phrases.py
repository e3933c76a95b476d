import unittest
from datetime import date, datetime

from smartstudy.services.date_phrases import (
    DATE_PHRASE_RULES,
    DEFAULT_OFFSET_DAYS,
    MAX_OFFSET_DAYS,
    match_offset_days,
    parse_date_phrase,
)

TODAY = date(2024, 1, 1)


class TestDatePhrases(unittest.TestCase):
    def test_rules_are_evaluated_in_declared_order(self):
        self.assertEqual(
            [rule.name for rule in DATE_PHRASE_RULES],
            ["after_n_days", "in_n_days", "tomorrow", "next_week", "n_weeks"],
        )

    def test_after_n_days_accepts_any_magnitude(self):
        self.assertEqual(parse_date_phrase("math exam after 45 days", TODAY), date(2024, 2, 15))

    def test_in_n_days(self):
        self.assertEqual(parse_date_phrase("quiz in 3 days", TODAY), date(2024, 1, 4))

    def test_singular_day(self):
        self.assertEqual(parse_date_phrase("review in 1 day", TODAY), date(2024, 1, 2))

    def test_tomorrow(self):
        self.assertEqual(match_offset_days("history test tomorrow"), (1, "tomorrow"))

    def test_next_week(self):
        self.assertEqual(match_offset_days("chemistry assignment next week"), (7, "next_week"))

    def test_two_weeks_and_fourteen_days_agree(self):
        for text in ("after 2 weeks", "in 2 weeks", "in 14 days", "after 14 days"):
            with self.subTest(text=text):
                self.assertEqual(parse_date_phrase(text, TODAY), date(2024, 1, 15))

        self.assertEqual(match_offset_days("in 14 days")[1], "in_n_days")
        self.assertEqual(match_offset_days("in 2 weeks")[1], "n_weeks")

    def test_numeric_phrase_wins_over_tomorrow(self):
        self.assertEqual(
            match_offset_days("start tomorrow, exam after 5 days"),
            (5, "after_n_days"),
        )

    def test_after_is_checked_before_in(self):
        self.assertEqual(match_offset_days("quiz in 2 days, exam after 6 days"), (6, "after_n_days"))

    def test_unmatched_text_defaults_to_one_day(self):
        self.assertEqual(match_offset_days("whenever works"), (DEFAULT_OFFSET_DAYS, None))
        self.assertEqual(parse_date_phrase("whenever works", TODAY), date(2024, 1, 2))

    def test_empty_and_missing_text_default(self):
        self.assertEqual(parse_date_phrase("", TODAY), date(2024, 1, 2))
        self.assertEqual(parse_date_phrase(None, TODAY), date(2024, 1, 2))

    def test_huge_offsets_are_clamped(self):
        offset, rule = match_offset_days("after 99999999999 days")
        self.assertEqual(offset, MAX_OFFSET_DAYS)
        self.assertEqual(rule, "after_n_days")

    def test_thousands_of_digits_clamp_instead_of_failing(self):
        text = "after " + "9" * 5000 + " days"
        self.assertEqual(match_offset_days(text), (MAX_OFFSET_DAYS, "after_n_days"))
        self.assertEqual(parse_date_phrase(text, TODAY), date(2033, 12, 29))
        self.assertEqual(match_offset_days("in " + "9" * 5000 + " weeks"), (MAX_OFFSET_DAYS, "n_weeks"))

    def test_leading_zeros_do_not_count_as_magnitude(self):
        self.assertEqual(match_offset_days("in " + "0" * 20 + "3 days"), (3, "in_n_days"))

    def test_within_n_days(self):
        self.assertEqual(match_offset_days("physics exam within 3 days"), (3, "in_n_days"))
        self.assertEqual(parse_date_phrase("within 1 day", TODAY), date(2024, 1, 2))

    def test_any_week_count_is_seven_days_per_week(self):
        self.assertEqual(match_offset_days("history project in 3 weeks"), (21, "n_weeks"))
        self.assertEqual(match_offset_days("within 1 week"), (7, "n_weeks"))

    def test_keeps_reference_time_of_day(self):
        reference = datetime(2024, 1, 1, 0, 0)
        self.assertEqual(parse_date_phrase("in 3 days", reference), datetime(2024, 1, 4, 0, 0))


if __name__ == "__main__":
    unittest.main()
