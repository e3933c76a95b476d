"""
Artifact: planner_service/smartstudy/services/date_phrases.py
Purpose: Converts informal relative-date phrases ("in 3 days", "tomorrow", "next week") into day offsets.
Author: SmartStudy Team
Created: 2026-10-12
Revised:
- 2026-10-13: Replaced the chained phrase checks with one ordered rule table. (SmartStudy Team)
- 2026-10-17: Accept "within N days"; convert oversized day counts without int() on the raw digits. (SmartStudy Team)
Preconditions:
- Callers pass lower-cased request text; matching is case-insensitive regardless.
Inputs:
- Acceptable: Any string, including empty text.
- Unacceptable: None (treated as empty text).
Postconditions:
- Always yields a non-negative offset; unmatched text yields DEFAULT_OFFSET_DAYS.
Returns:
- Offset in days, or a date/datetime shifted from the reference by that offset.
Notes:
- The n_weeks rule accepts any week count (7 days per week), not only "2 weeks".
Errors/Exceptions:
- None; parse misses silently degrade to the default offset.
"""

import re
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Callable, Optional, Tuple, TypeVar

from ..core.logging import get_logger

logger = get_logger("smartstudy.planner")

DEFAULT_OFFSET_DAYS = 1
MAX_OFFSET_DAYS = 3650

# "after N days" / "in N days" / "within N days"; also used directly by the event extractor.
RELATIVE_DAYS_PATTERN = r"\b(?:after|within|in)\s+(\d+)\s+days?\b"
RELATIVE_DAYS_RE = re.compile(RELATIVE_DAYS_PATTERN, re.IGNORECASE)

DateLike = TypeVar("DateLike", bound=date)


@dataclass(frozen=True)
class DatePhraseRule:
    name: str
    pattern: re.Pattern
    offset: Callable[[re.Match], int]


def clamp_offset(days: int) -> int:
    return max(0, min(int(days), MAX_OFFSET_DAYS))


def offset_from_digits(digits: str, days_per_unit: int = 1) -> int:
    """Clamp a captured digit run to an offset; long runs never reach int()."""
    digits = digits.lstrip("0") or "0"
    if len(digits) > len(str(MAX_OFFSET_DAYS)):
        return MAX_OFFSET_DAYS
    return clamp_offset(int(digits) * days_per_unit)


def _captured_days(match: re.Match) -> int:
    return offset_from_digits(match.group(1))


def _captured_weeks(match: re.Match) -> int:
    return offset_from_digits(match.group(1), days_per_unit=7)


# Evaluated top to bottom; the first matching rule wins.
DATE_PHRASE_RULES: Tuple[DatePhraseRule, ...] = (
    DatePhraseRule("after_n_days", re.compile(r"\bafter\s+(\d+)\s+days?\b", re.IGNORECASE), _captured_days),
    DatePhraseRule("in_n_days", re.compile(r"\b(?:with)?in\s+(\d+)\s+days?\b", re.IGNORECASE), _captured_days),
    DatePhraseRule("tomorrow", re.compile(r"\btomorrow\b", re.IGNORECASE), lambda m: 1),
    DatePhraseRule("next_week", re.compile(r"\bnext\s+week\b", re.IGNORECASE), lambda m: 7),
    DatePhraseRule("n_weeks", re.compile(r"\b(?:after|within|in)\s+(\d+)\s+weeks?\b", re.IGNORECASE), _captured_weeks),
)


def match_offset_days(text: str) -> Tuple[int, Optional[str]]:
    """Return (offset, rule name) for the first matching rule, or the default with no rule."""
    for rule in DATE_PHRASE_RULES:
        match = rule.pattern.search(text or "")
        if match:
            return rule.offset(match), rule.name
    return DEFAULT_OFFSET_DAYS, None


def parse_date_phrase(text: str, reference: DateLike) -> DateLike:
    """Shift the reference date by the offset the text describes (default: one day)."""
    offset, rule_name = match_offset_days(text)
    if rule_name is None:
        logger.debug("No date phrase matched; defaulting to +%d day", offset)
    return reference + timedelta(days=offset)
