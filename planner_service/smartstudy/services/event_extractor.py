"""
Artifact: planner_service/smartstudy/services/event_extractor.py
Purpose: Extracts exam/assignment/revision events (subject, type, date) from a free-text study request.
Author: SmartStudy Team
Created: 2026-10-12
Revised:
- 2026-10-13: Added clause-scoped event typing, standardized-test keywords, and event de-duplication. (SmartStudy Team)
- 2026-10-17: Shared the relative-days pattern with the date parser so "within N days" dates a subject. (SmartStudy Team)
Preconditions:
- `today` is a calendar date already normalized by the caller.
Inputs:
- Acceptable: Any free-text request, including text without subjects or dates.
- Unacceptable: None (treated as empty text).
Postconditions:
- Returns at least one event; every event date is on or after `today`.
Returns:
- List of `StudyEvent` sorted ascending by date.
Errors/Exceptions:
- None; unknown subjects and unparseable dates degrade to defaults.

Subjects that are named without any "after/in N days" phrase anywhere in the
request are dropped by the vocabulary scan. When every subject is dropped the
single inferred event is used instead, so only one of several subjects
survives in that case.
"""

import re
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Optional

from ..core.logging import get_logger
from ..schemas.shared import EventType, PlannedEvent
from .date_phrases import RELATIVE_DAYS_PATTERN, RELATIVE_DAYS_RE, offset_from_digits, parse_date_phrase

logger = get_logger("smartstudy.planner")

EXAM_KEYWORDS = ("exam", "test")
ASSIGNMENT_KEYWORDS = ("assignment", "homework", "project")

DEFAULT_SUBJECT = "Mathematics"

CLAUSE_BOUNDARY_RE = re.compile(r"[,;.\n]|\band\b|\bbut\b", re.IGNORECASE)


@dataclass(frozen=True)
class SubjectKeyword:
    keyword: str
    subject: str
    word_bounded: bool = False

    @property
    def pattern(self) -> str:
        escaped = re.escape(self.keyword)
        return rf"\b{escaped}\b" if self.word_bounded else escaped


# Scan order for multi-subject requests.
SUBJECT_KEYWORDS = (
    SubjectKeyword("aptitude", "Aptitude"),
    SubjectKeyword("physics", "Physics"),
    SubjectKeyword("chemistry", "Chemistry"),
    SubjectKeyword("biology", "Biology"),
    SubjectKeyword("mathematics", "Mathematics"),
    SubjectKeyword("math", "Mathematics"),
    SubjectKeyword("english", "English"),
    SubjectKeyword("history", "History"),
    SubjectKeyword("geography", "Geography"),
    # Short acronyms collide with ordinary words ("practice", "saturday").
    SubjectKeyword("sat", "SAT", word_bounded=True),
    SubjectKeyword("act", "ACT", word_bounded=True),
    SubjectKeyword("gmat", "GMAT", word_bounded=True),
    SubjectKeyword("gre", "GRE", word_bounded=True),
    SubjectKeyword("toefl", "TOEFL", word_bounded=True),
    SubjectKeyword("ielts", "IELTS", word_bounded=True),
)

_KEYWORDS_BY_NAME = {k.keyword: k for k in SUBJECT_KEYWORDS}

# First match wins when a single event has to be inferred.
FALLBACK_SUBJECT_PRIORITY = tuple(
    _KEYWORDS_BY_NAME[name]
    for name in (
        "physics",
        "chemistry",
        "biology",
        "english",
        "history",
        "math",
        "aptitude",
        "geography",
        "sat",
        "act",
        "gmat",
        "gre",
        "toefl",
        "ielts",
    )
)


@dataclass(frozen=True)
class StudyEvent:
    subject: str
    type: EventType
    date: date

    @property
    def title(self) -> str:
        if self.type == EventType.EXAM:
            return f"{self.subject} Exam"
        if self.type == EventType.ASSIGNMENT:
            return f"{self.subject} Assignment"
        return f"{self.subject} Study Session"

    def to_schema(self) -> PlannedEvent:
        return PlannedEvent(
            title=self.title,
            subject=self.subject,
            date=self.date.isoformat(),
            type=self.type,
        )


def detect_event_type(text: str) -> EventType:
    """Exam keywords win over assignment keywords; everything else is revision."""
    if any(k in text for k in EXAM_KEYWORDS):
        return EventType.EXAM
    if any(k in text for k in ASSIGNMENT_KEYWORDS):
        return EventType.ASSIGNMENT
    return EventType.REVISION


def _find_keyword(request: str, keyword: SubjectKeyword) -> Optional[re.Match]:
    return re.search(keyword.pattern, request, flags=re.IGNORECASE)


def _clause_around(request: str, start: int, end: int) -> str:
    """Return the text between the clause boundaries surrounding request[start:end]."""
    clause_start = 0
    for boundary in CLAUSE_BOUNDARY_RE.finditer(request, 0, start):
        clause_start = boundary.end()
    following = CLAUSE_BOUNDARY_RE.search(request, end)
    clause_end = following.start() if following else len(request)
    return request[clause_start:clause_end]


def _event_type_for_subject(request: str, match: re.Match) -> EventType:
    clause = _clause_around(request, match.start(), match.end())
    clause_type = detect_event_type(clause)
    if clause_type != EventType.REVISION:
        return clause_type
    return detect_event_type(request)


def _days_for_subject(request: str, keyword: SubjectKeyword) -> Optional[int]:
    local = re.search(
        keyword.pattern + r".*?" + RELATIVE_DAYS_PATTERN,
        request,
        flags=re.IGNORECASE | re.DOTALL,
    )
    if local:
        return offset_from_digits(local.group(1))

    anywhere = RELATIVE_DAYS_RE.search(request)
    if anywhere:
        return offset_from_digits(anywhere.group(1))
    return None


def _scan_subject_events(request: str, today: date) -> list[StudyEvent]:
    events = []
    for keyword in SUBJECT_KEYWORDS:
        match = _find_keyword(request, keyword)
        if not match:
            continue

        days = _days_for_subject(request, keyword)
        if days is None:
            logger.debug("Subject %r mentioned without a date phrase; skipping", keyword.subject)
            continue

        events.append(
            StudyEvent(
                subject=keyword.subject,
                type=_event_type_for_subject(request, match),
                date=today + timedelta(days=days),
            )
        )
    return events


def infer_single_event(request: str, today: date) -> StudyEvent:
    """Build one event for requests the vocabulary scan could not date."""
    subject = DEFAULT_SUBJECT
    for keyword in FALLBACK_SUBJECT_PRIORITY:
        if _find_keyword(request, keyword):
            subject = keyword.subject
            break

    return StudyEvent(
        subject=subject,
        type=detect_event_type(request),
        date=parse_date_phrase(request, today),
    )


def extract_events(request_text: str, today: date) -> list[StudyEvent]:
    """
    Extract every dated subject event from the request.

    Falls back to a single inferred event when no subject carries a date, so
    the result is never empty. Duplicates (e.g. "math" and "mathematics"
    matching the same mention) are collapsed.
    """
    request = (request_text or "").lower()

    events = _scan_subject_events(request, today)
    if not events:
        events = [infer_single_event(request, today)]
        logger.info("No dated subjects found; inferred %s on %s", events[0].title, events[0].date)

    unique = list(dict.fromkeys(events))
    unique.sort(key=lambda e: e.date)

    logger.info(
        "Extracted %d event(s): %s",
        len(unique),
        ", ".join(f"{e.title}@{e.date.isoformat()}" for e in unique),
    )
    return unique
