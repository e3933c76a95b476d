"""
Artifact: planner_service/smartstudy/services/plan_synthesizer.py
Purpose: Expands extracted events into a day-by-day study plan with proximity-based intensity tiers.
Author: SmartStudy Team
Created: 2026-10-13
Revised:
- 2026-10-14: Split deterministic day layout from guide enrichment so enrichment can run concurrently. (SmartStudy Team)
Preconditions:
- Events have dates on or after `today`.
Inputs:
- Acceptable: Any list of StudyEvent (unsorted input is sorted by date), optional async guide generator.
- Unacceptable: Events dated before `today` (they produce no days).
Postconditions:
- Entries are ordered by date and never dated after the latest event.
- Every event day and intensive day carries a serialized StudyGuide, model-generated or template-based.
Returns:
- List of `PlanEntry`, or an async iterator of them.
Errors/Exceptions:
- None from enrichment; generator failures and timeouts fall back to templates.
- asyncio.CancelledError propagates when the caller cancels.

Tiers, by whole days to the next upcoming event:
  event day      one entry per event, enriched (days_until = 0)
  <= 3 days      "<subject> Intensive Review", enriched
  4 to 7 days    "<subject> Study Session", fixed note
  > 7 days       "<subject> Preparation" on even day indices only
  after events   "General Review Session" every third day
"""

import asyncio
from dataclasses import dataclass
from datetime import date, timedelta
from typing import AsyncIterator, Awaitable, Callable, Optional

from ..core.config import DEFAULT_STUDY_GUIDE_TIMEOUT_SECONDS
from ..core.logging import get_logger
from ..schemas.shared import EventType, PlanEntry, StudyGuide
from .event_extractor import StudyEvent
from .study_guide_templates import build_fallback_study_guide

logger = get_logger("smartstudy.planner")

INTENSIVE_WINDOW_DAYS = 3
MODERATE_WINDOW_DAYS = 7
LIGHT_DAY_INTERVAL = 2
GENERAL_REVIEW_INTERVAL = 3

GENERAL_SUBJECT = "General"
GENERAL_REVIEW_TITLE = "General Review Session"
GENERAL_REVIEW_NOTES = "Review everything you've covered so far and revisit weak topics"


@dataclass(frozen=True)
class GuideTarget:
    title: str
    subject: str
    event_type: EventType
    event_date: date
    days_until: int

    @classmethod
    def for_event(cls, event: StudyEvent, days_until: int) -> "GuideTarget":
        return cls(
            title=event.title,
            subject=event.subject,
            event_type=event.type,
            event_date=event.date,
            days_until=days_until,
        )


GuideGenerator = Callable[[GuideTarget], Awaitable[StudyGuide]]


@dataclass
class PlanSlot:
    day: int
    date: date
    title: str
    subject: str
    type: EventType
    notes: str = ""
    guide_target: Optional[GuideTarget] = None


def _moderate_notes(subject: str) -> str:
    return f"Review {subject} concepts and practice problems"


def _light_notes(event: StudyEvent) -> str:
    return f"Skim your {event.subject} notes and list the topics to cover before the {event.type.value.lower()}"


def slots_for_day(day: int, day_date: date, events: list[StudyEvent]) -> list[PlanSlot]:
    """Lay out the entries for one day; `events` must be sorted by date."""
    todays_events = [e for e in events if e.date == day_date]
    if todays_events:
        return [
            PlanSlot(
                day=day,
                date=day_date,
                title=e.title,
                subject=e.subject,
                type=e.type,
                guide_target=GuideTarget.for_event(e, 0),
            )
            for e in todays_events
        ]

    next_event = next((e for e in events if e.date > day_date), None)
    if next_event is None:
        if day % GENERAL_REVIEW_INTERVAL != 0:
            return []
        return [
            PlanSlot(
                day=day,
                date=day_date,
                title=GENERAL_REVIEW_TITLE,
                subject=GENERAL_SUBJECT,
                type=EventType.REVISION,
                notes=GENERAL_REVIEW_NOTES,
            )
        ]

    days_until = (next_event.date - day_date).days
    subject = next_event.subject

    if days_until <= INTENSIVE_WINDOW_DAYS:
        return [
            PlanSlot(
                day=day,
                date=day_date,
                title=f"{subject} Intensive Review",
                subject=subject,
                type=EventType.REVISION,
                guide_target=GuideTarget.for_event(next_event, days_until),
            )
        ]

    if days_until <= MODERATE_WINDOW_DAYS:
        return [
            PlanSlot(
                day=day,
                date=day_date,
                title=f"{subject} Study Session",
                subject=subject,
                type=EventType.REVISION,
                notes=_moderate_notes(subject),
            )
        ]

    if day % LIGHT_DAY_INTERVAL != 0:
        return []
    return [
        PlanSlot(
            day=day,
            date=day_date,
            title=f"{subject} Preparation",
            subject=subject,
            type=EventType.REVISION,
            notes=_light_notes(next_event),
        )
    ]


def build_plan_slots(events: list[StudyEvent], today: date) -> list[PlanSlot]:
    """Lay out every day from today through the latest event (inclusive)."""
    if not events:
        return []

    ordered = sorted(events, key=lambda e: e.date)
    total_days = (ordered[-1].date - today).days

    slots = []
    for day in range(total_days + 1):
        slots.extend(slots_for_day(day, today + timedelta(days=day), ordered))

    logger.info(
        "Laid out %d plan slot(s) over %d day(s), %d needing study guides",
        len(slots),
        max(total_days + 1, 0),
        sum(1 for s in slots if s.guide_target is not None),
    )
    return slots


async def _study_guide_for(
    target: GuideTarget,
    generate_guide: Optional[GuideGenerator],
    timeout: float,
) -> StudyGuide:
    if generate_guide is None:
        return build_fallback_study_guide(target.event_type, target.subject, target.days_until)

    try:
        return await asyncio.wait_for(generate_guide(target), timeout=timeout)
    except asyncio.TimeoutError:
        logger.warning(
            "Study guide for %r (%+d days) timed out after %.1fs; using template",
            target.title,
            target.days_until,
            timeout,
        )
    except Exception as e:
        logger.warning(
            "Study guide for %r (%+d days) failed: %s; using template",
            target.title,
            target.days_until,
            repr(e),
        )
    return build_fallback_study_guide(target.event_type, target.subject, target.days_until)


async def resolve_slot(
    slot: PlanSlot,
    generate_guide: Optional[GuideGenerator] = None,
    timeout: float = DEFAULT_STUDY_GUIDE_TIMEOUT_SECONDS,
) -> PlanEntry:
    notes = slot.notes
    if slot.guide_target is not None:
        guide = await _study_guide_for(slot.guide_target, generate_guide, timeout)
        notes = guide.model_dump_json()

    return PlanEntry(
        title=slot.title,
        subject=slot.subject,
        date=slot.date.isoformat(),
        type=slot.type,
        notes=notes,
    )


async def synthesize_plan(
    events: list[StudyEvent],
    today: date,
    generate_guide: Optional[GuideGenerator] = None,
    *,
    timeout: float = DEFAULT_STUDY_GUIDE_TIMEOUT_SECONDS,
    parallel: bool = True,
) -> list[PlanEntry]:
    """Build the full plan; guide calls run concurrently when `parallel` is set."""
    slots = build_plan_slots(events, today)

    if parallel:
        return list(
            await asyncio.gather(*(resolve_slot(s, generate_guide, timeout) for s in slots))
        )

    return [entry async for entry in iter_plan_entries(events, today, generate_guide, timeout=timeout)]


async def iter_plan_entries(
    events: list[StudyEvent],
    today: date,
    generate_guide: Optional[GuideGenerator] = None,
    *,
    timeout: float = DEFAULT_STUDY_GUIDE_TIMEOUT_SECONDS,
) -> AsyncIterator[PlanEntry]:
    """Yield plan entries day by day, awaiting each study guide in turn."""
    for slot in build_plan_slots(events, today):
        yield await resolve_slot(slot, generate_guide, timeout)
