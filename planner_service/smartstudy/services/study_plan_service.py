"""
Artifact: planner_service/smartstudy/services/study_plan_service.py
Purpose: Coordinates request-level study-plan workflow execution for API handlers.
Author: SmartStudy Team
Created: 2026-10-14
Revised:
- 2026-10-14: Added service layer for event extraction, plan synthesis, and study-guide enrichment. (SmartStudy Team)
- 2026-10-15: Added typed plan streaming workflow events for SSE transport. (SmartStudy Team)
Preconditions:
- Incoming request is validated as StudyPlanRequest.
Inputs:
- Acceptable: Free-text prompt with optional grade and reference date; optional StudyGuideClient.
- Unacceptable: Requests bypassing schema validation.
Postconditions:
- Returns a non-empty, date-ordered plan.
Returns:
- Dictionary response matching StudyPlanResponse, or a stream of typed event dictionaries.
Errors/Exceptions:
- Study-guide failures never propagate; other runtime exceptions propagate to the API layer.
"""

import functools
from datetime import date, timedelta
from typing import AsyncGenerator, Optional

from ..clients.llm_client import StudyGuideClient
from ..core.config import settings
from ..core.logging import get_logger
from ..schemas.requests import StudyPlanRequest
from ..schemas.responses import StudyPlanResponse
from ..schemas.shared import EventType, PlanEntry
from .event_extractor import extract_events
from .plan_synthesizer import GuideGenerator, build_plan_slots, resolve_slot, synthesize_plan

logger = get_logger("smartstudy.main")


def _today() -> date:
    return date.today()


def _build_guide_generator(client: Optional[StudyGuideClient]) -> Optional[GuideGenerator]:
    """Lazy import to avoid loading LLM dependencies at module import time."""
    if client is None or not settings.study_guides_enabled():
        return None
    if not client.configured:
        logger.info("Study guide client not configured; using template guides")
        return None

    from ..orchestrators.study_guide_orchestrator import generate_study_guide

    return functools.partial(generate_study_guide, client)


def _generic_study_session(today: date) -> PlanEntry:
    return PlanEntry(
        title="Study Session",
        subject="General",
        date=(today + timedelta(days=1)).isoformat(),
        type=EventType.REVISION,
        notes="Review study materials",
    )


def _log_request(req: StudyPlanRequest, route_path: str, today: date, streaming: bool = False) -> None:
    logger.info(
        "POST %s%s | prompt=%r | grade=%s | today=%s",
        route_path,
        " [stream]" if streaming else "",
        req.prompt[:100],
        req.grade,
        today.isoformat(),
    )


async def generate_study_plan_workflow(
    req: StudyPlanRequest,
    route_path: str,
    client: Optional[StudyGuideClient] = None,
) -> dict:
    """Execute the full study-plan workflow for a validated request."""
    today = req.reference_date or _today()
    _log_request(req, route_path, today)

    events = extract_events(req.prompt, today)
    if not events:
        logger.warning("No events extracted; returning generic study session")
        plan = [_generic_study_session(today)]
    else:
        plan = await synthesize_plan(
            events,
            today,
            _build_guide_generator(client),
            timeout=settings.study_guide_timeout_seconds(),
            parallel=settings.parallel_study_guides(),
        )

    result = StudyPlanResponse(plan=plan).model_dump(mode="json")
    logger.info("Study plan completed | events=%d | entries=%d", len(events), len(plan))
    return result


def _build_event(event: str, data: dict) -> dict:
    return {
        "event": event,
        "data": data,
    }


async def stream_study_plan_workflow(
    req: StudyPlanRequest,
    route_path: str,
    client: Optional[StudyGuideClient] = None,
) -> AsyncGenerator[dict, None]:
    """
    Execute the study-plan workflow and emit typed stream events for SSE clients.

    Event sequence:
      plan.started -> plan.stage -> plan.events -> plan.entry* -> plan.completed
      or plan.error on failure.
    """
    today = req.reference_date or _today()
    _log_request(req, route_path, today, streaming=True)

    try:
        yield _build_event(
            "plan.started",
            {
                "stage": "queued",
                "progress_percent": 5,
                "status_message": "Study plan started",
            },
        )

        yield _build_event(
            "plan.stage",
            {
                "stage": "extracting_events",
                "progress_percent": 15,
                "status_message": "Reading your request",
            },
        )
        events = extract_events(req.prompt, today)

        yield _build_event(
            "plan.events",
            {
                "stage": "events_extracted",
                "progress_percent": 25,
                "status_message": f"Found {len(events)} event(s)",
                "events": [e.to_schema().model_dump(mode="json") for e in events],
            },
        )

        plan: list[PlanEntry] = []
        if not events:
            plan.append(_generic_study_session(today))
        else:
            generate_guide = _build_guide_generator(client)
            timeout = settings.study_guide_timeout_seconds()
            slots = build_plan_slots(events, today)
            for index, slot in enumerate(slots, start=1):
                entry = await resolve_slot(slot, generate_guide, timeout)
                plan.append(entry)
                yield _build_event(
                    "plan.entry",
                    {
                        "stage": "building_plan",
                        "progress_percent": 25 + round(70 * index / len(slots)),
                        "status_message": f"Planned {entry.date}",
                        "entry": entry.model_dump(mode="json"),
                        "entry_index": index,
                        "total_entries": len(slots),
                    },
                )

        result = StudyPlanResponse(plan=plan).model_dump(mode="json")
        logger.info("Streaming study plan completed | entries=%d", len(plan))
        yield _build_event(
            "plan.completed",
            {
                **result,
                "stage": "completed",
                "progress_percent": 100,
                "status_message": "Study plan ready",
            },
        )
    except Exception as exc:
        logger.exception("Streaming study plan failed")
        yield _build_event(
            "plan.error",
            {
                "stage": "failed",
                "progress_percent": 100,
                "status_message": "Study plan generation failed",
                "message": str(exc),
            },
        )
