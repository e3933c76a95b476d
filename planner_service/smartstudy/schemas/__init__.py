"""Schema package exports for planner service contracts."""

from .requests import StudyPlanRequest
from .responses import StudyPlanResponse
from .shared import EventType, PlanEntry, PlannedEvent, StudyGuide

__all__ = [
    "EventType",
    "PlanEntry",
    "PlannedEvent",
    "StudyGuide",
    "StudyPlanRequest",
    "StudyPlanResponse",
]
