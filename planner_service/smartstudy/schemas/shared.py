"""
Artifact: planner_service/smartstudy/schemas/shared.py
Purpose: Defines reusable shared schema objects used across requests, responses, and planner services.
Author: SmartStudy Team
Created: 2026-10-12
Revised:
- 2026-10-12: Added event type enum, study guide, planned event, and plan entry models. (SmartStudy Team)
Preconditions:
- Pydantic v2 BaseModel is installed and importable.
Inputs:
- Acceptable: JSON-compatible values matching declared field types.
- Unacceptable: Missing required fields, non-string list items, or out-of-range list lengths.
Postconditions:
- Shared Pydantic models validate and serialize contract-compatible data.
Returns:
- Typed model instances for study guides, detected events, and plan entries.
Errors/Exceptions:
- Pydantic validation errors for invalid payload data.
"""

from enum import Enum
from typing import List

from pydantic import BaseModel, Field, StrictStr


class EventType(str, Enum):
    EXAM = "Exam"
    ASSIGNMENT = "Assignment"
    REVISION = "Revision"


class StudyGuide(BaseModel):
    howToComplete: List[StrictStr] = Field(min_length=3, max_length=6)
    guides: List[StrictStr] = Field(min_length=3, max_length=5)
    suggestions: StrictStr = Field(min_length=1)
    motivation: List[StrictStr] = Field(min_length=3, max_length=3)


class PlannedEvent(BaseModel):
    title: str
    subject: str
    date: str
    type: EventType


class PlanEntry(BaseModel):
    title: str
    subject: str
    date: str
    type: EventType
    notes: str = ""
