"""
Artifact: planner_service/smartstudy/schemas/responses.py
Purpose: Defines typed response payloads returned by the study-plan workflow.
Author: SmartStudy Team
Created: 2026-10-12
Revised:
- 2026-10-12: Added study-plan response wrapping the ordered plan entries. (SmartStudy Team)
Preconditions:
- Pydantic BaseModel and shared schema models are available.
Inputs:
- Acceptable: Ordered list of plan entries.
- Unacceptable: Entries missing title/subject/date/type.
Postconditions:
- Response objects can be validated for contract-compliant output.
Returns:
- `StudyPlanResponse` model instances.
Errors/Exceptions:
- Pydantic validation errors when planner output does not match schema.
"""

from typing import List

from pydantic import BaseModel

from .shared import PlanEntry


class StudyPlanResponse(BaseModel):
    plan: List[PlanEntry]
