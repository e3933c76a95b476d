"""
Artifact: planner_service/smartstudy/schemas/requests.py
Purpose: Defines transport request models accepted by the study-plan workflows.
Author: SmartStudy Team
Created: 2026-10-12
Revised:
- 2026-10-12: Added study-plan request model with optional grade and reference date. (SmartStudy Team)
Preconditions:
- Pydantic BaseModel and typing modules are available.
Inputs:
- Acceptable: JSON object containing a prompt string, optional grade, and optional ISO reference date.
- Unacceptable: Missing prompt or malformed reference dates.
Postconditions:
- Request data is validated into typed models used by services/routes.
Returns:
- `StudyPlanRequest` model instances.
Errors/Exceptions:
- Pydantic validation errors for malformed request bodies.
"""

from datetime import date
from typing import Optional

from pydantic import BaseModel


class StudyPlanRequest(BaseModel):
    prompt: str
    grade: Optional[int] = None  # accepted for client compatibility, unused by extraction
    reference_date: Optional[date] = None  # overrides "today" when set
