"""
Artifact: planner_service/smartstudy/api/v1/routes/plans.py
Purpose: Defines study-plan route handlers and maps runtime failures to HTTP responses.
Author: SmartStudy Team
Created: 2026-10-14
Revised:
- 2026-10-14: Added versioned study-plan route with shared handler function. (SmartStudy Team)
- 2026-10-15: Added SSE study-plan streaming endpoint and shared stream handler. (SmartStudy Team)
Preconditions:
- Incoming request body conforms to StudyPlanRequest schema.
- The application lifespan has attached a StudyGuideClient to app.state.
Inputs:
- Acceptable: POST body containing a prompt and optional grade/reference_date.
- Unacceptable: Invalid schema payloads or malformed JSON bodies.
Postconditions:
- Executes the study-plan workflow and returns the ordered plan.
Returns:
- Dictionary containing `plan`, or a StreamingResponse of SSE events.
Errors/Exceptions:
- Raises HTTPException(500) when workflow execution fails.
"""

import json
import traceback
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import StreamingResponse

from ....clients.llm_client import StudyGuideClient
from ....core.logging import get_logger
from ....schemas.requests import StudyPlanRequest
from ....services.study_plan_service import generate_study_plan_workflow, stream_study_plan_workflow

logger = get_logger("smartstudy.main")
router = APIRouter(tags=["study-plans"])


def get_study_guide_client(request: Request) -> Optional[StudyGuideClient]:
    return getattr(request.app.state, "study_guide_client", None)


async def handle_study_plan_request(
    req: StudyPlanRequest,
    route_path: str,
    client: Optional[StudyGuideClient] = None,
):
    """Shared study-plan handler body used by v1 and legacy routes."""
    try:
        return await generate_study_plan_workflow(req, route_path=route_path, client=client)
    except Exception as e:
        logger.error("Study plan error: %s", repr(e))
        logger.debug("Traceback:\n%s", traceback.format_exc())
        raise HTTPException(status_code=500, detail=str(e))


def _format_sse(event: str, data: dict, event_id: int) -> str:
    payload = json.dumps(data, ensure_ascii=False)
    lines = [f"id: {event_id}", f"event: {event}"]
    for line in payload.splitlines() or [""]:
        lines.append(f"data: {line}")
    lines.append("")
    return "\n".join(lines) + "\n"


def handle_study_plan_stream_request(
    req: StudyPlanRequest,
    route_path: str,
    client: Optional[StudyGuideClient] = None,
):
    """Shared study-plan streaming handler body."""

    async def event_stream():
        event_id = 0
        try:
            async for event in stream_study_plan_workflow(req, route_path=route_path, client=client):
                event_id += 1
                event_name = str(event.get("event", "message"))
                event_data = event.get("data", {})
                if not isinstance(event_data, dict):
                    event_data = {"value": event_data}
                yield _format_sse(event_name, event_data, event_id)
        except Exception as e:
            logger.error("Study plan stream error: %s", repr(e))
            logger.debug("Traceback:\n%s", traceback.format_exc())
            yield _format_sse(
                "plan.error",
                {
                    "stage": "failed",
                    "progress_percent": 100,
                    "status_message": "Study plan generation failed",
                    "message": str(e),
                },
                event_id=999999,
            )

    return StreamingResponse(
        event_stream(),
        media_type="text/event-stream",
        headers={
            "Cache-Control": "no-cache, no-transform",
            "Connection": "keep-alive",
            "X-Accel-Buffering": "no",
        },
    )


@router.post("/study-plans")
async def create_study_plan(
    req: StudyPlanRequest,
    client: Optional[StudyGuideClient] = Depends(get_study_guide_client),
):
    return await handle_study_plan_request(req, route_path="/api/v1/study-plans", client=client)


@router.post("/study-plans/stream")
def create_study_plan_stream(
    req: StudyPlanRequest,
    client: Optional[StudyGuideClient] = Depends(get_study_guide_client),
):
    return handle_study_plan_stream_request(req, route_path="/api/v1/study-plans/stream", client=client)
