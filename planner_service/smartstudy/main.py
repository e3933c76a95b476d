"""
Artifact: planner_service/smartstudy/main.py
Purpose: FastAPI application entry point wiring logging, the study-guide client lifespan, and API routes.
Author: SmartStudy Team
Created: 2026-10-12
Revised:
- 2026-10-14: Added lifespan-owned StudyGuideClient and legacy /generate-study-plan route. (SmartStudy Team)
Preconditions:
- Environment configured via process env or .env (see core/config.py).
Inputs:
- Acceptable: HTTP requests for health and study-plan routes.
- Unacceptable: Requests to unknown routes.
Postconditions:
- A StudyGuideClient is created at startup and closed at shutdown.
Returns:
- ASGI `app` instance.
Errors/Exceptions:
- Route-level errors are mapped by the route handlers.
"""

from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI

from .api.v1.router import api_v1_router
from .api.v1.routes.health import get_health_status
from .api.v1.routes.plans import get_study_guide_client, handle_study_plan_request
from .clients.llm_client import StudyGuideClient
from .core.config import settings
from .core.logging import configure_logging, get_logger
from .schemas.requests import StudyPlanRequest

configure_logging()
logger = get_logger("smartstudy.main")


@asynccontextmanager
async def lifespan(app: FastAPI):
    client = StudyGuideClient.from_settings()
    app.state.study_guide_client = client
    logger.info(
        "Study guide client ready | model=%s configured=%s",
        client.model_name,
        client.configured,
    )
    try:
        yield
    finally:
        client.close()
        logger.info("Study guide client closed")


app = FastAPI(title=settings.app_title, lifespan=lifespan)
app.include_router(api_v1_router, prefix="/api/v1")


@app.get("/health")
def health_legacy():
    return get_health_status("/health")


@app.post("/generate-study-plan")
async def generate_study_plan_legacy(
    req: StudyPlanRequest,
    client=Depends(get_study_guide_client),
):
    return await handle_study_plan_request(req, route_path="/generate-study-plan", client=client)
