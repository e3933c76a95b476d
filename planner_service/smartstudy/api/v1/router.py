"""
Artifact: planner_service/smartstudy/api/v1/router.py
Purpose: Aggregates v1 API route modules for single include in app startup.
Author: SmartStudy Team
Created: 2026-10-12
Revised:
- 2026-10-14: Swapped run routes for study-plan routes. (SmartStudy Team)
Preconditions:
- Route modules under api/v1/routes are importable.
Inputs:
- Acceptable: FastAPI include_router integration.
- Unacceptable: Missing route modules or invalid router objects.
Postconditions:
- Exposes a composed APIRouter containing health and study-plan routes.
Returns:
- `APIRouter` instance.
Errors/Exceptions:
- Import errors if route modules cannot be resolved.
"""

from fastapi import APIRouter

from .routes.health import router as health_router
from .routes.plans import router as plans_router

api_v1_router = APIRouter()
api_v1_router.include_router(health_router)
api_v1_router.include_router(plans_router)
