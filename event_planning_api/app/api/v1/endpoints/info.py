"""
Information endpoint for API v1.

Returns the service name and version.  It requires no authentication
and is suitable as a liveness probe.
"""

from typing import Any, Dict

from fastapi import APIRouter

from event_planning_api.app.core.config import settings
from event_planning_api.app.schemas.common import ApiResponse

router = APIRouter()


@router.get("/", response_model=ApiResponse[Dict[str, Any]])
async def get_info() -> ApiResponse[Dict[str, Any]]:
    return ApiResponse(data={"name": settings.project_name, "version": settings.api_version})
