"""
Top‑level router for version 1 of the API.

This router aggregates the routers of each entity (events, tasks,
guests) under a unified prefix.  When new endpoints are added, update
this file to include their routers.
"""

from fastapi import APIRouter

from .endpoints import events, guests, info, tasks

# Create a router for version 1 and include sub‑routers for each entity.
router = APIRouter()

router.include_router(events.router, prefix="/events", tags=["events"])
router.include_router(tasks.router, prefix="/tasks", tags=["tasks"])
router.include_router(guests.router, prefix="/guests", tags=["guests"])
router.include_router(info.router, prefix="/info", tags=["info"])
