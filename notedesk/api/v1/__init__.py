"""
API Version 1 Router.

Aggregates all v1 endpoint routers.
"""

from fastapi import APIRouter

from notedesk.api.v1.endpoints import legacy, notes

router = APIRouter()

# Canonical notes endpoints
router.include_router(notes.router, prefix="/notes", tags=["notes"])

# Endpoints for clients still using numeric ids and datetime stamps
router.include_router(legacy.router, prefix="/legacy/notes", tags=["legacy"])
