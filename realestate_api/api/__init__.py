"""
API routes for the calculation service.
"""

from fastapi import APIRouter

from realestate_api.api import calculations

router = APIRouter()

# Calculation endpoints live directly under /api (e.g. /api/cap-rate)
router.include_router(calculations.router, tags=["calculations"])
