"""API v1 router aggregator.

URL structure with /api/v1 prefix. All v1 endpoint routers are included here.
"""

from fastapi import APIRouter

from app.api.v1 import auth, candidates, company, jobs, navigation

router = APIRouter()

# =============================================================================
# Authentication
# =============================================================================

router.include_router(auth.router, prefix="/auth", tags=["auth"])

# =============================================================================
# Onboarding Navigation
# =============================================================================

router.include_router(navigation.router, prefix="/navigation", tags=["navigation"])

# =============================================================================
# Core Resource Routers
# =============================================================================

router.include_router(candidates.router, prefix="/candidates", tags=["candidates"])
router.include_router(company.router, prefix="/company", tags=["company"])
router.include_router(jobs.router, prefix="/jobs", tags=["jobs"])
