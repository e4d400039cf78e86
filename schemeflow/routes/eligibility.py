"""
API routes for eligibility checking
"""
import logging
from fastapi import APIRouter, Depends, HTTPException

from ..models.patient import EligibilityProfile
from ..models.user import EligibilityCheckResponse
from ..services.eligibility_service import eligibility_matcher
from ..services.scheme_service import SchemeService
from .deps import get_scheme_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/eligibility", tags=["eligibility"])


@router.post("/check", response_model=EligibilityCheckResponse)
async def check_eligibility(
    profile: EligibilityProfile,
    service: SchemeService = Depends(get_scheme_service)
):
    """
    Preview the schemes a patient would be recommended, with near misses
    """
    try:
        catalog = await service.list_schemes()
        return eligibility_matcher.check(profile, catalog)

    except Exception as e:
        logger.error(f"Error checking eligibility: {e}")
        raise HTTPException(status_code=500, detail="Failed to check eligibility")
