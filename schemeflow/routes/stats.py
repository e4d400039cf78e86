"""
API routes for dashboard statistics
"""
import logging
from fastapi import APIRouter, Depends, HTTPException, Query

from ..models.common import UserRole
from ..models.user import DashboardStats
from ..services.approval_service import ApprovalService
from .deps import get_approval_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/stats", tags=["stats"])


@router.get("/dashboard", response_model=DashboardStats)
async def get_dashboard_stats(
    role: UserRole = Query(..., description="Dashboard role"),
    service: ApprovalService = Depends(get_approval_service)
):
    """
    Counters for a role's dashboard
    """
    try:
        return await service.compute_dashboard_stats(role)

    except Exception as e:
        logger.error(f"Error computing dashboard statistics for {role}: {e}")
        raise HTTPException(status_code=500, detail="Failed to fetch dashboard statistics")
