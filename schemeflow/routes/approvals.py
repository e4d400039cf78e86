"""
API routes for the approval chain
"""
import logging
from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, Query

from ..exceptions import ApprovalNotFoundError, InvalidTransitionError
from ..models.approval import ApprovalRecord, ApproveRequest, RejectRequest
from ..models.common import ApprovalLevel, UserRole
from ..models.user import User
from ..services.approval_service import ApprovalService
from .deps import get_approval_service, get_current_user

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/approvals", tags=["approvals"])


def _actor(user: Optional[User]) -> Optional[str]:
    return f"{user.name} ({user.role})" if user else None


@router.get("", response_model=List[ApprovalRecord])
async def get_approvals(
    role: UserRole = Query(..., description="Dashboard role whose queue to return"),
    service: ApprovalService = Depends(get_approval_service)
):
    """
    Approval queue for a role: pending records at its level, or fully
    approved records for the super-admin
    """
    try:
        return await service.list_for_role(role)

    except Exception as e:
        logger.error(f"Error fetching approvals for {role}: {e}")
        raise HTTPException(status_code=500, detail="Failed to fetch approvals")


@router.get("/by-level/{level}", response_model=List[ApprovalRecord])
async def get_approvals_by_level(
    level: ApprovalLevel,
    include_closed: bool = Query(False, alias="includeClosed", description="Include approved and rejected records"),
    service: ApprovalService = Depends(get_approval_service)
):
    """
    Records currently held at a level
    """
    try:
        if include_closed:
            return await service.list_by_level(level)
        return await service.list_pending_by_level(level)

    except Exception as e:
        logger.error(f"Error fetching approvals at {level}: {e}")
        raise HTTPException(status_code=500, detail="Failed to fetch approvals")


@router.get("/{approval_id}", response_model=ApprovalRecord)
async def get_approval(
    approval_id: str,
    service: ApprovalService = Depends(get_approval_service)
):
    try:
        return await service.get_approval(approval_id)

    except ApprovalNotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)
    except Exception as e:
        logger.error(f"Error fetching approval {approval_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to fetch approval")


@router.post("/{approval_id}/approve", response_model=ApprovalRecord)
async def approve_recommendation(
    approval_id: str,
    request: Optional[ApproveRequest] = None,
    service: ApprovalService = Depends(get_approval_service),
    user: Optional[User] = Depends(get_current_user)
):
    """
    Approve a recommendation at its current level
    """
    try:
        comments = request.comments if request else None
        return await service.approve(approval_id, comments=comments, actor=_actor(user))

    except ApprovalNotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)
    except InvalidTransitionError as e:
        raise HTTPException(status_code=409, detail=e.message)
    except Exception as e:
        logger.error(f"Error approving {approval_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to approve recommendation")


@router.post("/{approval_id}/reject", response_model=ApprovalRecord)
async def reject_recommendation(
    approval_id: str,
    request: RejectRequest,
    service: ApprovalService = Depends(get_approval_service),
    user: Optional[User] = Depends(get_current_user)
):
    """
    Reject a recommendation; it stays at the level where it was rejected
    """
    try:
        return await service.reject(approval_id, request.reason, actor=_actor(user))

    except ApprovalNotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)
    except InvalidTransitionError as e:
        raise HTTPException(status_code=409, detail=e.message)
    except Exception as e:
        logger.error(f"Error rejecting {approval_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to reject recommendation")
