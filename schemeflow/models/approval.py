"""
Pydantic models for approval records and workflow actions
"""
from datetime import datetime
from typing import List, Literal, Optional
from pydantic import Field, field_validator

from .common import (
    ApprovalLevel,
    ApprovalStatus,
    CamelModel,
    get_current_utc_time,
)


class ApprovalEvent(CamelModel):
    """One approve/reject action taken on a record"""
    action: Literal["approved", "rejected"]
    level: ApprovalLevel = Field(..., description="Tier that acted")
    comment: Optional[str] = None
    actor: Optional[str] = None
    at: datetime = Field(default_factory=get_current_utc_time)


class ApprovalRecord(CamelModel):
    """A single (patient, scheme) recommendation moving through the approval chain"""
    id: str
    patient_id: str
    scheme_id: Optional[str] = None
    patient_name: str
    scheme_name: str
    disease: str = "Not specified"
    facility_name: str
    date: str = Field(..., description="Recommendation date, YYYY-MM-DD")
    status: ApprovalStatus = "pending"
    current_level: ApprovalLevel = "facility"
    notes: Optional[str] = None
    rejection_reason: Optional[str] = None
    history: List[ApprovalEvent] = Field(default_factory=list)
    updated_at: datetime = Field(default_factory=get_current_utc_time)

    @property
    def is_terminal(self) -> bool:
        return self.status != "pending"


class ApproveRequest(CamelModel):
    comments: Optional[str] = None


class RejectRequest(CamelModel):
    reason: str

    @field_validator("reason")
    @classmethod
    def reason_required(cls, v):
        if not v or not v.strip():
            raise ValueError("Rejection reason is required")
        return v.strip()
