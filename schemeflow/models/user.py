"""
Pydantic models for dashboard users, eligibility checks and statistics
"""
from typing import List, Optional
from pydantic import Field, ConfigDict
from pydantic.alias_generators import to_camel

from .common import CamelModel, UserRole
from .scheme import Scheme


class User(CamelModel):
    """Dashboard user; the role decides which approval queue they see"""
    id: str
    name: str
    email: str
    role: UserRole
    facility: Optional[str] = None
    hospital: Optional[str] = None
    district: Optional[str] = None
    state: Optional[str] = None
    avatar: Optional[str] = None


class LoginRequest(CamelModel):
    email: str = Field(..., min_length=3)
    password: str = ""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        json_schema_extra={
            "example": {"email": "facility@schemeflow.in", "password": "password"}
        }
    )


class NearMiss(CamelModel):
    """Scheme the patient narrowly fails, with the failing conditions"""
    scheme_id: str
    scheme_name: str
    failed_conditions: List[str] = Field(default_factory=list)


class EligibilityCheckResponse(CamelModel):
    eligible_schemes: List[Scheme] = Field(default_factory=list)
    near_misses: List[NearMiss] = Field(default_factory=list)


class DashboardStats(CamelModel):
    """Counters shown on a role's dashboard"""
    total_patients: int = 0
    registered_today: int = 0
    pending_approvals: int = 0
    patient_followups: int = 0
    total_recommendations: int = 0
    approved_recommendations: int = 0
    rejected_recommendations: int = 0

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "totalPatients": 42,
                "registeredToday": 3,
                "pendingApprovals": 7,
                "patientFollowups": 14,
                "totalRecommendations": 96,
                "approvedRecommendations": 20,
                "rejectedRecommendations": 5
            }
        }
    )
