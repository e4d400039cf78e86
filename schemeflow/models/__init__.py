"""
Models package for SchemeFlow
"""

from .common import (
    APPROVAL_LEVELS,
    ApprovalLevel,
    ApprovalStatus,
    Category,
    Gender,
    UserRole,
)

from .scheme import (
    AgeRange,
    IncomeCeiling,
    EligibilityCriteria,
    CriteriaSubmission,
    SchemeCreate,
    Scheme
)

from .patient import (
    EligibilityProfile,
    PatientCreate,
    Patient
)

from .approval import (
    ApprovalEvent,
    ApprovalRecord,
    ApproveRequest,
    RejectRequest
)

from .user import (
    User,
    LoginRequest,
    NearMiss,
    EligibilityCheckResponse,
    DashboardStats
)

__all__ = [
    # Enumerations
    "APPROVAL_LEVELS",
    "ApprovalLevel",
    "ApprovalStatus",
    "Category",
    "Gender",
    "UserRole",

    # Scheme models
    "AgeRange",
    "IncomeCeiling",
    "EligibilityCriteria",
    "CriteriaSubmission",
    "SchemeCreate",
    "Scheme",

    # Patient models
    "EligibilityProfile",
    "PatientCreate",
    "Patient",

    # Approval models
    "ApprovalEvent",
    "ApprovalRecord",
    "ApproveRequest",
    "RejectRequest",

    # User and dashboard models
    "User",
    "LoginRequest",
    "NearMiss",
    "EligibilityCheckResponse",
    "DashboardStats"
]
