"""
Services package for SchemeFlow
"""

from .eligibility_service import EligibilityMatcher, eligibility_matcher, match
from .approval_service import (
    ApprovalService,
    apply_approval,
    apply_rejection,
    next_level,
    next_tier
)
from .patient_service import PatientService
from .scheme_service import SchemeService
from .auth_service import AuthService, auth_service

__all__ = [
    "EligibilityMatcher",
    "eligibility_matcher",
    "match",
    "ApprovalService",
    "apply_approval",
    "apply_rejection",
    "next_level",
    "next_tier",
    "PatientService",
    "SchemeService",
    "AuthService",
    "auth_service"
]
