"""
Persistence backends for SchemeFlow
"""

from .base import (
    SchemeRepository,
    PatientRepository,
    ApprovalRepository,
    SessionRepository
)
from .local_store import (
    LocalStore,
    LocalSchemeRepository,
    LocalPatientRepository,
    LocalApprovalRepository,
    LocalSessionRepository
)

__all__ = [
    "SchemeRepository",
    "PatientRepository",
    "ApprovalRepository",
    "SessionRepository",
    "LocalStore",
    "LocalSchemeRepository",
    "LocalPatientRepository",
    "LocalApprovalRepository",
    "LocalSessionRepository"
]
