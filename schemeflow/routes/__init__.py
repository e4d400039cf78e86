"""
API routes for SchemeFlow
"""

from .auth import router as auth_router
from .patients import router as patients_router
from .approvals import router as approvals_router
from .stats import router as stats_router
from .schemes import router as schemes_router
from .eligibility import router as eligibility_router

__all__ = [
    "auth_router",
    "patients_router",
    "approvals_router",
    "stats_router",
    "schemes_router",
    "eligibility_router"
]
