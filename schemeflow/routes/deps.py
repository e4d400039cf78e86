"""
Request dependencies shared by the routers
"""
from typing import Optional
from fastapi import Request

from ..config import settings
from ..database import get_storage
from ..models.user import User
from ..services.approval_service import ApprovalService
from ..services.auth_service import auth_service
from ..services.patient_service import PatientService
from ..services.scheme_service import SchemeService


def get_approval_service() -> ApprovalService:
    storage = get_storage()
    return ApprovalService(storage.approvals, storage.patients)


def get_patient_service() -> PatientService:
    storage = get_storage()
    return PatientService(storage.patients, storage.schemes, get_approval_service())


def get_scheme_service() -> SchemeService:
    return SchemeService(get_storage().schemes)


def get_current_user(request: Request) -> Optional[User]:
    """Signed-in user for the request's session cookie, if any"""
    return auth_service.current_user(request.cookies.get(settings.session_cookie))
