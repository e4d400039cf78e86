"""
Async REST client for the SchemeFlow API
"""
import logging
import os
from typing import Any, List, Optional

import httpx

from schemeflow.models.approval import ApprovalRecord
from schemeflow.models.patient import Patient, PatientCreate
from schemeflow.models.scheme import Scheme
from schemeflow.models.user import DashboardStats, User

logger = logging.getLogger(__name__)

DEFAULT_API_URL = "http://localhost:5000/api"


class APIError(Exception):
    """Non-2xx response from the API"""

    def __init__(self, message: str, status_code: int):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class DashboardClient:
    """
    Client for the dashboard endpoints. The session cookie set by ``login``
    is kept on the underlying httpx client and sent with later calls.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        self.base_url = (base_url or os.getenv("SCHEMEFLOW_API_URL") or DEFAULT_API_URL).rstrip("/")
        self._client = httpx.AsyncClient(base_url=self.base_url, timeout=timeout, transport=transport)

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc, tb):
        await self.close()

    async def close(self):
        await self._client.aclose()

    async def _request(self, method: str, path: str, fallback_message: str, **kwargs) -> Any:
        response = await self._client.request(method, path, **kwargs)

        if response.is_error:
            message = fallback_message
            try:
                message = response.json().get("message") or fallback_message
            except ValueError:
                pass
            logger.error(f"API error: {method} {path} -> {response.status_code} {message}")
            raise APIError(message, response.status_code)

        if not response.content:
            return None
        return response.json()

    # Auth APIs
    async def login(self, email: str, password: str) -> User:
        data = await self._request(
            "POST", "/auth/login", "Failed to login",
            json={"email": email, "password": password}
        )
        return User.model_validate(data)

    async def logout(self) -> None:
        await self._request("POST", "/auth/logout", "Failed to logout")

    # Patient APIs
    async def get_patients(self, search: Optional[str] = None) -> List[Patient]:
        params = {"search": search} if search else None
        data = await self._request("GET", "/patients", "Failed to fetch patients", params=params)
        return [Patient.model_validate(p) for p in data]

    async def add_patient(self, patient: PatientCreate) -> Patient:
        data = await self._request(
            "POST", "/patients", "Failed to add patient",
            json=patient.model_dump(mode="json", by_alias=True)
        )
        return Patient.model_validate(data)

    # Approval APIs
    async def get_approvals(self, role: str) -> List[ApprovalRecord]:
        data = await self._request(
            "GET", "/approvals", "Failed to fetch approvals",
            params={"role": role}
        )
        return [ApprovalRecord.model_validate(a) for a in data]

    async def approve_recommendation(self, approval_id: str, comments: Optional[str] = None) -> ApprovalRecord:
        data = await self._request(
            "POST", f"/approvals/{approval_id}/approve", "Failed to approve recommendation",
            json={"comments": comments}
        )
        return ApprovalRecord.model_validate(data)

    async def reject_recommendation(self, approval_id: str, reason: str) -> ApprovalRecord:
        if not reason or not reason.strip():
            raise ValueError("Rejection reason is required")
        data = await self._request(
            "POST", f"/approvals/{approval_id}/reject", "Failed to reject recommendation",
            json={"reason": reason}
        )
        return ApprovalRecord.model_validate(data)

    # Statistics APIs
    async def get_dashboard_stats(self, role: str) -> DashboardStats:
        data = await self._request(
            "GET", "/stats/dashboard", "Failed to fetch dashboard statistics",
            params={"role": role}
        )
        return DashboardStats.model_validate(data)

    # Scheme APIs
    async def get_schemes(self) -> List[Scheme]:
        data = await self._request("GET", "/schemes", "Failed to fetch schemes")
        return [Scheme.model_validate(s) for s in data]
