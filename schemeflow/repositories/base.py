"""
Repository interfaces the services depend on
"""
from abc import ABC, abstractmethod
from typing import List, Optional

from ..models.approval import ApprovalRecord
from ..models.patient import Patient
from ..models.scheme import Scheme


class SchemeRepository(ABC):

    @abstractmethod
    async def list_schemes(self) -> List[Scheme]:
        """Load the scheme catalog in insertion order"""

    @abstractmethod
    async def get_scheme(self, scheme_id: str) -> Optional[Scheme]:
        ...

    @abstractmethod
    async def add_scheme(self, scheme: Scheme) -> Scheme:
        ...

    @abstractmethod
    async def delete_scheme(self, scheme_id: str) -> bool:
        """Remove a scheme; False when it did not exist"""


class PatientRepository(ABC):

    @abstractmethod
    async def list_patients(self) -> List[Patient]:
        ...

    @abstractmethod
    async def get_patient(self, patient_id: str) -> Optional[Patient]:
        ...

    @abstractmethod
    async def add_patient(self, patient: Patient) -> Patient:
        ...


class ApprovalRepository(ABC):

    @abstractmethod
    async def list_approvals(self) -> List[ApprovalRecord]:
        ...

    @abstractmethod
    async def get_approval(self, approval_id: str) -> Optional[ApprovalRecord]:
        ...

    @abstractmethod
    async def add_approvals(self, records: List[ApprovalRecord]) -> None:
        """Append a batch of records in a single write"""

    @abstractmethod
    async def update_approval(self, record: ApprovalRecord) -> bool:
        """Replace the stored record with the same id; False when it did not exist"""


class SessionRepository(ABC):
    """Holds the currently signed-in dashboard user"""

    @abstractmethod
    async def get_current_user(self) -> Optional[dict]:
        ...

    @abstractmethod
    async def set_current_user(self, user: Optional[dict]) -> None:
        ...
