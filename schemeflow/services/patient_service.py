"""
Patient registration and lookup
"""
import logging
import uuid
from typing import List, Optional

from ..exceptions import PatientNotFoundError
from ..models.common import get_current_utc_time
from ..models.patient import Patient, PatientCreate
from ..repositories.base import PatientRepository, SchemeRepository
from ..utils.validators import matches_search
from .approval_service import ApprovalService
from .eligibility_service import eligibility_matcher

logger = logging.getLogger(__name__)


class PatientService:
    """Registers patients and opens their scheme recommendations"""

    def __init__(
        self,
        patients: PatientRepository,
        schemes: SchemeRepository,
        approval_service: ApprovalService
    ):
        self.patients = patients
        self.schemes = schemes
        self.approval_service = approval_service

    async def register(
        self,
        payload: PatientCreate,
        updated_by: str,
        facility_name: str
    ) -> Patient:
        """
        Register a patient at facility level

        The eligible schemes are computed once against the current catalog and
        stored on the patient as a snapshot. One pending approval record is
        opened per eligible scheme.

        Args:
            payload: Validated registration form
            updated_by: Name or id of the registering user
            facility_name: Facility the recommendations originate from

        Returns:
            The stored patient
        """
        catalog = await self.schemes.list_schemes()
        recommended = eligibility_matcher.match(payload, catalog)

        patient = Patient(
            **payload.model_dump(),
            id=str(uuid.uuid4()),
            created_at=get_current_utc_time(),
            updated_by=updated_by,
            recommended_schemes=recommended
        )
        await self.patients.add_patient(patient)
        logger.info(f"Patient registered: {patient.id} with {len(recommended)} recommended scheme(s)")

        await self.approval_service.create_approval_records(patient, recommended, facility_name)
        return patient

    async def list_patients(self, search: Optional[str] = None) -> List[Patient]:
        """All patients, optionally filtered by name, contact or medical history"""
        patients = await self.patients.list_patients()
        if not search:
            return patients
        return [
            p for p in patients
            if matches_search(search, p.name, p.contact, p.medical_history)
        ]

    async def get_patient(self, patient_id: str) -> Patient:
        patient = await self.patients.get_patient(patient_id)
        if patient is None:
            raise PatientNotFoundError(patient_id)
        return patient
