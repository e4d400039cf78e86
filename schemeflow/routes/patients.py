"""
API routes for patient registration
"""
import logging
from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, Query

from ..config import settings
from ..exceptions import PatientNotFoundError
from ..models.patient import Patient, PatientCreate
from ..models.user import User
from ..services.patient_service import PatientService
from .deps import get_current_user, get_patient_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/patients", tags=["patients"])


@router.get("", response_model=List[Patient])
async def get_patients(
    search: Optional[str] = Query(None, description="Filter by name, contact or medical history"),
    service: PatientService = Depends(get_patient_service)
):
    """
    List registered patients
    """
    try:
        return await service.list_patients(search=search)

    except Exception as e:
        logger.error(f"Error fetching patients: {e}")
        raise HTTPException(status_code=500, detail="Failed to fetch patients")


@router.post("", response_model=Patient, status_code=201)
async def add_patient(
    payload: PatientCreate,
    service: PatientService = Depends(get_patient_service),
    user: Optional[User] = Depends(get_current_user)
):
    """
    Register a patient and open approval records for every eligible scheme
    """
    try:
        facility_name = (user.facility if user else None) or settings.default_facility_name
        updated_by = user.name if user else "system"
        return await service.register(payload, updated_by=updated_by, facility_name=facility_name)

    except Exception as e:
        logger.error(f"Error adding patient: {e}")
        raise HTTPException(status_code=500, detail="Failed to add patient")


@router.get("/{patient_id}", response_model=Patient)
async def get_patient(
    patient_id: str,
    service: PatientService = Depends(get_patient_service)
):
    """
    Get a patient with its recommended schemes
    """
    try:
        return await service.get_patient(patient_id)

    except PatientNotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)
    except Exception as e:
        logger.error(f"Error fetching patient {patient_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to fetch patient")
