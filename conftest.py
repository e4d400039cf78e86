"""
Shared fixtures. Storage is an in-memory local store for every test.
"""
import os

os.environ["STORAGE_BACKEND"] = "local"
os.environ["LOCAL_STORE_DIR"] = ""
os.environ["SEED_DEFAULT_SCHEMES"] = "true"

import uuid
from datetime import datetime, timezone

import pytest
from fastapi.testclient import TestClient

from schemeflow.models import ApprovalRecord, Patient, PatientCreate, Scheme
from schemeflow.repositories import (
    LocalApprovalRepository,
    LocalPatientRepository,
    LocalSchemeRepository,
    LocalStore,
)
from schemeflow.services import ApprovalService, PatientService, SchemeService


@pytest.fixture
def store():
    return LocalStore()


@pytest.fixture
def approval_repo(store):
    return LocalApprovalRepository(store)


@pytest.fixture
def patient_repo(store):
    return LocalPatientRepository(store)


@pytest.fixture
def scheme_repo(store):
    return LocalSchemeRepository(store)


@pytest.fixture
def approval_service(approval_repo, patient_repo):
    return ApprovalService(approval_repo, patient_repo)


@pytest.fixture
def scheme_service(scheme_repo):
    return SchemeService(scheme_repo)


@pytest.fixture
def patient_service(patient_repo, scheme_repo, approval_service):
    return PatientService(patient_repo, scheme_repo, approval_service)


@pytest.fixture
def catalog():
    """Small catalog covering each predicate group"""
    return [
        Scheme(
            id="sc-st-care",
            name="SC/ST Care",
            description="Care for reserved categories",
            eligibility_criteria={
                "age": {"min": 18, "max": 60},
                "income": {"max": 50000},
                "category": ["sc", "st"],
            },
        ),
        Scheme(
            id="women-health",
            name="Women Health",
            description="Maternal and women's health",
            eligibility_criteria={"gender": ["female"]},
        ),
        Scheme(id="open-to-all", name="Open To All", description="No conditions"),
        Scheme(
            id="senior-care",
            name="Senior Care",
            description="For senior citizens",
            eligibility_criteria={"age": {"min": 60}},
        ),
    ]


@pytest.fixture
def registration():
    return PatientCreate(
        name="Ravi Kumar",
        age=45,
        gender="male",
        address="12 Station Road, Nashik",
        contact="9876543210",
        medical_history="Type 2 diabetes",
        disease="Diabetic nephropathy",
        income=30000,
        category="sc",
    )


@pytest.fixture
def patient(registration):
    return Patient(
        **registration.model_dump(),
        id=str(uuid.uuid4()),
        created_at=datetime.now(timezone.utc),
        updated_by="Anita Desai",
    )


def make_record(level="facility", status="pending", **overrides) -> ApprovalRecord:
    data = {
        "id": str(uuid.uuid4()),
        "patient_id": "p-1",
        "scheme_id": "s-1",
        "patient_name": "Ravi Kumar",
        "scheme_name": "Health For All",
        "facility_name": "Primary Health Center",
        "date": "2024-05-01",
        "current_level": level,
        "status": status,
    }
    data.update(overrides)
    return ApprovalRecord(**data)


@pytest.fixture
def record_factory():
    return make_record


@pytest.fixture
def client():
    from schemeflow.main import app

    with TestClient(app) as test_client:
        yield test_client
