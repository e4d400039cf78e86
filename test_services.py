"""
Tests for patient registration, the scheme catalog and mock login
"""
import importlib
from datetime import datetime, timedelta, timezone

import pytest

from schemeflow.exceptions import (
    AuthenticationError,
    DuplicateSchemeError,
    PatientNotFoundError,
    SchemeNotFoundError,
)
from schemeflow.models import SchemeCreate
from schemeflow.repositories import LocalSessionRepository
from schemeflow.services.auth_service import AuthService


# PatientService

@pytest.mark.asyncio
async def test_register_recommends_and_opens_records(patient_service, scheme_repo, approval_repo, registration, catalog):
    for scheme in catalog:
        await scheme_repo.add_scheme(scheme)

    patient = await patient_service.register(registration, updated_by="Anita Desai", facility_name="Civil Hospital")

    assert [s.id for s in patient.recommended_schemes] == ["sc-st-care", "open-to-all"]
    assert patient.updated_by == "Anita Desai"
    assert patient.created_at is not None

    records = await approval_repo.list_approvals()
    assert [r.scheme_id for r in records] == ["sc-st-care", "open-to-all"]
    assert all(r.facility_name == "Civil Hospital" for r in records)
    assert all(r.patient_id == patient.id for r in records)


@pytest.mark.asyncio
async def test_register_with_empty_catalog(patient_service, approval_repo, registration):
    patient = await patient_service.register(registration, updated_by="system", facility_name="Primary Health Center")

    assert patient.recommended_schemes == []
    assert await approval_repo.list_approvals() == []


@pytest.mark.asyncio
async def test_recommendations_are_a_snapshot(patient_service, scheme_repo, registration, catalog):
    for scheme in catalog:
        await scheme_repo.add_scheme(scheme)
    patient = await patient_service.register(registration, updated_by="system", facility_name="Primary Health Center")

    await scheme_repo.delete_scheme("sc-st-care")

    stored = await patient_service.get_patient(patient.id)
    assert [s.id for s in stored.recommended_schemes] == ["sc-st-care", "open-to-all"]


@pytest.mark.asyncio
async def test_list_patients_search(patient_service, registration):
    await patient_service.register(registration, updated_by="system", facility_name="Primary Health Center")
    other = registration.model_copy(update={
        "name": "Lakshmi Iyer",
        "contact": "9123456780",
        "medical_history": "Asthma",
    })
    await patient_service.register(other, updated_by="system", facility_name="Primary Health Center")

    assert len(await patient_service.list_patients()) == 2
    assert [p.name for p in await patient_service.list_patients(search="lakshmi")] == ["Lakshmi Iyer"]
    assert [p.name for p in await patient_service.list_patients(search="98765")] == ["Ravi Kumar"]
    assert [p.name for p in await patient_service.list_patients(search="ASTHMA")] == ["Lakshmi Iyer"]
    assert await patient_service.list_patients(search="tuberculosis") == []


@pytest.mark.asyncio
async def test_get_unknown_patient(patient_service):
    with pytest.raises(PatientNotFoundError):
        await patient_service.get_patient("missing")


# SchemeService

@pytest.mark.asyncio
async def test_create_scheme_generates_id(scheme_service):
    scheme = await scheme_service.create_scheme(SchemeCreate(name="Dialysis Support", description="Free dialysis"))

    assert scheme.id.startswith("dialysis-support-")
    assert (await scheme_service.get_scheme(scheme.id)).name == "Dialysis Support"


@pytest.mark.asyncio
async def test_create_duplicate_scheme(scheme_service):
    payload = SchemeCreate(id="tb-care", name="TB Care")
    await scheme_service.create_scheme(payload)

    with pytest.raises(DuplicateSchemeError):
        await scheme_service.create_scheme(payload)


@pytest.mark.asyncio
async def test_delete_scheme(scheme_service):
    await scheme_service.create_scheme(SchemeCreate(id="tb-care", name="TB Care"))

    await scheme_service.delete_scheme("tb-care")

    assert await scheme_service.list_schemes() == []
    with pytest.raises(SchemeNotFoundError):
        await scheme_service.delete_scheme("tb-care")
    with pytest.raises(SchemeNotFoundError):
        await scheme_service.get_scheme("tb-care")


@pytest.mark.asyncio
async def test_seed_defaults_only_fills_empty_catalog(scheme_service):
    assert await scheme_service.seed_defaults() == 6
    assert await scheme_service.seed_defaults() == 0
    assert len(await scheme_service.list_schemes()) == 6


# AuthService

@pytest.mark.asyncio
async def test_login_and_logout(store):
    auth = AuthService()
    session_store = LocalSessionRepository(store)

    token, user = await auth.login("Facility@SchemeFlow.in ", "anything", session_store=session_store)

    assert user.role == "facility"
    assert auth.current_user(token) == user
    assert (await session_store.get_current_user())["email"] == "facility@schemeflow.in"

    await auth.logout(token, session_store=session_store)

    assert auth.current_user(token) is None
    assert await session_store.get_current_user() is None


@pytest.mark.asyncio
async def test_login_unknown_email():
    with pytest.raises(AuthenticationError):
        await AuthService().login("nobody@example.com", "password")


def test_current_user_without_token():
    assert AuthService().current_user(None) is None
    assert AuthService().current_user("bogus") is None


@pytest.mark.asyncio
async def test_sessions_expire(monkeypatch):
    auth_module = importlib.import_module("schemeflow.services.auth_service")

    now = datetime(2024, 5, 1, 9, 0, tzinfo=timezone.utc)
    monkeypatch.setattr(auth_module, "get_current_utc_time", lambda: now)
    auth = AuthService(session_ttl=timedelta(hours=1))

    token, _ = await auth.login("state@schemeflow.in", "password")
    stale, _ = await auth.login("district@schemeflow.in", "password")
    assert auth.current_user(token).role == "state"

    now = now + timedelta(hours=1)
    assert auth.current_user(token) is None
    assert token not in auth.sessions

    await auth.login("hospital@schemeflow.in", "password")
    assert stale not in auth.sessions
    assert len(auth.sessions) == 1


@pytest.mark.asyncio
async def test_session_table_is_capped():
    auth = AuthService(max_sessions=2)

    first, _ = await auth.login("facility@schemeflow.in", "password")
    second, _ = await auth.login("hospital@schemeflow.in", "password")
    third, _ = await auth.login("state@schemeflow.in", "password")

    assert len(auth.sessions) == 2
    assert auth.current_user(first) is None
    assert auth.current_user(second).role == "hospital"
    assert auth.current_user(third).role == "state"
