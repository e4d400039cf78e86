"""
Tests for the async dashboard client, served in-process over ASGI
"""
import httpx
import pytest

from schemeflow.api_client import DEFAULT_API_URL, APIError, DashboardClient
from schemeflow.database import get_storage, use_local_store
from schemeflow.main import app
from schemeflow.models import PatientCreate
from schemeflow.repositories import LocalStore
from schemeflow.services.scheme_service import SchemeService


@pytest.fixture
async def api():
    use_local_store(LocalStore())
    await SchemeService(get_storage().schemes).seed_defaults()

    transport = httpx.ASGITransport(app=app)
    async with DashboardClient(base_url="http://test/api", transport=transport) as client:
        yield client


@pytest.mark.asyncio
async def test_base_url_defaults(monkeypatch):
    monkeypatch.delenv("SCHEMEFLOW_API_URL", raising=False)
    async with DashboardClient() as client:
        assert client.base_url == DEFAULT_API_URL

    monkeypatch.setenv("SCHEMEFLOW_API_URL", "http://dashboard.internal/api/")
    async with DashboardClient() as client:
        assert client.base_url == "http://dashboard.internal/api"


@pytest.mark.asyncio
async def test_register_and_work_the_queue(api, registration):
    schemes = await api.get_schemes()
    assert len(schemes) == 6

    patient = await api.add_patient(registration)
    assert len(patient.recommended_schemes) == 3
    assert [p.id for p in await api.get_patients()] == [patient.id]

    queue = await api.get_approvals("facility")
    assert len(queue) == 3

    advanced = await api.approve_recommendation(queue[0].id, comments="Verified")
    assert advanced.current_level == "hospital"
    assert [a.id for a in await api.get_approvals("hospital")] == [queue[0].id]

    rejected = await api.reject_recommendation(queue[1].id, "Caste certificate expired")
    assert rejected.status == "rejected"
    assert rejected.current_level == "facility"

    stats = await api.get_dashboard_stats("facility")
    assert stats.total_patients == 1
    assert stats.pending_approvals == 1
    assert stats.rejected_recommendations == 1


@pytest.mark.asyncio
async def test_login_session_is_sent_with_later_calls(api, registration):
    user = await api.login("district@schemeflow.in", "password")
    assert user.role == "district"

    patient = await api.add_patient(registration)
    assert patient.updated_by == "Meena Pillai"

    await api.logout()
    second = await api.add_patient(registration.model_copy(update={"name": "Second Patient"}))
    assert second.updated_by == "system"


@pytest.mark.asyncio
async def test_errors_carry_server_message(api):
    with pytest.raises(APIError) as exc_info:
        await api.login("nobody@example.com", "password")
    assert exc_info.value.status_code == 401
    assert exc_info.value.message == "Invalid email or password"

    with pytest.raises(APIError) as exc_info:
        await api.approve_recommendation("missing")
    assert exc_info.value.status_code == 404
    assert exc_info.value.message == "Approval not found: missing"


@pytest.mark.asyncio
async def test_blank_rejection_reason_is_refused_locally(api):
    with pytest.raises(ValueError):
        await api.reject_recommendation("any-id", "  ")


@pytest.mark.asyncio
async def test_invalid_patient_is_rejected(api):
    incomplete = PatientCreate.model_construct(
        name="R", age=30, gender="male", address="x", contact="1", medical_history="",
        disease="Fever", income=0, category="general", additional_notes=None, insurance_status=False,
    )
    with pytest.raises(APIError) as exc_info:
        await api.add_patient(incomplete)
    assert exc_info.value.status_code == 422
    assert await api.get_patients() == []
