"""
Verify that all modules import and the OpenAPI schema builds
"""
import importlib

import pytest

MODULES = [
    "schemeflow.config",
    "schemeflow.exceptions",
    "schemeflow.models",
    "schemeflow.repositories",
    "schemeflow.repositories.mongo",
    "schemeflow.services",
    "schemeflow.routes",
    "schemeflow.database",
    "schemeflow.api_client",
    "schemeflow.main",
]


@pytest.mark.parametrize("module", MODULES)
def test_module_imports(module):
    importlib.import_module(module)


def test_openapi_schema_generation():
    from schemeflow.main import app

    schema = app.openapi()
    paths = schema["paths"]

    assert "/api/patients" in paths
    assert "/api/approvals/{approval_id}/approve" in paths
    assert "/api/approvals/{approval_id}/reject" in paths
    assert "/api/stats/dashboard" in paths
    assert "/api/eligibility/check" in paths


def test_mongo_document_mapping():
    from schemeflow.repositories.mongo import _from_doc, _to_doc
    from conftest import make_record

    record = make_record()
    doc = _to_doc(record)

    assert doc["_id"] == record.id
    assert doc["patientId"] == "p-1"
    assert "_id" not in _from_doc(doc)
