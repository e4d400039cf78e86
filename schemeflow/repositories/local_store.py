"""
Local key/value store backend.

Each collection lives under a single key (``patients``, ``approvals``,
``schemes``, ``user``) as a JSON-encoded string, the same way the dashboard
kept them in browser storage. Every mutation reads the whole array, changes
it and writes it back. With a directory configured each key is one
``<key>.json`` file; without one the values live in memory.
"""
import json
import logging
from pathlib import Path
from typing import Dict, List, Optional, Type, TypeVar, Union

from pydantic import BaseModel, ValidationError

from ..models.approval import ApprovalRecord
from ..models.patient import Patient
from ..models.scheme import Scheme
from .base import ApprovalRepository, PatientRepository, SchemeRepository, SessionRepository

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)

PATIENTS_KEY = "patients"
APPROVALS_KEY = "approvals"
SCHEMES_KEY = "schemes"
USER_KEY = "user"


class LocalStore:
    """String key/value storage, on disk or in memory"""

    def __init__(self, directory: Optional[Union[str, Path]] = None):
        self.directory = Path(directory) if directory else None
        self._memory: Dict[str, str] = {}
        if self.directory is not None:
            self.directory.mkdir(parents=True, exist_ok=True)

    def _path(self, key: str) -> Path:
        return self.directory / f"{key}.json"

    def get_item(self, key: str) -> Optional[str]:
        if self.directory is None:
            return self._memory.get(key)
        path = self._path(key)
        if not path.exists():
            return None
        return path.read_text(encoding="utf-8")

    def set_item(self, key: str, value: str) -> None:
        if self.directory is None:
            self._memory[key] = value
            return
        # readers never see a half-written file
        path = self._path(key)
        tmp_path = path.with_suffix(".json.tmp")
        tmp_path.write_text(value, encoding="utf-8")
        tmp_path.replace(path)

    def remove_item(self, key: str) -> None:
        if self.directory is None:
            self._memory.pop(key, None)
            return
        path = self._path(key)
        if path.exists():
            path.unlink()

    def clear(self) -> None:
        if self.directory is None:
            self._memory.clear()
            return
        for path in self.directory.glob("*.json"):
            path.unlink()

    # JSON helpers

    def load_list(self, key: str, model: Type[ModelT]) -> List[ModelT]:
        """
        Load a JSON array stored under ``key`` as a list of models.

        Corrupt JSON is logged and treated as an empty collection; entries
        that fail validation are logged and skipped.
        """
        raw = self.get_item(key)
        if not raw:
            return []

        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            logger.error(f"Failed to parse {key} from local store: {e}")
            return []

        if not isinstance(data, list):
            logger.error(f"Expected a list under '{key}', found {type(data).__name__}")
            return []

        items = []
        for index, entry in enumerate(data):
            try:
                items.append(model.model_validate(entry))
            except ValidationError as e:
                logger.error(f"Skipping invalid {key} entry #{index}: {e.error_count()} error(s)")
        return items

    def save_list(self, key: str, items: List[BaseModel]) -> None:
        payload = [item.model_dump(mode="json", by_alias=True) for item in items]
        self.set_item(key, json.dumps(payload))

    def load_object(self, key: str) -> Optional[dict]:
        raw = self.get_item(key)
        if not raw:
            return None
        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            logger.error(f"Failed to parse {key} from local store: {e}")
            return None
        return data if isinstance(data, dict) else None

    def save_object(self, key: str, value: dict) -> None:
        self.set_item(key, json.dumps(value))


class LocalSchemeRepository(SchemeRepository):

    def __init__(self, store: LocalStore):
        self.store = store

    async def list_schemes(self) -> List[Scheme]:
        return self.store.load_list(SCHEMES_KEY, Scheme)

    async def get_scheme(self, scheme_id: str) -> Optional[Scheme]:
        for scheme in await self.list_schemes():
            if scheme.id == scheme_id:
                return scheme
        return None

    async def add_scheme(self, scheme: Scheme) -> Scheme:
        schemes = await self.list_schemes()
        schemes.append(scheme)
        self.store.save_list(SCHEMES_KEY, schemes)
        return scheme

    async def delete_scheme(self, scheme_id: str) -> bool:
        schemes = await self.list_schemes()
        remaining = [s for s in schemes if s.id != scheme_id]
        if len(remaining) == len(schemes):
            return False
        self.store.save_list(SCHEMES_KEY, remaining)
        return True


class LocalPatientRepository(PatientRepository):

    def __init__(self, store: LocalStore):
        self.store = store

    async def list_patients(self) -> List[Patient]:
        return self.store.load_list(PATIENTS_KEY, Patient)

    async def get_patient(self, patient_id: str) -> Optional[Patient]:
        for patient in await self.list_patients():
            if patient.id == patient_id:
                return patient
        return None

    async def add_patient(self, patient: Patient) -> Patient:
        patients = await self.list_patients()
        patients.append(patient)
        self.store.save_list(PATIENTS_KEY, patients)
        return patient


class LocalApprovalRepository(ApprovalRepository):

    def __init__(self, store: LocalStore):
        self.store = store

    async def list_approvals(self) -> List[ApprovalRecord]:
        return self.store.load_list(APPROVALS_KEY, ApprovalRecord)

    async def get_approval(self, approval_id: str) -> Optional[ApprovalRecord]:
        for record in await self.list_approvals():
            if record.id == approval_id:
                return record
        return None

    async def add_approvals(self, records: List[ApprovalRecord]) -> None:
        if not records:
            return
        approvals = await self.list_approvals()
        approvals.extend(records)
        self.store.save_list(APPROVALS_KEY, approvals)

    async def update_approval(self, record: ApprovalRecord) -> bool:
        approvals = await self.list_approvals()
        for index, existing in enumerate(approvals):
            if existing.id == record.id:
                approvals[index] = record
                self.store.save_list(APPROVALS_KEY, approvals)
                return True
        return False


class LocalSessionRepository(SessionRepository):

    def __init__(self, store: LocalStore):
        self.store = store

    async def get_current_user(self) -> Optional[dict]:
        return self.store.load_object(USER_KEY)

    async def set_current_user(self, user: Optional[dict]) -> None:
        if user is None:
            self.store.remove_item(USER_KEY)
        else:
            self.store.save_object(USER_KEY, user)
