"""
MongoDB backend for the repositories
"""
import logging
from typing import List, Optional

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase
from pymongo import ReturnDocument

from ..config import settings
from ..models.approval import ApprovalRecord
from ..models.patient import Patient
from ..models.scheme import Scheme
from .base import ApprovalRepository, PatientRepository, SchemeRepository, SessionRepository

logger = logging.getLogger(__name__)


def _to_doc(model) -> dict:
    doc = model.to_document()
    doc["_id"] = doc["id"]
    return doc


def _from_doc(doc: dict) -> dict:
    doc = dict(doc)
    doc.pop("_id", None)
    return doc


class MongoService:
    """Owns the motor client and database handle"""

    def __init__(self):
        self.client: Optional[AsyncIOMotorClient] = None
        self.db: Optional[AsyncIOMotorDatabase] = None

    async def connect(self, url: Optional[str] = None, db_name: Optional[str] = None):
        """Connect to MongoDB"""
        try:
            self.client = AsyncIOMotorClient(url or settings.mongodb_url)
            self.db = self.client[db_name or settings.mongodb_db_name]

            # Test connection
            await self.client.admin.command('ping')
            logger.info("Connected to MongoDB successfully")

        except Exception as e:
            logger.error(f"Failed to connect to MongoDB: {e}")
            raise

    async def close(self):
        """Close MongoDB connection"""
        if self.client:
            self.client.close()
            logger.info("MongoDB connection closed")

    async def health_check(self) -> bool:
        """Check MongoDB connection health"""
        try:
            await self.client.admin.command('ping')
            return True
        except Exception:
            return False


class MongoSchemeRepository(SchemeRepository):

    def __init__(self, db: AsyncIOMotorDatabase):
        self.collection = db.schemes
        self.counters = db.counters

    async def list_schemes(self) -> List[Scheme]:
        schemes = []
        async for doc in self.collection.find().sort("_order", 1):
            schemes.append(Scheme.model_validate(_from_doc(doc)))
        return schemes

    async def get_scheme(self, scheme_id: str) -> Optional[Scheme]:
        doc = await self.collection.find_one({"_id": scheme_id})
        if doc:
            return Scheme.model_validate(_from_doc(doc))
        return None

    async def add_scheme(self, scheme: Scheme) -> Scheme:
        doc = _to_doc(scheme)
        # catalog order is insertion order; _order only ever increases
        doc["_order"] = await self._next_order()
        await self.collection.insert_one(doc)
        logger.info(f"Scheme stored: {scheme.id}")
        return scheme

    async def delete_scheme(self, scheme_id: str) -> bool:
        result = await self.collection.delete_one({"_id": scheme_id})
        return result.deleted_count > 0

    async def _next_order(self) -> int:
        counter = await self.counters.find_one_and_update(
            {"_id": "schemes"},
            {"$inc": {"seq": 1}},
            upsert=True,
            return_document=ReturnDocument.AFTER
        )
        return counter["seq"]


class MongoPatientRepository(PatientRepository):

    def __init__(self, db: AsyncIOMotorDatabase):
        self.collection = db.patients

    async def list_patients(self) -> List[Patient]:
        patients = []
        async for doc in self.collection.find().sort("createdAt", 1):
            patients.append(Patient.model_validate(_from_doc(doc)))
        return patients

    async def get_patient(self, patient_id: str) -> Optional[Patient]:
        doc = await self.collection.find_one({"_id": patient_id})
        if doc:
            return Patient.model_validate(_from_doc(doc))
        return None

    async def add_patient(self, patient: Patient) -> Patient:
        await self.collection.insert_one(_to_doc(patient))
        return patient


class MongoApprovalRepository(ApprovalRepository):

    def __init__(self, db: AsyncIOMotorDatabase):
        self.collection = db.approvals

    async def list_approvals(self) -> List[ApprovalRecord]:
        records = []
        async for doc in self.collection.find():
            records.append(ApprovalRecord.model_validate(_from_doc(doc)))
        return records

    async def get_approval(self, approval_id: str) -> Optional[ApprovalRecord]:
        doc = await self.collection.find_one({"_id": approval_id})
        if doc:
            return ApprovalRecord.model_validate(_from_doc(doc))
        return None

    async def add_approvals(self, records: List[ApprovalRecord]) -> None:
        if not records:
            return
        await self.collection.insert_many([_to_doc(r) for r in records], ordered=True)

    async def update_approval(self, record: ApprovalRecord) -> bool:
        result = await self.collection.replace_one({"_id": record.id}, _to_doc(record))
        return result.matched_count > 0


class MongoSessionRepository(SessionRepository):

    def __init__(self, db: AsyncIOMotorDatabase):
        self.collection = db.session

    async def get_current_user(self) -> Optional[dict]:
        doc = await self.collection.find_one({"_id": "current"})
        if doc:
            return doc.get("user")
        return None

    async def set_current_user(self, user: Optional[dict]) -> None:
        if user is None:
            await self.collection.delete_one({"_id": "current"})
        else:
            await self.collection.replace_one({"_id": "current"}, {"_id": "current", "user": user}, upsert=True)


# Global MongoDB service instance
mongo_service = MongoService()
