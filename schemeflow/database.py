import logging
from typing import Optional

from schemeflow.config import settings
from schemeflow.repositories.base import (
    ApprovalRepository,
    PatientRepository,
    SchemeRepository,
    SessionRepository,
)
from schemeflow.repositories.local_store import (
    LocalApprovalRepository,
    LocalPatientRepository,
    LocalSchemeRepository,
    LocalSessionRepository,
    LocalStore,
)

logger = logging.getLogger(__name__)


class Storage:
    backend: Optional[str] = None
    patients: Optional[PatientRepository] = None
    approvals: Optional[ApprovalRepository] = None
    schemes: Optional[SchemeRepository] = None
    session: Optional[SessionRepository] = None


db = Storage()


def use_local_store(store: LocalStore):
    """Wire every repository to a local key/value store"""
    db.backend = "local"
    db.patients = LocalPatientRepository(store)
    db.approvals = LocalApprovalRepository(store)
    db.schemes = LocalSchemeRepository(store)
    db.session = LocalSessionRepository(store)


async def connect_to_storage():
    """Create repositories for the configured backend"""
    backend = settings.get_storage_backend()
    if backend == "mongo":
        from schemeflow.repositories.mongo import (
            MongoApprovalRepository,
            MongoPatientRepository,
            MongoSchemeRepository,
            MongoSessionRepository,
            mongo_service,
        )
        await mongo_service.connect()
        db.backend = "mongo"
        db.patients = MongoPatientRepository(mongo_service.db)
        db.approvals = MongoApprovalRepository(mongo_service.db)
        db.schemes = MongoSchemeRepository(mongo_service.db)
        db.session = MongoSessionRepository(mongo_service.db)
    else:
        use_local_store(LocalStore(settings.local_store_dir or None))
    logger.info(f"Storage backend ready: {db.backend}")


async def close_storage_connection():
    """Close database connection"""
    if db.backend == "mongo":
        from schemeflow.repositories.mongo import mongo_service
        await mongo_service.close()


async def check_storage_health() -> bool:
    """Ping the database; the local store is always reachable"""
    if db.backend == "mongo":
        from schemeflow.repositories.mongo import mongo_service
        return await mongo_service.health_check()
    return db.backend is not None


def get_storage() -> Storage:
    return db
