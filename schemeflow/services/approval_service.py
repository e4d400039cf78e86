"""
Approval workflow: level progression of scheme recommendations
"""
import logging
import uuid
from datetime import date, datetime, timezone
from typing import Dict, Iterable, List, Optional

from ..exceptions import ApprovalNotFoundError, InvalidTransitionError
from ..models.approval import ApprovalEvent, ApprovalRecord
from ..models.common import ApprovalLevel, get_current_utc_time
from ..models.patient import Patient
from ..models.scheme import Scheme
from ..models.user import DashboardStats
from ..repositories.base import ApprovalRepository, PatientRepository
from ..utils.validators import validate_level

logger = logging.getLogger(__name__)


NEXT_LEVEL: Dict[str, Optional[ApprovalLevel]] = {
    "facility": "hospital",
    "hospital": "district",
    "district": "state",
    "state": None,
}

# Tier that receives a record once the given role approves it
NEXT_TIER: Dict[str, str] = {
    "facility": "hospital",
    "hospital": "district",
    "district": "state",
    "state": "super",
}


def next_level(level: str) -> Optional[ApprovalLevel]:
    """Level after ``level`` approves; None when approval there is final"""
    if not validate_level(level):
        raise InvalidTransitionError(f"Unknown approval level: {level}")
    return NEXT_LEVEL[level]


def next_tier(role: str) -> str:
    return NEXT_TIER.get(role, "approved")


def _ensure_pending(record: ApprovalRecord):
    if record.is_terminal:
        raise InvalidTransitionError(
            f"Approval {record.id} is already {record.status} at {record.current_level} level"
        )


def apply_approval(
    record: ApprovalRecord,
    comments: Optional[str] = None,
    actor: Optional[str] = None
) -> ApprovalRecord:
    """
    Approve a record at its current level.

    Below the state level the record moves up one tier and stays pending.
    At the state level the status becomes approved and the level stays put.

    Returns:
        A new record; the input is not modified

    Raises:
        InvalidTransitionError: if the record is already approved or rejected
    """
    _ensure_pending(record)

    now = get_current_utc_time()
    event = ApprovalEvent(
        action="approved",
        level=record.current_level,
        comment=comments,
        actor=actor,
        at=now
    )
    update = {
        "history": [*record.history, event],
        "updated_at": now,
    }

    target = next_level(record.current_level)
    if target is None:
        update["status"] = "approved"
    else:
        update["current_level"] = target

    return record.model_copy(update=update)


def apply_rejection(
    record: ApprovalRecord,
    reason: str,
    actor: Optional[str] = None
) -> ApprovalRecord:
    """
    Reject a record; the level is frozen where the rejection happened.

    Raises:
        InvalidTransitionError: if the reason is blank or the record is terminal
    """
    if not reason or not reason.strip():
        raise InvalidTransitionError("Rejection reason is required")
    _ensure_pending(record)

    now = get_current_utc_time()
    event = ApprovalEvent(
        action="rejected",
        level=record.current_level,
        comment=reason.strip(),
        actor=actor,
        at=now
    )
    return record.model_copy(update={
        "status": "rejected",
        "rejection_reason": reason.strip(),
        "history": [*record.history, event],
        "updated_at": now,
    })


class ApprovalService:
    """Owns approval records and their persistence"""

    def __init__(self, approvals: ApprovalRepository, patients: PatientRepository):
        self.approvals = approvals
        self.patients = patients

    async def create_approval_records(
        self,
        patient: Patient,
        recommended_schemes: Iterable[Scheme],
        facility_name: str
    ) -> List[ApprovalRecord]:
        """
        Open one facility-level record per recommended scheme.

        Every record is written in a single repository call. Schemes that
        already have a record for this patient are skipped, so calling this
        again after a partial failure does not duplicate anything.

        Returns:
            The records created by this call
        """
        existing = {
            (record.patient_id, record.scheme_id)
            for record in await self.approvals.list_approvals()
            if record.patient_id == patient.id
        }

        today = get_current_utc_time().date().isoformat()
        records = []
        for scheme in recommended_schemes:
            if (patient.id, scheme.id) in existing:
                continue
            existing.add((patient.id, scheme.id))
            records.append(ApprovalRecord(
                id=str(uuid.uuid4()),
                patient_id=patient.id,
                scheme_id=scheme.id,
                patient_name=patient.name,
                scheme_name=scheme.name,
                disease=patient.disease or "Not specified",
                facility_name=facility_name,
                date=today,
                status="pending",
                current_level="facility",
                notes=scheme.description or ""
            ))

        await self.approvals.add_approvals(records)
        logger.info(f"Created {len(records)} approval record(s) for patient {patient.id}")
        return records

    async def list_by_level(self, level: str) -> List[ApprovalRecord]:
        """Every record whose current level is ``level``, terminal ones included"""
        return [
            record for record in await self.approvals.list_approvals()
            if record.current_level == level
        ]

    async def list_pending_by_level(self, level: str) -> List[ApprovalRecord]:
        """Records waiting for ``level`` to act"""
        return [
            record for record in await self.list_by_level(level)
            if record.status == "pending"
        ]

    async def list_for_role(self, role: str) -> List[ApprovalRecord]:
        """Queue shown on a role's dashboard"""
        if role == "super":
            return [
                record for record in await self.approvals.list_approvals()
                if record.status == "approved"
            ]
        return await self.list_pending_by_level(role)

    async def get_approval(self, approval_id: str) -> ApprovalRecord:
        record = await self.approvals.get_approval(approval_id)
        if record is None:
            raise ApprovalNotFoundError(approval_id)
        return record

    async def approve(
        self,
        approval_id: str,
        comments: Optional[str] = None,
        actor: Optional[str] = None
    ) -> ApprovalRecord:
        """
        Approve a record and persist the result

        Raises:
            ApprovalNotFoundError: no record has this id; nothing is written
            InvalidTransitionError: the record is already terminal
        """
        record = await self.get_approval(approval_id)
        updated = apply_approval(record, comments=comments, actor=actor)
        await self._save(updated)

        if updated.status == "approved":
            logger.info(f"Approval {approval_id} fully approved at state level")
        else:
            logger.info(
                f"Approval {approval_id} approved at {record.current_level}, "
                f"forwarded to {next_tier(record.current_level)}"
            )
        return updated

    async def reject(
        self,
        approval_id: str,
        reason: str,
        actor: Optional[str] = None
    ) -> ApprovalRecord:
        """
        Reject a record and persist the result

        Raises:
            ApprovalNotFoundError: no record has this id; nothing is written
            InvalidTransitionError: blank reason or record already terminal
        """
        record = await self.get_approval(approval_id)
        updated = apply_rejection(record, reason, actor=actor)
        await self._save(updated)
        logger.info(f"Approval {approval_id} rejected at {updated.current_level} level")
        return updated

    async def compute_dashboard_stats(self, role: str, today: Optional[date] = None) -> DashboardStats:
        """
        Aggregate dashboard counters for a role

        Args:
            role: Dashboard role; its pending queue is counted
            today: Calendar day for "registered today" (defaults to the current UTC date)
        """
        today = today or get_current_utc_time().date()
        patients = await self.patients.list_patients()
        approvals = await self.approvals.list_approvals()

        return DashboardStats(
            total_patients=len(patients),
            registered_today=sum(1 for p in patients if _utc_date(p.created_at) == today),
            pending_approvals=sum(
                1 for a in approvals if a.current_level == role and a.status == "pending"
            ),
            patient_followups=len(patients) // 3,
            total_recommendations=len(approvals),
            approved_recommendations=sum(1 for a in approvals if a.status == "approved"),
            rejected_recommendations=sum(1 for a in approvals if a.status == "rejected"),
        )

    async def _save(self, record: ApprovalRecord):
        if not await self.approvals.update_approval(record):
            # removed between read and write
            raise ApprovalNotFoundError(record.id)


def _utc_date(value: datetime) -> date:
    if value.tzinfo is None:
        return value.date()
    return value.astimezone(timezone.utc).date()
