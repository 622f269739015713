# app/services/gatepass_service.py
"""
Gate pass ledger: creation, listing, HOD decisions and the security search.

State machine:
  pending → approved  (approve)
  pending → rejected  (reject)
Approve/reject on a decided pass is not guarded unless STRICT_TRANSITIONS is
on; by default the decision fields are simply overwritten again.
"""

from datetime import date, datetime, time, timedelta
from typing import Optional
from sqlalchemy import func, or_
from sqlalchemy.orm import Session
from app.models.gate_pass import GatePass, PassStatus
from app.models.user import User
from app.schemas.gate_pass import GatePassCreate
from app.services.identifier_service import generate_pass_id
from app.config import settings
from app.utils.logger import get_logger

logger = get_logger(__name__)

DEFAULT_APPROVAL_REMARKS = "Approved"


class TransitionError(Exception):
    """Raised in strict mode when an action is not allowed from the current state."""


def create_gate_pass(db: Session, student: User, body: GatePassCreate) -> GatePass:
    now = datetime.utcnow()
    gate_pass = GatePass(
        pass_id=generate_pass_id(db, now),
        student_id=student.id,
        student_name=student.name,
        roll_number=student.roll_number,
        department=student.department,
        reason=body.reason,
        destination=body.destination,
        date_of_exit=body.date_of_exit,
        return_time=body.return_time,
        status=PassStatus.PENDING.value,
        submitted_date=now,
        created_at=now,
        updated_at=now,
    )
    db.add(gate_pass)
    db.commit()
    db.refresh(gate_pass)
    logger.info(f"[PASS] {gate_pass.pass_id} requested by roll={gate_pass.roll_number} → {gate_pass.destination}")
    return gate_pass


def get_gate_pass(db: Session, pass_id: str) -> Optional[GatePass]:
    return db.query(GatePass).filter(GatePass.pass_id == pass_id).first()


def list_for_student(db: Session, student_id: int) -> list[GatePass]:
    return (
        db.query(GatePass)
        .filter(GatePass.student_id == student_id)
        .order_by(GatePass.submitted_date.desc(), GatePass.id.desc())
        .all()
    )


def list_for_department(db: Session, department: str) -> list[GatePass]:
    return (
        db.query(GatePass)
        .filter(GatePass.department == department)
        .order_by(GatePass.submitted_date.desc(), GatePass.id.desc())
        .all()
    )


def _count_by_status(q, day: date) -> dict:
    counts = {status.value: 0 for status in PassStatus}
    for status, n in q.with_entities(GatePass.status, func.count(GatePass.id)).group_by(GatePass.status):
        counts[status] = n
    counts["total"] = sum(counts.values())
    # approve and reject both stamp approved_date
    start = datetime.combine(day, time.min)
    counts["decided_today"] = q.filter(
        GatePass.approved_date >= start, GatePass.approved_date < start + timedelta(days=1),
    ).count()
    return counts


def stats_for_student(db: Session, student_id: int, day: Optional[date] = None) -> dict:
    return _count_by_status(db.query(GatePass).filter(GatePass.student_id == student_id),
                            day or datetime.utcnow().date())


def stats_for_department(db: Session, department: str, day: Optional[date] = None) -> dict:
    """Counts by status plus passes approved or rejected on `day` (default today, UTC)."""
    return _count_by_status(db.query(GatePass).filter(GatePass.department == department),
                            day or datetime.utcnow().date())


def _decide(db: Session, pass_id: str, status: PassStatus, approved_by: str,
            remarks: Optional[str]) -> Optional[GatePass]:
    gate_pass = get_gate_pass(db, pass_id)
    if not gate_pass:
        return None

    if gate_pass.status != PassStatus.PENDING.value:
        if settings.STRICT_TRANSITIONS:
            raise TransitionError(f"Gate pass {pass_id} is already {gate_pass.status}")
        logger.warning(f"[PASS] {pass_id} re-decided: {gate_pass.status} → {status.value} by {approved_by}")

    now = datetime.utcnow()
    gate_pass.status = status.value
    gate_pass.approved_by = approved_by
    gate_pass.approved_date = now
    gate_pass.hod_remarks = remarks
    gate_pass.updated_at = now
    db.commit()
    db.refresh(gate_pass)
    logger.info(f"[PASS] {pass_id} {status.value} by {approved_by}")
    return gate_pass


def approve_gate_pass(db: Session, pass_id: str, approved_by: str,
                      remarks: Optional[str] = None) -> Optional[GatePass]:
    """Mark a pass approved. Returns None if the pass ID is unknown."""
    return _decide(db, pass_id, PassStatus.APPROVED, approved_by, remarks or DEFAULT_APPROVAL_REMARKS)


def reject_gate_pass(db: Session, pass_id: str, approved_by: str,
                     remarks: Optional[str] = None) -> Optional[GatePass]:
    """Mark a pass rejected. Returns None if the pass ID is unknown."""
    return _decide(db, pass_id, PassStatus.REJECTED, approved_by, remarks)


def search_approved(db: Session, query: str) -> Optional[GatePass]:
    """
    Most recent approved pass whose pass ID or roll number equals the query exactly.
    Pending and rejected passes are never returned.
    """
    return (
        db.query(GatePass)
        .filter(
            or_(GatePass.pass_id == query, GatePass.roll_number == query),
            GatePass.status == PassStatus.APPROVED.value,
        )
        .order_by(GatePass.submitted_date.desc(), GatePass.id.desc())
        .first()
    )
