# app/services/entry_exit_service.py
"""
Entry/exit logging at the security desk.

How it works:
  - Security searches a pass → POST /logs finds-or-creates the log for it
  - "Mark entry" stamps entry_time + marked_by  (awaiting-entry → in-transit)
  - "Mark exit" stamps exit_time               (in-transit → completed)
  - Logs are keyed on the gate pass row, resolved from the human pass ID first

Without STRICT_TRANSITIONS none of the ordering is enforced: exit can be
marked before entry and either stamp can be overwritten.
"""

from datetime import date, datetime, time, timedelta
from typing import Optional
from sqlalchemy import func
from sqlalchemy.orm import Session
from app.models.entry_exit_log import EntryExitLog
from app.models.gate_pass import GatePass, PassStatus
from app.services.gatepass_service import TransitionError, get_gate_pass
from app.services.identifier_service import generate_log_id
from app.config import settings
from app.utils.logger import get_logger

logger = get_logger(__name__)


def get_log_for_pass(db: Session, gate_pass: GatePass) -> Optional[EntryExitLog]:
    return db.query(EntryExitLog).filter(EntryExitLog.gate_pass_id == gate_pass.id).first()


def find_or_create_log(db: Session, pass_id: str) -> Optional[EntryExitLog]:
    """Returns the pass's log, creating it on first call. None if the pass ID is unknown."""
    gate_pass = get_gate_pass(db, pass_id)
    if not gate_pass:
        return None

    log = get_log_for_pass(db, gate_pass)
    if log:
        return log

    if gate_pass.status != PassStatus.APPROVED.value and settings.STRICT_TRANSITIONS:
        raise TransitionError(f"Gate pass {pass_id} is {gate_pass.status}, not approved")

    now = datetime.utcnow()
    log = EntryExitLog(
        log_id=generate_log_id(db),
        gate_pass_id=gate_pass.id,
        pass_id=gate_pass.pass_id,
        student_id=gate_pass.student_id,
        student_name=gate_pass.student_name,
        roll_number=gate_pass.roll_number,
        department=gate_pass.department,
        created_at=now,
        updated_at=now,
    )
    db.add(log)
    db.commit()
    db.refresh(log)
    logger.info(f"[LOG] {log.log_id} opened for {pass_id} (status={gate_pass.status})")
    return log


def resolve_log(db: Session, pass_id: str):
    """(gate_pass, log) for a pass ID; either may be None."""
    gate_pass = get_gate_pass(db, pass_id)
    if not gate_pass:
        return None, None
    return gate_pass, get_log_for_pass(db, gate_pass)


def mark_entry(db: Session, log: EntryExitLog, marked_by: Optional[str]) -> EntryExitLog:
    if log.entry_time is not None and settings.STRICT_TRANSITIONS:
        raise TransitionError(f"Entry already marked for {log.pass_id}")

    now = datetime.utcnow()
    log.entry_time = now
    log.marked_by = marked_by
    log.updated_at = now
    db.commit()
    db.refresh(log)
    logger.info(f"[LOG] {log.log_id} entry marked by {marked_by} for roll={log.roll_number}")
    return log


def mark_exit(db: Session, log: EntryExitLog) -> EntryExitLog:
    if settings.STRICT_TRANSITIONS:
        if log.entry_time is None:
            raise TransitionError(f"Entry not yet marked for {log.pass_id}")
        if log.exit_time is not None:
            raise TransitionError(f"Exit already marked for {log.pass_id}")
    elif log.entry_time is None:
        logger.warning(f"[LOG] {log.log_id} exit marked before entry")

    now = datetime.utcnow()
    log.exit_time = now
    log.updated_at = now
    db.commit()
    db.refresh(log)
    logger.info(f"[LOG] {log.log_id} exit marked for roll={log.roll_number}")
    return log


def recent_logs(db: Session, limit: Optional[int] = None) -> list[EntryExitLog]:
    return (
        db.query(EntryExitLog)
        .order_by(EntryExitLog.created_at.desc(), EntryExitLog.id.desc())
        .limit(limit or settings.RECENT_LOGS_LIMIT)
        .all()
    )


def daily_counts(db: Session, day: date) -> dict:
    """Entries and exits stamped on `day`, plus everyone currently out."""
    start = datetime.combine(day, time.min)
    end = start + timedelta(days=1)
    entries = db.query(func.count(EntryExitLog.id)).filter(
        EntryExitLog.entry_time >= start, EntryExitLog.entry_time < end,
    ).scalar()
    exits = db.query(func.count(EntryExitLog.id)).filter(
        EntryExitLog.exit_time >= start, EntryExitLog.exit_time < end,
    ).scalar()
    currently_out = db.query(func.count(EntryExitLog.id)).filter(
        EntryExitLog.entry_time != None,  # noqa: E711
        EntryExitLog.exit_time == None,   # noqa: E711
    ).scalar()
    return {"date": str(day), "entries": entries, "exits": exits, "currently_out": currently_out}
