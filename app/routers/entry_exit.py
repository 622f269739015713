# app/routers/entry_exit.py
"""Entry/exit log endpoints for the security desk."""

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from datetime import date, datetime
from typing import Optional
from app.database import get_db
from app.schemas.entry_exit_log import LogCreate, LogEntryMark, EntryExitLogOut, LogEnvelope, DailyLogStatsOut
from app.services import entry_exit_service
from app.services.gatepass_service import TransitionError

router = APIRouter()


def _log_or_404(db: Session, pass_id: str):
    gate_pass, log = entry_exit_service.resolve_log(db, pass_id)
    if not gate_pass:
        raise HTTPException(status_code=404, detail="Gate pass not found")
    if not log:
        raise HTTPException(status_code=404, detail="Entry/exit log not found")
    return log


@router.post("/logs", response_model=EntryExitLogOut, summary="Get or open the log for a pass")
def open_log(body: LogCreate, db: Session = Depends(get_db)):
    try:
        log = entry_exit_service.find_or_create_log(db, body.pass_id)
    except TransitionError as e:
        raise HTTPException(status_code=409, detail=str(e))
    if not log:
        raise HTTPException(status_code=404, detail="Gate pass not found")
    return log


@router.get("/logs", response_model=list[EntryExitLogOut], summary="Most recent entry/exit logs")
def list_logs(db: Session = Depends(get_db)):
    return entry_exit_service.recent_logs(db)


@router.get("/logs/stats/today", response_model=DailyLogStatsOut, summary="Entries, exits and students out")
def log_stats(target_date: date = None, db: Session = Depends(get_db)):
    """Counts for `target_date` (default today, UTC). currentlyOut ignores the date."""
    return entry_exit_service.daily_counts(db, target_date or datetime.utcnow().date())


@router.patch("/logs/{pass_id}/entry", response_model=LogEnvelope, summary="Mark entry")
def mark_entry(pass_id: str, body: Optional[LogEntryMark] = None, db: Session = Depends(get_db)):
    log = _log_or_404(db, pass_id)
    try:
        log = entry_exit_service.mark_entry(db, log, body.marked_by if body else None)
    except TransitionError as e:
        raise HTTPException(status_code=409, detail=str(e))
    return LogEnvelope(message="Entry marked successfully", log=EntryExitLogOut.model_validate(log))


@router.patch("/logs/{pass_id}/exit", response_model=LogEnvelope, summary="Mark exit")
def mark_exit(pass_id: str, db: Session = Depends(get_db)):
    log = _log_or_404(db, pass_id)
    try:
        log = entry_exit_service.mark_exit(db, log)
    except TransitionError as e:
        raise HTTPException(status_code=409, detail=str(e))
    return LogEnvelope(message="Exit marked successfully", log=EntryExitLogOut.model_validate(log))
