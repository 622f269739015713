# app/services/identifier_service.py
"""
Human-readable identifiers for gate passes and entry/exit logs.

  Pass ID: GP-YYYYMMDD-NNNN  (NNNN = passes already issued that day + 1)
  Log ID:  LOGNNNN           (NNNN = logs already created + 1)

The pass-ID day is taken in PASS_ID_TIMEZONE (UTC unless configured).

Both are count-then-format: two concurrent creations can compute the same
number. The loser hits the unique constraint on insert and gets a 400.
"""

from datetime import datetime, timezone
from typing import Optional
from zoneinfo import ZoneInfo
from sqlalchemy import func
from sqlalchemy.orm import Session
from app.models.gate_pass import GatePass
from app.models.entry_exit_log import EntryExitLog
from app.config import settings

PASS_ID_PREFIX = "GP"
LOG_ID_PREFIX = "LOG"
SEQUENCE_WIDTH = 4


def pass_id_day_prefix(day: datetime) -> str:
    return f"{PASS_ID_PREFIX}-{day.strftime('%Y%m%d')}"


def format_pass_id(day: datetime, sequence: int) -> str:
    return f"{pass_id_day_prefix(day)}-{str(sequence).zfill(SEQUENCE_WIDTH)}"


def format_log_id(sequence: int) -> str:
    return f"{LOG_ID_PREFIX}{str(sequence).zfill(SEQUENCE_WIDTH)}"


def local_day(now: datetime) -> datetime:
    """Shift a naive UTC timestamp into PASS_ID_TIMEZONE, where the pass-number day rolls over."""
    return now.replace(tzinfo=timezone.utc).astimezone(ZoneInfo(settings.PASS_ID_TIMEZONE))


def generate_pass_id(db: Session, now: Optional[datetime] = None) -> str:
    day = local_day(now or datetime.utcnow())
    issued_today = db.query(func.count(GatePass.id)).filter(
        GatePass.pass_id.like(f"{pass_id_day_prefix(day)}%")
    ).scalar() or 0
    return format_pass_id(day, issued_today + 1)


def generate_log_id(db: Session) -> str:
    total = db.query(func.count(EntryExitLog.id)).scalar() or 0
    return format_log_id(total + 1)
