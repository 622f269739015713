# app/models/entry_exit_log.py
"""
Entry/exit log table, one row per approved gate pass.
Created on the first security lookup; entry_time then exit_time are stamped
by the security desk.
"""

import enum

from sqlalchemy import Column, Integer, String, DateTime, ForeignKey
from app.database import Base


class LogStatus(str, enum.Enum):
    AWAITING_ENTRY = "awaiting-entry"
    IN_TRANSIT = "in-transit"
    COMPLETED = "completed"


class EntryExitLog(Base):
    __tablename__ = "entry_exit_logs"

    id = Column(Integer, primary_key=True, autoincrement=True)
    log_id = Column(String(20), unique=True, nullable=False, index=True)    # LOG0001
    gate_pass_id = Column(Integer, ForeignKey("gate_passes.id"), nullable=False, index=True)
    pass_id = Column(String(20), nullable=False)          # human pass ID, for display
    student_id = Column(Integer, ForeignKey("users.id"), nullable=False)
    student_name = Column(String(200), nullable=False)
    roll_number = Column(String(50), nullable=False)
    department = Column(String(100), nullable=False)
    entry_time = Column(DateTime)
    exit_time = Column(DateTime)
    marked_by = Column(String(200))
    created_at = Column(DateTime, index=True)
    updated_at = Column(DateTime)

    @property
    def status(self) -> str:
        if self.exit_time is not None:
            return LogStatus.COMPLETED.value
        if self.entry_time is not None:
            return LogStatus.IN_TRANSIT.value
        return LogStatus.AWAITING_ENTRY.value

    def __repr__(self):
        return f"<EntryExitLog {self.log_id} pass={self.pass_id} status={self.status}>"
