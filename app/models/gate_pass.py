# app/models/gate_pass.py
"""
Gate passes table, one row per student exit request.
Student name/roll/department are copied from users at creation and never refreshed.
Status moves pending → approved | rejected through the HOD endpoints.
"""

import enum

from sqlalchemy import Column, Integer, String, DateTime, Date, Text, ForeignKey
from app.database import Base


class PassStatus(str, enum.Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class GatePass(Base):
    __tablename__ = "gate_passes"

    id = Column(Integer, primary_key=True, autoincrement=True)
    pass_id = Column(String(20), unique=True, nullable=False, index=True)   # GP-YYYYMMDD-NNNN
    student_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    student_name = Column(String(200), nullable=False)
    roll_number = Column(String(50), nullable=False, index=True)
    department = Column(String(100), nullable=False, index=True)
    reason = Column(Text, nullable=False)
    destination = Column(String(255), nullable=False)
    date_of_exit = Column(Date, nullable=False)
    return_time = Column(String(20), nullable=False)
    status = Column(String(20), nullable=False, default=PassStatus.PENDING.value, index=True)
    hod_remarks = Column(Text)
    approved_by = Column(String(200))
    approved_date = Column(DateTime)
    submitted_date = Column(DateTime, nullable=False, index=True)
    created_at = Column(DateTime)
    updated_at = Column(DateTime)

    def __repr__(self):
        return f"<GatePass {self.pass_id} roll={self.roll_number} status={self.status}>"
