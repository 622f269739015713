# app/schemas/gate_pass.py
from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel
from datetime import date, datetime
from typing import Optional


class GatePassCreate(BaseModel):
    student_id: int
    reason: str = Field(..., min_length=1)
    destination: str = Field(..., min_length=1)
    date_of_exit: date
    return_time: str = Field(..., min_length=1)   # e.g. "18:30"

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        str_strip_whitespace = True


class GatePassDecision(BaseModel):
    """Body for approve / reject. Remarks default to "Approved" on approve only."""
    approved_by: str = Field(..., min_length=1)
    hod_remarks: Optional[str] = None

    class Config:
        alias_generator = to_camel
        populate_by_name = True


class GatePassOut(BaseModel):
    id: int
    pass_id: str
    student_id: int
    student_name: str
    roll_number: str
    department: str
    reason: str
    destination: str
    date_of_exit: date
    return_time: str
    status: str
    hod_remarks: Optional[str] = None
    approved_by: Optional[str] = None
    approved_date: Optional[datetime] = None
    submitted_date: datetime
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True
        alias_generator = to_camel
        populate_by_name = True


class GatePassEnvelope(BaseModel):
    message: str
    gate_pass: GatePassOut

    class Config:
        alias_generator = to_camel
        populate_by_name = True


class PassStatsOut(BaseModel):
    total: int
    pending: int
    approved: int
    rejected: int
    decided_today: int     # approved or rejected today

    class Config:
        alias_generator = to_camel
        populate_by_name = True
