# app/schemas/entry_exit_log.py
from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel
from datetime import datetime
from typing import Optional


class LogCreate(BaseModel):
    pass_id: str = Field(..., min_length=1)

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        str_strip_whitespace = True


class LogEntryMark(BaseModel):
    marked_by: Optional[str] = None

    class Config:
        alias_generator = to_camel
        populate_by_name = True


class EntryExitLogOut(BaseModel):
    id: int
    log_id: str
    gate_pass_id: int
    pass_id: str
    student_id: int
    student_name: str
    roll_number: str
    department: str
    entry_time: Optional[datetime] = None
    exit_time: Optional[datetime] = None
    marked_by: Optional[str] = None
    status: str                      # awaiting-entry | in-transit | completed
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True
        alias_generator = to_camel
        populate_by_name = True


class LogEnvelope(BaseModel):
    message: str
    log: EntryExitLogOut


class DailyLogStatsOut(BaseModel):
    date: str
    entries: int
    exits: int
    currently_out: int

    class Config:
        alias_generator = to_camel
        populate_by_name = True
