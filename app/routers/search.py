# app/routers/search.py
"""Security desk lookup by pass ID or roll number."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import Optional
from app.database import get_db
from app.schemas.gate_pass import GatePassOut
from app.services.gatepass_service import search_approved

router = APIRouter()


@router.get("/search/{query}", response_model=Optional[GatePassOut], summary="Find an approved pass")
def search_gate_pass(query: str, db: Session = Depends(get_db)):
    """Exact match on pass ID or roll number. Returns null when no approved pass matches."""
    return search_approved(db, query)
