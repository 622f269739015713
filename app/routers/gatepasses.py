# app/routers/gatepasses.py
"""Gate pass requests (students) and approvals (HODs)."""

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from app.database import get_db
from app.schemas.gate_pass import GatePassCreate, GatePassDecision, GatePassOut, GatePassEnvelope, PassStatsOut
from app.services import gatepass_service
from app.services.auth_service import get_student
from app.services.gatepass_service import TransitionError

router = APIRouter()


@router.post("/gatepasses", response_model=GatePassEnvelope, status_code=status.HTTP_201_CREATED,
             summary="Submit a gate pass request")
def create_gate_pass(body: GatePassCreate, db: Session = Depends(get_db)):
    student = get_student(db, body.student_id)
    if not student:
        raise HTTPException(status_code=404, detail="Student not found")
    gate_pass = gatepass_service.create_gate_pass(db, student, body)
    return GatePassEnvelope(message="Gate pass created successfully",
                            gate_pass=GatePassOut.model_validate(gate_pass))


@router.get("/gatepasses/student/{student_id}", response_model=list[GatePassOut],
            summary="A student's passes, newest first")
def list_student_passes(student_id: int, db: Session = Depends(get_db)):
    return gatepass_service.list_for_student(db, student_id)


@router.get("/gatepasses/student/{student_id}/stats", response_model=PassStatsOut,
            summary="Pass counts by status for a student")
def student_pass_stats(student_id: int, db: Session = Depends(get_db)):
    return gatepass_service.stats_for_student(db, student_id)


@router.get("/gatepasses/department/{department}", response_model=list[GatePassOut],
            summary="A department's passes, newest first")
def list_department_passes(department: str, db: Session = Depends(get_db)):
    return gatepass_service.list_for_department(db, department)


@router.get("/gatepasses/department/{department}/stats", response_model=PassStatsOut,
            summary="Pass counts by status for a department")
def department_pass_stats(department: str, db: Session = Depends(get_db)):
    return gatepass_service.stats_for_department(db, department)


@router.get("/gatepasses/{pass_id}", response_model=GatePassOut, summary="Get one pass by pass ID")
def get_gate_pass(pass_id: str, db: Session = Depends(get_db)):
    gate_pass = gatepass_service.get_gate_pass(db, pass_id)
    if not gate_pass:
        raise HTTPException(status_code=404, detail="Gate pass not found")
    return gate_pass


@router.patch("/gatepasses/{pass_id}/approve", response_model=GatePassEnvelope, summary="HOD: approve a pass")
def approve_gate_pass(pass_id: str, body: GatePassDecision, db: Session = Depends(get_db)):
    try:
        gate_pass = gatepass_service.approve_gate_pass(db, pass_id, body.approved_by, body.hod_remarks)
    except TransitionError as e:
        raise HTTPException(status_code=409, detail=str(e))
    if not gate_pass:
        raise HTTPException(status_code=404, detail="Gate pass not found")
    return GatePassEnvelope(message="Gate pass approved", gate_pass=GatePassOut.model_validate(gate_pass))


@router.patch("/gatepasses/{pass_id}/reject", response_model=GatePassEnvelope, summary="HOD: reject a pass")
def reject_gate_pass(pass_id: str, body: GatePassDecision, db: Session = Depends(get_db)):
    try:
        gate_pass = gatepass_service.reject_gate_pass(db, pass_id, body.approved_by, body.hod_remarks)
    except TransitionError as e:
        raise HTTPException(status_code=409, detail=str(e))
    if not gate_pass:
        raise HTTPException(status_code=404, detail="Gate pass not found")
    return GatePassEnvelope(message="Gate pass rejected", gate_pass=GatePassOut.model_validate(gate_pass))
