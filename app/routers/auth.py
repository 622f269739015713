# app/routers/auth.py
"""Registration and login for students, HODs and security staff."""

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from app.database import get_db
from app.schemas.user import UserRegister, UserLogin, RegisterResponse, LoginResponse, UserBrief, UserOut
from app.services import auth_service

router = APIRouter()


@router.post("/auth/register", response_model=RegisterResponse, status_code=status.HTTP_201_CREATED,
             summary="Register a student, HOD or security account")
def register(body: UserRegister, db: Session = Depends(get_db)):
    conflict = auth_service.find_registration_conflict(db, body)
    if conflict:
        raise HTTPException(status_code=400, detail=conflict)
    user = auth_service.register_user(db, body)
    return RegisterResponse(message="User registered successfully", user=UserBrief.model_validate(user))


@router.post("/auth/login", response_model=LoginResponse, summary="Log in with a role-specific identifier")
def login(body: UserLogin, db: Session = Depends(get_db)):
    """
    `email` carries the identifier: email or roll number (student),
    email or employee ID (hod), employee ID (security).
    """
    user = auth_service.authenticate_user(db, body.email, body.password, body.role)
    if not user:
        raise HTTPException(status_code=401, detail="Invalid credentials")
    return LoginResponse(message="Login successful", user=UserOut.model_validate(user))
