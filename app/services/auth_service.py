# app/services/auth_service.py
"""
Registration and role-scoped login.

Login identifiers by role:
  student  → email or roll number
  hod      → email or employee ID
  security → employee ID only
No token is issued; clients resend identity fields on every call.
"""

from datetime import datetime
from typing import Optional
from sqlalchemy import or_
from sqlalchemy.orm import Session
from app.models.user import User, UserRole
from app.schemas.user import UserRegister
from app.utils.security import hash_password, verify_password
from app.utils.logger import get_logger

logger = get_logger(__name__)


def find_registration_conflict(db: Session, body: UserRegister) -> Optional[str]:
    """Return an error message if any unique field is already taken, else None."""
    if db.query(User).filter(User.email == body.email).first():
        return "Email already registered"
    if body.roll_number and db.query(User).filter(User.roll_number == body.roll_number).first():
        return "Roll number already registered"
    if body.employee_id and db.query(User).filter(User.employee_id == body.employee_id).first():
        return "Employee ID already registered"
    return None


def register_user(db: Session, body: UserRegister) -> User:
    user = User(
        name=body.name,
        email=body.email,
        password_hash=hash_password(body.password),
        role=body.role.value,
        roll_number=body.roll_number,
        employee_id=body.employee_id,
        department=body.department,
        created_at=datetime.utcnow(),
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    logger.info(f"[AUTH] Registered {user.role} id={user.id} email={user.email}")
    return user


def _lookup_for_login(db: Session, identifier: str, role: UserRole) -> Optional[User]:
    q = db.query(User).filter(User.role == role.value)
    if role == UserRole.STUDENT:
        q = q.filter(or_(User.email == identifier, User.roll_number == identifier))
    elif role == UserRole.HOD:
        q = q.filter(or_(User.email == identifier, User.employee_id == identifier))
    else:
        q = q.filter(User.employee_id == identifier)
    return q.first()


def authenticate_user(db: Session, identifier: str, password: str, role: UserRole) -> Optional[User]:
    """Returns the user if identifier + password match a user of that role, else None."""
    user = _lookup_for_login(db, identifier, role)
    if not user or not verify_password(password, user.password_hash):
        logger.warning(f"[AUTH] Failed {role.value} login for '{identifier}'")
        return None
    logger.info(f"[AUTH] {user.role} id={user.id} logged in")
    return user


def get_student(db: Session, student_id: int) -> Optional[User]:
    return db.query(User).filter(
        User.id == student_id, User.role == UserRole.STUDENT.value
    ).first()
