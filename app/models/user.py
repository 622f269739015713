# app/models/user.py
"""
Users table: students, HODs and security staff share one table.
Role-specific columns (roll_number, employee_id, department) are NULL for roles
that don't use them; unique constraints ignore NULLs so they stay sparse.
"""

import enum

from sqlalchemy import Column, Integer, String, DateTime
from app.database import Base


class UserRole(str, enum.Enum):
    STUDENT = "student"
    HOD = "hod"
    SECURITY = "security"


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(200), nullable=False)
    email = Column(String(255), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)
    role = Column(String(20), nullable=False, index=True)       # student | hod | security
    roll_number = Column(String(50), unique=True, index=True)   # students only
    employee_id = Column(String(50), unique=True, index=True)   # hod | security
    department = Column(String(100))                            # student | hod
    created_at = Column(DateTime)

    def __repr__(self):
        return f"<User {self.id} email={self.email} role={self.role}>"
