# app/schemas/user.py
from pydantic import BaseModel, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel
from typing import Optional
from app.config import settings
from app.models.user import UserRole


class UserRegister(BaseModel):
    name: str = Field(..., min_length=1)
    email: Optional[str] = None       # optional for security staff only
    password: str
    role: UserRole
    roll_number: Optional[str] = None
    department: Optional[str] = None
    employee_id: Optional[str] = None

    class Config:
        alias_generator = to_camel
        populate_by_name = True

    @field_validator("name", "email", "roll_number", "department", "employee_id", mode="before")
    @classmethod
    def strip_identity_fields(cls, value):
        # password is hashed exactly as sent
        return value.strip() if isinstance(value, str) else value

    @field_validator("password")
    @classmethod
    def password_long_enough(cls, value: str) -> str:
        if len(value) < settings.MIN_PASSWORD_LENGTH:
            raise ValueError(f"Password must be at least {settings.MIN_PASSWORD_LENGTH} characters long")
        return value

    @model_validator(mode="after")
    def role_fields_present(self):
        """Check the role's required fields and drop the ones it doesn't use."""
        if self.role == UserRole.STUDENT:
            if not (self.email and self.roll_number and self.department):
                raise ValueError("Please fill in all student details")
            self.employee_id = None
        elif self.role == UserRole.HOD:
            if not (self.email and self.employee_id and self.department):
                raise ValueError("Please fill in all HOD details")
            self.roll_number = None
        else:
            if not self.employee_id:
                raise ValueError("Please enter employee ID")
            if not self.email:
                self.email = f"{self.employee_id}@{settings.SECURITY_EMAIL_DOMAIN}"
            self.roll_number = None
            self.department = None
        return self


class UserLogin(BaseModel):
    email: str = Field(..., min_length=1)   # email, roll number or employee ID depending on role
    password: str
    role: UserRole

    @field_validator("email", mode="before")
    @classmethod
    def strip_identifier(cls, value):
        return value.strip() if isinstance(value, str) else value


class UserBrief(BaseModel):
    id: int
    name: str
    email: str
    role: str

    class Config:
        from_attributes = True


class UserOut(UserBrief):
    roll_number: Optional[str] = None
    department: Optional[str] = None
    employee_id: Optional[str] = None

    class Config:
        from_attributes = True
        alias_generator = to_camel
        populate_by_name = True


class RegisterResponse(BaseModel):
    message: str
    user: UserBrief


class LoginResponse(BaseModel):
    message: str
    user: UserOut
