from datetime import date
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, EmailStr, Field, field_validator

from app.models.employee import EmployeeRole


class EmployeeBase(BaseModel):
    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    doc_number: str = Field(..., min_length=1, max_length=50)
    birth_date: date
    role: EmployeeRole
    manager_id: Optional[UUID] = None
    phones: List[str] = Field(default_factory=list)

    @field_validator("first_name", "last_name", "doc_number")
    @classmethod
    def _strip_text(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("must not be blank")
        return value

    @field_validator("email")
    @classmethod
    def _limit_email(cls, value: str) -> str:
        if len(value) > 200:
            raise ValueError("must be at most 200 characters")
        return value

    @field_validator("phones")
    @classmethod
    def _validate_phones(cls, phones: List[str]) -> List[str]:
        cleaned = [p.strip() for p in phones]
        for phone in cleaned:
            if not phone:
                raise ValueError("phone numbers must not be blank")
            if len(phone) > 20:
                raise ValueError("phone numbers must be at most 20 characters")
        return cleaned


class EmployeeCreate(EmployeeBase):
    password: str = Field(..., min_length=1)


class EmployeeUpdate(EmployeeBase):
    """Same fields as creation; the password cannot be changed here."""


class EmployeeResponse(BaseModel):
    id: UUID
    first_name: str
    last_name: str
    email: str
    doc_number: str
    birth_date: date
    role: EmployeeRole
    manager_id: Optional[UUID] = None
    phones: List[str] = []

    @classmethod
    def from_employee(cls, employee) -> "EmployeeResponse":
        return cls(
            id=employee.id,
            first_name=employee.first_name,
            last_name=employee.last_name,
            email=employee.email,
            doc_number=employee.doc_number,
            birth_date=employee.birth_date,
            role=employee.role,
            manager_id=employee.manager_id,
            phones=employee.phone_numbers,
        )
