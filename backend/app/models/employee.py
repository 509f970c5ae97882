"""
Employee roster models.

Employees form a self-referencing hierarchy through ``manager_id``; the
ordinal ``EmployeeRole`` drives every authorization comparison.
"""

import enum
import uuid

from sqlalchemy import Column, Date, DateTime, ForeignKey, Integer, String, Uuid
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from app.db.base_class import Base


class EmployeeRole(enum.IntEnum):
    """Role hierarchy: Employee < Leader < Director."""

    EMPLOYEE = 1
    LEADER = 2
    DIRECTOR = 3

    @property
    def label(self) -> str:
        """Name used in token claims and log lines (``Employee``, ``Leader``, ``Director``)."""
        return self.name.capitalize()


class Employee(Base):
    __tablename__ = "employees"  # type: ignore[assignment]

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    first_name = Column(String(100), nullable=False)
    last_name = Column(String(100), nullable=False)
    email = Column(String(200), unique=True, index=True, nullable=False)
    doc_number = Column(String(50), unique=True, index=True, nullable=False)
    birth_date = Column(Date, nullable=False)
    role = Column(Integer, nullable=False)  # EmployeeRole value
    # RESTRICT: a manager cannot be removed while subordinates reference it
    manager_id = Column(
        Uuid(as_uuid=True),
        ForeignKey("employees.id", ondelete="RESTRICT"),
        nullable=True,
        index=True,
    )
    password_hash = Column(String, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), onupdate=func.now(), nullable=True)

    # selectin keeps phone access safe under AsyncSession (no implicit lazy IO)
    phones = relationship(
        "EmployeePhone",
        back_populates="employee",
        cascade="all, delete-orphan",
        lazy="selectin",
        order_by="EmployeePhone.position",
    )

    @property
    def role_enum(self) -> EmployeeRole:
        return EmployeeRole(self.role)

    @property
    def phone_numbers(self) -> list[str]:
        return [phone.number for phone in self.phones]

    def replace_phones(self, numbers: list[str]) -> None:
        """Phones have no identity of their own; they are swapped wholesale."""
        self.phones = [
            EmployeePhone(number=number, position=index)
            for index, number in enumerate(numbers)
        ]


class EmployeePhone(Base):
    __tablename__ = "employee_phones"  # type: ignore[assignment]

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    employee_id = Column(
        Uuid(as_uuid=True),
        ForeignKey("employees.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    number = Column(String(20), nullable=False)
    position = Column(Integer, nullable=False, default=0)

    employee = relationship("Employee", back_populates="phones")
