"""
Data access for the employee roster.
"""

import logging
from typing import List, Optional
from uuid import UUID

from sqlalchemy import exists, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import BusinessRuleError
from app.models.employee import Employee, EmployeeRole

logger = logging.getLogger("employee_directory.repository")


class EmployeeRepository:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def list(self, skip: int = 0, limit: int = 100) -> List[Employee]:
        query = (
            select(Employee)
            .order_by(Employee.last_name, Employee.first_name)
            .offset(skip)
            .limit(limit)
        )
        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def get_by_id(self, employee_id: UUID) -> Optional[Employee]:
        return await self.db.get(Employee, employee_id)

    async def get_by_email(self, email: str) -> Optional[Employee]:
        result = await self.db.execute(select(Employee).where(Employee.email == email))
        return result.scalar_one_or_none()

    async def exists_by_document(self, doc_number: str) -> bool:
        result = await self.db.execute(
            select(exists().where(Employee.doc_number == doc_number))
        )
        return bool(result.scalar())

    async def exists_by_email(self, email: str) -> bool:
        result = await self.db.execute(
            select(exists().where(Employee.email == email))
        )
        return bool(result.scalar())

    async def has_subordinates(self, employee_id: UUID) -> bool:
        result = await self.db.execute(
            select(exists().where(Employee.manager_id == employee_id))
        )
        return bool(result.scalar())

    async def has_subordinates_with_role_at_least(self, employee_id: UUID, role: EmployeeRole) -> bool:
        result = await self.db.execute(
            select(
                exists().where(
                    Employee.manager_id == employee_id,
                    Employee.role >= int(role),
                )
            )
        )
        return bool(result.scalar())

    async def add(self, employee: Employee) -> Employee:
        self.db.add(employee)
        await self._commit()
        await self.db.refresh(employee)
        return employee

    async def update(self, employee: Employee) -> Employee:
        await self._commit()
        await self.db.refresh(employee)
        return employee

    async def delete(self, employee: Employee) -> None:
        await self.db.delete(employee)
        await self._commit("Employee still manages other employees.")

    async def _commit(self, conflict_message: str = "Email or document number already exists.") -> None:
        try:
            await self.db.commit()
        except IntegrityError as exc:
            # Constraints catch what a concurrent request slipped past the checks
            await self.db.rollback()
            logger.warning(f"Integrity error on employee write: {exc.orig}")
            raise BusinessRuleError(conflict_message) from exc
