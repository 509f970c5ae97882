"""
Employee roster use cases.

Each operation loads the acting employee, runs the role hierarchy checks
from ``app.services.authorization`` and then persists through the
repository. Checks run in a fixed order so the first violated rule is the
one reported.
"""

import logging
from typing import List, Optional
from uuid import UUID

from app.core.exceptions import BusinessRuleError, EmployeeNotFoundError
from app.core.security import get_password_hash
from app.models.employee import Employee, EmployeeRole
from app.repositories.employee_repository import EmployeeRepository
from app.schemas.employee import EmployeeCreate, EmployeeResponse, EmployeeUpdate
from app.services import authorization

logger = logging.getLogger("employee_directory.employees")


class EmployeeService:
    def __init__(self, repository: EmployeeRepository):
        self.repository = repository

    async def list_employees(self, skip: int = 0, limit: int = 100) -> List[EmployeeResponse]:
        employees = await self.repository.list(skip=skip, limit=limit)
        return [EmployeeResponse.from_employee(e) for e in employees]

    async def get_employee(self, employee_id: UUID) -> EmployeeResponse:
        employee = await self.repository.get_by_id(employee_id)
        if employee is None:
            raise EmployeeNotFoundError()
        return EmployeeResponse.from_employee(employee)

    async def create_employee(self, request: EmployeeCreate, current_employee_id: UUID) -> EmployeeResponse:
        current_employee = await self._get_current_employee(current_employee_id)

        await self._validate_create(request, current_employee)

        employee = Employee(
            first_name=request.first_name,
            last_name=request.last_name,
            email=request.email,
            doc_number=request.doc_number,
            birth_date=request.birth_date,
            role=int(request.role),
            manager_id=request.manager_id,
            password_hash=get_password_hash(request.password),
        )
        employee.replace_phones(request.phones)

        employee = await self.repository.add(employee)

        logger.info(
            f"Employee created. EmployeeId: {employee.id}, "
            f"CreatedBy: {current_employee_id}, Role: {request.role.label}"
        )
        return EmployeeResponse.from_employee(employee)

    async def update_employee(
        self,
        employee_id: UUID,
        request: EmployeeUpdate,
        current_employee_id: UUID,
    ) -> EmployeeResponse:
        employee = await self.repository.get_by_id(employee_id)
        if employee is None:
            raise EmployeeNotFoundError()

        current_employee = await self._get_current_employee(current_employee_id)

        await self._validate_update(request, employee, current_employee)

        employee.first_name = request.first_name
        employee.last_name = request.last_name
        employee.email = request.email
        employee.doc_number = request.doc_number
        employee.birth_date = request.birth_date
        employee.role = int(request.role)
        employee.manager_id = request.manager_id
        employee.replace_phones(request.phones)

        employee = await self.repository.update(employee)

        logger.info(
            f"Employee updated. EmployeeId: {employee.id}, UpdatedBy: {current_employee_id}"
        )
        return EmployeeResponse.from_employee(employee)

    async def delete_employee(self, employee_id: UUID, current_employee_id: UUID) -> None:
        if employee_id == current_employee_id:
            raise BusinessRuleError("You cannot delete yourself.")

        current_employee = await self._get_current_employee(current_employee_id)

        employee = await self.repository.get_by_id(employee_id)
        if employee is None:
            raise EmployeeNotFoundError()

        authorization.ensure_can_delete(
            actor_id=current_employee.id,
            actor_role=current_employee.role_enum,
            target_id=employee.id,
            target_role=employee.role_enum,
        )

        if await self.repository.has_subordinates(employee.id):
            raise BusinessRuleError("Employee still manages other employees.")

        deleted_role = employee.role_enum
        await self.repository.delete(employee)

        logger.warning(
            f"Employee deleted. EmployeeId: {employee_id}, "
            f"DeletedBy: {current_employee_id}, DeletedRole: {deleted_role.label}"
        )

    async def _get_current_employee(self, current_employee_id: UUID) -> Employee:
        current_employee = await self.repository.get_by_id(current_employee_id)
        if current_employee is None:
            raise BusinessRuleError("Current user not found.")
        return current_employee

    async def _validate_create(self, request: EmployeeCreate, current_employee: Employee) -> None:
        authorization.ensure_adult(request.birth_date)
        authorization.ensure_can_create(current_employee.role_enum, request.role)
        authorization.validate_password_policy(request.password)

        if await self.repository.exists_by_document(request.doc_number):
            raise BusinessRuleError("Document number already exists.")

        if await self.repository.exists_by_email(request.email):
            raise BusinessRuleError("Email already exists.")

        if request.manager_id is not None:
            await self._validate_manager(request.manager_id, request.role)

    async def _validate_update(
        self,
        request: EmployeeUpdate,
        employee: Employee,
        current_employee: Employee,
    ) -> None:
        authorization.ensure_can_edit(
            actor_id=current_employee.id,
            actor_role=current_employee.role_enum,
            target_id=employee.id,
            target_role=employee.role_enum,
        )
        authorization.ensure_adult(request.birth_date)
        authorization.ensure_can_assign_role(
            actor_id=current_employee.id,
            actor_role=current_employee.role_enum,
            target_id=employee.id,
            target_role=employee.role_enum,
            requested_role=request.role,
        )

        if (
            employee.doc_number != request.doc_number
            and await self.repository.exists_by_document(request.doc_number)
        ):
            raise BusinessRuleError("Document number already exists.")

        if (
            employee.email != request.email
            and await self.repository.exists_by_email(request.email)
        ):
            raise BusinessRuleError("Email already in use.")

        if request.manager_id is not None:
            authorization.ensure_not_own_manager(employee.id, request.manager_id)
            await self._validate_manager(request.manager_id, request.role)
            await self._ensure_no_manager_cycle(employee.id, request.manager_id)

        # Existing subordinates must still rank below the new role
        if (
            request.role < employee.role_enum
            and await self.repository.has_subordinates_with_role_at_least(employee.id, request.role)
        ):
            raise BusinessRuleError("Employee still manages employees of equal or higher role.")

    async def _validate_manager(self, manager_id: UUID, subordinate_role: EmployeeRole) -> None:
        manager = await self.repository.get_by_id(manager_id)
        if manager is None:
            raise BusinessRuleError("Manager not found.")
        authorization.ensure_can_manage(manager.role_enum, subordinate_role)

    async def _ensure_no_manager_cycle(self, employee_id: UUID, manager_id: UUID) -> None:
        """Walk up the chain from the new manager; reaching the employee means a cycle."""
        visited = set()
        current_id: Optional[UUID] = manager_id
        while current_id is not None and current_id not in visited:
            if current_id == employee_id:
                raise BusinessRuleError("Manager hierarchy cannot contain cycles.")
            visited.add(current_id)
            manager = await self.repository.get_by_id(current_id)
            current_id = manager.manager_id if manager is not None else None
