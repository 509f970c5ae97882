from typing import Any, List
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Response, status

from app.api.deps import get_current_employee, get_current_employee_id, get_employee_service
from app.core.config import settings
from app.models.employee import Employee
from app.schemas.employee import EmployeeCreate, EmployeeResponse, EmployeeUpdate
from app.services.employee_service import EmployeeService

router = APIRouter()


@router.get("/", response_model=List[EmployeeResponse])
async def read_employees(
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=500),
    service: EmployeeService = Depends(get_employee_service),
    current_employee: Employee = Depends(get_current_employee),
) -> Any:
    """
    Retrieve employees.
    """
    return await service.list_employees(skip=skip, limit=limit)


@router.get("/{employee_id}", response_model=EmployeeResponse)
async def read_employee(
    employee_id: UUID,
    service: EmployeeService = Depends(get_employee_service),
    current_employee: Employee = Depends(get_current_employee),
) -> Any:
    """
    Get employee by ID.
    """
    return await service.get_employee(employee_id)


@router.post("/", response_model=EmployeeResponse, status_code=status.HTTP_201_CREATED)
async def create_employee(
    employee_in: EmployeeCreate,
    response: Response,
    service: EmployeeService = Depends(get_employee_service),
    current_employee_id: UUID = Depends(get_current_employee_id),
) -> Any:
    """
    Create an employee. The caller's role bounds the role that can be created.
    """
    employee = await service.create_employee(employee_in, current_employee_id)
    response.headers["Location"] = f"{settings.API_V1_STR}/employees/{employee.id}"
    return employee


@router.put("/{employee_id}", response_model=EmployeeResponse)
async def update_employee(
    employee_id: UUID,
    employee_in: EmployeeUpdate,
    service: EmployeeService = Depends(get_employee_service),
    current_employee_id: UUID = Depends(get_current_employee_id),
) -> Any:
    """
    Update an employee. Phones in the body replace the stored ones.
    """
    return await service.update_employee(employee_id, employee_in, current_employee_id)


@router.delete("/{employee_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_employee(
    employee_id: UUID,
    service: EmployeeService = Depends(get_employee_service),
    current_employee_id: UUID = Depends(get_current_employee_id),
) -> Response:
    """
    Delete an employee. Nobody can delete themselves.
    """
    await service.delete_employee(employee_id, current_employee_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
