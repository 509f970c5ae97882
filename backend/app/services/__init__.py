# Services Package
from app.services.auth_service import AuthService
from app.services.employee_service import EmployeeService

__all__ = ["AuthService", "EmployeeService"]
