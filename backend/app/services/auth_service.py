"""
Credential check and access token issuance.
"""

import logging

from app.core.config import settings
from app.core.exceptions import BusinessRuleError
from app.core.security import create_access_token, verify_password
from app.repositories.employee_repository import EmployeeRepository
from app.schemas.employee import EmployeeResponse
from app.schemas.token import LoginResponse

logger = logging.getLogger("employee_directory.auth")


class AuthService:
    def __init__(self, repository: EmployeeRepository):
        self.repository = repository

    async def login(self, email: str, password: str) -> LoginResponse:
        """
        Validate credentials and issue a bearer token.

        Unknown email and wrong password fail with the same message so the
        response does not reveal which accounts exist.
        """
        employee = await self.repository.get_by_email(email)

        if employee is None:
            logger.warning(f"Invalid login attempt. Email not found: {email}")
            raise BusinessRuleError("Invalid credentials.")

        if not verify_password(password, employee.password_hash):
            logger.warning(f"Invalid login attempt. Wrong password for Email: {email}")
            raise BusinessRuleError("Invalid credentials.")

        role = employee.role_enum
        access_token = create_access_token(subject=employee.id, role=role.label)

        logger.info(
            f"User logged in successfully. EmployeeId: {employee.id}, Role: {role.label}"
        )

        return LoginResponse(
            access_token=access_token,
            expires_in=settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60,
            employee=EmployeeResponse.from_employee(employee),
        )
