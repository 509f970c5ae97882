import logging
from typing import AsyncGenerator, Optional
from uuid import UUID

from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from jose import JWTError
from pydantic import ValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.core.security import decode_access_token
from app.db.session import AsyncSessionLocal
from app.models.employee import Employee
from app.repositories.employee_repository import EmployeeRepository
from app.schemas.token import TokenPayload
from app.services.auth_service import AuthService
from app.services.employee_service import EmployeeService

logger = logging.getLogger("employee_directory.deps")

# auto_error=False so a missing header yields our own 401 body
oauth2_scheme = OAuth2PasswordBearer(tokenUrl=f"{settings.API_V1_STR}/auth/login/oauth2", auto_error=False)


async def get_db() -> AsyncGenerator:
    async with AsyncSessionLocal() as session:
        yield session


def get_employee_repository(db: AsyncSession = Depends(get_db)) -> EmployeeRepository:
    return EmployeeRepository(db)


def get_employee_service(
    repository: EmployeeRepository = Depends(get_employee_repository),
) -> EmployeeService:
    return EmployeeService(repository)


def get_auth_service(
    repository: EmployeeRepository = Depends(get_employee_repository),
) -> AuthService:
    return AuthService(repository)


def _credentials_exception(detail: str = "Could not validate credentials") -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


async def get_token_payload(token: Optional[str] = Depends(oauth2_scheme)) -> TokenPayload:
    """
    Decode and validate the bearer token.

    Raises:
        HTTPException: 401 if the token is missing, invalid or expired
    """
    if not token:
        raise _credentials_exception("Not authenticated")

    try:
        payload = TokenPayload(**decode_access_token(token))
    except (JWTError, ValidationError):
        raise _credentials_exception()

    if payload.sub is None:
        raise _credentials_exception()
    return payload


async def get_current_employee_id(payload: TokenPayload = Depends(get_token_payload)) -> UUID:
    """Identity of the caller, taken from the token ``sub`` claim."""
    try:
        return UUID(payload.sub)
    except ValueError:
        raise _credentials_exception()


async def get_current_employee(
    employee_id: UUID = Depends(get_current_employee_id),
    repository: EmployeeRepository = Depends(get_employee_repository),
) -> Employee:
    """
    Load the caller's employee record.

    Raises:
        HTTPException: 401 if the employee was deleted after the token was issued
    """
    employee = await repository.get_by_id(employee_id)
    if employee is None:
        logger.warning(f"Token presented for missing employee {employee_id}")
        raise _credentials_exception()
    return employee
