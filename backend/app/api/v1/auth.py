from typing import Any

from fastapi import APIRouter, Depends, Request, Response
from fastapi.security import OAuth2PasswordRequestForm

from app.api.deps import get_auth_service, get_current_employee
from app.core.config import settings
from app.core.rate_limiter import limiter
from app.models.employee import Employee
from app.schemas.employee import EmployeeResponse
from app.schemas.token import LoginRequest, LoginResponse
from app.services.auth_service import AuthService

router = APIRouter()


@router.post("/login", response_model=LoginResponse)
@limiter.limit(settings.LOGIN_RATE_LIMIT)
async def login(
    request: Request,
    response: Response,
    credentials: LoginRequest,
    auth_service: AuthService = Depends(get_auth_service),
) -> Any:
    """
    Exchange email and password for a bearer token.
    """
    return await auth_service.login(credentials.email, credentials.password)


@router.post("/login/oauth2", response_model=LoginResponse)
@limiter.limit(settings.LOGIN_RATE_LIMIT)
async def login_oauth2(
    request: Request,
    response: Response,
    form_data: OAuth2PasswordRequestForm = Depends(),
    auth_service: AuthService = Depends(get_auth_service),
) -> Any:
    """
    OAuth2 password-flow login for interactive API docs; ``username`` carries the email.
    """
    return await auth_service.login(form_data.username, form_data.password)


@router.get("/me", response_model=EmployeeResponse)
async def read_current_employee(
    current_employee: Employee = Depends(get_current_employee),
) -> Any:
    """
    Get the employee behind the presented token.
    """
    return EmployeeResponse.from_employee(current_employee)
