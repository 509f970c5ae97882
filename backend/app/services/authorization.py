"""
Role hierarchy decision table for the employee roster.

Every check is a pure function of roles and ids. Violations raise
``BusinessRuleError`` with the message returned to the client.
"""

from datetime import date
from typing import Optional
from uuid import UUID

from app.core.config import settings
from app.core.exceptions import BusinessRuleError
from app.models.employee import EmployeeRole


def calculate_age(birth_date: date, today: Optional[date] = None) -> int:
    """Calendar age in whole years on ``today``."""
    today = today or date.today()
    age = today.year - birth_date.year
    if (today.month, today.day) < (birth_date.month, birth_date.day):
        age -= 1
    return age


def is_adult(birth_date: date, today: Optional[date] = None) -> bool:
    return calculate_age(birth_date, today) >= settings.MIN_EMPLOYEE_AGE


def ensure_adult(birth_date: date, today: Optional[date] = None) -> None:
    if not is_adult(birth_date, today):
        raise BusinessRuleError(
            f"Employee must be at least {settings.MIN_EMPLOYEE_AGE} years old."
        )


def ensure_can_create(actor_role: EmployeeRole, requested_role: EmployeeRole) -> None:
    if actor_role == EmployeeRole.EMPLOYEE:
        raise BusinessRuleError("You are not allowed to create users.")
    if actor_role == EmployeeRole.LEADER and requested_role != EmployeeRole.EMPLOYEE:
        raise BusinessRuleError("Leaders can only create employees.")
    # Directors can create any role


def ensure_can_edit(
    actor_id: UUID,
    actor_role: EmployeeRole,
    target_id: UUID,
    target_role: EmployeeRole,
) -> None:
    """Anyone may edit themselves. Leaders may edit employees only."""
    if actor_id == target_id:
        return
    if actor_role == EmployeeRole.EMPLOYEE:
        raise BusinessRuleError("You are not allowed to edit other users.")
    if actor_role == EmployeeRole.LEADER and target_role != EmployeeRole.EMPLOYEE:
        raise BusinessRuleError("You can only edit employees.")


def ensure_can_assign_role(
    actor_id: UUID,
    actor_role: EmployeeRole,
    target_id: UUID,
    target_role: EmployeeRole,
    requested_role: EmployeeRole,
) -> None:
    """Nobody changes their own role or hands out a role above their own."""
    if actor_id == target_id and requested_role != target_role:
        raise BusinessRuleError("You cannot change your own role.")

    if requested_role > actor_role:
        raise BusinessRuleError("You cannot assign a role higher than yours.")


def ensure_can_delete(
    actor_id: UUID,
    actor_role: EmployeeRole,
    target_id: UUID,
    target_role: EmployeeRole,
) -> None:
    if actor_id == target_id:
        raise BusinessRuleError("You cannot delete yourself.")
    if actor_role == EmployeeRole.EMPLOYEE:
        raise BusinessRuleError("You are not allowed to delete users.")
    if actor_role == EmployeeRole.LEADER and target_role != EmployeeRole.EMPLOYEE:
        raise BusinessRuleError("You cannot delete a user with equal or higher permissions.")
    # Directors can delete anyone but themselves


def ensure_can_manage(manager_role: EmployeeRole, subordinate_role: EmployeeRole) -> None:
    """
    A manager must outrank the subordinate. Directors are the top of the
    hierarchy, so a Director may also manage another Director.
    """
    if manager_role == EmployeeRole.EMPLOYEE:
        raise BusinessRuleError("Employee cannot be a manager.")
    if manager_role == EmployeeRole.LEADER and subordinate_role != EmployeeRole.EMPLOYEE:
        raise BusinessRuleError("Leader can only manage employees.")


def ensure_not_own_manager(employee_id: Optional[UUID], manager_id: Optional[UUID]) -> None:
    if employee_id is not None and manager_id == employee_id:
        raise BusinessRuleError("Employee cannot be their own manager.")


def validate_password_policy(password: str) -> None:
    """Enforce password policy configured in settings."""
    if len(password) < settings.MIN_PASSWORD_LENGTH:
        raise BusinessRuleError(
            f"Password must be at least {settings.MIN_PASSWORD_LENGTH} characters long."
        )
    if settings.REQUIRE_SPECIAL_CHARS and not any(not c.isalnum() for c in password):
        raise BusinessRuleError("Password must include at least one special character.")
