"""
Business rule errors raised by the service layer.

The API maps every ``BusinessRuleError`` to a JSON error body using the
exception's ``status_code``; anything else is an unexpected 500.
"""


class BusinessRuleError(Exception):
    """A request violated a business rule. Carries a user-facing message."""

    status_code: int = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class EmployeeNotFoundError(BusinessRuleError):
    """The employee addressed by the request does not exist."""

    status_code = 404

    def __init__(self, message: str = "Employee not found."):
        super().__init__(message)
