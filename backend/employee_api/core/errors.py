# backend/employee_api/core/errors.py

from typing import Any, Iterable, Optional

# Client-facing message per input field; falls back to the validator's own text.
FIELD_MESSAGES = {
    "username": "Username is required",
    "password": "Password is required",
    "name": "Name is required",
    "email": "Valid email is required",
    "position": "Position is required",
    "department": "Department is required",
    "salary": "Salary must be > 0",
}

_LOCATIONS = ("body", "query", "path", "header")


class AppError(Exception):
    status_code: int = 500
    error: str = "InternalFailure"
    message: str = "Server error"
    headers: Optional[dict[str, str]] = None

    def __init__(self, message: Optional[str] = None):
        if message:
            self.message = message
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        return {"error": self.error, "message": self.message}


class ValidationFailed(AppError):
    status_code = 400
    error = "ValidationFailed"
    message = "Validation failed"

    def __init__(self, errors: list[dict[str, str]], message: Optional[str] = None):
        super().__init__(message)
        self.errors = errors

    def to_dict(self) -> dict[str, Any]:
        data = super().to_dict()
        data["errors"] = self.errors
        return data


class InvalidCredentials(AppError):
    status_code = 400
    error = "InvalidCredentials"
    message = "Invalid username or password"


class DuplicateEmail(AppError):
    status_code = 400
    error = "DuplicateEmail"
    message = "Employee with this email already exists"


class AuthError(AppError):
    status_code = 401
    headers = {"WWW-Authenticate": "Bearer"}


class MissingToken(AuthError):
    error = "MissingToken"
    message = "No token provided"


class MalformedHeader(AuthError):
    error = "MalformedHeader"
    message = "Invalid token format"


class InvalidOrExpiredToken(AuthError):
    error = "InvalidOrExpiredToken"
    message = "Token invalid or expired"


class NotFound(AppError):
    status_code = 404
    error = "NotFound"
    message = "Employee not found"


class InternalFailure(AppError):
    pass


def field_errors(errors: Iterable[dict[str, Any]]) -> list[dict[str, str]]:
    """Flatten pydantic error dicts into one ``{field, message}`` entry per field."""
    out: list[dict[str, str]] = []
    seen: set[str] = set()

    for err in errors:
        loc = [str(p) for p in err.get("loc", ())]
        if loc and loc[0] in _LOCATIONS:
            loc = loc[1:]

        if err.get("type") == "json_invalid" or not loc:
            field = "body"
        else:
            field = loc[0]

        if field in seen:
            continue
        seen.add(field)

        out.append({"field": field, "message": FIELD_MESSAGES.get(field, err.get("msg", "Invalid value"))})

    return out
