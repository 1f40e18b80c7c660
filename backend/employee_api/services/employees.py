"""
Employee CRUD.

Every function takes the caller's Session; nothing here opens its own.
Email uniqueness is checked up front for a friendly error, but two writers
can both pass that check. The unique constraint on ``employees.email`` then
rejects the loser and the IntegrityError is reported as DuplicateEmail.
"""

import logging
from typing import Annotated, Any, Mapping, Optional, Union

import email_validator
from email_validator import EmailNotValidError, validate_email
from pydantic import AfterValidator, BaseModel, BeforeValidator, Field, StringConstraints, ValidationError
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from employee_api.core.errors import DuplicateEmail, NotFound, ValidationFailed, field_errors
from employee_api.models.employee import Employee

logger = logging.getLogger("employee_api.employees")

# Staff addresses on private domains (corp.local, lab.test) are valid here.
# email-validator only exposes this through its module-level list.
for _domain in ("local", "test"):
    if _domain in email_validator.SPECIAL_USE_DOMAIN_NAMES:
        email_validator.SPECIAL_USE_DOMAIN_NAMES.remove(_domain)

DELETED_MESSAGE = "Employee deleted successfully"


def _check_email(value: str) -> str:
    # syntax only; the address is stored exactly as given
    try:
        validate_email(value, check_deliverability=False)
    except EmailNotValidError as e:
        raise ValueError(str(e)) from e
    return value


def _reject_bool(value: Any) -> Any:
    # bool is an int subclass, so lax float parsing would turn true into 1.0
    if isinstance(value, bool):
        raise ValueError("salary must be a number")
    return value


NonEmptyText = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]
Email = Annotated[str, AfterValidator(_check_email)]
Salary = Annotated[float, BeforeValidator(_reject_bool)]


class EmployeeIn(BaseModel):
    name: NonEmptyText
    email: Email
    position: NonEmptyText
    department: NonEmptyText
    salary: Salary = Field(gt=0, allow_inf_nan=False)


EmployeeInput = Union[EmployeeIn, Mapping[str, Any]]


def parse_employee(data: EmployeeInput) -> EmployeeIn:
    if isinstance(data, EmployeeIn):
        return data
    try:
        return EmployeeIn.model_validate(data)
    except ValidationError as e:
        raise ValidationFailed(field_errors(e.errors())) from e


def _lookup(db: Session, employee_id: Any) -> Employee:
    try:
        pk = int(employee_id)
    except (TypeError, ValueError):
        raise NotFound() from None

    employee = db.get(Employee, pk)
    if employee is None:
        raise NotFound()
    return employee


def _email_taken(db: Session, email: str, exclude_id: Optional[int] = None) -> bool:
    q = db.query(Employee.id).filter(Employee.email == email)
    if exclude_id is not None:
        q = q.filter(Employee.id != exclude_id)
    return q.first() is not None


def _is_email_conflict(exc: IntegrityError) -> bool:
    # sqlite: "UNIQUE constraint failed: employees.email"
    # postgres: 'duplicate key value violates unique constraint "uq_employees_email"'
    return "email" in str(exc.orig).lower()


def _commit(db: Session, duplicate_message: str) -> None:
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        if _is_email_conflict(e):
            raise DuplicateEmail(duplicate_message) from e
        raise


def create_employee(db: Session, data: EmployeeInput) -> Employee:
    payload = parse_employee(data)

    if _email_taken(db, payload.email):
        raise DuplicateEmail()

    employee = Employee(**payload.model_dump())
    db.add(employee)
    _commit(db, DuplicateEmail.message)
    db.refresh(employee)

    logger.info("Created employee id=%s", employee.id)
    return employee


def list_employees(db: Session) -> list[Employee]:
    return (
        db.query(Employee)
        .order_by(Employee.created_at.desc(), Employee.id.desc())
        .all()
    )


def get_employee(db: Session, employee_id: Any) -> Employee:
    return _lookup(db, employee_id)


def update_employee(db: Session, employee_id: Any, data: EmployeeInput) -> Employee:
    payload = parse_employee(data)
    employee = _lookup(db, employee_id)

    duplicate_message = "Another employee with this email already exists"
    if _email_taken(db, payload.email, exclude_id=employee.id):
        raise DuplicateEmail(duplicate_message)

    for k, v in payload.model_dump().items():
        setattr(employee, k, v)

    _commit(db, duplicate_message)
    db.refresh(employee)

    logger.info("Updated employee id=%s", employee.id)
    return employee


def delete_employee(db: Session, employee_id: Any) -> dict[str, str]:
    employee = _lookup(db, employee_id)
    deleted_id = employee.id

    db.delete(employee)
    db.commit()

    logger.info("Deleted employee id=%s", deleted_id)
    return {"message": DELETED_MESSAGE}
