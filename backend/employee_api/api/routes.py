# backend/employee_api/api/routes.py

from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel
from sqlalchemy.orm import Session

from employee_api.api.deps_auth import GuardedRoute, get_db
from employee_api.services import employees as employee_service
from employee_api.services.employees import EmployeeIn

# every route below sits behind the access guard, checked before the body is parsed
router = APIRouter(route_class=GuardedRoute)

# ---------- SCHEMAS ----------

class Employee(BaseModel):
    id: int
    name: str
    email: str
    position: str
    department: str
    salary: float
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class Message(BaseModel):
    message: str

# ---------- EMPLOYEES ----------

@router.post("/employees", response_model=Employee, status_code=status.HTTP_201_CREATED)
def create_employee(
    payload: EmployeeIn,
    db: Session = Depends(get_db),
):
    return employee_service.create_employee(db, payload)


@router.get("/employees", response_model=List[Employee])
def list_employees(db: Session = Depends(get_db)):
    return employee_service.list_employees(db)


@router.get("/employees/{employee_id}", response_model=Employee)
def get_employee(
    employee_id: str,
    db: Session = Depends(get_db),
):
    return employee_service.get_employee(db, employee_id)


@router.put("/employees/{employee_id}", response_model=Employee)
def update_employee(
    employee_id: str,
    payload: EmployeeIn,
    db: Session = Depends(get_db),
):
    return employee_service.update_employee(db, employee_id, payload)


@router.delete("/employees/{employee_id}", response_model=Message)
def delete_employee(
    employee_id: str,
    db: Session = Depends(get_db),
):
    return employee_service.delete_employee(db, employee_id)
