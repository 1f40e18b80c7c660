from datetime import datetime, timezone

from sqlalchemy import (
    Column,
    Integer,
    String,
    Float,
    DateTime,
    CheckConstraint,
    UniqueConstraint,
    Index,
)

from employee_api.core.database import Base


def utcnow() -> datetime:
    # naive UTC, matching the tz-less DateTime column
    return datetime.now(timezone.utc).replace(tzinfo=None)


class Employee(Base):
    __tablename__ = "employees"

    __table_args__ = (
        # the store is the last word on email uniqueness
        UniqueConstraint("email", name="uq_employees_email"),
        CheckConstraint("salary > 0", name="ck_salary_positive"),

        Index("ix_employees_created_at", "created_at"),
    )

    id = Column(Integer, primary_key=True, index=True)

    name = Column(String, nullable=False)
    email = Column(String, nullable=False)
    position = Column(String, nullable=False)
    department = Column(String, nullable=False)

    salary = Column(Float, nullable=False)

    created_at = Column(DateTime, default=utcnow, nullable=False)
