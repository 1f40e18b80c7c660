import enum

from sqlalchemy import Column, Integer, String

from employee_api.core.database import Base


class Role(str, enum.Enum):
    ADMIN = "admin"


class Account(Base):
    __tablename__ = "accounts"

    id = Column(Integer, primary_key=True, index=True)

    username = Column(String, unique=True, index=True, nullable=False)

    # "admin" is the only role for now
    role = Column(String, nullable=False, default=Role.ADMIN.value)

    password_hash = Column(String, nullable=False)
