# app/models/user.py
"""
Users table. Only the fields the contract flow needs; credentials live elsewhere.
Clients (role=CLIENT) are created implicitly when their first contract is registered.
"""

import enum
from sqlalchemy import Column, Integer, String, DateTime, Boolean
from app.database import Base


class Role(str, enum.Enum):
    SUPER_ADMIN = "SUPER_ADMIN"
    ADMIN_PARKING = "ADMIN_PARKING"
    OPERATOR = "OPERATOR"
    CLIENT = "CLIENT"


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    email = Column(String(254), unique=True, nullable=False, index=True)
    full_name = Column(String(200), nullable=False)
    role = Column(String(20), nullable=False, default=Role.OPERATOR.value)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime)

    def __repr__(self):
        return f"<User {self.email} role={self.role}>"
