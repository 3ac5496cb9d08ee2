# slotify/models/user.py
"""
Users and employee profiles.
Every user has exactly one role. EMPLOYEE users own one EmployeeProfile,
created in the same transaction as the user at registration.
"""

import enum
import uuid

from sqlalchemy import Column, DateTime, Enum, ForeignKey, String, Uuid
from sqlalchemy.orm import relationship

from slotify.database import Base
from slotify.utils.clock import utcnow


class Role(str, enum.Enum):
    ADMIN = "ADMIN"
    EMPLOYEE = "EMPLOYEE"
    SECURITY = "SECURITY"


class User(Base):
    __tablename__ = "users"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    email = Column(String(255), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)
    role = Column(Enum(Role, name="user_role"), nullable=False, index=True)
    created_at = Column(DateTime, nullable=False, default=utcnow)
    updated_at = Column(DateTime, nullable=False, default=utcnow, onupdate=utcnow)

    profile = relationship("EmployeeProfile", back_populates="user", uselist=False)

    def __repr__(self):
        return f"<User {self.email} role={self.role}>"


class EmployeeProfile(Base):
    __tablename__ = "employee_profiles"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id = Column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), unique=True, nullable=False)
    employee_id = Column(String(100), unique=True, nullable=False, index=True)
    vehicle_id = Column(String(50), nullable=False)
    phone_number = Column(String(20), nullable=False)

    user = relationship("User", back_populates="profile")

    def __repr__(self):
        return f"<EmployeeProfile {self.employee_id} vehicle={self.vehicle_id}>"
