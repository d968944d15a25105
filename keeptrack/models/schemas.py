# keeptrack/models/schemas.py

import re
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, EmailStr, field_validator


PASSWORD_PATTERN = re.compile(r"^(?=.*[a-z])(?=.*[A-Z])(?=.*\d)")


# -------------------------------
# Users & Authentication
# -------------------------------

class RegisterRequest(BaseModel):
    name: str
    email: EmailStr
    password: str

    @field_validator("name")
    @classmethod
    def name_length(cls, value: str) -> str:
        value = value.strip()
        if not 2 <= len(value) <= 100:
            raise ValueError("Name must be between 2 and 100 characters")
        return value

    @field_validator("email")
    @classmethod
    def normalize_email(cls, value: str) -> str:
        return value.strip().lower()

    @field_validator("password")
    @classmethod
    def password_strength(cls, value: str) -> str:
        if len(value) < 6:
            raise ValueError("Password must be at least 6 characters long")
        if not PASSWORD_PATTERN.match(value):
            raise ValueError(
                "Password must contain at least one lowercase letter, one uppercase letter and one number"
            )
        return value


class LoginRequest(BaseModel):
    email: EmailStr
    password: str

    @field_validator("email")
    @classmethod
    def normalize_email(cls, value: str) -> str:
        return value.strip().lower()

    @field_validator("password")
    @classmethod
    def password_required(cls, value: str) -> str:
        if not value:
            raise ValueError("Password is required")
        return value


class UserResponse(BaseModel):
    id: int
    email: str
    name: str
    created_at: datetime


class AuthResponse(BaseModel):
    message: str
    user: UserResponse
    token: str


class ProfileResponse(BaseModel):
    user: UserResponse


class MessageResponse(BaseModel):
    message: str


# -------------------------------
# Assets
# -------------------------------

# Name is optional here so the service can report a missing or blank name
# with one message.
class AssetCreate(BaseModel):
    name: Optional[str] = None
    description: Optional[str] = None


class AssetUpdate(BaseModel):
    name: Optional[str] = None
    description: Optional[str] = None


class AssetResponse(BaseModel):
    id: int
    name: str
    description: Optional[str] = None
    created_at: datetime
    updated_at: datetime


class AssetEnvelope(BaseModel):
    message: str
    asset: AssetResponse


# -------------------------------
# Maintenance Records
# -------------------------------

# Dates travel as 'YYYY-MM-DD' strings and are parsed by the service.
class MaintenanceRecordCreate(BaseModel):
    asset_id: int
    service_type: Optional[str] = None
    service_date: Optional[str] = None
    description: Optional[str] = None
    cost: Optional[float] = None
    performed_by: Optional[str] = None
    next_maintenance_date: Optional[str] = None
    next_maintenance_notes: Optional[str] = None


class MaintenanceRecordUpdate(BaseModel):
    service_type: Optional[str] = None
    service_date: Optional[str] = None
    description: Optional[str] = None
    cost: Optional[float] = None
    performed_by: Optional[str] = None
    next_maintenance_date: Optional[str] = None
    next_maintenance_notes: Optional[str] = None


class MaintenanceRecordResponse(BaseModel):
    id: int
    asset_id: int
    service_type: str
    service_date: str
    description: Optional[str] = None
    cost: Optional[float] = None
    performed_by: Optional[str] = None
    next_maintenance_date: Optional[str] = None
    next_maintenance_notes: Optional[str] = None
    created_at: datetime
    updated_at: datetime


class UpcomingMaintenanceResponse(MaintenanceRecordResponse):
    asset_name: str


class MaintenanceRecordEnvelope(BaseModel):
    message: str
    record: MaintenanceRecordResponse


class HealthResponse(BaseModel):
    status: str
    timestamp: str

