# keeptrack/core/services.py

import logging
from datetime import date, datetime, timezone
from typing import List, Optional

from sqlalchemy.exc import IntegrityError

from keeptrack.core.errors import ErrorKind, ServiceError, not_found, validation_error
from keeptrack.core.repositories import AssetRepository, MaintenanceRecordRepository, UserRepository
from keeptrack.core.security import create_access_token, get_password_hash, verify_password
from keeptrack.models.schemas import (
    AssetCreate,
    AssetResponse,
    AssetUpdate,
    AuthResponse,
    LoginRequest,
    MaintenanceRecordCreate,
    MaintenanceRecordResponse,
    MaintenanceRecordUpdate,
    RegisterRequest,
    UpcomingMaintenanceResponse,
    UserResponse,
)


logger = logging.getLogger(__name__)


ASSET_NOT_FOUND = "Asset not found or does not belong to the user."
RECORD_NOT_FOUND = "Maintenance record not found."
INVALID_CREDENTIALS = "Invalid credentials"


# -------------------------------
# Response mapping
# -------------------------------

def format_date(value) -> Optional[str]:
    if value is None:
        return None
    if isinstance(value, datetime):
        value = value.date()
    return value.isoformat()


def user_to_response(user) -> UserResponse:
    return UserResponse(
        id=user.id,
        email=user.email,
        name=user.name,
        created_at=user.created_at,
    )


def asset_to_response(asset) -> AssetResponse:
    return AssetResponse(
        id=asset.id,
        name=asset.name,
        description=asset.description,
        created_at=asset.created_at,
        updated_at=asset.updated_at,
    )


def record_to_response(record) -> MaintenanceRecordResponse:
    return MaintenanceRecordResponse(**_record_fields(record))


def _record_fields(record) -> dict:
    return {
        "id": record.id,
        "asset_id": record.asset_id,
        "service_type": record.service_type,
        "service_date": format_date(record.service_date),
        "description": record.description,
        "cost": float(record.cost) if record.cost is not None else None,
        "performed_by": record.performed_by,
        "next_maintenance_date": format_date(record.next_maintenance_date),
        "next_maintenance_notes": record.next_maintenance_notes,
        "created_at": record.created_at,
        "updated_at": record.updated_at,
    }


def parse_date(value, label: str) -> date:
    """
    Accepts 'YYYY-MM-DD' or a full ISO timestamp. Timestamps carrying an
    offset are converted to UTC before being truncated to their date.
    """
    if isinstance(value, datetime):
        return _utc_date(value)
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(value)
    except (TypeError, ValueError):
        pass
    try:
        return _utc_date(datetime.fromisoformat(value))
    except (TypeError, ValueError):
        raise validation_error(f"Invalid {label}.")


def _utc_date(value: datetime) -> date:
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc)
    return value.date()


def _is_blank(value) -> bool:
    return value is None or not str(value).strip()


# -------------------------------
# Authentication
# -------------------------------

class AuthService:
    def __init__(self, users: UserRepository):
        self.users = users

    def register(self, data: RegisterRequest) -> AuthResponse:
        if self.users.find_by_email(data.email):
            raise validation_error("Email already in use")

        try:
            user = self.users.create(
                name=data.name,
                email=data.email,
                password_hash=get_password_hash(data.password),
            )
        except IntegrityError:
            raise validation_error("Email already in use")

        logger.info("Registered user %s", user.id)
        return AuthResponse(
            message="User created successfully",
            user=user_to_response(user),
            token=create_access_token(user.id, user.email),
        )

    def login(self, data: LoginRequest) -> AuthResponse:
        user = self.users.find_by_email(data.email)
        # Unknown email and wrong password must be indistinguishable.
        if not user or not verify_password(data.password, user.password_hash):
            logger.warning("Failed login for %s", data.email)
            raise ServiceError(ErrorKind.AUTHENTICATION, INVALID_CREDENTIALS)

        return AuthResponse(
            message="Login successful",
            user=user_to_response(user),
            token=create_access_token(user.id, user.email),
        )

    def get_user_by_id(self, user_id: int) -> Optional[UserResponse]:
        user = self.users.find_by_id(user_id)
        if not user:
            return None
        return user_to_response(user)


# -------------------------------
# Assets
# -------------------------------

class AssetService:
    def __init__(self, assets: AssetRepository):
        self.assets = assets

    def create_asset(self, data: AssetCreate, user_id: int) -> AssetResponse:
        if _is_blank(data.name):
            raise validation_error("Asset name is required.")

        asset = self.assets.create(user_id=user_id, name=data.name, description=data.description)
        return asset_to_response(asset)

    def get_asset_by_id(self, asset_id: int, user_id: int) -> Optional[AssetResponse]:
        asset = self.assets.find_by_id(asset_id, user_id)
        if not asset:
            return None
        return asset_to_response(asset)

    def list_assets(self, user_id: int) -> List[AssetResponse]:
        return [asset_to_response(a) for a in self.assets.find_all_by_user_id(user_id)]

    def update_asset(self, asset_id: int, user_id: int, data: AssetUpdate) -> AssetResponse:
        if not self.assets.find_by_id(asset_id, user_id):
            raise not_found(ASSET_NOT_FOUND)

        changes = data.model_dump(exclude_unset=True)
        if "name" in changes and _is_blank(changes["name"]):
            raise validation_error("Asset name cannot be empty.")

        asset = self.assets.update(asset_id, user_id, changes)
        if not asset:
            # Deleted between the ownership check and the update.
            raise not_found(ASSET_NOT_FOUND)
        return asset_to_response(asset)

    def delete_asset(self, asset_id: int, user_id: int) -> bool:
        if not self.assets.find_by_id(asset_id, user_id):
            raise not_found(ASSET_NOT_FOUND)
        return self.assets.delete(asset_id, user_id)


# -------------------------------
# Maintenance Records
# -------------------------------

class MaintenanceRecordService:
    def __init__(self, records: MaintenanceRecordRepository, assets: AssetRepository):
        self.records = records
        self.assets = assets

    def _owned_record(self, record_id: int, user_id: int):
        # Missing and foreign records raise the same error.
        record = self.records.find_by_id(record_id)
        if not record or not self.assets.find_by_id(record.asset_id, user_id):
            raise not_found(RECORD_NOT_FOUND)
        return record

    @staticmethod
    def _check_date_order(service_date: date, next_maintenance_date: Optional[date]):
        if next_maintenance_date is not None and next_maintenance_date < service_date:
            raise ServiceError(
                ErrorKind.INVALID_DATE_ORDER,
                "Next maintenance date cannot be earlier than the service date."
            )

    def create_record(self, data: MaintenanceRecordCreate, user_id: int) -> MaintenanceRecordResponse:
        if not self.assets.find_by_id(data.asset_id, user_id):
            raise not_found(ASSET_NOT_FOUND)

        if _is_blank(data.service_date):
            raise validation_error("Service date is required.")
        service_date = parse_date(data.service_date, "service date")

        next_maintenance_date = None
        if data.next_maintenance_date:
            next_maintenance_date = parse_date(data.next_maintenance_date, "next maintenance date")

        if _is_blank(data.service_type):
            raise validation_error("Service type is required.")
        self._check_date_order(service_date, next_maintenance_date)

        record = self.records.create(
            asset_id=data.asset_id,
            service_type=data.service_type,
            service_date=service_date,
            description=data.description,
            cost=data.cost,
            performed_by=data.performed_by,
            next_maintenance_date=next_maintenance_date,
            next_maintenance_notes=data.next_maintenance_notes,
        )
        return record_to_response(record)

    def get_record_by_id(self, record_id: int, user_id: int) -> MaintenanceRecordResponse:
        return record_to_response(self._owned_record(record_id, user_id))

    def list_by_asset(self, asset_id: int, user_id: int) -> List[MaintenanceRecordResponse]:
        if not self.assets.find_by_id(asset_id, user_id):
            raise not_found(ASSET_NOT_FOUND)
        return [record_to_response(r) for r in self.records.find_all_by_asset_id(asset_id)]

    def update_record(self, record_id: int, user_id: int, data: MaintenanceRecordUpdate) -> MaintenanceRecordResponse:
        existing = self._owned_record(record_id, user_id)
        changes = data.model_dump(exclude_unset=True)

        if "service_type" in changes and _is_blank(changes["service_type"]):
            raise validation_error("Service type cannot be empty.")

        if "service_date" in changes:
            if _is_blank(changes["service_date"]):
                raise validation_error("Service date is required.")
            changes["service_date"] = parse_date(changes["service_date"], "service date")

        # An empty string leaves the stored next date alone; only null clears it.
        if changes.get("next_maintenance_date") == "":
            del changes["next_maintenance_date"]
        elif "next_maintenance_date" in changes:
            value = changes["next_maintenance_date"]
            changes["next_maintenance_date"] = (
                parse_date(value, "next maintenance date") if value is not None else None
            )

        # Check against the dates the row will hold after the update.
        effective_service_date = changes.get("service_date", existing.service_date)
        effective_next_date = changes.get("next_maintenance_date", existing.next_maintenance_date)
        self._check_date_order(effective_service_date, effective_next_date)

        if not changes:
            return record_to_response(existing)

        record = self.records.update(record_id, user_id, changes)
        if not record:
            raise not_found(RECORD_NOT_FOUND)
        return record_to_response(record)

    def delete_record(self, record_id: int, user_id: int) -> bool:
        self._owned_record(record_id, user_id)
        return self.records.delete(record_id, user_id)

    def upcoming_for_user(self, user_id: int) -> List[UpcomingMaintenanceResponse]:
        return [
            UpcomingMaintenanceResponse(**_record_fields(record), asset_name=asset_name)
            for record, asset_name in self.records.find_upcoming_by_user_id(user_id)
        ]
