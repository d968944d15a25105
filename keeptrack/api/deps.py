# keeptrack/api/deps.py

from typing import Optional

from fastapi import Depends
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session

from keeptrack import config
from keeptrack.core.errors import ErrorKind, ServiceError
from keeptrack.core.repositories import AssetRepository, MaintenanceRecordRepository, UserRepository
from keeptrack.core.security import TokenPayload, decode_access_token
from keeptrack.core.services import AssetService, AuthService, MaintenanceRecordService
from keeptrack.database import get_db


# Missing tokens are reported by get_current_user, not by the scheme.
oauth2_scheme = OAuth2PasswordBearer(tokenUrl=f"{config.API_PREFIX}/auth/login", auto_error=False)


def get_current_user(token: Optional[str] = Depends(oauth2_scheme)) -> TokenPayload:
    if not token:
        raise ServiceError(ErrorKind.MISSING_TOKEN, "Access token required")
    return decode_access_token(token)


# -------------------------------
# Service factories
# -------------------------------

def get_auth_service(db: Session = Depends(get_db)) -> AuthService:
    return AuthService(UserRepository(db))


def get_asset_service(db: Session = Depends(get_db)) -> AssetService:
    return AssetService(AssetRepository(db))


def get_record_service(db: Session = Depends(get_db)) -> MaintenanceRecordService:
    return MaintenanceRecordService(MaintenanceRecordRepository(db), AssetRepository(db))
