# keeptrack/api/assets.py

from typing import List

from fastapi import APIRouter, HTTPException, status, Depends

from keeptrack.api.deps import get_asset_service, get_current_user, get_record_service
from keeptrack.core.security import TokenPayload
from keeptrack.core.services import AssetService, MaintenanceRecordService
from keeptrack.models.schemas import (
    AssetCreate,
    AssetEnvelope,
    AssetResponse,
    AssetUpdate,
    MaintenanceRecordResponse,
    MessageResponse,
)


router = APIRouter(prefix="/assets", tags=["assets"])


# -------------------------------
# Asset Endpoints
# -------------------------------

@router.post("", response_model=AssetEnvelope, status_code=status.HTTP_201_CREATED)
def create_asset(
    data: AssetCreate,
    current_user: TokenPayload = Depends(get_current_user),
    service: AssetService = Depends(get_asset_service)
):
    asset = service.create_asset(data, current_user.user_id)
    return {"message": "Asset created successfully", "asset": asset}


@router.get("", response_model=List[AssetResponse])
def list_assets(
    current_user: TokenPayload = Depends(get_current_user),
    service: AssetService = Depends(get_asset_service)
):
    """
    Lists the caller's assets ordered by name.
    """
    return service.list_assets(current_user.user_id)


@router.get("/{asset_id}", response_model=AssetResponse)
def get_asset(
    asset_id: int,
    current_user: TokenPayload = Depends(get_current_user),
    service: AssetService = Depends(get_asset_service)
):
    asset = service.get_asset_by_id(asset_id, current_user.user_id)
    if not asset:
        raise HTTPException(status_code=404, detail="Asset not found.")
    return asset


@router.put("/{asset_id}", response_model=AssetEnvelope)
def update_asset(
    asset_id: int,
    data: AssetUpdate,
    current_user: TokenPayload = Depends(get_current_user),
    service: AssetService = Depends(get_asset_service)
):
    asset = service.update_asset(asset_id, current_user.user_id, data)
    return {"message": "Asset updated successfully", "asset": asset}


@router.delete("/{asset_id}", response_model=MessageResponse)
def delete_asset(
    asset_id: int,
    current_user: TokenPayload = Depends(get_current_user),
    service: AssetService = Depends(get_asset_service)
):
    """
    Deletes the asset; its maintenance records are removed with it.
    """
    if not service.delete_asset(asset_id, current_user.user_id):
        raise HTTPException(status_code=404, detail="Asset not found.")
    return {"message": "Asset deleted successfully."}


# -------------------------------
# Nested Records
# -------------------------------

@router.get("/{asset_id}/maintenance-records", response_model=List[MaintenanceRecordResponse])
def list_asset_records(
    asset_id: int,
    current_user: TokenPayload = Depends(get_current_user),
    service: MaintenanceRecordService = Depends(get_record_service)
):
    return service.list_by_asset(asset_id, current_user.user_id)
