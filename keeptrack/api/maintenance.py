# keeptrack/api/maintenance.py

from typing import List

from fastapi import APIRouter, HTTPException, status, Depends

from keeptrack.api.deps import get_current_user, get_record_service
from keeptrack.core.security import TokenPayload
from keeptrack.core.services import MaintenanceRecordService
from keeptrack.models.schemas import (
    MaintenanceRecordCreate,
    MaintenanceRecordEnvelope,
    MaintenanceRecordResponse,
    MaintenanceRecordUpdate,
    MessageResponse,
    UpcomingMaintenanceResponse,
)


router = APIRouter(prefix="/maintenance-records", tags=["maintenance-records"])


# Registered before "/{record_id}" so the literal path wins.
@router.get("/panel/upcoming", response_model=List[UpcomingMaintenanceResponse])
def upcoming_panel(
    current_user: TokenPayload = Depends(get_current_user),
    service: MaintenanceRecordService = Depends(get_record_service)
):
    """
    Latest record per asset and service type that predicts a next date,
    soonest first.
    """
    return service.upcoming_for_user(current_user.user_id)


@router.post("", response_model=MaintenanceRecordEnvelope, status_code=status.HTTP_201_CREATED)
def create_record(
    data: MaintenanceRecordCreate,
    current_user: TokenPayload = Depends(get_current_user),
    service: MaintenanceRecordService = Depends(get_record_service)
):
    record = service.create_record(data, current_user.user_id)
    return {"message": "Maintenance record created successfully", "record": record}


@router.get("/{record_id}", response_model=MaintenanceRecordResponse)
def get_record(
    record_id: int,
    current_user: TokenPayload = Depends(get_current_user),
    service: MaintenanceRecordService = Depends(get_record_service)
):
    return service.get_record_by_id(record_id, current_user.user_id)


@router.put("/{record_id}", response_model=MaintenanceRecordEnvelope)
def update_record(
    record_id: int,
    data: MaintenanceRecordUpdate,
    current_user: TokenPayload = Depends(get_current_user),
    service: MaintenanceRecordService = Depends(get_record_service)
):
    record = service.update_record(record_id, current_user.user_id, data)
    return {"message": "Maintenance record updated successfully", "record": record}


@router.delete("/{record_id}", response_model=MessageResponse)
def delete_record(
    record_id: int,
    current_user: TokenPayload = Depends(get_current_user),
    service: MaintenanceRecordService = Depends(get_record_service)
):
    if not service.delete_record(record_id, current_user.user_id):
        raise HTTPException(status_code=404, detail="Maintenance record not found.")
    return {"message": "Maintenance record deleted successfully."}
