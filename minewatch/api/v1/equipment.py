import logging
from typing import Optional
from fastapi import APIRouter, Depends, Query, status

from minewatch.api.deps import get_equipment_repository
from minewatch.schemas.envelope import ApiResponse, ok
from minewatch.schemas.equipment import (
    EquipmentCreate, EquipmentRead, HistoryEntryRead, StatusChange,
    FuelLevelUpdate, FuelConsumption, OperatingHoursUpdate, OperatingHoursIncrement,
)
from minewatch.services import equipment_service
from minewatch.services.equipment_repository import EquipmentRepository

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/equipment", tags=["equipment"])


@router.post("", response_model=ApiResponse, response_model_exclude_none=True, status_code=status.HTTP_201_CREATED)
async def create_equipment(payload: EquipmentCreate, repo: EquipmentRepository = Depends(get_equipment_repository)):
    logger.info("POST /api/equipment code=%s type=%s", payload.code, payload.equipment_type)
    equipment = await equipment_service.create_equipment(
        repo, payload.code, payload.equipment_type, payload.fuel_level, payload.operating_hours
    )
    return ok("Equipment created successfully", EquipmentRead.from_entity(equipment))


@router.get("", response_model=ApiResponse)
async def list_equipment(
    equipment_type: Optional[str] = Query(None, alias="type"),
    equipment_status: Optional[str] = Query(None, alias="status"),
    repo: EquipmentRepository = Depends(get_equipment_repository),
):
    items = await equipment_service.list_equipment(repo, equipment_type, equipment_status)
    return ok(
        "Equipment retrieved successfully",
        [EquipmentRead.from_entity(e) for e in items],
        {"total": len(items), "filters": {"type": equipment_type, "status": equipment_status}},
    )


@router.get("/stats", response_model=ApiResponse, response_model_exclude_none=True)
async def get_stats(repo: EquipmentRepository = Depends(get_equipment_repository)):
    stats = await equipment_service.equipment_stats(repo)
    return ok("Equipment statistics retrieved successfully", stats)


@router.get("/{equipment_id}", response_model=ApiResponse, response_model_exclude_none=True)
async def get_equipment(equipment_id: str, repo: EquipmentRepository = Depends(get_equipment_repository)):
    equipment = await equipment_service.get_equipment(repo, equipment_id)
    return ok("Equipment found", EquipmentRead.from_entity(equipment))


@router.patch("/{equipment_id}/status", response_model=ApiResponse, response_model_exclude_none=True)
async def change_status(equipment_id: str, payload: StatusChange,
                        repo: EquipmentRepository = Depends(get_equipment_repository)):
    equipment = await equipment_service.change_equipment_status(repo, equipment_id, payload.status)
    return ok("Status updated", EquipmentRead.from_entity(equipment))


@router.put("/{equipment_id}/fuel", response_model=ApiResponse, response_model_exclude_none=True)
async def put_fuel(equipment_id: str, payload: FuelLevelUpdate,
                   repo: EquipmentRepository = Depends(get_equipment_repository)):
    equipment = await equipment_service.set_fuel_level(repo, equipment_id, payload.value)
    return ok("Fuel level updated", EquipmentRead.from_entity(equipment))


@router.post("/{equipment_id}/fuel/consume", response_model=ApiResponse, response_model_exclude_none=True)
async def post_fuel_consumption(equipment_id: str, payload: FuelConsumption,
                                repo: EquipmentRepository = Depends(get_equipment_repository)):
    equipment = await equipment_service.consume_fuel(repo, equipment_id, payload.amount)
    return ok("Fuel consumed", EquipmentRead.from_entity(equipment))


@router.put("/{equipment_id}/hours", response_model=ApiResponse, response_model_exclude_none=True)
async def put_hours(equipment_id: str, payload: OperatingHoursUpdate,
                    repo: EquipmentRepository = Depends(get_equipment_repository)):
    equipment = await equipment_service.set_operating_hours(repo, equipment_id, payload.value)
    return ok("Operating hours updated", EquipmentRead.from_entity(equipment))


@router.post("/{equipment_id}/hours/add", response_model=ApiResponse, response_model_exclude_none=True)
async def post_hours(equipment_id: str, payload: OperatingHoursIncrement,
                     repo: EquipmentRepository = Depends(get_equipment_repository)):
    equipment = await equipment_service.add_operating_hours(repo, equipment_id, payload.amount)
    return ok("Operating hours added", EquipmentRead.from_entity(equipment))


@router.post("/{equipment_id}/reset", response_model=ApiResponse, response_model_exclude_none=True)
async def reset(equipment_id: str, repo: EquipmentRepository = Depends(get_equipment_repository)):
    equipment = await equipment_service.reset_equipment(repo, equipment_id)
    return ok("Equipment reset", EquipmentRead.from_entity(equipment))


@router.get("/{equipment_id}/history", response_model=ApiResponse)
async def get_history(equipment_id: str, repo: EquipmentRepository = Depends(get_equipment_repository)):
    history = await equipment_service.equipment_history(repo, equipment_id)
    return ok(
        "Equipment history retrieved successfully",
        [HistoryEntryRead.from_entry(h) for h in history],
        {"total": len(history)},
    )


@router.delete("/{equipment_id}", response_model=ApiResponse, response_model_exclude_none=True)
async def delete_equipment(equipment_id: str, repo: EquipmentRepository = Depends(get_equipment_repository)):
    await equipment_service.delete_equipment(repo, equipment_id)
    return ok("Equipment deleted", {"id": equipment_id})
