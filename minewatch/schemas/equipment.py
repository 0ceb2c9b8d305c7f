from typing import Optional, List, Any
from pydantic import BaseModel
from datetime import datetime

from minewatch.domain.capabilities import capabilities_for
from minewatch.domain.equipment import Equipment, HistoryEntry


class EquipmentCreate(BaseModel):
    code: str
    equipment_type: str
    fuel_level: Optional[float] = None
    operating_hours: float = 0.0


class StatusChange(BaseModel):
    status: str


class FuelLevelUpdate(BaseModel):
    value: float


class FuelConsumption(BaseModel):
    amount: float


class OperatingHoursUpdate(BaseModel):
    value: float


class OperatingHoursIncrement(BaseModel):
    amount: float


class EquipmentRead(BaseModel):
    id: str
    code: str
    equipment_type: str
    status: str
    fuel_level: float
    operating_hours: float
    can_operate: bool
    allowed_transitions: List[str]
    capabilities: List[str]
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_entity(cls, equipment: Equipment) -> "EquipmentRead":
        snap = equipment.snapshot()
        return cls(
            id=snap.id,
            code=snap.code,
            equipment_type=snap.equipment_type.value,
            status=snap.status.value,
            fuel_level=snap.fuel_level,
            operating_hours=snap.operating_hours,
            can_operate=equipment.can_operate(),
            allowed_transitions=sorted(s.value for s in equipment.allowed_transitions()),
            capabilities=[c.name for c in capabilities_for(equipment)],
            created_at=equipment.created_at,
            updated_at=equipment.updated_at,
        )


class HistoryEntryRead(BaseModel):
    action: str
    value: Optional[Any] = None
    timestamp: datetime

    @classmethod
    def from_entry(cls, entry: HistoryEntry) -> "HistoryEntryRead":
        return cls(action=entry.action.value, value=entry.plain_value(), timestamp=entry.timestamp)
