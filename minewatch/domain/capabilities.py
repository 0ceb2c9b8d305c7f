"""
Type-specific work capabilities. A capability wraps an Equipment instead of
subclassing it, so the status machine stays the same for every type.
"""
import math
from typing import List, Protocol

from minewatch.domain.equipment import Equipment, require_non_negative
from minewatch.domain.errors import EquipmentNotOperatingError, ValidationError
from minewatch.domain.status import EquipmentStatus, EquipmentType

DEFAULT_HAUL_CAPACITY_T = 50.0


class Operable(Protocol):
    name: str
    equipment: Equipment


def _require_operating(equipment: Equipment, action: str) -> None:
    if equipment.status != EquipmentStatus.OPERATING:
        raise EquipmentNotOperatingError(
            f"{equipment.code} must be OPERATING to {action} (current: {equipment.status.value})"
        )


class Excavation:
    name = "excavation"

    def __init__(self, equipment: Equipment):
        if equipment.equipment_type != EquipmentType.EXCAVATOR:
            raise ValidationError(f"{equipment.code} is not an excavator")
        self.equipment = equipment
        self.excavated_m3 = 0.0

    def excavate(self, volume_m3: float) -> float:
        _require_operating(self.equipment, "excavate")
        volume_m3 = require_non_negative(volume_m3, "Excavated volume")
        total = self.excavated_m3 + volume_m3
        if not math.isfinite(total):
            raise ValidationError("Excavated volume overflow")
        self.excavated_m3 = total
        return self.excavated_m3


class Haulage:
    name = "haulage"

    def __init__(self, equipment: Equipment, capacity_t: float = DEFAULT_HAUL_CAPACITY_T):
        if equipment.equipment_type != EquipmentType.DUMP_TRUCK:
            raise ValidationError(f"{equipment.code} is not a dump truck")
        self.equipment = equipment
        self.capacity_t = require_non_negative(capacity_t, "Load capacity")
        self.current_load_t = 0.0

    def load(self, tonnes: float) -> float:
        _require_operating(self.equipment, "load")
        tonnes = require_non_negative(tonnes, "Load")
        if self.current_load_t + tonnes > self.capacity_t:
            raise ValidationError(
                f"Load of {tonnes:g} t exceeds remaining capacity "
                f"{self.capacity_t - self.current_load_t:g} t"
            )
        self.current_load_t += tonnes
        return self.current_load_t

    def unload(self) -> float:
        _require_operating(self.equipment, "unload")
        delivered = self.current_load_t
        self.current_load_t = 0.0
        return delivered


def capabilities_for(equipment: Equipment) -> List[Operable]:
    if equipment.equipment_type == EquipmentType.EXCAVATOR:
        return [Excavation(equipment)]
    if equipment.equipment_type == EquipmentType.DUMP_TRUCK:
        return [Haulage(equipment)]
    return []
