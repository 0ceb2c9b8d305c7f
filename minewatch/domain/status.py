from enum import Enum
from typing import Dict, FrozenSet, Type, TypeVar

from minewatch.domain.errors import ValidationError


class EquipmentType(str, Enum):
    DUMP_TRUCK = "DUMP_TRUCK"
    EXCAVATOR = "EXCAVATOR"
    BULLDOZER = "BULLDOZER"
    CRANE = "CRANE"
    DRILL = "DRILL"


class EquipmentStatus(str, Enum):
    AVAILABLE = "AVAILABLE"
    OPERATING = "OPERATING"
    MAINTENANCE = "MAINTENANCE"
    INACTIVE = "INACTIVE"


# Allowed next states per current state. Self-transitions are never listed.
TRANSITIONS: Dict[EquipmentStatus, FrozenSet[EquipmentStatus]] = {
    EquipmentStatus.AVAILABLE: frozenset(
        {EquipmentStatus.OPERATING, EquipmentStatus.MAINTENANCE, EquipmentStatus.INACTIVE}
    ),
    EquipmentStatus.OPERATING: frozenset(
        {EquipmentStatus.AVAILABLE, EquipmentStatus.MAINTENANCE}
    ),
    EquipmentStatus.MAINTENANCE: frozenset(
        {EquipmentStatus.AVAILABLE, EquipmentStatus.INACTIVE}
    ),
    EquipmentStatus.INACTIVE: frozenset(
        {EquipmentStatus.AVAILABLE, EquipmentStatus.MAINTENANCE}
    ),
}


def allowed_transitions(current: EquipmentStatus) -> FrozenSet[EquipmentStatus]:
    return TRANSITIONS[current]


def can_transition(current: EquipmentStatus, target: EquipmentStatus) -> bool:
    return target in TRANSITIONS[current]


E = TypeVar("E", EquipmentType, EquipmentStatus)


def _coerce(enum_cls: Type[E], value, label: str) -> E:
    if isinstance(value, enum_cls):
        return value
    if isinstance(value, str):
        try:
            return enum_cls(value)
        except ValueError:
            pass
    valid = ", ".join(member.value for member in enum_cls)
    raise ValidationError(f"{label} {value!r} is not valid. Valid values: {valid}")


def parse_equipment_type(value) -> EquipmentType:
    """Return the EquipmentType for `value` or raise ValidationError."""
    return _coerce(EquipmentType, value, "Equipment type")


def parse_equipment_status(value) -> EquipmentStatus:
    """Return the EquipmentStatus for `value` or raise ValidationError."""
    return _coerce(EquipmentStatus, value, "Status")
