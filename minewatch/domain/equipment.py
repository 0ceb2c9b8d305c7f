"""
Equipment entity: identity, status machine, fuel/hours counters and an
append-only history of every mutation.

Instances are not thread-safe. Callers sharing one instance across threads
must serialize access themselves.
"""
import math
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from types import MappingProxyType
from typing import Any, Callable, FrozenSet, Iterable, List, Mapping, Optional, Tuple

from minewatch.domain.errors import (
    InsufficientResourceError,
    InvalidTransitionError,
    ValidationError,
)
from minewatch.domain.status import (
    EquipmentStatus,
    EquipmentType,
    allowed_transitions,
    can_transition,
    parse_equipment_status,
    parse_equipment_type,
)

MIN_CODE_LENGTH = 3
RESET_FUEL_LEVEL = 100.0


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


Clock = Callable[[], datetime]


class HistoryAction(str, Enum):
    CREATE = "create"
    CHANGE_STATUS = "change_status"
    SET_FUEL_LEVEL = "set_fuel_level"
    CONSUME_FUEL = "consume_fuel"
    SET_OPERATING_HOURS = "set_operating_hours"
    ADD_OPERATING_HOURS = "add_operating_hours"
    RESET = "reset"


@dataclass(frozen=True)
class HistoryEntry:
    action: HistoryAction
    value: Any
    timestamp: datetime

    def __post_init__(self):
        # mapping values are copied behind a read-only view
        if isinstance(self.value, Mapping):
            object.__setattr__(self, "value", MappingProxyType(dict(self.value)))

    def plain_value(self) -> Any:
        """The value as JSON-friendly data (read-only mappings become dicts)."""
        if isinstance(self.value, Mapping):
            return dict(self.value)
        return self.value


@dataclass(frozen=True)
class EquipmentSnapshot:
    id: str
    code: str
    equipment_type: EquipmentType
    status: EquipmentStatus
    fuel_level: float
    operating_hours: float


def require_non_negative(value, label: str) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValidationError(f"{label} must be a number")
    if math.isnan(value) or math.isinf(value):
        raise ValidationError(f"{label} must be a finite number")
    if value < 0:
        raise ValidationError(f"{label} cannot be negative")
    return float(value)


def _validate_code(code) -> str:
    if not isinstance(code, str) or not code.strip():
        raise ValidationError("Equipment code is required")
    code = code.strip()
    if len(code) < MIN_CODE_LENGTH:
        raise ValidationError(f"Equipment code must be at least {MIN_CODE_LENGTH} characters")
    return code


class Equipment:
    def __init__(
        self,
        id: str,
        code: str,
        equipment_type,
        fuel_level: float = RESET_FUEL_LEVEL,
        operating_hours: float = 0.0,
        clock: Clock = utcnow,
    ):
        now = clock()
        self._assign(id, code, equipment_type, EquipmentStatus.AVAILABLE,
                     fuel_level, operating_hours, now, now, clock)
        self._history: List[HistoryEntry] = []
        self._history.append(HistoryEntry(
            HistoryAction.CREATE,
            {"fuel_level": self._fuel_level, "operating_hours": self._operating_hours},
            now,
        ))

    @classmethod
    def restore(
        cls,
        id: str,
        code: str,
        equipment_type,
        status,
        fuel_level: float,
        operating_hours: float,
        created_at: datetime,
        updated_at: datetime,
        history: Iterable[HistoryEntry],
        clock: Clock = utcnow,
    ) -> "Equipment":
        """Rebuild a persisted entity. Runs the same field validation as the
        constructor and requires the history to start with a create record."""
        entries = list(history)
        if not entries or entries[0].action != HistoryAction.CREATE:
            raise ValidationError("Equipment history must start with a create record")
        equipment = cls.__new__(cls)
        equipment._assign(id, code, equipment_type, parse_equipment_status(status),
                          fuel_level, operating_hours, created_at, updated_at, clock)
        equipment._history = entries
        return equipment

    def _assign(self, id, code, equipment_type, status, fuel_level, operating_hours,
                created_at, updated_at, clock) -> None:
        if not isinstance(id, str) or not id.strip():
            raise ValidationError("Equipment id is required")
        code = _validate_code(code)
        equipment_type = parse_equipment_type(equipment_type)
        fuel_level = require_non_negative(fuel_level, "Fuel level")
        operating_hours = require_non_negative(operating_hours, "Operating hours")

        self._id = id
        self._code = code
        self._equipment_type = equipment_type
        self._status = status
        self._fuel_level = fuel_level
        self._operating_hours = operating_hours
        self._created_at = created_at
        self._updated_at = updated_at
        self._clock = clock

    # Read-only state

    @property
    def id(self) -> str:
        return self._id

    @property
    def code(self) -> str:
        return self._code

    @property
    def equipment_type(self) -> EquipmentType:
        return self._equipment_type

    @property
    def status(self) -> EquipmentStatus:
        return self._status

    @property
    def fuel_level(self) -> float:
        return self._fuel_level

    @property
    def operating_hours(self) -> float:
        return self._operating_hours

    @property
    def created_at(self) -> datetime:
        return self._created_at

    @property
    def updated_at(self) -> datetime:
        return self._updated_at

    @property
    def history(self) -> Tuple[HistoryEntry, ...]:
        return tuple(self._history)

    # Queries

    def can_operate(self) -> bool:
        """True when the equipment may be put into operation (status AVAILABLE).
        Use change_status(OPERATING) to actually start operating."""
        return self._status == EquipmentStatus.AVAILABLE

    def allowed_transitions(self) -> FrozenSet[EquipmentStatus]:
        return allowed_transitions(self._status)

    def snapshot(self) -> EquipmentSnapshot:
        return EquipmentSnapshot(
            id=self._id,
            code=self._code,
            equipment_type=self._equipment_type,
            status=self._status,
            fuel_level=self._fuel_level,
            operating_hours=self._operating_hours,
        )

    # Mutations. Each validates before touching state, then records exactly
    # one history entry.

    def change_status(self, new_status) -> None:
        target = parse_equipment_status(new_status)
        if not can_transition(self._status, target):
            allowed = ", ".join(sorted(s.value for s in allowed_transitions(self._status)))
            raise InvalidTransitionError(
                f"Cannot change status from {self._status.value} to {target.value}",
                [f"Allowed transitions from {self._status.value}: {allowed}"],
            )
        self._status = target
        self._record(HistoryAction.CHANGE_STATUS, target.value)

    def set_fuel_level(self, value: float) -> None:
        value = require_non_negative(value, "Fuel level")
        self._fuel_level = value
        self._record(HistoryAction.SET_FUEL_LEVEL, value)

    def consume_fuel(self, amount: float) -> None:
        amount = require_non_negative(amount, "Fuel amount")
        if self._fuel_level - amount < 0:
            raise InsufficientResourceError(
                f"Insufficient fuel: requested {amount:g}, available {self._fuel_level:g}"
            )
        self._fuel_level -= amount
        self._record(HistoryAction.CONSUME_FUEL, amount)

    def set_operating_hours(self, value: float) -> None:
        value = require_non_negative(value, "Operating hours")
        self._operating_hours = value
        self._record(HistoryAction.SET_OPERATING_HOURS, value)

    def add_operating_hours(self, amount: float) -> None:
        amount = require_non_negative(amount, "Operating hours")
        total = self._operating_hours + amount
        if not math.isfinite(total):
            raise ValidationError(
                f"Operating hours overflow: cannot add {amount:g} to {self._operating_hours:g}"
            )
        self._operating_hours = total
        self._record(HistoryAction.ADD_OPERATING_HOURS, amount)

    def reset(self) -> None:
        self._status = EquipmentStatus.AVAILABLE
        self._fuel_level = RESET_FUEL_LEVEL
        self._operating_hours = 0.0
        self._record(HistoryAction.RESET, None)

    def _record(self, action: HistoryAction, value: Optional[Any]) -> None:
        now = self._clock()
        self._updated_at = now
        self._history.append(HistoryEntry(action, value, now))

    def __repr__(self) -> str:
        return (
            f"Equipment(id={self._id!r}, code={self._code!r}, "
            f"type={self._equipment_type.value}, status={self._status.value})"
        )
