import logging
import uuid
from typing import Callable, Dict, List, Optional, Tuple

from minewatch.core.config import settings
from minewatch.domain.equipment import Equipment, HistoryEntry
from minewatch.domain.errors import DuplicateError, NotFoundError, ValidationError
from minewatch.domain.status import (
    EquipmentType,
    parse_equipment_status,
    parse_equipment_type,
)
from minewatch.services.equipment_repository import EquipmentRepository

logger = logging.getLogger(__name__)

DEMO_EQUIPMENT: Tuple[Tuple[str, EquipmentType], ...] = (
    ("VOL-DEMO", EquipmentType.DUMP_TRUCK),
    ("EXC-DEMO", EquipmentType.EXCAVATOR),
)


def _normalize_enum_input(value):
    return value.strip().upper() if isinstance(value, str) else value


def _validate_create_input(code, equipment_type) -> List[str]:
    errors = []
    if not isinstance(code, str) or not code.strip():
        errors.append("Equipment code is required")
    elif len(code.strip()) > settings.EQUIPMENT_CODE_MAX_LENGTH:
        errors.append(f"Equipment code cannot exceed {settings.EQUIPMENT_CODE_MAX_LENGTH} characters")

    if equipment_type is None or (isinstance(equipment_type, str) and not equipment_type.strip()):
        errors.append("Equipment type is required")
    else:
        try:
            parse_equipment_type(_normalize_enum_input(equipment_type))
        except ValidationError as exc:
            errors.append(exc.message)
    return errors


async def create_equipment(
    repo: EquipmentRepository,
    code: str,
    equipment_type,
    fuel_level: Optional[float] = None,
    operating_hours: float = 0.0,
) -> Equipment:
    logger.info("Creating equipment %s (%s)", code, equipment_type)
    errors = _validate_create_input(code, equipment_type)
    if errors:
        raise ValidationError("Invalid input data", errors)

    if await repo.exists_by_code(code.strip()):
        raise DuplicateError(f"Equipment with code {code.strip()} already exists")

    equipment = Equipment(
        id=str(uuid.uuid4()),
        code=code,
        equipment_type=_normalize_enum_input(equipment_type),
        fuel_level=settings.DEFAULT_FUEL_LEVEL if fuel_level is None else fuel_level,
        operating_hours=operating_hours,
    )
    await repo.create(equipment)
    logger.info("Equipment created: %s with id %s", equipment.code, equipment.id)
    return equipment


async def list_equipment(
    repo: EquipmentRepository,
    equipment_type: Optional[str] = None,
    status: Optional[str] = None,
) -> List[Equipment]:
    # type wins when both filters are given
    if equipment_type:
        return await repo.find_by_type(parse_equipment_type(_normalize_enum_input(equipment_type)))
    if status:
        return await repo.find_by_status(parse_equipment_status(_normalize_enum_input(status)))
    return await repo.get_all()


async def get_equipment(repo: EquipmentRepository, equipment_id: str) -> Equipment:
    equipment = await repo.get_by_id(equipment_id)
    if equipment is None:
        raise NotFoundError(f"Equipment not found with id: {equipment_id}")
    return equipment


async def _apply(
    repo: EquipmentRepository,
    equipment_id: str,
    operation: Callable[[Equipment], None],
    description: str,
) -> Equipment:
    equipment = await get_equipment(repo, equipment_id)
    operation(equipment)
    await repo.update(equipment)
    logger.info("%s applied to %s", description, equipment.code)
    return equipment


async def change_equipment_status(repo: EquipmentRepository, equipment_id: str, status) -> Equipment:
    return await _apply(
        repo, equipment_id,
        lambda e: e.change_status(_normalize_enum_input(status)),
        f"Status change to {status}",
    )


async def set_fuel_level(repo: EquipmentRepository, equipment_id: str, value: float) -> Equipment:
    return await _apply(repo, equipment_id, lambda e: e.set_fuel_level(value), "Fuel level set")


async def consume_fuel(repo: EquipmentRepository, equipment_id: str, amount: float) -> Equipment:
    return await _apply(repo, equipment_id, lambda e: e.consume_fuel(amount), "Fuel consumption")


async def set_operating_hours(repo: EquipmentRepository, equipment_id: str, value: float) -> Equipment:
    return await _apply(repo, equipment_id, lambda e: e.set_operating_hours(value), "Operating hours set")


async def add_operating_hours(repo: EquipmentRepository, equipment_id: str, amount: float) -> Equipment:
    return await _apply(repo, equipment_id, lambda e: e.add_operating_hours(amount), "Operating hours added")


async def reset_equipment(repo: EquipmentRepository, equipment_id: str) -> Equipment:
    return await _apply(repo, equipment_id, lambda e: e.reset(), "Reset")


async def equipment_history(repo: EquipmentRepository, equipment_id: str) -> Tuple[HistoryEntry, ...]:
    equipment = await get_equipment(repo, equipment_id)
    return equipment.history


async def delete_equipment(repo: EquipmentRepository, equipment_id: str) -> None:
    await repo.delete(equipment_id)


async def equipment_stats(repo: EquipmentRepository) -> Dict[str, object]:
    return await repo.stats()


async def seed_demo_equipment(repo: EquipmentRepository) -> int:
    """Insert the demo fleet, skipping codes that already exist."""
    created = 0
    for code, equipment_type in DEMO_EQUIPMENT:
        if await repo.exists_by_code(code):
            continue
        await repo.create(Equipment(id=str(uuid.uuid4()), code=code, equipment_type=equipment_type))
        created += 1
    logger.info("Demo data seeded: %d equipment created", created)
    return created
