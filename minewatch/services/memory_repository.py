import logging
from typing import Dict, List, Optional

from minewatch.domain.equipment import Equipment
from minewatch.domain.errors import DuplicateError, NotFoundError
from minewatch.domain.status import EquipmentStatus, EquipmentType
from minewatch.services.equipment_repository import EquipmentRepository

logger = logging.getLogger(__name__)


class InMemoryEquipmentRepository(EquipmentRepository):
    """Dict-backed repository keyed by id; keeps insertion order.

    Entities are stored by reference. Every method runs without awaiting,
    so a read-modify-write from one coroutine cannot interleave with another
    on the same event loop.
    """

    def __init__(self):
        self._items: Dict[str, Equipment] = {}

    async def create(self, equipment: Equipment) -> None:
        if await self.exists_by_code(equipment.code):
            raise DuplicateError(f"Equipment with code {equipment.code} already exists")
        self._items[equipment.id] = equipment
        logger.info("Equipment stored: %s (%s)", equipment.code, equipment.equipment_type.value)

    async def get_all(self) -> List[Equipment]:
        return list(self._items.values())

    async def get_by_id(self, equipment_id: str) -> Optional[Equipment]:
        return self._items.get(equipment_id)

    async def update(self, equipment: Equipment) -> None:
        if equipment.id not in self._items:
            raise NotFoundError(f"Equipment not found with id: {equipment.id}")
        self._items[equipment.id] = equipment

    async def delete(self, equipment_id: str) -> None:
        removed = self._items.pop(equipment_id, None)
        if removed is None:
            raise NotFoundError(f"Equipment not found with id: {equipment_id}")
        logger.info("Equipment deleted: %s", removed.code)

    async def find_by_type(self, equipment_type: EquipmentType) -> List[Equipment]:
        return [e for e in self._items.values() if e.equipment_type == equipment_type]

    async def find_by_status(self, status: EquipmentStatus) -> List[Equipment]:
        return [e for e in self._items.values() if e.status == status]

    async def exists_by_code(self, code: str) -> bool:
        return any(e.code == code for e in self._items.values())

    def clear(self) -> None:
        self._items.clear()
