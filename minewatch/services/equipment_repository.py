"""
Equipment repository contract and its SQLModel-backed implementation.

Repositories hand out and accept domain `Equipment` instances. Entities are
rebuilt with `Equipment.restore` and only ever mutated through their own
operations; the repository never writes entity fields directly.
"""
import logging
from abc import ABC, abstractmethod
from collections import Counter, defaultdict
from datetime import datetime, timezone
from typing import Dict, List, Optional, Sequence

from sqlalchemy import select, delete, func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from minewatch.domain.equipment import Equipment, HistoryAction, HistoryEntry
from minewatch.domain.errors import DuplicateError, NotFoundError
from minewatch.domain.status import EquipmentStatus, EquipmentType
from minewatch.models.equipment import EquipmentHistoryRecord, EquipmentRecord

logger = logging.getLogger(__name__)


class EquipmentRepository(ABC):
    @abstractmethod
    async def create(self, equipment: Equipment) -> None:
        """Persist a new entity. Raises DuplicateError if the code is taken."""

    @abstractmethod
    async def get_all(self) -> List[Equipment]:
        ...

    @abstractmethod
    async def get_by_id(self, equipment_id: str) -> Optional[Equipment]:
        ...

    @abstractmethod
    async def update(self, equipment: Equipment) -> None:
        """Persist the entity's current state. Raises NotFoundError."""

    @abstractmethod
    async def delete(self, equipment_id: str) -> None:
        """Raises NotFoundError for unknown ids."""

    @abstractmethod
    async def find_by_type(self, equipment_type: EquipmentType) -> List[Equipment]:
        ...

    @abstractmethod
    async def find_by_status(self, status: EquipmentStatus) -> List[Equipment]:
        ...

    @abstractmethod
    async def exists_by_code(self, code: str) -> bool:
        ...

    async def stats(self) -> Dict[str, object]:
        items = await self.get_all()
        by_type = Counter(e.equipment_type.value for e in items)
        by_status = Counter(e.status.value for e in items)
        return {
            "total": len(items),
            "by_type": {t.value: by_type.get(t.value, 0) for t in EquipmentType},
            "by_status": {s.value: by_status.get(s.value, 0) for s in EquipmentStatus},
        }


def _aware(value: datetime) -> datetime:
    # SQLite drops tzinfo on the way back
    return value if value.tzinfo else value.replace(tzinfo=timezone.utc)


def _history_record(equipment_id: str, seq: int, entry: HistoryEntry) -> EquipmentHistoryRecord:
    return EquipmentHistoryRecord(
        equipment_id=equipment_id,
        seq=seq,
        action=entry.action.value,
        value=entry.plain_value(),
        timestamp=entry.timestamp,
    )


class SqlEquipmentRepository(EquipmentRepository):
    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, equipment: Equipment) -> None:
        if await self.exists_by_code(equipment.code):
            raise DuplicateError(f"Equipment with code {equipment.code} already exists")

        self.session.add(EquipmentRecord(
            id=equipment.id,
            code=equipment.code,
            equipment_type=equipment.equipment_type,
            status=equipment.status,
            fuel_level=equipment.fuel_level,
            operating_hours=equipment.operating_hours,
            created_at=equipment.created_at,
            updated_at=equipment.updated_at,
        ))
        try:
            await self.session.flush()
            for seq, entry in enumerate(equipment.history):
                self.session.add(_history_record(equipment.id, seq, entry))
            await self.session.commit()
        except IntegrityError as exc:
            await self.session.rollback()
            raise DuplicateError(f"Equipment with code {equipment.code} already exists") from exc
        logger.info("Equipment stored: %s (%s)", equipment.code, equipment.equipment_type.value)

    async def get_all(self) -> List[Equipment]:
        res = await self.session.execute(select(EquipmentRecord).order_by(EquipmentRecord.created_at))
        return await self._hydrate(res.scalars().all())

    async def get_by_id(self, equipment_id: str) -> Optional[Equipment]:
        record = await self.session.get(EquipmentRecord, equipment_id)
        if not record:
            return None
        items = await self._hydrate([record])
        return items[0]

    async def update(self, equipment: Equipment) -> None:
        record = await self.session.get(EquipmentRecord, equipment.id)
        if not record:
            raise NotFoundError(f"Equipment not found with id: {equipment.id}")

        record.status = equipment.status
        record.fuel_level = equipment.fuel_level
        record.operating_hours = equipment.operating_hours
        record.updated_at = equipment.updated_at
        self.session.add(record)

        stored = await self.session.scalar(
            select(func.count())
            .select_from(EquipmentHistoryRecord)
            .where(EquipmentHistoryRecord.equipment_id == equipment.id)
        )
        history = equipment.history
        for seq in range(stored or 0, len(history)):
            self.session.add(_history_record(equipment.id, seq, history[seq]))
        await self.session.commit()

    async def delete(self, equipment_id: str) -> None:
        record = await self.session.get(EquipmentRecord, equipment_id)
        if not record:
            raise NotFoundError(f"Equipment not found with id: {equipment_id}")
        await self.session.execute(
            delete(EquipmentHistoryRecord).where(EquipmentHistoryRecord.equipment_id == equipment_id)
        )
        await self.session.delete(record)
        await self.session.commit()
        logger.info("Equipment deleted: %s", record.code)

    async def find_by_type(self, equipment_type: EquipmentType) -> List[Equipment]:
        stmt = (
            select(EquipmentRecord)
            .where(EquipmentRecord.equipment_type == equipment_type)
            .order_by(EquipmentRecord.created_at)
        )
        res = await self.session.execute(stmt)
        return await self._hydrate(res.scalars().all())

    async def find_by_status(self, status: EquipmentStatus) -> List[Equipment]:
        stmt = (
            select(EquipmentRecord)
            .where(EquipmentRecord.status == status)
            .order_by(EquipmentRecord.created_at)
        )
        res = await self.session.execute(stmt)
        return await self._hydrate(res.scalars().all())

    async def exists_by_code(self, code: str) -> bool:
        res = await self.session.execute(select(EquipmentRecord.id).where(EquipmentRecord.code == code))
        return res.first() is not None

    async def _hydrate(self, records: Sequence[EquipmentRecord]) -> List[Equipment]:
        if not records:
            return []
        ids = [r.id for r in records]
        res = await self.session.execute(
            select(EquipmentHistoryRecord)
            .where(EquipmentHistoryRecord.equipment_id.in_(ids))
            .order_by(EquipmentHistoryRecord.equipment_id, EquipmentHistoryRecord.seq)
        )
        history: Dict[str, List[HistoryEntry]] = defaultdict(list)
        for row in res.scalars().all():
            history[row.equipment_id].append(
                HistoryEntry(HistoryAction(row.action), row.value, _aware(row.timestamp))
            )

        return [
            Equipment.restore(
                id=r.id,
                code=r.code,
                equipment_type=r.equipment_type,
                status=r.status,
                fuel_level=r.fuel_level,
                operating_hours=r.operating_hours,
                created_at=_aware(r.created_at),
                updated_at=_aware(r.updated_at),
                history=history[r.id],
            )
            for r in records
        ]
