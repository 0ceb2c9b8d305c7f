from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from minewatch.core.database import get_session
from minewatch.services.equipment_repository import EquipmentRepository, SqlEquipmentRepository


async def get_equipment_repository(session: AsyncSession = Depends(get_session)) -> EquipmentRepository:
    """Dependency that yields the equipment repository for this request."""
    return SqlEquipmentRepository(session)
