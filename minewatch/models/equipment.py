from typing import Optional, Any
from datetime import datetime
from sqlmodel import SQLModel, Field
from sqlalchemy import JSON, Column, DateTime, Enum as SAEnum

from minewatch.domain.status import EquipmentStatus, EquipmentType


class EquipmentRecord(SQLModel, table=True):
    __tablename__ = "equipment"

    id: str = Field(primary_key=True)
    code: str = Field(index=True, sa_column_kwargs={"unique": True})
    equipment_type: EquipmentType = Field(sa_column=Column(SAEnum(EquipmentType), nullable=False, index=True))
    status: EquipmentStatus = Field(sa_column=Column(SAEnum(EquipmentStatus), nullable=False, index=True))
    fuel_level: float = 0.0
    operating_hours: float = 0.0
    created_at: datetime = Field(sa_column=Column(DateTime(timezone=True), nullable=False))
    updated_at: datetime = Field(sa_column=Column(DateTime(timezone=True), nullable=False))


class EquipmentHistoryRecord(SQLModel, table=True):
    __tablename__ = "equipment_history"

    id: Optional[int] = Field(default=None, primary_key=True)
    equipment_id: str = Field(foreign_key="equipment.id", index=True)
    # position in the entity's history, starting at 0 for the create record
    seq: int
    action: str
    value: Optional[Any] = Field(default=None, sa_column=Column(JSON))
    timestamp: datetime = Field(sa_column=Column(DateTime(timezone=True), nullable=False))
