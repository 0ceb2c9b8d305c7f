from typing import Optional
from pydantic import BaseModel, ConfigDict


class OperatorCreate(BaseModel):
    first_name: str
    last_name: str
    license: str
    equipment_id: str


class OperatorUpdate(BaseModel):
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    license: Optional[str] = None
    equipment_id: Optional[str] = None


class OperatorRead(OperatorCreate):
    id: str

    model_config = ConfigDict(from_attributes=True)


class SupervisorCreate(BaseModel):
    first_name: str
    last_name: str
    equipment_id: str


class SupervisorUpdate(BaseModel):
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    equipment_id: Optional[str] = None


class SupervisorRead(SupervisorCreate):
    id: str

    model_config = ConfigDict(from_attributes=True)
