import uuid
from typing import List, Optional, Type, TypeVar, Union
from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession

from minewatch.domain.errors import NotFoundError
from minewatch.domain.personnel import Operator, Person, Supervisor
from minewatch.models.equipment import EquipmentRecord
from minewatch.models.personnel import OperatorRecord, SupervisorRecord

R = TypeVar("R", OperatorRecord, SupervisorRecord)


async def _require_equipment(session: AsyncSession, equipment_id: str) -> None:
    if not await session.get(EquipmentRecord, equipment_id):
        raise NotFoundError(f"Equipment not found with id: {equipment_id}")


def _validate(model: Type[R], data: dict) -> Union[Operator, Supervisor]:
    # run the domain checks before anything hits the database
    person = Person(id=data["id"], first_name=data.get("first_name"), last_name=data.get("last_name"))
    if model is OperatorRecord:
        return Operator(person=person, license=data.get("license"), equipment_id=data.get("equipment_id"))
    return Supervisor(person=person, equipment_id=data.get("equipment_id"))


def _to_record_fields(member: Union[Operator, Supervisor]) -> dict:
    fields = {
        "id": member.person.id,
        "first_name": member.person.first_name,
        "last_name": member.person.last_name,
        "equipment_id": member.equipment_id,
    }
    if isinstance(member, Operator):
        fields["license"] = member.license
    return fields


# Generic helpers shared by operators and supervisors
async def _create(session: AsyncSession, model: Type[R], payload: dict) -> R:
    member = _validate(model, {"id": str(uuid.uuid4()), **payload})
    await _require_equipment(session, member.equipment_id)
    obj = model(**_to_record_fields(member))
    session.add(obj)
    await session.commit()
    await session.refresh(obj)
    return obj


async def _list(session: AsyncSession, model: Type[R], first_name: Optional[str] = None,
                last_name: Optional[str] = None) -> List[R]:
    stmt = select(model)
    if first_name:
        stmt = stmt.where(func.lower(model.first_name) == first_name.strip().lower())
    if last_name:
        stmt = stmt.where(func.lower(model.last_name) == last_name.strip().lower())
    res = await session.execute(stmt.order_by(model.last_name, model.first_name))
    return res.scalars().all()


async def _get(session: AsyncSession, model: Type[R], record_id: str) -> R:
    obj = await session.get(model, record_id)
    if not obj:
        raise NotFoundError(f"{model.__name__.replace('Record', '')} not found with id: {record_id}")
    return obj


async def _update(session: AsyncSession, model: Type[R], record_id: str, data: dict) -> R:
    obj = await _get(session, model, record_id)
    merged = {**obj.model_dump(), **{k: v for k, v in data.items() if v is not None}}
    member = _validate(model, merged)
    if member.equipment_id != obj.equipment_id:
        await _require_equipment(session, member.equipment_id)
    for k, v in _to_record_fields(member).items():
        setattr(obj, k, v)
    session.add(obj)
    await session.commit()
    await session.refresh(obj)
    return obj


async def _delete(session: AsyncSession, model: Type[R], record_id: str) -> None:
    obj = await _get(session, model, record_id)
    await session.delete(obj)
    await session.commit()


# Operators
async def create_operator(session: AsyncSession, payload: dict) -> OperatorRecord:
    return await _create(session, OperatorRecord, payload)


async def list_operators(session: AsyncSession, first_name: Optional[str] = None,
                         last_name: Optional[str] = None) -> List[OperatorRecord]:
    return await _list(session, OperatorRecord, first_name, last_name)


async def get_operator(session: AsyncSession, record_id: str) -> OperatorRecord:
    return await _get(session, OperatorRecord, record_id)


async def update_operator(session: AsyncSession, record_id: str, data: dict) -> OperatorRecord:
    return await _update(session, OperatorRecord, record_id, data)


async def delete_operator(session: AsyncSession, record_id: str) -> None:
    await _delete(session, OperatorRecord, record_id)


# Supervisors
async def create_supervisor(session: AsyncSession, payload: dict) -> SupervisorRecord:
    return await _create(session, SupervisorRecord, payload)


async def list_supervisors(session: AsyncSession, first_name: Optional[str] = None,
                           last_name: Optional[str] = None) -> List[SupervisorRecord]:
    return await _list(session, SupervisorRecord, first_name, last_name)


async def get_supervisor(session: AsyncSession, record_id: str) -> SupervisorRecord:
    return await _get(session, SupervisorRecord, record_id)


async def update_supervisor(session: AsyncSession, record_id: str, data: dict) -> SupervisorRecord:
    return await _update(session, SupervisorRecord, record_id, data)


async def delete_supervisor(session: AsyncSession, record_id: str) -> None:
    await _delete(session, SupervisorRecord, record_id)
