from typing import Optional
from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from minewatch.core.database import get_session
from minewatch.schemas.envelope import ApiResponse, ok
from minewatch.schemas.personnel import (
    OperatorCreate, OperatorUpdate, OperatorRead,
    SupervisorCreate, SupervisorUpdate, SupervisorRead,
)
from minewatch.services import personnel_service

operators_router = APIRouter(prefix="/operators", tags=["operators"])
supervisors_router = APIRouter(prefix="/supervisors", tags=["supervisors"])


# Operator endpoints
@operators_router.post("", response_model=ApiResponse, response_model_exclude_none=True, status_code=status.HTTP_201_CREATED)
async def add_operator(payload: OperatorCreate, session: AsyncSession = Depends(get_session)):
    obj = await personnel_service.create_operator(session, payload.model_dump())
    return ok("Operator created successfully", OperatorRead.model_validate(obj))


@operators_router.get("", response_model=ApiResponse, response_model_exclude_none=True)
async def get_operators(first_name: Optional[str] = None, last_name: Optional[str] = None,
                        session: AsyncSession = Depends(get_session)):
    items = await personnel_service.list_operators(session, first_name, last_name)
    return ok("Operators retrieved successfully", [OperatorRead.model_validate(i) for i in items], {"total": len(items)})


@operators_router.get("/{record_id}", response_model=ApiResponse, response_model_exclude_none=True)
async def get_operator(record_id: str, session: AsyncSession = Depends(get_session)):
    obj = await personnel_service.get_operator(session, record_id)
    return ok("Operator found", OperatorRead.model_validate(obj))


@operators_router.put("/{record_id}", response_model=ApiResponse, response_model_exclude_none=True)
async def put_operator(record_id: str, payload: OperatorUpdate, session: AsyncSession = Depends(get_session)):
    obj = await personnel_service.update_operator(session, record_id, payload.model_dump())
    return ok("Operator updated", OperatorRead.model_validate(obj))


@operators_router.delete("/{record_id}", response_model=ApiResponse, response_model_exclude_none=True)
async def del_operator(record_id: str, session: AsyncSession = Depends(get_session)):
    await personnel_service.delete_operator(session, record_id)
    return ok("Operator deleted", {"id": record_id})


# Supervisor endpoints
@supervisors_router.post("", response_model=ApiResponse, response_model_exclude_none=True, status_code=status.HTTP_201_CREATED)
async def add_supervisor(payload: SupervisorCreate, session: AsyncSession = Depends(get_session)):
    obj = await personnel_service.create_supervisor(session, payload.model_dump())
    return ok("Supervisor created successfully", SupervisorRead.model_validate(obj))


@supervisors_router.get("", response_model=ApiResponse, response_model_exclude_none=True)
async def get_supervisors(first_name: Optional[str] = None, last_name: Optional[str] = None,
                          session: AsyncSession = Depends(get_session)):
    items = await personnel_service.list_supervisors(session, first_name, last_name)
    return ok("Supervisors retrieved successfully", [SupervisorRead.model_validate(i) for i in items], {"total": len(items)})


@supervisors_router.get("/{record_id}", response_model=ApiResponse, response_model_exclude_none=True)
async def get_supervisor(record_id: str, session: AsyncSession = Depends(get_session)):
    obj = await personnel_service.get_supervisor(session, record_id)
    return ok("Supervisor found", SupervisorRead.model_validate(obj))


@supervisors_router.put("/{record_id}", response_model=ApiResponse, response_model_exclude_none=True)
async def put_supervisor(record_id: str, payload: SupervisorUpdate, session: AsyncSession = Depends(get_session)):
    obj = await personnel_service.update_supervisor(session, record_id, payload.model_dump())
    return ok("Supervisor updated", SupervisorRead.model_validate(obj))


@supervisors_router.delete("/{record_id}", response_model=ApiResponse, response_model_exclude_none=True)
async def del_supervisor(record_id: str, session: AsyncSession = Depends(get_session)):
    await personnel_service.delete_supervisor(session, record_id)
    return ok("Supervisor deleted", {"id": record_id})
