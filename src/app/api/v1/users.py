"""
/users routes.

Handlers only parse input, call the service and wrap the result in ApiSuccess.
Domain errors propagate to the exception handlers in error_handlers.py.
"""
from typing import Annotated

from fastapi import APIRouter, Depends, Path

from app.api.dependencies import get_user_service, json_or_form
from app.api.envelope import ApiSuccess
from app.schemas.user import UserCreate, UserRead, UserUpdate
from app.services.user_service import AbstractUserService

router = APIRouter(prefix="/users", tags=["users"])

UserId = Annotated[int, Path(gt=0, description="User id (positive integer)")]
Service = Annotated[AbstractUserService, Depends(get_user_service)]


@router.post("", response_model=ApiSuccess[UserRead])
async def create_user(
    service: Service,
    data: Annotated[UserCreate, Depends(json_or_form(UserCreate))],
):
    user = await service.create(data)
    return ApiSuccess[UserRead](data=user)


@router.get("", response_model=ApiSuccess[list[UserRead]])
async def list_users(service: Service):
    users = await service.get_all()
    return ApiSuccess[list[UserRead]](data=users)


@router.get("/{user_id}", response_model=ApiSuccess[UserRead])
async def get_user(user_id: UserId, service: Service):
    user = await service.get(user_id)
    return ApiSuccess[UserRead](data=user)


@router.patch("/{user_id}", response_model=ApiSuccess[UserRead])
async def update_user(
    user_id: UserId,
    service: Service,
    data: Annotated[UserUpdate, Depends(json_or_form(UserUpdate))],
):
    user = await service.update(user_id, data)
    return ApiSuccess[UserRead](data=user)


@router.delete("/{user_id}", response_model=ApiSuccess[bool])
async def delete_user(user_id: UserId, service: Service):
    deleted = await service.delete(user_id)
    return ApiSuccess[bool](data=deleted)
