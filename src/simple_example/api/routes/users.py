"""
User management API routes
All data access goes through the user service layer.
"""

import logging
from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Request, Response, status

from simple_example.models.user import CreateUserDto, UpdateUserDto, UserDto
from simple_example.services.user_service import UserService, get_user_service
from simple_example.utils.error_handling import set_endpoint_context
from simple_example.utils.exceptions import DuplicateEmailError, UserValidationError

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("", response_model=List[UserDto])
async def get_users(service: UserService = Depends(get_user_service)):
    """List all users"""
    set_endpoint_context("users.list")
    return await service.get_all()


@router.get("/{user_id}", response_model=UserDto, name="get_user")
async def get_user(user_id: UUID, service: UserService = Depends(get_user_service)):
    """Get user details"""
    set_endpoint_context("users.get")
    user = await service.get_by_id(user_id)
    if user is None:
        raise HTTPException(status_code=404, detail=f"User {user_id} not found")
    return user


@router.post("", response_model=UserDto, status_code=status.HTTP_201_CREATED)
async def create_user(
    dto: CreateUserDto,
    request: Request,
    response: Response,
    service: UserService = Depends(get_user_service)
):
    """Create a new user"""
    set_endpoint_context("users.create")
    try:
        user = await service.create(dto)
    except DuplicateEmailError as e:
        raise HTTPException(status_code=409, detail=str(e))
    except UserValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))

    response.headers["Location"] = str(request.url_for("get_user", user_id=str(user.id)))
    return user


@router.put("/{user_id}", response_model=UserDto)
async def update_user(
    user_id: UUID,
    dto: UpdateUserDto,
    service: UserService = Depends(get_user_service)
):
    """Update user details"""
    set_endpoint_context("users.update")
    try:
        user = await service.update(user_id, dto)
    except DuplicateEmailError as e:
        raise HTTPException(status_code=409, detail=str(e))
    except UserValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))

    if user is None:
        raise HTTPException(status_code=404, detail=f"User {user_id} not found")
    return user


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_user(user_id: UUID, service: UserService = Depends(get_user_service)):
    """Delete a user"""
    set_endpoint_context("users.delete")
    deleted = await service.delete(user_id)
    if not deleted:
        raise HTTPException(status_code=404, detail=f"User {user_id} not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
