"""
User endpoints for API v1.

List, fetch, create, update and delete user records.  The list route
returns the full collection unless ``page`` or ``limit`` is given, in
which case it returns one page together with pagination info.  Missing
records produce 404 with ``{"error": "User not found"}`` and a duplicate
``id`` on create produces 409.  Storage failures are turned into 500
responses by the application's ``UserServiceError`` handler.
"""

from typing import Any, Dict, List, Optional, Union

from fastapi import APIRouter, Body, Depends, Query, Response, status
from fastapi.responses import JSONResponse

from user_store_api.app.core.errors import DuplicateIdError
from user_store_api.app.schemas.user import UserPage, UserRecord
from user_store_api.app.services.user_service import UserService

router = APIRouter()

NOT_FOUND_MESSAGE = "User not found"

_service: Optional[UserService] = None


def get_user_service() -> UserService:
    """Return the process-wide ``UserService``, creating it on first use."""
    global _service
    if _service is None:
        _service = UserService()
    return _service


def _not_found() -> JSONResponse:
    return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content={"error": NOT_FOUND_MESSAGE})


@router.get("", response_model=Union[UserPage, List[UserRecord]])
async def list_users(
    page: Optional[int] = Query(None, description="1-based page number"),
    limit: Optional[int] = Query(None, ge=1, description="Page size"),
    service: UserService = Depends(get_user_service),
):
    """Return all users, or one page of users when ``page``/``limit`` is set.

    A missing ``page`` defaults to 1 and a missing ``limit`` to 10.
    Pages past the end (or below 1) come back with an empty ``data``.
    """
    if page is not None or limit is not None:
        return await service.get_users_paginated(page if page is not None else 1, limit or 10)
    return await service.get_users()


@router.get("/{user_id}", response_model=UserRecord)
async def get_user(user_id: int, service: UserService = Depends(get_user_service)):
    """Retrieve a single user by ID."""
    user = await service.get_user_by_id(user_id)
    if user is None:
        return _not_found()
    return user


@router.post("", response_model=UserRecord, status_code=status.HTTP_201_CREATED)
async def create_user(
    payload: Dict[str, Any] = Body(...),
    service: UserService = Depends(get_user_service),
):
    """Create a user from an arbitrary JSON object and return it with its ``id``."""
    try:
        return await service.create_user(payload)
    except DuplicateIdError as exc:
        return JSONResponse(status_code=status.HTTP_409_CONFLICT, content={"error": str(exc)})


@router.patch("/{user_id}", response_model=UserRecord)
async def update_user(
    user_id: int,
    payload: Dict[str, Any] = Body(...),
    service: UserService = Depends(get_user_service),
):
    """Merge the given fields into the user and return the updated record."""
    # The path id wins; a payload cannot move a record to another id.
    payload.pop("id", None)
    updated = await service.update_user(user_id, payload)
    if not updated:
        return _not_found()
    return await service.get_user_by_id(user_id)


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_user(user_id: int, service: UserService = Depends(get_user_service)):
    """Delete a user."""
    deleted = await service.delete_user(user_id)
    if not deleted:
        return _not_found()
    return Response(status_code=status.HTTP_204_NO_CONTENT)
