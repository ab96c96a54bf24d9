"""
app/api/routers/users.py

Read-only user endpoints.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, status

from app.api.dependencies import get_metric_store
from app.api.errors import api_error
from app.domain.errors import UserNotFoundError
from app.repositories.metric_store import MetricStore
from app.schemas.esg_metric import ApiResponse, UserResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/users", tags=["users"])


@router.get(
    "",
    response_model=ApiResponse[list[UserResponse]],
    response_model_exclude_none=True,
)
def list_users(store: MetricStore = Depends(get_metric_store)) -> ApiResponse[list[UserResponse]]:
    try:
        users = store.list_users()
    except Exception as exc:  # noqa: BLE001
        logger.exception("Failed to fetch users")
        raise api_error(status.HTTP_500_INTERNAL_SERVER_ERROR, "Failed to fetch users") from exc

    return ApiResponse[list[UserResponse]](data=[UserResponse.model_validate(user) for user in users])


@router.get(
    "/{user_id}",
    response_model=ApiResponse[UserResponse],
    response_model_exclude_none=True,
)
def get_user(user_id: str, store: MetricStore = Depends(get_metric_store)) -> ApiResponse[UserResponse]:
    try:
        user = store.get_user(user_id)
    except UserNotFoundError as exc:
        raise api_error(status.HTTP_404_NOT_FOUND, "User not found") from exc

    return ApiResponse[UserResponse](data=UserResponse.model_validate(user))
