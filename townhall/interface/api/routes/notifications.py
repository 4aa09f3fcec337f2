"""Notification inbox routes."""

from uuid import UUID

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie
from pydantic import BaseModel

from townhall.application.usecase.notification import (
    DeleteAllNotificationsRequest,
    DeleteAllNotificationsUseCase,
    DeleteNotificationRequest,
    DeleteNotificationsResponse,
    DeleteNotificationUseCase,
    GetUnreadCountRequest,
    GetUnreadCountResponse,
    GetUnreadCountUseCase,
    ListNotificationsRequest,
    ListNotificationsResponse,
    ListNotificationsUseCase,
    MarkAllNotificationsRequest,
    MarkAllNotificationsResponse,
    MarkAllNotificationsUseCase,
    MarkNotificationRequest,
    MarkNotificationResponse,
    MarkNotificationUseCase,
)
from townhall.domain.service import JWTService
from townhall.interface.api.auth import require_user_id

router = APIRouter(
    prefix="/notifications", tags=["notifications"], route_class=DishkaRoute
)


class ReadStateAPIRequest(BaseModel):
    """API request for setting the read flag."""

    read: bool = True


@router.get("", response_model=ListNotificationsResponse)
async def list_notifications(
    list_notifications_use_case: FromDishka[ListNotificationsUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> ListNotificationsResponse:
    """List the caller's notifications, newest first."""
    user_id = require_user_id(jwt_service, auth_token)
    return await list_notifications_use_case.execute(
        ListNotificationsRequest(user_id=user_id)
    )


@router.get("/unread-count", response_model=GetUnreadCountResponse)
async def unread_count(
    get_unread_count_use_case: FromDishka[GetUnreadCountUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> GetUnreadCountResponse:
    """Count the caller's unread notifications."""
    user_id = require_user_id(jwt_service, auth_token)
    return await get_unread_count_use_case.execute(
        GetUnreadCountRequest(user_id=user_id)
    )


@router.post("/mark-all", response_model=MarkAllNotificationsResponse)
async def mark_all_notifications(
    request: ReadStateAPIRequest,
    mark_all_notifications_use_case: FromDishka[MarkAllNotificationsUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> MarkAllNotificationsResponse:
    """Set the read flag on all of the caller's notifications."""
    user_id = require_user_id(jwt_service, auth_token)
    return await mark_all_notifications_use_case.execute(
        MarkAllNotificationsRequest(user_id=user_id, read=request.read)
    )


@router.patch("/{notification_id}", response_model=MarkNotificationResponse)
async def mark_notification(
    notification_id: UUID,
    request: ReadStateAPIRequest,
    mark_notification_use_case: FromDishka[MarkNotificationUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> MarkNotificationResponse:
    """Set the read flag on one of the caller's notifications."""
    user_id = require_user_id(jwt_service, auth_token)
    return await mark_notification_use_case.execute(
        MarkNotificationRequest(
            notification_id=str(notification_id), user_id=user_id, read=request.read
        )
    )


@router.delete("/{notification_id}", response_model=DeleteNotificationsResponse)
async def delete_notification(
    notification_id: UUID,
    delete_notification_use_case: FromDishka[DeleteNotificationUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> DeleteNotificationsResponse:
    """Delete one of the caller's notifications."""
    user_id = require_user_id(jwt_service, auth_token)
    return await delete_notification_use_case.execute(
        DeleteNotificationRequest(notification_id=str(notification_id), user_id=user_id)
    )


@router.delete("", response_model=DeleteNotificationsResponse)
async def delete_all_notifications(
    delete_all_notifications_use_case: FromDishka[DeleteAllNotificationsUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> DeleteNotificationsResponse:
    """Delete all of the caller's notifications."""
    user_id = require_user_id(jwt_service, auth_token)
    return await delete_all_notifications_use_case.execute(
        DeleteAllNotificationsRequest(user_id=user_id)
    )
