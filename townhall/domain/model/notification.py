"""Notification entity.

A notification is written once per recipient per event. After creation only
the delivery and read flags change.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import Field

from townhall.domain.model.common import DomainModel
from townhall.domain.value import (
    CategoryTag,
    CommunityId,
    NotificationId,
    NotificationPriority,
    NotificationType,
    UserId,
)
from townhall.domain.value.common import ValueObject


class NotificationContent(ValueObject):
    """What the notification says and which content it points at."""

    title: str
    body: str
    source_id: UUID
    source_category_tag: CategoryTag


class DeliveryStatus(ValueObject):
    """Delivery and read state of a notification."""

    delivered: bool = False
    delivered_at: Optional[datetime] = None
    read: bool = False


class Notification(DomainModel):
    """Notification entity."""

    id: NotificationId
    user_id: UserId
    community_id: CommunityId
    type: NotificationType = NotificationType.POST_CREATED
    priority: NotificationPriority = NotificationPriority.LOW
    content: NotificationContent
    status: DeliveryStatus = Field(default_factory=DeliveryStatus)
    created_at: datetime = Field(default_factory=datetime.now)
