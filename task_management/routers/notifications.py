from typing import List
from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.orm import Session

from ..core.auth import get_current_user, get_policy
from ..core.database import get_db
from ..core.pagination import Page, get_page
from ..core.permissions import AccessPolicy
from ..models import User
from ..schemas.notification import NotificationResponse, UnreadCount, MarkedRead
from ..services.notifications import NotificationService

router = APIRouter()


def get_notification_service(
    db: Session = Depends(get_db),
    policy: AccessPolicy = Depends(get_policy),
) -> NotificationService:
    return NotificationService(db, policy)


@router.get("", response_model=List[NotificationResponse])
def list_notifications(
    unread_only: bool = Query(False, alias="unreadOnly", description="Only unread notifications"),
    page: Page = Depends(get_page),
    current_user: User = Depends(get_current_user),
    notifications: NotificationService = Depends(get_notification_service),
):
    """The caller's notifications, newest first"""
    items, _ = notifications.list_for(current_user, unread_only=unread_only, skip=page.skip, limit=page.limit)
    return items


@router.get("/unread-count", response_model=UnreadCount)
def unread_count(
    current_user: User = Depends(get_current_user),
    notifications: NotificationService = Depends(get_notification_service),
):
    return UnreadCount(unread=notifications.unread_count(current_user))


@router.post("/read-all", response_model=MarkedRead)
def mark_all_read(
    current_user: User = Depends(get_current_user),
    notifications: NotificationService = Depends(get_notification_service),
):
    return MarkedRead(updated=notifications.mark_all_read(current_user))


@router.post("/{notification_id}/read", response_model=NotificationResponse)
def mark_read(
    notification_id: int,
    current_user: User = Depends(get_current_user),
    notifications: NotificationService = Depends(get_notification_service),
):
    return notifications.mark_read(current_user, notification_id)


@router.delete("/{notification_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_notification(
    notification_id: int,
    current_user: User = Depends(get_current_user),
    notifications: NotificationService = Depends(get_notification_service),
):
    notifications.delete(current_user, notification_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
