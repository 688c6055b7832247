from typing import List, Optional
from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.orm import Session

from ..core.auth import get_current_user, get_policy
from ..core.database import get_db
from ..core.pagination import Page, get_page
from ..core.permissions import AccessPolicy
from ..models import User, TaskStatus, TaskPriority
from ..schemas.comment import CommentCreate, CommentResponse
from ..schemas.task import TaskCreate, TaskUpdate, TaskResponse, TaskList
from ..services.comments import CommentService
from ..services.notifications import NotificationService
from ..services.tasks import TaskService
from .notifications import get_notification_service

router = APIRouter()


def get_task_service(
    db: Session = Depends(get_db),
    policy: AccessPolicy = Depends(get_policy),
    notifications: NotificationService = Depends(get_notification_service),
) -> TaskService:
    return TaskService(db, policy, notifications)


def get_comment_service(
    db: Session = Depends(get_db),
    policy: AccessPolicy = Depends(get_policy),
    notifications: NotificationService = Depends(get_notification_service),
) -> CommentService:
    return CommentService(db, policy, notifications)


@router.post("", response_model=TaskResponse, status_code=status.HTTP_201_CREATED)
def create_task(
    task_data: TaskCreate,
    current_user: User = Depends(get_current_user),
    tasks: TaskService = Depends(get_task_service),
):
    """Create a task in a project the caller belongs to"""
    return tasks.create(current_user, task_data)


@router.get("", response_model=TaskList)
def get_tasks(
    project_id: Optional[int] = Query(None, alias="projectId", description="Only tasks of this project"),
    status_filter: Optional[TaskStatus] = Query(None, alias="status", description="Filter by status"),
    priority_filter: Optional[TaskPriority] = Query(None, alias="priority", description="Filter by priority"),
    assignee_id: Optional[int] = Query(None, alias="assigneeId", description="Filter by assignee"),
    page: Page = Depends(get_page),
    current_user: User = Depends(get_current_user),
    tasks: TaskService = Depends(get_task_service),
):
    """Get tasks visible to the caller with filtering and pagination"""
    items, total = tasks.list(
        current_user,
        project_id=project_id,
        status=status_filter,
        priority=priority_filter,
        assignee_id=assignee_id,
        skip=page.skip,
        limit=page.limit,
    )
    return TaskList(
        tasks=[TaskResponse.model_validate(task) for task in items],
        total=total,
        skip=page.skip,
        limit=page.limit,
    )


@router.get("/{task_id}", response_model=TaskResponse)
def get_task(
    task_id: int,
    current_user: User = Depends(get_current_user),
    tasks: TaskService = Depends(get_task_service),
):
    """Get a specific task by ID"""
    return tasks.get(current_user, task_id)


@router.patch("/{task_id}", response_model=TaskResponse)
def update_task(
    task_id: int,
    task_update: TaskUpdate,
    current_user: User = Depends(get_current_user),
    tasks: TaskService = Depends(get_task_service),
):
    """Update a task"""
    return tasks.update(current_user, task_id, task_update)


@router.delete("/{task_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_task(
    task_id: int,
    current_user: User = Depends(get_current_user),
    tasks: TaskService = Depends(get_task_service),
):
    """Delete a task"""
    tasks.delete(current_user, task_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/{task_id}/comments", response_model=CommentResponse, status_code=status.HTTP_201_CREATED)
def add_comment(
    task_id: int,
    comment_in: CommentCreate,
    current_user: User = Depends(get_current_user),
    comments: CommentService = Depends(get_comment_service),
):
    return comments.create(current_user, task_id, comment_in)


@router.get("/{task_id}/comments", response_model=List[CommentResponse])
def list_comments(
    task_id: int,
    current_user: User = Depends(get_current_user),
    comments: CommentService = Depends(get_comment_service),
):
    """Comments on a task, oldest first"""
    return comments.list(current_user, task_id)
