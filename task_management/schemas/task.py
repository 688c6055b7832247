"""
Pydantic schemas for tasks.
"""
from datetime import datetime
from typing import Optional, List
from pydantic import Field, ValidationInfo, field_validator

from ..models.task import TaskStatus, TaskPriority
from .base import APIModel, reject_null


class TaskBase(APIModel):
    """Base task schema"""
    title: str = Field(..., min_length=1, max_length=200, description="Task title")
    description: Optional[str] = Field(None, max_length=5000, description="Task description")
    priority: TaskPriority = Field(TaskPriority.MEDIUM, description="Task priority")
    due_date: Optional[datetime] = Field(None, description="Task due date")


class TaskCreate(TaskBase):
    """Schema for creating a task"""
    project_id: int = Field(..., description="Project the task belongs to")
    status: TaskStatus = Field(TaskStatus.TODO, description="Initial status")
    assignee_id: Optional[int] = Field(None, description="Project member to assign")


class TaskUpdate(APIModel):
    """Schema for updating a task; a null assigneeId unassigns"""
    title: Optional[str] = Field(None, min_length=1, max_length=200, description="Task title")
    description: Optional[str] = Field(None, max_length=5000, description="Task description")
    status: Optional[TaskStatus] = Field(None, description="Task status")
    priority: Optional[TaskPriority] = Field(None, description="Task priority")
    due_date: Optional[datetime] = Field(None, description="Task due date")
    assignee_id: Optional[int] = Field(None, description="Assignee user ID")

    @field_validator("title", "status", "priority")
    @classmethod
    def not_null(cls, value, info: ValidationInfo):
        return reject_null(info.field_name, value)


class TaskResponse(TaskBase):
    """Schema for task response"""
    id: int = Field(..., description="Task ID")
    project_id: int
    status: TaskStatus = Field(..., description="Task status")
    creator_id: int = Field(..., description="User who created the task")
    assignee_id: Optional[int] = None
    created_at: datetime = Field(..., description="Task creation timestamp")
    updated_at: Optional[datetime] = Field(None, description="Task update timestamp")
    completed_at: Optional[datetime] = Field(None, description="Task completion timestamp")


class TaskList(APIModel):
    """Schema for paginated task list"""
    tasks: List[TaskResponse] = Field(..., description="List of tasks")
    total: int = Field(..., description="Total number of tasks")
    skip: int = Field(..., description="Number of tasks skipped")
    limit: int = Field(..., description="Number of tasks returned")
    has_next: bool = Field(default=False, description="Whether there are more tasks")

    def __init__(self, **data):
        super().__init__(**data)
        # Calculate has_next based on total, skip, and limit
        self.has_next = (self.skip + self.limit) < self.total
