import logging
from typing import List, Optional, Tuple
from sqlalchemy import desc
from sqlalchemy.orm import Session

from ..core.exceptions import ValidationError
from ..core.permissions import AccessPolicy
from ..models import User, Project, Task, TaskStatus, TaskPriority
from ..schemas.task import TaskCreate, TaskUpdate
from ..utils.dates import convert_datetime_to_utc
from .base import BaseService
from .notifications import NotificationService

logger = logging.getLogger(__name__)


class TaskService(BaseService):
    """Task registry. Status transitions are free-form."""

    def __init__(self, db: Session, policy: AccessPolicy, notifications: NotificationService):
        super().__init__(db, policy)
        self.notifications = notifications

    def _resolve_assignee(self, project: Project, assignee_id: Optional[int]) -> Optional[User]:
        if assignee_id is None:
            return None
        assignee = self.get_or_404(User, assignee_id)
        if not assignee.is_active:
            raise ValidationError.for_field("assigneeId", f"User {assignee_id} is deactivated")
        if not project.has_member(assignee):
            raise ValidationError.for_field(
                "assigneeId",
                f"User {assignee_id} is not a member of project {project.id}",
            )
        return assignee

    def get(self, caller: User, task_id: int) -> Task:
        task = self.get_or_404(Task, task_id)
        self.policy.require(
            self.policy.can_view_task(caller, task),
            "You are not a member of this task's project",
        )
        return task

    def create(self, caller: User, task_in: TaskCreate) -> Task:
        project = self.get_or_404(Project, task_in.project_id)
        self.policy.require(
            self.policy.can_create_task(caller, project),
            "You are not a member of this project",
        )
        assignee = self._resolve_assignee(project, task_in.assignee_id)

        task = Task(
            project=project,
            creator=caller,
            assignee=assignee,
            title=task_in.title,
            description=task_in.description,
            priority=task_in.priority.value,
            due_date=convert_datetime_to_utc(task_in.due_date),
        )
        task.set_status(task_in.status.value)
        self.db.add(task)
        self.commit(task)
        logger.info(f"User {caller.id} created task {task.id} in project {project.id}")

        self.notifications.task_assigned(task, caller)
        return task

    def list(
        self,
        caller: User,
        project_id: Optional[int] = None,
        status: Optional[TaskStatus] = None,
        priority: Optional[TaskPriority] = None,
        assignee_id: Optional[int] = None,
        skip: int = 0,
        limit: int = 20,
    ) -> Tuple[List[Task], int]:
        query = self.db.query(Task)

        if project_id is not None:
            project = self.get_or_404(Project, project_id)
            self.policy.require(
                self.policy.can_view_project(caller, project),
                "You are not a member of this project",
            )
            query = query.filter(Task.project_id == project_id)
        elif not caller.is_admin:
            query = query.join(Task.project).filter(Project.members.any(User.id == caller.id))

        # Apply filters
        if status:
            query = query.filter(Task.status == TaskStatus(status).value)
        if priority:
            query = query.filter(Task.priority == TaskPriority(priority).value)
        if assignee_id is not None:
            query = query.filter(Task.assignee_id == assignee_id)

        total = query.count()
        tasks = query.order_by(desc(Task.created_at), desc(Task.id)).offset(skip).limit(limit).all()
        return tasks, total

    def update(self, caller: User, task_id: int, task_update: TaskUpdate) -> Task:
        task = self.get(caller, task_id)
        changes = task_update.model_dump(exclude_unset=True)

        if set(changes) - {"status"}:
            self.policy.require(
                self.policy.can_edit_task(caller, task),
                "Only the task creator or project owner can edit this task",
            )
        if "status" in changes:
            self.policy.require(
                self.policy.can_change_task_status(caller, task),
                "Only the assignee, task creator or project owner can change the status",
            )

        # Resolve references before touching the task
        if "assignee_id" in changes:
            changes["assignee"] = self._resolve_assignee(task.project, changes.pop("assignee_id"))

        previous_assignee_id = task.assignee_id
        for field, value in changes.items():
            if field == "status":
                task.set_status(value.value)
            elif field == "priority":
                task.priority = value.value
            elif field == "due_date":
                task.due_date = convert_datetime_to_utc(value)
            else:
                setattr(task, field, value)

        self.commit(task)

        if task.assignee_id is not None and task.assignee_id != previous_assignee_id:
            self.notifications.task_assigned(task, caller)
        return task

    def delete(self, caller: User, task_id: int):
        task = self.get(caller, task_id)
        self.policy.require(
            self.policy.can_delete_task(caller, task),
            "Only the task creator or project owner can delete this task",
        )
        self.db.delete(task)
        self.commit()
        logger.info(f"User {caller.id} deleted task {task_id}")
