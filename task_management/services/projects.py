import logging
from typing import List

from ..core.exceptions import ConflictError, NotFoundError, ValidationError
from ..models import User, Project
from ..schemas.project import ProjectCreate, ProjectUpdate
from .base import BaseService

logger = logging.getLogger(__name__)


class ProjectService(BaseService):
    """Project registry and membership"""

    def get(self, caller: User, project_id: int) -> Project:
        project = self.get_or_404(Project, project_id)
        self.policy.require(
            self.policy.can_view_project(caller, project),
            "You are not a member of this project",
        )
        return project

    def _manageable(self, caller: User, project_id: int) -> Project:
        project = self.get_or_404(Project, project_id)
        self.policy.require(
            self.policy.can_manage_project(caller, project),
            "Only the project owner can do this",
        )
        return project

    def _active_user(self, user_id: int, field: str) -> User:
        user = self.get_or_404(User, user_id)
        if not user.is_active:
            raise ValidationError.for_field(field, f"User {user_id} is deactivated")
        return user

    def create(self, caller: User, project_in: ProjectCreate) -> Project:
        members = [self._active_user(user_id, "memberIds") for user_id in dict.fromkeys(project_in.member_ids)]
        project = Project(
            name=project_in.name,
            description=project_in.description,
            owner=caller,
            members=members,
        )
        self.db.add(project)
        self.commit(project)
        logger.info(f"User {caller.id} created project {project.id}")
        return project

    def list(self, caller: User) -> List[Project]:
        query = self.db.query(Project)
        if not caller.is_admin:
            query = query.filter(Project.members.any(User.id == caller.id))
        return query.order_by(Project.id).all()

    def update(self, caller: User, project_id: int, project_update: ProjectUpdate) -> Project:
        project = self._manageable(caller, project_id)
        for field, value in project_update.model_dump(exclude_unset=True).items():
            setattr(project, field, value)
        self.commit(project)
        return project

    def delete(self, caller: User, project_id: int):
        project = self._manageable(caller, project_id)
        self.db.delete(project)
        self.commit()
        logger.info(f"User {caller.id} deleted project {project_id}")

    def add_member(self, caller: User, project_id: int, user_id: int) -> Project:
        project = self._manageable(caller, project_id)
        user = self._active_user(user_id, "userId")
        if project.has_member(user):
            raise ConflictError(f"User {user_id} is already a member")
        project.members.append(user)
        self.commit(project)
        return project

    def remove_member(self, caller: User, project_id: int, user_id: int) -> Project:
        """Remove a member and unassign their tasks in the project.

        Owners and admins may remove anyone but the owner; members may leave.
        """
        project = self.get_or_404(Project, project_id)
        self.policy.require(
            caller.id == user_id or self.policy.can_manage_project(caller, project),
            "Only the project owner can remove other members",
        )
        if user_id == project.owner_id:
            raise ValidationError.for_field("userId", "The project owner cannot be removed")

        member = next((m for m in project.members if m.id == user_id), None)
        if member is None:
            raise NotFoundError(f"User {user_id} is not a member of project {project_id}")

        project.members.remove(member)
        for task in project.tasks:
            if task.assignee_id == user_id:
                task.assignee_id = None
        self.commit(project)
        return project
