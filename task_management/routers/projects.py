from typing import List
from fastapi import APIRouter, Depends, status, Response
from sqlalchemy.orm import Session

from ..core.auth import get_current_user, get_policy
from ..core.database import get_db
from ..core.permissions import AccessPolicy
from ..models import User
from ..schemas.project import ProjectCreate, ProjectUpdate, ProjectResponse, MemberAdd
from ..services.projects import ProjectService

router = APIRouter()


def get_project_service(
    db: Session = Depends(get_db),
    policy: AccessPolicy = Depends(get_policy),
) -> ProjectService:
    return ProjectService(db, policy)


@router.post("", response_model=ProjectResponse, status_code=status.HTTP_201_CREATED)
def create_project(
    project_in: ProjectCreate,
    current_user: User = Depends(get_current_user),
    projects: ProjectService = Depends(get_project_service),
):
    """Create a project owned by the caller"""
    return projects.create(current_user, project_in)


@router.get("", response_model=List[ProjectResponse])
def list_projects(
    current_user: User = Depends(get_current_user),
    projects: ProjectService = Depends(get_project_service),
):
    """Projects the caller is a member of"""
    return projects.list(current_user)


@router.get("/{project_id}", response_model=ProjectResponse)
def get_project(
    project_id: int,
    current_user: User = Depends(get_current_user),
    projects: ProjectService = Depends(get_project_service),
):
    return projects.get(current_user, project_id)


@router.patch("/{project_id}", response_model=ProjectResponse)
def update_project(
    project_id: int,
    project_update: ProjectUpdate,
    current_user: User = Depends(get_current_user),
    projects: ProjectService = Depends(get_project_service),
):
    return projects.update(current_user, project_id, project_update)


@router.delete("/{project_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_project(
    project_id: int,
    current_user: User = Depends(get_current_user),
    projects: ProjectService = Depends(get_project_service),
):
    """Delete a project with its tasks and comments"""
    projects.delete(current_user, project_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/{project_id}/members", response_model=ProjectResponse)
def add_member(
    project_id: int,
    member: MemberAdd,
    current_user: User = Depends(get_current_user),
    projects: ProjectService = Depends(get_project_service),
):
    return projects.add_member(current_user, project_id, member.user_id)


@router.delete("/{project_id}/members/{user_id}", response_model=ProjectResponse)
def remove_member(
    project_id: int,
    user_id: int,
    current_user: User = Depends(get_current_user),
    projects: ProjectService = Depends(get_project_service),
):
    return projects.remove_member(current_user, project_id, user_id)
