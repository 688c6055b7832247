from fastapi import APIRouter, Depends, Response, status

from ..core.auth import get_current_user
from ..models import User
from ..schemas.comment import CommentUpdate, CommentResponse
from ..services.comments import CommentService
from .tasks import get_comment_service

router = APIRouter()


@router.patch("/{comment_id}", response_model=CommentResponse)
def edit_comment(
    comment_id: int,
    comment_update: CommentUpdate,
    current_user: User = Depends(get_current_user),
    comments: CommentService = Depends(get_comment_service),
):
    """Edit a comment while its grace period lasts"""
    return comments.update(current_user, comment_id, comment_update)


@router.delete("/{comment_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_comment(
    comment_id: int,
    current_user: User = Depends(get_current_user),
    comments: CommentService = Depends(get_comment_service),
):
    comments.delete(current_user, comment_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
