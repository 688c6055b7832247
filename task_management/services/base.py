import logging
from typing import Any, Type, TypeVar
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ..core.exceptions import ConflictError, NotFoundError
from ..core.permissions import AccessPolicy

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT")


class BaseService:
    """Holds the per-request session and the shared access policy."""

    def __init__(self, db: Session, policy: AccessPolicy):
        self.db = db
        self.policy = policy

    def get_or_404(self, model: Type[ModelT], object_id: Any, label: str = None) -> ModelT:
        obj = self.db.query(model).filter(model.id == object_id).first()
        if obj is None:
            raise NotFoundError.for_resource(label or model.__name__, object_id)
        return obj

    def commit(self, *objects, conflict_message: str = "Resource already exists"):
        """Commit the session and refresh the given objects.

        Integrity violations roll back and surface as ConflictError; any other
        failure rolls back and propagates.
        """
        try:
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            logger.warning(f"Integrity error on commit: {e.orig}")
            raise ConflictError(conflict_message)
        except Exception:
            self.db.rollback()
            raise
        for obj in objects:
            self.db.refresh(obj)
