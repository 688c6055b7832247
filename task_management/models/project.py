from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey, Table
from sqlalchemy.orm import relationship
from ..core.database import Base
from ..utils.dates import utcnow


project_members = Table(
    "project_members",
    Base.metadata,
    Column("project_id", Integer, ForeignKey("projects.id", ondelete="CASCADE"), primary_key=True),
    Column("user_id", Integer, ForeignKey("users.id", ondelete="CASCADE"), primary_key=True),
)


class Project(Base):
    """Named container of tasks, owned by a user and shared with members"""
    __tablename__ = "projects"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(200), nullable=False, index=True)
    description = Column(Text, nullable=True)
    owner_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)

    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), onupdate=utcnow, nullable=True)

    owner = relationship("User")
    members = relationship("User", secondary=project_members, order_by="User.id")
    tasks = relationship("Task", back_populates="project", cascade="all, delete-orphan")

    def __init__(self, **kwargs):
        kwargs.setdefault("created_at", utcnow())
        super().__init__(**kwargs)
        # The owner is always a member
        if self.owner is not None and self.owner not in self.members:
            self.members.append(self.owner)

    @property
    def member_ids(self) -> list:
        return [member.id for member in self.members]

    def has_member(self, user) -> bool:
        return any(member.id == user.id for member in self.members)

    def __repr__(self):
        return f"<Project(id={self.id}, name='{self.name}', owner_id={self.owner_id})>"
