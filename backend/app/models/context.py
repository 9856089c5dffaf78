"""Contextos y asignaciones de rol de la plataforma."""
from sqlalchemy import Column, ForeignKey, Integer, Text, UniqueConstraint

from app.core.database import Base

CONTEXT_SYSTEM = 10
CONTEXT_USER = 30
CONTEXT_COURSE = 50


class Context(Base):
    __tablename__ = "contexts"
    __table_args__ = (UniqueConstraint("context_level", "instance_id", name="uq_contexts_level_instance"),)

    id = Column(Integer, primary_key=True, autoincrement=True)
    context_level = Column(Integer, nullable=False, index=True)
    instance_id = Column(Integer, nullable=False, default=0)

    def to_dict(self) -> dict:
        return {"id": self.id, "contextlevel": self.context_level, "instanceid": self.instance_id}


class RoleAssignment(Base):
    __tablename__ = "role_assignments"
    __table_args__ = (UniqueConstraint("user_id", "context_id", "role", name="uq_role_assignments_user_ctx_role"),)

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    context_id = Column(Integer, ForeignKey("contexts.id", ondelete="CASCADE"), nullable=False, index=True)
    role = Column(Text, nullable=False)  # student, teacher, editingteacher, manager
