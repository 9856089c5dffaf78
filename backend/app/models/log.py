from sqlalchemy import Column, Index, Integer, Text

from app.core.database import Base


class LogEntry(Base):
    """Registro de actividad de la plataforma (append-only, solo lectura aquí)."""
    __tablename__ = "logstore_standard_log"
    __table_args__ = (
        Index("ix_logstore_user_ctx_time", "user_id", "context_level", "context_instance_id", "time_created"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, nullable=False)
    course_id = Column(Integer, nullable=False, default=0, index=True)
    context_level = Column(Integer, nullable=False)
    context_instance_id = Column(Integer, nullable=False, default=0)
    target = Column(Text, nullable=False)
    action = Column(Text, nullable=False)
    time_created = Column(Integer, nullable=False)  # epoch en segundos
