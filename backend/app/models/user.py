from datetime import UTC, datetime

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, Text

from app.core.database import Base

GUEST_ROLE = "guest"


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    username = Column(Text, unique=True, nullable=False, index=True)
    email = Column(Text, unique=True, nullable=True, index=True)
    hashed_password = Column(Text, nullable=False)
    full_name = Column(Text, nullable=False, default="Usuario")
    role = Column(Text, nullable=False, default="user", index=True)  # admin, user, guest
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime, nullable=False, default=lambda: datetime.now(UTC))
    last_login = Column(DateTime, nullable=True)

    @property
    def is_guest(self) -> bool:
        return self.role == GUEST_ROLE

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "username": self.username,
            "email": self.email,
            "full_name": self.full_name,
            "role": self.role,
            "is_active": self.is_active,
            "created_at": self.created_at.strftime("%Y-%m-%d %H:%M:%S") if self.created_at else None,
            "last_login": self.last_login.strftime("%Y-%m-%d %H:%M:%S") if self.last_login else None,
        }


class UserPreference(Base):
    """Límite de cursos del bloque Recent Courses, una fila por usuario."""
    __tablename__ = "block_course_recent"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, unique=True, index=True)
    userlimit = Column(Integer, nullable=True)  # NULL/0 = usar el valor global

    def to_dict(self) -> dict:
        return {"id": self.id, "userid": self.user_id, "userlimit": self.userlimit}
