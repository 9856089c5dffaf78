from sqlalchemy import Boolean, Column, Integer, Text

from app.core.database import Base

SITE_COURSE_ID = 1


class Course(Base):
    """Directorio de cursos de la plataforma (solo lectura para este módulo)."""
    __tablename__ = "courses"

    id = Column(Integer, primary_key=True, autoincrement=True)
    fullname = Column(Text, nullable=False)
    shortname = Column(Text, nullable=False, index=True)
    visible = Column(Boolean, nullable=False, default=True)
    guest_access = Column(Boolean, nullable=False, default=False)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "fullname": self.fullname,
            "shortname": self.shortname,
            "visible": self.visible,
            "guest_access": self.guest_access,
        }
