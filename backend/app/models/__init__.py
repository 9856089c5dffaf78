from app.core.database import Base
from app.models.context import Context, RoleAssignment
from app.models.course import Course
from app.models.log import LogEntry
from app.models.user import User, UserPreference

__all__ = [
    "Base",
    "Context",
    "Course",
    "LogEntry",
    "RoleAssignment",
    "User",
    "UserPreference",
]
