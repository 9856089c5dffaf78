"""Comprobación de capabilities por rol.

La plataforma decide los permisos; este módulo solo necesita una función
``(user, context, capability) -> bool``. ``RoleCapabilityChecker`` es la
implementación por defecto: concede la capability si el arquetipo global del
usuario o alguno de sus roles asignados en el contexto (o en el contexto de
sistema) figura en la lista de arquetipos de la capability.
"""
from collections.abc import Callable

from fastapi import Depends
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.models.context import CONTEXT_SYSTEM, Context, RoleAssignment
from app.models.user import User

CAP_CHANGELIMIT = "block/course_recent:changelimit"
CAP_SHOWALL = "block/course_recent:showall"
CAP_VIEWHIDDENCOURSES = "moodle/course:viewhiddencourses"
CAP_VIEWPARTICIPANTS = "moodle/course:viewparticipants"

CAPABILITY_ARCHETYPES: dict[str, frozenset[str]] = {
    CAP_CHANGELIMIT: frozenset({"user", "student", "teacher", "editingteacher", "manager"}),
    CAP_SHOWALL: frozenset({"manager"}),
    CAP_VIEWHIDDENCOURSES: frozenset({"teacher", "editingteacher", "manager"}),
    CAP_VIEWPARTICIPANTS: frozenset({"student", "teacher", "editingteacher", "manager"}),
}

# Rol global del usuario -> arquetipos que implica en cualquier contexto
PLATFORM_ARCHETYPES: dict[str, frozenset[str]] = {
    "admin": frozenset({"manager", "user"}),
    "user": frozenset({"user"}),
    "guest": frozenset({"guest"}),
}

CapabilityChecker = Callable[[User, Context, str], bool]


class RoleCapabilityChecker:
    def __init__(self, db: Session):
        self.db = db

    def roles_in_context(self, user: User, context: Context) -> set[str]:
        q = (
            self.db.query(RoleAssignment.role)
            .join(Context, RoleAssignment.context_id == Context.id)
            .filter(RoleAssignment.user_id == user.id)
            .filter((Context.id == context.id) | (Context.context_level == CONTEXT_SYSTEM))
        )
        return {row.role for row in q.all()}

    def __call__(self, user: User, context: Context, capability: str) -> bool:
        allowed = CAPABILITY_ARCHETYPES.get(capability)
        if not allowed or not user.is_active:
            return False
        if PLATFORM_ARCHETYPES.get(user.role, frozenset()) & allowed:
            return True
        return bool(self.roles_in_context(user, context) & allowed)


def get_capability_checker(db: Session = Depends(get_db)) -> CapabilityChecker:
    return RoleCapabilityChecker(db)
