"""Resolución de contextos (sistema, usuario, curso).

Los contextos pertenecen a la plataforma: las rutas del bloque y de privacidad
solo los leen con ``find_*``. Las variantes que crean la fila se usan al dar de
alta usuarios y cursos.
"""
from sqlalchemy.orm import Session

from app.models.context import CONTEXT_COURSE, CONTEXT_SYSTEM, CONTEXT_USER, Context


def find_context(db: Session, context_level: int, instance_id: int) -> Context | None:
    return (
        db.query(Context)
        .filter(Context.context_level == context_level, Context.instance_id == instance_id)
        .first()
    )


def context_instance(db: Session, context_level: int, instance_id: int) -> Context:
    """Retorna el contexto para (nivel, instancia), creándolo si aún no existe."""
    ctx = find_context(db, context_level, instance_id)
    if ctx is None:
        ctx = Context(context_level=context_level, instance_id=instance_id)
        db.add(ctx)
        db.flush()
    return ctx


def find_system_context(db: Session) -> Context | None:
    return find_context(db, CONTEXT_SYSTEM, 0)


def find_user_context(db: Session, user_id: int) -> Context | None:
    return find_context(db, CONTEXT_USER, user_id)


def find_course_context(db: Session, course_id: int) -> Context | None:
    return find_context(db, CONTEXT_COURSE, course_id)


def system_context(db: Session) -> Context:
    return context_instance(db, CONTEXT_SYSTEM, 0)


def user_context(db: Session, user_id: int) -> Context:
    return context_instance(db, CONTEXT_USER, user_id)


def course_context(db: Session, course_id: int) -> Context:
    return context_instance(db, CONTEXT_COURSE, course_id)


def get_context(db: Session, context_id: int) -> Context | None:
    return db.get(Context, context_id)
