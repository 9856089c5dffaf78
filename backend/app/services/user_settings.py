"""Carga, validación y guardado del límite de cursos del usuario."""
from loguru import logger
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.strings import get_string
from app.models.user import User, UserPreference
from app.schemas.course_recent import UserSettingsForm, UserSettingsSubmit
from app.services.preferences import get_preference
from app.services.recent_courses import DEFAULT_MAX, LOWER_LIMIT, UPPER_LIMIT


def load_form(db: Session, user: User, course_id: int) -> UserSettingsForm:
    record = get_preference(db, user.id)
    if record is not None:
        return UserSettingsForm(
            userid=user.id,
            id=record.id,
            userlimit=record.userlimit or DEFAULT_MAX,
            courseid=course_id,
        )
    return UserSettingsForm(userid=user.id, id=0, userlimit=DEFAULT_MAX, courseid=course_id)


def validate(data: UserSettingsSubmit) -> dict[str, str]:
    errors: dict[str, str] = {}
    if data.userlimit is None:
        errors["userlimit"] = get_string("required")
    elif data.userlimit < LOWER_LIMIT:
        errors["userlimit"] = get_string("error1")
    elif data.userlimit > UPPER_LIMIT:
        errors["userlimit"] = get_string("error2")
    return errors


def submit(db: Session, user: User, userlimit: int) -> UserPreference:
    """Guarda el límite del usuario: actualiza su fila o la inserta si aún no existe.

    Dos envíos simultáneos del mismo usuario terminan con el último valor: si la
    inserción choca con el índice único de ``user_id`` se relee la fila y se actualiza.
    """
    record = get_preference(db, user.id)
    if record is None:
        record = UserPreference(user_id=user.id, userlimit=userlimit)
        db.add(record)
        try:
            db.commit()
        except IntegrityError:
            db.rollback()
            logger.info(f"Usuario {user.id}: fila creada en paralelo, se actualiza")
            record = get_preference(db, user.id)
            record.userlimit = userlimit
            db.commit()
    else:
        record.userlimit = userlimit
        db.commit()
    db.refresh(record)
    logger.info(f"Usuario {user.id} guardó userlimit={userlimit}")
    return record
