from sqlalchemy.orm import Session

from app.models.user import UserPreference


def get_preference(db: Session, user_id: int) -> UserPreference | None:
    return db.query(UserPreference).filter(UserPreference.user_id == user_id).first()


def get_userlimit(db: Session, user_id: int) -> int | None:
    return db.query(UserPreference.userlimit).filter(UserPreference.user_id == user_id).scalar()


def has_preference(db: Session, user_id: int) -> bool:
    return db.query(UserPreference.id).filter(UserPreference.user_id == user_id).first() is not None


def delete_preference(db: Session, user_id: int) -> int:
    """Borra la fila del usuario. Idempotente: retorna cuántas filas se borraron (0 o 1)."""
    deleted = db.query(UserPreference).filter(UserPreference.user_id == user_id).delete(synchronize_session=False)
    db.commit()
    return deleted
