"""Superficie HTTP del proveedor de privacidad (solo administradores)."""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.core.errors import raise_api_error
from app.core.strings import COMPONENT
from app.models.context import Context
from app.models.user import User
from app.privacy import provider
from app.privacy.metadata import MetadataCollection
from app.privacy.request import ApprovedContextList, ApprovedUserList, UserList
from app.privacy.writer import ContentWriter
from app.schemas.privacy import ApprovedContextsRequest, ApprovedUsersRequest
from app.services.auth_service import require_role
from app.services.contexts import get_context

router = APIRouter(prefix=f"/api/privacy/{COMPONENT}", tags=["privacy"])


def _get_user(db: Session, user_id: int) -> User:
    user = db.get(User, user_id)
    if not user:
        raise_api_error(404, "not_found", "Usuario no encontrado", {"user_id": user_id})
    return user


def _get_context(db: Session, context_id: int) -> Context:
    context = get_context(db, context_id)
    if not context:
        raise_api_error(404, "not_found", "Contexto no encontrado", {"context_id": context_id})
    return context


@router.get("/metadata")
def get_metadata(admin: User = Depends(require_role("admin"))):
    return provider.get_metadata(MetadataCollection(COMPONENT)).to_dict()


@router.get("/users/{user_id}/contexts")
def get_contexts_for_user(user_id: int, db: Session = Depends(get_db), admin: User = Depends(require_role("admin"))):
    _get_user(db, user_id)
    contextlist = provider.get_contexts_for_userid(db, user_id)
    return {"user_id": user_id, "contexts": [c.to_dict() for c in contextlist]}


@router.post("/users/{user_id}/export")
def export_user_data(
    user_id: int,
    data: ApprovedContextsRequest,
    db: Session = Depends(get_db),
    admin: User = Depends(require_role("admin")),
):
    user = _get_user(db, user_id)
    writer = ContentWriter()
    provider.export_user_data(db, ApprovedContextList.from_ids(db, user, COMPONENT, data.context_ids), writer)
    return {"user_id": user_id, "exports": writer.to_dict()}


@router.post("/users/{user_id}/delete")
def delete_data_for_user(
    user_id: int,
    data: ApprovedContextsRequest,
    db: Session = Depends(get_db),
    admin: User = Depends(require_role("admin")),
):
    user = _get_user(db, user_id)
    provider.delete_data_for_user(db, ApprovedContextList.from_ids(db, user, COMPONENT, data.context_ids))
    return {"status": "ok"}


@router.get("/contexts/{context_id}/users")
def get_users_in_context(context_id: int, db: Session = Depends(get_db), admin: User = Depends(require_role("admin"))):
    userlist = UserList(_get_context(db, context_id), COMPONENT)
    provider.get_users_in_context(db, userlist)
    return {"context_id": context_id, "user_ids": userlist.user_ids}


@router.delete("/contexts/{context_id}")
def delete_data_for_all_users_in_context(
    context_id: int, db: Session = Depends(get_db), admin: User = Depends(require_role("admin"))
):
    provider.delete_data_for_all_users_in_context(db, _get_context(db, context_id))
    return {"status": "ok"}


@router.post("/contexts/{context_id}/users/delete")
def delete_data_for_users(
    context_id: int,
    data: ApprovedUsersRequest,
    db: Session = Depends(get_db),
    admin: User = Depends(require_role("admin")),
):
    userlist = ApprovedUserList(_get_context(db, context_id), COMPONENT, data.user_ids)
    provider.delete_data_for_users(db, userlist)
    return {"status": "ok"}
