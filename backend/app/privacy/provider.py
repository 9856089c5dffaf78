"""Operaciones de privacidad sobre la tabla ``block_course_recent``.

Todas las operaciones son síncronas e idempotentes. Los borrados son de una
única fila por ``user_id`` y solo aplican al contexto de usuario del dueño.
"""
from loguru import logger
from sqlalchemy.orm import Session

from app.core.strings import COMPONENT, get_string
from app.models.context import CONTEXT_USER, Context
from app.models.user import UserPreference
from app.privacy.metadata import MetadataCollection
from app.privacy.request import ApprovedContextList, ApprovedUserList, ContextList, UserList
from app.privacy.writer import ContentWriter
from app.services.contexts import find_user_context
from app.services.preferences import delete_preference, has_preference

TABLE_NAME = "block_course_recent"


def _is_own_user_context(context: Context, user_id: int) -> bool:
    return context.context_level == CONTEXT_USER and context.instance_id == user_id


def get_metadata(collection: MetadataCollection) -> MetadataCollection:
    collection.add_database_table(
        TABLE_NAME,
        {
            "userid": "privacy:metadata:block_course_recent:userid",
            "userlimit": "privacy:metadata:block_course_recent:userlimit",
        },
        "privacy:metadata:block_course_recent",
    )
    return collection


def get_contexts_for_userid(db: Session, user_id: int) -> ContextList:
    contextlist = ContextList(component=COMPONENT)
    context = find_user_context(db, user_id)
    if context is not None and has_preference(db, user_id):
        contextlist.add_context(context)
    return contextlist


def export_user_data(db: Session, contextlist: ApprovedContextList, writer: ContentWriter) -> None:
    user_id = contextlist.user.id
    contexts = [c for c in contextlist if _is_own_user_context(c, user_id)]
    if not contexts:
        return

    records = db.query(UserPreference).filter(UserPreference.user_id == user_id).order_by(UserPreference.id).all()
    data = [{"user": r.user_id, "userlimit": r.userlimit} for r in records]
    writer.with_context(contexts[0]).export_data([get_string("pluginname")], data)
    logger.info(f"Privacy: exportados {len(data)} registros de {TABLE_NAME} para usuario {user_id}")


def delete_data_for_all_users_in_context(db: Session, context: Context) -> None:
    if context.context_level != CONTEXT_USER:
        return
    deleted = delete_preference(db, context.instance_id)
    logger.info(f"Privacy: contexto {context.id} -> {deleted} fila(s) borradas")


def delete_data_for_user(db: Session, contextlist: ApprovedContextList) -> None:
    if not len(contextlist):
        return
    user_id = contextlist.user.id
    if not any(_is_own_user_context(c, user_id) for c in contextlist):
        return
    deleted = delete_preference(db, user_id)
    logger.info(f"Privacy: usuario {user_id} -> {deleted} fila(s) borradas")


def get_users_in_context(db: Session, userlist: UserList) -> None:
    context = userlist.context
    if context.context_level != CONTEXT_USER:
        return
    if has_preference(db, context.instance_id):
        userlist.add_user(context.instance_id)


def delete_data_for_users(db: Session, userlist: ApprovedUserList) -> None:
    context = userlist.context
    if context.context_level == CONTEXT_USER and context.instance_id in userlist.user_ids:
        deleted = delete_preference(db, context.instance_id)
        logger.info(f"Privacy: contexto {context.id}, usuarios {userlist.user_ids} -> {deleted} fila(s) borradas")
