"""Proveedor de privacidad del bloque Recent Courses.

El orquestador de cumplimiento de la plataforma llama a estas operaciones con
listas de contextos y usuarios ya aprobadas; aquí solo se localizan, exportan y
borran las filas de ``block_course_recent``.
"""
from app.privacy.metadata import DatabaseTable, MetadataCollection
from app.privacy.request import ApprovedContextList, ApprovedUserList, ContextList, UserList
from app.privacy.writer import ContentWriter

__all__ = [
    "ApprovedContextList",
    "ApprovedUserList",
    "ContentWriter",
    "ContextList",
    "DatabaseTable",
    "MetadataCollection",
    "UserList",
]
