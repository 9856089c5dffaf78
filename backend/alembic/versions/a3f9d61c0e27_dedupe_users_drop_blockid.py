"""keep one row per user, drop blockid, unique user_id

Revision ID: a3f9d61c0e27
Revises: 5b1e07c2a9d4
Create Date: 2010-07-13

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy import inspect


revision: str = "a3f9d61c0e27"
down_revision: Union[str, None] = "5b1e07c2a9d4"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _index_names(conn, table: str) -> set[str]:
    return {idx["name"] for idx in inspect(conn).get_indexes(table)}


def _column_exists(conn, table: str, column: str) -> bool:
    return column in {c["name"] for c in inspect(conn).get_columns(table)}


def _duplicate_ids(conn) -> list[int]:
    """Ids a borrar: por cada usuario se conserva la fila más antigua (menor id)."""
    rows = conn.execute(
        sa.text("SELECT id, user_id FROM block_course_recent ORDER BY user_id ASC, id ASC")
    ).fetchall()
    delete_ids: list[int] = []
    current_user = None
    for row in rows:
        if row.user_id != current_user:
            current_user = row.user_id
        else:
            delete_ids.append(row.id)
    return delete_ids


def upgrade() -> None:
    conn = op.get_bind()
    delete_ids = _duplicate_ids(conn)
    if delete_ids:
        table = sa.table("block_course_recent", sa.column("id", sa.Integer))
        op.execute(table.delete().where(table.c.id.in_(delete_ids)))

    indexes = _index_names(conn, "block_course_recent")
    with op.batch_alter_table("block_course_recent") as batch:
        if "ix_block_course_recent_blockid" in indexes:
            batch.drop_index("ix_block_course_recent_blockid")
        if "ix_block_course_recent_user_id_legacy" in indexes:
            batch.drop_index("ix_block_course_recent_user_id_legacy")
        if _column_exists(conn, "block_course_recent", "blockid"):
            batch.drop_column("blockid")
        if "ix_block_course_recent_user_id" not in indexes:
            batch.create_index("ix_block_course_recent_user_id", ["user_id"], unique=True)
        if conn.dialect.name != "sqlite":
            batch.create_foreign_key(
                "fk_block_course_recent_user_id_users",
                "users",
                ["user_id"],
                ["id"],
                ondelete="CASCADE",
            )


def downgrade() -> None:
    conn = op.get_bind()
    with op.batch_alter_table("block_course_recent") as batch:
        if conn.dialect.name != "sqlite":
            batch.drop_constraint("fk_block_course_recent_user_id_users", type_="foreignkey")
        batch.drop_index("ix_block_course_recent_user_id")
        batch.add_column(sa.Column("blockid", sa.Integer(), nullable=False, server_default="0"))
        batch.create_index("ix_block_course_recent_blockid", ["blockid"])
        batch.create_index("ix_block_course_recent_user_id_legacy", ["user_id"])
