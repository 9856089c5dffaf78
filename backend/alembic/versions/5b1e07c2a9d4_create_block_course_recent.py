"""create block_course_recent table (legacy layout with blockid)

Revision ID: 5b1e07c2a9d4
Revises:
Create Date: 2010-06-01

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy import inspect


revision: str = "5b1e07c2a9d4"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    if "block_course_recent" in inspect(op.get_bind()).get_table_names():
        return
    op.create_table(
        "block_course_recent",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("blockid", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.Column("userlimit", sa.Integer(), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_block_course_recent_blockid", "block_course_recent", ["blockid"])
    op.create_index("ix_block_course_recent_user_id_legacy", "block_course_recent", ["user_id"])


def downgrade() -> None:
    op.drop_table("block_course_recent")
