"""Alembic history replays the legacy blockid layout and deduplicates users."""
from pathlib import Path

from alembic import command
from alembic.config import Config
from sqlalchemy import create_engine, inspect, text

from app.core.config import get_settings

BACKEND = Path(__file__).resolve().parent.parent


def _alembic_config() -> Config:
    cfg = Config(str(BACKEND / "alembic.ini"))
    cfg.set_main_option("script_location", str(BACKEND / "alembic"))
    return cfg


def test_upgrade_keeps_earliest_row_per_user(tmp_path, monkeypatch):
    db_url = f"sqlite:///{tmp_path / 'legacy.db'}"
    monkeypatch.setenv("DATABASE_URL", db_url)
    get_settings.cache_clear()
    cfg = _alembic_config()

    command.upgrade(cfg, "5b1e07c2a9d4")
    legacy = create_engine(db_url)
    with legacy.begin() as conn:
        conn.execute(text(
            "INSERT INTO block_course_recent (id, blockid, user_id, userlimit) VALUES "
            "(1, 10, 7, 3), (2, 11, 7, 8), (3, 10, 8, 4), (4, 12, 7, 9)"
        ))

    command.upgrade(cfg, "head")

    with legacy.connect() as conn:
        rows = conn.execute(text("SELECT id, user_id, userlimit FROM block_course_recent ORDER BY id")).fetchall()
        columns = {c["name"] for c in inspect(conn).get_columns("block_course_recent")}
        indexes = {i["name"]: i for i in inspect(conn).get_indexes("block_course_recent")}
    legacy.dispose()

    assert [tuple(r) for r in rows] == [(1, 7, 3), (3, 8, 4)]
    assert "blockid" not in columns
    assert indexes["ix_block_course_recent_user_id"]["unique"]
