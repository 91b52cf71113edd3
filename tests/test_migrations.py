import io
from pathlib import Path

from alembic import command
from alembic.config import Config

ROOT = Path(__file__).resolve().parent.parent


def alembic_config(buffer):
    cfg = Config(output_buffer=buffer)
    cfg.set_main_option("script_location", str(ROOT / "alembic"))
    return cfg


def test_offline_upgrade_emits_both_tables():
    buffer = io.StringIO()

    command.upgrade(alembic_config(buffer), "head", sql=True)

    sql = buffer.getvalue()
    assert "CREATE TABLE users" in sql
    assert "CREATE TABLE quizzes" in sql
    assert "FOREIGN KEY(user_id) REFERENCES users (id)" in sql
