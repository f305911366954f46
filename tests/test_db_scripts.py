"""Tests for the table setup scripts."""

from sqlalchemy import create_engine, inspect

from app.core.database import Base
from check_db import check_tables
from init_db import init_db


class TestDatabaseScripts:
    def test_check_db_reports_without_creating(self, capsys):
        fresh_engine = create_engine("sqlite://")

        assert check_tables(fresh_engine) == ["print_orders"]
        assert "print_orders" not in inspect(fresh_engine).get_table_names()
        assert "Missing tables detected: print_orders" in capsys.readouterr().out

    def test_check_db_with_all_tables(self, capsys):
        fresh_engine = create_engine("sqlite://")
        Base.metadata.create_all(bind=fresh_engine)

        assert check_tables(fresh_engine) == []
        assert "All required database tables exist" in capsys.readouterr().out

    def test_init_db_is_idempotent(self, db_session):
        init_db()
        init_db()
        assert "print_orders" in inspect(db_session.get_bind()).get_table_names()
