"""Tests for the modules schema and the migration runner."""

import re
from unittest.mock import MagicMock

import pytest

import run_migrations
from run_migrations import (
    MIGRATIONS_DIR,
    Migration,
    apply_migration,
    checksum_of,
    discover_migrations,
    select_pending,
)


@pytest.fixture
def modules_sql() -> str:
    return (MIGRATIONS_DIR / "001_create_modules.sql").read_text()


class TestModulesSchema:
    @pytest.mark.parametrize(
        "column",
        [
            "id", "user_id", "name", "description", "code", "icon", "color",
            "archived", "credits", "created_at", "modified_at", "last_visited",
        ],
    )
    def test_has_column(self, modules_sql, column):
        assert re.search(rf'^\s+"{column}" ', modules_sql, re.MULTILINE)

    @pytest.mark.parametrize(
        "index",
        [
            "modules_user_id_idx",
            "modules_last_visited_idx",
            "modules_user_last_visited_idx",
            "modules_archived_idx",
        ],
    )
    def test_has_index(self, modules_sql, index):
        assert f'CREATE INDEX IF NOT EXISTS "{index}"' in modules_sql

    def test_owner_must_be_non_empty(self, modules_sql):
        assert """CHECK ("user_id" <> '')""" in modules_sql

    def test_defaults(self, modules_sql):
        assert "\"icon\" text DEFAULT 'default' NOT NULL" in modules_sql
        assert '"archived" boolean DEFAULT false NOT NULL' in modules_sql
        assert '"credits" integer DEFAULT 0 NOT NULL' in modules_sql


class TestDiscovery:
    def test_finds_sql_files_in_order(self, tmp_path):
        (tmp_path / "002_second.sql").write_text("SELECT 2;")
        (tmp_path / "001_first.sql").write_text("SELECT 1;")
        (tmp_path / "notes.txt").write_text("ignored")

        migrations = discover_migrations(tmp_path)

        assert [m.name for m in migrations] == ["001_first.sql", "002_second.sql"]
        assert migrations[0].checksum == checksum_of("SELECT 1;")

    def test_missing_directory(self, tmp_path):
        assert discover_migrations(tmp_path / "nope") == []

    def test_repository_migrations_are_discovered(self):
        names = [m.name for m in discover_migrations()]
        assert "001_create_modules.sql" in names


class TestSelectPending:
    def test_skips_applied(self, tmp_path):
        first = Migration("001_a.sql", tmp_path / "001_a.sql", "aaa")
        second = Migration("002_b.sql", tmp_path / "002_b.sql", "bbb")
        applied = {"001_a.sql": {"checksum": "aaa", "applied_at": None}}

        assert select_pending([first, second], applied) == [second]

    def test_changed_applied_migration_is_not_rerun(self, tmp_path):
        first = Migration("001_a.sql", tmp_path / "001_a.sql", "new")
        applied = {"001_a.sql": {"checksum": "old", "applied_at": None}}

        assert select_pending([first], applied) == []


class TestApplyMigration:
    def test_runs_and_records(self, tmp_path):
        path = tmp_path / "001_a.sql"
        path.write_text("SELECT 1;")
        migration = Migration(path.name, path, checksum_of("SELECT 1;"))
        conn = MagicMock()
        cur = conn.cursor.return_value.__enter__.return_value

        apply_migration(conn, migration)

        assert cur.execute.call_count == 2
        cur.execute.assert_any_call("SELECT 1;")
        conn.commit.assert_called_once()

    def test_dry_run_does_nothing(self, tmp_path):
        migration = Migration("001_a.sql", tmp_path / "001_a.sql", "aaa")
        conn = MagicMock()

        apply_migration(conn, migration, dry_run=True)

        conn.cursor.assert_not_called()
        conn.commit.assert_not_called()

    def test_failure_rolls_back(self, tmp_path):
        path = tmp_path / "001_a.sql"
        path.write_text("BROKEN;")
        migration = Migration(path.name, path, "aaa")
        conn = MagicMock()
        cur = conn.cursor.return_value.__enter__.return_value
        cur.execute.side_effect = run_migrations.psycopg2.Error("syntax error")

        with pytest.raises(run_migrations.psycopg2.Error):
            apply_migration(conn, migration)

        conn.rollback.assert_called_once()
        conn.commit.assert_not_called()
