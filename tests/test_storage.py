"""
Tests for SQLite storage of parsed logs and the character roster.
"""

import sqlite3
from datetime import date, datetime

import pytest

from siegelog.database.schema import DatabaseManager, create_tables
from siegelog.database.storage import LogStorage, normalize_log_date
from siegelog.parser.parser import parse_log


@pytest.fixture
def storage(temp_db):
    return LogStorage(temp_db)


class TestNormalizeLogDate:

    @pytest.mark.parametrize(
        "value,expected",
        [
            ("2024-03-09", "2024-03-09"),
            ("2024-03-09T20:15:00", "2024-03-09"),
            ("2024-03-09 20:15:00", "2024-03-09"),
            (" 2024-03-09 ", "2024-03-09"),
            (date(2024, 3, 9), "2024-03-09"),
            (datetime(2024, 3, 9, 20, 15), "2024-03-09"),
            ("2024-02-30", None),
            ("yesterday", None),
            ("", None),
            (None, None),
        ],
    )
    def test_values(self, value, expected):
        assert normalize_log_date(value) == expected


class TestDatabaseManager:

    def test_tables_created(self, temp_db):
        for table in ("schema_version", "log_entries", "characters"):
            assert temp_db.table_exists(table)
        assert temp_db.health_check()

    def test_in_memory(self):
        db = DatabaseManager(":memory:")
        create_tables(db)
        create_tables(db)  # idempotent

        assert db.table_exists("log_entries")
        assert db.execute("SELECT version FROM schema_version") == [{"version": 1}]
        db.close()
        assert not db.health_check()


class TestLogStorage:
    """Test saving and reading back logs."""

    def test_save_and_get(self, storage, sample_log):
        document = parse_log(sample_log).to_dict()

        entry = storage.save_log(sample_log, "2024-03-09T20:00:00", "Aurora", document)
        loaded = storage.get_log(entry.log_id)

        assert len(entry.log_id) == 32
        assert loaded.log_date == "2024-03-09"
        assert loaded.server_name == "Aurora"
        assert loaded.parsed_data == document
        assert loaded.raw_log == sample_log
        assert "rawLog" not in loaded.to_dict()
        assert loaded.to_dict(include_raw=True)["rawLog"] == sample_log

    def test_get_missing(self, storage):
        assert storage.get_log("nope") is None

    def test_invalid_date_rejected(self, storage):
        with pytest.raises(ValueError):
            storage.save_log("", "not-a-date", "Aurora", {})
        assert storage.list_logs() == []

    def test_failed_insert_rolls_back(self, storage, temp_db):
        temp_db.execute("DROP TABLE log_entries", fetch_results=False)

        with pytest.raises(sqlite3.Error):
            storage.save_log("", "2024-03-09", "Aurora", {})

    def test_get_log_by_date(self, storage):
        first = storage.save_log("a", "2024-03-09", "Aurora", {"n": 1})
        storage.save_log("b", "2024-03-09", "Borealis", {"n": 2})

        assert storage.get_log_by_date("2024-03-09").log_id == first.log_id
        assert storage.get_log_by_date(date(2024, 3, 9), "Borealis").parsed_data == {"n": 2}
        assert storage.get_log_by_date("2024-03-10") is None
        assert storage.get_log_by_date("garbage") is None

    def test_list_logs_newest_first(self, storage):
        storage.save_log("a", "2024-03-01", "Aurora", {})
        storage.save_log("b", "2024-03-15", "Aurora", {})
        storage.save_log("c", "2024-03-08", "Borealis", {})

        assert [e["logDate"] for e in storage.list_logs("Aurora")] == ["2024-03-15", "2024-03-01"]
        assert [e["logDate"] for e in storage.list_logs()] == ["2024-03-15", "2024-03-08", "2024-03-01"]
        assert set(storage.list_logs()[0]) == {"id", "logDate", "serverName"}

    def test_list_servers(self, storage):
        storage.save_log("a", "2024-03-01", "Aurora", {})
        storage.save_log("b", "2024-03-15", "Aurora", {})
        storage.save_log("c", "2024-03-08", "Borealis", {})

        counts = {s["name"]: s["count"] for s in storage.list_servers()}

        assert counts == {"Aurora": 2, "Borealis": 1}


class TestCharacters:
    """Test the character class roster."""

    def test_upsert_and_get(self, storage):
        storage.upsert_character("Hero1", "Aurora", "Warrior")

        assert storage.get_character("Hero1", "Aurora") == {
            "name": "Hero1",
            "serverName": "Aurora",
            "class": "Warrior",
        }
        assert storage.get_character("Hero1", "Borealis") is None

    def test_upsert_replaces_class(self, storage):
        storage.upsert_character("Hero1", "Aurora", "Warrior")
        storage.upsert_character("Hero1", "Aurora", "Paladin")

        assert storage.list_characters("Aurora") == [
            {"name": "Hero1", "serverName": "Aurora", "class": "Paladin"}
        ]

    def test_class_lookup_is_per_server(self, storage):
        storage.upsert_character("Villain1", "Aurora", "Mage")
        storage.upsert_character("Hero1", "Aurora", "Warrior")
        storage.upsert_character("Hero1", "Borealis", "Rogue")

        assert storage.class_lookup("Aurora") == {"Hero1": "Warrior", "Villain1": "Mage"}
        assert [c["name"] for c in storage.list_characters("Aurora")] == ["Hero1", "Villain1"]
        assert storage.class_lookup("Borealis") == {"Hero1": "Rogue"}
        assert storage.class_lookup("Nowhere") == {}
