"""
Tests for the HTTP API.
"""

import logging

import pytest
from fastapi.testclient import TestClient

from siegelog.api.app import create_app
from siegelog.config.settings import ApplicationSettings
from siegelog.database.storage import LogStorage
from siegelog.parser.parser import parse_log


@pytest.fixture
def settings():
    return ApplicationSettings.from_env()


@pytest.fixture
def client(temp_db, settings):
    return TestClient(create_app(temp_db, settings))


def upload(text, name="siege.txt"):
    return {"file": (name, text.encode("utf-8"), "text/plain")}


class TestHealth:

    def test_health(self, client):
        response = client.get("/api/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["database"] == "connected"


class TestUpload:
    """Test one-off parsing of uploaded logs."""

    def test_upload_returns_parsed_document(self, client, sample_log):
        response = client.post("/api/upload", files=upload(sample_log))

        assert response.status_code == 200
        assert response.json() == parse_log(sample_log).to_dict()

    def test_upload_empty_file(self, client):
        response = client.post("/api/upload", files=upload(""))

        assert response.status_code == 200
        assert response.json() == {"playerResults": [], "guildResults": []}

    def test_upload_without_file(self, client):
        response = client.post("/api/upload")

        assert response.status_code == 400
        error = response.json()["error"]
        assert error["message"] == "No file uploaded"
        assert error["path"] == "/api/upload"
        assert error["method"] == "POST"

    def test_upload_too_large(self, client, settings, worked_example):
        settings.upload.max_file_size = 10

        response = client.post("/api/upload", files=upload(worked_example))

        assert response.status_code == 413

    def test_upload_rejects_file_type(self, client, worked_example):
        response = client.post("/api/upload", files=upload(worked_example, name="siege.exe"))

        assert response.status_code == 400
        assert response.json()["error"]["message"].startswith("Unsupported file type")

    def test_upload_accepts_log_extension(self, client, worked_example):
        response = client.post("/api/upload", files=upload(worked_example, name="SIEGE.LOG"))

        assert response.status_code == 200


class TestLogs:
    """Test storing and reading back logs."""

    def save(self, client, text, log_date="2024-03-09", server="Aurora"):
        return client.post(
            "/api/logs",
            files=upload(text),
            data={"logDate": log_date, "serverName": server},
        )

    def test_save_log(self, client, sample_log):
        response = self.save(client, sample_log, log_date="2024-03-09T20:00:00")

        assert response.status_code == 200
        data = response.json()
        assert data["logDate"] == "2024-03-09"
        assert data["serverName"] == "Aurora"
        assert data["parsedData"] == parse_log(sample_log).to_dict()

    def test_save_requires_all_fields(self, client, sample_log):
        response = client.post("/api/logs", files=upload(sample_log), data={"serverName": "Aurora"})

        assert response.status_code == 400
        assert response.json()["error"]["message"] == "File, log date, and server name are required"

    def test_save_invalid_date(self, client, sample_log):
        response = self.save(client, sample_log, log_date="someday")

        assert response.status_code == 400

    def test_save_rejects_file_type(self, client, sample_log):
        response = client.post(
            "/api/logs",
            files=upload(sample_log, name="siege.exe"),
            data={"logDate": "2024-03-09", "serverName": "Aurora"},
        )

        assert response.status_code == 400
        assert client.get("/api/logs", params={"serverName": "Aurora"}).json() == []

    def test_save_failure_is_logged_with_traceback(self, client, sample_log, monkeypatch, caplog):
        def broken_save(*args, **kwargs):
            raise RuntimeError("disk full")

        monkeypatch.setattr(LogStorage, "save_log", broken_save)

        with caplog.at_level(logging.ERROR, logger="siegelog.api.routers.logs"):
            response = self.save(client, sample_log)

        assert response.status_code == 500
        assert response.json()["error"]["message"] == "Failed to save log data"
        records = [r for r in caplog.records if r.name == "siegelog.api.routers.logs"]
        assert records and records[0].exc_info is not None
        assert "disk full" in str(records[0].exc_info[1])

    def test_save_uses_character_roster(self, client, sample_log):
        client.post("/api/characters", json={"name": "Hero1", "serverName": "Aurora", "class": "Warrior"})
        client.post("/api/characters", json={"name": "Villain1", "serverName": "Borealis", "class": "Mage"})

        data = self.save(client, sample_log).json()
        players = {p["name"]: p for p in data["parsedData"]["playerResults"]}

        assert players["Hero1"]["class"] == "Warrior"
        assert "class" not in players["Villain1"]

    def test_get_by_id_and_date(self, client, worked_example):
        saved = self.save(client, worked_example).json()

        by_id = client.get(f"/api/logs/{saved['id']}")
        by_date = client.get("/api/logs/2024-03-09")

        assert by_id.status_code == 200
        assert by_id.json() == saved
        assert by_date.json()["id"] == saved["id"]

    def test_get_missing(self, client):
        missing_date = client.get("/api/logs/2024-01-01")
        missing_id = client.get("/api/logs/abc123")

        assert missing_date.status_code == 404
        assert missing_date.json()["error"]["message"] == "No log found for the specified date"
        assert missing_id.status_code == 404
        assert missing_id.json()["error"]["message"] == "No log found with the specified ID"

    def test_list_for_server(self, client, worked_example):
        self.save(client, worked_example, log_date="2024-03-01")
        self.save(client, worked_example, log_date="2024-03-15")
        self.save(client, worked_example, server="Borealis")

        response = client.get("/api/logs", params={"serverName": "Aurora"})

        assert response.status_code == 200
        assert [e["logDate"] for e in response.json()] == ["2024-03-15", "2024-03-01"]
        assert "parsedData" not in response.json()[0]

    def test_list_servers(self, client, worked_example):
        self.save(client, worked_example)
        self.save(client, worked_example, server="Borealis")
        self.save(client, worked_example, server="Borealis")

        response = client.get("/api/logs")

        servers = {s["name"]: s["count"] for s in response.json()["servers"]}
        assert servers == {"Aurora": 1, "Borealis": 2}


class TestCharacters:

    def test_register_and_list(self, client):
        response = client.post(
            "/api/characters", json={"name": "Hero1", "serverName": "Aurora", "class": "Warrior"}
        )
        assert response.status_code == 200
        assert response.json() == {"name": "Hero1", "serverName": "Aurora", "class": "Warrior"}

        client.post("/api/characters", json={"name": "Hero1", "serverName": "Aurora", "class": "Paladin"})

        listed = client.get("/api/characters", params={"serverName": "Aurora"}).json()
        assert listed == [{"name": "Hero1", "serverName": "Aurora", "class": "Paladin"}]

    def test_register_validates(self, client):
        response = client.post("/api/characters", json={"name": "", "serverName": "Aurora", "class": "Mage"})
        assert response.status_code == 422

    def test_list_requires_server(self, client):
        assert client.get("/api/characters").status_code == 422
