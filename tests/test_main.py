"""Tests for the command-line interface."""

import json
from unittest.mock import MagicMock

import pytest
import requests

from recruiting_db import main as cli
from recruiting_db.ingest import proxy as ingest_proxy
from recruiting_db.profiles.query import SortDirection, SortField


@pytest.fixture(autouse=True)
def quiet(monkeypatch, store):
    for name in ["RECRUITING_DB_CONFIG", "SUPABASE_URL", "SUPABASE_ANON_KEY", "RECRUITING_DB_BACKEND"]:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setattr(cli, "setup_logging", lambda *args, **kwargs: None)
    monkeypatch.setattr(cli, "create_store", lambda config: store)


class TestQueryFromArgs:
    def test_builds_query_state(self):
        args = cli.parse_args([
            "list", "--search", " ada ", "--skill", "python", "--skill", "math",
            "--domain", "fintech", "--sort", "years_experience", "--desc",
        ])
        query = cli.query_from_args(args)
        assert query.search_query == "ada"
        assert query.selected_skills == frozenset({"python", "math"})
        assert query.selected_domains == frozenset({"fintech"})
        assert query.sort_field == SortField.YEARS_EXPERIENCE
        assert query.sort_direction == SortDirection.DESC


class TestCommands:
    def test_list(self, capsys):
        assert cli.main(["list", "--skill", "python"]) == 0
        out = capsys.readouterr().out
        assert "Showing 2 of 5 profiles" in out
        assert "Ada Lovelace" in out
        assert "Acme Robotics" in out

    def test_list_sorted(self, capsys):
        assert cli.main(["list", "--sort", "years_experience", "--desc"]) == 0
        out = capsys.readouterr().out
        assert out.index("Grace Hopper") < out.index("Ada Lovelace") < out.index("Linus Torvalds")

    def test_show(self, capsys):
        assert cli.main(["show", "p5"]) == 0
        out = capsys.readouterr().out
        assert "=== Margaret Hamilton ===" in out
        assert "Domains: aerospace, defense" in out

    def test_show_not_found(self, capsys):
        assert cli.main(["show", "nope"]) == 1
        assert "Profile not found" in capsys.readouterr().err

    def test_tags(self, capsys):
        assert cli.main(["tags"]) == 0
        out = capsys.readouterr().out
        assert "Skills (6):" in out
        assert "  flight software" in out

    def test_ingest_without_config(self, tmp_path, capsys):
        payload = tmp_path / "payload.json"
        payload.write_text(json.dumps({"linkedin_url": "https://x", "raw_json": {}, "canonical_json": {}}))
        assert cli.main(["ingest", str(payload)]) == 1
        assert "Missing Supabase configuration" in capsys.readouterr().err

    def test_ingest_invalid_payload(self, tmp_path, capsys):
        payload = tmp_path / "payload.json"
        payload.write_text(json.dumps({"linkedin_url": "https://x"}))
        assert cli.main(["ingest", str(payload)]) == 1
        assert "Missing required fields" in capsys.readouterr().err

    def test_missing_config_file(self, capsys):
        assert cli.main(["--config", "nonexistent.yaml", "tags"]) == 1
        assert "Config file not found" in capsys.readouterr().err


class TestIngestFailures:
    @pytest.fixture
    def payload(self, tmp_path):
        path = tmp_path / "payload.json"
        path.write_text(json.dumps({"linkedin_url": "https://x", "raw_json": {}, "canonical_json": {}}))
        return str(path)

    @pytest.fixture
    def session(self, monkeypatch):
        monkeypatch.setenv("SUPABASE_URL", "https://proj.supabase.co")
        monkeypatch.setenv("SUPABASE_ANON_KEY", "anon-key")
        session = MagicMock()
        monkeypatch.setattr(ingest_proxy, "create_session", lambda: session)
        return session

    def test_connection_error(self, payload, session, capsys):
        session.post.side_effect = requests.ConnectionError("connection refused")
        assert cli.main(["ingest", payload]) == 1
        err = capsys.readouterr().err
        assert "Error: ingestion request failed" in err
        assert "connection refused" in err

    def test_non_json_success_body(self, payload, session, make_response, capsys):
        response = make_response()
        response.json.side_effect = ValueError("Expecting value")
        session.post.return_value = response
        assert cli.main(["ingest", payload]) == 1
        assert "Error: invalid response from ingestion function" in capsys.readouterr().err

    def test_downstream_error(self, payload, session, make_response, capsys):
        session.post.return_value = make_response(status=502, text="bad gateway")
        assert cli.main(["ingest", payload]) == 1
        assert "Error (502): Supabase Edge Function error: bad gateway" in capsys.readouterr().err

    def test_success_prints_response(self, payload, session, make_response, capsys):
        session.post.return_value = make_response({"id": "new-id"})
        assert cli.main(["ingest", payload]) == 0
        assert '"id": "new-id"' in capsys.readouterr().out
