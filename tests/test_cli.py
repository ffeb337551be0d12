from __future__ import annotations

import json
import sys

import pytest
import requests

import cli
from conftest import FakeResponse
from models import Candidate
from services.fallback_chain import UNAVAILABLE
from sources import registry


class _Unavailable:
    name = "firecrawl_search"

    def __init__(self, settings, session=None):
        pass

    def attempt(self, area, sector):
        return UNAVAILABLE


class _Directory:
    name = "pagesjaunes_directory"

    def __init__(self, settings, session=None):
        pass

    def attempt(self, area, sector):
        return [Candidate(name="Plomberie Dupont", website="plomberie-dupont.fr")]


@pytest.fixture
def offline(monkeypatch):
    monkeypatch.setattr(
        registry,
        "_REGISTRY",
        {"firecrawl_search": _Unavailable, "pagesjaunes_directory": _Directory},
    )

    def fake_get(self, url, **kwargs):
        if url == "https://plomberie-dupont.fr":
            return FakeResponse(200, "Ecrivez-nous: contact@plomberie-dupont.fr")
        raise requests.exceptions.ConnectionError(url)

    monkeypatch.setattr(requests.Session, "get", fake_get)


def _run(monkeypatch, *argv):
    monkeypatch.setattr(sys, "argv", ["cli.py", *argv])
    cli.main()


@pytest.mark.parametrize("extra", [[], ["--background", "--poll-interval", "0.01"]])
def test_search_then_results(monkeypatch, capsys, tmp_path, offline, extra):
    db = str(tmp_path / "contacts.db")

    _run(monkeypatch, "--db", db, "search", "--area", "Lyon", "--sector", "plombier", *extra)
    out = capsys.readouterr().out
    assert "Search 1 created" in out
    assert "Total Results: 1" in out

    _run(monkeypatch, "--db", db, "results", "--search-id", "1")
    rows = json.loads(capsys.readouterr().out)
    assert [(r["email"], r["email_origin"], r["city"]) for r in rows] == [
        ("contact@plomberie-dupont.fr", "regex", "Lyon"),
    ]

    _run(monkeypatch, "--db", db, "status", "--search-id", "1")
    status = json.loads(capsys.readouterr().out)
    assert (status["status"], status["total_results"]) == ("completed", 1)


def test_history_and_missing_status(monkeypatch, capsys, tmp_path):
    db = str(tmp_path / "contacts.db")
    _run(monkeypatch, "--db", db, "bootstrap")
    assert "Schema ready" in capsys.readouterr().out

    _run(monkeypatch, "--db", db, "status", "--search-id", "42")
    assert "No search found" in capsys.readouterr().out

    _run(monkeypatch, "--db", db, "history")
    assert json.loads(capsys.readouterr().out) == []
