from __future__ import annotations

import json
from io import StringIO

import pytest
from django.core.management import call_command
from django.core.management.base import CommandError

from meteomunch import config
from munchserver.api.management.commands import munch_serve


def test_munch_fetch_outputs_snapshot(requests_mock):
    requests_mock.get("https://api.open-meteo.com/v1/forecast", json={"latitude": 55.75, "longitude": 37.61})
    out = StringIO()

    call_command("munch_fetch", "--lat", "55.75", "--lon", "37.61", stdout=out)

    payload = json.loads(out.getvalue())
    assert payload["latitude"] == 55.75
    assert payload["current"]["temperature_2m"] == 0.0


def test_munch_fetch_reports_upstream_errors(requests_mock):
    requests_mock.get("https://api.open-meteo.com/v1/forecast", status_code=500)

    with pytest.raises(CommandError, match="Couldn't fetch data from open-meteo"):
        call_command("munch_fetch", "--lat", "1", "--lon", "2", stdout=StringIO())


def test_munch_fetch_reports_invalid_configuration(tmp_path):
    path = tmp_path / "broken.yml"
    path.write_text("MeteoProviders:\n  - Name: meteoblue\n", encoding="utf-8")

    with pytest.raises(CommandError, match="Invalid configuration"):
        call_command("munch_fetch", "--lat", "1", "--lon", "2", "--config", str(path), stdout=StringIO())


def test_munch_serve_uses_configured_address(tmp_path, monkeypatch):
    calls = []
    monkeypatch.setattr(munch_serve, "call_command", lambda *args, **kwargs: calls.append((args, kwargs)))
    path = tmp_path / "serve.yml"
    path.write_text("Munch:\n  Server:\n    Hostname: 0.0.0.0\n    Port: 8088\n", encoding="utf-8")
    out = StringIO()

    call_command("munch_serve", "--config", str(path), stdout=out)

    assert calls == [(("runserver", "0.0.0.0:8088"), {"use_reloader": False})]
    assert "0.0.0.0:8088" in out.getvalue()
    assert config.get().munch.server.port == "8088"


def test_munch_serve_defaults(monkeypatch):
    calls = []
    monkeypatch.setattr(munch_serve, "call_command", lambda *args, **kwargs: calls.append(args))

    call_command("munch_serve", stdout=StringIO())

    assert calls == [("runserver", "localhost:50050")]
