from __future__ import annotations

import json
import os
from http import HTTPStatus
from typing import Dict, List, Mapping, Optional, Tuple, Union

import pytest
from requests_mock import Mocker

from meteomunch import config
from meteomunch.rest import RestResponse


ENV_PREFIXES = ("MUNCH_", "MONGO_", "DLMREDIS_", "METEOPROVIDERS_")


class StubClient:
    """HTTPClient returning a canned response and recording every call."""

    def __init__(self, status_code: int = 200, body: Union[bytes, str, dict] = b"{}") -> None:
        self.base_url = "https://stub.test/"
        self.status_code = status_code
        if isinstance(body, dict):
            body = json.dumps(body)
        self.body = body.encode("utf-8") if isinstance(body, str) else body
        self.calls: List[Tuple[str, Dict[str, str]]] = []

    def get(
        self,
        path: str,
        params: Optional[Mapping[str, str]] = None,
        headers: Optional[Mapping[str, str]] = None,
    ) -> RestResponse:
        self.calls.append((path, dict(params or {})))
        return RestResponse(
            status_code=self.status_code,
            status=f"{self.status_code} {HTTPStatus(self.status_code).phrase}",
            body=self.body,
        )


@pytest.fixture
def requests_mock():
    with Mocker() as mock:
        yield mock


@pytest.fixture
def stub_client():
    return StubClient


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch, tmp_path):
    """Run every test without a munch.yml, munch env variables or a memoized config."""
    monkeypatch.chdir(tmp_path)
    for key in list(os.environ):
        if key.startswith(ENV_PREFIXES):
            monkeypatch.delenv(key)
    config.reset()
    yield
    config.reset()
