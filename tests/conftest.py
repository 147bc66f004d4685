# Shared pytest fixtures
from __future__ import annotations

import json

import pytest
import requests
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import rsa

from bookreg.config import SheetConfig


@pytest.fixture(scope="session")
def private_key():
    return rsa.generate_private_key(public_exponent=65537, key_size=2048)


@pytest.fixture(scope="session")
def private_key_pem(private_key) -> str:
    return private_key.private_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PrivateFormat.PKCS8,
        encryption_algorithm=serialization.NoEncryption(),
    ).decode("ascii")


@pytest.fixture()
def config(private_key_pem: str) -> SheetConfig:
    return SheetConfig(
        identity="registrar@example.iam.gserviceaccount.com",
        signing_key=private_key_pem,
        resource_id="sheet-123",
    )


class FakeResponse:
    def __init__(self, payload=None, status_code: int = 200):
        self._payload = payload
        self.status_code = status_code

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300

    def json(self):
        if self._payload is None:
            raise ValueError("no json body")
        return self._payload


class FakeSession:
    """Records post() calls and replies with a canned response."""

    def __init__(self, response: FakeResponse | None = None, error: Exception | None = None):
        self.response = response or FakeResponse({"access_token": "tok-abc", "expires_in": 3599})
        self.error = error
        self.calls: list[dict] = []

    def post(self, url, **kwargs):
        self.calls.append({"url": url, **kwargs})
        if self.error:
            raise self.error
        return self.response


def _json_response(status_code: int, payload: dict, url: str) -> requests.Response:
    r = requests.Response()
    r.status_code = status_code
    r._content = json.dumps(payload).encode("utf-8")
    r.headers["Content-Type"] = "application/json; charset=UTF-8"
    r.encoding = "utf-8"
    r.url = url
    return r


class SheetsTransport:
    """Stands in for the wire under gspread's real AuthorizedSession."""

    def __init__(self):
        self.calls: list[dict] = []
        self.status_code = 200
        self.payload: dict = {}

    def reply(self, status_code: int, payload: dict | None = None):
        self.status_code = status_code
        if payload is None and status_code >= 300:
            payload = {"error": {"code": status_code, "message": "failed", "status": "ERROR"}}
        self.payload = payload or {}

    def header(self, call: dict, name: str):
        return {k.lower(): v for k, v in call["headers"].items()}.get(name.lower())


@pytest.fixture()
def sheets_transport(monkeypatch) -> SheetsTransport:
    transport = SheetsTransport()

    def request(session, method, url, data=None, headers=None, **kwargs):
        transport.calls.append({"method": method.upper(), "url": url, "headers": dict(headers or {}), **kwargs})
        return _json_response(transport.status_code, transport.payload, url)

    monkeypatch.setattr(requests.Session, "request", request)
    return transport


@pytest.fixture()
def make_session():
    def make(payload=None, status_code: int = 200, error: Exception | None = None) -> FakeSession:
        if payload is None:
            payload = {"access_token": "tok-abc", "expires_in": 3599}
        return FakeSession(FakeResponse(payload, status_code), error)

    return make
