import json

import pytest
import requests

import qris_appserver_client
from qris_appserver import app


class FlaskResponse:
    """Just enough of requests.Response on top of a Flask test response."""

    def __init__(self, resp):
        self.status_code = resp.status_code
        self.text = resp.get_data(as_text=True)

    def json(self):
        return json.loads(self.text)


@pytest.fixture
def routed(monkeypatch):
    client = app.test_client()

    def fake_post(url, json=None, **kwargs):
        return FlaskResponse(client.post(url.replace(qris_appserver_client.BASE_URL, ""), json=json))

    def fake_get(url, params=None, **kwargs):
        return FlaskResponse(client.get(url.replace(qris_appserver_client.BASE_URL, ""), query_string=params))

    monkeypatch.setattr(requests, "post", fake_post)
    monkeypatch.setattr(requests, "get", fake_get)


def test_check_convert_validates_result(routed, static_qris, tmp_path):
    request_file = tmp_path / "convert.json"
    request_file.write_text(json.dumps({"qrisStatic": static_qris, "amount": 100000, "feeKind": "r", "fee": 1000}))

    assert qris_appserver_client.check_convert(str(request_file)) == {"valid": True, "errors": []}


def test_check_convert_missing_file(tmp_path, capsys):
    assert qris_appserver_client.check_convert(str(tmp_path / "missing.json")) is None
    assert "not found" in capsys.readouterr().out


def test_check_validate_reads_file(routed, signed_qris, tmp_path):
    qris_file = tmp_path / "qris.txt"
    qris_file.write_text(signed_qris + "\n")

    assert qris_appserver_client.check_validate(str(qris_file)) == {"valid": True, "errors": []}


def test_check_crc(routed):
    assert qris_appserver_client.check_crc("123456789") == {"crc": "29B1"}


def test_connection_error_is_reported(monkeypatch, capsys):
    def refuse(*args, **kwargs):
        raise requests.exceptions.ConnectionError()

    monkeypatch.setattr(requests, "get", refuse)

    assert qris_appserver_client.check_crc("x") is None
    assert "Could not connect" in capsys.readouterr().out
