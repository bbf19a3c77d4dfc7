from unittest.mock import MagicMock

import pytest
import requests

from task_updates.clients.nomad_client import NomadClient
from task_updates.errors import SchedulerError


class DummyResponse:
    def __init__(self, status_code, body=None, text=""):
        self.status_code = status_code
        self.body = body
        self.text = text

    def json(self):
        return self.body


@pytest.fixture
def client(monkeypatch):
    monkeypatch.delenv("NOMAD_TOKEN", raising=False)
    client = NomadClient("http://nomad.example.com:4646/")
    client.session = MagicMock()
    return client


def test_list_allocations(client):
    client.session.get.return_value = DummyResponse(200, [{"ID": "a1"}])

    assert client.list_allocations("default") == [{"ID": "a1"}]
    client.session.get.assert_called_once_with(
        "http://nomad.example.com:4646/v1/allocations", params={"namespace": "default"}, timeout=30
    )


def test_empty_namespace_means_all(client):
    client.session.get.return_value = DummyResponse(200, {"ID": "a1"})

    client.get_allocation("a1", "")
    assert client.session.get.call_args.kwargs["params"] == {"namespace": "*"}
    assert client.session.get.call_args[0][0] == "http://nomad.example.com:4646/v1/allocation/a1"


def test_error_status(client):
    client.session.get.return_value = DummyResponse(403, text="Permission denied")
    with pytest.raises(SchedulerError, match="status code 403"):
        client.list_allocations("*")


def test_transport_error(client):
    client.session.get.side_effect = requests.ConnectionError("refused")
    with pytest.raises(SchedulerError, match="refused"):
        client.list_allocations("*")


def test_token_from_environment(monkeypatch):
    monkeypatch.setenv("NOMAD_TOKEN", "secret")
    assert NomadClient().session.headers["X-Nomad-Token"] == "secret"


def test_default_address(monkeypatch):
    monkeypatch.delenv("NOMAD_TOKEN", raising=False)
    client = NomadClient("")
    assert client.address == "http://127.0.0.1:4646"
    assert "X-Nomad-Token" not in client.session.headers
