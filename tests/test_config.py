"""Test client configuration and endpoint table."""
import pytest
from emarsys_sdk.client import EmarsysClient
from emarsys_sdk.config import EmarsysConfig
from emarsys_sdk.constants import LIVE_BASE_URL
from emarsys_sdk import constants
from emarsys_sdk.endpoints import ENDPOINTS, Endpoint, get_endpoint, with_query

from tests.stubs import StubTransport


def test_config_defaults():
    config = EmarsysConfig.default("acme001", "s3cr3t")
    assert config.base_url == LIVE_BASE_URL
    assert config.max_json_depth == 512
    assert "s3cr3t" not in repr(config)


def test_config_is_frozen():
    config = EmarsysConfig.default("acme001", "s3cr3t")
    with pytest.raises(AttributeError):
        config.secret = "other"


def test_config_from_env(monkeypatch):
    monkeypatch.setenv("EMARSYS_USERNAME", "acme001")
    monkeypatch.setenv("EMARSYS_SECRET", "s3cr3t")
    monkeypatch.setenv("EMARSYS_BASE_URL", "https://suite0.emarsys.net/api/v2/")
    monkeypatch.setenv("EMARSYS_TIMEOUT", "5")
    monkeypatch.setenv("EMARSYS_MAX_JSON_DEPTH", "64")

    config = EmarsysConfig.from_env()
    assert config.username == "acme001"
    assert config.base_url == "https://suite0.emarsys.net/api/v2/"
    assert config.timeout == 5.0
    assert config.max_json_depth == 64


def test_config_from_env_missing_credentials(monkeypatch):
    monkeypatch.delenv("EMARSYS_USERNAME", raising=False)
    monkeypatch.delenv("EMARSYS_SECRET", raising=False)
    with pytest.raises(ValueError, match="EMARSYS_USERNAME, EMARSYS_SECRET"):
        EmarsysConfig.from_env()


def test_client_from_config():
    transport = StubTransport()
    config = EmarsysConfig(username="acme001", secret="s3cr3t", base_url="https://suite0.emarsys.net/api/v2/")
    client = EmarsysClient.from_config(config, transport=transport)
    client.get_languages()
    assert transport.last["url"] == "https://suite0.emarsys.net/api/v2/language"
    assert 'Username="acme001"' in transport.last["headers"]["X-WSSE"]


def test_endpoint_table_covers_contact_writes():
    resolving = {name for name, endpoint in ENDPOINTS.items() if endpoint.resolve_fields}
    assert resolving == {"create_contact", "update_contact", "update_contact_and_create_if_not_exists"}


def test_endpoint_render():
    assert get_endpoint("launch_email").render(email_id=5) == "email/5/launch"
    assert get_endpoint("delete_source").method == "DELETE"


def test_with_query():
    assert with_query("email", {}) == "email"
    assert with_query("email", {"status": 3}) == "email/status=3"


def test_unknown_endpoint():
    with pytest.raises(KeyError):
        get_endpoint("nope")


def test_endpoint_rows_carry_routing_only():
    assert set(Endpoint.model_fields) == {"name", "method", "path", "resolve_fields"}
    assert not hasattr(constants, "LaunchStatus")
