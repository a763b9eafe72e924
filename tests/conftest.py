"""Shared fixtures: a recording stub transport and a client wired to it."""
import pytest

from emarsys_sdk.client import EmarsysClient
from tests.stubs import StubTransport


@pytest.fixture
def transport():
    return StubTransport()


@pytest.fixture
def client(transport):
    return EmarsysClient(
        "dummy-api-username",
        "dummy-api-secret",
        "https://suite.example.test/api/v2/",
        transport=transport,
    )
