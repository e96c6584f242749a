import json
from unittest.mock import MagicMock

import pytest

from terraform_provider_akeneo.helpers import Diagnostics
from terraform_provider_akeneo.models import ResourceData


@pytest.fixture
def mock_client():
    """
    A stand-in for `AkeneoClient`. Services only ever call its `get`, `post`
    and `patch` methods, so a bare MagicMock is enough.
    """
    client = MagicMock()
    client.get.return_value = None
    client.post.return_value = None
    client.patch.return_value = None
    return client


@pytest.fixture
def resource_data(mock_client):
    return ResourceData(client=mock_client, extra_attribute_types=["custom_type"])


@pytest.fixture
def configure_resource(resource_data):
    """Returns a helper that instantiates and configures a resource class."""

    def _configure(resource_class):
        resource = resource_class()
        diagnostics = resource.configure(resource_data)
        assert not diagnostics.has_error
        return resource

    return _configure


@pytest.fixture
def decode():
    """Returns a helper that decodes raw configuration against a resource schema."""

    def _decode(resource, raw):
        diagnostics = Diagnostics()
        state = resource.schema().decode(raw, diagnostics)
        assert not diagnostics.has_error, diagnostics.to_list()
        return state

    return _decode


class FakeResponse:
    """Mimics the file-like object returned by `open_url`."""

    def __init__(self, body=None, status=200):
        if body is None:
            self._content = b""
        elif isinstance(body, bytes):
            self._content = body
        else:
            self._content = json.dumps(body).encode()
        self.status = status

    def getcode(self):
        return self.status

    def read(self):
        return self._content


@pytest.fixture
def fake_response():
    return FakeResponse
