"""
Pytest fixtures for the IP check-in function tests.

Provides:
- In-memory stand-in for the async Azure Tables client
- Settings with and without a store connection string
- Builder for azure.functions.HttpRequest objects
"""
import json
from unittest.mock import MagicMock

import pytest
import azure.functions as func
from azure.core.exceptions import ResourceNotFoundError
from azure.data.tables import TableEntity

from ip_checkin.config import Settings
from ip_checkin.store import CheckinStore


TEST_CONNECTION_STRING = (
    "DefaultEndpointsProtocol=https;AccountName=devicecheckins;"
    "AccountKey=ZGV2aWNlLWNoZWNraW5zLXRlc3Qta2V5LW5vdC1yZWFsLTAwMDAwMDAwMDA=;"
    "EndpointSuffix=core.windows.net"
)


class FakeTableClient:
    """
    Async TableClient double backed by a dict keyed on (PartitionKey, RowKey).

    Records every call so tests can assert on the exact store traffic.
    """

    def __init__(self, table_name="IpCheckin", upsert_status=204):
        self.table_name = table_name
        self.upsert_status = upsert_status
        self.entities = {}
        self.calls = []
        self.get_error = None
        self.upsert_error = None
        self.closed = False

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc_info):
        self.closed = True

    async def get_entity(self, partition_key, row_key, **kwargs):
        self.calls.append(("get", partition_key, row_key))
        if self.get_error is not None:
            raise self.get_error
        key = (partition_key, row_key)
        if key not in self.entities:
            raise ResourceNotFoundError(message="The specified resource does not exist.")
        return TableEntity(**self.entities[key])

    async def upsert_entity(self, entity, mode=None, **kwargs):
        self.calls.append(("upsert", entity["PartitionKey"], entity["RowKey"]))
        if self.upsert_error is not None:
            raise self.upsert_error
        self.entities[(entity["PartitionKey"], entity["RowKey"])] = dict(entity)

        hook = kwargs.get("raw_response_hook")
        if hook is not None:
            pipeline_response = MagicMock()
            pipeline_response.http_response.status_code = self.upsert_status
            hook(pipeline_response)
        return {"etag": 'W/"datetime\'2026-10-19T00%3A00%3A00Z\'"'}


@pytest.fixture
def table_client():
    return FakeTableClient()


@pytest.fixture
def store_factory(table_client):
    """Store factory handing out CheckinStores over the fake client."""
    def _factory(settings):
        return CheckinStore(table_client, timeout=settings.IP_CHECKIN_STORE_TIMEOUT_SECONDS)
    return _factory


@pytest.fixture
def test_settings():
    return Settings(
        AzureTableConnectionString=TEST_CONNECTION_STRING,
        IP_CHECKIN_TABLE_NAME="IpCheckin",
        IP_CHECKIN_STORE_TIMEOUT_SECONDS=5.0,
        IP_CHECKIN_ALLOW_GET=False,
        IP_CHECKIN_DEBUG=False,
    )


@pytest.fixture
def unconfigured_settings():
    return Settings(AzureTableConnectionString=None)


def make_request(body=None, content_type="application/json", method="POST"):
    """Build an HttpRequest; dict bodies are JSON-encoded."""
    if isinstance(body, (dict, list)):
        body = json.dumps(body)
    if isinstance(body, str):
        body = body.encode("utf-8")
    headers = {"Content-Type": content_type} if content_type is not None else {}
    return func.HttpRequest(
        method=method,
        url="http://localhost:7071/api/IpCheckin",
        headers=headers,
        body=body or b"",
    )
