"""
Table Storage access for check-in records.

Wraps the async Azure Tables client behind the two operations the
handler needs and converts SDK failures into StoreFault.

Architecture:
    Handler → CheckinStore.get / upsert → azure.data.tables.aio.TableClient
"""
import asyncio
import logging
from typing import Optional

from azure.core.exceptions import AzureError, ResourceNotFoundError
from azure.data.tables import UpdateMode
from azure.data.tables.aio import TableClient
from pydantic import ValidationError

from .config import Settings
from .exceptions import ConfigurationError, StoreFault
from .models import CheckinRecord

logger = logging.getLogger(__name__)

# Status codes Table Storage answers a successful upsert with
UPSERT_SUCCESS_CODES = (200, 204)


class CheckinStore:
    """
    Check-in table backed by Azure Table Storage.

    Use as an async context manager so the underlying HTTP session is
    closed when the request finishes.
    """

    def __init__(self, table_client: TableClient, timeout: Optional[float] = None):
        self._client = table_client
        self._timeout = timeout

    @classmethod
    def from_settings(cls, settings: Settings) -> "CheckinStore":
        """
        Build a store from the function settings.

        Raises:
            ConfigurationError: If the connection string is unset or malformed
        """
        connection_string = settings.connection_string
        if connection_string is None:
            raise ConfigurationError("AzureTableConnectionString environment variable not set")

        try:
            client = TableClient.from_connection_string(
                connection_string,
                table_name=settings.IP_CHECKIN_TABLE_NAME,
            )
        except ValueError as e:
            raise ConfigurationError(f"AzureTableConnectionString is invalid: {e}") from e

        return cls(client, timeout=settings.IP_CHECKIN_STORE_TIMEOUT_SECONDS)

    @property
    def table_name(self) -> str:
        return self._client.table_name

    async def __aenter__(self) -> "CheckinStore":
        await self._client.__aenter__()
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self._client.__aexit__(*exc_info)

    async def _call(self, operation: str, awaitable):
        try:
            return await asyncio.wait_for(awaitable, timeout=self._timeout)
        except asyncio.TimeoutError as e:
            raise StoreFault(f"Table storage did not answer within {self._timeout}s", operation) from e

    async def get(self, partition_key: str, row_key: str) -> Optional[CheckinRecord]:
        """
        Fetch the record stored under (partition_key, row_key).

        Returns:
            The stored record, or None when the table has no such entity

        Raises:
            StoreFault: On any failure other than "not found"
        """
        try:
            entity = await self._call(
                "get",
                self._client.get_entity(partition_key=partition_key, row_key=row_key),
            )
        except ResourceNotFoundError:
            logger.debug(f"No entity for ({partition_key}, {row_key})")
            return None
        except AzureError as e:
            raise StoreFault(f"Lookup failed: {e}", "get") from e

        try:
            return CheckinRecord.from_entity(entity)
        except ValidationError as e:
            raise StoreFault(f"Stored entity is not a check-in record: {e}", "get") from e

    async def upsert(self, record: CheckinRecord) -> int:
        """
        Insert the record, or replace the entity already stored under its key.

        Returns:
            HTTP status code Table Storage answered with (0 if none was seen)

        Raises:
            StoreFault: On transport or service errors
        """
        captured = {}

        def _capture_status(pipeline_response) -> None:
            captured["status"] = pipeline_response.http_response.status_code

        try:
            await self._call(
                "upsert",
                self._client.upsert_entity(
                    entity=record.to_entity(),
                    mode=UpdateMode.REPLACE,
                    raw_response_hook=_capture_status,
                ),
            )
        except AzureError as e:
            raise StoreFault(f"Upsert failed: {e}", "upsert") from e

        return captured.get("status", 0)
