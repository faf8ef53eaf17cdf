"""
Data Source adapter.

Data Sources come in three connection types. Create dispatches on the
configured ``type``; Read dispatches on the type the API reports. Both
lookups are case-insensitive.
"""

import logging
from typing import Any

from ..client import DataSourceStatus, operations
from ..client.types import (
    FailureResponse,
    HttpSettings,
    RemoteDataSource,
    S3Settings,
    SnowflakeSettings,
)
from ..errors import CreateFailedError, PropelError
from ..models import DataSourceInputs, DataSourceType, parse_inputs
from ..state import ResourceData
from ..type_mapper import expand_basic_auth, expand_tables, flatten_tables
from .base import ResourceAdapter, Timeouts

logger = logging.getLogger(__name__)


class DataSourceAdapter(ResourceAdapter):
    """Creates Snowflake, HTTP and S3 Data Sources and waits for them to connect."""

    kind = "Data Source"
    fields = (
        "unique_name",
        "description",
        "type",
        "status",
        "account",
        "environment",
        "created_at",
        "created_by",
        "modified_at",
        "modified_by",
        "snowflake_connection_settings",
        "http_connection_settings",
        "s3_connection_settings",
        "tables",
        "timeouts",
    )
    pending_statuses = frozenset(
        {DataSourceStatus.CREATED.value, DataSourceStatus.CONNECTING.value}
    )
    target_statuses = frozenset({DataSourceStatus.CONNECTED.value})
    confirm_deletion = True

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self._create_paths = {
            DataSourceType.SNOWFLAKE: self._create_snowflake,
            DataSourceType.HTTP: self._create_http,
            DataSourceType.S3: self._create_s3,
        }
        self._read_paths = {
            DataSourceType.SNOWFLAKE: self._read_snowflake,
            DataSourceType.HTTP: self._read_http,
            DataSourceType.S3: self._read_s3,
        }

    async def create(self, data: ResourceData, timeouts: Timeouts) -> None:
        source_type = DataSourceType.parse(data.get("type", ""))
        inputs = parse_inputs(DataSourceInputs, data.outputs())

        id = await self._create_paths[source_type](inputs)
        data.set_id(id)
        logger.info(f"Created {source_type.value} {self.kind} {id}")

        await self.wait_until_ready(data, timeouts)
        await self.read(data)

    async def _create_snowflake(self, inputs: DataSourceInputs) -> str:
        settings = inputs.snowflake_connection_settings
        payload = {
            **self.identity_input(inputs.unique_name, inputs.description),
            "connectionSettings": {
                "account": settings.account,
                "database": settings.database,
                "warehouse": settings.warehouse,
                "schema": settings.schema_,
                "role": settings.role,
                "username": settings.username,
                "password": settings.password,
            },
        }
        response = await operations.create_snowflake_data_source(self.client, payload)

        if isinstance(response, FailureResponse):
            detail = response.error.message if response.error else None
            raise CreateFailedError("Failed to create Data Source", detail)
        return response.data_source.id

    async def _create_http(self, inputs: DataSourceInputs) -> str:
        settings = inputs.http_connection_settings
        payload = {
            **self.identity_input(inputs.unique_name, inputs.description),
            "connectionSettings": {
                "basicAuth": expand_basic_auth(settings.basic_auth if settings else None),
                "tables": expand_tables(inputs.tables, DataSourceType.HTTP),
            },
        }
        response = await operations.create_http_data_source(self.client, payload)
        return response.data_source.id

    async def _create_s3(self, inputs: DataSourceInputs) -> str:
        settings = inputs.s3_connection_settings
        payload = {
            **self.identity_input(inputs.unique_name, inputs.description),
            "connectionSettings": {
                "bucket": settings.bucket,
                "awsAccessKeyId": settings.aws_access_key_id,
                "awsSecretAccessKey": settings.aws_secret_access_key,
                "tables": expand_tables(inputs.tables, DataSourceType.S3),
            },
        }
        response = await operations.create_s3_data_source(self.client, payload)
        return response.data_source.id

    async def fetch(self, id: str) -> RemoteDataSource:
        return await operations.data_source(self.client, id)

    async def read(self, data: ResourceData) -> None:
        source = await self.fetch(data.id)

        data.set_id(source.id)
        data.set("unique_name", source.unique_name)
        data.set("description", source.description)
        data.set("created_at", source.created_at)
        data.set("created_by", source.created_by)
        data.set("modified_at", source.modified_at)
        data.set("modified_by", source.modified_by)
        data.set("environment", source.environment.id)
        data.set("account", source.account.id)
        data.set("type", source.type)
        data.set("status", source.status)

        source_type = DataSourceType.parse(source.type)
        self._read_paths[source_type](source, data)

    def _read_snowflake(self, source: RemoteDataSource, data: ResourceData) -> None:
        settings = source.connection_settings
        if not isinstance(settings, SnowflakeSettings):
            raise PropelError("Missing SnowflakeConnectionSettings")

        prior = data.get("snowflake_connection_settings", {})
        data.set(
            "snowflake_connection_settings",
            {
                "account": settings.account,
                "database": settings.database,
                "warehouse": settings.warehouse,
                "schema": settings.schema_,
                "role": settings.role,
                "username": settings.username,
                # Never returned by the API
                "password": prior.get("password"),
            },
        )

    def _read_http(self, source: RemoteDataSource, data: ResourceData) -> None:
        self._read_tables(source, data, DataSourceType.HTTP)

        settings = source.connection_settings
        if not isinstance(settings, HttpSettings):
            raise PropelError("Missing HttpConnectionSettings")

        prior = data.get("http_connection_settings")
        if settings.basic_auth is None:
            if prior is not None:
                data.set("http_connection_settings", {"basic_auth": None})
            return

        prior_auth = (prior or {}).get("basic_auth") or {}
        data.set(
            "http_connection_settings",
            {
                "basic_auth": {
                    "username": settings.basic_auth.username,
                    "password": prior_auth.get("password"),
                }
            },
        )

    def _read_s3(self, source: RemoteDataSource, data: ResourceData) -> None:
        self._read_tables(source, data, DataSourceType.S3)

        settings = source.connection_settings
        if not isinstance(settings, S3Settings):
            raise PropelError("Missing S3ConnectionSettings")

        prior = data.get("s3_connection_settings", {})
        data.set(
            "s3_connection_settings",
            {
                "bucket": settings.bucket,
                "aws_access_key_id": settings.aws_access_key_id,
                "aws_secret_access_key": prior.get("aws_secret_access_key"),
            },
        )

    @staticmethod
    def _read_tables(
        source: RemoteDataSource, data: ResourceData, source_type: DataSourceType
    ) -> None:
        paths = {table.get("name"): table.get("path") for table in data.get("tables", [])}
        tables = flatten_tables(source.tables, source_type, paths)
        if tables is not None:
            data.set("tables", tables)

    async def _modify(self, data: ResourceData) -> None:
        source_type = DataSourceType.parse(data.get("type", ""))
        await operations.modify_data_source(
            self.client, source_type.value, self.modify_input(data)
        )

    async def _delete_remote(self, id: str) -> None:
        await operations.delete_data_source(self.client, id)

    @staticmethod
    def describe_settings(data: ResourceData) -> dict[str, Any]:
        """Connection settings of ``data`` with secrets masked."""
        masked = {}
        for field in ("snowflake_connection_settings", "s3_connection_settings"):
            settings = data.get(field)
            if settings:
                masked[field] = {
                    key: ("***" if key in ("password", "aws_secret_access_key") else value)
                    for key, value in settings.items()
                }

        http = data.get("http_connection_settings")
        if http and http.get("basic_auth"):
            masked["http_connection_settings"] = {
                "basic_auth": {**http["basic_auth"], "password": "***"}
            }
        return masked
