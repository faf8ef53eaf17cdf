"""Data Pool adapter."""

import logging
from typing import Any

from ..client import DataPoolStatus, operations
from ..client.types import RemoteDataPool
from ..models import DataPoolInputs, parse_inputs
from ..state import ResourceData
from ..type_mapper import expand_pool_columns, flatten_pool_columns
from .base import ResourceAdapter, Timeouts

logger = logging.getLogger(__name__)


class DataPoolAdapter(ResourceAdapter):
    """Creates Data Pools and waits for them to go LIVE."""

    kind = "Data Pool"
    fields = (
        "unique_name",
        "description",
        "status",
        "account",
        "environment",
        "data_source",
        "table",
        "timestamp",
        "tenant_id",
        "columns",
        "timeouts",
    )
    pending_statuses = frozenset({DataPoolStatus.CREATED.value, DataPoolStatus.PENDING.value})
    target_statuses = frozenset({DataPoolStatus.LIVE.value})
    confirm_deletion = True

    @staticmethod
    def build_input(inputs: DataPoolInputs) -> dict[str, Any]:
        payload: dict[str, Any] = {
            **ResourceAdapter.identity_input(inputs.unique_name, inputs.description),
            "dataSource": inputs.data_source,
            "table": inputs.table,
            "timestamp": {"columnName": inputs.timestamp},
            "columns": expand_pool_columns(inputs.columns),
        }
        if inputs.tenant_id:
            payload["tenant"] = {"columnName": inputs.tenant_id}
        return payload

    async def create(self, data: ResourceData, timeouts: Timeouts) -> None:
        inputs = parse_inputs(DataPoolInputs, data.outputs())
        response = await operations.create_data_pool(self.client, self.build_input(inputs))

        data.set_id(response.data_pool.id)
        logger.info(f"Created {self.kind} {data.id}")

        await self.wait_until_ready(data, timeouts)
        await self.read(data)

    async def fetch(self, id: str) -> RemoteDataPool:
        return await operations.data_pool(self.client, id)

    async def read(self, data: ResourceData) -> None:
        pool = await self.fetch(data.id)

        data.set_id(pool.id)
        data.set("unique_name", pool.unique_name)
        data.set("description", pool.description)
        data.set("status", pool.status)
        data.set("environment", pool.environment.id)
        data.set("account", pool.account.id)
        data.set("data_source", pool.data_source.id)
        data.set("table", pool.table)
        data.set("timestamp", pool.timestamp.column_name)
        data.set("tenant_id", pool.tenant.column_name if pool.tenant else None)

        columns = flatten_pool_columns(pool.columns)
        if columns is not None:
            data.set("columns", columns)

    async def _modify(self, data: ResourceData) -> None:
        await operations.modify_data_pool(self.client, self.modify_input(data))

    async def _delete_remote(self, id: str) -> None:
        await operations.delete_data_pool(self.client, id)
