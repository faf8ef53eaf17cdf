"""Metric adapter. Metrics are usable as soon as they are created."""

import logging
from typing import Any

from ..client import operations
from ..client.types import RemoteMetric
from ..models import MetricInputs, MetricType, parse_inputs
from ..state import ResourceData
from .base import ResourceAdapter, Timeouts

logger = logging.getLogger(__name__)


class MetricAdapter(ResourceAdapter):
    kind = "Metric"
    fields = (
        "unique_name",
        "description",
        "type",
        "account",
        "environment",
        "data_pool",
        "measure",
        "dimensions",
        "filters",
        "timeouts",
    )

    @staticmethod
    def build_input(inputs: MetricInputs) -> dict[str, Any]:
        payload: dict[str, Any] = {
            **ResourceAdapter.identity_input(inputs.unique_name, inputs.description),
            "dataPool": inputs.data_pool,
            "dimensions": [{"columnName": name} for name in inputs.dimensions],
            "filters": [
                {"column": f.column, "operator": f.operator.value, "value": f.value}
                for f in inputs.filters
            ],
        }
        if inputs.type == MetricType.COUNT_DISTINCT:
            payload["dimension"] = {"columnName": inputs.measure}
        elif inputs.type != MetricType.COUNT:
            payload["measure"] = {"columnName": inputs.measure}
        return payload

    async def create(self, data: ResourceData, timeouts: Timeouts) -> None:
        inputs = parse_inputs(MetricInputs, data.outputs())
        response = await operations.create_metric(
            self.client, inputs.type, self.build_input(inputs)
        )

        data.set_id(response.metric.id)
        logger.info(f"Created {inputs.type.value} {self.kind} {data.id}")

        await self.read(data)

    async def fetch(self, id: str) -> RemoteMetric:
        return await operations.metric(self.client, id)

    async def read(self, data: ResourceData) -> None:
        metric = await self.fetch(data.id)

        data.set_id(metric.id)
        data.set("unique_name", metric.unique_name)
        data.set("description", metric.description)
        data.set("type", metric.type)
        data.set("environment", metric.environment.id)
        data.set("account", metric.account.id)
        data.set("data_pool", metric.data_pool.id)
        data.set("dimensions", [d.column_name for d in metric.dimensions])

        settings = metric.settings
        measure = None
        filters = []
        if settings is not None:
            column = settings.measure or settings.dimension
            measure = column.column_name if column else None
            filters = [
                {"column": f.column, "operator": f.operator, "value": f.value}
                for f in settings.filters or []
            ]
        data.set("measure", measure)
        data.set("filters", filters)

    async def _modify(self, data: ResourceData) -> None:
        await operations.modify_metric(self.client, self.modify_input(data))

    async def _delete_remote(self, id: str) -> None:
        await operations.delete_metric(self.client, id)
