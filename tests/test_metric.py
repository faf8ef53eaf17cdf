"""Tests for the Metric adapter."""

from unittest.mock import AsyncMock, patch

import pytest

from pulumi_propel.client.types import MetricResponse, RemoteMetric
from pulumi_propel.models import MetricType
from pulumi_propel.resources import MetricAdapter

OPS = "pulumi_propel.client.operations"


def make_metric(type: str = "SUM", settings: dict | None = None) -> RemoteMetric:
    return RemoteMetric.model_validate(
        {
            "id": "met_1",
            "uniqueName": "revenue",
            "description": "Total revenue",
            "type": type,
            "account": {"id": "acc_1"},
            "environment": {"id": "env_1"},
            "dataPool": {"id": "dp_1"},
            "dimensions": [{"columnName": "country"}],
            "settings": settings
            if settings is not None
            else {
                "measure": {"columnName": "amount"},
                "filters": [{"column": "status", "operator": "EQUALS", "value": "paid"}],
            },
        }
    )


@pytest.fixture
def adapter(client, poller, settings):
    return MetricAdapter(client, poller=poller, settings=settings)


class TestMetric:
    @pytest.mark.asyncio
    async def test_sum_metric_create_reads_without_polling(self, adapter, clock, timeouts):
        data = adapter.new_data(
            state={
                "unique_name": "revenue",
                "data_pool": "dp_1",
                "type": "SUM",
                "measure": "amount",
                "dimensions": ["country"],
                "filters": [{"column": "status", "operator": "EQUALS", "value": "paid"}],
            }
        )
        created = MetricResponse.model_validate({"metric": {"id": "met_1"}})

        with patch(f"{OPS}.create_metric", new=AsyncMock(return_value=created)) as create, \
                patch(f"{OPS}.metric", new=AsyncMock(return_value=make_metric())) as read:
            await adapter.create(data, timeouts)

        metric_type, payload = create.await_args.args[1:]
        assert metric_type == MetricType.SUM
        assert payload["measure"] == {"columnName": "amount"}
        assert payload["dimensions"] == [{"columnName": "country"}]
        read.assert_awaited_once()
        assert clock.sleeps == []

        assert data.id == "met_1"
        assert data.get("measure") == "amount"
        assert data.get("filters") == [{"column": "status", "operator": "EQUALS", "value": "paid"}]

    def test_count_distinct_uses_dimension(self):
        from pulumi_propel.models import MetricInputs

        inputs = MetricInputs(data_pool="dp_1", type="COUNT_DISTINCT", measure="user_id")

        payload = MetricAdapter.build_input(inputs)

        assert payload["dimension"] == {"columnName": "user_id"}
        assert "measure" not in payload

    def test_count_has_no_measure(self):
        from pulumi_propel.models import MetricInputs

        payload = MetricAdapter.build_input(MetricInputs(data_pool="dp_1", type="COUNT"))

        assert "measure" not in payload
        assert "dimension" not in payload

    @pytest.mark.asyncio
    async def test_read_count_distinct(self, adapter):
        data = adapter.new_data(id="met_1")
        metric = make_metric(
            type="COUNT_DISTINCT", settings={"dimension": {"columnName": "user_id"}}
        )

        with patch(f"{OPS}.metric", new=AsyncMock(return_value=metric)):
            await adapter.read(data)

        assert data.get("measure") == "user_id"
        assert data.get("filters") == []
        assert data.get("dimensions") == ["country"]

    @pytest.mark.asyncio
    async def test_delete_is_immediate(self, adapter, clock, timeouts):
        data = adapter.new_data(id="met_1")

        with patch(f"{OPS}.delete_metric", new=AsyncMock(return_value="met_1")), \
                patch(f"{OPS}.metric", new=AsyncMock()) as read:
            await adapter.delete(data, timeouts)

        read.assert_not_awaited()
        assert clock.sleeps == []
        assert data.id is None
