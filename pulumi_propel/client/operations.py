"""Propel API operations.

One coroutine per remote operation, each taking the client and its input and
returning a typed response. A read that resolves to ``null`` is reported as
an ``ApiError`` containing "not found".
"""

from typing import Any

from pydantic import TypeAdapter

from ..errors import ApiError
from ..models import MetricType
from .transport import PropelClient
from .types import (
    CreateDataSourceResult,
    DataPoolResponse,
    DataSourceResponse,
    MetricResponse,
    RemoteDataPool,
    RemoteDataSource,
    RemoteMetric,
)

_DATA_SOURCE_FIELDS = """
    id
    uniqueName
    description
    type
    status
    createdAt
    createdBy
    modifiedAt
    modifiedBy
    account { id }
    environment { id }
    connectionSettings {
      __typename
      ... on SnowflakeConnectionSettings {
        account database warehouse schema role username
      }
      ... on HttpConnectionSettings {
        basicAuth { username }
      }
      ... on S3ConnectionSettings {
        bucket awsAccessKeyId
      }
    }
    tables(first: 100) {
      nodes {
        name
        columns(first: 100) {
          nodes { name type isNullable }
        }
      }
    }
"""

_DATA_POOL_FIELDS = """
    id
    uniqueName
    description
    status
    account { id }
    environment { id }
    dataSource { id }
    table
    timestamp { columnName }
    tenant { columnName }
    columns(first: 100) {
      nodes { columnName type isNullable }
    }
"""

_METRIC_FIELDS = """
    id
    uniqueName
    description
    type
    account { id }
    environment { id }
    dataPool { id }
    dimensions { columnName }
    settings {
      ... on SumMetricSettings { measure { columnName } filters { column operator value } }
      ... on CountMetricSettings { filters { column operator value } }
      ... on CountDistinctMetricSettings { dimension { columnName } filters { column operator value } }
      ... on MinMetricSettings { measure { columnName } filters { column operator value } }
      ... on MaxMetricSettings { measure { columnName } filters { column operator value } }
      ... on AverageMetricSettings { measure { columnName } filters { column operator value } }
    }
"""

DATA_SOURCE_QUERY = f"query DataSource($id: ID!) {{ dataSource(id: $id) {{ {_DATA_SOURCE_FIELDS} }} }}"
DATA_POOL_QUERY = f"query DataPool($id: ID!) {{ dataPool(id: $id) {{ {_DATA_POOL_FIELDS} }} }}"
METRIC_QUERY = f"query Metric($id: ID!) {{ metric(id: $id) {{ {_METRIC_FIELDS} }} }}"

CREATE_SNOWFLAKE_DATA_SOURCE = """
mutation CreateSnowflakeDataSource($input: CreateSnowflakeDataSourceInput!) {
  createSnowflakeDataSource(input: $input) {
    __typename
    ... on DataSourceResponse { dataSource { id } }
    ... on FailureResponse { error { code message } }
  }
}
"""

CREATE_HTTP_DATA_SOURCE = """
mutation CreateHttpDataSource($input: CreateHttpDataSourceInput!) {
  createHttpDataSource(input: $input) { __typename dataSource { id } }
}
"""

CREATE_S3_DATA_SOURCE = """
mutation CreateS3DataSource($input: CreateS3DataSourceInput!) {
  createS3DataSource(input: $input) { __typename dataSource { id } }
}
"""

_MODIFY_DATA_SOURCE = """
mutation {name}($input: {name}Input!) {{
  {field}(input: $input) {{ dataSource {{ id }} }}
}}
"""

MODIFY_DATA_SOURCE = {
    "SNOWFLAKE": ("modifySnowflakeDataSource", "ModifySnowflakeDataSource"),
    "HTTP": ("modifyHttpDataSource", "ModifyHttpDataSource"),
    "S3": ("modifyS3DataSource", "ModifyS3DataSource"),
}

DELETE_DATA_SOURCE = "mutation DeleteDataSource($id: ID!) { deleteDataSource(id: $id) }"

CREATE_DATA_POOL = """
mutation CreateDataPool($input: CreateDataPoolInputV2!) {
  createDataPoolV2(input: $input) { dataPool { id } }
}
"""

MODIFY_DATA_POOL = """
mutation ModifyDataPool($input: ModifyDataPoolInput!) {
  modifyDataPool(input: $input) { dataPool { id } }
}
"""

DELETE_DATA_POOL = "mutation DeleteDataPool($id: ID!) { deleteDataPool(id: $id) }"

_CREATE_METRIC = """
mutation {name}($input: {name}Input!) {{
  {field}(input: $input) {{ metric {{ id }} }}
}}
"""

CREATE_METRIC = {
    MetricType.COUNT: ("createCountMetric", "CreateCountMetric"),
    MetricType.SUM: ("createSumMetric", "CreateSumMetric"),
    MetricType.COUNT_DISTINCT: ("createCountDistinctMetric", "CreateCountDistinctMetric"),
    MetricType.MIN: ("createMinMetric", "CreateMinMetric"),
    MetricType.MAX: ("createMaxMetric", "CreateMaxMetric"),
    MetricType.AVERAGE: ("createAverageMetric", "CreateAverageMetric"),
}

MODIFY_METRIC = """
mutation ModifyMetric($input: ModifyMetricInput!) {
  modifyMetric(input: $input) { metric { id } }
}
"""

DELETE_METRIC = "mutation DeleteMetric($id: ID!) { deleteMetric(id: $id) }"

_create_data_source_result = TypeAdapter(CreateDataSourceResult)


def _field(data: dict[str, Any], key: str, missing: str) -> Any:
    value = data.get(key)
    if value is None:
        raise ApiError(missing)
    return value


# Data Sources


async def data_source(client: PropelClient, id: str) -> RemoteDataSource:
    data = await client.execute(DATA_SOURCE_QUERY, {"id": id}, operation="read Data Source")
    return RemoteDataSource.model_validate(
        _field(data, "dataSource", f"Data Source {id} not found")
    )


async def create_snowflake_data_source(
    client: PropelClient, input: dict[str, Any]
) -> CreateDataSourceResult:
    data = await client.execute(
        CREATE_SNOWFLAKE_DATA_SOURCE, {"input": input}, operation="create Data Source"
    )
    return _create_data_source_result.validate_python(
        _field(data, "createSnowflakeDataSource", "empty createSnowflakeDataSource response")
    )


async def create_http_data_source(
    client: PropelClient, input: dict[str, Any]
) -> DataSourceResponse:
    data = await client.execute(
        CREATE_HTTP_DATA_SOURCE, {"input": input}, operation="create Data Source"
    )
    return DataSourceResponse.model_validate(
        _field(data, "createHttpDataSource", "empty createHttpDataSource response")
    )


async def create_s3_data_source(
    client: PropelClient, input: dict[str, Any]
) -> DataSourceResponse:
    data = await client.execute(
        CREATE_S3_DATA_SOURCE, {"input": input}, operation="create Data Source"
    )
    return DataSourceResponse.model_validate(
        _field(data, "createS3DataSource", "empty createS3DataSource response")
    )


async def modify_data_source(
    client: PropelClient, source_type: str, input: dict[str, Any]
) -> str:
    field, name = MODIFY_DATA_SOURCE[source_type]
    data = await client.execute(
        _MODIFY_DATA_SOURCE.format(name=name, field=field),
        {"input": input},
        operation="modify Data Source",
    )
    return DataSourceResponse.model_validate(
        _field(data, field, f"empty {field} response")
    ).data_source.id


async def delete_data_source(client: PropelClient, id: str) -> str:
    data = await client.execute(DELETE_DATA_SOURCE, {"id": id}, operation="delete Data Source")
    return data.get("deleteDataSource") or id


# Data Pools


async def data_pool(client: PropelClient, id: str) -> RemoteDataPool:
    data = await client.execute(DATA_POOL_QUERY, {"id": id}, operation="read Data Pool")
    return RemoteDataPool.model_validate(
        _field(data, "dataPool", f"Data Pool {id} not found")
    )


async def create_data_pool(client: PropelClient, input: dict[str, Any]) -> DataPoolResponse:
    data = await client.execute(CREATE_DATA_POOL, {"input": input}, operation="create Data Pool")
    return DataPoolResponse.model_validate(
        _field(data, "createDataPoolV2", "empty createDataPoolV2 response")
    )


async def modify_data_pool(client: PropelClient, input: dict[str, Any]) -> DataPoolResponse:
    data = await client.execute(MODIFY_DATA_POOL, {"input": input}, operation="modify Data Pool")
    return DataPoolResponse.model_validate(
        _field(data, "modifyDataPool", "empty modifyDataPool response")
    )


async def delete_data_pool(client: PropelClient, id: str) -> str:
    data = await client.execute(DELETE_DATA_POOL, {"id": id}, operation="delete Data Pool")
    return data.get("deleteDataPool") or id


# Metrics


async def metric(client: PropelClient, id: str) -> RemoteMetric:
    data = await client.execute(METRIC_QUERY, {"id": id}, operation="read Metric")
    return RemoteMetric.model_validate(_field(data, "metric", f"Metric {id} not found"))


async def create_metric(
    client: PropelClient, metric_type: MetricType, input: dict[str, Any]
) -> MetricResponse:
    field, name = CREATE_METRIC[metric_type]
    data = await client.execute(
        _CREATE_METRIC.format(name=name, field=field),
        {"input": input},
        operation="create Metric",
    )
    return MetricResponse.model_validate(_field(data, field, f"empty {field} response"))


async def modify_metric(client: PropelClient, input: dict[str, Any]) -> MetricResponse:
    data = await client.execute(MODIFY_METRIC, {"input": input}, operation="modify Metric")
    return MetricResponse.model_validate(
        _field(data, "modifyMetric", "empty modifyMetric response")
    )


async def delete_metric(client: PropelClient, id: str) -> str:
    data = await client.execute(DELETE_METRIC, {"id": id}, operation="delete Metric")
    return data.get("deleteMetric") or id
