"""Typed responses of the Propel GraphQL API.

Polymorphic fields (connection settings, create responses) are discriminated
unions keyed on ``__typename``.
"""

from enum import Enum
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class ColumnType(str, Enum):
    UNSPECIFIED = ""
    BOOLEAN = "BOOLEAN"
    DATE = "DATE"
    DOUBLE = "DOUBLE"
    FLOAT = "FLOAT"
    INT8 = "INT8"
    INT16 = "INT16"
    INT32 = "INT32"
    INT64 = "INT64"
    STRING = "STRING"
    TIMESTAMP = "TIMESTAMP"


class DataSourceStatus(str, Enum):
    CREATED = "CREATED"
    CONNECTING = "CONNECTING"
    CONNECTED = "CONNECTED"
    BROKEN = "BROKEN"
    DELETING = "DELETING"


class DataPoolStatus(str, Enum):
    CREATED = "CREATED"
    PENDING = "PENDING"
    LIVE = "LIVE"
    BROKEN = "BROKEN"
    DELETING = "DELETING"


class RemoteModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, extra="ignore"
    )


class Ref(RemoteModel):
    id: str


class ColumnName(RemoteModel):
    column_name: str


class RemoteColumn(RemoteModel):
    name: str
    type: str
    is_nullable: bool


class ColumnConnection(RemoteModel):
    nodes: list[RemoteColumn] = Field(default_factory=list)


class RemoteTable(RemoteModel):
    name: str
    columns: ColumnConnection | None = None


class TableConnection(RemoteModel):
    nodes: list[RemoteTable] = Field(default_factory=list)


class SnowflakeSettings(RemoteModel):
    typename: Literal["SnowflakeConnectionSettings"] = Field(alias="__typename")
    account: str
    database: str
    warehouse: str
    schema_: str = Field(alias="schema")
    role: str
    username: str


class HttpBasicAuthSettings(RemoteModel):
    username: str


class HttpSettings(RemoteModel):
    typename: Literal["HttpConnectionSettings"] = Field(alias="__typename")
    basic_auth: HttpBasicAuthSettings | None = None


class S3Settings(RemoteModel):
    typename: Literal["S3ConnectionSettings"] = Field(alias="__typename")
    bucket: str
    aws_access_key_id: str


ConnectionSettings = Annotated[
    Union[SnowflakeSettings, HttpSettings, S3Settings],
    Field(discriminator="typename"),
]

_KNOWN_SETTINGS = {
    "SnowflakeConnectionSettings",
    "HttpConnectionSettings",
    "S3ConnectionSettings",
}


class RemoteDataSource(RemoteModel):
    id: str
    unique_name: str | None = None
    description: str | None = None
    type: str
    status: str
    created_at: str | None = None
    created_by: str | None = None
    modified_at: str | None = None
    modified_by: str | None = None
    account: Ref
    environment: Ref
    connection_settings: ConnectionSettings | None = None
    tables: TableConnection | None = None

    @field_validator("connection_settings", mode="before")
    @classmethod
    def _drop_unknown_settings(cls, value: Any) -> Any:
        # Variants this provider does not manage are treated as absent.
        if isinstance(value, dict) and value.get("__typename") not in _KNOWN_SETTINGS:
            return None
        return value


class RemoteDataPoolColumn(RemoteModel):
    column_name: str
    type: str
    is_nullable: bool


class DataPoolColumnConnection(RemoteModel):
    nodes: list[RemoteDataPoolColumn] = Field(default_factory=list)


class RemoteDataPool(RemoteModel):
    id: str
    unique_name: str | None = None
    description: str | None = None
    status: str
    account: Ref
    environment: Ref
    data_source: Ref
    table: str
    timestamp: ColumnName
    tenant: ColumnName | None = None
    columns: DataPoolColumnConnection | None = None


class RemoteFilter(RemoteModel):
    column: str
    operator: str
    value: str


class RemoteMetricSettings(RemoteModel):
    measure: ColumnName | None = None
    dimension: ColumnName | None = None
    filters: list[RemoteFilter] | None = None


class RemoteMetric(RemoteModel):
    id: str
    unique_name: str | None = None
    description: str | None = None
    type: str
    account: Ref
    environment: Ref
    data_pool: Ref
    dimensions: list[ColumnName] = Field(default_factory=list)
    settings: RemoteMetricSettings | None = None


class FailureError(RemoteModel):
    code: int | None = None
    message: str


class DataSourceResponse(RemoteModel):
    typename: Literal["DataSourceResponse"] = Field(
        default="DataSourceResponse", alias="__typename"
    )
    data_source: Ref


class FailureResponse(RemoteModel):
    typename: Literal["FailureResponse"] = Field(alias="__typename")
    error: FailureError | None = None


CreateDataSourceResult = Annotated[
    Union[DataSourceResponse, FailureResponse],
    Field(discriminator="typename"),
]


class DataPoolResponse(RemoteModel):
    data_pool: Ref


class MetricResponse(RemoteModel):
    metric: Ref
