"""Typed desired-state records for Propel resources.

The Pulumi engine hands providers plain nested dicts. These models turn those
dicts into validated records, one per resource kind, so the adapters never
index into untyped maps.
"""

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from .errors import ConfigurationError

COLUMN_TYPE_LITERALS = (
    "BOOLEAN",
    "DATE",
    "DOUBLE",
    "FLOAT",
    "INT8",
    "INT16",
    "INT32",
    "INT64",
    "STRING",
    "TIMESTAMP",
)


class DataSourceType(str, Enum):
    SNOWFLAKE = "SNOWFLAKE"
    HTTP = "HTTP"
    S3 = "S3"

    @classmethod
    def parse(cls, value: str) -> "DataSourceType":
        """Case-insensitive lookup; raises ConfigurationError when unsupported."""
        try:
            return cls(str(value).upper())
        except ValueError:
            raise ConfigurationError(f'Unsupported Data Source type "{value}"') from None


class MetricType(str, Enum):
    COUNT = "COUNT"
    SUM = "SUM"
    COUNT_DISTINCT = "COUNT_DISTINCT"
    MIN = "MIN"
    MAX = "MAX"
    AVERAGE = "AVERAGE"


class FilterOperator(str, Enum):
    EQUALS = "EQUALS"
    NOT_EQUALS = "NOT_EQUALS"
    GREATER_THAN = "GREATER_THAN"
    GREATER_THAN_OR_EQUAL_TO = "GREATER_THAN_OR_EQUAL_TO"
    LESS_THAN = "LESS_THAN"
    LESS_THAN_OR_EQUAL_TO = "LESS_THAN_OR_EQUAL_TO"


class _Record(BaseModel):
    model_config = ConfigDict(extra="ignore")


class Column(_Record):
    """A column: name, type literal and nullability."""

    name: str
    type: str
    nullable: bool

    @field_validator("type")
    @classmethod
    def _known_type(cls, value: str) -> str:
        if value not in COLUMN_TYPE_LITERALS:
            raise ValueError(
                f"expected type to be one of {list(COLUMN_TYPE_LITERALS)}, got {value}"
            )
        return value


class Table(_Record):
    """A Data Source table. ``path`` only applies to S3 Data Sources."""

    name: str
    path: str | None = None
    columns: list[Column] = Field(min_length=1)


class SnowflakeConnectionSettings(_Record):
    account: str
    database: str
    warehouse: str
    schema_: str = Field(alias="schema")
    role: str
    username: str
    password: str

    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class HttpBasicAuth(_Record):
    username: str
    password: str


class HttpConnectionSettings(_Record):
    basic_auth: HttpBasicAuth | None = None


class S3ConnectionSettings(_Record):
    bucket: str
    aws_access_key_id: str
    aws_secret_access_key: str


_SETTINGS_FIELDS = {
    DataSourceType.SNOWFLAKE: "snowflake_connection_settings",
    DataSourceType.HTTP: "http_connection_settings",
    DataSourceType.S3: "s3_connection_settings",
}


class DataSourceInputs(_Record):
    """Desired state of a Data Source."""

    unique_name: str | None = None
    description: str | None = None
    type: str
    snowflake_connection_settings: SnowflakeConnectionSettings | None = None
    http_connection_settings: HttpConnectionSettings | None = None
    s3_connection_settings: S3ConnectionSettings | None = None
    tables: list[Table] = Field(default_factory=list)

    @field_validator("type")
    @classmethod
    def _supported_type(cls, value: str) -> str:
        if value.upper() not in DataSourceType.__members__:
            raise ValueError(
                f'expected type to be one of ["Snowflake", "Http", "S3"], got {value}'
            )
        return value

    @model_validator(mode="after")
    def _single_settings_block(self) -> "DataSourceInputs":
        present = [
            name for name in _SETTINGS_FIELDS.values() if getattr(self, name) is not None
        ]
        if len(present) > 1:
            raise ValueError(
                f"only one of {', '.join(_SETTINGS_FIELDS.values())} can be specified, "
                f"got {', '.join(present)}"
            )

        expected = _SETTINGS_FIELDS[self.source_type]
        if present and present[0] != expected:
            raise ValueError(f"{present[0]} cannot be used with a {self.type} Data Source")
        if self.source_type != DataSourceType.HTTP and not present:
            raise ValueError(f"{expected} is required for a {self.type} Data Source")
        return self

    @property
    def source_type(self) -> DataSourceType:
        return DataSourceType(self.type.upper())


class DataPoolInputs(_Record):
    """Desired state of a Data Pool."""

    unique_name: str | None = None
    description: str | None = None
    data_source: str
    table: str
    timestamp: str
    tenant_id: str | None = None
    columns: list[Column] = Field(min_length=1)


class MetricFilter(_Record):
    column: str
    operator: FilterOperator
    value: str


class MetricInputs(_Record):
    """Desired state of a Metric."""

    unique_name: str | None = None
    description: str | None = None
    data_pool: str
    type: MetricType
    measure: str | None = None
    dimensions: list[str] = Field(default_factory=list)
    filters: list[MetricFilter] = Field(default_factory=list)

    @model_validator(mode="after")
    def _measure_required(self) -> "MetricInputs":
        if self.type != MetricType.COUNT and not self.measure:
            raise ValueError(f"measure is required for {self.type.value} Metrics")
        return self


def parse_inputs(model: type[_Record], props: dict[str, Any]) -> Any:
    """Validate raw Pulumi properties into ``model``.

    Raises:
        ConfigurationError: If the properties do not describe a valid resource
    """
    try:
        return model.model_validate(props)
    except ValidationError as e:
        raise ConfigurationError("Invalid configuration", str(e)) from e
