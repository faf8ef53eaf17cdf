"""Tests for desired-state models and remote response types."""

import pytest
from pydantic import TypeAdapter, ValidationError

from pulumi_propel.client.types import (
    CreateDataSourceResult,
    FailureResponse,
    S3Settings,
)
from pulumi_propel.errors import ConfigurationError
from pulumi_propel.models import (
    DataPoolInputs,
    DataSourceInputs,
    DataSourceType,
    MetricInputs,
    MetricType,
    Table,
    parse_inputs,
)

from .factories import make_data_source


class TestDataSourceInputs:
    def test_type_is_case_insensitive(self):
        for value in ("snowflake", "Snowflake", "SNOWFLAKE"):
            assert DataSourceType.parse(value) == DataSourceType.SNOWFLAKE

    def test_unsupported_type(self):
        with pytest.raises(ConfigurationError, match='Unsupported Data Source type "Postgres"'):
            DataSourceType.parse("Postgres")

    def test_snowflake_schema_alias(self):
        inputs = DataSourceInputs.model_validate(
            {
                "type": "Snowflake",
                "snowflake_connection_settings": {
                    "account": "a",
                    "database": "d",
                    "warehouse": "w",
                    "schema": "PUBLIC",
                    "role": "r",
                    "username": "u",
                    "password": "p",
                },
            }
        )

        assert inputs.snowflake_connection_settings.schema_ == "PUBLIC"
        assert inputs.source_type == DataSourceType.SNOWFLAKE

    def test_http_needs_no_settings(self):
        inputs = DataSourceInputs.model_validate({"type": "Http"})

        assert inputs.http_connection_settings is None
        assert inputs.tables == []

    def test_s3_requires_its_settings(self):
        with pytest.raises(ValidationError, match="s3_connection_settings is required"):
            DataSourceInputs.model_validate({"type": "S3"})

    def test_at_most_one_settings_block(self):
        with pytest.raises(ValidationError, match="only one of"):
            DataSourceInputs.model_validate(
                {
                    "type": "Http",
                    "http_connection_settings": {},
                    "s3_connection_settings": {
                        "bucket": "b",
                        "aws_access_key_id": "k",
                        "aws_secret_access_key": "s",
                    },
                }
            )

    def test_table_needs_a_column(self):
        with pytest.raises(ValidationError):
            Table(name="orders", columns=[])


class TestDataPoolInputs:
    def test_parse_inputs_wraps_validation_errors(self):
        with pytest.raises(ConfigurationError) as exc_info:
            parse_inputs(DataPoolInputs, {"table": "EVENTS"})

        assert exc_info.value.summary == "Invalid configuration"
        assert "data_source" in exc_info.value.detail

    def test_unknown_keys_are_ignored(self):
        inputs = parse_inputs(
            DataPoolInputs,
            {
                "data_source": "ds_1",
                "table": "EVENTS",
                "timestamp": "ts",
                "columns": [{"name": "ts", "type": "TIMESTAMP", "nullable": False}],
                "status": "LIVE",
                "account": "acc_1",
            },
        )

        assert inputs.tenant_id is None


class TestMetricInputs:
    def test_count_needs_no_measure(self):
        inputs = MetricInputs(data_pool="dp_1", type="COUNT")

        assert inputs.type == MetricType.COUNT
        assert inputs.measure is None

    @pytest.mark.parametrize("type", ["SUM", "COUNT_DISTINCT", "MIN", "MAX", "AVERAGE"])
    def test_measure_required(self, type):
        with pytest.raises(ValidationError, match="measure is required"):
            MetricInputs(data_pool="dp_1", type=type)

    def test_filter_operator_is_validated(self):
        with pytest.raises(ValidationError):
            MetricInputs(
                data_pool="dp_1",
                type="COUNT",
                filters=[{"column": "c", "operator": "LIKE", "value": "x"}],
            )


class TestRemoteTypes:
    def test_connection_settings_discriminated_by_typename(self):
        source = make_data_source(
            type="S3",
            connection_settings={
                "__typename": "S3ConnectionSettings",
                "bucket": "b",
                "awsAccessKeyId": "k",
            },
        )

        assert isinstance(source.connection_settings, S3Settings)
        assert source.connection_settings.aws_access_key_id == "k"

    def test_unknown_settings_typename_is_none(self):
        source = make_data_source(connection_settings={"__typename": "KafkaConnectionSettings"})

        assert source.connection_settings is None

    def test_create_result_failure_branch(self):
        result = TypeAdapter(CreateDataSourceResult).validate_python(
            {"__typename": "FailureResponse", "error": {"message": "bad credentials"}}
        )

        assert isinstance(result, FailureResponse)
        assert result.error.message == "bad credentials"
