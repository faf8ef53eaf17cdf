"""Pulumi dynamic provider for Propel Data Sources."""

from typing import Any, Optional

import pulumi
from pulumi import Input, Output

from ..models import DataSourceInputs
from ..resources import DataSourceAdapter
from .base import PropelProvider


class DataSourceProvider(PropelProvider):
    """Creates Snowflake, HTTP and S3 Data Sources and blocks until CONNECTED."""

    adapter_class = DataSourceAdapter
    inputs_model = DataSourceInputs
    input_fields = (
        "unique_name",
        "description",
        "type",
        "snowflake_connection_settings",
        "http_connection_settings",
        "s3_connection_settings",
        "tables",
    )
    # A different connection type is a different remote resource
    replace_fields = ("type", "tables")

    def normalize(self, field: str, value: Any) -> Any:
        if field == "type" and isinstance(value, str):
            return value.upper()
        return super().normalize(field, value)


class DataSource(pulumi.dynamic.Resource):
    """
    A Propel Data Source.

    Exactly one connection settings block may be given, matching ``type``.
    Snowflake tables are introspected; HTTP and S3 tables are declared with
    ``tables``.

    Args:
        name: Resource name
        type: "Snowflake", "Http" or "S3" (case-insensitive)
        unique_name: The Data Source's name
        description: The Data Source's description
        snowflake_connection_settings: Account, database, warehouse, schema,
            role, username and password
        http_connection_settings: Optional ``basic_auth`` username and password
        s3_connection_settings: Bucket and AWS access key pair
        tables: Table records ``{"name", "path", "columns"}``
        timeouts: ``{"create": seconds, "delete": seconds}``
        opts: Standard Pulumi resource options
    """

    unique_name: Output[str]
    description: Output[str]
    type: Output[str]
    status: Output[str]
    account: Output[str]
    environment: Output[str]
    created_at: Output[str]
    created_by: Output[str]
    modified_at: Output[str]
    modified_by: Output[str]
    tables: Output[list[dict[str, Any]]]

    def __init__(
        self,
        name: str,
        type: Input[str],
        unique_name: Optional[Input[str]] = None,
        description: Optional[Input[str]] = None,
        snowflake_connection_settings: Optional[Input[dict[str, Any]]] = None,
        http_connection_settings: Optional[Input[dict[str, Any]]] = None,
        s3_connection_settings: Optional[Input[dict[str, Any]]] = None,
        tables: Optional[Input[list[dict[str, Any]]]] = None,
        timeouts: Optional[dict[str, float]] = None,
        opts: Optional[pulumi.ResourceOptions] = None,
    ):
        super().__init__(
            DataSourceProvider(),
            name,
            {
                "unique_name": unique_name,
                "description": description,
                "type": type,
                "snowflake_connection_settings": snowflake_connection_settings,
                "http_connection_settings": http_connection_settings,
                "s3_connection_settings": s3_connection_settings,
                "tables": tables or [],
                "timeouts": timeouts,
                # Computed on create
                "status": None,
                "account": None,
                "environment": None,
                "created_at": None,
                "created_by": None,
                "modified_at": None,
                "modified_by": None,
            },
            opts,
        )
