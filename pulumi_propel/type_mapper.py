"""
Type Mapper - conversions between local records and Propel API shapes.

``expand_*`` functions build GraphQL input dicts from validated desired state;
``flatten_*`` functions turn remote responses back into local state records.
All functions are pure.
"""

import logging
from typing import Any

from .client.types import (
    ColumnType,
    DataPoolColumnConnection,
    TableConnection,
)
from .models import Column, DataSourceType, HttpBasicAuth, Table

logger = logging.getLogger(__name__)

_COLUMN_TYPES: dict[str, ColumnType] = {
    "BOOLEAN": ColumnType.BOOLEAN,
    "DATE": ColumnType.DATE,
    "DOUBLE": ColumnType.DOUBLE,
    "FLOAT": ColumnType.FLOAT,
    "INT8": ColumnType.INT8,
    "INT16": ColumnType.INT16,
    "INT32": ColumnType.INT32,
    "INT64": ColumnType.INT64,
    "STRING": ColumnType.STRING,
    "TIMESTAMP": ColumnType.TIMESTAMP,
}


def to_remote_column_type(literal: str) -> ColumnType:
    """Map a column type literal to the remote enum.

    Unknown literals map to ``ColumnType.UNSPECIFIED``; input validation is
    expected to have rejected them already.
    """
    column_type = _COLUMN_TYPES.get(literal)
    if column_type is None:
        logger.warning(f"Unknown column type {literal!r}, sending it unspecified")
        return ColumnType.UNSPECIFIED
    return column_type


def expand_pool_columns(columns: list[Column]) -> list[dict[str, Any]]:
    return [
        {
            "columnName": column.name,
            "type": to_remote_column_type(column.type).value,
            "isNullable": column.nullable,
        }
        for column in columns
    ]


def expand_source_columns(columns: list[Column]) -> list[dict[str, Any]]:
    return [
        {
            "name": column.name,
            "type": to_remote_column_type(column.type).value,
            "nullable": column.nullable,
        }
        for column in columns
    ]


def expand_tables(tables: list[Table], source_type: DataSourceType) -> list[dict[str, Any]]:
    """Build table inputs; only S3 tables carry a path."""
    expanded = []
    for table in tables:
        item: dict[str, Any] = {
            "name": table.name,
            "columns": expand_source_columns(table.columns),
        }
        if source_type == DataSourceType.S3:
            item["path"] = table.path
        expanded.append(item)
    return expanded


def expand_basic_auth(basic_auth: HttpBasicAuth | None) -> dict[str, str] | None:
    if basic_auth is None:
        return None
    return {"username": basic_auth.username, "password": basic_auth.password}


def flatten_tables(
    tables: TableConnection | None,
    source_type: DataSourceType,
    paths: dict[str, str | None] | None = None,
) -> list[dict[str, Any]] | None:
    """Flatten the first page of remote tables into local records.

    Args:
        tables: Remote table connection, ``None`` while not yet populated
        source_type: Data Source type; only S3 records carry a ``path``
        paths: Table paths from local state, keyed by table name (not returned
            by the API)

    Returns:
        Ordered table records, or ``None`` when the remote has no tables yet
    """
    if tables is None:
        return None

    paths = paths or {}
    flattened = []
    # TODO: follow pageInfo.endCursor once tables exceed a single page.
    for table in tables.nodes:
        columns = table.columns.nodes if table.columns else []
        item: dict[str, Any] = {"name": table.name}
        if source_type == DataSourceType.S3:
            item["path"] = paths.get(table.name)
        item["columns"] = [
            {"name": c.name, "type": c.type, "nullable": c.is_nullable} for c in columns
        ]
        flattened.append(item)
    return flattened


def flatten_pool_columns(
    columns: DataPoolColumnConnection | None,
) -> list[dict[str, Any]] | None:
    if columns is None:
        return None
    return [
        {"name": c.column_name, "type": c.type, "nullable": c.is_nullable}
        for c in columns.nodes
    ]
