"""Pulumi dynamic provider for Propel Metrics."""

from typing import Any, Optional

import pulumi
from pulumi import Input, Output

from ..models import MetricInputs
from ..resources import MetricAdapter
from .base import PropelProvider


class MetricProvider(PropelProvider):
    adapter_class = MetricAdapter
    inputs_model = MetricInputs
    input_fields = (
        "unique_name",
        "description",
        "data_pool",
        "type",
        "measure",
        "dimensions",
        "filters",
    )
    # Only the name and description can be modified in place
    replace_fields = ("data_pool", "type", "measure", "dimensions", "filters")


class Metric(pulumi.dynamic.Resource):
    """
    A Propel Metric over a Data Pool.

    Args:
        name: Resource name
        data_pool: ID of the Data Pool
        type: COUNT, SUM, COUNT_DISTINCT, MIN, MAX or AVERAGE
        measure: Column aggregated by the Metric (not used by COUNT)
        dimensions: Columns the Metric can be grouped and filtered by
        filters: Filter records ``{"column", "operator", "value"}``
        unique_name: The Metric's name
        description: The Metric's description
        opts: Standard Pulumi resource options
    """

    unique_name: Output[str]
    description: Output[str]
    type: Output[str]
    account: Output[str]
    environment: Output[str]
    data_pool: Output[str]
    measure: Output[Optional[str]]
    dimensions: Output[list[str]]
    filters: Output[list[dict[str, Any]]]

    def __init__(
        self,
        name: str,
        data_pool: Input[str],
        type: Input[str],
        measure: Optional[Input[str]] = None,
        dimensions: Optional[Input[list[str]]] = None,
        filters: Optional[Input[list[dict[str, Any]]]] = None,
        unique_name: Optional[Input[str]] = None,
        description: Optional[Input[str]] = None,
        opts: Optional[pulumi.ResourceOptions] = None,
    ):
        super().__init__(
            MetricProvider(),
            name,
            {
                "unique_name": unique_name,
                "description": description,
                "data_pool": data_pool,
                "type": type,
                "measure": measure,
                "dimensions": dimensions or [],
                "filters": filters or [],
                "account": None,
                "environment": None,
            },
            opts,
        )
