"""
Snowflake Metrics Example - a Data Source, a Data Pool on one of its tables
and a revenue Metric over that pool.

Credentials come from PROPEL_CLIENT_ID / PROPEL_CLIENT_SECRET; the Snowflake
password from Pulumi config (`pulumi config set --secret snowflakePassword`).
"""

import pulumi

from pulumi_propel.pulumi_providers import DataPool, DataSource, Metric

config = pulumi.Config()

warehouse = DataSource(
    "warehouse",
    type="Snowflake",
    unique_name="Snowflake warehouse",
    description="Orders from the analytics warehouse",
    snowflake_connection_settings={
        "account": "zn12345.us-east-2.aws",
        "database": "ANALYTICS",
        "warehouse": "PROPELLING",
        "schema": "PUBLIC",
        "role": "PROPELLER",
        "username": "PROPEL",
        "password": config.require_secret("snowflakePassword"),
    },
)

orders = DataPool(
    "orders",
    data_source=warehouse.id,
    table="ORDERS",
    timestamp="CREATED_AT",
    tenant_id="CUSTOMER_ID",
    columns=[
        {"name": "ORDER_ID", "type": "STRING", "nullable": False},
        {"name": "CUSTOMER_ID", "type": "STRING", "nullable": False},
        {"name": "AMOUNT", "type": "DOUBLE", "nullable": True},
        {"name": "CREATED_AT", "type": "TIMESTAMP", "nullable": False},
    ],
    # Large tables can take a while to sync
    timeouts={"create": 45 * 60},
)

revenue = Metric(
    "revenue",
    data_pool=orders.id,
    type="SUM",
    measure="AMOUNT",
    dimensions=["CUSTOMER_ID"],
    unique_name="Revenue",
)

pulumi.export("data_source_status", warehouse.status)
pulumi.export("data_pool_status", orders.status)
pulumi.export("metric_id", revenue.id)
