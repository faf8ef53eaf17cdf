"""
pulumi-propel CLI - inspect Propel resources and wait on their status.
"""

import asyncio
import logging
from typing import Any

import typer
from rich.console import Console
from rich.table import Table

from .client import PropelClient
from .errors import PropelError
from .resources import ADAPTERS, DataSourceAdapter, ResourceAdapter
from .settings import get_settings

app = typer.Typer(
    name="pulumi-propel",
    help="Inspect Propel resources managed by the Pulumi provider",
    add_completion=False,
)
console = Console()


def configure_logging():
    """Configure logging based on settings."""
    settings = get_settings()
    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def _adapter_class(kind: str) -> type[ResourceAdapter]:
    adapter_class = ADAPTERS.get(kind)
    if adapter_class is None:
        console.print(
            f"[bold red]✗ Error:[/bold red] Unknown kind '{kind}' "
            f"(expected one of: {', '.join(ADAPTERS)})"
        )
        raise typer.Exit(code=1)
    return adapter_class


def _run(adapter_class: type[ResourceAdapter], operation) -> Any:
    async def runner():
        async with PropelClient.from_settings() as client:
            return await operation(adapter_class(client))

    try:
        return asyncio.run(runner())
    except PropelError as e:
        console.print(f"\n[bold red]✗ {e.summary}[/bold red]")
        if e.detail:
            console.print(f"[dim]{e.detail}[/dim]")
        raise typer.Exit(code=1)


def _state_table(title: str, id: str, outputs: dict[str, Any]) -> Table:
    table = Table(title=title)
    table.add_column("Attribute", style="cyan")
    table.add_column("Value")
    table.add_row("id", id)
    for key in sorted(outputs):
        table.add_row(key, str(outputs[key]))
    return table


@app.command()
def get(
    kind: str = typer.Argument(..., help="data-source, data-pool or metric"),
    id: str = typer.Argument(..., help="Remote resource ID"),
):
    """Read a remote resource and print its state."""
    configure_logging()
    adapter_class = _adapter_class(kind)
    data = None

    async def read(adapter: ResourceAdapter):
        nonlocal data
        data = adapter.new_data(id=adapter.import_id(id))
        await adapter.read(data)

    _run(adapter_class, read)

    outputs = data.outputs()
    if adapter_class is DataSourceAdapter:
        outputs.update(DataSourceAdapter.describe_settings(data))
    console.print(_state_table(adapter_class.kind, data.id, outputs))


@app.command()
def wait(
    kind: str = typer.Argument(..., help="data-source or data-pool"),
    id: str = typer.Argument(..., help="Remote resource ID"),
    timeout: float = typer.Option(
        None, "--timeout", help="Seconds to wait (default: create timeout from settings)"
    ),
):
    """Block until a Data Source is CONNECTED or a Data Pool is LIVE."""
    configure_logging()
    adapter_class = _adapter_class(kind)
    if not adapter_class.target_statuses:
        console.print(f"[bold red]✗ Error:[/bold red] {adapter_class.kind}s have no status to wait on")
        raise typer.Exit(code=1)

    async def wait_ready(adapter: ResourceAdapter):
        data = adapter.new_data(id=id)
        seconds = timeout if timeout is not None else adapter.settings.create_timeout
        await adapter.poller.wait_for_status(
            lambda: _status(adapter, id),
            adapter.pending_statuses,
            adapter.target_statuses,
            seconds,
            describe=adapter.kind,
        )
        await adapter.read(data)
        return data

    data = _run(adapter_class, wait_ready)
    console.print(
        f"\n[bold green]✓ {adapter_class.kind} {id} is {data.get('status')}[/bold green]"
    )


async def _status(adapter: ResourceAdapter, id: str) -> str:
    return (await adapter.fetch(id)).status


if __name__ == "__main__":
    app()
