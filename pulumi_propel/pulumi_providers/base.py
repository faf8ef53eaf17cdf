"""Shared Pulumi dynamic provider plumbing for Propel resources.

Each CRUD call opens a Propel client, runs one adapter coroutine on a fresh
event loop and translates the adapter's ``ResourceData`` into Pulumi results.
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import Any, ClassVar, TypeVar

from pulumi.dynamic import (
    CheckFailure,
    CheckResult,
    CreateResult,
    DiffResult,
    ReadResult,
    ResourceProvider,
    UpdateResult,
)
from pydantic import BaseModel, ValidationError

from ..client import PropelClient
from ..errors import PropelError
from ..resources import ResourceAdapter, Timeouts
from ..state import ResourceData

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _prune(value: Any) -> Any:
    """Drop None-valued keys from nested records."""
    if isinstance(value, dict):
        return {key: _prune(item) for key, item in value.items() if item is not None}
    if isinstance(value, list):
        return [_prune(item) for item in value]
    return value


class PropelProvider(ResourceProvider):
    """Pulumi dynamic provider delegating to a ``ResourceAdapter``.

    Subclasses set the adapter class, the inputs model used by ``check``,
    the user-facing input fields compared by ``diff`` and the subset of those
    that force replacement.
    """

    adapter_class: ClassVar[type[ResourceAdapter]]
    inputs_model: ClassVar[type[BaseModel]]
    input_fields: ClassVar[tuple[str, ...]]
    replace_fields: ClassVar[tuple[str, ...]] = ()

    def _run(self, operation: Callable[[ResourceAdapter], Awaitable[T]]) -> T:
        """Run ``operation`` against a freshly connected adapter.

        Raises:
            PropelError: Whatever the adapter raised, after logging it
        """

        async def runner() -> T:
            async with PropelClient.from_settings() as client:
                return await operation(self.adapter_class(client))

        try:
            return asyncio.run(runner())
        except PropelError as e:
            logger.error(e.to_diagnostic().render())
            raise

    def _data(self, id: str | None = None, state: dict[str, Any] | None = None) -> ResourceData:
        return ResourceData(self.adapter_class.fields, id=id, state=state)

    def check(self, olds: dict[str, Any], news: dict[str, Any]) -> CheckResult:
        """Validate inputs before any remote call."""
        failures = []
        try:
            self.inputs_model.model_validate(news)
        except ValidationError as e:
            for error in e.errors():
                prop = ".".join(str(part) for part in error["loc"])
                failures.append(CheckFailure(prop, error["msg"]))
        return CheckResult(news, failures)

    def create(self, props: dict[str, Any]) -> CreateResult:
        timeouts = Timeouts.resolve(props.get("timeouts"))
        data = self._data(state=props)

        try:
            self._run(lambda adapter: adapter.create(data, timeouts))
        except PropelError:
            if data.id:
                logger.warning(
                    f"{self.adapter_class.kind} {data.id} was created remotely but did not "
                    "become ready; it has not been deleted"
                )
            raise

        return CreateResult(id_=data.id, outs=data.outputs())

    def read(self, id: str, props: dict[str, Any]) -> ReadResult:
        data = self._data(id=self.adapter_class.import_id(id), state=props)
        self._run(lambda adapter: adapter.read(data))
        return ReadResult(id_=data.id, outs=data.outputs())

    def update(
        self, id: str, old_props: dict[str, Any], new_props: dict[str, Any]
    ) -> UpdateResult:
        data = self._data(id=id, state={**old_props, **new_props})
        self._run(lambda adapter: adapter.update(data, old_props))
        return UpdateResult(outs=data.outputs())

    def delete(self, id: str, props: dict[str, Any]) -> None:
        timeouts = Timeouts.resolve(props.get("timeouts"))
        data = self._data(id=id, state=props)
        self._run(lambda adapter: adapter.delete(data, timeouts))

    def normalize(self, field: str, value: Any) -> Any:
        """Comparable form of a property value; unset keys compare as absent."""
        return _prune(value)

    def diff(
        self, id: str, old_props: dict[str, Any], new_props: dict[str, Any]
    ) -> DiffResult:
        """Compare user inputs; fields in ``replace_fields`` force replacement."""
        changes = [
            field
            for field in self.input_fields
            if self.normalize(field, old_props.get(field))
            != self.normalize(field, new_props.get(field))
        ]
        replaces = [field for field in changes if field in self.replace_fields]

        return DiffResult(
            changes=len(changes) > 0,
            replaces=replaces,
            stables=[],
            delete_before_replace=True,
        )
