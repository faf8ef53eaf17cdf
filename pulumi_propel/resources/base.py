"""Base resource adapter for Propel resources."""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, ClassVar

from ..client import PropelClient
from ..poller import StatusPoller
from ..settings import PropelSettings, get_settings
from ..state import ResourceData

logger = logging.getLogger(__name__)


@dataclass
class Timeouts:
    """Per-operation timeouts in seconds."""

    create: float
    delete: float

    @classmethod
    def resolve(
        cls, overrides: dict[str, Any] | None = None, settings: PropelSettings | None = None
    ) -> "Timeouts":
        """Settings defaults, overridden by a resource's ``timeouts`` property."""
        settings = settings or get_settings()
        overrides = overrides or {}
        return cls(
            create=float(overrides.get("create") or settings.create_timeout),
            delete=float(overrides.get("delete") or settings.delete_timeout),
        )


class ResourceAdapter(ABC):
    """CRUD operations for one Propel resource kind.

    Subclasses declare the kind's name, persisted fields and, for kinds with
    asynchronous provisioning, the pending and target status sets. Every
    operation works on a ``ResourceData`` mirroring the local state.

    Args:
        client: Open Propel API client
        poller: Status poller, built from settings when omitted
        settings: Provider settings, the global settings when omitted
    """

    kind: ClassVar[str]
    fields: ClassVar[tuple[str, ...]]
    mutable_fields: ClassVar[tuple[str, ...]] = ("unique_name", "description")
    pending_statuses: ClassVar[frozenset[str]] = frozenset()
    target_statuses: ClassVar[frozenset[str]] = frozenset()
    confirm_deletion: ClassVar[bool] = False

    def __init__(
        self,
        client: PropelClient,
        poller: StatusPoller | None = None,
        settings: PropelSettings | None = None,
    ):
        self.client = client
        self.settings = settings or get_settings()
        self.poller = poller or StatusPoller.from_settings(self.settings)

    def new_data(self, id: str | None = None, state: dict[str, Any] | None = None) -> ResourceData:
        return ResourceData(self.fields, id=id, state=state)

    def deadline(self, timeout: float) -> float:
        """Poll deadline for an operation timeout, less the safety margin."""
        return timeout - self.settings.timeout_safety_margin

    @staticmethod
    def import_id(id: str) -> str:
        return id

    @abstractmethod
    async def create(self, data: ResourceData, timeouts: Timeouts) -> None:
        """Create the remote resource and populate ``data``."""

    @abstractmethod
    async def read(self, data: ResourceData) -> None:
        """Mirror the remote resource into ``data``."""

    @abstractmethod
    async def fetch(self, id: str) -> Any:
        """Read the remote resource."""

    @abstractmethod
    async def _modify(self, data: ResourceData) -> None:
        """Send the mutable fields of ``data`` to the remote."""

    @abstractmethod
    async def _delete_remote(self, id: str) -> None:
        """Issue the remote delete."""

    def changed_fields(self, data: ResourceData, old_state: dict[str, Any]) -> list[str]:
        return [
            field for field in self.mutable_fields if data.get(field) != old_state.get(field)
        ]

    async def update(self, data: ResourceData, old_state: dict[str, Any]) -> None:
        """Modify name or description when they changed, then re-read."""
        changed = self.changed_fields(data, old_state)
        if changed:
            logger.info(f"Modifying {self.kind} {data.id}: {', '.join(changed)}")
            await self._modify(data)
        await self.read(data)

    async def delete(self, data: ResourceData, timeouts: Timeouts) -> None:
        id = data.id
        await self._delete_remote(id)
        logger.info(f"Deleted {self.kind} {id}")

        if self.confirm_deletion:

            async def refresh() -> Any:
                return await self.fetch(id)

            await self.poller.wait_for_absence(
                refresh, self.deadline(timeouts.delete), describe=self.kind
            )

        data.clear_id()

    async def wait_until_ready(self, data: ResourceData, timeouts: Timeouts) -> None:
        id = data.id

        async def refresh() -> str:
            return (await self.fetch(id)).status

        await self.poller.wait_for_status(
            refresh,
            self.pending_statuses,
            self.target_statuses,
            self.deadline(timeouts.create),
            describe=self.kind,
        )

    @staticmethod
    def modify_input(data: ResourceData) -> dict[str, Any]:
        return {
            "idOrUniqueName": {"id": data.id},
            "uniqueName": data.get("unique_name"),
            "description": data.get("description"),
        }

    @staticmethod
    def identity_input(unique_name: str | None, description: str | None) -> dict[str, Any]:
        payload = {}
        if unique_name is not None:
            payload["uniqueName"] = unique_name
        if description is not None:
            payload["description"] = description
        return payload
