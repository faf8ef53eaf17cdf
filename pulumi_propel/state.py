"""Local state mirror for a single Propel resource instance."""

import logging
from collections.abc import Iterable
from typing import Any

from .errors import Diagnostic, Severity, StateError

logger = logging.getLogger(__name__)


class ResourceData:
    """Attributes persisted by the orchestrator for one resource.

    Only fields declared for the resource kind may be written. A failed
    ``set`` raises ``StateError``; fields written before the failure keep
    their new value.

    Args:
        fields: Names of the attributes this resource kind persists
        id: Remote identifier, if the resource already exists
        state: Initial attribute values (desired inputs or prior outputs)
    """

    def __init__(
        self,
        fields: Iterable[str],
        id: str | None = None,
        state: dict[str, Any] | None = None,
    ):
        self._fields = frozenset(fields)
        self._id = id or None
        self._state: dict[str, Any] = dict(state or {})
        self.diagnostics: list[Diagnostic] = []

    @property
    def id(self) -> str | None:
        return self._id

    def set_id(self, id: str) -> None:
        self._id = id or None

    def clear_id(self) -> None:
        self._id = None

    def get(self, key: str, default: Any = None) -> Any:
        value = self._state.get(key)
        return default if value is None else value

    def set(self, key: str, value: Any) -> None:
        if key not in self._fields:
            raise StateError(f'Invalid address to set: "{key}"')
        self._state[key] = value

    def warn(self, summary: str, detail: str | None = None) -> None:
        logger.warning(f"{summary}: {detail}" if detail else summary)
        self.diagnostics.append(
            Diagnostic(severity=Severity.WARNING, summary=summary, detail=detail)
        )

    def outputs(self) -> dict[str, Any]:
        """Return a copy of the persisted attributes."""
        return dict(self._state)
