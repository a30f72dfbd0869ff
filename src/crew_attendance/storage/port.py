from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional, Protocol

from ..core.enums import BackendKind


@dataclass(frozen=True)
class LoadResult:
    data: dict[str, Any] = field(default_factory=dict)
    found: bool = False
    source: str = "empty"
    version: Optional[str] = None


@dataclass(frozen=True)
class SaveResult:
    local_saved: bool
    remote_saved: bool = False
    version: Optional[str] = None
    error: Optional[str] = None

    @property
    def synchronized(self) -> bool:
        """True when the document reached the remote store (always False for local-only)."""
        return self.remote_saved


class PersistencePort(Protocol):
    """Saves and loads the whole attendance document as one JSON object."""

    kind: BackendKind

    def load(self) -> LoadResult:
        raise NotImplementedError

    def save(self, document: dict[str, Any], message: str) -> SaveResult:
        raise NotImplementedError

    def status(self) -> dict[str, Any]:
        raise NotImplementedError
