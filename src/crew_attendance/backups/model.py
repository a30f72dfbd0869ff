from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Optional

from ..core.enums import BackupKind


@dataclass(frozen=True)
class BackupEntry:
    filename: str
    kind: BackupKind
    timestamp: datetime
    size: int = 0
    description: Optional[str] = None
    months: Optional[int] = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "filename": self.filename,
            "kind": self.kind.value,
            "timestamp": self.timestamp.isoformat(),
            "size": self.size,
            "description": self.description,
            "months": self.months,
        }
