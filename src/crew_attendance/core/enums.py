from __future__ import annotations

from enum import Enum
from typing import Optional


class Role(str, Enum):
    """Crew roles with attendance requirements.

    Values are the labels stored in the attendance document.
    """

    ADMIN = "운영진"
    PACER = "페이서"
    PACER_GANGNAM = "페이서 강남"
    PHOTO = "포토"

    @classmethod
    def resolve(cls, label: Optional[str]) -> Optional["Role"]:
        """Match a stored label or its English slug; None for free-text roles."""
        if not label:
            return None
        text = str(label).strip()
        for role in cls:
            if text == role.value:
                return role
        return _ROLE_ALIASES.get(text.lower())


_ROLE_ALIASES = {
    "admin": Role.ADMIN,
    "pacer": Role.PACER,
    "pacer-gangnam": Role.PACER_GANGNAM,
    "photo": Role.PHOTO,
}


class BackupKind(str, Enum):
    """Archive tag; only AUTO archives are subject to retention."""

    AUTO = "auto"
    MANUAL = "manual"


class BackendKind(str, Enum):
    LOCAL = "local"
    GITHUB = "github"
