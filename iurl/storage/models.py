"""Data models for the redirect store."""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass
class RedirectRecord:
    """Represents one short path -> destination mapping."""

    short_path: str
    destination: str
    owner_id: str
    created_at: datetime
    updated_at: datetime
    label: str = ""
    access_count: int = 0

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "short_path": self.short_path,
            "destination": self.destination,
            "label": self.label,
            "access_count": self.access_count,
            "owner_id": self.owner_id,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "RedirectRecord":
        """Create from dictionary (as produced by ``to_dict`` or a DB row)."""
        return cls(
            short_path=data["short_path"],
            destination=data["destination"],
            label=data.get("label") or "",
            access_count=int(data.get("access_count") or 0),
            owner_id=data["owner_id"],
            created_at=_as_datetime(data["created_at"]),
            updated_at=_as_datetime(data["updated_at"]),
        )


def _as_datetime(value) -> Optional[datetime]:
    if value is None or isinstance(value, datetime):
        return value
    return datetime.fromisoformat(value)
