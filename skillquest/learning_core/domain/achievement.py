from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class Achievement:
    """획득한 업적."""

    name: str
    description: str
    icon: str
    category: str
    rarity: str
    points: int
    unlocked_at: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "icon": self.icon,
            "category": self.category,
            "rarity": self.rarity,
            "points": self.points,
            "unlocked_at": self.unlocked_at,
        }

    @classmethod
    def from_dict(cls, payload: Dict[str, Any]) -> "Achievement":
        return cls(
            name=payload["name"],
            description=payload.get("description", ""),
            icon=payload.get("icon", ""),
            category=payload.get("category", ""),
            rarity=payload.get("rarity", "common"),
            points=int(payload.get("points", 0)),
            unlocked_at=payload.get("unlocked_at"),
        )
