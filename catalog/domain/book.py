from __future__ import annotations

from dataclasses import dataclass, asdict
from typing import Any


@dataclass
class Book:
    """A catalog entry. ``id == 0`` means the book has not been persisted yet."""
    author: str = ""
    title: str = ""
    description: str = ""
    isbn: str = ""
    id: int = 0

    @property
    def persisted(self) -> bool:
        return self.id != 0

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Book":
        return cls(
            author=str(data.get("author") or ""),
            title=str(data.get("title") or ""),
            description=str(data.get("description") or ""),
            isbn=str(data.get("isbn") or ""),
            id=int(data.get("id") or 0),
        )

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)
