"""DTOs for stored content documents and public permissions (no dependency on Firestore)."""

from dataclasses import dataclass, field, fields
from typing import Any


@dataclass(frozen=True)
class DocumentRef:
    """Address of one stored document: collection name + document id."""

    collection: str
    id: str


@dataclass(frozen=True)
class StoredDocument:
    """A document read from the document store: its reference and full field map."""

    ref: DocumentRef
    data: dict[str, Any] = field(default_factory=dict)

    @property
    def id(self) -> str:
        return self.ref.id


@dataclass(frozen=True)
class PublicPermissions:
    """Which generated API actions are open to unauthenticated callers for a collection.

    Missing flags default to False (closed).
    """

    find: bool = False
    findOne: bool = False
    create: bool = False
    update: bool = False
    delete: bool = False

    @classmethod
    def actions(cls) -> list[str]:
        return [f.name for f in fields(cls)]

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> "PublicPermissions":
        """Merge stored flags over the closed defaults; unknown keys are ignored."""
        data = data or {}
        return cls(**{name: bool(data.get(name, False)) for name in cls.actions()})

    def to_dict(self) -> dict[str, bool]:
        return {name: getattr(self, name) for name in self.actions()}

    def allows(self, action: str) -> bool:
        """Return whether action is public. Unknown actions are never public."""
        if action not in self.actions():
            return False
        return bool(getattr(self, action))
