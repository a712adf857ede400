"""Tip entity for study tips shown beside the cards."""

from dataclasses import dataclass, replace
from typing import Any, Self

from vietcards.domain.entities.flashcard import normalize_tags
from vietcards.domain.errors import ValidationError


@dataclass(frozen=True)
class Tip:
    """Study tip.

    Tips have no scheduling weight; they rotate uniformly.

    Attributes:
        id: Unique tip identifier assigned by the backend
        title: Short heading
        content: Markdown body (rendered by the frontend)
        category: Optional grouping label
        tags: Optional tags
    """

    id: int
    title: str
    content: str
    category: str | None = None
    tags: tuple[str, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        """Convert tip to dictionary for API responses."""
        return {
            "id": self.id,
            "title": self.title,
            "content": self.content,
            "category": self.category,
            "tags": list(self.tags),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Self:
        """Build a tip from a backend row."""
        return cls(
            id=data["id"],
            title=data.get("title") or "",
            content=data.get("content") or "",
            category=data.get("category"),
            tags=normalize_tags(data.get("tags")),
        )


def _require_text(title: str | None, content: str | None) -> tuple[str, str]:
    title = (title or "").strip()
    content = (content or "").strip()
    if not title or not content:
        raise ValidationError("Title and content are required")
    return title, content


@dataclass(frozen=True)
class TipDraft:
    """User-supplied fields for a new tip."""

    title: str
    content: str
    category: str | None = None
    tags: tuple[str, ...] = ()

    def validate(self) -> "TipDraft":
        """Return a cleaned copy of the draft.

        Raises:
            ValidationError: If title or content is blank
        """
        title, content = _require_text(self.title, self.content)
        category = (self.category or "").strip() or None
        return TipDraft(title=title, content=content, category=category, tags=normalize_tags(self.tags))

    def to_row(self) -> dict[str, Any]:
        """Convert to backend insert payload."""
        return {
            "title": self.title,
            "content": self.content,
            "category": self.category,
            "tags": list(self.tags),
        }


@dataclass(frozen=True)
class TipPatch:
    """Partial update for a tip. None means "leave unchanged"."""

    title: str | None = None
    content: str | None = None
    category: str | None = None
    tags: tuple[str, ...] | None = None

    def changes(self) -> dict[str, Any]:
        """Validated backend payload of the fields this patch sets.

        Raises:
            ValidationError: If the patch is empty or blanks title/content
        """
        changes: dict[str, Any] = {}
        for name in ("title", "content"):
            value = getattr(self, name)
            if value is not None:
                if not value.strip():
                    raise ValidationError("Title and content are required")
                changes[name] = value.strip()
        if self.category is not None:
            changes["category"] = self.category.strip() or None
        if self.tags is not None:
            changes["tags"] = list(normalize_tags(self.tags))

        if not changes:
            raise ValidationError("Nothing to update")
        return changes

    def apply(self, tip: Tip) -> Tip:
        """Merge this patch into a tip."""
        changes = self.changes()
        if "tags" in changes:
            changes["tags"] = tuple(changes["tags"])
        return replace(tip, **changes)
