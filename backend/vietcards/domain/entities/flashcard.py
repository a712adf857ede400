"""Flashcard entity representing a Vietnamese vocabulary card."""

from dataclasses import dataclass, replace
from datetime import UTC, datetime
from typing import Any, Self, TypedDict

from vietcards.domain.errors import ValidationError


class FlashcardDict(TypedDict):
    """Flashcard data structure for serialization (backend row shape)."""

    id: int
    question: str
    answer: str
    example: str | None
    example_translation: str | None
    tags: list[str]
    notes: str | None
    last_seen: str | None
    created_at: str | None


def parse_timestamp(value: Any) -> datetime | None:
    """Parse an ISO-8601 timestamp (or pass through a datetime) as aware UTC."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        parsed = value
    else:
        parsed = datetime.fromisoformat(str(value).replace("Z", "+00:00"))
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed


def format_timestamp(value: datetime | None) -> str | None:
    """Format a timestamp as ISO-8601, or None."""
    return value.isoformat() if value is not None else None


def normalize_tags(tags: Any) -> tuple[str, ...]:
    """Lowercase, strip and deduplicate tags, keeping first-seen order."""
    if not tags:
        return ()
    cleaned = (str(tag).strip().lower() for tag in tags)
    return tuple(dict.fromkeys(tag for tag in cleaned if tag))


def _clean_optional(text: str | None) -> str | None:
    if text is None:
        return None
    text = text.strip()
    return text or None


@dataclass(frozen=True)
class Flashcard:
    """Vocabulary card entity.

    Attributes:
        id: Unique card identifier assigned by the backend
        question: Front-side prompt (Vietnamese)
        answer: Back-side reveal text (translation)
        example: Optional illustrative sentence
        example_translation: Translation of the example sentence
        tags: Lowercase category tags, never None
        notes: Optional free text
        last_seen: When the card was last shown, None if never shown
        created_at: When the card was created (immutable)
    """

    id: int
    question: str
    answer: str
    example: str | None = None
    example_translation: str | None = None
    tags: tuple[str, ...] = ()
    notes: str | None = None
    last_seen: datetime | None = None
    created_at: datetime | None = None

    def is_unseen(self) -> bool:
        """Check if card has never been shown."""
        return self.last_seen is None

    def has_tag(self, tag: str) -> bool:
        """Check if card carries the given tag."""
        return tag in self.tags

    def with_last_seen(self, seen_at: datetime) -> "Flashcard":
        """Return a copy marked as seen at the given time."""
        return replace(self, last_seen=seen_at)

    def to_dict(self) -> FlashcardDict:
        """Convert card to dictionary for storage and API responses."""
        return {
            "id": self.id,
            "question": self.question,
            "answer": self.answer,
            "example": self.example,
            "example_translation": self.example_translation,
            "tags": list(self.tags),
            "notes": self.notes,
            "last_seen": format_timestamp(self.last_seen),
            "created_at": format_timestamp(self.created_at),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Self:
        """Build a card from a backend row or stored snapshot.

        Accepts both snake_case columns and the camelCase keys used by
        older browser snapshots.
        """
        return cls(
            id=data["id"],
            question=data.get("question") or "",
            answer=data.get("answer") or "",
            example=data.get("example"),
            example_translation=data.get(
                "example_translation", data.get("exampleTranslation")
            ),
            tags=normalize_tags(data.get("tags")),
            notes=data.get("notes"),
            last_seen=parse_timestamp(data.get("last_seen", data.get("lastSeen"))),
            created_at=parse_timestamp(data.get("created_at", data.get("createdAt"))),
        )


@dataclass(frozen=True)
class FlashcardDraft:
    """User-supplied fields for a new card (id and created_at come from the backend)."""

    question: str
    answer: str
    tags: tuple[str, ...] = ()
    example: str | None = None
    example_translation: str | None = None
    notes: str | None = None

    def validate(self) -> "FlashcardDraft":
        """Return a cleaned copy of the draft.

        Raises:
            ValidationError: If question/answer is blank or no tag is given
        """
        question = (self.question or "").strip()
        answer = (self.answer or "").strip()
        if not question or not answer:
            raise ValidationError("Question and answer are required")

        tags = normalize_tags(self.tags)
        if not tags:
            raise ValidationError("At least one tag is required")

        example = _clean_optional(self.example)
        return FlashcardDraft(
            question=question,
            answer=answer,
            tags=tags,
            example=example,
            # A translation without an example has nothing to translate
            example_translation=_clean_optional(self.example_translation) if example else None,
            notes=_clean_optional(self.notes),
        )

    def to_row(self) -> dict[str, Any]:
        """Convert to backend insert payload."""
        return {
            "question": self.question,
            "answer": self.answer,
            "example": self.example,
            "example_translation": self.example_translation,
            "tags": list(self.tags),
            "notes": self.notes,
        }


_PATCH_FIELDS = ("question", "answer", "tags", "example", "example_translation", "notes")


@dataclass(frozen=True)
class FlashcardPatch:
    """Partial update for a card. None means "leave unchanged"."""

    question: str | None = None
    answer: str | None = None
    tags: tuple[str, ...] | None = None
    example: str | None = None
    example_translation: str | None = None
    notes: str | None = None

    def changes(self) -> dict[str, Any]:
        """Validated backend payload of the fields this patch sets.

        Raises:
            ValidationError: If the patch is empty or blanks a required field
        """
        changes: dict[str, Any] = {}
        for name in _PATCH_FIELDS:
            value = getattr(self, name)
            if value is None:
                continue
            if name == "tags":
                tags = normalize_tags(value)
                if not tags:
                    raise ValidationError("At least one tag is required")
                changes[name] = list(tags)
            elif name in ("question", "answer"):
                text = value.strip()
                if not text:
                    raise ValidationError("Question and answer are required")
                changes[name] = text
            else:
                changes[name] = value.strip() or None

        if not changes:
            raise ValidationError("Nothing to update")
        return changes

    def apply(self, card: Flashcard) -> Flashcard:
        """Merge this patch into a card."""
        changes = self.changes()
        if "tags" in changes:
            changes["tags"] = tuple(changes["tags"])
        return replace(card, **changes)
