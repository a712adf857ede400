"""Supabase (PostgREST) adapter for flashcard and tip persistence."""

import logging
from collections.abc import Callable
from datetime import datetime
from typing import Any

import httpx

from vietcards.domain.entities.flashcard import Flashcard, FlashcardDraft
from vietcards.domain.entities.tip import Tip, TipDraft
from vietcards.domain.errors import NotFoundError, RepositoryError
from vietcards.infrastructure.retry import PermanentError, TransientError, with_retry

logger = logging.getLogger(__name__)

CARDS_TABLE = "flashcards"
TIPS_TABLE = "tips"
CANDIDATES_FUNCTION = "weighted_flashcards"


class SupabaseRepository:
    """Supabase REST adapter implementing FlashcardRepository, TipRepository
    and CandidateSource.

    Talks to the PostgREST endpoint under /rest/v1 with the project's anon
    key. Uses lazy client initialization for connection reuse. Reads are
    retried on transient failures; writes fail fast.
    """

    def __init__(
        self,
        url: str,
        api_key: str,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """Initialize adapter.

        Args:
            url: Project URL (e.g. https://xyz.supabase.co)
            api_key: Anon or service key
            timeout: Request timeout in seconds
            transport: Optional httpx transport (tests use MockTransport)
        """
        self._base_url = f"{url.rstrip('/')}/rest/v1"
        self._api_key = api_key
        self._timeout = timeout
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    async def _get_client(self) -> httpx.AsyncClient:
        """Lazy client initialization for connection reuse."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self._base_url,
                timeout=self._timeout,
                transport=self._transport,
                headers={
                    "apikey": self._api_key,
                    "Authorization": f"Bearer {self._api_key}",
                    "Content-Type": "application/json",
                },
            )
        return self._client

    async def _request(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, str] | None = None,
        json: Any = None,
        prefer: str | None = None,
    ) -> Any:
        """Call a PostgREST endpoint.

        Returns:
            Decoded JSON body, or None for empty responses

        Raises:
            TransientError: Network failure, 5xx or 429 (safe to retry reads)
            PermanentError: Any other error status, or a body that is not JSON
        """
        client = await self._get_client()
        headers = {"Prefer": prefer} if prefer else None
        try:
            response = await client.request(method, path, params=params, json=json, headers=headers)
        except httpx.TransportError as e:
            raise TransientError(f"{method} {path} failed: {e}") from e

        logger.debug(f"{method} {path} -> {response.status_code}")
        if response.status_code >= 500 or response.status_code == 429:
            raise TransientError(f"{method} {path} returned {response.status_code}")
        if response.is_error:
            raise PermanentError(
                f"{method} {path} returned {response.status_code}: {self._error_message(response)}"
            )
        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as e:
            raise PermanentError(f"{method} {path} returned a non-JSON body") from e

    @staticmethod
    def _error_message(response: httpx.Response) -> str:
        try:
            body = response.json()
        except ValueError:
            return response.text
        if isinstance(body, dict):
            return body.get("message") or body.get("error") or str(body)
        return str(body)

    @staticmethod
    def _single(rows: Any, what: str) -> dict[str, Any]:
        if not rows:
            raise NotFoundError(f"{what} not found")
        return rows[0]

    @staticmethod
    def _decode(rows: Any, factory: Callable[[dict[str, Any]], Any], what: str) -> list[Any]:
        """Build entities from rows. A row that does not decode is a backend error."""
        try:
            return [factory(row) for row in rows or []]
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            raise PermanentError(f"Malformed {what} row: {e!r}") from e

    # -------------------------------------------------------------------------
    # Flashcards
    # -------------------------------------------------------------------------

    @with_retry()
    async def list_cards(self) -> list[Flashcard]:
        rows = await self._request(
            "GET", f"/{CARDS_TABLE}", params={"select": "*", "order": "id.asc"}
        )
        return self._decode(rows, Flashcard.from_dict, "flashcard")

    async def insert_card(self, draft: FlashcardDraft) -> Flashcard:
        rows = await self._request(
            "POST", f"/{CARDS_TABLE}", json=[draft.to_row()], prefer="return=representation"
        )
        if not rows:
            raise RepositoryError("Insert returned no row")
        return self._decode(rows, Flashcard.from_dict, "flashcard")[0]

    async def update_card(self, card_id: int, changes: dict[str, Any]) -> None:
        rows = await self._request(
            "PATCH",
            f"/{CARDS_TABLE}",
            params={"id": f"eq.{card_id}"},
            json=changes,
            prefer="return=representation",
        )
        self._single(rows, f"Flashcard {card_id}")

    async def delete_card(self, card_id: int) -> None:
        rows = await self._request(
            "DELETE",
            f"/{CARDS_TABLE}",
            params={"id": f"eq.{card_id}"},
            prefer="return=representation",
        )
        self._single(rows, f"Flashcard {card_id}")

    async def touch_last_seen(self, card_id: int, seen_at: datetime) -> None:
        await self._request(
            "PATCH",
            f"/{CARDS_TABLE}",
            params={"id": f"eq.{card_id}"},
            json={"last_seen": seen_at.isoformat()},
            prefer="return=minimal",
        )

    @with_retry(max_attempts=2)
    async def weighted_candidates(self, tags: frozenset[str], count: int) -> list[Flashcard]:
        """Server-ranked candidate pool from the weighted_flashcards function."""
        rows = await self._request(
            "POST",
            f"/rpc/{CANDIDATES_FUNCTION}",
            json={"p_tags": sorted(tags) or None, "p_count": count},
        )
        return self._decode(rows, Flashcard.from_dict, "flashcard")

    # -------------------------------------------------------------------------
    # Tips
    # -------------------------------------------------------------------------

    @with_retry()
    async def list_tips(self) -> list[Tip]:
        rows = await self._request(
            "GET", f"/{TIPS_TABLE}", params={"select": "*", "order": "id.asc"}
        )
        return self._decode(rows, Tip.from_dict, "tip")

    async def insert_tip(self, draft: TipDraft) -> Tip:
        rows = await self._request(
            "POST", f"/{TIPS_TABLE}", json=[draft.to_row()], prefer="return=representation"
        )
        if not rows:
            raise RepositoryError("Insert returned no row")
        return self._decode(rows, Tip.from_dict, "tip")[0]

    async def update_tip(self, tip_id: int, changes: dict[str, Any]) -> Tip:
        rows = await self._request(
            "PATCH",
            f"/{TIPS_TABLE}",
            params={"id": f"eq.{tip_id}"},
            json=changes,
            prefer="return=representation",
        )
        return self._decode([self._single(rows, f"Tip {tip_id}")], Tip.from_dict, "tip")[0]

    async def delete_tip(self, tip_id: int) -> None:
        rows = await self._request(
            "DELETE",
            f"/{TIPS_TABLE}",
            params={"id": f"eq.{tip_id}"},
            prefer="return=representation",
        )
        self._single(rows, f"Tip {tip_id}")

    async def close(self) -> None:
        """Close HTTP client."""
        if self._client:
            await self._client.aclose()
            self._client = None
