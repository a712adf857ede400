"""Tip store - in-memory study tips kept consistent with the backend."""

import logging

from vietcards.domain.entities.tip import Tip, TipDraft, TipPatch
from vietcards.domain.errors import LoadError, NotFoundError, RepositoryError, ValidationError
from vietcards.domain.services.events import ChangeNotifier, StoreEvent, StoreEventKind
from vietcards.domain.value_objects.operation_result import ErrorCode, OperationResult
from vietcards.ports.repository import TipRepository

logger = logging.getLogger(__name__)


class TipStore(ChangeNotifier):
    """Owns the tip list. Same contract as CardStore, without last-seen."""

    def __init__(self, repository: TipRepository):
        super().__init__()
        self._repository = repository
        self._tips: list[Tip] = []
        self._load_error: str | None = None

    @property
    def tips(self) -> list[Tip]:
        return list(self._tips)

    @property
    def load_error(self) -> str | None:
        return self._load_error

    def __len__(self) -> int:
        return len(self._tips)

    def get(self, tip_id: int) -> Tip | None:
        return next((t for t in self._tips if t.id == tip_id), None)

    async def load(self) -> list[Tip]:
        """Fetch all tips ordered by id.

        Raises:
            LoadError: If the backend fetch or row decoding fails (store stays empty)
        """
        try:
            tips = await self._repository.list_tips()
        except Exception as e:
            self._tips = []
            self._load_error = str(e)
            self._notify(StoreEvent(StoreEventKind.LOADED))
            logger.error(f"Error fetching tips: {e}")
            raise LoadError(f"Could not load tips: {e}") from e

        self._tips = sorted(tips, key=lambda t: t.id)
        self._load_error = None
        self._notify(StoreEvent(StoreEventKind.LOADED))
        logger.info(f"Loaded {len(self._tips)} tips")
        return self.tips

    async def create(self, draft: TipDraft) -> OperationResult[Tip]:
        try:
            clean = draft.validate()
        except ValidationError as e:
            return OperationResult.fail(ErrorCode.VALIDATION, str(e))

        try:
            tip = await self._repository.insert_tip(clean)
        except RepositoryError as e:
            logger.error(f"Error creating tip: {e}")
            return OperationResult.fail(ErrorCode.PERSISTENCE, str(e))

        self._tips.append(tip)
        self._notify(StoreEvent(StoreEventKind.CREATED, tip.id))
        return OperationResult.ok(tip)

    async def update(self, tip_id: int, patch: TipPatch) -> OperationResult[Tip]:
        if self.get(tip_id) is None:
            return OperationResult.fail(ErrorCode.NOT_FOUND, f"Tip {tip_id} not found")

        try:
            changes = patch.changes()
        except ValidationError as e:
            return OperationResult.fail(ErrorCode.VALIDATION, str(e))

        try:
            tip = await self._repository.update_tip(tip_id, changes)
        except NotFoundError as e:
            return OperationResult.fail(ErrorCode.NOT_FOUND, str(e))
        except RepositoryError as e:
            logger.error(f"Error updating tip {tip_id}: {e}")
            return OperationResult.fail(ErrorCode.PERSISTENCE, str(e))

        if self.get(tip_id) is None:
            return OperationResult.fail(ErrorCode.NOT_FOUND, f"Tip {tip_id} not found")

        self._tips = [tip if t.id == tip_id else t for t in self._tips]
        self._notify(StoreEvent(StoreEventKind.UPDATED, tip_id))
        return OperationResult.ok(tip)

    async def delete(self, tip_id: int) -> OperationResult[None]:
        if self.get(tip_id) is None:
            return OperationResult.fail(ErrorCode.NOT_FOUND, f"Tip {tip_id} not found")

        try:
            await self._repository.delete_tip(tip_id)
        except NotFoundError as e:
            return OperationResult.fail(ErrorCode.NOT_FOUND, str(e))
        except RepositoryError as e:
            logger.error(f"Error deleting tip {tip_id}: {e}")
            return OperationResult.fail(ErrorCode.PERSISTENCE, str(e))

        self._tips = [t for t in self._tips if t.id != tip_id]
        self._notify(StoreEvent(StoreEventKind.DELETED, tip_id))
        return OperationResult.ok()
