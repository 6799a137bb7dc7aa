"""CRUD over product and service records."""

from collections.abc import Callable

from invoiceflow.application.action_logger import ActionLogger
from invoiceflow.application.policies import MissingRecordPolicy
from invoiceflow.config import get_logger
from invoiceflow.core.entities.action_log import InventoryItemLogDetails
from invoiceflow.core.entities.base import new_id
from invoiceflow.core.entities.inventory import InventoryItem, NewInventoryItem
from invoiceflow.core.exceptions import InventoryItemNotFoundError
from invoiceflow.infrastructure.storage.persistent_store import PersistentStore

logger = get_logger(__name__)


class InventoryRepository:
    """
    Owns the inventory collection.

    Records stored before ``quantity`` existed read back with 0; the
    ``NewInventoryItem`` validator does that on every load.
    """

    def __init__(
        self,
        store: PersistentStore[list[InventoryItem]],
        action_logger: ActionLogger,
        missing_policy: MissingRecordPolicy = MissingRecordPolicy.IGNORE,
        id_factory: Callable[[], str] = new_id,
    ):
        self._store = store
        self._action_logger = action_logger
        self._missing_policy = missing_policy
        self._id_factory = id_factory

    async def list_items(self) -> list[InventoryItem]:
        """All items in storage order."""
        return await self._store.read()

    async def get_by_id(self, item_id: str) -> InventoryItem | None:
        """Pure lookup."""
        for item in await self.list_items():
            if item.id == item_id:
                return item
        return None

    async def search(self, query: str) -> list[InventoryItem]:
        """Case-insensitive match on name or description."""
        needle = query.strip().lower()
        items = await self.list_items()
        if not needle:
            return items
        return [
            item
            for item in items
            if needle in item.name.lower() or needle in (item.description or "").lower()
        ]

    async def add(self, item: NewInventoryItem) -> InventoryItem:
        """Assign an id, persist and log."""
        created = InventoryItem(**item.model_dump(), id=self._id_factory())

        async def append(items: list[InventoryItem]) -> list[InventoryItem]:
            return [*items, created]

        await self._store.mutate(append)
        await self._action_logger.log_action(
            "Added Inventory Item",
            InventoryItemLogDetails(id=created.id, name=created.name),
        )
        logger.info("inventory_item_created", item_id=created.id, name=created.name)
        return created

    async def update(self, item: InventoryItem) -> None:
        """
        Replace the record with the same id.

        Raises:
            InventoryItemNotFoundError: If the id is unknown and the policy is RAISE
        """

        async def replace(items: list[InventoryItem]) -> list[InventoryItem]:
            if not any(existing.id == item.id for existing in items):
                if self._missing_policy is MissingRecordPolicy.RAISE:
                    raise InventoryItemNotFoundError(item.id)
                logger.warning("inventory_item_update_missing", item_id=item.id)
                return items
            return [item if existing.id == item.id else existing for existing in items]

        await self._store.mutate(replace)
        await self._action_logger.log_action(
            "Updated Inventory Item",
            InventoryItemLogDetails(id=item.id, name=item.name),
        )
        logger.info("inventory_item_updated", item_id=item.id)

    async def delete(self, item_id: str) -> None:
        """
        Remove the record with this id. Logs only if it existed.

        Raises:
            InventoryItemNotFoundError: If the id is unknown and the policy is RAISE
        """
        removed: list[InventoryItem] = []

        async def remove(items: list[InventoryItem]) -> list[InventoryItem]:
            removed.extend(item for item in items if item.id == item_id)
            if not removed:
                if self._missing_policy is MissingRecordPolicy.RAISE:
                    raise InventoryItemNotFoundError(item_id)
                return items
            return [item for item in items if item.id != item_id]

        await self._store.mutate(remove)
        if not removed:
            logger.debug("inventory_item_delete_missing", item_id=item_id)
            return

        await self._action_logger.log_action(
            "Deleted Inventory Item",
            InventoryItemLogDetails(id=item_id, name=removed[0].name),
        )
        logger.info("inventory_item_deleted", item_id=item_id)
