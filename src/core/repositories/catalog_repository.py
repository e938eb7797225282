"""Abstract contract for catalog item persistence."""

from abc import ABC, abstractmethod
from typing import Any

Item = dict[str, Any]


class CatalogRepository(ABC):
    """Contract for storing and querying catalog items.

    Implementations could be DynamoDB, MongoDB, PostgreSQL, etc.
    Services depend on this interface, not the implementation.
    """

    @abstractmethod
    def create_item(self, *, item: Item) -> None:
        """Insert a new catalog item.

        Args:
            item: Storage representation with a unique ``food_id``

        Raises:
            StoreError: If the item cannot be written
        """

    @abstractmethod
    def replace_item(self, *, item: Item) -> None:
        """Replace an existing catalog item in a single write.

        Raises:
            NotFoundError: If no item with ``item["food_id"]`` exists
            StoreError: If the write fails for other reasons
        """

    @abstractmethod
    def fetch_item(self, *, food_id: str) -> Item | None:
        """Fetch one item, or None if it does not exist.

        Raises:
            StoreError: If the read fails
        """

    @abstractmethod
    def remove_item(self, *, food_id: str) -> None:
        """Delete one item.

        Raises:
            NotFoundError: If the item does not exist (nothing is changed)
            StoreError: If the delete fails
        """

    @abstractmethod
    def scan_items(self) -> list[Item]:
        """Return every catalog item.

        Raises:
            StoreError: If the scan fails
        """

    @abstractmethod
    def items_with_tag(self, *, tag: str) -> list[Item]:
        """Return the items whose tags include ``tag`` (exact match).

        Raises:
            StoreError: If the scan fails
        """
