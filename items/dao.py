from abc import ABC, abstractmethod
from typing import Any, List, Optional

from items.models import Item


class ItemsDao(ABC):
    """Read-only access to the items collection.

    One implementation per backend. Every method is a coroutine that resolves
    or fails exactly once; driver failures are raised as ``StoreError``.
    """

    @abstractmethod
    async def get_by_id(self, item_id: str) -> Optional[Item]:
        """Return the item whose id equals ``item_id``, or None."""

    @abstractmethod
    async def search_by_description(self, partial_text: str) -> List[Item]:
        """Return every item whose description contains ``partial_text``, ignoring case."""

    @abstractmethod
    async def get_by_upc(self, code: Any) -> Optional[Item]:
        """Return the item whose UPC equals ``str(code)`` exactly, or None."""
