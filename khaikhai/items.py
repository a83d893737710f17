"""Item-set collection.

Builds the list of items to rank, either one name at a time or from a
comma-separated import, and checks it against the requested item count
before a session starts.
"""

from __future__ import annotations

import logging

from .config import Settings
from .engine.errors import InvalidInput

logger = logging.getLogger(__name__)


def parse_item_count(text: str, settings: Settings | None = None) -> int:
    """Parse a typed item count.

    Args:
        text: Raw user input
        settings: Settings providing the allowed range

    Returns:
        The item count

    Raises:
        InvalidInput: If the text is not a whole number or is out of range
    """
    settings = settings or Settings()
    try:
        count = int(text.strip())
    except (AttributeError, ValueError):
        raise InvalidInput(f"Not a valid item count: {text!r}") from None

    if count < settings.min_items:
        raise InvalidInput(f"You need at least {settings.min_items} items")
    if count > settings.max_items:
        raise InvalidInput(f"You can rank at most {settings.max_items} items")
    return count


def split_items(text: str) -> list[str]:
    """Split comma-separated text into trimmed, non-empty names."""
    return [name.strip() for name in text.split(",") if name.strip()]


class ItemSetBuilder:
    """Collects exactly ``item_count`` unique item names."""

    def __init__(self, item_count: int, settings: Settings | None = None):
        """Initialize the builder.

        Args:
            item_count: Number of items the user asked to rank
            settings: Settings providing count limits and the advisory threshold

        Raises:
            InvalidInput: If ``item_count`` is out of range
        """
        self.settings = settings or Settings()
        if not isinstance(item_count, int) or isinstance(item_count, bool):
            raise InvalidInput(f"Not a valid item count: {item_count!r}")
        # Reuse the text parser for the range checks
        self.item_count = parse_item_count(str(item_count), self.settings)
        self._items: list[str] = []

    @property
    def items(self) -> list[str]:
        return list(self._items)

    @property
    def remaining(self) -> int:
        return self.item_count - len(self._items)

    @property
    def is_full(self) -> bool:
        return len(self._items) >= self.item_count

    @property
    def advisory(self) -> str | None:
        """Usability warning for large item counts, or None."""
        if self.item_count > self.settings.large_count_warning:
            return (
                "Large numbers of items may require many comparisons. "
                "Consider using fewer items for better experience."
            )
        return None

    def add(self, name: str) -> str:
        """Add a single item.

        Args:
            name: Item name; surrounding whitespace is removed

        Returns:
            The stored (trimmed) name

        Raises:
            InvalidInput: If the name is empty, already present, or the set
                is already full
        """
        name = name.strip()
        if not name:
            raise InvalidInput("Please enter a valid name")
        if self.is_full:
            raise InvalidInput(f"You can only add {self.item_count} items")
        if name in self._items:
            raise InvalidInput("This item already exists")

        self._items.append(name)
        return name

    def import_text(self, text: str) -> list[str]:
        """Replace the current items with a comma-separated list.

        Duplicates are dropped, keeping the first occurrence. The list may
        end up shorter than ``item_count``; ``finalize`` reports that.

        Args:
            text: Comma-separated names, e.g. ``"Apple, Banana, Cherry"``

        Returns:
            The unique imported names

        Raises:
            InvalidInput: If the text holds more names than ``item_count``
        """
        names = split_items(text)
        if len(names) > self.item_count:
            raise InvalidInput(f"You can only add {self.item_count} items")

        unique = list(dict.fromkeys(names))
        if len(unique) < len(names):
            logger.info("Dropped %d duplicate item(s) from import", len(names) - len(unique))
        self._items = unique
        return self.items

    def clear(self) -> None:
        self._items = []

    def finalize(self) -> list[str]:
        """Return the finished item set.

        Raises:
            InvalidInput: If fewer than the minimum items were entered, or
                the number of items differs from ``item_count``
        """
        if len(self._items) < self.settings.min_items:
            raise InvalidInput(f"You need at least {self.settings.min_items} items to start the game")
        if len(self._items) != self.item_count:
            raise InvalidInput(f"Please add exactly {self.item_count} items")
        return self.items
