"""Name-based filtering for catalog items."""

from typing import Any


class NameContainsFilter:
    """Filter items by name using case-insensitive substring search.

    The search term is matched literally; characters such as ``.`` or ``*``
    carry no pattern meaning.
    """

    @staticmethod
    def apply(
        items: list[dict[str, Any]],
        search_term: str,
        field_name: str = "name",
    ) -> list[dict[str, Any]]:
        """Return the items whose ``field_name`` contains ``search_term``.

        A blank term matches every item.
        """
        if not search_term or not search_term.strip():
            return items

        search_lower = search_term.casefold()
        return [
            item
            for item in items
            if search_lower in str(item.get(field_name) or "").casefold()
        ]
