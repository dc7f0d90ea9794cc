"""
Multi-value HTTP header mapping.

Keys are stored in canonical form (``content-type`` -> ``Content-Type``) so
that lookups are case-insensitive and the same header added twice collects
both values under one key.
"""

from typing import Dict, Iterable, Iterator, List, MutableMapping, Optional, Tuple, Union

_TOKEN_CHARS = frozenset("!#$%&'*+-.^_`|~0123456789abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ")


def is_token(value: str) -> bool:
    """Return True if value is a non-empty RFC 7230 token."""
    return bool(value) and all(c in _TOKEN_CHARS for c in value)


def canonical_header_key(key: str) -> str:
    """
    Return the canonical form of a header key.

    The first letter and any letter following a hyphen are upper-cased, the
    rest lower-cased. Keys with a character that is not a valid token
    character are returned unchanged.
    """
    if not is_token(key):
        return key

    parts = []
    upper = True
    for c in key:
        parts.append(c.upper() if upper else c.lower())
        upper = c == "-"
    return "".join(parts)


class Header(MutableMapping[str, List[str]]):
    """Header multimap: canonical key -> ordered list of values."""

    def __init__(
        self,
        initial: Union[None, "Header", Dict[str, Union[str, List[str]]], Iterable[Tuple[str, str]]] = None,
    ):
        self._items: Dict[str, List[str]] = {}
        if initial is None:
            return
        pairs = initial.items() if hasattr(initial, "items") else initial
        for key, value in pairs:
            if isinstance(value, str):
                self.add(key, value)
            else:
                for v in value:
                    self.add(key, v)

    def add(self, key: str, value: str) -> None:
        """Append a value to the values already stored under key."""
        self._items.setdefault(canonical_header_key(key), []).append(value)

    def set(self, key: str, value: str) -> None:
        """Replace all values stored under key with a single value."""
        self._items[canonical_header_key(key)] = [value]

    def get_one(self, key: str, default: Optional[str] = None) -> Optional[str]:
        """Return the first value stored under key."""
        values = self._items.get(canonical_header_key(key))
        if not values:
            return default
        return values[0]

    def getlist(self, key: str) -> List[str]:
        """Return a copy of all values stored under key."""
        return list(self._items.get(canonical_header_key(key), []))

    def copy(self) -> "Header":
        return Header(self._items)

    def __getitem__(self, key: str) -> List[str]:
        return self._items[canonical_header_key(key)]

    def __setitem__(self, key: str, value: Union[str, List[str]]) -> None:
        if isinstance(value, str):
            value = [value]
        self._items[canonical_header_key(key)] = list(value)

    def __delitem__(self, key: str) -> None:
        del self._items[canonical_header_key(key)]

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and canonical_header_key(key) in self._items

    def __iter__(self) -> Iterator[str]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Header):
            return self._items == other._items
        if isinstance(other, dict):
            return self._items == Header(other)._items
        return NotImplemented

    def __repr__(self) -> str:
        return f"Header({self._items!r})"
