"""Positional iteration over the members of an object or array value."""

from __future__ import annotations

from collections.abc import Iterator, Mapping, Sequence
from typing import Any


class IteratorError(Exception):
    """Raised when an iterator is used where it has no member."""


class MemberIterator:
    """A position among the members of a mapping or sequence.

    Mapping members are addressed by key, sequence members by index. An
    iterator built without members is a null iterator: it equals only other
    null iterators and its distance to one is zero.
    """

    def __init__(self, members: Mapping | Sequence | None = None, position: int = 0):
        self._members = members
        if members is None:
            self._keys: list[Any] = []
        elif isinstance(members, Mapping):
            self._keys = list(members)
        else:
            self._keys = list(range(len(members)))
        self.position = position

    @property
    def is_null(self) -> bool:
        return self._members is None

    def _current_key(self) -> Any:
        if self._members is None:
            raise IteratorError("null iterator has no member")
        if not 0 <= self.position < len(self._keys):
            raise IteratorError(f"iterator position {self.position} is out of range")
        return self._keys[self.position]

    def value(self) -> Any:
        """Return the member value at this position."""
        return self._members[self._current_key()]

    def key(self) -> Any:
        """Return the member name, or its index for an array member."""
        return self._current_key()

    def index(self) -> int | None:
        """Return the array index of this member, or None for a named member."""
        key = self._current_key()
        return None if isinstance(key, str) else key

    def name(self) -> str:
        """Return the member name, or '' for an array member."""
        key = self._current_key()
        return key if isinstance(key, str) else ""

    def member_name(self) -> str | None:
        """Return the member name, or None for an array member."""
        key = self._current_key()
        return key if isinstance(key, str) else None

    def advance(self) -> MemberIterator:
        self.position += 1
        return self

    def retreat(self) -> MemberIterator:
        self.position -= 1
        return self

    def distance_to(self, other: MemberIterator) -> int:
        """Return how many steps forward lead from this position to other's."""
        if self.is_null and other.is_null:
            return 0
        if self._members is not other._members:
            raise IteratorError("iterators belong to different values")
        return other.position - self.position

    def copy(self) -> MemberIterator:
        clone = MemberIterator.__new__(MemberIterator)
        clone._members = self._members
        clone._keys = self._keys
        clone.position = self.position
        return clone

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, MemberIterator):
            return NotImplemented
        if self.is_null or other.is_null:
            return self.is_null and other.is_null
        return self._members is other._members and self.position == other.position

    def __hash__(self) -> int:
        return hash((id(self._members), self.position))

    def __repr__(self) -> str:
        if self.is_null:
            return "MemberIterator(null)"
        return f"MemberIterator(position={self.position})"


def iterate_members(members: Mapping | Sequence) -> Iterator[MemberIterator]:
    """Yield an iterator at each member position in order."""
    current = MemberIterator(members, 0)
    end = MemberIterator(members, len(current._keys))
    while current != end:
        yield current.copy()
        current.advance()