"""Timeline — append-only history with a movable head."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from typing import Generic, TypeVar

T = TypeVar("T")


class Timeline(Generic[T]):
    """Ordered history whose *head* marks the current entry.

    Moving the head backwards keeps later entries around (they are the
    "future"); :meth:`add_next` while rewound discards that future before
    appending. There is a single line of history, never branches.

    ``head_index`` is -1 when the head sits before the first entry.
    """

    __slots__ = ("_entries", "_head_index")

    def __init__(self, entries: Iterable[T] = ()) -> None:
        self._entries: list[T] = list(entries)
        self._head_index = len(self._entries) - 1

    # ── Head ─────────────────────────────────────────────────────────────

    @property
    def head_index(self) -> int:
        return self._head_index

    @head_index.setter
    def head_index(self, index: int) -> None:
        if not -1 <= index < len(self._entries):
            raise IndexError(
                f"Head index {index} outside [-1, {len(self._entries) - 1}]"
            )
        self._head_index = index

    @property
    def current(self) -> T | None:
        """Entry under the head, or ``None`` before the first entry."""
        if self._head_index < 0:
            return None
        return self._entries[self._head_index]

    @property
    def is_up_to_date(self) -> bool:
        """Whether the head is on the last stored entry."""
        return self._head_index == len(self._entries) - 1

    # ── Mutation ─────────────────────────────────────────────────────────

    def add_next(self, entry: T) -> None:
        """Append after the head, dropping any entries beyond it first."""
        del self._entries[self._head_index + 1 :]
        self._entries.append(entry)
        self._head_index += 1

    def clear(self) -> None:
        self._entries.clear()
        self._head_index = -1

    def copy(self) -> Timeline[T]:
        """Shallow copy: same entries, same head."""
        timeline: Timeline[T] = Timeline(self._entries)
        timeline._head_index = self._head_index
        return timeline

    # ── Views ────────────────────────────────────────────────────────────

    @property
    def history(self) -> list[T]:
        """Entries up to and including the head."""
        return self._entries[: self._head_index + 1]

    @property
    def future(self) -> list[T]:
        """Entries after the head (kept until overwritten)."""
        return self._entries[self._head_index + 1 :]

    def __len__(self) -> int:
        return len(self._entries)

    def __getitem__(self, index: int) -> T:
        """Entry at absolute *index*; negative indexes are not accepted."""
        if not 0 <= index < len(self._entries):
            raise IndexError(
                f"Timeline index {index} outside [0, {len(self._entries) - 1}]"
            )
        return self._entries[index]

    def __iter__(self) -> Iterator[T]:
        return iter(self._entries)

    def __repr__(self) -> str:
        return f"Timeline(len={len(self._entries)}, head={self._head_index})"
