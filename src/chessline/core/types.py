"""Square value type and coordinate helpers.

Squares use 1-based coordinates::

    file 1..8 = a..h
    rank 1..8

``INVALID_SQUARE`` (-1, -1) is the sentinel for "no square", e.g. an absent
en passant target.
"""

from __future__ import annotations

from dataclasses import dataclass

_FILE_NAMES = "abcdefgh"


@dataclass(frozen=True, slots=True)
class Square:
    """Immutable board coordinate; also used as a (file, rank) offset."""

    file: int
    rank: int

    def __add__(self, other: object) -> Square:
        if not isinstance(other, Square):
            return NotImplemented
        return Square(self.file + other.file, self.rank + other.rank)

    def offset(self, file_delta: int, rank_delta: int) -> Square:
        return Square(self.file + file_delta, self.rank + rank_delta)

    def is_valid(self) -> bool:
        return 1 <= self.file <= 8 and 1 <= self.rank <= 8

    @property
    def name(self) -> str:
        """Human-readable name, e.g. Square(5, 4) -> 'e4'."""
        if not self.is_valid():
            return "-"
        return f"{_FILE_NAMES[self.file - 1]}{self.rank}"

    def __str__(self) -> str:
        return self.name

    def __repr__(self) -> str:
        if self.is_valid():
            return f"Square({self.name})"
        return f"Square({self.file}, {self.rank})"


INVALID_SQUARE = Square(-1, -1)


def parse_square(name: str) -> Square:
    """Parse square name, e.g. 'e4' -> Square(5, 4)."""
    if len(name) != 2 or name[0] not in _FILE_NAMES or name[1] not in "12345678":
        raise ValueError(f"Invalid square name: {name!r}")
    return Square(_FILE_NAMES.index(name[0]) + 1, int(name[1]))


def all_squares() -> tuple[Square, ...]:
    """Every board square, file-major (a1, a2, ..., h8)."""
    return _ALL_SQUARES


_ALL_SQUARES: tuple[Square, ...] = tuple(
    Square(file, rank) for file in range(1, 9) for rank in range(1, 9)
)

# ── Offset tables ───────────────────────────────────────────────────────────

ORTHOGONAL_OFFSETS: tuple[Square, ...] = (
    Square(0, 1),
    Square(1, 0),
    Square(0, -1),
    Square(-1, 0),
)

DIAGONAL_OFFSETS: tuple[Square, ...] = (
    Square(1, 1),
    Square(1, -1),
    Square(-1, -1),
    Square(-1, 1),
)

SURROUNDING_OFFSETS: tuple[Square, ...] = ORTHOGONAL_OFFSETS + DIAGONAL_OFFSETS

KNIGHT_OFFSETS: tuple[Square, ...] = (
    Square(-2, -1),
    Square(-2, 1),
    Square(-1, -2),
    Square(-1, 2),
    Square(1, -2),
    Square(1, 2),
    Square(2, -1),
    Square(2, 1),
)

# ── Named square constants ──────────────────────────────────────────────────

A1, B1, C1, D1, E1, F1, G1, H1 = (Square(f, 1) for f in range(1, 9))
A2, B2, C2, D2, E2, F2, G2, H2 = (Square(f, 2) for f in range(1, 9))
A3, B3, C3, D3, E3, F3, G3, H3 = (Square(f, 3) for f in range(1, 9))
A4, B4, C4, D4, E4, F4, G4, H4 = (Square(f, 4) for f in range(1, 9))
A5, B5, C5, D5, E5, F5, G5, H5 = (Square(f, 5) for f in range(1, 9))
A6, B6, C6, D6, E6, F6, G6, H6 = (Square(f, 6) for f in range(1, 9))
A7, B7, C7, D7, E7, F7, G7, H7 = (Square(f, 7) for f in range(1, 9))
A8, B8, C8, D8, E8, F8, G8, H8 = (Square(f, 8) for f in range(1, 9))
