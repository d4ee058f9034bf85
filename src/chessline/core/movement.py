"""Movement value object: one ply, tagged with its special-move kind."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass

from chessline.core.enums import MoveKind, PieceType
from chessline.core.piece import PROMOTION_TYPES
from chessline.core.types import INVALID_SQUARE, Square

_PROMO_CHARS: dict[PieceType, str] = {
    PieceType.KNIGHT: "n",
    PieceType.BISHOP: "b",
    PieceType.ROOK: "r",
    PieceType.QUEEN: "q",
}


class MovementError(ValueError):
    """A movement cannot be applied as described.

    Raised for states a correctly generated legal move never has, e.g. a
    promotion with no elected piece or a castling move with no rook.
    """


@dataclass(frozen=True, slots=True)
class Movement:
    """Immutable value object describing a single ply.

    ``special_square`` depends on ``kind``: the rook's square for castling,
    the captured pawn's square for en passant, and a copy of ``end`` for
    promotion. It is ``INVALID_SQUARE`` for normal moves.
    """

    start: Square
    end: Square
    kind: MoveKind = MoveKind.NORMAL
    special_square: Square = INVALID_SQUARE
    promotion: PieceType | None = None

    # ── Factories ────────────────────────────────────────────────────────

    @classmethod
    def normal(cls, start: Square, end: Square) -> Movement:
        return cls(start, end)

    @classmethod
    def castling(cls, king_square: Square, end: Square, rook_square: Square) -> Movement:
        return cls(king_square, end, MoveKind.CASTLING, rook_square)

    @classmethod
    def en_passant(cls, start: Square, end: Square, captured_square: Square) -> Movement:
        return cls(start, end, MoveKind.EN_PASSANT, captured_square)

    @classmethod
    def promotion_move(
        cls,
        start: Square,
        end: Square,
        election: PieceType | None = None,
    ) -> Movement:
        movement = cls(start, end, MoveKind.PROMOTION, end)
        if election is not None:
            movement = movement.with_promotion(election)
        return movement

    # ── Queries ──────────────────────────────────────────────────────────

    @property
    def key(self) -> tuple[Square, Square]:
        """(start, end) pair used to index legal-move tables."""
        return (self.start, self.end)

    @property
    def is_special(self) -> bool:
        return self.kind != MoveKind.NORMAL

    @property
    def has_promotion(self) -> bool:
        return self.promotion is not None

    def with_promotion(self, election: PieceType) -> Movement:
        """Copy of this promotion movement carrying *election*."""
        if self.kind != MoveKind.PROMOTION:
            raise MovementError(f"{self} is not a promotion move")
        if election not in PROMOTION_TYPES:
            raise MovementError(f"Cannot promote to {election.name.lower()}")
        return dataclasses.replace(self, promotion=election)

    def rook_end_square(self) -> Square:
        """Square the castling rook lands on."""
        if self.kind != MoveKind.CASTLING:
            raise MovementError(f"{self} is not a castling move")
        if self.special_square.file == 1:
            file_offset = 3
        elif self.special_square.file == 8:
            file_offset = -2
        else:
            raise MovementError(
                f"Castling rook square {self.special_square!r} is not on a corner file"
            )
        return self.special_square.offset(file_offset, 0)

    # ── Display ──────────────────────────────────────────────────────────

    def __str__(self) -> str:
        base = f"{self.start.name}{self.end.name}"
        if self.promotion is not None:
            base += _PROMO_CHARS.get(self.promotion, "")
        return base
