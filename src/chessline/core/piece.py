"""Piece value object."""

from __future__ import annotations

from dataclasses import dataclass

from chessline.core.enums import PieceType, Side

_LETTERS: dict[PieceType, str] = {
    PieceType.PAWN: "p",
    PieceType.KNIGHT: "n",
    PieceType.BISHOP: "b",
    PieceType.ROOK: "r",
    PieceType.QUEEN: "q",
    PieceType.KING: "k",
}

PROMOTION_TYPES: tuple[PieceType, ...] = (
    PieceType.QUEEN,
    PieceType.ROOK,
    PieceType.BISHOP,
    PieceType.KNIGHT,
)


@dataclass(frozen=True, slots=True)
class Piece:
    """A chess piece: owner plus kind.

    Equality is structural, so two white knights compare equal regardless of
    where they stand or which board holds them.
    """

    side: Side
    piece_type: PieceType

    def copy(self) -> Piece:
        return Piece(self.side, self.piece_type)

    # ── Display ──────────────────────────────────────────────────────────

    def __str__(self) -> str:
        """Letter (uppercase = white, lowercase = black)."""
        letter = _LETTERS[self.piece_type]
        return letter.upper() if self.side == Side.WHITE else letter
