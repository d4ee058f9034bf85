"""GameConditions — side to move, castling rights, en passant, clocks."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from chessline.core.enums import CastlingRights, MoveKind, PieceType, Side
from chessline.core.types import A1, A8, H1, H8, INVALID_SQUARE, Square

if TYPE_CHECKING:
    from chessline.core.board import Board
    from chessline.core.movement import Movement

_ROOK_CORNERS: dict[Square, CastlingRights] = {
    A1: CastlingRights.WHITE_QUEENSIDE,
    H1: CastlingRights.WHITE_KINGSIDE,
    A8: CastlingRights.BLACK_QUEENSIDE,
    H8: CastlingRights.BLACK_KINGSIDE,
}


@dataclass(frozen=True, slots=True)
class GameConditions:
    """Everything about a position that the piece placement does not say.

    Instances are immutable; each half-move produces a new one via
    :meth:`after_move`.
    """

    side_to_move: Side = Side.WHITE
    castling: CastlingRights = CastlingRights.ALL
    en_passant: Square = INVALID_SQUARE
    half_move_clock: int = 0
    full_move_number: int = 1

    @classmethod
    def standard(cls) -> GameConditions:
        """Conditions of the normal starting position."""
        return cls()

    def can_castle(self, side: Side, kingside: bool) -> bool:
        return bool(self.castling & CastlingRights.for_side(side, kingside))

    @property
    def has_en_passant(self) -> bool:
        return self.en_passant.is_valid()

    def after_move(self, board_before: Board, movement: Movement) -> GameConditions:
        """Conditions after *movement* is played on *board_before*."""
        piece = board_before[movement.start]
        if piece is None:
            raise ValueError(f"No piece on {movement.start.name}")

        captured = (
            board_before[movement.end] is not None
            or movement.kind == MoveKind.EN_PASSANT
        )

        castling = self.castling
        if piece.piece_type == PieceType.KING:
            castling &= ~CastlingRights.both(piece.side)
        for sq in (movement.start, movement.end):
            if sq in _ROOK_CORNERS:
                castling &= ~_ROOK_CORNERS[sq]

        en_passant = INVALID_SQUARE
        if (
            piece.piece_type == PieceType.PAWN
            and abs(movement.end.rank - movement.start.rank) == 2
        ):
            en_passant = Square(
                movement.start.file, (movement.start.rank + movement.end.rank) // 2
            )

        if piece.piece_type == PieceType.PAWN or captured:
            half_move_clock = 0
        else:
            half_move_clock = self.half_move_clock + 1

        full_move_number = self.full_move_number
        if self.side_to_move == Side.BLACK:
            full_move_number += 1

        return GameConditions(
            side_to_move=self.side_to_move.complement,
            castling=castling,
            en_passant=en_passant,
            half_move_clock=half_move_clock,
            full_move_number=full_move_number,
        )
