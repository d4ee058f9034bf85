"""Per-piece move generation filtered down to legal moves."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import TYPE_CHECKING, ClassVar

from chessline.core.enums import PieceType, Side
from chessline.core.movement import Movement
from chessline.core.rules import Rules
from chessline.core.types import (
    DIAGONAL_OFFSETS,
    KNIGHT_OFFSETS,
    ORTHOGONAL_OFFSETS,
    SURROUNDING_OFFSETS,
    Square,
    all_squares,
)

if TYPE_CHECKING:
    from chessline.core.board import Board
    from chessline.core.conditions import GameConditions
    from chessline.core.piece import Piece

MoveTable = dict[tuple[Square, Square], Movement]
LegalMoves = dict[Square, MoveTable]
LegalMovesView = Mapping[Square, Mapping[tuple[Square, Square], Movement]]

_SLIDING_DIRS: dict[PieceType, tuple[Square, ...]] = {
    PieceType.BISHOP: DIAGONAL_OFFSETS,
    PieceType.ROOK: ORTHOGONAL_OFFSETS,
    PieceType.QUEEN: SURROUNDING_OFFSETS,
}

_KING_FILE = 5


class MoveGenerator:
    """Generates legal moves for a board under given conditions.

    Each piece kind yields pseudo-legal candidates; every candidate is then
    run through :meth:`Rules.move_obeys_rules`, which is the only place king
    safety is decided.
    """

    __slots__ = ("_board", "_conditions")

    def __init__(self, board: Board, conditions: GameConditions) -> None:
        self._board = board
        self._conditions = conditions

    # -- Public API ---------------------------------------------------------

    def legal_moves_by_square(self) -> LegalMoves:
        """Legal moves of every piece of the side to move, keyed by origin.

        Squares whose piece has no legal move are left out.
        """
        side = self._conditions.side_to_move
        result: LegalMoves = {}
        for sq in all_squares():
            if not self._board.is_occupied_by_side(sq, side):
                continue
            moves = self.legal_moves_from(sq)
            if moves:
                result[sq] = moves
        return result

    def legal_moves_from(self, square: Square) -> MoveTable:
        """Legal moves of the piece on *square*, keyed by (start, end)."""
        piece = self._board[square]
        if piece is None:
            return {}

        result: MoveTable = {}
        for movement in self._candidates(piece, square):
            if Rules.move_obeys_rules(self._board, movement, piece.side):
                result[movement.key] = movement
        return result

    # -- Candidate generation ----------------------------------------------

    def _candidates(self, piece: Piece, square: Square) -> list[Movement]:
        return self._GENERATORS[piece.piece_type](self, piece, square)

    def _gen_sliding(self, piece: Piece, square: Square) -> list[Movement]:
        board = self._board
        moves: list[Movement] = []
        for offset in _SLIDING_DIRS[piece.piece_type]:
            to_sq = square + offset
            while to_sq.is_valid():
                target = board[to_sq]
                if target is None:
                    moves.append(Movement.normal(square, to_sq))
                    to_sq = to_sq + offset
                    continue
                if target.side != piece.side:
                    moves.append(Movement.normal(square, to_sq))
                break
        return moves

    def _gen_knight(self, piece: Piece, square: Square) -> list[Movement]:
        return self._gen_steps(piece, square, KNIGHT_OFFSETS)

    def _gen_king(self, piece: Piece, square: Square) -> list[Movement]:
        moves = self._gen_steps(piece, square, SURROUNDING_OFFSETS)
        moves.extend(self._gen_castling(piece.side, square))
        return moves

    def _gen_steps(
        self,
        piece: Piece,
        square: Square,
        offsets: tuple[Square, ...],
    ) -> list[Movement]:
        board = self._board
        moves: list[Movement] = []
        for offset in offsets:
            to_sq = square + offset
            if to_sq.is_valid() and not board.is_occupied_by_side(to_sq, piece.side):
                moves.append(Movement.normal(square, to_sq))
        return moves

    def _gen_castling(self, side: Side, king_sq: Square) -> list[Movement]:
        back_rank = side.back_rank
        if king_sq != Square(_KING_FILE, back_rank):
            return []

        board = self._board
        moves: list[Movement] = []
        for kingside in (True, False):
            if not self._conditions.can_castle(side, kingside):
                continue

            rook_sq = Square(8 if kingside else 1, back_rank)
            rook = board[rook_sq]
            if (
                rook is None
                or rook.side != side
                or rook.piece_type != PieceType.ROOK
            ):
                continue

            step = 1 if kingside else -1
            between = [
                Square(file, back_rank)
                for file in range(_KING_FILE + step, rook_sq.file, step)
            ]
            if any(board.is_occupied(sq) for sq in between):
                continue

            end_sq = king_sq.offset(2 * step, 0)
            king_path = (king_sq, king_sq.offset(step, 0), end_sq)
            if any(Rules.is_square_attacked(sq, board, side) for sq in king_path):
                continue

            moves.append(Movement.castling(king_sq, end_sq, rook_sq))
        return moves

    def _gen_pawn(self, piece: Piece, square: Square) -> list[Movement]:
        board = self._board
        side = piece.side
        forward = side.forward_direction
        last_rank = side.complement.back_rank
        moves: list[Movement] = []

        def add(to_sq: Square) -> None:
            if to_sq.rank == last_rank:
                moves.append(Movement.promotion_move(square, to_sq))
            else:
                moves.append(Movement.normal(square, to_sq))

        one_step = square.offset(0, forward)
        if one_step.is_valid() and not board.is_occupied(one_step):
            add(one_step)
            if square.rank == side.pawn_rank:
                two_step = one_step.offset(0, forward)
                if not board.is_occupied(two_step):
                    moves.append(Movement.normal(square, two_step))

        for file_delta in (-1, 1):
            cap_sq = square.offset(file_delta, forward)
            if cap_sq.is_valid() and board.is_occupied_by_side(cap_sq, side.complement):
                add(cap_sq)

        ep_sq = self._conditions.en_passant
        if (
            ep_sq.is_valid()
            and ep_sq.rank == square.rank + forward
            and abs(ep_sq.file - square.file) == 1
        ):
            captured_sq = ep_sq.offset(0, -forward)
            captured = board[captured_sq]
            if (
                not board.is_occupied(ep_sq)
                and captured is not None
                and captured.side == side.complement
                and captured.piece_type == PieceType.PAWN
            ):
                moves.append(Movement.en_passant(square, ep_sq, captured_sq))

        return moves

    # Dispatch on piece kind; entries are plain functions taking ``self``.
    _GENERATORS: ClassVar[
        dict[PieceType, Callable[[MoveGenerator, Piece, Square], list[Movement]]]
    ] = {
        PieceType.PAWN: _gen_pawn,
        PieceType.KNIGHT: _gen_knight,
        PieceType.BISHOP: _gen_sliding,
        PieceType.ROOK: _gen_sliding,
        PieceType.QUEEN: _gen_sliding,
        PieceType.KING: _gen_king,
    }
