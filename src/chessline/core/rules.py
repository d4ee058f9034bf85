"""Stateless rule predicates: attacks, check, legality, game-end detection."""

from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING

from chessline.core.enums import MoveKind, PieceType, Side
from chessline.core.movement import Movement
from chessline.core.types import KNIGHT_OFFSETS, SURROUNDING_OFFSETS, Square

if TYPE_CHECKING:
    from chessline.core.board import Board
    from chessline.core.conditions import GameConditions
    from chessline.game.game import Game

FIFTY_MOVE_LIMIT = 50
REPETITION_LIMIT = 3


class Rules:
    """Static rule-checker over a :class:`Board` and its conditions."""

    # ── Attacks / check ──────────────────────────────────────────────────

    @staticmethod
    def is_square_attacked(square: Square, board: Board, friendly_side: Side) -> bool:
        """Is *square* attacked by the opponent of *friendly_side*?"""
        enemy_side = friendly_side.complement
        friendly_forward = friendly_side.forward_direction

        for offset in SURROUNDING_OFFSETS:
            is_diagonal = offset.file != 0 and offset.rank != 0
            to_sq = square + offset
            distance = 1
            while to_sq.is_valid():
                piece = board[to_sq]
                if piece is None:
                    to_sq = to_sq + offset
                    distance += 1
                    continue
                if piece.side != enemy_side:
                    break

                pt = piece.piece_type
                if pt == PieceType.QUEEN:
                    return True
                if pt == PieceType.BISHOP and is_diagonal:
                    return True
                if pt == PieceType.ROOK and not is_diagonal:
                    return True
                if pt == PieceType.KING and distance == 1:
                    return True
                if (
                    pt == PieceType.PAWN
                    and distance == 1
                    and is_diagonal
                    and offset.rank == friendly_forward
                ):
                    return True
                break

        for offset in KNIGHT_OFFSETS:
            piece = board[square + offset]
            if (
                piece is not None
                and piece.side == enemy_side
                and piece.piece_type == PieceType.KNIGHT
            ):
                return True

        return False

    @staticmethod
    def is_player_in_check(board: Board, side: Side) -> bool:
        return Rules.is_square_attacked(board.king_square(side), board, side)

    # ── Legality ─────────────────────────────────────────────────────────

    @staticmethod
    def move_obeys_rules(board: Board, movement: Movement, moved_side: Side) -> bool:
        """Whether *movement* may be played without exposing the mover's king.

        Geometry is not checked here; callers pass pseudo-legal candidates.
        """
        if not movement.start.is_valid() or not movement.end.is_valid():
            return False
        target = board[movement.end]
        if target is not None and (
            target.piece_type == PieceType.KING or target.side == moved_side
        ):
            return False

        # The promoted piece blocks exactly like the pawn would.
        if movement.kind == MoveKind.PROMOTION and movement.promotion is None:
            movement = Movement.normal(movement.start, movement.end)

        resulting_board = board.copy()
        resulting_board.move_piece(movement)
        return not Rules.is_player_in_check(resulting_board, moved_side)

    # ── Game end ─────────────────────────────────────────────────────────

    @staticmethod
    def is_player_checkmated(board: Board, side: Side, num_legal_moves: int) -> bool:
        return num_legal_moves <= 0 and Rules.is_player_in_check(board, side)

    @staticmethod
    def is_player_stalemated(board: Board, side: Side, num_legal_moves: int) -> bool:
        return num_legal_moves <= 0 and not Rules.is_player_in_check(board, side)

    @staticmethod
    def is_repetition(
        boards: Iterable[Board], board: Board, limit: int = REPETITION_LIMIT
    ) -> bool:
        """Whether *board* occurs at least *limit* times among *boards*.

        Boards compare by piece placement only.
        """
        count = 0
        for other in boards:
            if other == board:
                count += 1
                if count >= limit:
                    return True
        return False

    @staticmethod
    def is_threefold_repetition(game: Game, limit: int = REPETITION_LIMIT) -> bool:
        """Whether the current board occurred *limit* times up to the head."""
        return Rules.is_repetition(
            game.board_timeline.history, game.current_board, limit
        )

    @staticmethod
    def is_fifty_move_draw(
        conditions: GameConditions, limit: int = FIFTY_MOVE_LIMIT
    ) -> bool:
        """No capture or pawn move in the last *limit* half-moves."""
        return conditions.half_move_clock >= limit
