"""Shared pytest fixtures used across the test suite."""

from __future__ import annotations

from collections.abc import Callable

import pytest

from chessline.core.board import Board
from chessline.core.conditions import GameConditions
from chessline.core.enums import CastlingRights, PieceType, Side
from chessline.core.piece import Piece
from chessline.core.types import INVALID_SQUARE, Square, parse_square
from chessline.game.game import Game
from chessline.game.options import GameOptions

_PIECE_LETTERS: dict[str, PieceType] = {
    "p": PieceType.PAWN,
    "n": PieceType.KNIGHT,
    "b": PieceType.BISHOP,
    "r": PieceType.ROOK,
    "q": PieceType.QUEEN,
    "k": PieceType.KING,
}

_CASTLING_LETTERS: dict[str, CastlingRights] = {
    "K": CastlingRights.WHITE_KINGSIDE,
    "Q": CastlingRights.WHITE_QUEENSIDE,
    "k": CastlingRights.BLACK_KINGSIDE,
    "q": CastlingRights.BLACK_QUEENSIDE,
}

Position = tuple[Board, GameConditions]


def board_from_placement(placement: str) -> Board:
    """Board from rank rows top (rank 8) to bottom, e.g. ``"4k3/8/.../4K3"``.

    Digits count empty squares; uppercase letters are White pieces.
    """
    board = Board()
    for row_idx, row in enumerate(placement.split("/")):
        rank = 8 - row_idx
        file = 1
        for ch in row:
            if ch.isdigit():
                file += int(ch)
                continue
            side = Side.WHITE if ch.isupper() else Side.BLACK
            board[Square(file, rank)] = Piece(side, _PIECE_LETTERS[ch.lower()])
            file += 1
    return board


def make_position(
    placement: str,
    side: str = "w",
    castling: str = "-",
    en_passant: str = "-",
    half_move_clock: int = 0,
    full_move_number: int = 1,
) -> Position:
    rights = CastlingRights.NONE
    for ch in castling.replace("-", ""):
        rights |= _CASTLING_LETTERS[ch]
    conditions = GameConditions(
        side_to_move=Side.WHITE if side == "w" else Side.BLACK,
        castling=rights,
        en_passant=INVALID_SQUARE if en_passant == "-" else parse_square(en_passant),
        half_move_clock=half_move_clock,
        full_move_number=full_move_number,
    )
    return board_from_placement(placement), conditions


@pytest.fixture
def position() -> Callable[..., Position]:
    """Builder for (board, conditions) pairs from a compact placement string."""
    return make_position


@pytest.fixture
def game_at() -> Callable[..., Game]:
    """Builder for a Game starting from a compact placement string."""

    def build(placement: str, options: GameOptions | None = None, **kwargs) -> Game:
        board, conditions = make_position(placement, **kwargs)
        return Game(board, conditions, options)

    return build
