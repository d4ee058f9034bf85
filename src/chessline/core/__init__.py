"""Core domain layer — pure chess rules with zero external dependencies.

Quick start::

    from chessline.core import Board, GameConditions, MoveGenerator

    gen = MoveGenerator(Board.initial(), GameConditions.standard())
    for moves in gen.legal_moves_by_square().values():
        for movement in moves.values():
            print(movement)
"""

from chessline.core.board import Board
from chessline.core.conditions import GameConditions
from chessline.core.enums import CastlingRights, MoveKind, PieceType, Side
from chessline.core.move_generator import (
    LegalMoves,
    LegalMovesView,
    MoveGenerator,
    MoveTable,
)
from chessline.core.movement import Movement, MovementError
from chessline.core.piece import PROMOTION_TYPES, Piece
from chessline.core.rules import Rules
from chessline.core.types import INVALID_SQUARE, Square, parse_square

__all__ = [
    # Enums / flags
    "CastlingRights",
    "MoveKind",
    "PieceType",
    "Side",
    # Types / helpers
    "INVALID_SQUARE",
    "PROMOTION_TYPES",
    "Square",
    "parse_square",
    # Domain objects
    "Board",
    "GameConditions",
    "LegalMoves",
    "LegalMovesView",
    "MoveGenerator",
    "MoveTable",
    "Movement",
    "MovementError",
    "Piece",
    "Rules",
]
