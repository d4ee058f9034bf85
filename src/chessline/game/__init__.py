"""Game layer — move execution and rewindable history."""

from chessline.game.game import Game, count_legal_moves
from chessline.game.half_move import HalfMove
from chessline.game.options import DrawPolicy, GameOptions
from chessline.game.timeline import Timeline

__all__ = [
    "DrawPolicy",
    "Game",
    "GameOptions",
    "HalfMove",
    "Timeline",
    "count_legal_moves",
]
