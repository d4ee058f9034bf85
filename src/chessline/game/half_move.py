"""HalfMove — the record of one ply in a game's history."""

from __future__ import annotations

from dataclasses import dataclass

from chessline.core.movement import Movement
from chessline.core.piece import Piece


@dataclass(frozen=True, slots=True)
class HalfMove:
    """A single entry in the half-move history."""

    piece: Piece
    movement: Movement
    captured: bool = False
    caused_check: bool = False
    caused_stalemate: bool = False
    caused_checkmate: bool = False
    caused_threefold_repetition: bool = False
    caused_fifty_move_draw: bool = False

    @property
    def ends_game(self) -> bool:
        return (
            self.caused_stalemate
            or self.caused_checkmate
            or self.caused_threefold_repetition
            or self.caused_fifty_move_draw
        )

    @property
    def is_draw(self) -> bool:
        return self.ends_game and not self.caused_checkmate

    def __str__(self) -> str:
        sep = "x" if self.captured else "-"
        text = f"{self.piece} {self.movement.start}{sep}{self.movement.end}"
        if self.caused_checkmate:
            text += "#"
        elif self.caused_check:
            text += "+"
        return text
