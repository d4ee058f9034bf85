"""Game configuration: draw handling and rule thresholds."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum, auto

from chessline.core.rules import FIFTY_MOVE_LIMIT, REPETITION_LIMIT


class DrawPolicy(IntEnum):
    """What a rule-based draw (repetition, fifty moves) does to the game."""

    CONTINUE = auto()  # flag the half-move, keep generating legal moves
    END_GAME = auto()  # flag the half-move and offer no further moves


@dataclass(frozen=True, slots=True)
class GameOptions:
    """Immutable per-game settings.

    Args:
        draw_policy: Whether repetition/fifty-move draws stop play.
        fifty_move_limit: Half-move clock value that triggers the draw.
        repetition_limit: Occurrences of one board that trigger the draw.
    """

    draw_policy: DrawPolicy = DrawPolicy.CONTINUE
    fifty_move_limit: int = FIFTY_MOVE_LIMIT
    repetition_limit: int = REPETITION_LIMIT

    def __post_init__(self) -> None:
        if self.fifty_move_limit < 1:
            raise ValueError(
                f"fifty_move_limit must be positive, got {self.fifty_move_limit}"
            )
        if self.repetition_limit < 2:
            raise ValueError(
                f"repetition_limit must be at least 2, got {self.repetition_limit}"
            )

    # Presets
    @classmethod
    def standard(cls) -> GameOptions:
        return cls()

    @classmethod
    def strict_draws(cls) -> GameOptions:
        """Rule-based draws end the game immediately."""
        return cls(draw_policy=DrawPolicy.END_GAME)
