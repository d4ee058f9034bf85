"""Core enumerations and flags for chess domain."""

from __future__ import annotations

from enum import IntEnum, IntFlag, auto


class Side(IntEnum):
    """Side owning a piece or holding the move."""

    WHITE = 0
    BLACK = 1
    NONE = 2

    @property
    def complement(self) -> Side:
        if self == Side.NONE:
            return Side.NONE
        return Side(1 - self.value)

    @property
    def forward_direction(self) -> int:
        """Rank delta of a pawn step: +1 for White, -1 for Black."""
        if self == Side.WHITE:
            return 1
        if self == Side.BLACK:
            return -1
        return 0

    @property
    def pawn_rank(self) -> int:
        """Rank (1-8) on which this side's pawns start."""
        if self == Side.WHITE:
            return 2
        if self == Side.BLACK:
            return 7
        raise ValueError("Side.NONE has no pawn rank")

    @property
    def back_rank(self) -> int:
        """Rank (1-8) holding this side's king and rooks at the start."""
        if self == Side.WHITE:
            return 1
        if self == Side.BLACK:
            return 8
        raise ValueError("Side.NONE has no back rank")

    def __str__(self) -> str:
        return self.name.lower()


class PieceType(IntEnum):
    """Chess piece types ordered by conventional value."""

    PAWN = 1
    KNIGHT = 2
    BISHOP = 3
    ROOK = 4
    QUEEN = 5
    KING = 6


class MoveKind(IntEnum):
    """Special move classification."""

    NORMAL = 0
    CASTLING = 1
    EN_PASSANT = 2
    PROMOTION = 3


class CastlingRights(IntFlag):
    """Bitmask for castling availability."""

    NONE = 0
    WHITE_KINGSIDE = auto()
    WHITE_QUEENSIDE = auto()
    BLACK_KINGSIDE = auto()
    BLACK_QUEENSIDE = auto()

    WHITE_BOTH = WHITE_KINGSIDE | WHITE_QUEENSIDE
    BLACK_BOTH = BLACK_KINGSIDE | BLACK_QUEENSIDE
    ALL = WHITE_BOTH | BLACK_BOTH

    @classmethod
    def for_side(cls, side: Side, kingside: bool) -> CastlingRights:
        """Flag for one side and one rook wing."""
        if side == Side.WHITE:
            return cls.WHITE_KINGSIDE if kingside else cls.WHITE_QUEENSIDE
        if side == Side.BLACK:
            return cls.BLACK_KINGSIDE if kingside else cls.BLACK_QUEENSIDE
        return cls.NONE

    @classmethod
    def both(cls, side: Side) -> CastlingRights:
        if side == Side.WHITE:
            return cls.WHITE_BOTH
        if side == Side.BLACK:
            return cls.BLACK_BOTH
        return cls.NONE
