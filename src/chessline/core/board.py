"""Board - piece placement on an 8x8 board."""

from __future__ import annotations

from collections.abc import Iterable, Mapping

from chessline.core.enums import MoveKind, PieceType, Side
from chessline.core.movement import Movement, MovementError
from chessline.core.piece import Piece
from chessline.core.types import Square, all_squares

_BACK_RANK: tuple[PieceType, ...] = (
    PieceType.ROOK,
    PieceType.KNIGHT,
    PieceType.BISHOP,
    PieceType.QUEEN,
    PieceType.KING,
    PieceType.BISHOP,
    PieceType.KNIGHT,
    PieceType.ROOK,
)


def _index(sq: Square) -> int:
    if not sq.is_valid():
        raise ValueError(f"Square {sq!r} is off the board")
    return (sq.rank - 1) * 8 + (sq.file - 1)


class Board:
    """Mutable 64-square board with a king-square cache.

    Boards stored in a game's history are treated as frozen: moves are
    applied to a :meth:`copy`, never to a published board.
    """

    __slots__ = ("_squares", "_king_squares")

    def __init__(self) -> None:
        self._squares: list[Piece | None] = [None] * 64
        # [side] -> king square cache (None if king missing).
        self._king_squares: list[Square | None] = [None, None]

    # -- Element access -----------------------------------------------------

    def __getitem__(self, sq: Square) -> Piece | None:
        if not sq.is_valid():
            return None
        return self._squares[_index(sq)]

    def __setitem__(self, sq: Square, piece: Piece | None) -> None:
        idx = _index(sq)
        old_piece = self._squares[idx]

        if old_piece is not None and old_piece.piece_type == PieceType.KING:
            if self._king_squares[old_piece.side] == sq:
                self._king_squares[old_piece.side] = None

        if piece is not None:
            if piece.side == Side.NONE:
                raise ValueError("A piece on the board must belong to a side")
            if piece.piece_type == PieceType.KING:
                cached = self._king_squares[piece.side]
                if cached is not None and cached != sq:
                    raise ValueError(
                        f"{piece.side.name} already has a king on {cached.name}"
                    )
                self._king_squares[piece.side] = sq

        self._squares[idx] = piece

    def is_occupied(self, sq: Square) -> bool:
        return self[sq] is not None

    def is_occupied_by_side(self, sq: Square, side: Side) -> bool:
        piece = self[sq]
        return piece is not None and piece.side == side

    # -- Query helpers ------------------------------------------------------

    def king_square(self, side: Side) -> Square:
        """Return the single king square for *side*."""
        if side == Side.NONE:
            raise ValueError("Side.NONE has no king")
        sq = self._king_squares[side]
        if sq is None:
            raise ValueError(f"No {side.name} king on board")
        return sq

    def has_king(self, side: Side) -> bool:
        return side != Side.NONE and self._king_squares[side] is not None

    def occupied_squares(self, side: Side | None = None) -> list[Square]:
        """Occupied squares, optionally only those held by *side*."""
        return [
            sq
            for sq in all_squares()
            if (piece := self[sq]) is not None and (side is None or piece.side == side)
        ]

    # -- Mutation / copying -------------------------------------------------

    def move_piece(self, movement: Movement) -> None:
        """Relocate the piece at ``movement.start`` and apply any side effect.

        Legality is the caller's concern; the piece on ``end`` (if any) is
        overwritten.
        """
        piece = self[movement.start]
        if piece is None:
            raise MovementError(f"No piece on {movement.start.name} to move")

        rook: Piece | None = None
        if movement.kind == MoveKind.CASTLING:
            rook = self[movement.special_square]
            if rook is None or rook.piece_type != PieceType.ROOK:
                raise MovementError(
                    f"No rook found on {movement.special_square.name} for castling"
                )
            rook_end = movement.rook_end_square()
        elif movement.kind == MoveKind.PROMOTION and movement.promotion is None:
            raise MovementError(f"Promotion {movement} has no elected piece")

        self[movement.start] = None
        self[movement.end] = piece

        if movement.kind == MoveKind.CASTLING:
            self[movement.special_square] = None
            self[rook_end] = rook
        elif movement.kind == MoveKind.EN_PASSANT:
            self[movement.special_square] = None
        elif movement.kind == MoveKind.PROMOTION:
            assert movement.promotion is not None
            self[movement.end] = Piece(piece.side, movement.promotion)

    def copy(self) -> Board:
        b = Board()
        b._squares = [None if p is None else p.copy() for p in self._squares]
        b._king_squares = self._king_squares.copy()
        return b

    def clear(self) -> None:
        self._squares = [None] * 64
        self._king_squares = [None, None]

    # -- Factory ------------------------------------------------------------

    @classmethod
    def initial(cls) -> Board:
        """Standard starting position."""
        b = cls()
        for file in range(1, 9):
            b[Square(file, 2)] = Piece(Side.WHITE, PieceType.PAWN)
            b[Square(file, 7)] = Piece(Side.BLACK, PieceType.PAWN)

        for file, pt in enumerate(_BACK_RANK, start=1):
            b[Square(file, 1)] = Piece(Side.WHITE, pt)
            b[Square(file, 8)] = Piece(Side.BLACK, pt)
        return b

    @classmethod
    def from_pieces(
        cls,
        pieces: Mapping[Square, Piece] | Iterable[tuple[Square, Piece]],
    ) -> Board:
        """Custom setup, e.g. for puzzles."""
        pairs = pieces.items() if isinstance(pieces, Mapping) else pieces
        b = cls()
        for sq, piece in pairs:
            b[sq] = piece
        return b

    # -- Dunder helpers -----------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self._squares == other._squares

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        rows: list[str] = []
        for rank in range(8, 0, -1):
            row = []
            for file in range(1, 9):
                p = self[Square(file, rank)]
                row.append(str(p) if p else ".")
            rows.append(f"{rank} {' '.join(row)}")
        rows.append("  a b c d e f g h")
        return "\n".join(rows)
