"""Tests for Board."""

import pytest

from chessline.core.board import Board
from chessline.core.enums import PieceType, Side
from chessline.core.movement import Movement, MovementError
from chessline.core.piece import Piece
from chessline.core.types import (
    A1, B1, C1, D1, E1, F1, G1, H1,
    A8, B8, C8, D8, E8, F8, G8, H8,
    C5, C6, B5, E2, E4,
    INVALID_SQUARE,
    Square,
)

WHITE_KING = Piece(Side.WHITE, PieceType.KING)
BLACK_KING = Piece(Side.BLACK, PieceType.KING)


class TestBoardInitial:
    def test_white_king_position(self) -> None:
        board = Board.initial()
        assert board[E1] == WHITE_KING

    def test_black_king_position(self) -> None:
        board = Board.initial()
        assert board[E8] == BLACK_KING

    def test_white_back_rank(self) -> None:
        board = Board.initial()
        expected = [
            (A1, PieceType.ROOK), (B1, PieceType.KNIGHT), (C1, PieceType.BISHOP),
            (D1, PieceType.QUEEN), (E1, PieceType.KING), (F1, PieceType.BISHOP),
            (G1, PieceType.KNIGHT), (H1, PieceType.ROOK),
        ]
        for sq, pt in expected:
            assert board[sq] == Piece(Side.WHITE, pt), f"Mismatch at square {sq}"

    def test_black_back_rank(self) -> None:
        board = Board.initial()
        expected = [
            (A8, PieceType.ROOK), (B8, PieceType.KNIGHT), (C8, PieceType.BISHOP),
            (D8, PieceType.QUEEN), (E8, PieceType.KING), (F8, PieceType.BISHOP),
            (G8, PieceType.KNIGHT), (H8, PieceType.ROOK),
        ]
        for sq, pt in expected:
            assert board[sq] == Piece(Side.BLACK, pt), f"Mismatch at square {sq}"

    def test_pawns(self) -> None:
        board = Board.initial()
        for file in range(1, 9):
            assert board[Square(file, 2)] == Piece(Side.WHITE, PieceType.PAWN)
            assert board[Square(file, 7)] == Piece(Side.BLACK, PieceType.PAWN)

    def test_empty_middle(self) -> None:
        board = Board.initial()
        for rank in range(3, 7):
            for file in range(1, 9):
                assert board[Square(file, rank)] is None

    def test_piece_counts(self) -> None:
        board = Board.initial()
        assert len(board.occupied_squares(Side.WHITE)) == 16
        assert len(board.occupied_squares(Side.BLACK)) == 16
        assert len(board.occupied_squares()) == 32


class TestBoardOperations:
    def test_set_and_get(self) -> None:
        board = Board()
        piece = Piece(Side.WHITE, PieceType.PAWN)
        board[E4] = piece
        assert board[E4] == piece
        assert not board.is_occupied(E2)

    def test_occupied_by_side(self) -> None:
        board = Board.initial()
        assert board.is_occupied_by_side(E2, Side.WHITE)
        assert not board.is_occupied_by_side(E2, Side.BLACK)
        assert not board.is_occupied_by_side(E4, Side.WHITE)

    def test_off_board_read_is_empty(self) -> None:
        board = Board.initial()
        assert board[INVALID_SQUARE] is None
        assert not board.is_occupied(Square(9, 9))

    def test_off_board_write_raises(self) -> None:
        board = Board()
        with pytest.raises(ValueError, match="off the board"):
            board[Square(0, 1)] = WHITE_KING

    def test_side_none_piece_rejected(self) -> None:
        board = Board()
        with pytest.raises(ValueError):
            board[E4] = Piece(Side.NONE, PieceType.PAWN)

    def test_second_king_rejected(self) -> None:
        board = Board.from_pieces({E1: WHITE_KING})
        with pytest.raises(ValueError, match="already has a king"):
            board[E4] = WHITE_KING

    def test_copy_is_equal(self) -> None:
        board = Board.initial()
        assert board.copy() == board

    def test_copy_independence(self) -> None:
        board = Board.initial()
        copy = board.copy()
        copy[E1] = None
        assert board != copy
        assert board[E1] == WHITE_KING
        assert board.king_square(Side.WHITE) == E1
        assert not copy.has_king(Side.WHITE)

    def test_copy_owns_its_pieces(self) -> None:
        board = Board.initial()
        copy = board.copy()
        assert copy[E2] == board[E2]
        assert copy[E2] is not board[E2]

    def test_king_square(self) -> None:
        board = Board.initial()
        assert board.king_square(Side.WHITE) == E1
        assert board.king_square(Side.BLACK) == E8

    def test_king_square_missing_raises(self) -> None:
        board = Board()
        with pytest.raises(ValueError, match="No WHITE king"):
            board.king_square(Side.WHITE)

    def test_clear(self) -> None:
        board = Board.initial()
        board.clear()
        assert board.occupied_squares() == []
        assert not board.has_king(Side.BLACK)

    def test_equality_ignores_history(self) -> None:
        moved = Board.initial()
        moved.move_piece(Movement.normal(G1, Square(6, 3)))
        moved.move_piece(Movement.normal(Square(6, 3), G1))
        assert moved == Board.initial()

    def test_repr_diagram_uses_piece_letters(self) -> None:
        lines = repr(Board.initial()).splitlines()
        assert lines[0] == "8 r n b q k b n r"
        assert lines[2] == "6 . . . . . . . ."
        assert lines[7] == "1 R N B Q K B N R"
        assert lines[8] == "  a b c d e f g h"


class TestMovePiece:
    def test_normal_move_relocates(self) -> None:
        board = Board.initial()
        board.move_piece(Movement.normal(E2, E4))
        assert board[E2] is None
        assert board[E4] == Piece(Side.WHITE, PieceType.PAWN)

    def test_capture_overwrites(self) -> None:
        board = Board.from_pieces(
            {E1: WHITE_KING, E8: BLACK_KING, D1: Piece(Side.WHITE, PieceType.ROOK),
             D8: Piece(Side.BLACK, PieceType.QUEEN)}
        )
        board.move_piece(Movement.normal(D1, D8))
        assert board[D8] == Piece(Side.WHITE, PieceType.ROOK)
        assert board[D1] is None

    def test_king_cache_follows_king(self) -> None:
        board = Board.from_pieces({E1: WHITE_KING, E8: BLACK_KING})
        board.move_piece(Movement.normal(E1, F1))
        assert board.king_square(Side.WHITE) == F1

    def test_kingside_castling(self) -> None:
        board = Board.from_pieces(
            {E1: WHITE_KING, H1: Piece(Side.WHITE, PieceType.ROOK), E8: BLACK_KING}
        )
        board.move_piece(Movement.castling(E1, G1, H1))
        assert board[G1] == WHITE_KING
        assert board[F1] == Piece(Side.WHITE, PieceType.ROOK)
        assert board[E1] is None
        assert board[H1] is None

    def test_queenside_castling_black(self) -> None:
        board = Board.from_pieces(
            {E1: WHITE_KING, E8: BLACK_KING, A8: Piece(Side.BLACK, PieceType.ROOK)}
        )
        board.move_piece(Movement.castling(E8, C8, A8))
        assert board[C8] == BLACK_KING
        assert board[D8] == Piece(Side.BLACK, PieceType.ROOK)
        assert board[A8] is None

    def test_castling_without_rook_raises(self) -> None:
        board = Board.from_pieces({E1: WHITE_KING, E8: BLACK_KING})
        with pytest.raises(MovementError, match="No rook"):
            board.move_piece(Movement.castling(E1, G1, H1))
        assert board[E1] == WHITE_KING

    def test_en_passant_removes_captured_pawn(self) -> None:
        board = Board.from_pieces(
            {
                E1: WHITE_KING,
                E8: BLACK_KING,
                B5: Piece(Side.WHITE, PieceType.PAWN),
                C5: Piece(Side.BLACK, PieceType.PAWN),
            }
        )
        board.move_piece(Movement.en_passant(B5, C6, C5))
        assert board[C6] == Piece(Side.WHITE, PieceType.PAWN)
        assert board[C5] is None
        assert board[B5] is None

    def test_promotion_places_elected_piece(self) -> None:
        a7 = Square(1, 7)
        board = Board.from_pieces(
            {E1: WHITE_KING, E8: BLACK_KING, a7: Piece(Side.WHITE, PieceType.PAWN)}
        )
        board.move_piece(Movement.promotion_move(a7, A8, PieceType.QUEEN))
        assert board[A8] == Piece(Side.WHITE, PieceType.QUEEN)
        assert board[a7] is None

    def test_promotion_without_election_raises(self) -> None:
        a7 = Square(1, 7)
        board = Board.from_pieces(
            {E1: WHITE_KING, E8: BLACK_KING, a7: Piece(Side.WHITE, PieceType.PAWN)}
        )
        with pytest.raises(MovementError, match="no elected piece"):
            board.move_piece(Movement.promotion_move(a7, A8))
        assert board[a7] == Piece(Side.WHITE, PieceType.PAWN)

    def test_move_from_empty_square_raises(self) -> None:
        board = Board.initial()
        with pytest.raises(MovementError, match="No piece"):
            board.move_piece(Movement.normal(E4, Square(5, 5)))
