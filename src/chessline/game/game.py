"""Game — executes moves and keeps the rewindable history of a chess game.

Four timelines advance together:

* ``board_timeline`` / ``conditions_timeline`` / ``legal_moves_timeline``
  start with the initial position, so entry ``i + 1`` is the state reached
  by half-move ``i``;
* ``half_move_timeline`` starts empty.
"""

from __future__ import annotations

import logging
from types import MappingProxyType

from chessline.core.board import Board
from chessline.core.conditions import GameConditions
from chessline.core.enums import MoveKind, Side
from chessline.core.move_generator import LegalMoves, LegalMovesView, MoveGenerator
from chessline.core.movement import Movement, MovementError
from chessline.core.piece import PROMOTION_TYPES
from chessline.core.rules import Rules
from chessline.core.types import Square
from chessline.game.half_move import HalfMove
from chessline.game.options import DrawPolicy, GameOptions
from chessline.game.timeline import Timeline

_LOGGER = logging.getLogger(__name__)


def count_legal_moves(legal_moves: LegalMovesView) -> int:
    return sum(len(moves) for moves in legal_moves.values())


def _read_only(legal_moves: LegalMoves) -> LegalMovesView:
    return MappingProxyType(
        {sq: MappingProxyType(moves) for sq, moves in legal_moves.items()}
    )


class Game:
    """A chess game from a starting position, with full move history.

    Legality is decided once per position: the legal-move table stored for
    the current head is the only thing :meth:`try_execute_move` consults.

    Designed to be driven from a single thread; every call runs to
    completion before the next one.
    """

    __slots__ = (
        "board_timeline",
        "conditions_timeline",
        "half_move_timeline",
        "legal_moves_timeline",
        "options",
    )

    def __init__(
        self,
        starting_board: Board | None = None,
        starting_conditions: GameConditions | None = None,
        options: GameOptions | None = None,
    ) -> None:
        board = Board.initial() if starting_board is None else starting_board.copy()
        conditions = (
            GameConditions.standard()
            if starting_conditions is None
            else starting_conditions
        )
        for side in (Side.WHITE, Side.BLACK):
            if not board.has_king(side):
                raise ValueError(f"Starting board has no {side.name} king")
        if conditions.side_to_move == Side.NONE:
            raise ValueError("Starting conditions must name a side to move")

        self.options = options if options is not None else GameOptions()
        self.board_timeline: Timeline[Board] = Timeline([board])
        self.conditions_timeline: Timeline[GameConditions] = Timeline([conditions])
        self.half_move_timeline: Timeline[HalfMove] = Timeline()
        self.legal_moves_timeline: Timeline[LegalMovesView] = Timeline(
            [_read_only(MoveGenerator(board, conditions).legal_moves_by_square())]
        )

    # ── Current state ────────────────────────────────────────────────────

    @property
    def current_board(self) -> Board:
        """Copy of the board at the head; editing it does not touch the game."""
        return self._head_board().copy()

    @property
    def current_conditions(self) -> GameConditions:
        conditions = self.conditions_timeline.current
        assert conditions is not None
        return conditions

    @property
    def current_legal_moves(self) -> LegalMovesView:
        """Read-only legal-move table of the current position."""
        legal_moves = self.legal_moves_timeline.current
        assert legal_moves is not None
        return legal_moves

    def _head_board(self) -> Board:
        board = self.board_timeline.current
        assert board is not None
        return board

    @property
    def latest_half_move(self) -> HalfMove | None:
        """Half-move that produced the current position (None at the start)."""
        return self.half_move_timeline.current

    @property
    def side_to_move(self) -> Side:
        return self.current_conditions.side_to_move

    @property
    def half_move_count(self) -> int:
        """Number of half-moves up to the head."""
        return self.half_move_timeline.head_index + 1

    @property
    def is_game_over(self) -> bool:
        return count_legal_moves(self.current_legal_moves) == 0

    # ── History access ───────────────────────────────────────────────────

    def board_at(self, index: int) -> Board:
        """Copy of the board stored at timeline *index* (0 = starting position)."""
        return self.board_timeline[index].copy()

    def conditions_at(self, index: int) -> GameConditions:
        return self.conditions_timeline[index]

    def half_move_at(self, index: int) -> HalfMove:
        return self.half_move_timeline[index]

    # ── Legal-move queries ───────────────────────────────────────────────

    def get_legal_move(self, start: Square, end: Square) -> Movement | None:
        """Cached legal move from *start* to *end*, if any."""
        moves = self.current_legal_moves.get(start)
        if moves is None:
            return None
        return moves.get((start, end))

    def legal_moves_for_piece(self, square: Square) -> list[Movement]:
        """Cached legal moves of the piece standing on *square*."""
        moves = self.current_legal_moves.get(square)
        if moves is None:
            return []
        return list(moves.values())

    def legal_movements(self) -> list[Movement]:
        """Every legal move, with each promotion expanded per elected piece."""
        movements: list[Movement] = []
        for moves in self.current_legal_moves.values():
            for movement in moves.values():
                if movement.kind == MoveKind.PROMOTION:
                    movements.extend(
                        movement.with_promotion(pt) for pt in PROMOTION_TYPES
                    )
                else:
                    movements.append(movement)
        return movements

    # ── Move execution ───────────────────────────────────────────────────

    def try_execute_move(self, movement: Movement) -> bool:
        """Validate *movement* against the legal-move cache and play it.

        Promotions must carry an elected piece. Returns False, leaving the
        game untouched, when the move is rejected.
        """
        validated = self.get_legal_move(movement.start, movement.end)
        if validated is None:
            _LOGGER.debug("Rejected illegal move %s", movement)
            return False

        if validated.kind == MoveKind.PROMOTION:
            if movement.promotion is None:
                _LOGGER.debug(
                    "Rejected promotion %s without an elected piece", movement
                )
                return False
            try:
                validated = validated.with_promotion(movement.promotion)
            except MovementError as exc:
                _LOGGER.debug("Rejected promotion %s: %s", movement, exc)
                return False

        board_before = self._head_board()
        conditions_before = self.current_conditions
        moved_piece = board_before[validated.start]
        assert moved_piece is not None

        resulting_board = board_before.copy()
        resulting_board.move_piece(validated)

        resulting_conditions = conditions_before.after_move(board_before, validated)
        side_to_move = resulting_conditions.side_to_move

        captured = (
            board_before[validated.end] is not None
            or validated.kind == MoveKind.EN_PASSANT
        )
        caused_check = Rules.is_player_in_check(resulting_board, side_to_move)

        caused_repetition = Rules.is_repetition(
            [*self.board_timeline.history, resulting_board],
            resulting_board,
            self.options.repetition_limit,
        )
        caused_fifty_move_draw = Rules.is_fifty_move_draw(
            resulting_conditions, self.options.fifty_move_limit
        )

        if self.options.draw_policy == DrawPolicy.END_GAME and (
            caused_repetition or caused_fifty_move_draw
        ):
            legal_moves: LegalMovesView = _read_only({})
        else:
            generator = MoveGenerator(resulting_board, resulting_conditions)
            legal_moves = _read_only(generator.legal_moves_by_square())
        num_legal_moves = count_legal_moves(legal_moves)

        half_move = HalfMove(
            piece=moved_piece,
            movement=validated,
            captured=captured,
            caused_check=caused_check,
            caused_stalemate=Rules.is_player_stalemated(
                resulting_board, side_to_move, num_legal_moves
            ),
            caused_checkmate=Rules.is_player_checkmated(
                resulting_board, side_to_move, num_legal_moves
            ),
            caused_threefold_repetition=caused_repetition,
            caused_fifty_move_draw=caused_fifty_move_draw,
        )

        self.board_timeline.add_next(resulting_board)
        self.conditions_timeline.add_next(resulting_conditions)
        self.legal_moves_timeline.add_next(legal_moves)
        self.half_move_timeline.add_next(half_move)

        _LOGGER.debug("Played %s (%d legal replies)", half_move, num_legal_moves)
        if half_move.ends_game:
            _LOGGER.info(
                "Half-move %d ends the game: checkmate=%s stalemate=%s "
                "repetition=%s fifty-move=%s",
                self.half_move_timeline.head_index,
                half_move.caused_checkmate,
                half_move.caused_stalemate,
                half_move.caused_threefold_repetition,
                half_move.caused_fifty_move_draw,
            )
        return True

    # ── Navigation ───────────────────────────────────────────────────────

    def reset_to_half_move_index(self, half_move_index: int) -> bool:
        """Move every timeline's head to just after *half_move_index*.

        -1 rewinds to the starting position. Later entries are kept until
        the next executed move overwrites them.
        """
        if len(self.half_move_timeline) == 0:
            _LOGGER.debug("Rewind to %d refused: no history", half_move_index)
            return False
        if not -1 <= half_move_index < len(self.half_move_timeline):
            _LOGGER.debug("Rewind to %d refused: out of range", half_move_index)
            return False

        self.board_timeline.head_index = half_move_index + 1
        self.conditions_timeline.head_index = half_move_index + 1
        self.legal_moves_timeline.head_index = half_move_index + 1
        self.half_move_timeline.head_index = half_move_index
        _LOGGER.debug("Rewound to half-move %d", half_move_index)
        return True

    # ── Copying ──────────────────────────────────────────────────────────

    def copy(self) -> Game:
        """Independent game sharing the (immutable) stored entries."""
        game = Game.__new__(Game)
        game.options = self.options
        game.board_timeline = self.board_timeline.copy()
        game.conditions_timeline = self.conditions_timeline.copy()
        game.half_move_timeline = self.half_move_timeline.copy()
        game.legal_moves_timeline = self.legal_moves_timeline.copy()
        return game
