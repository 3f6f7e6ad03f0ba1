"""
The Game class will be the entrypoint into the domain layer for the service layer.
It owns the authoritative board, whose turn it is and the game status, and it is the only place where those change -->
passes this information to the service layer, which can then pass it onwards to the API layer and the player views.
"""

import logging
from dataclasses import dataclass
from typing import Optional, Self

from src.core.exceptions import (
    CellOccupiedError,
    GameError,
    GameOverError,
    GameStateError,
    IllegalMoveError,
    IndexOutOfRangeError,
    NotYourTurnError,
)
from src.core.models import GameModel
from src.core.shared_types import WIN_STATUS, Role, Status
from src.tictactoe.board import Board
from src.tictactoe.evaluator import Outcome, evaluate, is_draw
from src.tictactoe.moves import Move
from src.tictactoe.players import Player, create_players

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GameState:
    """Read-only snapshot of the authoritative state"""

    board: Board
    turn: Role
    status: Status


@dataclass
class Game:
    # --- DOMAIN LAYER API CALLED BY SERVICE---

    board: Board
    turn: Role
    status: Status
    players: dict[Role, Player]

    @classmethod
    def new_game(
        cls,
        rows: int = 3,
        cols: int = 3,
        players: Optional[dict[Role, Player]] = None,
    ) -> Self:
        """Empty board, Player1 (X) to move."""
        return cls(
            board=Board.empty(rows, cols),
            turn=Role.PLAYER1,
            status=Status.IN_PROGRESS,
            players=players if players is not None else create_players(),
        )

    @classmethod
    def from_model(cls, model: GameModel) -> Self:
        """Define how to construct a Game from the information the Service layer actually has"""

        # Validation
        try:
            status = Status(model.status)
        except ValueError as exc:
            raise GameStateError(
                f"Invalid status code: {model.status!r}. \nPick one from {','.join(status.value for status in Status)}"
            ) from exc
        try:
            turn = Role(model.turn)
        except ValueError as exc:
            raise GameStateError(
                f"Invalid turn: {model.turn!r}. \nPick one from {','.join(role.value for role in Role)}"
            ) from exc

        # create the Game
        board = Board.from_notation(model.board)
        if (board.rows, board.cols) != (model.rows, model.cols):
            raise GameStateError(
                f"Board {model.board!r} does not match dimensions {model.rows}x{model.cols}."
            )
        players = create_players(
            model.players.get(Role.PLAYER1.value),
            model.players.get(Role.PLAYER2.value),
        )
        return cls(board, turn, status, players)

    def to_model(self) -> GameModel:
        """Encode back into a format the Service layer uses"""

        return GameModel(
            rows=self.board.rows,
            cols=self.board.cols,
            board=self.board.to_notation(),
            turn=self.turn.value,
            status=self.status.value,
            players={role.value: player.name for role, player in self.players.items()},
        )

    def state(self) -> GameState:
        return GameState(self.board, self.turn, self.status)

    @property
    def winner(self) -> Optional[Player]:
        for role, status in WIN_STATUS.items():
            if self.status == status:
                return self.players[role]
        return None

    def submit_move(self, move: Move, role: Role) -> GameState:
        """
        Attempt to apply a move for the player with the given role
        -----

        1. validate against the state as it is NOW (a stale move gets rejected, never partially applied)
        2. place the piece on a copy of the board
        3. check whether the move won the game, or filled the board
        4. hand the turn to the other player (also when the game just ended)
        """
        self._assert_legal(move, role)

        new_board = self.board.with_cell_set(move.location, move.piece)
        outcome = evaluate(new_board, move)

        # update the board, the Game Status, and the turn
        self.board = new_board
        self._update_game_status(outcome, role)
        self.turn = role.other()

        logger.info(
            "%s placed %s at %d. Next turn: %s",
            role.value,
            move.piece.name,
            move.location,
            self.turn.value,
        )
        return self.state()

    def reset(self) -> Self:
        """A brand new game with the same dimensions and players. Always allowed."""
        logger.info("Resetting game (was: %s)", self.status.value)
        return type(self).new_game(self.board.rows, self.board.cols, dict(self.players))

    # -- PRIVATE HELPERS ---
    def _assert_legal(self, move: Move, role: Role) -> None:
        """Raise the appropriate IllegalMoveError (or IndexOutOfRangeError) if the move cannot be applied."""
        # make sure the game is (still) in progress
        if self.status.is_terminal:
            self._reject(GameOverError(f"Game is over. status: {self.status.value}"))

        # make sure it is your turn
        if role != self.turn:
            self._reject(
                NotYourTurnError(
                    f"It is not your turn. Waiting for {self.players[self.turn].name} to make a move first."
                )
            )

        # you can only place your own piece
        expected_piece = self.players[role].piece
        if move.piece != expected_piece:
            self._reject(
                IllegalMoveError(
                    f"{role.value} plays {expected_piece.name}, cannot place {move.piece.name}."
                )
            )

        # never write outside of the board
        if not self.board.is_within_bounds(move.location):
            self._reject(
                IndexOutOfRangeError(
                    f"Location {move.location} is outside the board (0 - {self.board.size - 1})."
                )
            )

        # only empty cells can be claimed
        if not self.board.is_empty_at(move.location):
            self._reject(CellOccupiedError(f"Location {move.location} is already taken."))

    def _reject(self, error: GameError) -> None:
        logger.warning("Rejected move: %s", error)
        raise error

    def _update_game_status(self, outcome: Outcome, role: Role) -> None:
        """Win is checked before draw: a move that fills the board AND completes a line is a win."""
        if outcome == Outcome.WIN:
            self._change_status(WIN_STATUS[role])
        elif is_draw(self.board, outcome):
            self._change_status(Status.DRAW)

    def _change_status(self, new_status: Status) -> None:
        logger.info("Game status changed: %s -> %s", self.status.value, new_status.value)
        self.status = new_status
