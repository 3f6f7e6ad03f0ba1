"""Orchestration of communication from the collaborators (API, player views) to business logic and persistence layers (and the reverse direction)."""

import logging
import threading
from typing import Callable
from uuid import UUID

from src.api.models import (
    CreateGameRequest,
    DeleteGameRequest,
    GameResponse,
    GetGameRequest,
    MoveRequest,
    ResetGameRequest,
)
from src.core.exceptions import RepositoryError
from src.core.models import GameModel
from src.core.shared_types import Role
from src.db.repository import GameRepository
from src.tictactoe.cell import NOTATION_TO_CELL
from src.tictactoe.game import Game
from src.tictactoe.moves import Move
from src.tictactoe.players import ROLE_PIECES, create_players

logger = logging.getLogger(__name__)

ConfirmFn = Callable[[], bool]


class GameService:
    """Orchestration of layers for tic-tac-toe.

    The service is the single writer of the authoritative game state: every load -> apply -> store
    runs under one lock, so moves are applied strictly one after the other.
    """

    def __init__(self, repository: GameRepository) -> None:
        self.repo = repository
        self._lock = threading.Lock()

    # -- API routes logic ---
    def create_game(self, request: CreateGameRequest) -> GameResponse:
        """Start a new game session."""

        # Use info in CreateGameRequest to create a new Game, and convert into GameModel
        players = create_players(request.player1_name, request.player2_name)
        new_game = Game.new_game(rows=request.rows, cols=request.cols, players=players)
        created_game_data = new_game.to_model()

        # Store the GameModel in the repository
        stored_game, game_id = self.repo.create_game(created_game_data)
        logger.info("Created %dx%d game %s", request.rows, request.cols, game_id)

        # Return a GameResponse
        return self._create_game_response(game_id, stored_game)

    def get_game_state(self, request: GetGameRequest) -> GameResponse:
        """
        Retrieve current game state (read-only snapshot).
        ----
        Used by the player views to resynchronize with the authoritative board.
        """
        game_model = self._fetch_game(request.game_id)
        return self._create_game_response(request.game_id, game_model)

    def make_move(self, request: MoveRequest) -> GameResponse:
        """Make a move attempt. Illegal moves propagate as exceptions and nothing gets stored."""

        with self._lock:
            # Retrieve persisted GameModel from repository
            stored_model = self._fetch_game(request.game_id)

            # Create a new Game instance from the retrieved GameModel
            game = Game.from_model(stored_model)

            # Attempt the move (validated against the latest stored state)
            game.submit_move(self._build_move(request), request.role)

            # Capture updated state in GameModel and store in repository
            after_move = game.to_model()
            self.repo.update_game(request.game_id, after_move)

        return self._create_game_response(request.game_id, after_move)

    def reset_game(self, request: ResetGameRequest) -> GameResponse:
        """Replace the game with a fresh one. Always allowed."""

        with self._lock:
            stored_model = self._fetch_game(request.game_id)
            fresh_game = Game.from_model(stored_model).reset()
            fresh_model = fresh_game.to_model()
            self.repo.update_game(request.game_id, fresh_model)

        return self._create_game_response(request.game_id, fresh_model)

    def reset_game_guarded(
        self, request: ResetGameRequest, confirm: ConfirmFn
    ) -> GameResponse:
        """
        Reset as triggered by a user.
        ---

        * Game still in progress? --> ask for confirmation first. Declined: nothing changes.
        * Game already over? --> reset right away, without asking.
        """
        stored_model = self._fetch_game(request.game_id)
        game = Game.from_model(stored_model)
        if not game.status.is_terminal and not confirm():
            logger.info("Reset of game %s cancelled by user", request.game_id)
            return self._create_game_response(request.game_id, stored_model)
        return self.reset_game(request)

    def delete_game(self, request: DeleteGameRequest) -> None:
        """Handle a request to delete a Game record."""
        self.repo.delete_game(request.game_id)

    # -- Internal helpers --
    def _build_move(self, request: MoveRequest) -> Move:
        """The piece follows from the role, unless the request explicitly states one."""
        piece = (
            NOTATION_TO_CELL[request.piece]
            if request.piece is not None
            else ROLE_PIECES[request.role]
        )
        return Move(piece=piece, location=request.location)

    def _create_game_response(self, game_id: UUID, model: GameModel) -> GameResponse:
        """Convert info in GameModel to a GameResponse (for game with given ID.)"""
        game = Game.from_model(model)
        winner = game.winner
        return GameResponse(
            game_id=game_id,
            rows=model.rows,
            cols=model.cols,
            board=game.board.glyphs(),
            turn=Role(model.turn),
            status=game.status,
            players=model.players,
            winner=winner.name if winner else None,
        )

    def _fetch_game(self, game_id: UUID) -> GameModel:
        """Attempt to find the game in the repository and raise error if it fails."""
        game_model = self.repo.get_game(game_id)
        if game_model is None:
            raise RepositoryError(f"Game with {game_id=} not found.")
        return game_model
