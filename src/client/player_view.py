"""
What one player sees and can do. Each player gets their own view; views never share state with each other.

Two layers of state:
* the authoritative state (board, turn, status), owned by the game and received through the MoveChannel
* the player's own staged move and the turn they *expect* it to be, owned by this view

Sync rule: whenever the authoritative state changes, the staged move is cleared and the local turn is overwritten.
"""

import asyncio
import logging
from typing import Self
from uuid import UUID

from src.api.models import GameResponse
from src.core.exceptions import IndexOutOfRangeError, StagingError
from src.core.shared_types import WIN_STATUS, Role, Status
from src.services.move_channel import MoveChannel
from src.tictactoe.cell import CELL_TO_GLYPH, Cell
from src.tictactoe.moves import NO_MOVE, Move
from src.tictactoe.players import Player

logger = logging.getLogger(__name__)

EMPTY_GLYPH = CELL_TO_GLYPH[Cell.EMPTY]


class PlayerView:
    def __init__(
        self, player: Player, channel: MoveChannel, state: GameResponse
    ) -> None:
        self.player = player
        self.channel = channel
        self.staged_move: Move = NO_MOVE
        self.local_turn: Role = state.turn
        self._state = state
        self._submitting = False

    @classmethod
    def connect(cls, player: Player, channel: MoveChannel, state: GameResponse) -> Self:
        """Create the view and let it receive every authoritative update of the game."""
        view = cls(player, channel, state)
        channel.subscribe(state.game_id, view.observe)
        return view

    def disconnect(self) -> None:
        self.channel.unsubscribe(self.game_id, self.observe)

    @property
    def game_id(self) -> UUID:
        return self._state.game_id

    @property
    def state(self) -> GameResponse:
        """Latest authoritative state received"""
        return self._state

    @property
    def is_my_turn(self) -> bool:
        return self.local_turn == self.player.role

    @property
    def has_staged_move(self) -> bool:
        return not self.staged_move.is_no_move()

    # --- ACTIONS ---
    def stage_move(self, index: int) -> Move:
        """
        Select a cell for this turn
        ---

        Only on your own turn, on an empty cell, while the game is in progress and no earlier move is still on its way.
        Selecting another cell before ending the turn replaces the earlier selection.
        """
        if self._state.status != Status.IN_PROGRESS:
            raise StagingError(f"Game is over. status: {self._state.status.value}")
        if not self.is_my_turn:
            raise StagingError(f"{self.player.name} has to wait for their turn.")
        if self._submitting:
            raise StagingError("Previous move has not been resolved yet.")
        if not 0 <= index < len(self._state.board):
            raise IndexOutOfRangeError(
                f"Location {index} is outside the board (0 - {len(self._state.board) - 1})."
            )
        if self._state.board[index] != EMPTY_GLYPH:
            raise StagingError(f"Location {index} is already taken.")

        self.staged_move = Move(piece=self.player.piece, location=index)
        return self.staged_move

    def can_end_turn(self) -> bool:
        return self.is_my_turn and self.has_staged_move and not self._submitting

    async def end_turn(self) -> GameResponse:
        """
        Send the staged move to the game.
        ---

        1. flip the local turn right away (optimistic: do not wait for the round trip)
        2. submit the staged move and wait for it to resolve
        3. the authoritative update (published by the channel) clears the staged move

        A rejected move restores the local turn from the authoritative state and re-raises.
        Once sent, the move is not withdrawn: cancelling the caller leaves the submission running,
        and its outcome is still applied to this view when it resolves.
        """
        if not self.can_end_turn():
            raise StagingError(
                f"{self.player.name} cannot end the turn: nothing staged or not your turn."
            )

        move = self.staged_move
        self.local_turn = self.player.role.other()
        self._submitting = True
        submission = asyncio.ensure_future(
            self.channel.submit(self.game_id, move, self.player.role)
        )
        submission.add_done_callback(self._submission_done)
        return await asyncio.shield(submission)

    def _submission_done(self, submission: "asyncio.Future[GameResponse]") -> None:
        """Runs before the caller resumes, and also when the caller is gone."""
        self._submitting = False
        if submission.cancelled():
            self.local_turn = self._state.turn
            return
        error = submission.exception()
        if error is not None:
            logger.info(
                "%s: move rejected (%s), back to turn %s",
                self.player.name,
                error,
                self._state.turn.value,
            )
            self.local_turn = self._state.turn

    def observe(self, state: GameResponse) -> None:
        """Receive the authoritative state. A turn change (or a reset of the board) wipes the local staging."""
        changed = state.turn != self._state.turn or state.board != self._state.board
        self._state = state
        if changed:
            logger.debug(
                "%s observed new state: turn=%s status=%s",
                self.player.name,
                state.turn.value,
                state.status.value,
            )
            self.staged_move = NO_MOVE
            self.local_turn = state.turn

    # --- RENDERING ---
    def display_cells(self) -> list[str]:
        """The authoritative board, except the staged cell already shows this player's piece"""
        cells = list(self._state.board)
        if self.has_staged_move:
            cells[self.staged_move.location] = CELL_TO_GLYPH[self.player.piece]
        return cells

    def is_cell_selectable(self, index: int) -> bool:
        return (
            0 <= index < len(self._state.board)
            and self._state.status == Status.IN_PROGRESS
            and self.is_my_turn
            and not self._submitting
            and self._state.board[index] == EMPTY_GLYPH
        )

    def header_text(self) -> str:
        if self._state.turn == self.player.role:
            return f"{self.player.name}, it's your turn"
        return f"{self.player.name}, waiting..."

    def result_text(self) -> str:
        status = self._state.status
        if status == Status.DRAW:
            return "Cat's Game"
        if status.is_terminal:
            return "You Won" if status == WIN_STATUS[self.player.role] else "You lost"
        return ""
