"""
Asynchronous move submission
----

Stands in for the round trip to the authoritative engine: a submitted move resolves after a fixed delay.
Submissions are applied one at a time and in the order they were made, each against the board left behind by the previous one.
Once a move resolves, every view subscribed to that game receives the new authoritative state.
"""

import asyncio
import logging
from typing import Callable, Optional
from uuid import UUID

from src.api.models import DeleteGameRequest, GameResponse, MoveRequest, ResetGameRequest
from src.core.exceptions import GameError, IndexOutOfRangeError
from src.core.shared_types import Role
from src.services.game_service import ConfirmFn, GameService
from src.tictactoe.cell import CELL_TO_NOTATION
from src.tictactoe.moves import Move

logger = logging.getLogger(__name__)

Subscriber = Callable[[GameResponse], None]


class MoveChannel:
    """Delayed, ordered, single-in-flight submission of moves to the GameService.

    Attributes:
        service: The service owning the authoritative state.
        latency_seconds: Delay before a submitted move is applied. Must be positive.
    """

    def __init__(self, service: GameService, latency_seconds: float = 0.5) -> None:
        if latency_seconds <= 0:
            raise ValueError(f"Latency must be positive, got {latency_seconds}.")
        self.service = service
        self.latency_seconds = latency_seconds
        self._lock = asyncio.Lock()
        self._subscribers: dict[UUID, list[Subscriber]] = {}

    # --- OBSERVERS ---
    def subscribe(self, game_id: UUID, callback: Subscriber) -> None:
        self._subscribers.setdefault(game_id, []).append(callback)

    def unsubscribe(self, game_id: UUID, callback: Subscriber) -> None:
        callbacks = self._subscribers.get(game_id, [])
        if callback in callbacks:
            callbacks.remove(callback)
        if not callbacks:
            self._subscribers.pop(game_id, None)

    def publish(self, response: GameResponse) -> None:
        """Send the authoritative state to everyone watching this game."""
        for callback in list(self._subscribers.get(response.game_id, [])):
            callback(response)

    # --- SUBMISSION ---
    @property
    def in_flight(self) -> bool:
        return self._lock.locked()

    async def submit(self, game_id: UUID, move: Move, role: Role) -> GameResponse:
        """
        Apply the move after the delay and publish the result.

        ---
        NOTE: a rejected move raises to the caller and nothing gets published.
        """
        async with self._lock:
            await asyncio.sleep(self.latency_seconds)
            try:
                response = self.service.make_move(self._move_request(game_id, move, role))
            except GameError as exc:
                logger.warning("Move %s by %s was rejected: %s", move, role.value, exc)
                raise

        self.publish(response)
        return response

    @staticmethod
    def _move_request(game_id: UUID, move: Move, role: Role) -> MoveRequest:
        if move.location < 0:
            raise IndexOutOfRangeError(f"Location {move.location} is outside the board.")
        return MoveRequest(
            game_id=game_id,
            role=role,
            location=move.location,
            piece=CELL_TO_NOTATION[move.piece],
        )

    async def delete(self, game_id: UUID) -> None:
        """Delete the game and forget everyone watching it."""
        async with self._lock:
            self.service.delete_game(DeleteGameRequest(game_id=game_id))
        self._subscribers.pop(game_id, None)

    async def reset(
        self, game_id: UUID, confirm: Optional[ConfirmFn] = None
    ) -> GameResponse:
        """Reset the game (guarded by `confirm` when given) and publish the outcome."""
        request = ResetGameRequest(game_id=game_id)
        async with self._lock:
            if confirm is None:
                response = self.service.reset_game(request)
            else:
                response = self.service.reset_game_guarded(request, confirm)

        self.publish(response)
        return response
