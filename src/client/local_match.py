"""
Wiring for two players sharing one device: one authoritative game, two independent player views.

Settings decide the board dimensions, the move latency, the database and the player names.
"""

import logging
from dataclasses import dataclass
from typing import Optional, Self

from sqlalchemy import Engine
from sqlalchemy.orm import Session

from src.api.models import CreateGameRequest, GameResponse
from src.client.player_view import PlayerView
from src.core.config import Settings, get_settings
from src.core.logging_config import configure_logging
from src.core.shared_types import Role
from src.db.database import create_db_engine, create_session_factory
from src.db.sql_repository import SQLGameRepository
from src.services.game_service import ConfirmFn, GameService
from src.services.move_channel import MoveChannel
from src.tictactoe.players import create_players

logger = logging.getLogger(__name__)


@dataclass
class LocalMatch:
    service: GameService
    channel: MoveChannel
    views: dict[Role, PlayerView]
    db_session: Session
    engine: Engine

    @classmethod
    def start(cls, settings: Optional[Settings] = None) -> Self:
        settings = settings or get_settings()
        configure_logging(settings.log_level)

        engine = create_db_engine(settings)
        db_session = create_session_factory(engine)()
        service = GameService(SQLGameRepository(db_session))
        channel = MoveChannel(service, settings.move_latency_seconds)

        state = service.create_game(
            CreateGameRequest(
                rows=settings.rows,
                cols=settings.cols,
                player1_name=settings.player1_name,
                player2_name=settings.player2_name,
            )
        )
        players = create_players(settings.player1_name, settings.player2_name)
        views = {
            role: PlayerView.connect(player, channel, state)
            for role, player in players.items()
        }
        logger.info("Local match started: game %s", state.game_id)
        return cls(service, channel, views, db_session, engine)

    @property
    def state(self) -> GameResponse:
        return self.views[Role.PLAYER1].state

    async def reset(self, confirm: Optional[ConfirmFn] = None) -> GameResponse:
        """The reset button: asks `confirm` first while the game is still in progress (when given)."""
        return await self.channel.reset(self.state.game_id, confirm)

    def close(self) -> None:
        for view in self.views.values():
            view.disconnect()
        self.db_session.close()
        self.engine.dispose()
