"""The two players. Roles and pieces are fixed at the start of a game: Player1 uses X, Player2 uses O."""

from dataclasses import dataclass

from src.core.shared_types import Role
from src.tictactoe.cell import Cell

ROLE_PIECES: dict[Role, Cell] = {
    Role.PLAYER1: Cell.X,
    Role.PLAYER2: Cell.O,
}

DEFAULT_NAMES: dict[Role, str] = {
    Role.PLAYER1: "Player 1",
    Role.PLAYER2: "Player 2",
}


@dataclass(frozen=True)
class Player:
    role: Role
    name: str

    @property
    def piece(self) -> Cell:
        return ROLE_PIECES[self.role]


def create_players(
    player1_name: str | None = None, player2_name: str | None = None
) -> dict[Role, Player]:
    """Both players of a game, falling back to the default display names"""
    return {
        Role.PLAYER1: Player(Role.PLAYER1, player1_name or DEFAULT_NAMES[Role.PLAYER1]),
        Role.PLAYER2: Player(Role.PLAYER2, player2_name or DEFAULT_NAMES[Role.PLAYER2]),
    }
