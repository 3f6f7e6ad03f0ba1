"""
Type definitions used across layers
"""

from enum import StrEnum


class Status(StrEnum):
    IN_PROGRESS = "in progress"
    PLAYER1_WON = "player1 won"
    PLAYER2_WON = "player2 won"
    DRAW = "draw"

    @property
    def is_terminal(self) -> bool:
        return self != Status.IN_PROGRESS


class Role(StrEnum):
    PLAYER1 = "player1"
    PLAYER2 = "player2"

    def other(self) -> "Role":
        return Role.PLAYER2 if self == Role.PLAYER1 else Role.PLAYER1


# The status a role reaches by completing a line
WIN_STATUS: dict[Role, Status] = {
    Role.PLAYER1: Status.PLAYER1_WON,
    Role.PLAYER2: Status.PLAYER2_WON,
}
