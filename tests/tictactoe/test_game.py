"""Unit tests for /src/tictactoe/game.py"""

import pytest

from src.core.exceptions import (
    CellOccupiedError,
    GameOverError,
    GameStateError,
    IllegalMoveError,
    IndexOutOfRangeError,
    NotYourTurnError,
)
from src.core.models import GameModel
from src.core.shared_types import Role, Status
from src.tictactoe.board import Board
from src.tictactoe.cell import Cell
from src.tictactoe.game import Game, GameState
from src.tictactoe.moves import NO_MOVE, Move
from src.tictactoe.players import ROLE_PIECES, create_players

WIN_SEQUENCE = [0, 1, 4, 2, 8]  # X@0, O@1, X@4, O@2, X@8 --> X completes the forward diagonal
DRAW_SEQUENCE = [0, 1, 2, 4, 3, 5, 7, 6, 8]


def play(game: Game, locations: list[int]) -> GameState:
    """Alternate turns, starting with whoever is to move."""
    state = game.state()
    for location in locations:
        role = game.turn
        state = game.submit_move(Move(ROLE_PIECES[role], location), role)
    return state


def snapshot(game: Game) -> tuple[Board, Role, Status]:
    return game.board, game.turn, game.status


# -- CREATION LOGIC --
def test_new_game() -> None:
    game = Game.new_game()
    assert game.board == Board.empty(3, 3)
    assert game.turn == Role.PLAYER1
    assert game.status == Status.IN_PROGRESS
    assert game.winner is None


def test_players_have_fixed_pieces() -> None:
    game = Game.new_game(players=create_players("Ann", "Bob"))
    assert game.players[Role.PLAYER1].piece == Cell.X
    assert game.players[Role.PLAYER2].piece == Cell.O
    assert game.players[Role.PLAYER1].name == "Ann"
    assert game.players[Role.PLAYER2].name == "Bob"


def test_default_player_names() -> None:
    players = create_players()
    assert players[Role.PLAYER1].name == "Player 1"
    assert players[Role.PLAYER2].name == "Player 2"


def test_game_creation_from_model_roundtrip() -> None:
    """Create a Game from a GameModel and convert back into GameModel"""
    expected_model = GameModel(
        rows=3,
        cols=3,
        board="XO-/-X-/---",
        turn="player2",
        status="in progress",
        players={"player1": "Ann", "player2": "Bob"},
    )
    game = Game.from_model(expected_model)
    assert game.to_model() == expected_model


def test_game_from_model_builds_domain_objects() -> None:
    model = GameModel(
        rows=3,
        cols=3,
        board="XXX/OO-/---",
        turn="player2",
        status="player1 won",
        players={"player1": "Ann", "player2": "Bob"},
    )
    game = Game.from_model(model)
    assert isinstance(game.board, Board)
    assert game.turn == Role.PLAYER2
    assert game.status == Status.PLAYER1_WON
    assert game.winner is not None
    assert game.winner.name == "Ann"


@pytest.mark.parametrize(
    "field, value",
    [
        ("status", "checkmate"),
        ("turn", "player3"),
        ("board", "XO/--"),  # does not match 3x3
        ("board", "XQ-/---/---"),
    ],
)
def test_invalid_model(field: str, value: str) -> None:
    model = GameModel(
        rows=3,
        cols=3,
        board="---/---/---",
        turn="player1",
        status="in progress",
        players={"player1": "Ann", "player2": "Bob"},
    )
    setattr(model, field, value)
    with pytest.raises(GameStateError):
        _ = Game.from_model(model)


# -- MAKING MOVES --
def test_submit_move_places_piece_and_flips_turn() -> None:
    game = Game.new_game()
    state = game.submit_move(Move(Cell.X, 4), Role.PLAYER1)
    assert state.board.cell_at(4) == Cell.X
    assert state.turn == Role.PLAYER2
    assert state.status == Status.IN_PROGRESS
    assert state == game.state()


def test_state_snapshot_is_not_affected_by_later_moves() -> None:
    game = Game.new_game()
    before = game.state()
    game.submit_move(Move(Cell.X, 0), Role.PLAYER1)
    assert before.board == Board.empty()
    assert before.turn == Role.PLAYER1


@pytest.mark.parametrize("n_moves", range(10))
def test_turn_alternation(n_moves: int) -> None:
    """After N applied moves, Player1 is to move if N is even, Player2 if N is odd (regardless of outcome)"""
    game = Game.new_game()
    play(game, DRAW_SEQUENCE[:n_moves])
    expected = Role.PLAYER1 if n_moves % 2 == 0 else Role.PLAYER2
    assert game.turn == expected


def test_win_scenario() -> None:
    """X@0, O@1, X@4, O@2, X@8 --> forward diagonal {0, 4, 8} belongs to X"""
    game = Game.new_game()
    state = play(game, WIN_SEQUENCE[:-1])
    assert state.status == Status.IN_PROGRESS

    state = play(game, WIN_SEQUENCE[-1:])
    assert state.status == Status.PLAYER1_WON
    assert game.winner == game.players[Role.PLAYER1]
    # turn is still handed over after the winning move
    assert state.turn == Role.PLAYER2


def test_player2_can_win() -> None:
    game = Game.new_game()
    state = play(game, [0, 3, 1, 4, 8, 5])
    assert state.status == Status.PLAYER2_WON
    assert game.winner == game.players[Role.PLAYER2]


def test_draw_scenario() -> None:
    """X@0,O@1,X@2,O@4,X@3,O@5,X@7,O@6,X@8 fills the board without any line"""
    game = Game.new_game()
    state = play(game, DRAW_SEQUENCE[:-1])
    assert state.status == Status.IN_PROGRESS

    state = play(game, DRAW_SEQUENCE[-1:])
    assert state.board.is_full()
    assert state.status == Status.DRAW
    assert game.winner is None


def test_winning_move_that_fills_board_is_a_win() -> None:
    """The 9th move completes a line: win is checked before draw"""
    game = Game.from_model(
        GameModel(
            rows=3,
            cols=3,
            board="XOX/OXO/OX-",
            turn="player1",
            status="in progress",
            players={"player1": "Ann", "player2": "Bob"},
        )
    )
    state = game.submit_move(Move(Cell.X, 8), Role.PLAYER1)
    assert state.board.is_full()
    assert state.status == Status.PLAYER1_WON


# -- ILLEGAL MOVES --
def test_occupied_cell_is_rejected() -> None:
    game = Game.new_game()
    play(game, [0])
    before = snapshot(game)
    with pytest.raises(CellOccupiedError):
        game.submit_move(Move(Cell.O, 0), Role.PLAYER2)
    assert snapshot(game) == before


def test_wrong_turn_is_rejected() -> None:
    game = Game.new_game()
    before = snapshot(game)
    with pytest.raises(NotYourTurnError):
        game.submit_move(Move(Cell.O, 0), Role.PLAYER2)
    assert snapshot(game) == before


def test_wrong_piece_is_rejected() -> None:
    """Player1 can only place X"""
    game = Game.new_game()
    before = snapshot(game)
    with pytest.raises(IllegalMoveError):
        game.submit_move(Move(Cell.O, 0), Role.PLAYER1)
    with pytest.raises(IllegalMoveError):
        game.submit_move(NO_MOVE, Role.PLAYER1)
    assert snapshot(game) == before


@pytest.mark.parametrize("location", [-1, 9, 42])
def test_out_of_range_is_rejected(location: int) -> None:
    game = Game.new_game()
    before = snapshot(game)
    with pytest.raises(IndexOutOfRangeError):
        game.submit_move(Move(Cell.X, location), Role.PLAYER1)
    assert snapshot(game) == before


@pytest.mark.parametrize("role", [Role.PLAYER1, Role.PLAYER2])
@pytest.mark.parametrize("location", [3, 5, 6, 7])
def test_terminal_status_is_final(role: Role, location: int) -> None:
    """Once the game is over, every further move fails and nothing changes"""
    game = Game.new_game()
    play(game, WIN_SEQUENCE)
    before = snapshot(game)
    with pytest.raises(GameOverError):
        game.submit_move(Move(ROLE_PIECES[role], location), role)
    assert snapshot(game) == before
    assert game.status == Status.PLAYER1_WON


def test_illegal_move_errors_share_a_base() -> None:
    assert issubclass(GameOverError, IllegalMoveError)
    assert issubclass(NotYourTurnError, IllegalMoveError)
    assert issubclass(CellOccupiedError, IllegalMoveError)


# -- RESET --
@pytest.mark.parametrize(
    "locations", [[], [0, 1], WIN_SEQUENCE, DRAW_SEQUENCE]
)
def test_reset(locations: list[int]) -> None:
    """Always an empty board, Player1 to move, in progress"""
    game = Game.new_game(players=create_players("Ann", "Bob"))
    play(game, locations)
    fresh = game.reset()
    assert fresh.board == Board.empty(3, 3)
    assert fresh.turn == Role.PLAYER1
    assert fresh.status == Status.IN_PROGRESS
    assert fresh.players == game.players
