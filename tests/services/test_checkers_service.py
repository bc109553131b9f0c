"""Unit tests for src/services/checkers_service.py"""

from typing import Generator
from uuid import UUID, uuid4

import pytest

from src.core.exceptions import GameStateError, RepositoryError
from src.core.models import GameModel
from src.core.shared_types import Player, Status
from src.services.checkers_service import (
    ActionResponse,
    CellRequest,
    CheckersService,
    CreateGameRequest,
    DeleteGameRequest,
    DeselectRequest,
    GameResponse,
    GetGameRequest,
    LegalDestinationsResponse,
    LoadGameRequest,
    RestartGameRequest,
    SaveGameRequest,
)

STARTING_POSITION = "1M1M1M1M/M1M1M1M1/1M1M1M1M/8/8/m1m1m1m1/1m1m1m1m/m1m1m1m1"
# Player ONE's man on b3 can capture c4 and then e6. Spare pieces on f1 and h7.
CHAIN_POSITION = "5M2/8/1M6/2m5/8/4m3/7m/8"


# --- MOCK DEPENDENCIES ----
class MockRepository:
    """Mock the GameRepository using dictionaries of game models."""

    def __init__(self) -> None:
        self._games: dict[UUID, GameModel] = {}
        self._slots: dict[str, GameModel] = {}

    def create_game(self, game: GameModel) -> tuple[GameModel, UUID]:
        game_id = uuid4()
        self._games[game_id] = game
        return game, game_id

    def get_game(self, game_id: UUID) -> GameModel | None:
        return self._games.get(game_id)

    def update_game(self, game_id: UUID, game: GameModel) -> GameModel | None:
        if game_id not in self._games:
            return None
        self._games[game_id] = game
        return game

    def delete_game(self, game_id: UUID) -> GameModel | None:
        return self._games.pop(game_id, None)

    def save_snapshot(self, slot: str, game: GameModel) -> GameModel:
        self._slots[slot] = game
        return game

    def load_snapshot(self, slot: str) -> GameModel | None:
        return self._slots.get(slot)

    def clear(self) -> None:
        """Clear the repository (useful in between tests)"""
        self._games.clear()
        self._slots.clear()


@pytest.fixture
def mock_repository() -> Generator[MockRepository, None, None]:
    """Ensures to clear the repository between tests"""
    repo = MockRepository()
    try:
        yield repo
    finally:
        repo.clear()


@pytest.fixture
def service(mock_repository: MockRepository) -> CheckersService:
    return CheckersService(mock_repository)


def new_game_id(service: CheckersService, position: str | None = None) -> UUID:
    response = service.create_new_game(CreateGameRequest(starting_position=position))
    return response.game_id


# --- CREATE / GET ----
def test_create_a_new_game(
    service: CheckersService, mock_repository: MockRepository
) -> None:
    """Check that new game is created, persisted in repo, and the response has what is needed to draw it."""
    response = service.create_new_game(CreateGameRequest())

    assert isinstance(response, GameResponse)
    assert isinstance(response.game_id, UUID)
    assert response.position == STARTING_POSITION
    assert response.side_to_move == Player.ONE
    assert response.scores == {Player.ONE: 0, Player.TWO: 0}
    assert response.piece_counts == {Player.ONE: 12, Player.TWO: 12}
    assert response.selected_cell is None
    assert response.legal_destinations == []
    assert not response.in_chain_capture
    assert response.status == Status.IN_PROGRESS
    assert response.winner is None

    stored_game = mock_repository.get_game(response.game_id)
    assert stored_game is not None
    assert stored_game.position == STARTING_POSITION
    assert stored_game.status == Status.IN_PROGRESS


def test_create_game_from_position(service: CheckersService) -> None:
    response = service.create_new_game(
        CreateGameRequest(starting_position=CHAIN_POSITION, side_to_move=Player.TWO)
    )
    assert response.position == CHAIN_POSITION
    assert response.side_to_move == Player.TWO
    assert response.piece_counts == {Player.ONE: 2, Player.TWO: 3}


def test_get_game_state(service: CheckersService) -> None:
    game_id = new_game_id(service)
    response = service.get_game_state(GetGameRequest(game_id=game_id))
    assert response.game_id == game_id
    assert response.position == STARTING_POSITION


def test_unknown_game(service: CheckersService) -> None:
    with pytest.raises(RepositoryError):
        service.get_game_state(GetGameRequest(game_id=uuid4()))
    with pytest.raises(RepositoryError):
        service.activate_cell(CellRequest(game_id=uuid4(), cell="b3"))


# --- PLAYING ----
def test_select_and_move(service: CheckersService) -> None:
    game_id = new_game_id(service)

    selected = service.select_piece(CellRequest(game_id=game_id, cell="b3"))
    assert isinstance(selected, ActionResponse)
    assert selected.accepted
    assert selected.game.selected_cell == "b3"
    assert set(selected.game.legal_destinations) == {"a4", "c4"}

    moved = service.move_piece(CellRequest(game_id=game_id, cell="c4"))
    assert moved.accepted
    assert moved.game.side_to_move == Player.TWO
    assert moved.game.selected_cell is None
    assert moved.game.position == "1M1M1M1M/M1M1M1M1/3M1M1M/2M5/8/m1m1m1m1/1m1m1m1m/m1m1m1m1"


def test_selection_is_persisted(service: CheckersService) -> None:
    game_id = new_game_id(service)
    service.select_piece(CellRequest(game_id=game_id, cell="b3"))

    response = service.get_game_state(GetGameRequest(game_id=game_id))
    assert response.selected_cell == "b3"
    assert set(response.legal_destinations) == {"a4", "c4"}


def test_rejected_selection(service: CheckersService) -> None:
    game_id = new_game_id(service)
    response = service.select_piece(CellRequest(game_id=game_id, cell="a6"))
    assert not response.accepted
    assert response.game.selected_cell is None


def test_illegal_destination_deselects(service: CheckersService) -> None:
    game_id = new_game_id(service)
    service.select_piece(CellRequest(game_id=game_id, cell="b3"))

    response = service.move_piece(CellRequest(game_id=game_id, cell="b5"))
    assert not response.accepted
    assert response.game.selected_cell is None

    # the deselection was stored
    stored = service.get_game_state(GetGameRequest(game_id=game_id))
    assert stored.selected_cell is None


def test_deselect(service: CheckersService) -> None:
    game_id = new_game_id(service)
    service.select_piece(CellRequest(game_id=game_id, cell="b3"))
    response = service.deselect_piece(DeselectRequest(game_id=game_id))
    assert response.accepted
    assert response.game.selected_cell is None


def test_capture_chain_through_clicks(service: CheckersService) -> None:
    game_id = new_game_id(service, CHAIN_POSITION)

    service.activate_cell(CellRequest(game_id=game_id, cell="b3"))
    first = service.activate_cell(CellRequest(game_id=game_id, cell="d5"))
    assert first.accepted
    assert first.game.in_chain_capture
    assert first.game.side_to_move == Player.ONE
    assert first.game.selected_cell == "d5"
    assert first.game.legal_destinations == ["f7"]
    assert first.game.scores[Player.ONE] == 1

    # another piece cannot be picked in the middle of a chain
    other = service.activate_cell(CellRequest(game_id=game_id, cell="f1"))
    assert not other.accepted
    assert other.game.selected_cell == "d5"
    cancel = service.deselect_piece(DeselectRequest(game_id=game_id))
    assert not cancel.accepted
    assert cancel.game.in_chain_capture

    second = service.activate_cell(CellRequest(game_id=game_id, cell="f7"))
    assert second.accepted
    assert not second.game.in_chain_capture
    assert second.game.side_to_move == Player.TWO
    assert second.game.scores == {Player.ONE: 2, Player.TWO: 0}
    assert second.game.piece_counts == {Player.ONE: 2, Player.TWO: 1}


def test_game_over(service: CheckersService) -> None:
    game_id = new_game_id(service, "8/8/1M6/2m5/8/8/8/8")
    service.select_piece(CellRequest(game_id=game_id, cell="b3"))
    response = service.move_piece(CellRequest(game_id=game_id, cell="d5"))

    assert response.game.status == Status.FINISHED
    assert response.game.winner == Player.ONE

    with pytest.raises(GameStateError):
        service.select_piece(CellRequest(game_id=game_id, cell="d5"))


def test_legal_destinations(service: CheckersService) -> None:
    game_id = new_game_id(service)
    response = service.legal_destinations(CellRequest(game_id=game_id, cell="h3"))
    assert isinstance(response, LegalDestinationsResponse)
    assert response.legal_destinations == ["g4"]

    # read-only: nothing got selected
    assert service.get_game_state(GetGameRequest(game_id=game_id)).selected_cell is None


def test_legal_destinations_during_chain(service: CheckersService) -> None:
    game_id = new_game_id(service, CHAIN_POSITION)
    service.activate_cell(CellRequest(game_id=game_id, cell="b3"))
    service.activate_cell(CellRequest(game_id=game_id, cell="d5"))

    response = service.legal_destinations(CellRequest(game_id=game_id, cell="d5"))
    assert response.legal_destinations == ["f7"]

    # the other piece could step to e2 or g2, but the chain locks it
    locked = service.legal_destinations(CellRequest(game_id=game_id, cell="f1"))
    assert locked.legal_destinations == []



# --- RESTART / SAVE / LOAD / DELETE ----
def test_restart_game(service: CheckersService) -> None:
    game_id = new_game_id(service, CHAIN_POSITION)
    response = service.restart_game(RestartGameRequest(game_id=game_id))
    assert response.game_id == game_id
    assert response.position == STARTING_POSITION
    assert response.side_to_move == Player.ONE


def test_save_and_load(service: CheckersService) -> None:
    game_id = new_game_id(service)
    service.select_piece(CellRequest(game_id=game_id, cell="b3"))
    service.save_game(SaveGameRequest(game_id=game_id))

    service.move_piece(CellRequest(game_id=game_id, cell="c4"))
    assert service.get_game_state(GetGameRequest(game_id=game_id)).side_to_move == Player.TWO

    loaded = service.load_game(LoadGameRequest(game_id=game_id))
    assert loaded.position == STARTING_POSITION
    assert loaded.side_to_move == Player.ONE
    assert loaded.selected_cell == "b3"
    assert set(loaded.legal_destinations) == {"a4", "c4"}
    assert service.get_game_state(GetGameRequest(game_id=game_id)) == loaded


def test_load_missing_slot_leaves_game_untouched(
    service: CheckersService, mock_repository: MockRepository
) -> None:
    game_id = new_game_id(service, CHAIN_POSITION)
    before = mock_repository.get_game(game_id)

    with pytest.raises(RepositoryError):
        service.load_game(LoadGameRequest(game_id=game_id, slot="never saved"))
    assert mock_repository.get_game(game_id) == before


@pytest.mark.parametrize(
    "changes",
    [
        {"status": "lost in space"},
        {"selected_cell": "zz"},
        {"selected_cell": "a6"},  # belongs to the player not on move
        {"selected_cell": "b3", "in_chain_capture": True},  # nothing left to capture
    ],
)
def test_load_broken_snapshot_leaves_game_untouched(
    service: CheckersService, mock_repository: MockRepository, changes: dict
) -> None:
    game_id = new_game_id(service)
    before = mock_repository.get_game(game_id)
    assert before is not None
    snapshot = dict(
        position=before.position,
        side_to_move=before.side_to_move,
        scores=before.scores,
        selected_cell=None,
        in_chain_capture=False,
        status=before.status,
    )
    snapshot.update(changes)
    mock_repository.save_snapshot("broken", GameModel(**snapshot))

    with pytest.raises(GameStateError):
        service.load_game(LoadGameRequest(game_id=game_id, slot="broken"))
    assert mock_repository.get_game(game_id) == before


def test_delete_game(service: CheckersService, mock_repository: MockRepository) -> None:
    game_id = new_game_id(service)
    service.delete_game(DeleteGameRequest(game_id=game_id))
    assert mock_repository.get_game(game_id) is None
