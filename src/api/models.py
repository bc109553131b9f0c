"""Requests and Response models"""

from typing import Optional
from uuid import UUID

from pydantic import BaseModel, field_validator

from src.checkers.notation import is_valid_cell_name, is_valid_position
from src.core.config import DEFAULT_SAVE_SLOT
from src.core.exceptions import InvalidRequestError
from src.core.shared_types import Player, Status

CellName = str


# --- REQUEST MODELS ---
class CreateGameRequest(BaseModel):
    starting_position: Optional[str] = None
    side_to_move: Player = Player.ONE

    @field_validator("starting_position")
    @classmethod
    def validate_starting_position(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return value

        if not is_valid_position(value.strip()):
            raise InvalidRequestError(
                f"Cannot interpret starting_position: {value!r} as a board position."
            )
        return value.strip()


class GetGameRequest(BaseModel):
    game_id: UUID


class DeleteGameRequest(BaseModel):
    game_id: UUID


class RestartGameRequest(BaseModel):
    game_id: UUID


class DeselectRequest(BaseModel):
    game_id: UUID


class CellRequest(BaseModel):
    """A single cell of a game: the cell that got clicked, the piece to select, or the destination to move to."""

    game_id: UUID
    cell: CellName

    @field_validator("cell")
    @classmethod
    def validate_cell(cls, value: str) -> str:
        if not is_valid_cell_name(value):
            raise InvalidRequestError(
                f"Cannot interpret cell: {value!r} as a valid cell name."
            )
        return value.lower()


class SaveGameRequest(BaseModel):
    game_id: UUID
    slot: str = DEFAULT_SAVE_SLOT

    @field_validator("slot")
    @classmethod
    def validate_slot(cls, value: str) -> str:
        if not value.strip():
            raise InvalidRequestError("Save slot name cannot be empty.")
        return value.strip()


class LoadGameRequest(SaveGameRequest):
    pass


# --- RESPONSE MODELS ---
class GameResponse(BaseModel):
    """Everything needed to draw the game: board, selection, highlights, score board and turn indicator."""

    game_id: UUID
    position: str
    side_to_move: Player
    scores: dict[Player, int]
    piece_counts: dict[Player, int]
    selected_cell: Optional[CellName]
    legal_destinations: list[CellName]
    in_chain_capture: bool
    status: Status
    winner: Optional[Player]


class ActionResponse(BaseModel):
    """Result of a select / move / deselect / click, with the game as it stands afterwards."""

    accepted: bool
    game: GameResponse


class LegalDestinationsResponse(BaseModel):
    game_id: UUID
    cell: CellName
    legal_destinations: list[CellName]
