"""Game API routes."""

from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, ConfigDict, Field

from thirteen_engine.cards import Card
from thirteen_engine.executor import IllegalMoveError
from web.api.session_manager import (
    GameSession,
    PlayerConfig,
    PlayerType,
    StrategyFactory,
    session_manager,
)
from strategies.personas import list_personas

logger = logging.getLogger(__name__)

router = APIRouter(tags=["games"])


# Request/Response models
class CardModel(BaseModel):
    """A card as sent by the client. Any ``value`` field is ignored."""

    model_config = ConfigDict(extra="ignore")

    rank: str = Field(..., description="Rank symbol: 3-10, J, Q, K, A or 2")
    suit: str = Field(..., description="Suit symbol (♠ ♣ ♦ ♥) or letter (S C D H)")

    def to_card(self) -> Card:
        return Card.from_dict({"rank": self.rank, "suit": self.suit})


class PlayerConfigRequest(BaseModel):
    """Seat configuration for game creation."""

    player_type: PlayerType = Field(..., description="'human' or 'ai'")
    persona: str | None = Field(None, description="Persona key for AI players")
    seed: int | None = Field(None, description="Seed for the persona's random choices")


def _default_players() -> list[PlayerConfigRequest]:
    return [PlayerConfigRequest(player_type=PlayerType.HUMAN)] + [
        PlayerConfigRequest(player_type=PlayerType.AI, persona="lowest_card") for _ in range(3)
    ]


class CreateGameRequest(BaseModel):
    """Request to create a new game."""

    players: list[PlayerConfigRequest] = Field(
        default_factory=_default_players, description="One entry per seat, 2 to 4 seats"
    )
    seed: int | None = Field(None, description="Random seed for the deal")


class PlayRequest(BaseModel):
    """Request to play cards."""

    cards: list[CardModel] = Field(..., min_length=1)


class PersonaInfo(BaseModel):
    """An AI persona that can fill a seat."""

    key: str
    name: str
    description: str


def _get_session(game_id: str) -> GameSession:
    session = session_manager.get_session(game_id)
    if not session:
        raise HTTPException(status_code=404, detail="Game not found")
    return session


def _session_payload(session: GameSession, viewer: int | None) -> dict:
    human_turn = session.is_human_turn
    return {
        "state": session.to_client_state(viewer=viewer),
        "legal_moves": session.moves_to_client(session.legal_moves) if human_turn else [],
        "is_human_turn": human_turn,
        "move_history": session.move_history,
    }


def _require_human_turn(session: GameSession) -> None:
    if session.state.is_game_over:
        raise HTTPException(status_code=400, detail="Game is already over")
    if not session.is_human_turn:
        raise HTTPException(status_code=400, detail="Not your turn")


# REST Endpoints


@router.get("/personas", response_model=list[PersonaInfo])
async def get_personas():
    """List available AI personas."""
    return [PersonaInfo(**persona.to_dict()) for persona in list_personas()]


@router.get("/strategies", response_model=dict[str, str])
async def list_strategies():
    """Persona keys mapped to descriptions."""
    return StrategyFactory().list_strategies()


@router.post("/games", response_model=dict)
async def create_game(request: CreateGameRequest):
    """Create a new game session and play AI turns up to the human's first move."""
    configs = [
        PlayerConfig(
            player_type=req.player_type,
            persona=req.persona,
            strategy_params={"seed": req.seed} if req.seed is not None else {},
        )
        for req in request.players
    ]

    try:
        session = session_manager.create_session(configs, seed=request.seed)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    if not session.is_human_turn:
        await session_manager.run_ai_turns_until_human(session)

    return {"game_id": session.id, **_session_payload(session, session.human_seat)}


@router.get("/games", response_model=list[dict])
async def list_games():
    """List all active game sessions."""
    return session_manager.list_sessions()


@router.get("/games/{game_id}")
async def get_game(game_id: str, viewer: int | None = None):
    """Get current state of a game."""
    session = _get_session(game_id)
    return _session_payload(session, viewer if viewer is not None else session.human_seat)


@router.get("/games/{game_id}/moves")
async def get_legal_moves(game_id: str):
    """Get the legal plays for the seat to act."""
    session = _get_session(game_id)
    return {"moves": session.moves_to_client(session.legal_moves), "can_pass": session.can_pass}


@router.post("/games/{game_id}/play")
async def play_cards(game_id: str, request: PlayRequest):
    """Play cards for the human seat, then run AI turns."""
    session = _get_session(game_id)
    _require_human_turn(session)

    try:
        session.play([card.to_card() for card in request.cards])
    except (ValueError, IllegalMoveError) as e:
        raise HTTPException(status_code=400, detail=str(e))

    await session_manager.run_ai_turns_until_human(session)
    return _session_payload(session, session.human_seat)


@router.post("/games/{game_id}/pass")
async def pass_turn(game_id: str):
    """Pass for the human seat, then run AI turns."""
    session = _get_session(game_id)
    _require_human_turn(session)

    try:
        session.pass_turn()
    except IllegalMoveError as e:
        raise HTTPException(status_code=400, detail=str(e))

    await session_manager.run_ai_turns_until_human(session)
    return _session_payload(session, session.human_seat)


@router.delete("/games/{game_id}")
async def delete_game(game_id: str):
    """Delete a game session."""
    if session_manager.delete_session(game_id):
        return {"deleted": True}
    raise HTTPException(status_code=404, detail="Game not found")
