from fastapi import APIRouter, status
from loguru import logger

from pokerpal.api.deps import SessionDep
from pokerpal.dao.roster_dao import get_roster_names
from pokerpal.schemas.errors import CONFLICT, NOT_FOUND, UNPROCESSABLE
from pokerpal.schemas.schemas import PlayerCreate, RosterResponse
from pokerpal.services.roster_service import MAX_ROSTER_SIZE, add_player, remove_player

router = APIRouter()


@router.get("/", response_model=RosterResponse)
def read_roster(session: SessionDep) -> RosterResponse:
    """Current roster in display order."""
    players = get_roster_names(session)
    logger.debug(f"Retrieved roster of {len(players)} players")
    return RosterResponse(players=players, max_players=MAX_ROSTER_SIZE)


@router.post(
    "/",
    response_model=RosterResponse,
    status_code=status.HTTP_201_CREATED,
    responses={**CONFLICT, **UNPROCESSABLE},
)
def create_roster_player(body: PlayerCreate, session: SessionDep) -> RosterResponse:
    """Add a player to the roster."""
    logger.info(f"Adding player to roster: {body.name}")
    players = add_player(session, body.name)
    return RosterResponse(players=players, max_players=MAX_ROSTER_SIZE)


@router.delete(
    "/{name}", response_model=RosterResponse, responses={**NOT_FOUND, **CONFLICT}
)
def delete_roster_player(name: str, session: SessionDep) -> RosterResponse:
    """Remove a player from the roster. Their history is kept."""
    logger.info(f"Removing player from roster: {name}")
    players = remove_player(session, name)
    return RosterResponse(players=players, max_players=MAX_ROSTER_SIZE)
