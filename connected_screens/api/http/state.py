"""Read-only snapshot of the shared ball state."""

from fastapi import APIRouter, Request
from pydantic import Field

from connected_screens.constants import (
    BALL_POSITION_FIELD,
    CURRENT_SCREEN_FIELD,
)
from connected_screens.schemas.messages import StateMessage

router = APIRouter()


class StateResponse(StateMessage):
    connections: int = Field(ge=0)


@router.get(
    "/state",
    response_model=StateResponse,
    response_model_by_alias=True,
    summary="Current ball position and screen",
    tags=["state"],
)
async def get_state(request: Request) -> StateResponse:
    """Return the state a newly connecting screen would be greeted with."""
    broadcaster = request.app.state.broadcaster
    state = broadcaster.snapshot()

    return StateResponse.model_validate(
        {
            BALL_POSITION_FIELD: state.position,
            CURRENT_SCREEN_FIELD: state.screen_index,
            "connections": len(broadcaster.registry),
        }
    )
