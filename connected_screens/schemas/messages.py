from typing import Literal

from pydantic import BaseModel, ConfigDict, Field
from typing_extensions import Annotated

from connected_screens.api.ws.constants import MessageType
from connected_screens.constants import (
    BALL_POSITION_FIELD,
    CURRENT_SCREEN_FIELD,
)
from connected_screens.schemas.state import Position, SharedState


class MoveMessage(BaseModel):  # type: ignore[misc]
    """Client request to overwrite the shared state."""

    model_config = ConfigDict(extra="ignore")

    type: Literal["move"]
    position: Position
    screen: Annotated[int, Field(strict=True, ge=0)]


class StateMessage(BaseModel):  # type: ignore[misc]
    model_config = ConfigDict(populate_by_name=True)

    ball_position: Position = Field(alias=BALL_POSITION_FIELD)
    current_screen: int = Field(alias=CURRENT_SCREEN_FIELD)

    def to_wire(self) -> dict[str, object]:
        return self.model_dump(mode="json", by_alias=True)


class InitMessage(StateMessage):
    type: Literal["init"] = MessageType.INIT.value
    id: int

    @classmethod
    def from_state(cls, connection_id: int, state: SharedState) -> "InitMessage":
        return cls(
            id=connection_id,
            ball_position=state.position,
            current_screen=state.screen_index,
        )


class UpdateMessage(StateMessage):
    type: Literal["update"] = MessageType.UPDATE.value

    @classmethod
    def from_state(cls, state: SharedState) -> "UpdateMessage":
        return cls(
            ball_position=state.position, current_screen=state.screen_index
        )
