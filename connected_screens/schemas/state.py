from pydantic import BaseModel, ConfigDict, Field
from typing_extensions import Annotated

FiniteNumber = Annotated[float, Field(strict=True, allow_inf_nan=False)]


class Position(BaseModel):  # type: ignore[misc]
    model_config = ConfigDict(extra="ignore")

    x: FiniteNumber
    y: FiniteNumber


class SharedState(BaseModel):  # type: ignore[misc]
    """Ball position and active screen index shared by every client."""

    position: Position
    screen_index: Annotated[int, Field(ge=0)]
