from uuid import UUID

from pydantic import BaseModel, Field


class GeoPoint(BaseModel):
    lat: float = Field(..., ge=-90, le=90)
    lng: float = Field(..., ge=-180, le=180)

    model_config = {"frozen": True}


class BearingRequest(BaseModel):
    from_: GeoPoint | None = Field(None, alias="from")
    to: GeoPoint | None = None

    model_config = {"populate_by_name": True}


class BearingResponse(BaseModel):
    bearing: float
    direction: str


class CompassCreateRequest(BaseModel):
    needle_gradient: tuple[str, str] | None = Field(None, description="Needle colours [start, end]")
    seed_degrees: float = Field(0.0, ge=0, lt=360)


class PositionUpdate(BaseModel):
    previous: GeoPoint | None = None
    current: GeoPoint | None = None


class CompassState(BaseModel):
    direction: str | None
    target_degrees: float
    displayed_degrees: float
    rounded_degrees: int
    running: bool
    needle_gradient: tuple[str, str]


class CompassResponse(CompassState):
    id: UUID


class PositionUpdateResponse(CompassResponse):
    updated: bool
