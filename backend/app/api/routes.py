import logging
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Request

from app.schemas.compass import (
    BearingRequest,
    BearingResponse,
    CompassCreateRequest,
    CompassResponse,
    PositionUpdate,
    PositionUpdateResponse,
)
from app.services.compass import Compass, CompassNotFoundError, CompassRegistry
from app.utils.geo import bearing_to_direction, compute_bearing

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1")


def get_registry(request: Request) -> CompassRegistry:
    return request.app.state.compasses


def _compass_response(compass: Compass) -> CompassResponse:
    return CompassResponse(id=compass.id, **compass.snapshot().model_dump())


@router.post("/bearing", response_model=BearingResponse)
async def bearing(req: BearingRequest):
    value = compute_bearing(req.from_, req.to)
    return BearingResponse(bearing=value, direction=bearing_to_direction(value))


@router.post("/compasses", response_model=CompassResponse, status_code=201)
async def create_compass(
    req: CompassCreateRequest | None = None,
    registry: CompassRegistry = Depends(get_registry),
):
    req = req or CompassCreateRequest()
    compass = registry.create(needle_gradient=req.needle_gradient, seed_degrees=req.seed_degrees)
    return _compass_response(compass)


@router.get("/compasses/{compass_id}", response_model=CompassResponse)
async def get_compass(compass_id: UUID, registry: CompassRegistry = Depends(get_registry)):
    try:
        compass = registry.get(compass_id)
    except CompassNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return _compass_response(compass)


@router.post("/compasses/{compass_id}/positions", response_model=PositionUpdateResponse)
async def update_positions(
    compass_id: UUID,
    req: PositionUpdate,
    registry: CompassRegistry = Depends(get_registry),
):
    try:
        compass = registry.get(compass_id)
        updated = compass.update_positions(req.previous, req.current)
    except CompassNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except Exception as e:
        logger.exception("Position update failed")
        raise HTTPException(status_code=500, detail=str(e))
    return PositionUpdateResponse(updated=updated, **_compass_response(compass).model_dump())


@router.delete("/compasses/{compass_id}")
async def delete_compass(compass_id: UUID, registry: CompassRegistry = Depends(get_registry)):
    try:
        registry.remove(compass_id)
    except CompassNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return {"ok": True}
