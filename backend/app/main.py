import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from app.api.routes import router
from app.services.compass import CompassRegistry
from app.services.frame_scheduler import AsyncioFrameScheduler

logging.basicConfig(level=logging.INFO)


@asynccontextmanager
async def lifespan(app: FastAPI):
    app.state.compasses = CompassRegistry(AsyncioFrameScheduler())
    yield
    app.state.compasses.close_all()


app = FastAPI(title="Bus Compass", version="0.1.0", lifespan=lifespan)
app.include_router(router)


@app.get("/health")
async def health():
    return {"status": "ok", "compasses": len(app.state.compasses)}
