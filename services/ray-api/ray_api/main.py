from threading import Lock
from typing import List, Optional
import logging

from fastapi import FastAPI, Query, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field
from lensing_core.errors import PreconditionError
from lensing_core.models import BlackHole
from lensing_core.settings import get_settings
from lensing_core.simulation import Simulation
from lensing_core.trail_buffer import TrailBuffer
from lensing_core.trajectory import integrate_trajectory

settings = get_settings()
logging.basicConfig(level=settings.log_level)
logger = logging.getLogger(__name__)

app = FastAPI(title="Ray API")
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)

sim = Simulation.from_settings(settings)
sim_lock = Lock()


@app.exception_handler(PreconditionError)
async def precondition_error(request: Request, exc: PreconditionError):
    return JSONResponse(status_code=422, content={"detail": str(exc)})


class Vec2(BaseModel):
    x: float; y: float

class SpawnReq(BaseModel):
    position: Vec2
    direction: Vec2
    max_distance: Optional[float] = None
    max_trail_length: Optional[int] = None

class FanReq(BaseModel):
    position: Vec2
    num_rays: Optional[int] = None

class AdvanceReq(BaseModel):
    dlam: Optional[float] = None

class FrameReq(BaseModel):
    dlam: Optional[float] = None
    max_points: Optional[int] = Field(default=None, ge=0)

class SpeedReq(BaseModel):
    speed: float

class IntegrateReq(BaseModel):
    mass: float
    x: float; y: float
    vx: float; vy: float
    steps: int = 1000
    dlam: float = 1.0


def _buffer_payload(buf: TrailBuffer) -> dict:
    points: List[float] = buf.points.tolist()
    return {"count": buf.count, "points": points}


def _diagnostics() -> dict:
    return {
        "schwarzschild_radius": sim.schwarzschild_radius(),
        "ray_count": sim.ray_count(),
        "alive_count": sim.population.alive_count(),
        "pending_count": sim.pending_count(),
        "speed": sim.speed,
    }


@app.post("/rays", status_code=201)
def spawn(req: SpawnReq):
    with sim_lock:
        sim.spawn((req.position.x, req.position.y), (req.direction.x, req.direction.y),
                  req.max_distance, req.max_trail_length)
        return {"ray_count": sim.ray_count()}

@app.post("/rays/fan", status_code=201)
def spawn_fan(req: FanReq):
    with sim_lock:
        spawned = sim.spawn_fan((req.position.x, req.position.y), req.num_rays)
        return {"spawned": spawned, "ray_count": sim.ray_count()}

@app.post("/advance")
def advance(req: AdvanceReq):
    with sim_lock:
        sim.advance(req.dlam)
        return _diagnostics()

@app.get("/buffer")
def buffer(max_points: Optional[int] = Query(default=None, ge=0)):
    with sim_lock:
        return _buffer_payload(sim.build(max_points))

@app.post("/frame")
def frame(req: FrameReq):
    with sim_lock:
        return _buffer_payload(sim.frame(req.dlam, req.max_points))

@app.post("/speed")
def speed(req: SpeedReq):
    with sim_lock:
        sim.set_speed(req.speed)
        return {"speed": sim.speed}

@app.post("/reset")
def reset():
    with sim_lock:
        sim.reset()
        return _diagnostics()

@app.get("/diagnostics")
def diagnostics():
    with sim_lock:
        return _diagnostics()

@app.post("/integrate")
def integrate(req: IntegrateReq):
    bh = BlackHole(mass=req.mass)
    return integrate_trajectory(bh, req.x, req.y, req.vx, req.vy, req.steps, req.dlam)


def run(host: str = "127.0.0.1", port: int = 8000, reload: bool = False) -> None:
    import uvicorn

    uvicorn.run("ray_api.main:app", host=host, port=port, reload=reload)


if __name__ == "__main__":
    run()
