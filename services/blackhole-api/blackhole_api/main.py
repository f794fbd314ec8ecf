from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel
from lensing_core.errors import PreconditionError
from lensing_core.models import BlackHole

app = FastAPI(title="Black Hole API")
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(PreconditionError)
async def precondition_error(request: Request, exc: PreconditionError):
    return JSONResponse(status_code=422, content={"detail": str(exc)})


class BHReq(BaseModel):
    mass: float
    x: float = 0.0
    y: float = 0.0

@app.post("/derived")
def derived(req: BHReq):
    bh = BlackHole(req.mass, (req.x, req.y))
    return {"mass": bh.mass, "position": list(bh.position), "schwarzschild_radius": bh.rs}
