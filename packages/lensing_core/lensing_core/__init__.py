from .constants import c, G, M_PI, schwarzschild_radius
from .errors import PreconditionError, SpawnRejected
from .models import BlackHole, RayStage
from .ray import Ray
from .integrators import geodesic_rhs, rk4_step
from .trajectory import integrate_trajectory
from .population import RayPopulation
from .trail_buffer import RESTART_SENTINEL, TrailBuffer, TrailBufferAssembler
from .settings import Settings, get_settings
from .simulation import Simulation
__all__ = ["c","G","M_PI","schwarzschild_radius","PreconditionError","SpawnRejected",
           "BlackHole","RayStage","Ray","geodesic_rhs","rk4_step","integrate_trajectory",
           "RayPopulation","RESTART_SENTINEL","TrailBuffer","TrailBufferAssembler",
           "Settings","get_settings","Simulation"]
