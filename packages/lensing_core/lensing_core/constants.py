import math
c = 299_792_458.0
G = 6.67430e-11
M_PI = math.pi

# Sagittarius A*
SGR_A_MASS = 8.54e36

DEFAULT_DLAMBDA = 1.0e8
DEFAULT_MAX_DISTANCE = 2.0e11
DEFAULT_MAX_TRAIL_LENGTH = 500
DEFAULT_MAX_POINTS = 2 << 20
DEFAULT_FAN_RAYS = 100

WORLD_WIDTH = 1.0e11
WORLD_HEIGHT = 7.5e10

def schwarzschild_radius(mass: float) -> float:
    return 2.0 * G * mass / (c * c)
