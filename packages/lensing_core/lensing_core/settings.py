from dataclasses import dataclass
from functools import lru_cache
from typing import Callable, TypeVar
import math
import os

from .constants import (DEFAULT_DLAMBDA, DEFAULT_FAN_RAYS, DEFAULT_MAX_DISTANCE,
                        DEFAULT_MAX_POINTS, DEFAULT_MAX_TRAIL_LENGTH, SGR_A_MASS)
from .errors import PreconditionError

T = TypeVar("T")

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off", ""}


def _env(name: str, cast: Callable[[str], T], default: T) -> T:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        return cast(raw.strip())
    except ValueError as exc:
        raise PreconditionError(f"invalid value for {name}: {raw!r}") from exc


def _var(field: str) -> str:
    return f"LENSING_{field.upper()}"


def _flag(raw: str) -> bool:
    value = raw.lower()
    if value in _TRUE:
        return True
    if value in _FALSE:
        return False
    raise ValueError(raw)


@dataclass(frozen=True)
class Settings:
    mass: float = SGR_A_MASS
    dlambda: float = DEFAULT_DLAMBDA
    max_distance: float = DEFAULT_MAX_DISTANCE
    max_trail_length: int = DEFAULT_MAX_TRAIL_LENGTH
    max_points: int = DEFAULT_MAX_POINTS
    fan_rays: int = DEFAULT_FAN_RAYS
    seed_scene: bool = True
    log_level: str = "INFO"
    celery_broker_url: str = "redis://redis:6379/0"
    celery_backend_url: str = "redis://redis:6379/1"

    def __post_init__(self):
        for name in ("mass", "dlambda", "max_distance"):
            value = getattr(self, name)
            if not math.isfinite(value) or value <= 0.0:
                raise PreconditionError(f"{_var(name)} must be positive and finite, got {value!r}")
        for name in ("max_trail_length", "fan_rays"):
            if getattr(self, name) < 1:
                raise PreconditionError(f"{_var(name)} must be at least 1")
        if self.max_points < 0:
            raise PreconditionError(f"{_var('max_points')} must be non-negative")

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            mass=_env("LENSING_MASS", float, SGR_A_MASS),
            dlambda=_env("LENSING_DLAMBDA", float, DEFAULT_DLAMBDA),
            max_distance=_env("LENSING_MAX_DISTANCE", float, DEFAULT_MAX_DISTANCE),
            max_trail_length=_env("LENSING_MAX_TRAIL_LENGTH", int, DEFAULT_MAX_TRAIL_LENGTH),
            max_points=_env("LENSING_MAX_POINTS", int, DEFAULT_MAX_POINTS),
            fan_rays=_env("LENSING_FAN_RAYS", int, DEFAULT_FAN_RAYS),
            seed_scene=_env("LENSING_SEED_SCENE", _flag, True),
            log_level=_env("LOG_LEVEL", str.upper, "INFO"),
            celery_broker_url=_env("CELERY_BROKER_URL", str, "redis://redis:6379/0"),
            celery_backend_url=_env("CELERY_BACKEND_URL", str, "redis://redis:6379/1"),
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings.from_env()
