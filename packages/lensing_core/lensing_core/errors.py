class PreconditionError(ValueError):
    """An entity would be created in an invalid state."""


class SpawnRejected(PreconditionError):
    """A ray cannot be launched from the requested position/direction."""
