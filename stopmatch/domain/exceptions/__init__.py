from .errors import (
    CheckpointAlreadyExists,
    Conflict,
    InvalidCoordinates,
    InvalidInput,
    InvalidRoute,
    NoStopsFound,
    NotFound,
    StopAlreadyExists,
    StopMatchError,
    StoreError,
)

__all__ = [
    "CheckpointAlreadyExists",
    "Conflict",
    "InvalidCoordinates",
    "InvalidInput",
    "InvalidRoute",
    "NoStopsFound",
    "NotFound",
    "StopAlreadyExists",
    "StopMatchError",
    "StoreError",
]
