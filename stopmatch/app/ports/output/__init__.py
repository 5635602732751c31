from .checkpoint_repository import ICheckpointRepository
from .route_repository import IRouteRepository
from .stop_repository import IStopRepository
from .transit_store import TransitStore

__all__ = [
    "ICheckpointRepository",
    "IRouteRepository",
    "IStopRepository",
    "TransitStore",
]
