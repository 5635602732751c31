from __future__ import annotations

from dataclasses import dataclass

from .checkpoint_repository import ICheckpointRepository
from .route_repository import IRouteRepository
from .stop_repository import IStopRepository


@dataclass(frozen=True, slots=True)
class TransitStore:
    """Connection handle over the three collections.

    Built once at process start and handed to services; nothing reaches for
    a module-level client.
    """

    stops: IStopRepository
    checkpoints: ICheckpointRepository
    routes: IRouteRepository
