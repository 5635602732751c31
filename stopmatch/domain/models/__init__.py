from .checkpoint import Checkpoint
from .geo import GeoPoint
from .route import BUS_STOP_KIND, Marker, TransitRoute
from .stop import NearestStop, Stop

__all__ = [
    "BUS_STOP_KIND",
    "Checkpoint",
    "GeoPoint",
    "Marker",
    "NearestStop",
    "Stop",
    "TransitRoute",
]
