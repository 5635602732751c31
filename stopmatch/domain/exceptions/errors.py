class StopMatchError(Exception):
    """Base exception for stop resolution and network admin failures."""


class InvalidInput(StopMatchError):
    """Raised when a request carries missing or malformed fields."""


class InvalidCoordinates(InvalidInput):
    """Raised when a latitude/longitude pair cannot be parsed or is out of range."""


class InvalidRoute(InvalidInput):
    """Raised when a route payload has malformed markers or polylines."""


class NotFound(StopMatchError):
    """Raised when a required entity does not exist."""


class NoStopsFound(NotFound):
    """Raised when nearest-stop resolution runs against an empty stop set."""

    def __init__(self, message: str = "No bus stops found") -> None:
        super().__init__(message)


class Conflict(StopMatchError):
    """Raised when an entity with the same identity already exists."""


class StopAlreadyExists(Conflict):
    def __init__(self, message: str = "Bus stop already exists") -> None:
        super().__init__(message)


class CheckpointAlreadyExists(Conflict):
    def __init__(self, message: str = "Checkpoint already exists") -> None:
        super().__init__(message)


class StoreError(StopMatchError):
    """Raised by persistence adapters when the backing store fails."""
