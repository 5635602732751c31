from __future__ import annotations

from dataclasses import dataclass

from .geo import GeoPoint


@dataclass(frozen=True, slots=True)
class Checkpoint:
    """Named point, unique by name. Unrelated to stops."""

    location: GeoPoint
    name: str
    checkpoint_id: str | None = None
