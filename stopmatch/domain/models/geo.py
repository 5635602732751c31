from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any

from stopmatch.domain.exceptions import InvalidCoordinates


def _to_float(name: str, raw: Any) -> float:
    if raw is None or isinstance(raw, bool):
        raise InvalidCoordinates(f"Missing or invalid {name}: {raw!r}")
    if isinstance(raw, str):
        raw = raw.strip()
    try:
        value = float(raw)
    except (TypeError, ValueError) as exc:
        raise InvalidCoordinates(f"Invalid {name}: {raw!r}") from exc
    if not math.isfinite(value):
        raise InvalidCoordinates(f"Invalid {name}: {raw!r}")
    return value


@dataclass(frozen=True, slots=True)
class GeoPoint:
    lat: float
    lon: float

    def __post_init__(self) -> None:
        if not (-90.0 <= self.lat <= 90.0):
            raise InvalidCoordinates(f"Invalid latitude: {self.lat}")
        if not (-180.0 <= self.lon <= 180.0):
            raise InvalidCoordinates(f"Invalid longitude: {self.lon}")

    @classmethod
    def parse(cls, lat: Any, lon: Any) -> "GeoPoint":
        """Build a point from untyped transport values (query strings, JSON).

        Strings and ints are coerced to float. Missing, non-numeric or
        non-finite values raise InvalidCoordinates instead of producing NaN.
        """

        # -0.0 and 0.0 must compare and serialize as the same coordinate.
        return cls(lat=_to_float("latitude", lat) + 0.0, lon=_to_float("longitude", lon) + 0.0)
