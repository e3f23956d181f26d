"""Domain value objects for the firelite client.

Value objects are immutable types that represent protocol concepts with
self-validation. They have no identity, only value.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Any

from firelite.shared.utils.datetime import format_rfc3339


@dataclass(frozen=True)
class GeoPoint:
    """Latitude/longitude pair stored as a geoPointValue.

    Latitude must be in [-90, 90] and longitude in [-180, 180].
    """

    latitude: float
    longitude: float

    def __post_init__(self) -> None:
        """Validate numeric type and range.

        Raises:
            ValueError: If either coordinate is not a number or out of range.
        """
        for name in ("latitude", "longitude"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise ValueError(f"GeoPoint {name} must be a number")
        if not -90 <= self.latitude <= 90:
            raise ValueError("GeoPoint latitude must be between -90 and 90")
        if not -180 <= self.longitude <= 180:
            raise ValueError("GeoPoint longitude must be between -180 and 180")

    def to_wire(self) -> dict[str, float]:
        return {"latitude": float(self.latitude), "longitude": float(self.longitude)}


@dataclass(frozen=True)
class Precondition:
    """Condition on the stored document checked by the server before a write.

    Exactly one of exists or update_time must be set.
    """

    exists: bool | None = None
    update_time: datetime | None = None

    def __post_init__(self) -> None:
        if (self.exists is None) == (self.update_time is None):
            raise ValueError("Precondition requires exactly one of exists or update_time")

    def to_wire(self) -> dict[str, Any]:
        """Return the currentDocument message for this precondition."""
        if self.exists is not None:
            return {"exists": self.exists}
        return {"updateTime": format_rfc3339(self.update_time)}
