"""
TourGpX — Tour to GPX Converter
Data models: GpsPoint, GpsSegment, GpsTrack, GpxDocument
"""

from __future__ import annotations
import math
from dataclasses import dataclass, field
from typing import Iterator, List, Tuple

from errors import ConversionError


@dataclass
class GpsPoint:
    """A single track point."""
    lat: float = 0.0
    lng: float = 0.0
    alt: float = 0.0

    def validate(self):
        """Raise ConversionError if the coordinates are out of range."""
        if not -90 <= self.lat <= 90:
            raise ConversionError(f"invalid latitude: {self.lat:f}")
        if not -180 <= self.lng <= 180:
            raise ConversionError(f"invalid longitude: {self.lng:f}")

    def distance_from(self, other: GpsPoint) -> float:
        """Haversine distance in meters."""
        R = 6371000  # Earth radius in meters
        lat1, lat2 = math.radians(self.lat), math.radians(other.lat)
        dlat = math.radians(other.lat - self.lat)
        dlng = math.radians(other.lng - self.lng)
        a = math.sin(dlat / 2) ** 2 + math.cos(lat1) * math.cos(lat2) * math.sin(dlng / 2) ** 2
        return R * 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))


class GpsPointArray:
    """Ordered collection of GPS points."""

    def __init__(self, points=None):
        self._points: List[GpsPoint] = list(points or [])

    def __len__(self) -> int:
        return len(self._points)

    def __getitem__(self, index) -> GpsPoint:
        return self._points[index]

    def __iter__(self) -> Iterator[GpsPoint]:
        return iter(self._points)

    def __bool__(self) -> bool:
        return len(self._points) > 0

    @property
    def empty(self) -> bool:
        return len(self._points) == 0

    def append(self, point: GpsPoint):
        self._points.append(point)

    def total_distance(self) -> float:
        """Total distance in meters."""
        total = 0.0
        for i in range(1, len(self._points)):
            total += self._points[i - 1].distance_from(self._points[i])
        return total

    def bounds(self) -> Tuple[float, float, float, float]:
        """Returns (min_lat, min_lng, max_lat, max_lng)."""
        if not self._points:
            return (0, 0, 0, 0)
        lats = [p.lat for p in self._points]
        lngs = [p.lng for p in self._points]
        return (min(lats), min(lngs), max(lats), max(lngs))


class GpsSegment(GpsPointArray):
    pass


@dataclass
class GpsTrack:
    name: str = ""
    segments: List[GpsSegment] = field(default_factory=list)

    def points(self) -> GpsPointArray:
        """All points of all segments, in path order."""
        return GpsPointArray(pt for seg in self.segments for pt in seg)


@dataclass
class GpxDocument:
    """Root of a GPX file: version/creator attributes, a name and tracks."""
    version: str = "1.1"
    creator: str = ""
    name: str = ""
    tracks: List[GpsTrack] = field(default_factory=list)
