"""
TourGpX — Tour to GPX Converter
Decodes the tour payload and maps it onto the GPX model.

Expected payload shape (other keys are ignored)::

    {"page": {"_embedded": {"tour": {
        "name": "...",
        "_embedded": {"coordinates": {"items": [
            {"lat": 48.1, "lng": 11.6, "alt": 520}, ...
        ]}}
    }}}}
"""

from __future__ import annotations
import json
from dataclasses import dataclass, field
from typing import List, Tuple

from errors import ConversionError, ParseError
from models import GpsPoint, GpsSegment, GpsTrack, GpxDocument

_TOUR_PATH = ("page", "_embedded", "tour")
_ITEMS_PATH = ("_embedded", "coordinates", "items")


@dataclass
class TourData:
    """Raw tour record: name and (lat, lng, alt) items in path order."""
    name: str = ""
    items: List[Tuple[float, float, float]] = field(default_factory=list)


def _walk(node, path, where: str):
    for key in path:
        if not isinstance(node, dict):
            raise ParseError(f"expected an object at '{where}'")
        if key not in node:
            raise ParseError(f"missing key '{key}' under '{where}'")
        node = node[key]
        where = f"{where}.{key}"
    return node, where


def _number(item: dict, key: str, index: int, default=None) -> float:
    value = item.get(key, default)
    if value is None:
        value = default
    # bool is an int subclass, but never a coordinate
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ParseError(f"coordinate {index}: '{key}' is not a number: {value!r}")
    try:
        return float(value)
    except OverflowError as e:
        raise ParseError(f"coordinate {index}: '{key}' is out of float range", cause=e) from e


def parse_tour_json(text: str) -> TourData:
    """Decode the extracted payload into a TourData record."""
    try:
        data = json.loads(text)
    except ValueError as e:
        raise ParseError("invalid JSON", cause=e) from e
    except RecursionError as e:
        raise ParseError("JSON nested too deeply", cause=e) from e

    tour, where = _walk(data, _TOUR_PATH, "$")
    if not isinstance(tour, dict):
        raise ParseError(f"expected an object at '{where}'")
    items, where = _walk(tour, _ITEMS_PATH, where)
    if not isinstance(items, list):
        raise ParseError(f"expected a list at '{where}'")

    name = tour.get("name") or ""
    if not isinstance(name, str):
        raise ParseError(f"tour name is not a string: {name!r}")

    result = TourData(name=name)
    for i, item in enumerate(items):
        if not isinstance(item, dict):
            raise ParseError(f"coordinate {i} is not an object")
        result.items.append((
            _number(item, "lat", i),
            _number(item, "lng", i),
            _number(item, "alt", i, default=0.0),
        ))
    return result


def tour_to_gpx(tour: TourData, creator: str) -> GpxDocument:
    """Build a single-track, single-segment document from the tour."""
    if not tour.items:
        raise ConversionError("no coordinates found in tour data")

    segment = GpsSegment()
    for lat, lng, alt in tour.items:
        pt = GpsPoint(lat=lat, lng=lng, alt=alt)
        try:
            pt.validate()
        except ConversionError as e:
            raise ConversionError("invalid point data", cause=e) from e
        segment.append(pt)

    return GpxDocument(
        version="1.1",
        creator=creator,
        name=tour.name,
        tracks=[GpsTrack(name=tour.name, segments=[segment])],
    )
