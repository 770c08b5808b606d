"""
TourGpX — Tour to GPX Converter
==========================================
Download a public tour page and save its route as a GPX track.
Zero external dependencies.

Quick start:
    python tourgpx.py -o tour.gpx https://www.komoot.com/tour/123456

Library:
    from converter import Converter
    Converter().convert("https://www.komoot.com/tour/123456", "tour.gpx")
"""

from models import GpsPoint, GpsSegment, GpsTrack, GpxDocument
from config import Configuration, default_config
from errors import (
    TourError, FetchError, ExtractionError, ParseError,
    ConversionError, WriteError, DeadlineExceeded,
)
from converter import Converter
from extractor import extract_json_from_html
from tour import TourData, parse_tour_json, tour_to_gpx
from formats import read_gpx, write_gpx

__version__ = "1.0.0"
__all__ = [
    "GpsPoint", "GpsSegment", "GpsTrack", "GpxDocument",
    "Configuration", "default_config",
    "TourError", "FetchError", "ExtractionError", "ParseError",
    "ConversionError", "WriteError", "DeadlineExceeded",
    "Converter", "extract_json_from_html",
    "TourData", "parse_tour_json", "tour_to_gpx",
    "read_gpx", "write_gpx",
]
