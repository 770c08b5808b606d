"""
TourGpX — GPX Writer & Reader

Writes the converted tour as a GPX 1.1 track and reads GPX tracks back
(--info summarizes the file as read back from disk).
"""

from __future__ import annotations
import re
import xml.etree.ElementTree as ET
from decimal import Decimal
from xml.dom import minidom
from xml.parsers.expat import ExpatError

from errors import ParseError, WriteError
from models import GpsPoint, GpsSegment, GpsTrack, GpxDocument

# ─────────────────────────────────────────────────────────────
# Helpers
# ─────────────────────────────────────────────────────────────

SOFT_NAME = "TourGpX"
SOFT_VERSION = "1.0"
SOFT_FULL_NAME = f"{SOFT_NAME} v{SOFT_VERSION}"

XML_HEADER = '<?xml version="1.0" encoding="UTF-8"?>\n'
GPX_NAMESPACE = "http://www.topografix.com/GPX/1/1"


def _safe_float(s: str, default: float = 0.0) -> float:
    try:
        return float(s.strip())
    except (ValueError, TypeError, AttributeError):
        return default


# Characters XML 1.0 does not allow, lone surrogates included
_XML_INVALID = re.compile(
    r"[^\x09\x0A\x0D\x20-\uD7FF\uE000-\uFFFD\U00010000-\U0010FFFF]"
)


def _xml_text(s: str) -> str:
    return _XML_INVALID.sub("\uFFFD", s)


def _fmt_float(value: float) -> str:
    """Shortest round-tripping decimal, never in exponent notation."""
    return format(Decimal(repr(float(value))), "f")


def _xml_prettify(root: ET.Element) -> str:
    rough = ET.tostring(root, encoding="unicode")
    return minidom.parseString(rough).documentElement.toprettyxml(indent="  ")


# ─────────────────────────────────────────────────────────────
# GPX (GPS Exchange Format) - .gpx
# ─────────────────────────────────────────────────────────────

def gpx_to_string(document: GpxDocument) -> str:
    """Serialize a document, header line included."""
    root = ET.Element("gpx")
    root.set("version", _xml_text(document.version))
    root.set("creator", _xml_text(document.creator))
    root.set("xmlns", GPX_NAMESPACE)

    if document.name:
        metadata = ET.SubElement(root, "metadata")
        ET.SubElement(metadata, "name").text = _xml_text(document.name)

    for track in document.tracks:
        trk = ET.SubElement(root, "trk")
        if track.name:
            ET.SubElement(trk, "name").text = _xml_text(track.name)
        for segment in track.segments:
            trkseg = ET.SubElement(trk, "trkseg")
            for pt in segment:
                trkpt = ET.SubElement(trkseg, "trkpt")
                trkpt.set("lat", _fmt_float(pt.lat))
                trkpt.set("lon", _fmt_float(pt.lng))
                if pt.alt != 0:
                    ET.SubElement(trkpt, "ele").text = _fmt_float(pt.alt)

    return XML_HEADER + _xml_prettify(root)


def write_gpx(filepath: str, document: GpxDocument):
    """Write GPX file, replacing any existing file."""
    try:
        content = gpx_to_string(document)
    except (ExpatError, UnicodeError, ValueError) as e:
        raise WriteError("error serializing GPX", cause=e) from e
    try:
        with open(filepath, "w", encoding="utf-8") as f:
            f.write(content)
    except (OSError, UnicodeError) as e:
        raise WriteError(f"error writing {filepath}", cause=e) from e


def read_gpx(filepath: str) -> GpxDocument:
    """Read the tracks of a GPX file (1.0, 1.1 or no namespace)."""
    try:
        tree = ET.parse(filepath)
    except ET.ParseError as e:
        raise ParseError(f"malformed GPX in {filepath}", cause=e) from e
    except OSError as e:
        raise ParseError(f"cannot read {filepath}", cause=e) from e
    root = tree.getroot()

    # Strip namespace for easier parsing
    ns = ""
    m = re.match(r"\{(.+?)\}", root.tag)
    if m:
        ns = m.group(1)

    def _tag(name):
        return f"{{{ns}}}{name}" if ns else name

    def _text(elem, name) -> str:
        child = elem.find(_tag(name))
        if child is not None and child.text:
            return child.text
        return ""

    document = GpxDocument(
        version=root.get("version", ""),
        creator=root.get("creator", ""),
        name=_text(root, "name"),
    )
    metadata = root.find(_tag("metadata"))
    if metadata is not None and not document.name:
        document.name = _text(metadata, "name")

    for trk in root.findall(_tag("trk")):
        track = GpsTrack(name=_text(trk, "name"))
        for trkseg in trk.findall(_tag("trkseg")):
            segment = GpsSegment()
            for trkpt in trkseg.findall(_tag("trkpt")):
                segment.append(GpsPoint(
                    lat=_safe_float(trkpt.get("lat", "0")),
                    lng=_safe_float(trkpt.get("lon", "0")),
                    alt=_safe_float(_text(trkpt, "ele")),
                ))
            track.segments.append(segment)
        document.tracks.append(track)

    return document
