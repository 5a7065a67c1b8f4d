"""Minimal GPX track reading and writing for the command line tools."""

from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence
import xml.etree.ElementTree as StdET

from defusedxml import ElementTree as ET

GPX_NS = {"g": "http://www.topografix.com/GPX/1/1"}
StdET.register_namespace("", GPX_NS["g"])


def _local_name(tag: str) -> str:
    return tag.rsplit("}", 1)[-1]


def _child_text(element: Any, name: str) -> Optional[str]:
    for child in element:
        if _local_name(child.tag) == name and child.text is not None:
            return child.text.strip()
    return None


def load_gpx_points(path: Path) -> List[Dict[str, Any]]:
    """Return every ``<trkpt>`` in ``path`` as a ``{"lat", "lon", ...}`` dict.

    ``ele`` and ``time`` are included when the point carries them. GPX 1.0
    and 1.1 files are both accepted since matching ignores the namespace.
    """

    tree = ET.parse(path)
    root = tree.getroot()
    points: List[Dict[str, Any]] = []
    for element in root.iter():
        if _local_name(element.tag) != "trkpt":
            continue
        try:
            record: Dict[str, Any] = {
                "lat": float(element.attrib["lat"]),
                "lon": float(element.attrib["lon"]),
            }
        except (KeyError, ValueError) as exc:
            raise ValueError("GPX track point is missing lat/lon attributes") from exc
        ele = _child_text(element, "ele")
        if ele is not None:
            record["ele"] = float(ele)
        time_text = _child_text(element, "time")
        if time_text is not None:
            record["time"] = time_text
        points.append(record)
    return points


def _format_time(value: float) -> str:
    return (
        datetime.fromtimestamp(value, tz=timezone.utc)
        .isoformat()
        .replace("+00:00", "Z")
    )


def build_gpx_tree(
    coords: Sequence[tuple[float, float]],
    *,
    elevations: Optional[Sequence[Optional[float]]] = None,
    timestamps: Optional[Sequence[Optional[float]]] = None,
    name: str = "Simplified track",
) -> StdET.ElementTree:
    """Build a single-segment GPX 1.1 document."""

    gpx = StdET.Element(
        f"{{{GPX_NS['g']}}}gpx",
        {"version": "1.1", "creator": "track_simplify"},
    )
    trk = StdET.SubElement(gpx, f"{{{GPX_NS['g']}}}trk")
    trk_name = StdET.SubElement(trk, f"{{{GPX_NS['g']}}}name")
    trk_name.text = name
    trkseg = StdET.SubElement(trk, f"{{{GPX_NS['g']}}}trkseg")
    for i, (lat, lon) in enumerate(coords):
        trkpt = StdET.SubElement(
            trkseg,
            f"{{{GPX_NS['g']}}}trkpt",
            {"lat": f"{lat:.7f}", "lon": f"{lon:.7f}"},
        )
        ele = elevations[i] if elevations is not None and i < len(elevations) else None
        if ele is not None:
            ele_el = StdET.SubElement(trkpt, f"{{{GPX_NS['g']}}}ele")
            ele_el.text = f"{ele:.1f}"
        ts = timestamps[i] if timestamps is not None and i < len(timestamps) else None
        if ts is not None:
            time_el = StdET.SubElement(trkpt, f"{{{GPX_NS['g']}}}time")
            time_el.text = _format_time(ts)
    return StdET.ElementTree(gpx)


def gpx_to_string(tree: StdET.ElementTree) -> str:
    StdET.indent(tree, space="  ")
    body = StdET.tostring(tree.getroot(), encoding="unicode")
    return '<?xml version="1.0" encoding="UTF-8"?>\n' + body + "\n"
