"""Static hole geometry consumed by the terrain calculator.

Holes arrive from the course content service as plain dicts. Only the
structural shape is checked here; content validation belongs to the loader.
Course coordinates are ``(x, y, z)``: x lateral yards, y yards down the
hole, z elevation in feet.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Tuple

Point3 = Tuple[float, float, float]
Point2 = Tuple[float, float]

HAZARD_TYPES = ("bunker", "water", "rough", "out_of_bounds")
PENALTY_KINDS = ("stroke", "distance", "replay")
TERRAIN_TYPES = ("hill", "ridge", "valley", "depression")


@dataclass(frozen=True)
class ElevationPoint:
    distance: float  # yards from tee
    elevation: float  # feet relative to tee
    slope: float = 0.0  # percent grade


@dataclass(frozen=True)
class SlopeRegion:
    direction: float  # degrees
    magnitude: float  # percent
    start_point: Point2
    end_point: Point2
    kind: str = ""


@dataclass(frozen=True)
class ContourPoint:
    x: float
    y: float
    elevation: float = 0.0
    slope_x: float = 0.0
    slope_y: float = 0.0


@dataclass(frozen=True)
class FairwayBend:
    start: float
    end: float
    direction: str  # "left" | "right"
    angle: float  # degrees of turn
    severity: str  # "slight" | "moderate" | "sharp"


@dataclass(frozen=True)
class LandingZone:
    start: float
    end: float
    width: float
    difficulty: str
    hazards: Tuple[str, ...] = ()


@dataclass(frozen=True)
class Hazard:
    kind: str
    position: Point3
    width: float
    length: float
    penalty: str
    depth: float = 0.0


@dataclass(frozen=True)
class TerrainFeature:
    kind: str
    position: Point3
    width: float
    length: float
    height: float = 0.0
    slope: float = 0.0
    direction: float = 0.0


@dataclass(frozen=True)
class PinPosition:
    id: str
    name: str
    position: Point3
    difficulty: str
    notes: Optional[str] = None


@dataclass(frozen=True)
class Hole:
    id: str
    number: int
    par: int
    distance: float
    elevation_profile: List[ElevationPoint] = field(default_factory=list)
    bends: List[FairwayBend] = field(default_factory=list)
    landing_zones: List[LandingZone] = field(default_factory=list)
    slopes: List[SlopeRegion] = field(default_factory=list)
    contours: List[ContourPoint] = field(default_factory=list)
    hazards: List[Hazard] = field(default_factory=list)
    terrain: List[TerrainFeature] = field(default_factory=list)
    pin_positions: List[PinPosition] = field(default_factory=list)
    green_speed: float = 10.0


def _point3(d: dict) -> Point3:
    return (float(d.get("x", 0.0)), float(d.get("y", 0.0)), float(d.get("z", 0.0)))


def _point2(d: dict) -> Point2:
    return (float(d["x"]), float(d["y"]))


def _one_of(value: str, allowed: Tuple[str, ...], what: str) -> str:
    if value not in allowed:
        raise ValueError(f"Unknown {what} {value!r}, expected one of {allowed}")
    return value


def hole_from_dict(data: dict) -> Hole:
    """Build a :class:`Hole` from the course service's JSON shape."""
    try:
        fairway = data.get("fairway", {})
        green = data.get("green", {})
        return Hole(
            id=str(data["id"]),
            number=int(data["number"]),
            par=int(data["par"]),
            distance=float(data["distance"]),
            elevation_profile=[
                ElevationPoint(float(p["distance"]), float(p["elevation"]), float(p.get("slope", 0.0)))
                for p in fairway.get("elevationProfile", [])
            ],
            bends=[
                FairwayBend(
                    float(b["start"]), float(b["end"]), b["direction"], float(b["angle"]), b["severity"]
                )
                for b in fairway.get("bends", [])
            ],
            landing_zones=[
                LandingZone(
                    float(z["start"]),
                    float(z["end"]),
                    float(z["width"]),
                    z["difficulty"],
                    tuple(z.get("hazards", ())),
                )
                for z in fairway.get("landingZones", [])
            ],
            slopes=[
                SlopeRegion(
                    float(s["direction"]),
                    float(s["magnitude"]),
                    _point2(s["startPoint"]),
                    _point2(s["endPoint"]),
                    s.get("type", ""),
                )
                for s in green.get("slopes", [])
            ],
            contours=[
                ContourPoint(
                    float(c["x"]),
                    float(c["y"]),
                    float(c.get("elevation", 0.0)),
                    float(c.get("slopeX") or 0.0),
                    float(c.get("slopeY") or 0.0),
                )
                for c in green.get("contours", [])
            ],
            hazards=[
                Hazard(
                    kind=_one_of(h["type"], HAZARD_TYPES, "hazard type"),
                    position=_point3(h["position"]),
                    width=float(h["dimensions"]["width"]),
                    length=float(h["dimensions"]["length"]),
                    penalty=_one_of(h["penalty"], PENALTY_KINDS, "penalty"),
                    depth=float(h["dimensions"].get("depth", 0.0)),
                )
                for h in data.get("hazards", [])
            ],
            terrain=[
                TerrainFeature(
                    kind=_one_of(t["type"], TERRAIN_TYPES, "terrain type"),
                    position=_point3(t["position"]),
                    width=float(t["dimensions"]["width"]),
                    length=float(t["dimensions"]["length"]),
                    height=float(t["dimensions"].get("height", 0.0)),
                    slope=float(t.get("slope", 0.0)),
                    direction=float(t.get("direction", 0.0)),
                )
                for t in data.get("terrain", [])
            ],
            pin_positions=[
                PinPosition(p["id"], p["name"], _point3(p["position"]), p["difficulty"], p.get("notes"))
                for p in data.get("pinPositions", [])
            ],
            green_speed=float(green.get("surface", {}).get("greenSpeed", 10.0)),
        )
    except (KeyError, TypeError) as e:
        raise ValueError(f"Malformed hole definition: {e!r}") from e
