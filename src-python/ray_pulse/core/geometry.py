"""
Copyright 2026 ray-pulse authors and contributors

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at

    http://www.apache.org/licenses/LICENSE-2.0

Unless required by applicable law or agreed to in writing, software
distributed under the License is distributed on an "AS IS" BASIS,
WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
See the License for the specific language governing permissions and
limitations under the License.
"""

import math
from dataclasses import dataclass
from typing import Dict, NamedTuple, Optional, Tuple, Union
from shapely.geometry import Point as ShapelyPoint, LineString

# Handle both relative imports (when used as a module) and absolute imports (when run as script)
if __name__ == "__main__":
    from constants import PARALLEL_EPSILON, ZERO_LENGTH_EPSILON
else:
    from .constants import PARALLEL_EPSILON, ZERO_LENGTH_EPSILON


@dataclass(frozen=True)
class Point:
    """
    A point in 2D space, also used as a free vector.
    Can be converted to/from Shapely Point objects.
    """
    x: float
    y: float

    def to_shapely(self) -> ShapelyPoint:
        """Convert to Shapely Point."""
        return ShapelyPoint(self.x, self.y)

    @classmethod
    def from_dict(cls, d: Dict[str, float]) -> 'Point':
        """Create Point from a {'x': ..., 'y': ...} dictionary."""
        return cls(float(d['x']), float(d['y']))

    def to_dict(self) -> Dict[str, float]:
        """Convert to dictionary representation."""
        return {'x': self.x, 'y': self.y}

    def __repr__(self) -> str:
        return f"Point(x={self.x}, y={self.y})"


@dataclass(frozen=True)
class Normal:
    """
    A direction vector. Not required to be unit length; every consumer
    normalizes it before use.
    """
    dx: float
    dy: float

    @classmethod
    def from_dict(cls, d: Dict[str, float]) -> 'Normal':
        """Create Normal from a {'dx': ..., 'dy': ...} dictionary."""
        return cls(float(d['dx']), float(d['dy']))

    def to_dict(self) -> Dict[str, float]:
        """Convert to dictionary representation."""
        return {'dx': self.dx, 'dy': self.dy}

    def to_vector(self) -> Point:
        """Return the normal as a Point-vector."""
        return Point(self.dx, self.dy)

    def tangent(self) -> Point:
        """Return the (unnormalized) tangent, the normal rotated by +90 degrees."""
        return Point(-self.dy, self.dx)


@dataclass(frozen=True)
class Line:
    """
    A line in 2D space, defined by two points.
    Used as a segment (p1 and p2 are the endpoints) or as an infinite line
    (p1 and p2 are two distinct points on it), depending on context.
    """
    p1: Point
    p2: Point

    def to_shapely(self) -> LineString:
        """Convert to Shapely LineString."""
        return LineString([(self.p1.x, self.p1.y), (self.p2.x, self.p2.y)])


class SegmentIntersection(NamedTuple):
    """
    Result of a segment/segment intersection.

    Attributes:
        point: The intersection point.
        t: Parameter along the first segment (0 at p1, 1 at p2).
        s: Parameter along the second segment (0 at p1, 1 at p2).
    """
    point: Point
    t: float
    s: float


Vector = Union[Point, Normal]


def _as_vec(v: Vector) -> Point:
    if isinstance(v, Normal):
        return v.to_vector()
    return v


class Geometry:
    """
    The geometry module, which provides basic geometric figures and operations.
    Vectors are represented as Point objects; Normal values are accepted
    wherever a direction is expected.
    """

    @staticmethod
    def point(x: float, y: float) -> Point:
        """Create a point."""
        return Point(x, y)

    @staticmethod
    def line(p1: Point, p2: Point) -> Line:
        """Create a line, which also represents a segment."""
        return Line(p1, p2)

    @staticmethod
    def dot(v1: Vector, v2: Vector) -> float:
        """
        Calculate the dot product, where the two points are treated as vectors.

        Args:
            v1: First vector
            v2: Second vector

        Returns:
            Dot product
        """
        a = _as_vec(v1)
        b = _as_vec(v2)
        return a.x * b.x + a.y * b.y

    @staticmethod
    def cross(v1: Vector, v2: Vector) -> float:
        """
        Calculate the cross product, where the two points are treated as vectors.

        Returns:
            Cross product (z-component in 2D)
        """
        a = _as_vec(v1)
        b = _as_vec(v2)
        return a.x * b.y - a.y * b.x

    @staticmethod
    def length(v: Vector) -> float:
        """Euclidean length of a vector."""
        a = _as_vec(v)
        return math.hypot(a.x, a.y)

    @staticmethod
    def distance(p1: Point, p2: Point) -> float:
        """Distance between two points."""
        return math.hypot(p2.x - p1.x, p2.y - p1.y)

    @staticmethod
    def subtract(p1: Point, p2: Point) -> Point:
        """Vector from p2 to p1."""
        return Point(p1.x - p2.x, p1.y - p2.y)

    @staticmethod
    def lerp(p1: Point, p2: Point, t: float) -> Point:
        """Linear interpolation between two points (t=0 gives p1, t=1 gives p2)."""
        return Point(p1.x + (p2.x - p1.x) * t, p1.y + (p2.y - p1.y) * t)

    @staticmethod
    def normalize_vec(v: Vector) -> Optional[Point]:
        """
        Normalize a vector to unit length.

        Returns:
            The unit vector, or None if the vector is (numerically) zero-length.
        """
        a = _as_vec(v)
        l = math.hypot(a.x, a.y)
        if l < ZERO_LENGTH_EPSILON:
            return None
        return Point(a.x / l, a.y / l)

    @staticmethod
    def rotate_vec(v: Vector, angle: float) -> Point:
        """
        Rotate a vector counter-clockwise by the given angle (radians).
        """
        a = _as_vec(v)
        c = math.cos(angle)
        s = math.sin(angle)
        return Point(a.x * c - a.y * s, a.x * s + a.y * c)

    @staticmethod
    def direction_vector(angle: float) -> Point:
        """Unit vector pointing along the given angle."""
        return Point(math.cos(angle), math.sin(angle))

    @staticmethod
    def angle_of(v: Vector) -> float:
        """Angle (radians) of a vector, as returned by atan2."""
        a = _as_vec(v)
        return math.atan2(a.y, a.x)

    @staticmethod
    def to_local(p: Point, origin: Point, angle: float) -> Point:
        """
        Transform a world point into a frame anchored at `origin` and rotated
        by `angle` (translate by -origin, then rotate by -angle).
        """
        return Geometry.rotate_vec(Point(p.x - origin.x, p.y - origin.y), -angle)

    @staticmethod
    def to_world(p: Point, origin: Point, angle: float) -> Point:
        """
        Inverse of to_local: rotate by +angle, then translate by +origin.
        """
        r = Geometry.rotate_vec(p, angle)
        return Point(r.x + origin.x, r.y + origin.y)

    @staticmethod
    def reflect(incident: Vector, normal: Vector) -> Point:
        """
        Reflect a vector about a surface normal: r = i - 2 (i . n) n.

        The normal is re-normalized here rather than trusted. A zero-length
        normal leaves the incident vector unchanged.

        Args:
            incident: The incident direction vector (any length)
            normal: The surface normal (any non-zero length)

        Returns:
            The reflected vector, with the same length as the incident one
        """
        i = _as_vec(incident)
        n = Geometry.normalize_vec(normal)
        if n is None:
            return i
        d = i.x * n.x + i.y * n.y
        return Point(i.x - 2 * d * n.x, i.y - 2 * d * n.y)

    @staticmethod
    def intersection_parameters(l1: Line, l2: Line) -> Optional[Tuple[float, float]]:
        """
        Solve p = l1.p1 + t (l1.p2 - l1.p1) = l2.p1 + s (l2.p2 - l2.p1).

        Returns:
            (t, s), or None when the 2x2 determinant is within PARALLEL_EPSILON
            of zero (parallel, coincident or degenerate lines)
        """
        r = Geometry.subtract(l1.p2, l1.p1)
        q = Geometry.subtract(l2.p2, l2.p1)
        det = Geometry.cross(r, q)
        if abs(det) < PARALLEL_EPSILON:
            return None
        w = Geometry.subtract(l2.p1, l1.p1)
        t = Geometry.cross(w, q) / det
        s = Geometry.cross(w, r) / det
        return t, s

    @staticmethod
    def segment_intersect(a: Line, b: Line) -> Optional[SegmentIntersection]:
        """
        Calculate the intersection of two finite segments.

        Args:
            a: First segment
            b: Second segment

        Returns:
            SegmentIntersection, or None if the segments are near-parallel or
            the solved parameters fall outside [0, 1] for either segment
        """
        params = Geometry.intersection_parameters(a, b)
        if params is None:
            return None
        t, s = params
        if t < 0 or t > 1 or s < 0 or s > 1:
            return None
        return SegmentIntersection(Geometry.lerp(a.p1, a.p2, t), t, s)


# Create a singleton instance for convenience
geometry = Geometry()


# Example usage and testing
if __name__ == "__main__":
    a = geometry.line(geometry.point(0, 0), geometry.point(10, 10))
    b = geometry.line(geometry.point(0, 10), geometry.point(10, 0))
    print(f"Intersection of {a} and {b}: {geometry.segment_intersect(a, b)}")

    r = geometry.reflect(geometry.point(1, -1), Normal(0, 2))
    print(f"Reflect (1, -1) about (0, 2): {r}")

    local = geometry.to_local(geometry.point(1, 1), geometry.point(1, 0), math.pi / 2)
    print(f"Local: {local}, back to world: {geometry.to_world(local, geometry.point(1, 0), math.pi / 2)}")
