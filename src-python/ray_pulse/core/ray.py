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

import dataclasses
import math
from dataclasses import dataclass
from typing import Any, Dict, Optional, Sequence, Tuple, Union

from shapely.geometry import LineString

# Handle both relative imports (when used as a module) and absolute imports (when run as script)
if __name__ == "__main__":
    from geometry import geometry, Point
else:
    from .geometry import geometry, Point


@dataclass(frozen=True)
class TimeRange:
    """
    A half-open interval of animation time, [start, end].

    Raises:
        ValueError: If start >= end or either bound is not finite.
    """
    start: float
    end: float

    def __post_init__(self) -> None:
        if not (math.isfinite(self.start) and math.isfinite(self.end)):
            raise ValueError(f"TimeRange bounds must be finite, got [{self.start}, {self.end}]")
        if self.start >= self.end:
            raise ValueError(
                f"TimeRange start must be before end, got [{self.start}, {self.end}]"
            )

    @property
    def duration(self) -> float:
        return self.end - self.start

    def overlaps(self, other: 'TimeRange') -> bool:
        """Whether the two ranges share at least one instant (touching counts)."""
        return not (other.start > self.end or other.end < self.start)

    def to_dict(self) -> Dict[str, float]:
        return {'start': self.start, 'end': self.end}

    @classmethod
    def coerce(cls, value: Union['TimeRange', Dict[str, float], Sequence[float]]) -> 'TimeRange':
        """
        Build a TimeRange from a TimeRange, a {'start', 'end'} dict or a
        (start, end) pair.
        """
        if isinstance(value, TimeRange):
            return value
        if isinstance(value, dict):
            return cls(float(value['start']), float(value['end']))
        start, end = value
        return cls(float(start), float(end))


@dataclass(frozen=True)
class Ray:
    """
    A directed, finite, time-windowed line segment.

    A ray is really a moving point: it travels from `origin` to
    `origin + length * (cos(direction), sin(direction))` while time advances
    linearly from `time_range.start` to `time_range.end`. Rays are immutable;
    optics produce new rays instead of editing existing ones.

    Attributes:
        origin (Point): Start of the segment
        direction (float): Direction angle in radians
        length (float): Segment length (>= 0)
        time_range (TimeRange): Time window in which the ray is in transit
        spawned_by_object_id (int or None): ID of the optic that produced this ray
        hit_object_id (int or None): ID of the optic this ray last struck or
            reflected from
        color (str or None): Display color inherited from the emitter

    The two ID attributes are only used to stop a ray from immediately
    re-intersecting the optic it came from.
    """
    origin: Point
    direction: float
    length: float
    time_range: TimeRange
    spawned_by_object_id: Optional[int] = None
    hit_object_id: Optional[int] = None
    color: Optional[str] = None

    def __post_init__(self) -> None:
        if not isinstance(self.time_range, TimeRange):
            raise ValueError(f"time_range must be a TimeRange, got {self.time_range!r}")
        if self.length < 0 or math.isnan(self.length):
            raise ValueError(f"Ray length must be >= 0, got {self.length}")

    @property
    def direction_vector(self) -> Point:
        """Unit vector along the ray direction."""
        return geometry.direction_vector(self.direction)

    @property
    def end_point(self) -> Point:
        """The far end of the segment."""
        return self.point_at(1.0)

    def point_at(self, fraction: float) -> Point:
        """
        Point at a given fraction of the segment (0 = origin, 1 = end point).
        """
        d = self.direction_vector
        return geometry.point(
            self.origin.x + d.x * self.length * fraction,
            self.origin.y + d.y * self.length * fraction
        )

    def progress_at(self, t: float) -> float:
        """
        Map an absolute time into the ray's own [0, 1] progress.
        Values outside the time range extrapolate linearly.
        """
        return (t - self.time_range.start) / self.time_range.duration

    def get_render_segment(self, render_range: TimeRange) -> Optional[Tuple[Point, Point]]:
        """
        Returns the part of the segment in transit during `render_range`.

        The query window is clipped to the ray's own time range, both clipped
        bounds are rescaled to progress along the ray, and the two matching
        points on the segment are returned.

        Args:
            render_range: The time window being displayed

        Returns:
            (start, end) points, or None if the windows do not overlap
        """
        if not self.time_range.overlaps(render_range):
            return None
        seg_start_t = max(self.time_range.start, render_range.start)
        seg_end_t = min(self.time_range.end, render_range.end)
        start_f = self.progress_at(seg_start_t)
        end_f = self.progress_at(seg_end_t)
        return self.point_at(start_f), self.point_at(end_f)

    def to_linestring(self) -> LineString:
        """Convert the full segment to a Shapely LineString."""
        return geometry.line(self.origin, self.end_point).to_shapely()

    def replace(self, **changes: Any) -> 'Ray':
        """Return a copy with the given fields changed (validated again)."""
        return dataclasses.replace(self, **changes)

    def __repr__(self) -> str:
        ids = ""
        if self.spawned_by_object_id is not None:
            ids += f", spawned_by={self.spawned_by_object_id}"
        if self.hit_object_id is not None:
            ids += f", hit={self.hit_object_id}"
        return (f"Ray(origin=({self.origin.x:.4f}, {self.origin.y:.4f}), "
                f"direction={self.direction:.6f}, length={self.length:.4f}, "
                f"t=[{self.time_range.start:.4f}, {self.time_range.end:.4f}]{ids})")


# Example usage and testing
if __name__ == "__main__":
    ray = Ray(geometry.point(0, 0), 0.0, 100.0, TimeRange(0.0, 1.0))
    print(f"Ray: {ray}")
    print(f"End point: {ray.end_point}")
    print(f"Render segment for [0.2, 0.4]: {ray.get_render_segment(TimeRange(0.2, 0.4))}")
    print(f"Render segment for [2, 3]: {ray.get_render_segment(TimeRange(2, 3))}")
