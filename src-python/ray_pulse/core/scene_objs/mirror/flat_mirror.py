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
from typing import Dict, Any, List, NamedTuple, Optional, Tuple, TYPE_CHECKING

from shapely.geometry import LineString

# Handle both relative imports (when used as a module) and absolute imports (when run as script)
if __name__ == "__main__":
    from ray_pulse.core.scene_objs.base_optic import BaseOptic
    from ray_pulse.core.geometry import geometry, Point, Normal
    from ray_pulse.core.ray import Ray
else:
    from ..base_optic import BaseOptic
    from ...geometry import geometry, Point, Normal
    from ...ray import Ray

if TYPE_CHECKING:
    from ...scene import Scene


class _FlatHit(NamedTuple):
    t: float
    point: Point


class FlatMirror(BaseOptic):
    """
    Mirror with shape of a line segment.

    The mirror is centered at `position`, lies perpendicular to `normal` and
    extends `length / 2` on either side along the tangent (-normal.dy, normal.dx).
    Both faces reflect.

    Attributes:
        position (dict): Center of the mirror {'x', 'y'}
        normal (dict): Surface normal {'dx', 'dy'}, any non-zero length
        length (float): Full length of the mirror
    """

    type = 'FlatMirror'

    serializable_defaults = {
        'position': {'x': 0.0, 'y': 0.0},
        'normal': {'dx': 0.0, 'dy': 1.0},
        'length': 100.0,
    }

    def __init__(self, scene: 'Scene', json_obj: Optional[Dict[str, Any]] = None) -> None:
        """
        Initialize a flat mirror.

        Args:
            scene: The scene containing this mirror (supplies the optic ID)
            json_obj: Optional JSON serialization data
        """
        super().__init__(scene, json_obj)

    @property
    def center(self) -> Point:
        return Point.from_dict(self.position)

    @property
    def surface_normal(self) -> Normal:
        return Normal.from_dict(self.normal)

    def endpoints(self) -> Optional[Tuple[Point, Point]]:
        """
        The two ends of the mirror, or None for a zero-length normal.
        """
        tangent = geometry.normalize_vec(self.surface_normal.tangent())
        if tangent is None:
            return None
        c = self.center
        half = self.length / 2
        return (
            geometry.point(c.x - tangent.x * half, c.y - tangent.y * half),
            geometry.point(c.x + tangent.x * half, c.y + tangent.y * half),
        )

    def _find_hit(self, ray: Ray) -> Optional[_FlatHit]:
        """
        Intersect the ray segment with the mirror.

        The mirror line is parameterized by the unit tangent, so the second
        solved parameter is directly the signed distance from the center.
        """
        tangent = geometry.normalize_vec(self.surface_normal.tangent())
        if tangent is None:
            return None

        c = self.center
        segment = geometry.line(ray.origin, ray.end_point)
        mirror_line = geometry.line(c, geometry.point(c.x + tangent.x, c.y + tangent.y))

        params = geometry.intersection_parameters(segment, mirror_line)
        if params is None:
            # Parallel, or a zero-length ray
            return None

        t, proj = params
        if t < 0 or t > 1:
            return None
        if proj < -self.length / 2 or proj > self.length / 2:
            return None

        return _FlatHit(t, geometry.lerp(segment.p1, segment.p2, t))

    def distance_to_intersection(self, ray: Ray) -> float:
        """
        Distance from the ray origin to the mirror along the ray, or math.inf.
        """
        if self.is_self_hit(ray):
            return math.inf
        hit = self._find_hit(ray)
        if hit is None:
            return math.inf
        return hit.t * ray.length

    def split_and_reflect_segment(self, ray: Ray) -> List[Ray]:
        """
        Split the ray where it meets the mirror and reflect the remainder.

        Returns:
            [] if the ray came from this mirror, [ray] if it does not reach
            the mirror, otherwise the "before" and reflected "after" rays.
        """
        if self.is_self_hit(ray):
            return []

        hit = self._find_hit(ray)
        if hit is None:
            return [ray]

        reflected = geometry.reflect(ray.direction_vector, self.surface_normal)
        return self.split_at(ray, hit.t, hit.point, geometry.angle_of(reflected))

    def rotate(self, angle: float) -> bool:
        """Rotate the mirror about its center."""
        n = geometry.rotate_vec(self.surface_normal, angle)
        self.normal = {'dx': n.x, 'dy': n.y}
        return True

    def to_shapely(self) -> Optional[LineString]:
        ends = self.endpoints()
        if ends is None:
            return None
        return geometry.line(*ends).to_shapely()

    def draw(self, renderer: Any) -> None:
        ends = self.endpoints()
        if ends is None:
            return
        p1, p2 = ends
        renderer.draw_line_segment(p1.to_dict(), p2.to_dict(), color='darkblue',
                                   label=self.name, scene_obj=self)


# Example usage and testing
if __name__ == "__main__":
    from ray_pulse.core.scene import Scene
    from ray_pulse.core.ray import TimeRange

    print("Testing FlatMirror class...\n")

    scene = Scene()
    mirror = FlatMirror(scene, {
        'position': {'x': 0, 'y': 0},
        'normal': {'dx': 0, 'dy': 1},
        'length': 100,
    })
    ray = Ray(geometry.point(0, 50), -math.pi / 4, 200, TimeRange(0, 1))
    print(f"  Mirror: {mirror}, endpoints: {mirror.endpoints()}")
    print(f"  Distance: {mirror.distance_to_intersection(ray):.4f}")
    for r in mirror.split_and_reflect_segment(ray):
        print(f"  -> {r}")
