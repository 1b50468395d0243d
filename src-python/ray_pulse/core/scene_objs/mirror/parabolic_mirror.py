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
from typing import Dict, Any, List, NamedTuple, Optional, TYPE_CHECKING

import numpy as np
from shapely.geometry import LineString

# Handle both relative imports (when used as a module) and absolute imports (when run as script)
if __name__ == "__main__":
    from ray_pulse.core.scene_objs.base_optic import BaseOptic
    from ray_pulse.core.geometry import geometry, Point
    from ray_pulse.core.ray import Ray
    from ray_pulse.core.constants import (
        QUADRATIC_EPSILON, DISCRIMINANT_EPSILON, ROOT_EPSILON, CURVE_SAMPLE_COUNT
    )
else:
    from ..base_optic import BaseOptic
    from ...geometry import geometry, Point
    from ...ray import Ray
    from ...constants import (
        QUADRATIC_EPSILON, DISCRIMINANT_EPSILON, ROOT_EPSILON, CURVE_SAMPLE_COUNT
    )

if TYPE_CHECKING:
    from ...scene import Scene


class _ParabolaHit(NamedTuple):
    distance: float      # distance along the ray
    local_point: Point   # hit position in the mirror frame
    local_dir: Point     # unit ray direction in the mirror frame


class ParabolicMirror(BaseOptic):
    """
    Parabolic mirror.

    In its local frame the mirror is the curve y = a x^2 with a = 1 / (4 f),
    for x in [-width/2, width/2], so the focus sits at (0, f). The local frame
    is anchored at `vertex` and rotated by `orientation` (radians,
    counter-clockwise) relative to the world.

    Only the side facing the focus reflects. A ray striking the back of the
    mirror is absorbed at the hit point.

    Attributes:
        vertex (dict): Vertex of the parabola {'x', 'y'}
        focal_length (float): Distance from vertex to focus
        width (float): Extent of the mirror along the local x axis
        orientation (float): Rotation of the local frame (radians)
    """

    type = 'ParabolicMirror'

    serializable_defaults = {
        'vertex': {'x': 0.0, 'y': 0.0},
        'focal_length': 100.0,
        'width': 200.0,
        'orientation': 0.0,
    }

    def __init__(self, scene: 'Scene', json_obj: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(scene, json_obj)

    @property
    def vertex_point(self) -> Point:
        return Point.from_dict(self.vertex)

    @property
    def curvature(self) -> float:
        """The coefficient a in y = a x^2."""
        return 1 / (4 * self.focal_length)

    @property
    def focus(self) -> Point:
        """World position of the focal point."""
        return geometry.to_world(geometry.point(0, self.focal_length), self.vertex_point,
                                 self.orientation)

    def _candidate_roots(self, A: float, B: float, C: float) -> List[float]:
        """Real roots of A t^2 + B t + C = 0, in ascending order."""
        if abs(A) < QUADRATIC_EPSILON:
            # Ray (nearly) parallel to the axis: the equation is linear
            if abs(B) < QUADRATIC_EPSILON:
                return []
            return [-C / B]

        disc = B * B - 4 * A * C
        if disc < 0:
            if disc < -DISCRIMINANT_EPSILON:
                return []
            disc = 0.0
        sq = math.sqrt(disc)
        return sorted([(-B - sq) / (2 * A), (-B + sq) / (2 * A)])

    def _find_hit(self, ray: Ray) -> Optional[_ParabolaHit]:
        """
        Intersect the ray with the mirror in the local frame.

        Substituting the local ray o + t d into y = a x^2 gives
            a dx^2 t^2 + (2 a ox dx - dy) t + (a ox^2 - oy) = 0
        where t is the distance along the ray. The smallest root inside
        [0, length] whose x lies on the mirror is used.
        """
        if self.focal_length == 0 or ray.length <= 0:
            return None

        a = self.curvature
        o = geometry.to_local(ray.origin, self.vertex_point, self.orientation)
        d = geometry.rotate_vec(ray.direction_vector, -self.orientation)

        A = a * d.x * d.x
        B = 2 * a * o.x * d.x - d.y
        C = a * o.x * o.x - o.y

        half_width = self.width / 2
        for t in self._candidate_roots(A, B, C):
            if t < -ROOT_EPSILON or t > ray.length + ROOT_EPSILON:
                continue
            t = min(max(t, 0.0), ray.length)
            x = o.x + d.x * t
            if x < -half_width or x > half_width:
                continue
            return _ParabolaHit(t, geometry.point(x, a * x * x), d)
        return None

    def surface_normal_at(self, local_x: float) -> Point:
        """
        Unit normal at local x, oriented toward the focus.
        """
        a = self.curvature
        n = geometry.normalize_vec(geometry.point(-2 * a * local_x, 1.0))
        to_focus = geometry.point(-local_x, self.focal_length - a * local_x * local_x)
        if geometry.dot(n, to_focus) < 0:
            n = geometry.point(-n.x, -n.y)
        return n

    def distance_to_intersection(self, ray: Ray) -> float:
        """
        Distance from the ray origin to the mirror along the ray, or math.inf.
        """
        if self.is_self_hit(ray):
            return math.inf
        hit = self._find_hit(ray)
        if hit is None:
            return math.inf
        return hit.distance

    def split_and_reflect_segment(self, ray: Ray) -> List[Ray]:
        """
        Split the ray where it meets the mirror and reflect the remainder.

        Returns:
            [] if the ray came from this mirror, [ray] if it does not reach
            the mirror, only the "before" ray if it hits the back face,
            otherwise the "before" and reflected "after" rays.
        """
        if self.is_self_hit(ray):
            return []

        hit = self._find_hit(ray)
        if hit is None:
            return [ray]

        fraction = hit.distance / ray.length
        hit_point = ray.point_at(fraction)

        normal = self.surface_normal_at(hit.local_point.x)
        if geometry.dot(hit.local_dir, normal) >= 0:
            # Back face: absorbed
            return self.split_at(ray, fraction, hit_point, None)

        reflected = geometry.reflect(hit.local_dir, normal)
        return self.split_at(ray, fraction, hit_point,
                             geometry.angle_of(reflected) + self.orientation)

    def rotate(self, angle: float) -> bool:
        """Rotate the mirror about its vertex."""
        self.orientation = self.orientation + angle
        return True

    def sample_points(self, n: int = CURVE_SAMPLE_COUNT) -> np.ndarray:
        """
        World coordinates of n + 1 points along the mirror, shape (n + 1, 2).
        """
        xs = np.linspace(-self.width / 2, self.width / 2, n + 1)
        ys = self.curvature * xs * xs
        c = math.cos(self.orientation)
        s = math.sin(self.orientation)
        v = self.vertex_point
        return np.column_stack((v.x + xs * c - ys * s, v.y + xs * s + ys * c))

    def to_shapely(self, n: int = CURVE_SAMPLE_COUNT) -> Optional[LineString]:
        if self.focal_length == 0:
            return None
        return LineString(self.sample_points(n))

    def draw(self, renderer: Any) -> None:
        if self.focal_length == 0:
            return
        points = [{'x': float(x), 'y': float(y)} for x, y in self.sample_points()]
        renderer.draw_polyline(points, color='darkred', label=self.name, scene_obj=self)


# Example usage and testing
if __name__ == "__main__":
    from ray_pulse.core.scene import Scene
    from ray_pulse.core.ray import TimeRange

    print("Testing ParabolicMirror class...\n")

    scene = Scene()
    mirror = ParabolicMirror(scene, {
        'vertex': {'x': 0, 'y': 0},
        'focal_length': 100,
        'width': 200,
    })
    print(f"  Focus: {mirror.focus}")
    for x0 in (-80, -40, 0.5, 40, 80):
        ray = Ray(geometry.point(x0, 300), -math.pi / 2, 400, TimeRange(0, 1))
        parts = mirror.split_and_reflect_segment(ray)
        after = parts[-1]
        print(f"  x0={x0:6.1f}: hit {after.origin}, reflected {math.degrees(after.direction):8.3f} deg")
