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

from typing import Any, Dict, List, Optional, TYPE_CHECKING

from .base_scene_obj import BaseSceneObj
from ..geometry import Point
from ..ray import Ray, TimeRange

if TYPE_CHECKING:
    from ..scene import Scene


class BaseOptic(BaseSceneObj):
    """
    Base class for surfaces that rays can intersect.

    The set of optics is closed: FlatMirror, ParabolicMirror and the reserved
    Lens, the same types OBJECT_TYPES registers. Defining any other subclass
    raises TypeError. All of them answer the same two questions about a ray:

    - distance_to_intersection(ray): how far along the ray the first valid
      hit lies, or math.inf
    - split_and_reflect_segment(ray): the rays that replace it

    No-intersection contract: split_and_reflect_segment returns the input ray
    unchanged, as a one-element list, when the ray does not cross the optic.
    It returns an empty list when the ray is suppressed because it was
    spawned by, or last hit, this very optic.

    Attributes:
        id (int): Unique ID drawn from the scene's IdAllocator
    """

    is_optical = True

    # Closed set of optic variants
    variant_names = frozenset({'FlatMirror', 'ParabolicMirror', 'Lens'})

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        if cls.__name__ not in BaseOptic.variant_names:
            raise TypeError(
                f"{cls.__name__} cannot subclass BaseOptic; optics are limited to "
                f"{sorted(BaseOptic.variant_names)}"
            )

    def __init__(self, scene: 'Scene', json_obj: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(scene, json_obj)
        self._id: int = scene.next_object_id()

    @property
    def id(self) -> int:
        """The optic's identity. Assigned once, never changes."""
        return self._id

    def is_self_hit(self, ray: Ray) -> bool:
        """Whether the ray came from (or just hit) this optic."""
        return ray.hit_object_id == self._id or ray.spawned_by_object_id == self._id

    def distance_to_intersection(self, ray: Ray) -> float:
        raise NotImplementedError

    def split_and_reflect_segment(self, ray: Ray) -> List[Ray]:
        raise NotImplementedError

    def split_at(
        self,
        ray: Ray,
        fraction: float,
        hit_point: Point,
        reflected_direction: Optional[float]
    ) -> List[Ray]:
        """
        Split a ray at `fraction` of its length.

        The "before" ray keeps the origin and direction and ends at the hit.
        The "after" ray starts at the hit, travels along `reflected_direction`
        for the rest of the length and is tagged as spawned by this optic.
        Both share the parent's time range in proportion to their lengths.

        A descendant whose time range would be empty is left out. Passing
        `reflected_direction=None` absorbs the ray: only "before" is returned.

        Args:
            ray: The incident ray
            fraction: Position of the hit along the ray, in [0, 1]
            hit_point: World position of the hit
            reflected_direction: Angle of the reflected ray, or None

        Returns:
            List of 0, 1 or 2 rays
        """
        fraction = min(max(fraction, 0.0), 1.0)
        t1 = ray.time_range.start
        t2 = ray.time_range.end
        t_split = t1 + fraction * (t2 - t1)
        before_length = fraction * ray.length

        result: List[Ray] = []
        if t_split > t1:
            result.append(Ray(
                origin=ray.origin,
                direction=ray.direction,
                length=before_length,
                time_range=TimeRange(t1, t_split),
                spawned_by_object_id=ray.spawned_by_object_id,
                hit_object_id=self._id,
                color=ray.color,
            ))
        if reflected_direction is not None and t_split < t2:
            result.append(Ray(
                origin=hit_point,
                direction=reflected_direction,
                length=max(ray.length - before_length, 0.0),
                time_range=TimeRange(t_split, t2),
                spawned_by_object_id=self._id,
                hit_object_id=self._id,
                color=ray.color,
            ))
        return result

    def __repr__(self) -> str:
        label = f" '{self.name}'" if self.name else ""
        return f"{self.__class__.__name__}(id={self._id}{label})"
