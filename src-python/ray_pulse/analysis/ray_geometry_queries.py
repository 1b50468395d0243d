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

===============================================================================
Ray-Geometry Query Tools
===============================================================================
Functions for querying propagated rays in relation to scene geometry. They
use Shapely intersects / distance / contains tests on the flat List[Ray]
returned by Simulator.run().
===============================================================================
"""

from __future__ import annotations

from typing import List, Sequence, Tuple, Union, TYPE_CHECKING

from shapely.geometry import LineString, Polygon

if TYPE_CHECKING:
    from ..core.ray import Ray, TimeRange
    from ..core.scene import Scene
    from ..core.scene_objs.base_scene_obj import BaseSceneObj
    from ..core.scene_objs.base_optic import BaseOptic


# =============================================================================
# Scene object lookup utilities
# =============================================================================

def get_object_by_name(scene: 'Scene', name: str) -> 'BaseSceneObj':
    """
    Find a scene object by its user-defined name.

    Args:
        scene: The Scene to search.
        name: The exact name to match (case-sensitive).

    Returns:
        The matching BaseSceneObj.

    Raises:
        ValueError: If no object has that name or if multiple objects
            share the same name.
    """
    matches = [obj for obj in scene.objs if getattr(obj, 'name', None) == name]
    if len(matches) == 0:
        available = [obj.name for obj in scene.objs if getattr(obj, 'name', None) is not None]
        raise ValueError(
            f"No object named '{name}'. "
            f"Named objects: {available if available else '(none)'}"
        )
    if len(matches) > 1:
        raise ValueError(f"Ambiguous: {len(matches)} objects are named '{name}'.")
    return matches[0]


def get_objects_by_type(scene: 'Scene', type_name: str) -> List['BaseSceneObj']:
    """
    Find all scene objects of a given type (e.g. 'FlatMirror').
    """
    return [obj for obj in scene.objs if obj.__class__.type == type_name]


# =============================================================================
# Ray-geometry query functions
# =============================================================================

def rays_hitting_optic(
    segments: Sequence['Ray'],
    optic: 'BaseOptic',
    tolerance: float = 1e-6
) -> List['Ray']:
    """
    Return rays that arrive at the given optic.

    A ray arrives at an optic when its end point lies on the optic's Shapely
    geometry (within `tolerance`). Rays leaving the optic, i.e. spawned by
    it, are excluded even though their origin touches it.

    Args:
        segments: List of Ray objects to search.
        optic: A FlatMirror or ParabolicMirror.
        tolerance: Maximum distance between end point and optic.

    Returns:
        List of Ray objects ending on the optic, in input order.
    """
    optic_geom = optic.to_shapely()
    if optic_geom is None:
        return []

    result = []
    for ray in segments:
        if ray.spawned_by_object_id == optic.id:
            continue
        if ray.end_point.to_shapely().distance(optic_geom) <= tolerance:
            result.append(ray)
    return result


def rays_crossing_region(
    segments: Sequence['Ray'],
    region: Union[Polygon, Sequence[Tuple[float, float]]]
) -> List['Ray']:
    """
    Return rays whose segment intersects a region.

    Args:
        segments: List of Ray objects to search.
        region: A Shapely Polygon or a sequence of (x, y) vertices.

    Returns:
        List of Ray objects that touch, cross or lie inside the region.
    """
    poly = region if isinstance(region, Polygon) else Polygon(region)
    return [ray for ray in segments if ray.to_linestring().intersects(poly)]


def visible_segments(
    segments: Sequence['Ray'],
    window: 'TimeRange'
) -> List[Tuple['Ray', LineString]]:
    """
    The part of every ray that is in transit during `window`, as Shapely
    LineStrings. Rays outside the window are left out.

    Args:
        segments: List of Ray objects.
        window: The displayed time window.

    Returns:
        List of (ray, LineString) pairs, in input order.
    """
    result = []
    for ray in segments:
        segment = ray.get_render_segment(window)
        if segment is None:
            continue
        start, end = segment
        result.append((ray, LineString([(start.x, start.y), (end.x, end.y)])))
    return result
