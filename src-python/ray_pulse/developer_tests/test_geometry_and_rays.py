"""
===============================================================================
GEOMETRY AND RAYS - Feature Verification
===============================================================================

Tests the building blocks every optic relies on:
1. Segment/segment intersection, including the near-parallel rejection
2. Vector reflection with a non-unit and a zero-length normal
3. Local/world frame round trip
4. TimeRange and Ray validation
5. Ray.get_render_segment() clipping, touching windows and disjoint windows

USAGE
-----
    python -m ray_pulse.developer_tests.test_geometry_and_rays

===============================================================================
"""

import sys
import os
import math

import pytest

# Ensure the package is importable when running directly
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', '..'))

from ray_pulse.core.geometry import geometry, Normal
from ray_pulse.core.ray import Ray, TimeRange


def _close(a, b, tol=1e-9):
    return abs(a - b) <= tol


def test_segment_intersect_crossing():
    """Two diagonals of a square cross in the middle."""
    print("\n--- segment_intersect: crossing diagonals ---")
    a = geometry.line(geometry.point(0, 0), geometry.point(10, 10))
    b = geometry.line(geometry.point(0, 10), geometry.point(10, 0))
    hit = geometry.segment_intersect(a, b)
    print(f"  hit = {hit}")
    assert hit is not None
    assert _close(hit.point.x, 5) and _close(hit.point.y, 5)
    assert _close(hit.t, 0.5) and _close(hit.s, 0.5)


def test_segment_intersect_rejections():
    """Parallel segments and out-of-range parameters give None."""
    print("\n--- segment_intersect: rejections ---")
    a = geometry.line(geometry.point(0, 0), geometry.point(10, 0))
    parallel = geometry.line(geometry.point(0, 1), geometry.point(10, 1))
    assert geometry.segment_intersect(a, parallel) is None

    # Lines cross at x=20, beyond the end of `a`
    short = geometry.line(geometry.point(20, -5), geometry.point(20, 5))
    assert geometry.segment_intersect(a, short) is None

    # Endpoint touching counts (parameters exactly 0 and 1)
    touching = geometry.line(geometry.point(10, 0), geometry.point(10, 5))
    hit = geometry.segment_intersect(a, touching)
    assert hit is not None and _close(hit.t, 1.0) and _close(hit.s, 0.0)


def test_reflect():
    """Reflection about a non-unit normal, and about a zero normal."""
    print("\n--- reflect ---")
    r = geometry.reflect(geometry.point(1, -1), Normal(0, 5))
    print(f"  (1, -1) about (0, 5) -> {r}")
    assert _close(r.x, 1) and _close(r.y, 1)

    unchanged = geometry.reflect(geometry.point(0.3, 0.4), Normal(0, 0))
    assert unchanged == geometry.point(0.3, 0.4)

    # Reflecting twice gives back the incident vector
    incident = geometry.direction_vector(0.7)
    n = Normal(1, 2)
    twice = geometry.reflect(geometry.reflect(incident, n), n)
    assert _close(twice.x, incident.x) and _close(twice.y, incident.y)


def test_reflect_angle_sweep():
    """Across incident angles and non-unit normals, the normal component flips
    sign and the tangential component is kept."""
    print("\n--- reflect sweep ---")
    normals = [Normal(0, 5), Normal(3, 4), Normal(-2, 7), Normal(1, -1)]
    for angle in (0.1, 0.7, 1.9, 3.0, -2.4):
        incident = geometry.direction_vector(angle)
        for n in normals:
            unit = geometry.normalize_vec(n)
            r = geometry.reflect(incident, n)
            assert _close(geometry.dot(r, unit), -geometry.dot(incident, unit))
            assert _close(geometry.cross(r, unit), geometry.cross(incident, unit))
            assert _close(geometry.length(r), 1.0)


def test_frame_round_trip():
    """to_world(to_local(p)) == p for an arbitrary frame."""
    print("\n--- to_local / to_world ---")
    origin = geometry.point(3, -2)
    p = geometry.point(7.5, 4.25)
    local = geometry.to_local(p, origin, 1.1)
    back = geometry.to_world(local, origin, 1.1)
    assert _close(back.x, p.x) and _close(back.y, p.y)

    # A quarter turn maps the world +y axis onto local +x
    q = geometry.to_local(geometry.point(0, 1), geometry.point(0, 0), math.pi / 2)
    assert _close(q.x, 1) and _close(q.y, 0)


def test_time_range_validation():
    """start >= end and non-finite bounds raise ValueError."""
    print("\n--- TimeRange validation ---")
    with pytest.raises(ValueError):
        TimeRange(1.0, 1.0)
    with pytest.raises(ValueError):
        TimeRange(2.0, 1.0)
    with pytest.raises(ValueError):
        TimeRange(0.0, math.inf)
    assert TimeRange.coerce({'start': 0, 'end': 2}) == TimeRange(0.0, 2.0)
    assert TimeRange.coerce((1, 3)).duration == 2.0


def test_ray_validation():
    """Negative lengths are rejected; zero is allowed."""
    print("\n--- Ray validation ---")
    with pytest.raises(ValueError):
        Ray(geometry.point(0, 0), 0.0, -1.0, TimeRange(0, 1))
    ray = Ray(geometry.point(0, 0), 0.0, 0.0, TimeRange(0, 1))
    assert ray.end_point == ray.origin


def test_render_segment_clipping():
    """The render window is clipped to the ray's own time range."""
    print("\n--- get_render_segment ---")
    ray = Ray(geometry.point(0, 0), 0.0, 100.0, TimeRange(0.0, 1.0))

    start, end = ray.get_render_segment(TimeRange(0.2, 0.4))
    print(f"  [0.2, 0.4] -> {start} .. {end}")
    assert _close(start.x, 20) and _close(end.x, 40)
    assert _close(start.y, 0) and _close(end.y, 0)

    # Window sticking out before the ray starts is clipped to the origin
    start, end = ray.get_render_segment(TimeRange(-0.5, 0.1))
    assert _close(start.x, 0) and _close(end.x, 10)

    # Window covering the whole ray gives the whole segment
    start, end = ray.get_render_segment(TimeRange(-1, 2))
    assert _close(start.x, 0) and _close(end.x, 100)


def test_render_segment_touching_and_disjoint():
    """Touching windows give a single point; disjoint windows give None."""
    print("\n--- get_render_segment: touching / disjoint ---")
    ray = Ray(geometry.point(0, 0), math.pi / 2, 10.0, TimeRange(1.0, 2.0))

    start, end = ray.get_render_segment(TimeRange(2.0, 3.0))
    assert _close(start.y, 10) and _close(end.y, 10)

    assert ray.get_render_segment(TimeRange(2.5, 3.0)) is None
    assert ray.get_render_segment(TimeRange(-1.0, 0.5)) is None


def test_ray_shapely_and_replace():
    """to_linestring() matches the segment; replace() re-validates."""
    print("\n--- to_linestring / replace ---")
    ray = Ray(geometry.point(1, 1), 0.0, 4.0, TimeRange(0, 1))
    assert _close(ray.to_linestring().length, 4.0)
    assert list(ray.to_linestring().coords) == [(1.0, 1.0), (5.0, 1.0)]
    longer = ray.replace(length=8.0)
    assert longer.length == 8.0 and ray.length == 4.0
    with pytest.raises(ValueError):
        ray.replace(length=-2.0)


# =============================================================================

def main():
    print("=" * 70)
    print("Geometry and Rays - Feature Verification")
    print("=" * 70)

    tests = [
        ("segment_intersect crossing",       test_segment_intersect_crossing),
        ("segment_intersect rejections",     test_segment_intersect_rejections),
        ("reflect",                          test_reflect),
        ("reflect sweep",                    test_reflect_angle_sweep),
        ("frame round trip",                 test_frame_round_trip),
        ("TimeRange validation",             test_time_range_validation),
        ("Ray validation",                   test_ray_validation),
        ("render segment clipping",          test_render_segment_clipping),
        ("render segment touching/disjoint", test_render_segment_touching_and_disjoint),
        ("shapely / replace",                test_ray_shapely_and_replace),
    ]
    results = []
    for name, test in tests:
        try:
            test()
            results.append((name, True))
        except AssertionError as e:
            print(f"  AssertionError: {e}")
            results.append((name, False))

    # --- Summary ---
    print("\n" + "=" * 70)
    passed = sum(1 for _, ok in results if ok)
    total = len(results)
    print(f"Results: {passed}/{total} tests passed")
    for name, ok in results:
        status = "PASS" if ok else "FAIL"
        print(f"  [{status}] {name}")
    print("=" * 70)

    if passed != total:
        sys.exit(1)


if __name__ == '__main__':
    main()
