"""
===============================================================================
PROPAGATION - Multi-Bounce Engine Verification
===============================================================================

Tests the propagation loop and the Simulator built on it:

1. Nearest-optic selection (closest wins, ties go to the first optic)
2. A single reflection converges after one extra no-change pass
3. Two parallel mirrors facing each other stop at the bounce cap
4. The Simulator reports truncation through scene.warning
5. Re-running after rotating a mirror regenerates the whole trace
6. Time windows of a trace stay ordered along every light path

USAGE
-----
    python -m ray_pulse.developer_tests.test_propagation

===============================================================================
"""

import sys
import os
import math

# Ensure the package is importable when running directly
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', '..'))

from ray_pulse.core.scene import Scene
from ray_pulse.core.geometry import geometry
from ray_pulse.core.ray import Ray, TimeRange
from ray_pulse.core.simulator import Simulator, propagate, find_nearest_optic
from ray_pulse.core.scene_objs import FlatMirror, ParabolicMirror, Lens, LinearEmitter


def _close(a, b, tol=1e-9):
    return abs(a - b) <= tol


def _vertical_mirror(scene, x, facing):
    return FlatMirror(scene, {
        'position': {'x': x, 'y': 0},
        'normal': {'dx': facing, 'dy': 0},
        'length': 100,
    })


def test_nearest_optic_selection():
    """The closest optic wins regardless of the order optics are listed in."""
    print("\n--- find_nearest_optic ---")
    scene = Scene()
    far = _vertical_mirror(scene, 200, -1)
    near = _vertical_mirror(scene, 100, -1)
    lens = Lens(scene)
    ray = Ray(geometry.point(0, 0), 0.0, 1000, TimeRange(0, 1))

    optic, distance = find_nearest_optic(ray, [lens, far, near])
    print(f"  nearest = {optic!r} at {distance}")
    assert optic is near
    assert _close(distance, 100)

    # Identical optics: the first one listed wins
    twin = _vertical_mirror(scene, 100, -1)
    optic, _ = find_nearest_optic(ray, [twin, near])
    assert optic is twin

    missed = Ray(geometry.point(0, 500), 0.0, 1000, TimeRange(0, 1))
    assert find_nearest_optic(missed, [far, near]) == (None, math.inf)


def test_single_reflection_converges():
    """One bounce, then a pass without change ends propagation."""
    print("\n--- single reflection ---")
    scene = Scene()
    mirror = _vertical_mirror(scene, 100, -1)
    ray = Ray(geometry.point(0, 0), 0.0, 300, TimeRange(0, 3))

    result = propagate([ray], [mirror], max_bounces=10, verbose=1)
    assert result.passes == 2
    assert result.truncated is False
    assert len(result.rays) == 2

    before, after = result.rays
    assert _close(before.length, 100) and _close(after.length, 200)
    assert _close(abs(after.direction), math.pi)
    assert before.time_range.end == after.time_range.start


def test_no_optics_means_no_change():
    """Without optics the input rays come back untouched after one pass."""
    print("\n--- no optics ---")
    rays = [Ray(geometry.point(0, 0), a, 10, TimeRange(0, 1)) for a in (0.0, 1.0, 2.0)]
    result = propagate(rays, [])
    assert result.passes == 1
    assert result.truncated is False
    assert all(a is b for a, b in zip(result.rays, rays))


def test_parallel_mirrors_hit_bounce_cap():
    """A ray trapped between two mirrors stops after exactly max_bounces passes."""
    print("\n--- parallel mirrors ---")
    scene = Scene()
    left = _vertical_mirror(scene, 0, 1)
    right = _vertical_mirror(scene, 100, -1)
    ray = Ray(geometry.point(50, 0), 0.0, 10000, TimeRange(0, 1))

    result = propagate([ray], [left, right], max_bounces=10, verbose=1)
    print(f"  passes={result.passes}, rays={len(result.rays)}, truncated={result.truncated}")
    assert result.passes == 10
    assert len(result.rays) == 11
    assert result.truncated is True

    # Deterministic: the same input gives the same trace
    again = propagate([ray], [left, right], max_bounces=10)
    assert again.rays == result.rays

    # The trace is a single light path: segment lengths add up to the original
    assert _close(sum(r.length for r in result.rays), 10000, 1e-6)


def test_zero_bounce_cap():
    """With max_bounces=0 nothing is propagated."""
    print("\n--- zero bounce cap ---")
    scene = Scene()
    mirror = _vertical_mirror(scene, 100, -1)
    ray = Ray(geometry.point(0, 0), 0.0, 300, TimeRange(0, 1))
    result = propagate([ray], [mirror], max_bounces=0)
    assert result.passes == 0
    assert result.rays == [ray]
    assert result.truncated is False


def test_simulator_reports_truncation():
    """Simulator.run() stores a warning on the scene when the cap is hit."""
    print("\n--- Simulator truncation warning ---")
    scene = Scene(max_bounces=4)
    scene.add_object(_vertical_mirror(scene, 0, 1))
    scene.add_object(_vertical_mirror(scene, 100, -1))
    scene.add_object(LinearEmitter(scene, {
        'start_point': {'x': 50, 'y': 0},
        'end_point': {'x': 50, 'y': 10},
        'direction': 0.0,
        'ray_count': 2,
        'ray_length': 5000.0,
    }))

    simulator = Simulator(scene, verbose=2)
    rays = simulator.run()
    print(f"  warning: {scene.warning}")
    assert simulator.truncated is True
    assert simulator.pass_count == 4
    assert len(rays) == 2 * 5
    assert scene.warning is not None and '4' in scene.warning

    # An explicit cap on the simulator overrides the scene's
    assert len(Simulator(scene, max_bounces=1).run()) == 2 * 2


def test_rerun_after_rotation():
    """Rotating the parabola and re-running reflects the new geometry."""
    print("\n--- re-run after rotation ---")
    scene = Scene()
    parabola = scene.add_object(ParabolicMirror(scene, {
        'vertex': {'x': 0, 'y': 0}, 'focal_length': 100, 'width': 200,
    }))
    scene.add_object(LinearEmitter(scene, {
        'start_point': {'x': 50, 'y': 300},
        'end_point': {'x': 60, 'y': 300},
        'direction': -math.pi / 2,
        'ray_count': 1,
        'ray_length': 400.0,
    }))
    simulator = Simulator(scene)

    first = simulator.run()
    assert len(first) == 2
    assert first[1].spawned_by_object_id == parabola.id

    # Upside down, the beam now strikes the back of the mirror
    parabola.rotate(math.pi)
    second = simulator.run()
    print(f"  after rotation: {second}")
    assert len(second) == 1
    assert second[0].hit_object_id == parabola.id
    assert _close(second[0].end_point.y, -6.25, 1e-9)

    # Rotating back restores the original trace
    parabola.orientation = 0.0
    assert simulator.run() == first


def test_time_windows_follow_light_paths():
    """Along each light path every segment starts when the previous one ends."""
    print("\n--- time windows along paths ---")
    scene = Scene()
    scene.add_object(ParabolicMirror(scene, {
        'vertex': {'x': 1000, 'y': 350}, 'focal_length': 700, 'width': 300,
        'orientation': math.pi / 2,
    }))
    scene.add_object(FlatMirror(scene, {
        'position': {'x': 450, 'y': 350}, 'normal': {'dx': 1, 'dy': 1}, 'length': 200,
    }))
    scene.add_object(LinearEmitter(scene, {
        'start_point': {'x': 100, 'y': 200},
        'end_point': {'x': 100, 'y': 500},
        'ray_count': 50,
        'ray_length': 3000.0,
        'time_range': {'start': 0.0, 'end': 3.0},
    }))
    rays = Simulator(scene).run()
    assert len(rays) > 50

    # Rays of one emitted ray are contiguous and ordered in the output
    paths = []
    for ray in rays:
        if ray.spawned_by_object_id is None:
            paths.append([ray])
        else:
            paths[-1].append(ray)
    assert len(paths) == 50

    for path in paths:
        assert path[0].time_range.start == 0.0
        assert path[-1].time_range.end == 3.0
        for prev, nxt in zip(path, path[1:]):
            assert prev.time_range.end == nxt.time_range.start
        assert _close(sum(r.length for r in path), 3000.0, 1e-6)


# =============================================================================

def main():
    print("=" * 70)
    print("Propagation - Multi-Bounce Engine Verification")
    print("=" * 70)

    tests = [
        ("nearest optic selection",    test_nearest_optic_selection),
        ("single reflection",          test_single_reflection_converges),
        ("no optics",                  test_no_optics_means_no_change),
        ("parallel mirrors",           test_parallel_mirrors_hit_bounce_cap),
        ("zero bounce cap",            test_zero_bounce_cap),
        ("simulator truncation",       test_simulator_reports_truncation),
        ("re-run after rotation",      test_rerun_after_rotation),
        ("time windows along paths",   test_time_windows_follow_light_paths),
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
