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

"""
Parabolic Focus Demo - Collimated Beam into a Parabolic Mirror

A collimated beam travels to the right, bounces off a parabolic mirror that
faces it, and converges on the mirror's focus. A tilted flat mirror sits in
the way of part of the beam.

Setup:
- Linear emitter from (100, 200) to (100, 500), 50 rays heading +x, each
  3000 units long and in transit during t = 0..3
- Parabolic mirror with vertex (1000, 350), focal length 700, width 300,
  opening toward -x (focus at (300, 350))
- Flat mirror at (450, 350) with normal (1, 1), length 200

Outputs (next to this script):
- frames/frame_XXX.svg: animation frames over one timeline loop
- rotated_XX.svg: full traces with the parabolic mirror turned in 5 degree steps
- rays.csv: the propagated rays of the unrotated scene
- scene.json: the serialized scene
"""

import sys
import os
import math

# Add parent directories to path to import ray_pulse modules
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', '..', '..'))

from ray_pulse.core.scene import Scene
from ray_pulse.core.scene_objs import LinearEmitter, ParabolicMirror, FlatMirror
from ray_pulse.core.simulator import Simulator
from ray_pulse.core.svg_renderer import SVGRenderer
from ray_pulse.core.timeline import Timeline
from ray_pulse.analysis import save_rays_csv, get_ray_statistics, rays_hitting_optic

T_MAX = 3.0
T_SPREAD = 0.05
VIEWBOX = (0, 0, 1200, 700)


def build_scene():
    scene = Scene(max_bounces=10, time_spread=T_SPREAD)
    scene.name = 'parabolic_focus_demo'

    scene.add_object(LinearEmitter(scene, {
        'name': 'Beam',
        'start_point': {'x': 100, 'y': 200},
        'end_point': {'x': 100, 'y': 500},
        'direction': 0.0,
        'ray_count': 50,
        'ray_length': 3000.0,
        'time_range': {'start': 0.0, 'end': T_MAX},
    }))
    scene.add_object(ParabolicMirror(scene, {
        'name': 'Parabola',
        'vertex': {'x': 1000, 'y': 350},
        'focal_length': 700.0,
        'width': 300.0,
        'orientation': math.pi / 2,
    }))
    scene.add_object(FlatMirror(scene, {
        'name': 'Flat',
        'position': {'x': 450, 'y': 350},
        'normal': {'dx': 1, 'dy': 1},
        'length': 200.0,
    }))
    return scene


def main():
    """Run the parabolic focus demonstration."""

    print("Parabolic Focus Demo")
    print("=" * 60)

    output_dir = os.path.dirname(os.path.abspath(__file__))
    scene = build_scene()
    parabola = scene.optics[0]

    print(f"\nScene setup:")
    for obj in scene.objs:
        print(f"  {obj!r}")
    print(f"  Parabola focus: {parabola.focus}")

    # Run simulation
    print("\nRunning simulation...")
    simulator = Simulator(scene, verbose=1)
    rays = simulator.run()

    stats = get_ray_statistics(rays)
    print(f"  Passes: {simulator.pass_count}, truncated: {simulator.truncated}")
    print(f"  Ray segments: {stats['total_rays']} "
          f"(emitted {stats['emitted_rays']}, reflected {stats['reflected_rays']})")
    print(f"  Rays arriving at the parabola: {len(rays_hitting_optic(rays, parabola))}")
    if scene.warning:
        print(f"  Warning: {scene.warning}")
    if scene.error:
        print(f"  Error: {scene.error}")

    # Animation frames over one loop of the timeline
    frames_dir = os.path.join(output_dir, 'frames')
    os.makedirs(frames_dir, exist_ok=True)
    timeline = Timeline(T_MAX, spread=T_SPREAD, step_seconds=0.1)
    frame_count = int(round((T_MAX + 2 * T_SPREAD) / timeline.step_seconds))
    for i in range(frame_count):
        timeline.step()
        renderer = SVGRenderer(width=1200, height=700, viewbox=VIEWBOX)
        renderer.render_frame(scene, rays, timeline.t, T_SPREAD, stroke_width=2)
        renderer.save(os.path.join(frames_dir, f'frame_{i:03d}.svg'))
    print(f"\n{frame_count} frames saved to: {frames_dir}")

    # Full traces while turning the parabolic mirror
    for step in range(-2, 3):
        parabola.orientation = math.pi / 2 + math.radians(5 * step)
        rotated = simulator.run()
        renderer = SVGRenderer(width=1200, height=700, viewbox=VIEWBOX)
        renderer.draw_scene(scene, rotated, ray_color='orange', stroke_width=0.5)
        svg_file = os.path.join(output_dir, f'rotated_{5 * step:+03d}.svg')
        renderer.save(svg_file)
        print(f"  {5 * step:+d} deg: {len(rotated)} segments -> {svg_file}")
    parabola.orientation = math.pi / 2
    rays = simulator.run()

    csv_file = save_rays_csv(rays, output_dir)
    print(f"\nCSV data exported to: {csv_file}")

    json_file = os.path.join(output_dir, 'scene.json')
    with open(json_file, 'w') as f:
        f.write(scene.to_json())
    print(f"Scene exported to: {json_file}")

    print("\nExpected result:")
    print("  - Rays missing the flat mirror converge near the focus (300, 350)")
    print("  - Rays striking the flat mirror are deflected upward or downward")


if __name__ == '__main__':
    main()
