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
from typing import List, Optional, Sequence, Tuple, TYPE_CHECKING

from .ray import Ray
from .constants import DEFAULT_MAX_BOUNCES

if TYPE_CHECKING:
    from .scene import Scene
    from .scene_objs.base_optic import BaseOptic


@dataclass
class PropagationResult:
    """
    Outcome of a propagation run.

    Attributes:
        rays: The final ray collection, in emission order
        passes: Number of passes executed (including a final no-change pass)
        truncated: True if the bounce cap stopped propagation while rays
            were still bouncing
    """
    rays: List[Ray]
    passes: int
    truncated: bool


def find_nearest_optic(
    ray: Ray,
    optics: Sequence['BaseOptic']
) -> Tuple[Optional['BaseOptic'], float]:
    """
    Find the optic the ray reaches first.

    Every optic is queried; the globally smallest finite distance wins, with
    ties going to the optic that comes first in `optics`.

    Returns:
        (optic, distance), or (None, math.inf) if no optic is hit
    """
    nearest = None
    nearest_distance = math.inf
    for optic in optics:
        distance = optic.distance_to_intersection(ray)
        if distance < nearest_distance:
            nearest = optic
            nearest_distance = distance
    return nearest, nearest_distance


def propagate(
    rays: Sequence[Ray],
    optics: Sequence['BaseOptic'],
    max_bounces: int = DEFAULT_MAX_BOUNCES,
    verbose: int = 0
) -> PropagationResult:
    """
    Bounce rays off optics until nothing changes or the bounce cap is hit.

    Each pass replaces every ray that reaches an optic with the result of
    that optic's split_and_reflect_segment(); rays that reach nothing are
    kept. A pass "bounced" if any ray was replaced by something other than
    itself. Reaching `max_bounces` stops propagation silently; the result is
    flagged as truncated.

    Args:
        rays: Initial rays (usually from emitters)
        optics: Optics to propagate through
        max_bounces: Maximum number of passes
        verbose: Verbosity level
            0 = silent
            1 = one line per pass
            2 = also every nearest-optic selection

    Returns:
        PropagationResult
    """
    current: List[Ray] = list(rays)
    passes = 0
    bounced = True

    while bounced and passes < max_bounces:
        bounced = False
        next_rays: List[Ray] = []

        for index, ray in enumerate(current):
            optic, distance = find_nearest_optic(ray, optics)
            if optic is None:
                next_rays.append(ray)
                continue

            if verbose >= 2:
                print(f"    ray {index}: nearest {optic!r} at distance {distance:.6f}")

            replacement = optic.split_and_reflect_segment(ray)
            if len(replacement) == 1 and replacement[0] is ray:
                next_rays.append(ray)
                continue

            bounced = True
            next_rays.extend(replacement)

        current = next_rays
        passes += 1

        if verbose >= 1:
            print(f"### PROPAGATION pass {passes}: {len(current)} rays, bounced={bounced}")

    truncated = bounced and passes >= max_bounces and max_bounces > 0
    if verbose >= 1 and truncated:
        print(f"### PROPAGATION stopped at bounce cap ({max_bounces})")

    return PropagationResult(rays=current, passes=passes, truncated=truncated)


class Simulator:
    """
    Runs a scene: emitters generate rays, which are propagated through the
    scene's optics.

    The simulator never patches a previous result. After changing any optic
    (for example rotating a parabolic mirror) call run() again and the whole
    trace is regenerated from the emitters.

    Attributes:
        scene (Scene): The scene to simulate
        max_bounces (int): Bounce cap (defaults to scene.max_bounces)
        verbose (int): Verbosity level, see propagate()
        ray_segments (list): Rays produced by the last run
        pass_count (int): Passes executed by the last run
        truncated (bool): Whether the last run hit the bounce cap
    """

    def __init__(self, scene: 'Scene', max_bounces: Optional[int] = None, verbose: int = 0) -> None:
        """
        Initialize the simulator.

        Args:
            scene (Scene): The scene to simulate
            max_bounces (int or None): Bounce cap; None uses scene.max_bounces
            verbose (int): Verbosity level (default: 0)
        """
        self.scene: 'Scene' = scene
        self.max_bounces: Optional[int] = max_bounces
        self.verbose: int = verbose
        self.ray_segments: List[Ray] = []
        self.pass_count: int = 0
        self.truncated: bool = False

    def generate_initial_rays(self) -> List[Ray]:
        """Collect the rays of every emitter, in scene order."""
        rays: List[Ray] = []
        for emitter in self.scene.emitters:
            rays.extend(emitter.on_simulation_start())
        return rays

    def run(self) -> List[Ray]:
        """
        Run the simulation.

        Returns:
            list: The propagated rays
        """
        self.scene.error = None
        self.scene.warning = None

        max_bounces = self.max_bounces if self.max_bounces is not None else self.scene.max_bounces
        initial = self.generate_initial_rays()

        if self.verbose >= 1:
            print(f"### SIMULATOR {self.scene.get_display_name()}: {len(initial)} initial rays, "
                  f"{len(self.scene.optics)} optics, max_bounces={max_bounces}")

        result = propagate(initial, self.scene.optics, max_bounces=max_bounces, verbose=self.verbose)

        self.ray_segments = result.rays
        self.pass_count = result.passes
        self.truncated = result.truncated
        if result.truncated:
            self.scene.warning = f"Propagation stopped: maximum bounce count ({max_bounces}) reached"

        return self.ray_segments
