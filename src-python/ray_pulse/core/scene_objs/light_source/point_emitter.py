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
from typing import Dict, Any, List, Optional, TYPE_CHECKING

import numpy as np

# Handle both relative imports (when used as a module) and absolute imports (when run as script)
if __name__ == "__main__":
    from ray_pulse.core.scene_objs.light_source.base_emitter import BaseEmitter
    from ray_pulse.core.geometry import Point
    from ray_pulse.core.ray import Ray
else:
    from .base_emitter import BaseEmitter
    from ...geometry import Point
    from ...ray import Ray

if TYPE_CHECKING:
    from ...scene import Scene


class PointEmitter(BaseEmitter):
    """
    Point emitter that generates rays radiating from a single point.

    Angles are spaced linearly over [start_angle, end_angle], both ends
    included. With the default full circle the first and last rays therefore
    coincide. A single ray is emitted at start_angle.

    Attributes:
        position (dict): Emitter position {'x', 'y'}
        ray_count (int): Number of rays
        ray_length (float): Length of every ray
        time_range (dict): Time window {'start', 'end'} of every ray
        color (str): Color of the emitter and of every ray it emits
        start_angle (float): First ray angle (radians)
        end_angle (float): Last ray angle (radians)
    """

    type = 'PointEmitter'

    serializable_defaults = {
        'position': {'x': 0.0, 'y': 0.0},
        'ray_count': 36,
        'ray_length': 1000.0,
        'time_range': {'start': 0.0, 'end': 1.0},
        'color': 'red',
        'start_angle': 0.0,
        'end_angle': 2 * math.pi,
    }

    def __init__(self, scene: 'Scene', json_obj: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(scene, json_obj)

    def generate_rays(self) -> List[Ray]:
        count = int(self.ray_count)
        if count <= 0:
            return []
        origin = Point.from_dict(self.position)
        time_range = self.get_time_range()
        angles = np.linspace(self.start_angle, self.end_angle, count)
        return [Ray(origin, float(angle), float(self.ray_length), time_range, color=self.color)
                for angle in angles]

    def draw(self, renderer: Any) -> None:
        renderer.draw_point(self.position, color=self.color, radius=8, label=self.name,
                            scene_obj=self)


# Example usage and testing
if __name__ == "__main__":
    from ray_pulse.core.scene import Scene

    emitter = PointEmitter(Scene(), {'ray_count': 5, 'start_angle': 0, 'end_angle': math.pi})
    for ray in emitter.generate_rays():
        print(f"  {ray}")
